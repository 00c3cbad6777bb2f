"""Centralized error handling for launch configuration resolution.

This module provides a hierarchy of exceptions for the failures that can
occur while resolving a launch configuration, along with utilities for
error reporting.

Errors fall into three families:

- ``UserAbort``: the user cancelled, nothing is shown.
- ``UserFacingLaunchError``: shown to the user as a modal message, then the
  launch is cancelled.
- ``VersionStringError``: malformed ``runtimeVersion``, propagated to the
  caller untouched.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class LaunchError(Exception):
    """Base exception for all launch resolution errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause!s})"
        return self.message


class ConfigurationError(LaunchError):
    """Raised when a configuration attribute has an unusable value."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, error_code="ConfigurationError", details=details, **kwargs)
        self.config_key = config_key


class VersionStringError(LaunchError):
    """Raised when a ``runtimeVersion`` value does not match the version grammar."""

    def __init__(self, version_string: str, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["version_string"] = version_string
        super().__init__(
            f"Invalid version string: {version_string}",
            error_code="VersionStringError",
            details=details,
            **kwargs,
        )
        self.version_string = version_string


class UserAbort(LaunchError):
    """Raised when the user cancelled an interactive step."""

    def __init__(self, message: str = "Launch cancelled by user", **kwargs: Any) -> None:
        super().__init__(message, error_code="UserAbort", **kwargs)


class UserFacingLaunchError(LaunchError):
    """Base class for errors shown to the user before the launch is aborted."""

    modal: bool = True


class ProgramNotFoundError(UserFacingLaunchError):
    """Raised when no program could be inferred for an empty configuration."""

    def __init__(self, message: str = "Cannot find a program to debug", **kwargs: Any) -> None:
        super().__init__(message, error_code="ProgramNotFoundError", **kwargs)


class VersionManagerNotFoundError(UserFacingLaunchError):
    """Raised when ``runtimeVersion`` is set but no usable version manager exists."""

    def __init__(self, message: str, *, manager: str, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["manager"] = manager
        super().__init__(
            message, error_code="VersionManagerNotFoundError", details=details, **kwargs
        )
        self.manager = manager


class RuntimeVersionNotInstalledError(UserFacingLaunchError):
    """Raised when the version manager does not have the requested version."""

    def __init__(self, version: str, manager: str, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details.update({"version": version, "manager": manager})
        super().__init__(
            f"Node.js version '{version}' not installed for '{manager}'.",
            error_code="RuntimeVersionNotInstalledError",
            details=details,
            **kwargs,
        )
        self.version = version
        self.manager = manager


class InvalidProcessIdError(UserFacingLaunchError):
    """Raised when an attach request names something that is not a process id."""

    def __init__(self, process_id: str | None, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["process_id"] = process_id
        super().__init__(
            f"Attach to process: '{process_id}' doesn't look like a process id.",
            error_code="InvalidProcessIdError",
            details=details,
            **kwargs,
        )
        self.process_id = process_id


class DebugModeActivationError(UserFacingLaunchError):
    """Raised when a running process could not be switched into debug mode."""

    def __init__(self, pid: int, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["pid"] = pid
        cause = kwargs.get("cause")
        super().__init__(
            f"Attach to process: cannot enable debug mode for process '{pid}' ({cause}).",
            error_code="DebugModeActivationError",
            details=details,
            **kwargs,
        )
        self.pid = pid

    def __str__(self) -> str:
        # the cause is already part of the message
        return self.message


class ProtocolDetectionError(LaunchError):
    """Raised by protocol probes when the inspection tooling itself fails."""

    def __init__(self, message: str, *, pid: int | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        if pid is not None:
            details["pid"] = pid
        super().__init__(message, error_code="ProtocolDetectionError", details=details, **kwargs)
        self.pid = pid


class ErrorHandler:
    """Logs resolution failures and turns them into reports for the caller."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def handle_error(
        self,
        error: Exception,
        *,
        log_level: int = logging.ERROR,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Log ``error`` and return its report.

        ``LaunchError``s report their own code and details; anything else is
        reported under its class name. ``context`` is attached as given.
        """
        if isinstance(error, LaunchError):
            report = error.to_dict()
        else:
            report = {
                "error": error.__class__.__name__,
                "message": str(error),
                "details": {},
            }
        if context:
            report["context"] = context

        self.logger.log(
            log_level,
            "Cannot resolve configuration [%s]: %s",
            report["error"],
            error,
            exc_info=error if self.logger.isEnabledFor(logging.DEBUG) else None,
        )
        return report


default_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    *,
    log_level: int = logging.ERROR,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Handle an error using the default error handler."""
    return default_error_handler.handle_error(error, log_level=log_level, context=context)
