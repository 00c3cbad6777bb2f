"""Resolver settings and their process-wide management.

Settings cover the knobs of the engine itself (probe timing, log directory),
as opposed to ``LaunchConfiguration`` which describes one debug session.
Access is thread-safe and temporary overrides are available through
``settings_context``.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace
import logging
import threading
from typing import TYPE_CHECKING
from typing import Any

from node_launch.errors import ConfigurationError

if TYPE_CHECKING:
    import types

logger = logging.getLogger(__name__)


@dataclass
class ResolverSettings:
    """Tunables for launch configuration resolution."""

    # Live protocol probe polling
    probe_timeout: float = 5.0
    probe_interval: float = 0.25

    # Auto-detection
    runtime_query_timeout: float = 10.0
    connect_timeout: float = 2.0

    log_directory: str | None = None

    def validate(self) -> None:
        """Validate settings and raise errors for unusable values."""
        if self.probe_timeout < 0:
            raise ConfigurationError(
                "Probe timeout must not be negative",
                config_key="probe_timeout",
                details={"probe_timeout": self.probe_timeout},
            )
        if self.probe_interval <= 0:
            raise ConfigurationError(
                "Probe interval must be positive",
                config_key="probe_interval",
                details={"probe_interval": self.probe_interval},
            )
        if self.runtime_query_timeout <= 0:
            raise ConfigurationError(
                "Runtime query timeout must be positive",
                config_key="runtime_query_timeout",
            )
        if self.connect_timeout <= 0:
            raise ConfigurationError(
                "Connect timeout must be positive",
                config_key="connect_timeout",
            )


DEFAULT_SETTINGS = ResolverSettings()

_ALLOWED_KEYS = frozenset(
    {
        "probe_timeout",
        "probe_interval",
        "runtime_query_timeout",
        "connect_timeout",
        "log_directory",
    }
)


class SettingsManager:
    """Thread-safe manager for process-wide resolver settings."""

    def __init__(self, default_settings: ResolverSettings) -> None:
        self._lock = threading.RLock()
        self._default_settings = default_settings
        self._current_settings = default_settings

    def get_settings(self) -> ResolverSettings:
        with self._lock:
            return self._current_settings

    def set_settings(self, settings: ResolverSettings) -> None:
        with self._lock:
            settings.validate()
            self._current_settings = settings

    def update_settings(self, **kwargs: Any) -> ResolverSettings:
        """Replace selected values; unknown keys are logged and ignored."""
        with self._lock:
            unknown_keys = sorted(set(kwargs) - _ALLOWED_KEYS)
            if unknown_keys:
                logger.warning("Ignoring unknown setting(s): %s", ", ".join(unknown_keys))

            changes = {k: v for k, v in kwargs.items() if k in _ALLOWED_KEYS}
            new_settings = replace(self._current_settings, **changes)
            new_settings.validate()
            self._current_settings = new_settings
            return new_settings

    def reset_settings(self) -> None:
        with self._lock:
            self._current_settings = self._default_settings

    def restore_settings(self, settings: ResolverSettings) -> None:
        with self._lock:
            self._current_settings = settings


_settings_manager = SettingsManager(DEFAULT_SETTINGS)


def get_settings() -> ResolverSettings:
    """Get the current settings in a thread-safe manner."""
    return _settings_manager.get_settings()


def set_settings(settings: ResolverSettings) -> None:
    """Set the current settings in a thread-safe manner.

    Args:
        settings: The new settings; validated before they take effect
    """
    _settings_manager.set_settings(settings)


def update_settings(**kwargs: Any) -> ResolverSettings:
    """Update the current settings with new values."""
    return _settings_manager.update_settings(**kwargs)


def reset_settings() -> None:
    """Reset settings to defaults."""
    _settings_manager.reset_settings()


class SettingsContext:
    """Context manager for temporary settings changes.

    The previous settings are restored when the context exits.
    """

    def __init__(self, **kwargs: Any) -> None:
        self._manager = _settings_manager
        self._changes = kwargs
        self._original: ResolverSettings | None = None

    def __enter__(self) -> ResolverSettings:
        self._original = self._manager.get_settings()
        return self._manager.update_settings(**self._changes)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        if self._original is not None:
            self._manager.restore_settings(self._original)


def settings_context(**kwargs: Any) -> SettingsContext:
    """Create a context manager for temporary settings changes."""
    return SettingsContext(**kwargs)
