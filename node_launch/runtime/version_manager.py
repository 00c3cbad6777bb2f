"""Locating Node.js installations managed by ``nvs``, ``nvm`` or ``nvm-windows``.

When a launch configuration asks for a specific ``runtimeVersion`` the
matching installation's binary directory is put in front of ``PATH`` in the
configuration's environment, so the debug adapter picks up that ``node``.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import ntpath
import posixpath
from typing import TYPE_CHECKING

from node_launch.errors import RuntimeVersionNotInstalledError
from node_launch.errors import VersionManagerNotFoundError
from node_launch.runtime.version import parse_version_string

if TYPE_CHECKING:
    from node_launch.config import LaunchConfiguration
    from node_launch.runtime.host import HostEnvironment

logger = logging.getLogger(__name__)

NVS = "nvs"
NVM = "nvm"
NVM_WINDOWS = "nvm-windows"


@dataclass(frozen=True)
class RuntimeLocation:
    """Candidate binary directory and the version manager that owns it."""

    bin_dir: str
    manager: str


def _paths(host: HostEnvironment):
    return ntpath if host.is_windows else posixpath


def find_nvs_home(host: HostEnvironment) -> str | None:
    """Return ``NVS_HOME`` or the conventional ``nvs`` directory if it exists."""
    nvs_home = host.getenv("NVS_HOME")
    if nvs_home:
        return nvs_home

    # NVS_HOME is not always set
    paths = _paths(host)
    if host.is_windows:
        base = host.getenv("LOCALAPPDATA")
        candidate = paths.join(base, "nvs") if base else None
    else:
        base = host.getenv("HOME")
        candidate = paths.join(base, ".nvs") if base else None

    if candidate and host.exists(candidate):
        return candidate
    return None


def find_nvm_home(host: HostEnvironment) -> str | None:
    """Return the ``nvm`` home: ``NVM_HOME`` on Windows, ``NVM_DIR`` or ``~/.nvm`` elsewhere."""
    if host.is_windows:
        return host.getenv("NVM_HOME") or None

    nvm_home = host.getenv("NVM_DIR")
    if nvm_home:
        return nvm_home

    home = host.getenv("HOME")
    if home:
        candidate = posixpath.join(home, ".nvm")
        if host.exists(candidate):
            return candidate
    return None


def locate_runtime_bin(runtime_version: str, host: HostEnvironment) -> RuntimeLocation:
    """Compute the binary directory for ``runtime_version``.

    ``nvs`` is preferred whenever it is installed; an ``nvs`` shaped version
    (remote or architecture present) requires it. Otherwise ``nvm-windows``
    on Windows and ``nvm`` everywhere else.

    The returned directory is not checked for existence.

    Raises:
        VersionStringError: for a malformed version.
        VersionManagerNotFoundError: if the required manager is not installed.
    """
    paths = _paths(host)
    nvs_home = find_nvs_home(host)
    spec = parse_version_string(
        runtime_version, host_arch=host.arch, arm_version=host.arm_version
    )

    if spec.nvs_format or nvs_home:
        if not nvs_home:
            raise VersionManagerNotFoundError(
                "Attribute 'runtimeVersion' requires Node.js version manager 'nvs'.",
                manager=NVS,
            )
        bin_dir = paths.join(nvs_home, spec.remote_name, spec.semantic_version, spec.arch)
        if not host.is_windows:
            bin_dir = paths.join(bin_dir, "bin")
        return RuntimeLocation(bin_dir, NVS)

    nvm_home = find_nvm_home(host)
    if host.is_windows:
        if not nvm_home:
            raise VersionManagerNotFoundError(
                "Attribute 'runtimeVersion' requires Node.js version manager "
                "'nvm-windows' or 'nvs'.",
                manager=NVM_WINDOWS,
            )
        return RuntimeLocation(paths.join(nvm_home, f"v{runtime_version}"), NVM_WINDOWS)

    if not nvm_home:
        raise VersionManagerNotFoundError(
            "Attribute 'runtimeVersion' requires Node.js version manager 'nvm' or 'nvs'.",
            manager=NVM,
        )
    return RuntimeLocation(
        paths.join(nvm_home, "versions", "node", f"v{runtime_version}", "bin"), NVM
    )


def prepend_path(config: LaunchConfiguration, bin_dir: str, host: HostEnvironment) -> None:
    """Put ``bin_dir`` in front of the host's ``PATH`` in ``config.env``."""
    if config.env is None:
        config.env = {}

    if host.is_windows:
        key, sep = "Path", ";"
    else:
        key, sep = "PATH", ":"

    current = host.getenv(key)
    config.env[key] = f"{bin_dir}{sep}{current}" if current else bin_dir


def apply_runtime_version(config: LaunchConfiguration, host: HostEnvironment) -> RuntimeLocation | None:
    """Resolve ``config.runtime_version`` and prepend its directory to ``PATH``.

    Returns the location used, or ``None`` when no specific version was requested.

    Raises:
        VersionStringError: for a malformed version.
        VersionManagerNotFoundError: if no suitable version manager exists.
        RuntimeVersionNotInstalledError: if the version is not installed.
    """
    version = config.runtime_version
    if not version or version == "default":
        return None

    location = locate_runtime_bin(version, host)
    if not host.exists(location.bin_dir):
        raise RuntimeVersionNotInstalledError(version, location.manager)

    logger.debug("Using Node.js %s from %s (%s)", version, location.bin_dir, location.manager)
    prepend_path(config, location.bin_dir, host)
    return location
