"""Access to the operating system the resolver runs on.

Everything the engine needs from the host (environment variables,
filesystem probes, signalling and running helper commands) goes through a
``HostEnvironment`` so tests can substitute a fake.
"""

from __future__ import annotations

import logging
import os
import platform
import signal
import subprocess
import sys
from typing import Protocol

logger = logging.getLogger(__name__)

# platform.machine() spellings -> Node.js process.arch names
_MACHINE_TO_NODE_ARCH = {
    "x86_64": "x64",
    "amd64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64",
    "ppc64": "ppc64",
    "s390x": "s390x",
}


class HostEnvironment(Protocol):
    """Capabilities the resolver consumes from the host system."""

    @property
    def is_windows(self) -> bool: ...

    @property
    def arch(self) -> str: ...

    @property
    def arm_version(self) -> str | None: ...

    def getenv(self, name: str) -> str | None: ...

    def exists(self, path: str) -> bool: ...

    def kill(self, pid: int, sig: int) -> None: ...

    def run(self, args: list[str]) -> None: ...


def node_arch_name(machine: str) -> str:
    """Translate a ``platform.machine()`` value into Node.js naming."""
    machine = machine.lower()
    if machine.startswith("armv"):
        return "arm"
    return _MACHINE_TO_NODE_ARCH.get(machine, machine)


def arm_version_of(machine: str) -> str | None:
    """Extract ``7`` from ``armv7l`` and the like."""
    machine = machine.lower()
    if machine.startswith("armv") and len(machine) > 4 and machine[4].isdigit():
        return machine[4]
    return None


class OsHost:
    """``HostEnvironment`` backed by the running interpreter's OS."""

    def __init__(self) -> None:
        machine = platform.machine()
        self._arch = node_arch_name(machine)
        self._arm_version = arm_version_of(machine)

    @property
    def is_windows(self) -> bool:
        return sys.platform == "win32"

    @property
    def arch(self) -> str:
        return self._arch

    @property
    def arm_version(self) -> str | None:
        return self._arm_version

    def getenv(self, name: str) -> str | None:
        return os.environ.get(name)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def kill(self, pid: int, sig: int) -> None:
        os.kill(pid, sig)

    def run(self, args: list[str]) -> None:
        logger.debug("Running %s", args)
        subprocess.run(args, check=True, capture_output=True)


DEBUG_SIGNAL = getattr(signal, "SIGUSR1", None)
