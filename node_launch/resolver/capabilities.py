"""Host capabilities consumed by the resolver.

The editor host supplies these; tests supply fakes. None of them is called
concurrently for one resolve.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Protocol

if TYPE_CHECKING:
    from node_launch.config import LaunchConfiguration
    from node_launch.protocol.kinds import DebugType


class ProcessPicker(Protocol):
    """Lets the user choose a process; ``None`` or ``""`` means cancelled."""

    async def __call__(self) -> str | None: ...


class Notifier(Protocol):
    """User-facing messages."""

    async def show_error(self, message: str, *, modal: bool = True) -> None: ...

    def write_to_console(self, message: str) -> None: ...


class AutoDetector(Protocol):
    """Decides the debug type when neither a PID nor a protocol pins it down."""

    async def __call__(self, config: LaunchConfiguration) -> DebugType | None: ...


class ProtocolProbe(Protocol):
    """Inspects a process already in debug mode.

    Returns ``"legacy"``, ``"inspector"`` or ``"unknown"``.
    """

    async def __call__(self, pid: int) -> str: ...
