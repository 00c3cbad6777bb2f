"""Choosing the debug adapter type for a launch configuration.

Three routes lead to a ``DebugType``:

- attach by process id: force the process into debug mode, then detect the
  protocol it listens with and turn the request into a port attach;
- an explicit ``protocol`` of ``legacy`` or ``inspector``;
- anything else is handed to the ``AutoDetector``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import re
from typing import TYPE_CHECKING

from node_launch.errors import InvalidProcessIdError
from node_launch.errors import UserAbort
from node_launch.process.activation import put_pid_in_debug_mode
from node_launch.protocol.detection import determine_protocol_for_pid_in_debug_mode
from node_launch.protocol.kinds import DebugType
from node_launch.protocol.kinds import ProtocolKind
from node_launch.protocol.kinds import default_port_for

if TYPE_CHECKING:
    from node_launch.config import LaunchConfiguration
    from node_launch.resolver.capabilities import AutoDetector
    from node_launch.resolver.capabilities import ProcessPicker
    from node_launch.resolver.capabilities import ProtocolProbe
    from node_launch.runtime.host import HostEnvironment

logger = logging.getLogger(__name__)

PICK_PROCESS_COMMANDS = frozenset(
    {
        "${command:PickProcess}",
        "${command:extension.pickNodeProcess}",
    }
)

_PID_RE = re.compile(r"[0-9]+")


@dataclass
class DebugTypeResolver:
    """Collaborators needed to decide the debug type."""

    host: HostEnvironment
    pick_process: ProcessPicker
    probe: ProtocolProbe
    auto_detect: AutoDetector

    async def determine(self, config: LaunchConfiguration) -> DebugType | None:
        """Return the debug type for ``config``, or ``None`` if undecided.

        Raises:
            UserAbort: the process pick was cancelled.
            InvalidProcessIdError: the process id is not a number.
            DebugModeActivationError: the process could not enter debug mode.
        """
        if config.request == "attach" and isinstance(config.process_id, str):
            return await self.determine_for_pid_config(config, config.process_id)
        if config.protocol == ProtocolKind.LEGACY.value:
            return DebugType.LEGACY
        if config.protocol == ProtocolKind.INSPECTOR.value:
            return DebugType.INSPECTOR
        # 'auto' or unspecified
        return await self.auto_detect(config)

    async def determine_for_pid_config(
        self, config: LaunchConfiguration, process_id: str
    ) -> DebugType | None:
        """Resolve an attach-by-PID request for ``process_id`` into a port attach."""
        if is_pick_process_command(process_id):
            pid_text = await self.pick_process()
            if not pid_text:
                raise UserAbort("No process selected")
        else:
            pid_text = process_id

        pid = parse_pid(pid_text)
        # signalling or spawning the helper node blocks; keep it off the loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, put_pid_in_debug_mode, pid, self.host)

        # the process stays in debug mode even if detection below fails
        debug_type = await determine_protocol_for_pid_in_debug_mode(config, pid, self.probe)
        if debug_type is not None:
            config.process_id = None
            config.port = default_port_for(debug_type)
            logger.debug("Attaching to process %d through port %d", pid, config.port)
        else:
            logger.debug("Could not determine the protocol of process %d", pid)
        return debug_type


def is_pick_process_command(process_id: str) -> bool:
    return process_id.strip() in PICK_PROCESS_COMMANDS


def parse_pid(pid_text: str) -> int:
    """Convert a decimal process id string.

    Raises:
        InvalidProcessIdError: if ``pid_text`` is not a positive decimal number.
    """
    if not _PID_RE.fullmatch(pid_text) or int(pid_text) == 0:
        raise InvalidProcessIdError(pid_text)
    return int(pid_text)
