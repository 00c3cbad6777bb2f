"""Switching an already running Node.js process into debug mode."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from node_launch.errors import DebugModeActivationError
from node_launch.runtime.host import DEBUG_SIGNAL

if TYPE_CHECKING:
    from node_launch.runtime.host import HostEnvironment

logger = logging.getLogger(__name__)


def debug_process_command(pid: int) -> list[str]:
    """Command that asks a helper ``node`` to force ``pid`` into debug mode."""
    return ["node", "-e", f"process._debugProcess({pid})"]


def put_pid_in_debug_mode(pid: int, host: HostEnvironment) -> None:
    """Make process ``pid`` start listening for a debugger.

    On Windows a helper ``node`` calls the undocumented ``process._debugProcess``;
    elsewhere the process is sent ``SIGUSR1``. There is no way to undo this.

    Raises:
        DebugModeActivationError: if the process does not exist, cannot be
            signalled, or the helper command fails.
    """
    logger.debug("Enabling debug mode for process %d", pid)
    try:
        if host.is_windows:
            host.run(debug_process_command(pid))
        else:
            if DEBUG_SIGNAL is None:
                raise OSError("SIGUSR1 is not available on this platform")
            host.kill(pid, DEBUG_SIGNAL)
    # OverflowError: pid out of range for the platform pid_t
    except (OSError, OverflowError, ValueError, subprocess.SubprocessError) as e:
        raise DebugModeActivationError(pid, cause=e) from e
