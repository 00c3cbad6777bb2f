"""Live process helpers: debug-mode activation and listening-port discovery."""

from node_launch.process.activation import put_pid_in_debug_mode
from node_launch.process.ports import listening_ports_for_pid

__all__ = [
    "listening_ports_for_pid",
    "put_pid_in_debug_mode",
]
