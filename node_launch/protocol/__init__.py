"""Debug protocol kinds and detection."""

from node_launch.protocol.kinds import INSPECTOR_PORT_DEFAULT
from node_launch.protocol.kinds import LEGACY_PORT_DEFAULT
from node_launch.protocol.kinds import DebugType
from node_launch.protocol.kinds import ProtocolKind
from node_launch.protocol.kinds import debug_type_for_protocol
from node_launch.protocol.kinds import default_port_for

__all__ = [
    "INSPECTOR_PORT_DEFAULT",
    "LEGACY_PORT_DEFAULT",
    "DebugType",
    "ProtocolKind",
    "debug_type_for_protocol",
    "default_port_for",
]
