"""Wire protocols and debug adapter types for Node.js targets."""

from __future__ import annotations

from enum import Enum

# Well-known ports a Node.js process listens on once in debug mode.
INSPECTOR_PORT_DEFAULT = 9229
LEGACY_PORT_DEFAULT = 5858

UNKNOWN_PROTOCOL = "unknown"


class ProtocolKind(str, Enum):
    """Debug wire protocol spoken by a target process."""

    LEGACY = "legacy"
    INSPECTOR = "inspector"


class DebugType(str, Enum):
    """Debug adapter family written into the configuration's ``type``."""

    LEGACY = "node"
    INSPECTOR = "node2"


_DEBUG_TYPE_FOR_PROTOCOL = {
    ProtocolKind.LEGACY: DebugType.LEGACY,
    ProtocolKind.INSPECTOR: DebugType.INSPECTOR,
}

_DEFAULT_PORT_FOR_TYPE = {
    DebugType.LEGACY: LEGACY_PORT_DEFAULT,
    DebugType.INSPECTOR: INSPECTOR_PORT_DEFAULT,
}


def debug_type_for_protocol(protocol: str | None) -> DebugType | None:
    """Map a protocol name to its adapter type, ``None`` for anything else."""
    if protocol is None:
        return None
    try:
        return _DEBUG_TYPE_FOR_PROTOCOL[ProtocolKind(protocol)]
    except ValueError:
        return None


def default_port_for(debug_type: DebugType) -> int:
    return _DEFAULT_PORT_FOR_TYPE[debug_type]


def protocol_for_port(port: int | None) -> ProtocolKind | None:
    """Return the protocol implied by a canonical port, if any."""
    if port == INSPECTOR_PORT_DEFAULT:
        return ProtocolKind.INSPECTOR
    if port == LEGACY_PORT_DEFAULT:
        return ProtocolKind.LEGACY
    return None
