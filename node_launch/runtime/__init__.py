"""Node.js runtime discovery: version specifiers, version managers and host access."""

from node_launch.runtime.host import HostEnvironment
from node_launch.runtime.host import OsHost
from node_launch.runtime.version import VersionSpec
from node_launch.runtime.version import parse_version_string
from node_launch.runtime.version import standard_arch_name
from node_launch.runtime.version_manager import RuntimeLocation
from node_launch.runtime.version_manager import apply_runtime_version
from node_launch.runtime.version_manager import locate_runtime_bin

__all__ = [
    "HostEnvironment",
    "OsHost",
    "RuntimeLocation",
    "VersionSpec",
    "apply_runtime_version",
    "locate_runtime_bin",
    "parse_version_string",
    "standard_arch_name",
]
