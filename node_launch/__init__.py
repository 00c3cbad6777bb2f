"""node_launch - launch configuration resolution for Node.js debugging."""

from node_launch.cli import main as _cli_main
from node_launch.config import LaunchConfiguration
from node_launch.protocol import DebugType
from node_launch.protocol import ProtocolKind
from node_launch.resolver import NodeConfigurationProvider

__all__ = [
    "DebugType",
    "LaunchConfiguration",
    "NodeConfigurationProvider",
    "ProtocolKind",
    "__version__",
    "main",
]
__version__ = "0.1.0"


def main() -> int:
    """Entry point that mirrors :func:`node_launch.cli.main`."""
    return _cli_main()
