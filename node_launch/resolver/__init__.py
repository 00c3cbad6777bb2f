"""Launch configuration resolution."""

from node_launch.resolver.debug_type import DebugTypeResolver
from node_launch.resolver.provider import NodeConfigurationProvider
from node_launch.resolver.workspace import TextDocument
from node_launch.resolver.workspace import Workspace
from node_launch.resolver.workspace import WorkspaceFolder

__all__ = [
    "DebugTypeResolver",
    "NodeConfigurationProvider",
    "TextDocument",
    "Workspace",
    "WorkspaceFolder",
]
