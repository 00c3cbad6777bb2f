"""Error handling for launch configuration resolution."""

from node_launch.errors.launch_errors import ConfigurationError
from node_launch.errors.launch_errors import DebugModeActivationError
from node_launch.errors.launch_errors import ErrorHandler
from node_launch.errors.launch_errors import InvalidProcessIdError
from node_launch.errors.launch_errors import LaunchError
from node_launch.errors.launch_errors import ProgramNotFoundError
from node_launch.errors.launch_errors import ProtocolDetectionError
from node_launch.errors.launch_errors import RuntimeVersionNotInstalledError
from node_launch.errors.launch_errors import UserAbort
from node_launch.errors.launch_errors import UserFacingLaunchError
from node_launch.errors.launch_errors import VersionManagerNotFoundError
from node_launch.errors.launch_errors import VersionStringError
from node_launch.errors.launch_errors import default_error_handler
from node_launch.errors.launch_errors import handle_error

__all__ = [
    "ConfigurationError",
    "DebugModeActivationError",
    "ErrorHandler",
    "InvalidProcessIdError",
    "LaunchError",
    "ProgramNotFoundError",
    "ProtocolDetectionError",
    "RuntimeVersionNotInstalledError",
    "UserAbort",
    "UserFacingLaunchError",
    "VersionManagerNotFoundError",
    "VersionStringError",
    "default_error_handler",
    "handle_error",
]
