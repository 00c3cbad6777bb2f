"""Launch configuration provider for Node.js debugging.

``NodeConfigurationProvider`` fills in the attributes a debug session needs
before it starts: program and working directory, the ``PATH`` for a
requested runtime version, and the debug adapter type matching the wire
protocol of the target.
"""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
from typing import TYPE_CHECKING

from node_launch.config import LaunchConfiguration
from node_launch.config import get_settings
from node_launch.errors import ProgramNotFoundError
from node_launch.errors import UserAbort
from node_launch.errors import UserFacingLaunchError
from node_launch.protocol.detection import PortProtocolProbe
from node_launch.protocol.detection import RuntimeAutoDetector
from node_launch.protocol.kinds import DebugType
from node_launch.resolver.context import create_launch_config_from_context
from node_launch.resolver.debug_type import DebugTypeResolver
from node_launch.resolver.workspace import Workspace
from node_launch.runtime.host import OsHost
from node_launch.runtime.version_manager import apply_runtime_version

if TYPE_CHECKING:
    from node_launch.resolver.capabilities import AutoDetector
    from node_launch.resolver.capabilities import Notifier
    from node_launch.resolver.capabilities import ProcessPicker
    from node_launch.resolver.capabilities import ProtocolProbe
    from node_launch.resolver.workspace import WorkspaceFolder
    from node_launch.runtime.host import HostEnvironment

logger = logging.getLogger(__name__)

LEGACY_LOG_FILE = "debugadapter-legacy.txt"
INSPECTOR_LOG_FILE = "debugadapter.txt"


class NodeConfigurationProvider:
    """Provides and resolves Node.js debug configurations."""

    def __init__(
        self,
        *,
        notifier: Notifier,
        pick_process: ProcessPicker,
        workspace: Workspace | None = None,
        host: HostEnvironment | None = None,
        probe: ProtocolProbe | None = None,
        auto_detect: AutoDetector | None = None,
    ) -> None:
        self.notifier = notifier
        self.workspace = workspace or Workspace()
        self.host = host or OsHost()
        self.debug_types = DebugTypeResolver(
            host=self.host,
            pick_process=pick_process,
            probe=probe or PortProtocolProbe(is_windows=self.host.is_windows),
            auto_detect=auto_detect or RuntimeAutoDetector(),
        )

    def provide_debug_configurations(
        self, folder: WorkspaceFolder | None
    ) -> list[LaunchConfiguration]:
        """Return an initial configuration for a new ``launch.json``."""
        return [create_launch_config_from_context(folder, False, self.workspace)]

    async def resolve_debug_configuration(
        self, folder: WorkspaceFolder | None, config: LaunchConfiguration
    ) -> LaunchConfiguration | None:
        """Add missing attributes to ``config`` in place.

        Returns the configuration, or ``None`` when the launch must be
        aborted. User-facing failures are shown before returning ``None``;
        a cancelled process pick aborts without a message.

        Raises:
            VersionStringError: if ``runtimeVersion`` is malformed.
        """
        try:
            return await self._resolve(folder, config)
        except UserAbort:
            logger.debug("Launch cancelled")
            return None
        except UserFacingLaunchError as e:
            logger.info("Launch aborted: %s", e.message)
            await self.notifier.show_error(e.message, modal=e.modal)
            return None

    async def _resolve(
        self, folder: WorkspaceFolder | None, config: LaunchConfiguration
    ) -> LaunchConfiguration:
        # launch.json is missing or empty
        if config.is_empty():
            config = create_launch_config_from_context(
                folder, True, self.workspace, self.notifier, config
            )
            if not config.program:
                raise ProgramNotFoundError()

        if not config.cwd:
            config.cwd = self.infer_cwd(folder, config)

        if not self.host.is_windows and config.use_wsl:
            logger.debug("useWSL attribute ignored on non-Windows OS.")
            config.use_wsl = None

        # keep the debug console closed when running in the integrated terminal
        if config.console == "integratedTerminal" and not config.internal_console_options:
            config.internal_console_options = "neverOpen"

        apply_runtime_version(config, self.host)

        if config.auto_attach_child_processes:
            logger.debug("autoAttachChildProcesses is left to the debug adapter")

        debug_type = await self.debug_types.determine(config)
        if debug_type is not None:
            config.type = debug_type.value

        self.fixup_log_parameters(config)
        return config

    def infer_cwd(self, folder: WorkspaceFolder | None, config: LaunchConfiguration) -> str:
        """Pick a working directory when the configuration has none."""
        if folder is not None:
            return folder.path

        # no folder -> config is a user or workspace launch config
        if self.workspace.folders:
            return self.workspace.folders[0].path

        if config.program == "${file}":
            return "${fileDirname}"

        paths = ntpath if self.host.is_windows else posixpath
        if config.program and paths.isabs(config.program):
            return paths.dirname(config.program)

        return "${workspaceFolder}"

    def fixup_log_parameters(self, config: LaunchConfiguration) -> None:
        """Default ``logFilePath`` when tracing is on."""
        if not config.trace or config.log_file_path:
            return
        log_directory = self.workspace.log_directory or get_settings().log_directory
        if not log_directory:
            logger.debug("Tracing enabled but no log directory is known")
            return
        file_name = LEGACY_LOG_FILE if config.type == DebugType.LEGACY.value else INSPECTOR_LOG_FILE
        config.log_file_path = os.path.join(log_directory, file_name)
