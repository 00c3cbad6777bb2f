"""Building an initial launch configuration from the workspace.

Used when there is no ``launch.json`` (or it is empty): the entry point is
guessed from ``package.json`` or the file open in the editor, and source
map globs are added for transpiled languages.
"""

from __future__ import annotations

import json
import logging
import os
import posixpath
from typing import TYPE_CHECKING
from typing import Any

from node_launch.config import LaunchConfiguration

if TYPE_CHECKING:
    from node_launch.resolver.capabilities import Notifier
    from node_launch.resolver.workspace import Workspace
    from node_launch.resolver.workspace import WorkspaceFolder

logger = logging.getLogger(__name__)

TRANSPILED_LANGUAGES = frozenset({"typescript", "coffeescript"})

LAUNCH_PROGRAM_NAME = "Launch Program"


def is_transpiled_language(language_id: str) -> bool:
    return language_id in TRANSPILED_LANGUAGES


def load_json(folder: WorkspaceFolder | None, file_name: str) -> Any:
    """Read ``file_name`` from ``folder``; ``None`` if absent or not valid JSON."""
    if folder is None:
        return None
    path = os.path.join(folder.path, file_name)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        logger.debug("No usable %s in %s", file_name, folder.path)
        return None


def configure_mern(config: LaunchConfiguration) -> None:
    """Fill in the configuration for a 'mern-starter' project."""
    config.protocol = "inspector"
    config.runtime_executable = "nodemon"
    config.program = "${workspaceFolder}/index.js"
    config.restart = True
    config.env = {
        "BABEL_DISABLE_CACHE": "1",
        "NODE_ENV": "development",
    }
    config.console = "integratedTerminal"
    config.internal_console_options = "neverOpen"


def guess_program_from_package(
    folder: WorkspaceFolder | None, package_json: Any, resolve: bool
) -> str | None:
    """Find the entry point in ``package.json``: ``main``, else the last word of ``scripts.start``.

    When ``resolve`` is set a relative entry point must exist on disk
    (with or without ``.js``).
    """
    if not isinstance(package_json, dict):
        return None

    program: str | None = None
    scripts = package_json.get("scripts")
    if isinstance(package_json.get("main"), str) and package_json["main"]:
        program = package_json["main"]
    elif isinstance(scripts, dict) and isinstance(scripts.get("start"), str):
        # assume a start script of the form 'node server.js'
        program = scripts["start"].split(" ")[-1]

    if not program:
        return None

    if os.path.isabs(program):
        path: str | None = program
    else:
        path = os.path.join(folder.path, program) if folder else None
        program = posixpath.normpath(posixpath.join("${workspaceFolder}", program))

    if resolve and path and not os.path.exists(path) and not os.path.exists(path + ".js"):
        return None

    return program


def out_files_for(folder: WorkspaceFolder | None, config: LaunchConfiguration) -> None:
    """Set ``outFiles`` (and ``preLaunchTask`` when a tsconfig ``outDir`` exists)."""
    out_dir = ""
    ts_config = load_json(folder, "tsconfig.json")
    compiler_options = ts_config.get("compilerOptions") if isinstance(ts_config, dict) else None
    if isinstance(compiler_options, dict) and isinstance(compiler_options.get("outDir"), str):
        configured = compiler_options["outDir"]
        if not os.path.isabs(configured):
            out_dir = configured
            if out_dir.startswith("./"):
                out_dir = out_dir[2:]
            if not out_dir.endswith("/"):
                out_dir += "/"
        config.pre_launch_task = "tsc: build - tsconfig.json"
    config.out_files = ["${workspaceFolder}/" + out_dir + "**/*.js"]


def create_launch_config_from_context(
    folder: WorkspaceFolder | None,
    resolve: bool,
    workspace: Workspace,
    notifier: Notifier | None = None,
    existing: LaunchConfiguration | None = None,
) -> LaunchConfiguration:
    """Create a launch configuration from ``package.json`` and editor state.

    ``resolve`` is set when the configuration is about to be launched
    rather than written into a new ``launch.json``; explanations are then
    written to the console and ``program`` is left unset if nothing was
    found.
    """
    config = LaunchConfiguration(type="node", request="launch", name=LAUNCH_PROGRAM_NAME)

    if existing is not None and existing.no_debug:
        config.no_debug = True

    def explain(message: str) -> None:
        if resolve and notifier is not None:
            notifier.write_to_console(message)

    pkg = load_json(folder, "package.json")
    if isinstance(pkg, dict) and pkg.get("name") == "mern-starter":
        explain("Launch configuration for 'Mern Starter' project created.")
        configure_mern(config)
        return config

    program: str | None = None
    use_source_maps = False

    if pkg is not None:
        program = guess_program_from_package(folder, pkg, resolve)
        if program:
            explain("Launch configuration created based on 'package.json'.")

    if not program:
        # try the file open in the editor
        document = workspace.active_document
        if document is not None:
            language_id = document.language_id
            if language_id == "javascript" or is_transpiled_language(language_id):
                if workspace.folder_for(document.path) == folder:
                    program = workspace.as_relative_path(document.path)
                    if not os.path.isabs(program):
                        program = "${workspaceFolder}/" + program
            use_source_maps = is_transpiled_language(language_id)

    # let the launch config use whatever file is open in the editor
    if not resolve and not program:
        program = "${file}"

    if program:
        config.program = program

    if use_source_maps or any(
        is_transpiled_language(doc.language_id) for doc in workspace.text_documents
    ):
        explain(
            "Adjust glob pattern(s) in the 'outFiles' attribute so that they cover "
            "the generated JavaScript."
        )
        out_files_for(folder, config)

    return config
