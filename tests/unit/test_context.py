"""Tests for building an initial configuration from the workspace."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from node_launch.config import LaunchConfiguration
from node_launch.resolver.context import create_launch_config_from_context
from node_launch.resolver.context import guess_program_from_package
from node_launch.resolver.context import load_json
from node_launch.resolver.workspace import TextDocument
from node_launch.resolver.workspace import Workspace
from node_launch.resolver.workspace import WorkspaceFolder
from tests.mocks import RecordingNotifier


@pytest.fixture
def folder(tmp_path: Path) -> WorkspaceFolder:
    return WorkspaceFolder(str(tmp_path), "project")


def write_json(folder: WorkspaceFolder, name: str, data: object) -> None:
    Path(folder.path, name).write_text(json.dumps(data), encoding="utf-8")


class TestLoadJson:
    def test_missing_file(self, folder: WorkspaceFolder) -> None:
        assert load_json(folder, "package.json") is None

    def test_invalid_json(self, folder: WorkspaceFolder) -> None:
        Path(folder.path, "package.json").write_text("{nope", encoding="utf-8")

        assert load_json(folder, "package.json") is None

    def test_no_folder(self) -> None:
        assert load_json(None, "package.json") is None


class TestGuessProgramFromPackage:
    def test_main_entry(self, folder: WorkspaceFolder) -> None:
        Path(folder.path, "app.js").write_text("", encoding="utf-8")

        program = guess_program_from_package(folder, {"main": "./app.js"}, resolve=True)

        assert program == "${workspaceFolder}/app.js"

    def test_start_script(self, folder: WorkspaceFolder) -> None:
        Path(folder.path, "server.js").write_text("", encoding="utf-8")
        pkg = {"scripts": {"start": "node server.js"}}

        assert guess_program_from_package(folder, pkg, resolve=True) == "${workspaceFolder}/server.js"

    def test_extensionless_entry_with_js_file(self, folder: WorkspaceFolder) -> None:
        Path(folder.path, "index.js").write_text("", encoding="utf-8")

        assert guess_program_from_package(folder, {"main": "index"}, resolve=True) == (
            "${workspaceFolder}/index"
        )

    def test_missing_entry_when_resolving(self, folder: WorkspaceFolder) -> None:
        assert guess_program_from_package(folder, {"main": "gone.js"}, resolve=True) is None

    def test_missing_entry_when_not_resolving(self, folder: WorkspaceFolder) -> None:
        assert guess_program_from_package(folder, {"main": "gone.js"}, resolve=False) == (
            "${workspaceFolder}/gone.js"
        )

    def test_no_entry(self, folder: WorkspaceFolder) -> None:
        assert guess_program_from_package(folder, {"name": "x"}, resolve=False) is None


class TestCreateLaunchConfigFromContext:
    def test_mern_starter(self, folder: WorkspaceFolder) -> None:
        write_json(folder, "package.json", {"name": "mern-starter"})
        notifier = RecordingNotifier()

        config = create_launch_config_from_context(folder, True, Workspace([folder]), notifier)

        assert config.protocol == "inspector"
        assert config.runtime_executable == "nodemon"
        assert config.program == "${workspaceFolder}/index.js"
        assert config.restart is True
        assert config.env == {"BABEL_DISABLE_CACHE": "1", "NODE_ENV": "development"}
        assert config.console == "integratedTerminal"
        assert config.internal_console_options == "neverOpen"
        assert notifier.console == ["Launch configuration for 'Mern Starter' project created."]

    def test_program_from_package(self, folder: WorkspaceFolder) -> None:
        write_json(folder, "package.json", {"main": "main.js"})
        Path(folder.path, "main.js").write_text("", encoding="utf-8")
        notifier = RecordingNotifier()

        config = create_launch_config_from_context(folder, True, Workspace([folder]), notifier)

        assert config.type == "node"
        assert config.request == "launch"
        assert config.name == "Launch Program"
        assert config.program == "${workspaceFolder}/main.js"
        assert notifier.console == ["Launch configuration created based on 'package.json'."]

    def test_program_from_active_editor(self, folder: WorkspaceFolder) -> None:
        doc = TextDocument(str(Path(folder.path, "src", "app.js")), "javascript")
        workspace = Workspace([folder], active_document=doc, text_documents=[doc])

        config = create_launch_config_from_context(folder, True, workspace)

        assert config.program == "${workspaceFolder}/src/app.js"
        assert config.out_files is None

    def test_typescript_editor_adds_out_files(self, folder: WorkspaceFolder) -> None:
        write_json(folder, "tsconfig.json", {"compilerOptions": {"outDir": "./out"}})
        doc = TextDocument(str(Path(folder.path, "app.ts")), "typescript")
        notifier = RecordingNotifier()
        workspace = Workspace([folder], active_document=doc, text_documents=[doc])

        config = create_launch_config_from_context(folder, True, workspace, notifier)

        assert config.program == "${workspaceFolder}/app.ts"
        assert config.out_files == ["${workspaceFolder}/out/**/*.js"]
        assert config.pre_launch_task == "tsc: build - tsconfig.json"
        assert any("outFiles" in line for line in notifier.console)

    def test_open_coffeescript_document_without_tsconfig(self, folder: WorkspaceFolder) -> None:
        doc = TextDocument("/elsewhere/lib.coffee", "coffeescript")
        workspace = Workspace([folder], text_documents=[doc])

        config = create_launch_config_from_context(folder, False, workspace)

        assert config.out_files == ["${workspaceFolder}/**/*.js"]
        assert config.pre_launch_task is None

    def test_editor_file_in_other_folder_is_ignored(self, folder: WorkspaceFolder, tmp_path: Path) -> None:
        other = WorkspaceFolder(str(tmp_path / "other"), "other")
        doc = TextDocument(str(tmp_path / "other" / "x.js"), "javascript")
        workspace = Workspace([folder, other], active_document=doc)

        config = create_launch_config_from_context(other, True, workspace)
        assert config.program == "${workspaceFolder}/x.js"

        config = create_launch_config_from_context(None, True, workspace)
        assert config.program is None

    def test_not_resolving_falls_back_to_current_file(self) -> None:
        config = create_launch_config_from_context(None, False, Workspace())

        assert config.program == "${file}"

    def test_resolving_without_program(self) -> None:
        config = create_launch_config_from_context(None, True, Workspace())

        assert config.program is None

    def test_no_debug_is_kept(self) -> None:
        existing = LaunchConfiguration(no_debug=True)

        config = create_launch_config_from_context(None, False, Workspace(), existing=existing)

        assert config.no_debug is True

    def test_explanations_only_when_resolving(self, folder: WorkspaceFolder) -> None:
        write_json(folder, "package.json", {"name": "mern-starter"})
        notifier = RecordingNotifier()

        create_launch_config_from_context(folder, False, Workspace([folder]), notifier)

        assert notifier.console == []
