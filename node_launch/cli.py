"""Command line front end: resolve a launch configuration stored as JSON.

Usage::

    python -m node_launch launch.json --folder ~/project
    echo '{"request": "attach", "processId": "1234"}' | python -m node_launch -

The resolved configuration is printed as JSON; the exit status is 1 when
the launch would have been aborted.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from node_launch.config import LaunchConfiguration
from node_launch.config import update_settings
from node_launch.errors import LaunchError
from node_launch.errors import handle_error
from node_launch.resolver import NodeConfigurationProvider
from node_launch.resolver import Workspace
from node_launch.resolver import WorkspaceFolder

logger = logging.getLogger(__name__)

NAME_TO_LEVEL = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ConsoleNotifier:
    """Writes user-facing messages to stderr."""

    def __init__(self, stream: Any = None) -> None:
        self.stream = stream or sys.stderr

    async def show_error(self, message: str, *, modal: bool = True) -> None:
        prefix = "error" if modal else "warning"
        print(f"{prefix}: {message}", file=self.stream)

    def write_to_console(self, message: str) -> None:
        print(message, file=self.stream)


class PromptProcessPicker:
    """Asks for a process id on the terminal; cancelled when stdin is not interactive."""

    def __init__(self, stdin: Any = None) -> None:
        self.stdin = stdin or sys.stdin

    async def __call__(self) -> str | None:
        if not self.stdin.isatty():
            return None
        loop = asyncio.get_running_loop()
        answer = await loop.run_in_executor(None, input, "Process id to attach to: ")
        return answer.strip() or None


def read_config(source: str) -> dict[str, Any]:
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Launch configuration must be a JSON object")
    return data


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a Node.js debug launch configuration")
    parser.add_argument("config", help="JSON file with the configuration ('-' for stdin)")
    parser.add_argument("--folder", type=str, help="Workspace folder the configuration belongs to")
    parser.add_argument("--pid", type=str, help="Override the processId attribute")
    parser.add_argument("--log-directory", type=str, help="Directory for adapter trace logs")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    return parser.parse_args(argv)


async def resolve(args: argparse.Namespace) -> LaunchConfiguration | None:
    raw = read_config(args.config)
    if args.pid:
        raw["processId"] = args.pid
    config = LaunchConfiguration.from_dict(raw)

    folder = WorkspaceFolder(args.folder) if args.folder else None
    workspace = Workspace(folders=[folder] if folder else [])
    provider = NodeConfigurationProvider(
        notifier=ConsoleNotifier(),
        pick_process=PromptProcessPicker(),
        workspace=workspace,
    )
    return await provider.resolve_debug_configuration(folder, config)


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m node_launch``."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    args = parse_args(argv)
    logging.getLogger().setLevel(NAME_TO_LEVEL.get(args.log_level, logging.WARNING))
    if args.log_directory:
        update_settings(log_directory=args.log_directory)

    try:
        resolved = asyncio.run(resolve(args))
    except (OSError, ValueError, LaunchError) as e:
        report = handle_error(e, context={"source": args.config})
        print(f"error: {report['message']}", file=sys.stderr)
        return 2

    if resolved is None:
        return 1

    json.dump(resolved.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
