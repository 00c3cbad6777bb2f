"""Typed launch configuration record.

A ``launch.json`` entry arrives as an open-ended mapping. ``LaunchConfiguration``
gives every attribute the resolver reads or writes an explicit field, checks
the field types once at the boundary and keeps anything else in ``extra`` so
it is carried through to the debug adapter unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
import logging
from typing import Any
from typing import ClassVar

from node_launch.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class LaunchConfiguration:
    """A single debug launch or attach configuration."""

    type: str | None = None
    request: str | None = None
    name: str | None = None
    program: str | None = None
    cwd: str | None = None
    protocol: str | None = None
    process_id: str | None = None
    port: int | None = None
    address: str | None = None
    env: dict[str, str] | None = None
    runtime_version: str | None = None
    runtime_executable: str | None = None
    use_wsl: bool | None = None
    console: str | None = None
    internal_console_options: str | None = None
    no_debug: bool | None = None
    trace: bool | str | None = None
    log_file_path: str | None = None
    out_files: list[str] | None = None
    pre_launch_task: str | None = None
    restart: bool | None = None
    auto_attach_child_processes: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    # field name -> launch.json key
    WIRE_KEYS: ClassVar[dict[str, str]] = {
        "type": "type",
        "request": "request",
        "name": "name",
        "program": "program",
        "cwd": "cwd",
        "protocol": "protocol",
        "process_id": "processId",
        "port": "port",
        "address": "address",
        "env": "env",
        "runtime_version": "runtimeVersion",
        "runtime_executable": "runtimeExecutable",
        "use_wsl": "useWSL",
        "console": "console",
        "internal_console_options": "internalConsoleOptions",
        "no_debug": "noDebug",
        "trace": "trace",
        "log_file_path": "logFilePath",
        "out_files": "outFiles",
        "pre_launch_task": "preLaunchTask",
        "restart": "restart",
        "auto_attach_child_processes": "autoAttachChildProcesses",
    }

    _EXPECTED_TYPES: ClassVar[dict[str, tuple[type, ...]]] = {
        "type": (str,),
        "request": (str,),
        "name": (str,),
        "program": (str,),
        "cwd": (str,),
        "protocol": (str,),
        "process_id": (str,),
        "port": (int,),
        "address": (str,),
        "env": (dict,),
        "runtime_version": (str,),
        "runtime_executable": (str,),
        "use_wsl": (bool,),
        "console": (str,),
        "internal_console_options": (str,),
        "no_debug": (bool,),
        "trace": (bool, str),
        "log_file_path": (str,),
        "out_files": (list,),
        "pre_launch_task": (str,),
        "restart": (bool,),
        "auto_attach_child_processes": (bool,),
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LaunchConfiguration:
        """Create a configuration from ``launch.json`` style attributes.

        Raises:
            ConfigurationError: if a known attribute has the wrong type.
        """
        by_wire_key = {wire: name for name, wire in cls.WIRE_KEYS.items()}
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}

        for key, value in data.items():
            name = by_wire_key.get(key)
            if name is None:
                extra[key] = value
                continue
            if value is None:
                continue
            if name == "process_id" and isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
            values[name] = cls._check_type(name, key, value)

        if extra:
            logger.debug("Passing through unrecognized attribute(s): %s", ", ".join(sorted(extra)))

        return cls(extra=extra, **values)

    @classmethod
    def _check_type(cls, name: str, key: str, value: Any) -> Any:
        expected = cls._EXPECTED_TYPES[name]
        # bool is an int subclass; a port of True is a mistake
        if isinstance(value, bool) and bool not in expected:
            ok = False
        else:
            ok = isinstance(value, expected)
        if not ok:
            raise ConfigurationError(
                f"Attribute '{key}' has an invalid value: {value!r}",
                config_key=key,
                details={"expected": [t.__name__ for t in expected]},
            )
        if name == "env":
            return {str(k): str(v) for k, v in value.items()}
        if name == "out_files":
            return [str(v) for v in value]
        return value

    def to_dict(self) -> dict[str, Any]:
        """Convert back to ``launch.json`` attributes, omitting unset fields."""
        result: dict[str, Any] = dict(self.extra)
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[self.WIRE_KEYS[f.name]] = value
        return result

    def is_empty(self) -> bool:
        """True when the configuration came from a missing or empty launch.json."""
        return not self.type and not self.request and not self.name
