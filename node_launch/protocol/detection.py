"""Detecting which debug wire protocol a Node.js target speaks.

Two detectors live here:

- ``determine_protocol_for_pid_in_debug_mode`` for attach-by-PID, which
  trusts canonical ports and explicit protocols before asking a
  ``ProtocolProbe`` to look at the live process.
- ``RuntimeAutoDetector``, the default auto-detection for everything else:
  it queries the ``node`` version for launch requests and sniffs the
  handshake of the debug port for attach requests.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from typing import TYPE_CHECKING

from node_launch.config import get_settings
from node_launch.errors import ProtocolDetectionError
from node_launch.process.ports import listening_ports_for_pid
from node_launch.protocol.kinds import INSPECTOR_PORT_DEFAULT
from node_launch.protocol.kinds import LEGACY_PORT_DEFAULT
from node_launch.protocol.kinds import UNKNOWN_PROTOCOL
from node_launch.protocol.kinds import DebugType
from node_launch.protocol.kinds import ProtocolKind
from node_launch.protocol.kinds import debug_type_for_protocol
from node_launch.protocol.kinds import protocol_for_port

if TYPE_CHECKING:
    from node_launch.config import LaunchConfiguration
    from node_launch.resolver.capabilities import ProtocolProbe

logger = logging.getLogger(__name__)

# Node.js 8.0.0 dropped the legacy protocol for launch
INSPECTOR_MIN_NODE_VERSION_LAUNCH = (8, 0, 0)

_SEMVER_RE = re.compile(r"v?(\d+)\.(\d+)\.(\d+)")


async def determine_protocol_for_pid_in_debug_mode(
    config: LaunchConfiguration, pid: int, probe: ProtocolProbe
) -> DebugType | None:
    """Pick the debug type for ``pid``, which must already be in debug mode.

    First match wins: canonical inspector port, canonical legacy port, an
    explicit ``protocol`` taken verbatim, then the live ``probe``.
    """
    known = protocol_for_port(config.port)
    if known is not None:
        protocol: str = known.value
        logger.debug("Port %s implies the %s protocol", config.port, protocol)
    elif config.protocol:
        protocol = config.protocol
    else:
        protocol = await probe(pid)
        logger.debug("Probed process %d: %s", pid, protocol)

    return debug_type_for_protocol(protocol)


class PortProtocolProbe:
    """``ProtocolProbe`` that watches which canonical port the process opens.

    A process signalled into debug mode takes a moment to open its port, so
    the check is repeated until ``probe_timeout`` runs out.
    """

    def __init__(
        self,
        *,
        is_windows: bool,
        timeout: float | None = None,
        interval: float | None = None,
    ) -> None:
        settings = get_settings()
        self.is_windows = is_windows
        self.timeout = settings.probe_timeout if timeout is None else timeout
        self.interval = settings.probe_interval if interval is None else interval

    async def __call__(self, pid: int) -> str:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        candidates = (INSPECTOR_PORT_DEFAULT, LEGACY_PORT_DEFAULT)

        while True:
            try:
                ports = await listening_ports_for_pid(
                    pid,
                    candidates,
                    is_windows=self.is_windows,
                    timeout=max(self.interval, deadline - loop.time()),
                )
            except ProtocolDetectionError:
                logger.debug("Cannot inspect ports of process %d", pid, exc_info=True)
                return UNKNOWN_PROTOCOL

            if INSPECTOR_PORT_DEFAULT in ports:
                return ProtocolKind.INSPECTOR.value
            if LEGACY_PORT_DEFAULT in ports:
                return ProtocolKind.LEGACY.value

            if loop.time() + self.interval > deadline:
                logger.debug("Process %d opened no debug port within %.1fs", pid, self.timeout)
                return UNKNOWN_PROTOCOL
            await asyncio.sleep(self.interval)


def parse_node_version(output: str) -> tuple[int, int, int] | None:
    """Parse ``node --version`` output such as ``v16.2.0``."""
    match = _SEMVER_RE.search(output)
    if not match:
        return None
    major, minor, patch = (int(g) for g in match.groups())
    return major, minor, patch


def classify_handshake(data: bytes) -> ProtocolKind | None:
    """Tell the protocols apart by the first bytes a debug port sends back.

    The legacy protocol greets every client with ``Type: connect`` headers;
    the inspector only answers HTTP. An empty reply decides nothing.
    """
    if not data:
        return None
    text = data.decode("latin-1")
    if "Type: connect" in text or "V8-Version" in text:
        return ProtocolKind.LEGACY
    return ProtocolKind.INSPECTOR


class RuntimeAutoDetector:
    """Default ``AutoDetector``.

    Launch requests: a custom ``runtimeExecutable`` means inspector,
    otherwise the version of ``node`` on the (configured) ``PATH`` decides.
    Attach requests: connect to ``address:port`` and look at the handshake.
    """

    def __init__(self, *, query_timeout: float | None = None, connect_timeout: float | None = None) -> None:
        settings = get_settings()
        self.query_timeout = (
            settings.runtime_query_timeout if query_timeout is None else query_timeout
        )
        self.connect_timeout = (
            settings.connect_timeout if connect_timeout is None else connect_timeout
        )

    async def __call__(self, config: LaunchConfiguration) -> DebugType | None:
        if config.request == "launch":
            protocol = await self.detect_protocol_for_launch(config)
        elif config.request == "attach":
            protocol = await self.detect_protocol_for_attach(config)
        else:
            logger.debug("Cannot detect a protocol for request %r", config.request)
            return None
        return debug_type_for_protocol(protocol) if protocol else None

    async def detect_protocol_for_launch(self, config: LaunchConfiguration) -> ProtocolKind:
        if config.runtime_executable:
            logger.debug("Debugging with inspector protocol because a runtime executable is set.")
            return ProtocolKind.INSPECTOR

        version_text = await self.query_node_version(config.env)
        version = parse_node_version(version_text) if version_text else None
        if version is None:
            logger.debug(
                "Debugging with inspector protocol because Node.js version could not be determined."
            )
            return ProtocolKind.INSPECTOR

        config.extra["__nodeVersion"] = version_text.strip()
        if version >= INSPECTOR_MIN_NODE_VERSION_LAUNCH:
            logger.debug(
                "Debugging with inspector protocol because Node.js %s was detected.",
                version_text.strip(),
            )
            return ProtocolKind.INSPECTOR

        logger.debug(
            "Debugging with legacy protocol because Node.js %s was detected.",
            version_text.strip(),
        )
        return ProtocolKind.LEGACY

    async def query_node_version(self, env: dict[str, str] | None) -> str | None:
        """Run ``node --version`` with ``env`` layered over the current environment."""
        full_env = dict(os.environ)
        if env:
            full_env.update(env)
        try:
            proc = await asyncio.create_subprocess_exec(
                "node",
                "--version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
                env=full_env,
            )
        except OSError:
            logger.debug("Cannot run node --version", exc_info=True)
            return None

        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), self.query_timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.debug("node --version did not finish in %.1fs", self.query_timeout)
            return None
        return stdout.decode("utf-8", errors="replace") or None

    async def detect_protocol_for_attach(self, config: LaunchConfiguration) -> ProtocolKind | None:
        address = config.address or "127.0.0.1"
        port = config.port or INSPECTOR_PORT_DEFAULT

        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(address, port), self.connect_timeout
            )
        except (OSError, asyncio.TimeoutError):
            logger.debug("Cannot connect to %s:%d to detect protocol", address, port, exc_info=True)
            return None

        try:
            # harmless for both protocols; the inspector answers it over HTTP
            writer.write(f"GET /json/list HTTP/1.1\r\nHost: {address}\r\n\r\n".encode("ascii"))
            await writer.drain()
            data = await asyncio.wait_for(reader.read(1024), self.connect_timeout)
        except (OSError, asyncio.TimeoutError):
            logger.debug("No handshake from %s:%d", address, port, exc_info=True)
            return None
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                logger.debug("Error closing probe connection", exc_info=True)

        protocol = classify_handshake(data)
        if protocol is None:
            logger.debug("%s:%d closed the connection without a handshake", address, port)
            return None
        logger.debug("Debugging with %s protocol because it was detected.", protocol.value)
        return protocol
