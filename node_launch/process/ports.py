"""Discovering which TCP ports a process listens on.

POSIX systems are queried through ``lsof``, Windows through ``netstat``.
Both are run as asyncio subprocesses so probing never blocks the loop.
"""

from __future__ import annotations

import asyncio
import logging
import re

from node_launch.errors import ProtocolDetectionError

logger = logging.getLogger(__name__)

# "  TCP    127.0.0.1:9229    0.0.0.0:0    LISTENING    1234"
_NETSTAT_LINE_RE = re.compile(
    r"^\s*TCP\s+\S+:(?P<port>\d+)\s+\S+\s+LISTENING\s+(?P<pid>\d+)\s*$",
    re.IGNORECASE,
)


async def run_command(args: list[str], timeout: float) -> str:
    """Run ``args`` and return its stdout.

    Raises:
        ProtocolDetectionError: if the tool is missing or does not finish in time.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as e:
        raise ProtocolDetectionError(f"Cannot run {args[0]}", cause=e) from e

    try:
        stdout, _ = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError as e:
        proc.kill()
        await proc.wait()
        raise ProtocolDetectionError(f"{args[0]} did not finish in {timeout}s", cause=e) from e

    # lsof exits with 1 when nothing matches; that is an empty answer, not an error
    return stdout.decode("utf-8", errors="replace")


def parse_lsof_pids(output: str) -> set[int]:
    """Extract process ids from ``lsof -F p`` output (lines of the form ``p1234``)."""
    pids = set()
    for line in output.splitlines():
        if line.startswith("p") and line[1:].isdigit():
            pids.add(int(line[1:]))
    return pids


def parse_netstat_ports(output: str, pid: int) -> set[int]:
    """Extract the listening ports owned by ``pid`` from ``netstat -a -n -o`` output."""
    ports = set()
    for line in output.splitlines():
        match = _NETSTAT_LINE_RE.match(line)
        if match and int(match.group("pid")) == pid:
            ports.add(int(match.group("port")))
    return ports


async def pids_listening_on_port(port: int, timeout: float) -> set[int]:
    output = await run_command(
        ["lsof", "-n", "-P", f"-iTCP:{port}", "-sTCP:LISTEN", "-F", "p"], timeout
    )
    return parse_lsof_pids(output)


async def listening_ports_for_pid(
    pid: int, candidates: tuple[int, ...], *, is_windows: bool, timeout: float
) -> set[int]:
    """Return which of ``candidates`` the process ``pid`` is listening on."""
    if is_windows:
        output = await run_command(["netstat", "-a", "-n", "-o"], timeout)
        return parse_netstat_ports(output, pid) & set(candidates)

    found = set()
    for port in candidates:
        if pid in await pids_listening_on_port(port, timeout):
            found.add(port)
    return found
