"""Parsing of ``runtimeVersion`` specifiers.

Accepted forms::

    16            14.2.0          v12.1
    lts/16        myremote/14     node/16/x64     14/arm
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from node_launch.errors import VersionStringError

_VERSION_RE = re.compile(
    r"^(([\w-]+)/)?(v?(\d+(\.\d+(\.\d+)?)?))(/((x86)|(32)|((x)?64)|(arm\w*)|(ppc\w*)))?$",
    re.IGNORECASE | re.ASCII,
)

DEFAULT_REMOTE = "node"


@dataclass(frozen=True)
class VersionSpec:
    """Components of a runtime version specifier."""

    nvs_format: bool
    remote_name: str
    semantic_version: str
    arch: str


def standard_arch_name(arch: str, arm_version: str | None = None) -> str:
    """Normalize an architecture alias to the name ``nvs`` uses on disk."""
    if arch in ("32", "x86", "ia32"):
        return "x86"
    if arch in ("64", "x64", "amd64"):
        return "x64"
    if arch == "arm":
        return f"armv{arm_version}l" if arm_version else "arm"
    return arch


def parse_version_string(
    version_string: str,
    *,
    host_arch: str,
    arm_version: str | None = None,
) -> VersionSpec:
    """Split a version specifier into remote, semantic version and architecture.

    Components missing from the input are inferred: the remote defaults to
    ``node`` and the architecture to ``host_arch``.

    Raises:
        VersionStringError: if ``version_string`` does not match the grammar.
    """
    match = _VERSION_RE.fullmatch(version_string)
    if not match:
        raise VersionStringError(version_string)

    remote = match.group(2)
    arch = match.group(8)

    return VersionSpec(
        nvs_format=bool(remote or arch),
        remote_name=remote or DEFAULT_REMOTE,
        semantic_version=match.group(4) or "",
        arch=standard_arch_name(arch or host_arch, arm_version),
    )
