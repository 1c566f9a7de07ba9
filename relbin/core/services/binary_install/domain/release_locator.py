"""
L1 Domain — Release URL composition (pure).

``<host>/releases/download/v<version>/<name>-<target>.tar.gz``

No I/O.  Bad inputs raise ``InvalidConfiguration`` before anything
touches the network.
"""

from __future__ import annotations

import re

from relbin.core.errors import InvalidConfiguration
from relbin.core.models.binary import check_http_url
from relbin.core.services.binary_install.data.constants import (
    ARCHIVE_SUFFIX,
    RELEASE_PATH,
)

# Semantic version, https://semver.org grammar (prefix ``v`` handled separately).
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

_USAGE = 'release_url("https://github.com/org/tool", "1.2.3", "tool", "x86_64-unknown-linux-gnu")'


def normalize_host(host: str) -> str:
    """Strip npm-isms from a repository URL.

    ``git+https://github.com/org/tool.git/`` → ``https://github.com/org/tool``
    """
    host = host.strip()
    host = host.removeprefix("git+")
    host = host.rstrip("/")
    host = host.removesuffix(".git")
    return host.rstrip("/")


def normalize_version(version: str) -> str:
    """Drop a single leading ``v`` so the tag is never ``vv1.2.3``."""
    version = version.strip()
    return version[1:] if version[:1] in ("v", "V") else version


def release_url(host: str, version: str, name: str, target: str) -> str:
    """Build the download URL for one release archive.

    Args:
        host: Distribution host or repository base URL.
        version: Semantic version, with or without a leading ``v``.
        name: Tool name used as the archive prefix.
        target: Target identifier from the platform resolver.

    Returns:
        The archive URL.

    Raises:
        InvalidConfiguration: Listing every malformed input.
    """
    problems: list[str] = []

    host_problem = check_http_url(
        normalize_host(host) if isinstance(host, str) else host, "host"
    )
    if host_problem:
        problems.append(host_problem)

    if not isinstance(version, str) or not _SEMVER_RE.match(normalize_version(version)):
        problems.append(f"version must be a semantic version, got {version!r}")

    if not isinstance(name, str) or not name.strip():
        problems.append("You must specify the name of your tool")
    elif "/" in name or " " in name:
        problems.append(f"name must not contain '/' or spaces, got {name!r}")

    if not isinstance(target, str) or not target.strip():
        problems.append("target identifier must be a non-empty string")

    if problems:
        raise InvalidConfiguration(problems, usage=_USAGE)

    return (
        f"{normalize_host(host)}/{RELEASE_PATH}/v{normalize_version(version)}/"
        f"{name}-{target}{ARCHIVE_SUFFIX}"
    )


def asset_name(name: str, target: str) -> str:
    """Archive file name without the URL, e.g. ``tool-x86_64-apple-darwin.tar.gz``."""
    return f"{name}-{target}{ARCHIVE_SUFFIX}"
