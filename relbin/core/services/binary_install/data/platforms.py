"""
L0 Data — Release-track platform tables.

Each track lists exactly the targets its release pipeline publishes.
Keys use the ``"<os> <arch> <endianness>"`` vocabulary produced by
``detection.host.detect_platform_key``.
"""

from __future__ import annotations

from relbin.core.models.platform import PlatformTable

DEFAULT_TRACK = "stable"

STABLE_TARGETS: dict[str, str] = {
    "darwin x64 LE": "x86_64-apple-darwin",
    "linux x64 LE": "x86_64-unknown-linux-gnu",
}

EXTENDED_TARGETS: dict[str, str] = {
    **STABLE_TARGETS,
    "darwin arm64 LE": "aarch64-apple-darwin",
    "linux arm64 LE": "aarch64-unknown-linux-gnu",
    "win32 x64 LE": "x86_64-pc-windows-msvc",
}

RELEASE_TRACKS: dict[str, PlatformTable] = {
    "stable": PlatformTable(STABLE_TARGETS, track="stable"),
    "extended": PlatformTable(EXTENDED_TARGETS, track="extended"),
}
