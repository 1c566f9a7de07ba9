"""
L3 Detection — Host platform key.

Reads the interpreter's view of the host (OS, machine, byte order) and
normalizes it to the vocabulary used by the release tables.  Read-only.
"""

from __future__ import annotations

import platform
import sys

from relbin.core.models.platform import PlatformKey

# platform.system() → table OS name
_OS_MAP: dict[str, str] = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "win32",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "sunos": "sunos",
    "aix": "aix",
}

# platform.machine() → table arch name
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",        # Windows / BSD
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc64le": "ppc64",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

_ENDIAN_MAP: dict[str, str] = {"little": "LE", "big": "BE"}


def normalize_os(system: str) -> str:
    system = system.strip().lower()
    return _OS_MAP.get(system, system)


def normalize_arch(machine: str) -> str:
    machine = machine.strip().lower()
    return _ARCH_MAP.get(machine, machine)


def normalize_endianness(byteorder: str) -> str:
    return _ENDIAN_MAP.get(byteorder.strip().lower(), byteorder.strip().upper())


def detect_platform_key(
    system: str | None = None,
    machine: str | None = None,
    byteorder: str | None = None,
) -> PlatformKey:
    """Build the host ``PlatformKey``.

    Each argument overrides the corresponding probe; unknown values are
    passed through lowercased so that the resolver rejects them.
    """
    return PlatformKey(
        os=normalize_os(system if system is not None else platform.system()),
        arch=normalize_arch(machine if machine is not None else platform.machine()),
        endianness=normalize_endianness(
            byteorder if byteorder is not None else sys.byteorder
        ),
    )
