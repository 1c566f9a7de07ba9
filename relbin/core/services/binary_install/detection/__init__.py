"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from relbin.core.services.binary_install.detection.host import (  # noqa: F401
    detect_platform_key,
    normalize_arch,
    normalize_endianness,
    normalize_os,
)
