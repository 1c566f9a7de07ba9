"""
L1 Domain — Platform resolution (pure).

Maps a host ``PlatformKey`` to a release target identifier through an
injected allow-list.  No I/O, no subprocess, no default target.
"""

from __future__ import annotations

from collections.abc import Mapping

from relbin.core.errors import UnsupportedPlatform
from relbin.core.models.platform import PlatformKey, PlatformTable
from relbin.core.services.binary_install.data.platforms import (
    DEFAULT_TRACK,
    RELEASE_TRACKS,
)


class PlatformResolver:
    """Look up target identifiers in a fixed platform table."""

    def __init__(self, table: PlatformTable) -> None:
        self.table = table

    def resolve(self, key: PlatformKey) -> str:
        """Return the target identifier for ``key``.

        Raises:
            UnsupportedPlatform: If ``key`` is not in the table.
        """
        try:
            return self.table[key]
        except KeyError:
            raise UnsupportedPlatform(
                key, supported=[str(k) for k in sorted(self.table)]
            ) from None

    def supports(self, key: PlatformKey) -> bool:
        return key in self.table


def table_for(
    track: str = DEFAULT_TRACK,
    targets: Mapping[str, str] | None = None,
) -> PlatformTable:
    """Pick the platform table for a release track.

    An explicit ``targets`` mapping replaces the track table entirely.

    Raises:
        ValueError: If the track is unknown or ``targets`` is malformed.
    """
    if targets:
        return PlatformTable(targets, track="custom")
    try:
        return RELEASE_TRACKS[track]
    except KeyError:
        known = ", ".join(sorted(RELEASE_TRACKS))
        raise ValueError(f"Unknown release track '{track}' (known: {known})") from None
