"""
Platform models — host identity and the release-target allow-list.

A ``PlatformKey`` names the host (OS, CPU architecture, byte order) in
the vocabulary the release tables are written in.  A ``PlatformTable``
is an immutable allow-list mapping keys to target identifiers; it is
injected into the resolver, never consulted as a global.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, order=True)
class PlatformKey:
    """Composite host key, e.g. ``PlatformKey("darwin", "x64", "LE")``."""

    os: str
    arch: str
    endianness: str

    def __str__(self) -> str:
        return f"{self.os} {self.arch} {self.endianness}"

    @classmethod
    def parse(cls, text: str) -> PlatformKey:
        """Parse the ``"<os> <arch> <endianness>"`` form.

        Raises:
            ValueError: If the text does not have exactly three fields.
        """
        parts = text.split()
        if len(parts) != 3:
            raise ValueError(
                f"Platform key must be '<os> <arch> <endianness>', got {text!r}"
            )
        return cls(*parts)


class PlatformTable(Mapping[PlatformKey, str]):
    """Immutable ``PlatformKey → target identifier`` allow-list."""

    def __init__(
        self,
        entries: Mapping[PlatformKey | str, str],
        *,
        track: str = "custom",
    ) -> None:
        normalized: dict[PlatformKey, str] = {}
        for key, target in entries.items():
            pk = key if isinstance(key, PlatformKey) else PlatformKey.parse(key)
            if not isinstance(target, str) or not target.strip():
                raise ValueError(f"Target identifier for '{pk}' must be a non-empty string")
            normalized[pk] = target.strip()
        self._entries = MappingProxyType(normalized)
        self.track = track

    def __getitem__(self, key: PlatformKey) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[PlatformKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PlatformTable(track={self.track!r}, targets={len(self)})"

    def to_dict(self) -> dict[str, str]:
        return {str(k): v for k, v in sorted(self._entries.items())}
