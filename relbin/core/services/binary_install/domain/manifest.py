"""
L1 Domain — Checksum manifest parsing (pure).

Understands the two common SHA-256 manifest layouts::

    <hex>  <filename>          # GNU sha256sum (text mode)
    <hex> *<filename>          # GNU sha256sum (binary mode)
    SHA256 (<filename>) = <hex>  # BSD / macOS shasum --tag

Lines that match neither are skipped.  No I/O.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_GNU_RE = re.compile(r"^(?P<digest>[0-9a-fA-F]{64})\s+\*?(?P<name>\S.*)$")
_BSD_RE = re.compile(r"^SHA256\s*\((?P<name>.+)\)\s*=\s*(?P<digest>[0-9a-fA-F]{64})$")


@dataclass(frozen=True)
class ChecksumRecord:
    """One ``(filename, digest)`` entry; ``digest`` is lowercase hex."""

    filename: str
    digest: str


def _clean_name(name: str) -> str:
    name = name.strip()
    while name.startswith("./"):
        name = name[2:]
    return name


def parse_manifest(text: str) -> list[ChecksumRecord]:
    """Parse manifest text into records, in file order."""
    records: list[ChecksumRecord] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = _GNU_RE.match(line) or _BSD_RE.match(line)
        if not m:
            continue
        records.append(
            ChecksumRecord(
                filename=_clean_name(m.group("name")),
                digest=m.group("digest").lower(),
            )
        )
    return records


def find_record(
    records: Iterable[ChecksumRecord],
    expected_names: Iterable[str],
) -> ChecksumRecord | None:
    """Return the record for the first expected name that has one.

    ``expected_names`` is in priority order; the most specific name
    should come first.
    """
    by_name: dict[str, ChecksumRecord] = {}
    for rec in records:
        by_name.setdefault(rec.filename, rec)
    for name in expected_names:
        rec = by_name.get(_clean_name(name))
        if rec is not None:
            return rec
    return None
