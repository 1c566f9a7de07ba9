"""
L4 Execution — Binary integrity verification.

Hashes the installed binary with SHA-256 and checks it against the
bundled checksum manifest.  On mismatch the binary is quarantined
(mode ``0o400``: owner read only, no execute bits) BEFORE the error is
raised, so a tampered file can never be run by accident.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from collections.abc import Sequence
from pathlib import Path

from relbin.core.errors import ChecksumMismatch, InvalidConfiguration, NotInstalled
from relbin.core.services.binary_install.data.constants import (
    CHUNK_SIZE,
    QUARANTINE_MODE,
)
from relbin.core.services.binary_install.domain.manifest import (
    find_record,
    parse_manifest,
)

logger = logging.getLogger(__name__)

VERIFY_MODES = ("strict", "contains")


def sha256_file(path: Path) -> str:
    """Lowercase hex SHA-256 of a file, read in chunks."""
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            sha.update(chunk)
    return sha.hexdigest()


def quarantine(path: Path) -> None:
    os.chmod(path, QUARANTINE_MODE)


def make_executable(path: Path) -> None:
    mode = os.stat(path).st_mode
    os.chmod(path, stat.S_IMODE(mode) | 0o111)


def load_manifest(path: Path) -> str:
    """Read the checksum manifest shipped with the package."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InvalidConfiguration(
            [f"checksum manifest not found: {path}"]
        ) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfiguration(
            [f"checksum manifest unreadable: {path} ({exc})"]
        ) from exc


class IntegrityVerifier:
    """Check a file's digest against manifest text.

    ``strict`` (default) parses the manifest and requires the record for
    one of ``expected_names`` to carry the exact digest.  ``contains``
    accepts the digest appearing anywhere in the manifest text.
    """

    def __init__(self, mode: str = "strict") -> None:
        if mode not in VERIFY_MODES:
            raise ValueError(f"Unknown verify mode {mode!r}; expected one of {VERIFY_MODES}")
        self.mode = mode

    def check(
        self,
        digest: str,
        manifest_text: str,
        expected_names: Sequence[str] = (),
    ) -> str:
        """Return "" when ``digest`` is accepted, else the reason it is not."""
        if self.mode == "contains":
            if digest in manifest_text:
                return ""
            return "digest does not appear in the manifest"

        record = find_record(parse_manifest(manifest_text), expected_names)
        if record is None:
            return f"no manifest record for {', '.join(expected_names) or '(nothing)'}"
        if record.digest != digest:
            return f"manifest lists {record.digest} for {record.filename}"
        return ""

    def verify(
        self,
        path: Path,
        manifest_text: str,
        expected_names: Sequence[str] = (),
        *,
        name: str | None = None,
    ) -> str:
        """Verify ``path``; return its digest.

        Raises:
            NotInstalled: If ``path`` is not a file.
            ChecksumMismatch: If the digest is rejected.  The file has
                already been quarantined when this is raised.
        """
        path = Path(path)
        if not path.is_file():
            raise NotInstalled(name or path.name, path)

        names = list(expected_names) or [path.name]
        digest = sha256_file(path)
        reason = self.check(digest, manifest_text, names)
        if reason:
            quarantine(path)
            logger.error("Checksum mismatch for %s: %s (got %s)", path, reason, digest)
            raise ChecksumMismatch(path, digest, reason)

        logger.info("Verified %s (sha256 %s)", path, digest)
        return digest
