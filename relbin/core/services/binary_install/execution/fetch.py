"""
L4 Execution — Release archive download and streaming extraction.

The response body is piped straight into ``tarfile`` in stream mode
(``r|gz``): the archive is never written to disk as a whole and never
buffered in memory.  Each member is rewritten before extraction:

- the first ``strip_components`` path components are dropped
  (the release tarballs carry a single wrapper directory);
- absolute names and ``..`` segments abort the fetch;
- the ``data`` extraction filter rejects device nodes and links that
  point outside the destination.

Total unpacked size and entry count are bounded.
"""

from __future__ import annotations

import http.client
import logging
import re
import tarfile
import urllib.error
import urllib.request
import zlib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import IO, Any

from relbin.core.errors import FetchError
from relbin.core.services.binary_install.data.constants import (
    ARCHIVE_STRIP_COMPONENTS,
    DEFAULT_TIMEOUT,
    MAX_EXTRACT_BYTES,
    MAX_EXTRACT_ENTRIES,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

_DRIVE_RE = re.compile(r"^[A-Za-z]:")

# Options the urllib transport understands; anything else is logged and ignored.
_KNOWN_OPTIONS = ("headers", "timeout", "proxies")


@dataclass
class ExtractSummary:
    """What one extraction wrote into ``dest``."""

    dest: Path
    entries: int = 0
    skipped: int = 0
    total_bytes: int = 0
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "dest": str(self.dest),
            "entries": self.entries,
            "skipped": self.skipped,
            "total_bytes": self.total_bytes,
            "files": list(self.files),
        }


def _build_opener(proxies: dict[str, str] | None) -> urllib.request.OpenerDirector:
    if proxies:
        return urllib.request.build_opener(urllib.request.ProxyHandler(proxies))
    return urllib.request.build_opener()


def _clean_parts(name: str) -> list[str]:
    return [p for p in PurePosixPath(name).parts if p not in ("", ".")]


class ArchiveFetcher:
    """Download a ``.tar.gz`` release and unpack it into a directory.

    Args:
        strip_components: Leading path components to drop from each entry.
        max_bytes: Upper bound on the summed size of regular files.
        max_entries: Upper bound on the number of extracted entries.
        opener: Object with ``open(request, timeout=...)``; defaults to a
            urllib opener.  Tests inject a fake here.
    """

    def __init__(
        self,
        *,
        strip_components: int = ARCHIVE_STRIP_COMPONENTS,
        max_bytes: int = MAX_EXTRACT_BYTES,
        max_entries: int = MAX_EXTRACT_ENTRIES,
        opener: Any = None,
    ) -> None:
        self.strip_components = strip_components
        self.max_bytes = max_bytes
        self.max_entries = max_entries
        self._opener = opener

    # ── Transport ──────────────────────────────────────────────

    def open(self, url: str, options: dict[str, Any] | None = None) -> IO[bytes]:
        """Open ``url`` and return the response stream.

        ``options`` is opaque configuration passed through from the
        installer config: ``headers`` are merged over the default
        User-Agent, ``timeout`` is in seconds, ``proxies`` maps scheme to
        proxy URL.
        """
        options = dict(options or {})
        headers = {"User-Agent": USER_AGENT, **(options.pop("headers", None) or {})}
        timeout = options.pop("timeout", None) or DEFAULT_TIMEOUT
        proxies = options.pop("proxies", None)
        for key in options:
            logger.debug("Ignoring fetch option %r (not used by the urllib transport)", key)

        opener = self._opener or _build_opener(proxies)
        req = urllib.request.Request(url, headers=headers)
        return opener.open(req, timeout=timeout)

    def fetch(
        self,
        url: str,
        dest: Path,
        options: dict[str, Any] | None = None,
    ) -> ExtractSummary:
        """Download ``url`` and extract it into ``dest``.

        Raises:
            FetchError: On any transport, HTTP, decompression or archive
                error, or when an entry is rejected.
        """
        logger.info("Downloading release from %s", url)
        try:
            resp = self.open(url, options)
        except urllib.error.HTTPError as exc:
            raise FetchError(f"Error fetching release: HTTP {exc.code} for {url}") from exc
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            raise FetchError(f"Error fetching release from {url}: {exc}") from exc

        with resp:
            summary = self.extract(resp, dest)
        logger.info(
            "Extracted %d entries (%d bytes) into %s",
            summary.entries, summary.total_bytes, dest,
        )
        return summary

    # ── Extraction ─────────────────────────────────────────────

    def extract(self, stream: IO[bytes], dest: Path) -> ExtractSummary:
        """Unpack a gzip'd tar stream into ``dest`` (created if missing)."""
        dest = Path(dest)
        dest.mkdir(parents=True, exist_ok=True)
        root = dest.resolve()
        summary = ExtractSummary(dest=dest)

        try:
            with tarfile.open(fileobj=stream, mode="r|gz") as tf:
                for member in tf:
                    stripped = self._strip(member)
                    if stripped is None:
                        summary.skipped += 1
                        continue

                    summary.entries += 1
                    if summary.entries > self.max_entries:
                        raise FetchError(
                            f"Archive has more than {self.max_entries} entries"
                        )
                    if stripped.isfile():
                        summary.total_bytes += stripped.size
                        if summary.total_bytes > self.max_bytes:
                            raise FetchError(
                                f"Archive expands beyond {self.max_bytes} bytes"
                            )

                    tf.extract(stripped, path=root, filter="data")
                    if stripped.isfile():
                        summary.files.append(stripped.name)
        except FetchError:
            raise
        except (tarfile.TarError, EOFError, zlib.error, http.client.HTTPException, OSError) as exc:
            raise FetchError(f"Error extracting release archive: {exc}") from exc

        return summary

    def _strip(self, member: tarfile.TarInfo) -> tarfile.TarInfo | None:
        """Rewrite ``member`` for extraction, or None to skip it."""
        name = member.name
        if name.startswith("/") or _DRIVE_RE.match(name):
            raise FetchError(f"Archive entry has an absolute path: {name!r}")
        parts = _clean_parts(name)
        if ".." in parts:
            raise FetchError(f"Archive entry escapes the install directory: {name!r}")

        remaining = parts[self.strip_components:]
        if not remaining:
            return None

        changes: dict[str, Any] = {"name": "/".join(remaining)}
        if member.islnk():
            link_parts = _clean_parts(member.linkname)
            link_remaining = link_parts[self.strip_components:]
            if ".." in link_parts or not link_remaining:
                raise FetchError(
                    f"Archive hard link {name!r} points outside the archive: "
                    f"{member.linkname!r}"
                )
            changes["linkname"] = "/".join(link_remaining)
        return member.replace(**changes, deep=False)
