"""
L4 Execution — Publishing the verified binary onto PATH.

Strategies:

- ``atomic`` (default): hard link (or copy, across filesystems) to a
  uniquely named temp entry in the target directory, then
  ``os.replace`` onto the target.  Readers see the old binary or the
  new one, never a partial file.  Replaces a stale target.
- ``symlink``: replace the target with a symlink to the installed
  binary; optionally refresh mtimes so build caches notice.
- ``hardlink``: create a hard link only if the target is absent;
  an existing target is left untouched.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path

from relbin.core.errors import LinkError

logger = logging.getLogger(__name__)

LINK_STRATEGIES = ("atomic", "symlink", "hardlink")


@dataclass
class LinkOutcome:
    """Result of one publish."""

    source: Path
    target: Path
    strategy: str
    action: str = "published"  # published | skipped
    method: str = ""           # hardlink | copy | symlink

    @property
    def published(self) -> bool:
        return self.action == "published"

    def to_dict(self) -> dict:
        return {
            "source": str(self.source),
            "target": str(self.target),
            "strategy": self.strategy,
            "action": self.action,
            "method": self.method,
        }


def _temp_name(target: Path) -> Path:
    return target.with_name(f".{target.name}.{os.getpid()}.{uuid.uuid4().hex[:12]}.tmp")


class BinaryLinker:
    """Expose the installed binary at a well-known path."""

    def __init__(self, strategy: str = "atomic", *, touch: bool = True) -> None:
        if strategy not in LINK_STRATEGIES:
            raise ValueError(
                f"Unknown link strategy {strategy!r}; expected one of {LINK_STRATEGIES}"
            )
        self.strategy = strategy
        self.touch = touch

    def publish(self, source: Path, target: Path) -> LinkOutcome:
        """Publish ``source`` at ``target``.

        Raises:
            LinkError: On any filesystem failure.  No temp entry is left
                behind.
        """
        source = Path(source)
        target = Path(target).expanduser()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LinkError(f"Cannot create link directory {target.parent}: {exc}") from exc

        if self.strategy == "symlink":
            outcome = self._symlink(source, target)
        elif self.strategy == "hardlink":
            outcome = self._hardlink(source, target)
        else:
            outcome = self._atomic(source, target)

        if outcome.published:
            logger.info("Published %s → %s (%s)", source, target, outcome.method)
        else:
            logger.info("Left existing %s in place", target)
        return outcome

    # ── Strategies ─────────────────────────────────────────────

    def _atomic(self, source: Path, target: Path) -> LinkOutcome:
        tmp = _temp_name(target)
        try:
            try:
                os.link(source, tmp)
                method = "hardlink"
            except OSError as exc:
                logger.debug("Hard link into %s failed (%s); copying", target.parent, exc)
                shutil.copy2(source, tmp)
                method = "copy"
            os.replace(tmp, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise LinkError(f"Cannot publish {source} at {target}: {exc}") from exc
        return LinkOutcome(source, target, self.strategy, method=method)

    def _symlink(self, source: Path, target: Path) -> LinkOutcome:
        tmp = _temp_name(target)
        try:
            os.symlink(source.resolve(), tmp)
            os.replace(tmp, target)
            if self.touch:
                os.utime(source)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise LinkError(f"Cannot symlink {target} → {source}: {exc}") from exc
        return LinkOutcome(source, target, self.strategy, method="symlink")

    def _hardlink(self, source: Path, target: Path) -> LinkOutcome:
        if target.exists() or target.is_symlink():
            return LinkOutcome(source, target, self.strategy, action="skipped")
        try:
            os.link(source, target)
        except FileExistsError:
            return LinkOutcome(source, target, self.strategy, action="skipped")
        except OSError as exc:
            raise LinkError(f"Cannot hard link {source} at {target}: {exc}") from exc
        return LinkOutcome(source, target, self.strategy, method="hardlink")
