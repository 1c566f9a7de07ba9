"""
L4 Execution — Install directory lifecycle.

Every install is a full replace: the directory is wiped and recreated
before extraction, so nothing from an earlier version or an earlier
failed attempt can satisfy the checksum check.  This is destructive and
has no undo.

Installs are serialized by a PID-stamped marker file that sits NEXT TO
the install directory (``bin.lock`` for ``bin/``), so the recreate step
cannot delete it.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from relbin.core.errors import InstallDirectoryError, InstallLocked

logger = logging.getLogger(__name__)


def _read_pid(lock_path: Path) -> int | None:
    try:
        return int(lock_path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


def _pid_alive(pid: int) -> bool:
    """Best-effort liveness probe.  Unknown means alive."""
    if os.name == "nt":
        # os.kill(pid, 0) terminates the process on Windows
        return True
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except OSError:
        return True
    return True


class InstallDirectory:
    """Owns ``install_dir`` and its lock marker."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def lock_path(self) -> Path:
        return self.path.with_name(self.path.name + ".lock")

    def remove(self) -> bool:
        """Remove the directory tree.  Returns False if nothing was there."""
        if self.path.is_symlink() or self.path.is_file():
            self.path.unlink()
            return True
        if self.path.is_dir():
            shutil.rmtree(self.path)
            return True
        return False

    def recreate(self) -> Path:
        """Wipe the directory if it exists, then create it empty.

        Raises:
            InstallDirectoryError: If the old tree cannot be removed or the
                new directory cannot be created.
        """
        try:
            if self.remove():
                logger.info("Removed previous install directory %s", self.path)
            self.path.mkdir(parents=True)
        except OSError as exc:
            raise InstallDirectoryError(f"Cannot recreate {self.path}: {exc}") from exc
        return self.path

    @contextmanager
    def lock(self) -> Iterator[Path]:
        """Hold the install lock for the duration of the ``with`` block.

        Raises:
            InstallLocked: If a live process already holds it.
            InstallDirectoryError: If the lock marker cannot be created.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InstallDirectoryError(
                f"Cannot create {self.path.parent}: {exc}"
            ) from exc
        self._acquire()
        try:
            yield self.lock_path
        finally:
            self._release()

    def _acquire(self) -> None:
        lock_path = self.lock_path
        for attempt in range(2):
            try:
                fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                pid = _read_pid(lock_path)
                if attempt == 0 and pid is not None and not _pid_alive(pid):
                    logger.warning(
                        "Removing stale install lock %s (PID %d is gone)", lock_path, pid,
                    )
                    lock_path.unlink(missing_ok=True)
                    continue
                raise InstallLocked(lock_path, pid) from None
            except OSError as exc:
                raise InstallDirectoryError(
                    f"Cannot create install lock {lock_path}: {exc}"
                ) from exc
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(f"{os.getpid()}\n")
            logger.debug("Acquired install lock %s", lock_path)
            return
        raise InstallLocked(lock_path, _read_pid(lock_path))

    def _release(self) -> None:
        if _read_pid(self.lock_path) == os.getpid():
            self.lock_path.unlink(missing_ok=True)
            logger.debug("Released install lock %s", self.lock_path)
