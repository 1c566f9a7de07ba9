"""
L4 Execution — Best-effort uninstall.

Removes the published link (only if it still refers to the installed
binary) and then the install directory, but only when that directory
holds the binary or is empty.  Every step is attempted; failures are
collected on the result instead of raised.  Calling it twice is
harmless: the second call reports ``noop``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from relbin.core.errors import BinaryInstallError
from relbin.core.models.binary import BinaryDescriptor
from relbin.core.services.binary_install.execution.install_dir import InstallDirectory
from relbin.core.services.binary_install.execution.verify import sha256_file

logger = logging.getLogger(__name__)


@dataclass
class UninstallResult:
    """``status`` is ``removed``, ``noop`` or ``partial``."""

    status: str = "noop"
    removed: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    reason: str = ""

    @classmethod
    def noop(cls, reason: str) -> UninstallResult:
        return cls(status="noop", reason=reason)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "removed": list(self.removed),
            "kept": list(self.kept),
            "errors": list(self.errors),
            "reason": self.reason,
        }


def link_refers_to(link: Path, binary: Path) -> bool:
    """True if ``link`` is a symlink to, hard link of, or copy of ``binary``."""
    if link.is_symlink():
        target = Path(os.readlink(link))
        if not target.is_absolute():
            target = link.parent / target
        return os.path.abspath(target) == os.path.abspath(binary) or (
            binary.exists() and target.resolve() == binary.resolve()
        )
    if not binary.is_file():
        return False
    try:
        if link.samefile(binary):
            return True
        return sha256_file(link) == sha256_file(binary)
    except OSError:
        return False


class Uninstaller:
    """Undo an install for one descriptor."""

    def __init__(self, descriptor: BinaryDescriptor, link_path: Path | None = None) -> None:
        self.descriptor = descriptor
        self.link_path = Path(link_path).expanduser() if link_path else None
        self.install_dir = InstallDirectory(descriptor.install_dir)

    def uninstall(self) -> UninstallResult:
        result = UninstallResult()
        try:
            with self.install_dir.lock():
                self._remove_link(result)
                self._remove_install_dir(result)
        except BinaryInstallError as exc:
            result.errors.append(str(exc))

        if result.errors:
            result.status = "partial"
            for err in result.errors:
                logger.warning("Uninstall: %s", err)
        elif result.removed:
            result.status = "removed"
        else:
            result.reason = result.reason or "nothing installed"
        return result

    def _remove_link(self, result: UninstallResult) -> None:
        link = self.link_path
        if link is None or not (link.exists() or link.is_symlink()):
            return
        if not link_refers_to(link, self.descriptor.binary_path):
            logger.info(
                "Leaving %s in place (not a link to %s); delete it by hand if it is stale",
                link, self.descriptor.binary_path,
            )
            result.kept.append(str(link))
            return
        try:
            link.unlink()
        except OSError as exc:
            result.errors.append(f"Cannot remove {link}: {exc}")
            return
        logger.info("Removed %s", link)
        result.removed.append(str(link))

    def _owns_install_dir(self) -> bool:
        path = self.install_dir.path
        if not (path.exists() or path.is_symlink()):
            return True
        if path.is_symlink() or not path.is_dir():
            return False
        binary = self.descriptor.binary_path
        if binary.exists() or binary.is_symlink():
            return True
        return not any(path.iterdir())

    def _remove_install_dir(self, result: UninstallResult) -> None:
        path = self.install_dir.path
        try:
            if not self._owns_install_dir():
                logger.info("Leaving %s in place (no %s inside)", path, self.descriptor.name)
                result.kept.append(str(path))
                return
            removed = self.install_dir.remove()
        except OSError as exc:
            result.errors.append(f"Cannot remove {path}: {exc}")
            return
        if removed:
            logger.info("Removed %s", path)
            result.removed.append(str(path))
