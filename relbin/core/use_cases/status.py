"""
Status use case — installation state inferred from the filesystem.

Nothing about an install is persisted; the binary's presence, its mode
bits, the published link and the lock marker are the whole story.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

from relbin.core.config.loader import ConfigError, load_config, locate_config, package_root
from relbin.core.errors import BinaryInstallError
from relbin.core.services.binary_install import ResolvedBinary, resolve_descriptor
from relbin.core.services.binary_install.execution.install_dir import InstallDirectory
from relbin.core.services.binary_install.execution.uninstall import link_refers_to


@dataclass
class StatusResult:
    """Inferred installation state."""

    resolved: ResolvedBinary | None = None
    config_path: Path | None = None
    installed: bool = False
    executable: bool = False
    quarantined: bool = False
    linked: bool = False
    link_current: bool = False
    locked: bool = False
    error: str | None = None
    error_kind: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.config_path:
            result["config_path"] = str(self.config_path)
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result

        if self.resolved:
            result["binary"] = self.resolved.to_dict()
        result["installed"] = self.installed
        result["executable"] = self.executable
        result["quarantined"] = self.quarantined
        result["linked"] = self.linked
        result["link_current"] = self.link_current
        result["locked"] = self.locked
        return result


def get_status(config_path: Path | None = None) -> StatusResult:
    """Inspect the install directory and bin dir for the configured binary."""
    result = StatusResult()

    try:
        path = locate_config(config_path)
        result.config_path = path
        config = load_config(path)
        resolved = resolve_descriptor(config, package_root(path))
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config_error"
        return result
    except BinaryInstallError as e:
        result.error = str(e)
        result.error_kind = e.kind
        return result

    result.resolved = resolved
    binary = resolved.binary_path
    if binary.is_file():
        mode = stat.S_IMODE(binary.stat().st_mode)
        result.installed = True
        result.executable = os.access(binary, os.X_OK)
        result.quarantined = not mode & 0o333

    link = resolved.link_path
    result.linked = link.exists() or link.is_symlink()
    if result.linked:
        result.link_current = link_refers_to(link, binary)

    result.locked = InstallDirectory(resolved.descriptor.install_dir).lock_path.exists()
    return result
