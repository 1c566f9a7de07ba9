"""
Verify use case — re-check the installed binary against the manifest.

A mismatch quarantines the binary exactly as it would during install.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relbin.core.config.loader import ConfigError
from relbin.core.errors import BinaryInstallError
from relbin.core.services.binary_install import (
    ResolvedBinary,
    load_resolved,
    verify_binary,
)


@dataclass
class VerifyResult:
    resolved: ResolvedBinary | None = None
    digest: str = ""
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.resolved:
            result["binary_path"] = str(self.resolved.binary_path)
            result["mode"] = self.resolved.config.binary.verify_mode
        if self.digest:
            result["sha256"] = self.digest
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        return result


def verify(config_path: Path | None = None) -> VerifyResult:
    result = VerifyResult()
    try:
        result.resolved = load_resolved(config_path)
        result.digest = verify_binary(result.resolved)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config_error"
    except BinaryInstallError as e:
        result.error = str(e)
        result.error_kind = e.kind
    return result
