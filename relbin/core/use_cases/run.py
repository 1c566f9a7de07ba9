"""
Run use case — execute the installed binary with passthrough arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relbin.core.config.loader import ConfigError, locate_bundled_config
from relbin.core.errors import BinaryInstallError
from relbin.core.services.binary_install import load_resolved, run_binary
from relbin.core.services.binary_install.data.constants import LAUNCH_FAILURE_STATUS


@dataclass
class RunResult:
    """Exit status of the child, or why it never ran."""

    exit_status: int = LAUNCH_FAILURE_STATUS
    launched: bool = False
    error: str | None = None
    error_kind: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"exit_status": self.exit_status, "launched": self.launched}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        return result


def run_installed(
    args: Sequence[str] = (),
    config_path: Path | None = None,
    cwd: Path | None = None,
    *,
    bundled: bool = False,
) -> RunResult:
    """Run the installed binary and report its exit status.

    With ``bundled`` the config comes from ``locate_bundled_config`` (the
    install the shim belongs to) instead of a search from the cwd.
    """
    result = RunResult()

    try:
        if bundled and config_path is None:
            config_path = locate_bundled_config()
        resolved = load_resolved(config_path)
        outcome = run_binary(resolved, args, cwd=cwd)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config_error"
        return result
    except BinaryInstallError as e:
        result.error = str(e)
        result.error_kind = e.kind
        return result

    result.exit_status = outcome.exit_status
    result.launched = outcome.launched
    if not outcome.launched:
        result.error = f"Failed to launch {resolved.binary_path}: {outcome.error}"
        result.error_kind = "launch_failed"
    return result
