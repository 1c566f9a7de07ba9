"""
Binary install errors — one exception type per pipeline failure kind.

Stages raise these; use cases catch ``BinaryInstallError`` and turn it
into a result object.  Only the CLI decides exit codes and output.
"""

from __future__ import annotations

from typing import Any


class BinaryInstallError(Exception):
    """Base class for every install/verify/link/run failure."""

    kind = "error"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "error": str(self)}


class InvalidConfiguration(BinaryInstallError):
    """Malformed descriptor or locator input, reported before any I/O."""

    kind = "invalid_configuration"

    def __init__(self, problems: list[str], usage: str = "") -> None:
        self.problems = list(problems)
        self.usage = usage
        msg = "Invalid binary configuration:\n" + "\n".join(
            f"  - {p}" for p in self.problems
        )
        if usage:
            msg += f"\n\nCorrect usage: {usage}"
        super().__init__(msg)


class UnsupportedPlatform(BinaryInstallError):
    """The host platform key is not in the configured allow-list."""

    kind = "unsupported_platform"

    def __init__(self, key: Any, supported: list[str] | None = None) -> None:
        self.key = key
        self.supported = list(supported or [])
        msg = f"Unsupported platform: {key}"
        if self.supported:
            msg += f" (supported: {', '.join(self.supported)})"
        super().__init__(msg)


class FetchError(BinaryInstallError):
    """Transport or extraction failure while fetching the release archive."""

    kind = "fetch_error"


class ChecksumMismatch(BinaryInstallError):
    """The extracted binary's digest is not vouched for by the manifest."""

    kind = "checksum_mismatch"

    def __init__(self, path: Any, digest: str, reason: str = "") -> None:
        self.path = path
        self.digest = digest
        msg = f"Calculated unexpected checksum {digest} for file {path}"
        if reason:
            msg += f" ({reason})"
        msg += (
            ". The file has been stripped of write and execute permissions;"
            " quarantine or delete it and report the issue."
        )
        super().__init__(msg)


class NotInstalled(BinaryInstallError):
    """The binary is not present at its expected path."""

    kind = "not_installed"

    def __init__(self, name: str, path: Any) -> None:
        self.name = name
        self.path = path
        super().__init__(
            f"You must install {name} before you can run it "
            f"(expected at {path}). Run 'relbin install' first."
        )


class LinkError(BinaryInstallError):
    """Filesystem failure while publishing the verified binary."""

    kind = "link_error"


class InstallLocked(BinaryInstallError):
    """Another process holds the install lock for this directory."""

    kind = "install_locked"

    def __init__(self, lock_path: Any, pid: int | None = None) -> None:
        self.lock_path = lock_path
        self.pid = pid
        owner = f" by PID {pid}" if pid else ""
        super().__init__(
            f"Install directory is locked{owner} ({lock_path}). "
            "Another install or uninstall is in progress."
        )


class InstallDirectoryError(BinaryInstallError):
    """Filesystem failure while preparing or finishing the install directory."""

    kind = "install_dir_error"
