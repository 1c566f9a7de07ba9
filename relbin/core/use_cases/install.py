"""
Install use case — fetch, verify and publish the release binary.

The full vertical slice: load config, resolve the platform target and
release URL, download and extract under the install lock, verify the
checksum, then (unless told not to) publish the binary onto PATH.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from relbin.core.config.loader import ConfigError
from relbin.core.errors import BinaryInstallError
from relbin.core.models.platform import PlatformKey
from relbin.core.services.binary_install import (
    ArchiveFetcher,
    InstallReceipt,
    LinkOutcome,
    ResolvedBinary,
    install_binary,
    load_resolved,
    publish_binary,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install."""

    resolved: ResolvedBinary | None = None
    receipt: InstallReceipt | None = None
    link: LinkOutcome | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.resolved:
            result["binary"] = self.resolved.to_dict()
        if self.receipt:
            result["install"] = self.receipt.to_dict()
        if self.link:
            result["link"] = self.link.to_dict()
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        return result


def install(
    config_path: Path | None = None,
    *,
    link: bool = True,
    link_strategy: str | None = None,
    key: PlatformKey | None = None,
    fetcher: ArchiveFetcher | None = None,
) -> InstallResult:
    """Install (and by default publish) the configured binary.

    Args:
        config_path: Explicit config file; None searches upward.
        link: Publish the verified binary to the bin dir.
        link_strategy: Override the configured link strategy.
        key: Platform key override; None probes the host.
        fetcher: Archive fetcher override (tests inject one).

    Returns:
        InstallResult; ``error``/``error_kind`` set on failure.
    """
    result = InstallResult()

    try:
        result.resolved = load_resolved(config_path, key=key)
        result.receipt = install_binary(result.resolved, fetcher=fetcher)
        if link:
            result.link = publish_binary(result.resolved, strategy=link_strategy)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config_error"
    except BinaryInstallError as e:
        result.error = str(e)
        result.error_kind = e.kind
        logger.debug("Install failed (%s)", e.kind, exc_info=True)

    return result
