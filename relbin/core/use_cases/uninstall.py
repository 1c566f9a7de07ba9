"""
Uninstall use case — remove the published link and the install directory.

Never fails for lack of prior state: if the config cannot be found or
resolved (no package, unsupported host, broken metadata) there is
nothing this installer could have put on disk, so the result is a
``noop`` carrying the reason.
"""

from __future__ import annotations

import logging
from pathlib import Path

from relbin.core.config.loader import ConfigError
from relbin.core.errors import InvalidConfiguration, UnsupportedPlatform
from relbin.core.services.binary_install import (
    UninstallResult,
    load_resolved,
    uninstall_binary,
)

logger = logging.getLogger(__name__)


def uninstall(config_path: Path | None = None) -> UninstallResult:
    try:
        resolved = load_resolved(config_path)
    except (ConfigError, InvalidConfiguration, UnsupportedPlatform) as e:
        logger.info("Nothing to uninstall: %s", e)
        return UninstallResult.noop(str(e))

    return uninstall_binary(resolved)
