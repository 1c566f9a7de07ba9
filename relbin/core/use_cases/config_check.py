"""
Config check use case — validate the installer config and report issues.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from relbin.core.config.loader import ConfigError, load_config, locate_config, package_root
from relbin.core.errors import InvalidConfiguration, UnsupportedPlatform
from relbin.core.models.package import InstallerConfig
from relbin.core.services.binary_install import (
    ResolvedBinary,
    find_record,
    parse_manifest,
    resolve_descriptor,
)


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: InstallerConfig | None = None
    resolved: ResolvedBinary | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "name": self.config.name if self.config else None,
            "version": self.config.version if self.config else None,
            "url": self.resolved.descriptor.url if self.resolved else None,
        }


def _check_manifest(resolved: ResolvedBinary, result: ConfigCheckResult) -> None:
    path = resolved.manifest_path
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        result.errors.append(f"Checksum manifest not found: {path}")
        return

    records = parse_manifest(text)
    if resolved.config.binary.verify_mode == "strict":
        if find_record(records, resolved.expected_names) is None:
            result.errors.append(
                f"{path.name} has no record for any of: "
                + ", ".join(resolved.expected_names)
            )
    elif not records:
        result.warnings.append(f"{path.name} contains no recognizable checksum lines.")


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate installer configuration and report issues.

    Args:
        config_path: Optional explicit path to relbin.yml / package.json.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    try:
        path = locate_config(config_path)
        result.config_path = path
        config = load_config(path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    try:
        resolved = resolve_descriptor(config, package_root(path))
        result.resolved = resolved
    except InvalidConfiguration as e:
        result.errors.extend(e.problems)
        return result
    except UnsupportedPlatform as e:
        # The config itself may be fine; this host just cannot install it
        result.warnings.append(str(e))
        result.valid = True
        return result

    _check_manifest(resolved, result)

    bin_dir = str(resolved.link_path.parent)
    if bin_dir not in os.environ.get("PATH", "").split(os.pathsep):
        result.warnings.append(f"{bin_dir} is not on PATH; the published binary won't be found by name.")

    if config.binary.link_strategy != "atomic":
        result.warnings.append(
            f"link_strategy '{config.binary.link_strategy}' is deprecated; prefer 'atomic'."
        )
    if config.binary.verify_mode == "contains":
        result.warnings.append(
            "verify_mode 'contains' accepts any digest listed in the manifest; prefer 'strict'."
        )

    result.valid = not result.errors
    return result
