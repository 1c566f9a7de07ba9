"""
Configuration loader — reads the installer metadata into ``InstallerConfig``.

Two file names are recognized, searched for in this order from the
current directory upward:

    relbin.yml      native config
    package.json    npm package metadata (YAML is a superset of JSON)

The directory holding the config file is the *package root*: relative
``install_dir`` and ``manifest`` paths resolve against it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from relbin.core.models.package import InstallerConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("relbin.yml", "package.json")

ENV_CONFIG = "RELBIN_CONFIG"
ENV_DOWNLOAD_HOST = "RELBIN_DOWNLOAD_HOST"
ENV_BIN_DIR = "RELBIN_BIN_DIR"

# Upward search stops after this many parent directories.
_MAX_DEPTH = 20

# Where the ``relbin-exec`` shim looks for the config it was installed
# with: upward from the directory holding the ``relbin`` package.
BUNDLE_DIR = Path(__file__).resolve().parents[3]


class ConfigError(Exception):
    """Raised when installer configuration is missing or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file from ``start_dir`` (default: cwd) upward.

    ``relbin.yml`` wins over ``package.json`` in the same directory; a
    nearer directory wins over a farther one.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(_MAX_DEPTH):
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def locate_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the config path: explicit > RELBIN_CONFIG > upward search.

    Raises:
        ConfigError: If no config file can be found.
    """
    env = os.environ if environ is None else environ
    if path is None and env.get(ENV_CONFIG):
        path = Path(env[ENV_CONFIG])
    if path is None:
        path = find_config_file()
    if path is None:
        raise ConfigError(
            f"No {' or '.join(CONFIG_FILENAMES)} found. "
            "Run from your package directory, or specify --config."
        )
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return path


def locate_bundled_config(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the config the shim was installed with: RELBIN_CONFIG > BUNDLE_DIR.

    The caller's working directory is never searched.

    Raises:
        ConfigError: If neither source yields a config file.
    """
    env = os.environ if environ is None else environ
    if env.get(ENV_CONFIG):
        return locate_config(Path(env[ENV_CONFIG]), env)
    path = find_config_file(BUNDLE_DIR)
    if path is None:
        raise ConfigError(
            f"No {' or '.join(CONFIG_FILENAMES)} found above {BUNDLE_DIR}. "
            f"Set {ENV_CONFIG} to the config relbin was installed with."
        )
    return path

def load_config(path: Path) -> InstallerConfig:
    """Read and validate one config file.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, a
            package.json without a ``relbin`` section, or fails schema
            validation.
    """
    logger.debug("Loading installer config from %s", path)

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    # A package.json without a relbin section is some other project's metadata
    if Path(path).name == "package.json" and "relbin" not in data and "binary" not in data:
        raise ConfigError(
            f"{path} has no 'relbin' section; add one to install a binary with relbin"
        )

    if "relbin" in data and "binary" not in data:
        data["binary"] = data.pop("relbin")

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration in {path}: {e}") from e

    logger.info("Loaded config for '%s' %s", config.name, config.version)
    return config


def package_root(config_path: Path) -> Path:
    """The package root directory for a config file path."""
    return Path(config_path).parent.resolve()
