"""
Shared test fixtures and configuration.

Nothing here touches the network: archives are built in memory and
served by ``FakeOpener``.
"""

from pathlib import Path

import pytest
import yaml

from tests.helpers import (
    BINARY_BODY,
    BINARY_NAME,
    HOST_KEY,
    REPOSITORY,
    TARGET,
    TOOL,
    VERSION,
    WRAPPER,
    FakeOpener,
    sha256,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Pin the host platform and drop any RELBIN_* settings from the shell."""
    for var in (
        "RELBIN_CONFIG",
        "RELBIN_DOWNLOAD_HOST",
        "RELBIN_BIN_DIR",
        "RELBIN_LOG_LEVEL",
        "RELBIN_LOG_FILE",
        "RELBIN_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "relbin.core.services.binary_install.orchestration.pipeline.detect_platform_key",
        lambda: HOST_KEY,
    )


@pytest.fixture
def make_package(tmp_path: Path):
    """Factory: write relbin.yml + SHASUMS256.txt; return the config path."""

    def _make(
        *,
        binary: bytes = BINARY_BODY,
        manifest: str | None = None,
        settings: dict | None = None,
        repository: str = REPOSITORY,
    ) -> Path:
        root = tmp_path / "pkg"
        root.mkdir(exist_ok=True)
        binary_settings = {
            "name": BINARY_NAME,
            "bin_dir": str(tmp_path / "shared-bin"),
            "targets": {str(HOST_KEY): TARGET},
        }
        binary_settings.update(settings or {})
        config = {
            "name": TOOL,
            "version": VERSION,
            "repository": {"type": "git", "url": repository},
            "binary": binary_settings,
        }
        (root / "relbin.yml").write_text(yaml.safe_dump(config))
        if manifest is None:
            manifest = f"{sha256(binary)}  {WRAPPER}/{BINARY_NAME}\n"
        (root / "SHASUMS256.txt").write_text(manifest)
        return root / "relbin.yml"

    return _make


@pytest.fixture
def serve_archive(monkeypatch):
    """Route every fetch to an in-memory payload; returns the FakeOpener."""

    def _serve(payload) -> FakeOpener:
        opener = FakeOpener(payload)
        monkeypatch.setattr(
            "relbin.core.services.binary_install.execution.fetch._build_opener",
            lambda proxies: opener,
        )
        return opener

    return _serve
