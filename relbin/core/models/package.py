"""
Installer configuration model — the package metadata the installer reads.

Loaded from ``relbin.yml`` or straight from an npm ``package.json``
(extra top-level keys are ignored).  Everything under ``binary:`` is
optional and defaulted.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Repository(BaseModel):
    """npm-style ``repository`` object."""

    model_config = ConfigDict(extra="ignore")

    type: str = ""
    url: str


class FetchSettings(BaseModel):
    """Transport options handed through to the archive fetcher."""

    model_config = ConfigDict(extra="allow")

    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float | None = None
    proxies: dict[str, str] = Field(default_factory=dict)

    def as_options(self) -> dict[str, Any]:
        """Return only the keys that were actually set."""
        return self.model_dump(exclude_none=True, exclude_defaults=True)


class BinarySettings(BaseModel):
    """The ``binary:`` section."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""                    # published executable name
    release_name: str = ""            # archive prefix in the release URL
    track: str = "stable"
    targets: dict[str, str] = Field(default_factory=dict)
    install_dir: str = "bin"
    bin_dir: str = "~/.local/bin"
    manifest: str = "SHASUMS256.txt"
    link_strategy: Literal["atomic", "symlink", "hardlink"] = "atomic"
    verify_mode: Literal["strict", "contains"] = "strict"
    max_extract_bytes: int = Field(default=512 * 1024 * 1024, gt=0)
    max_entries: int = Field(default=10_000, gt=0)
    fetch: FetchSettings = Field(default_factory=FetchSettings)


class InstallerConfig(BaseModel):
    """Root installer configuration."""

    model_config = ConfigDict(extra="ignore")

    name: str
    version: str
    repository: str | Repository = ""
    binary: BinarySettings = Field(default_factory=BinarySettings)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # YAML reads ``version: 1.2`` as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @property
    def repository_url(self) -> str:
        if isinstance(self.repository, Repository):
            return self.repository.url
        return self.repository

    @property
    def unscoped_name(self) -> str:
        """``@scope/tool`` → ``tool``."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def binary_name(self) -> str:
        return self.binary.name or self.unscoped_name

    @property
    def release_name(self) -> str:
        return self.binary.release_name or self.unscoped_name
