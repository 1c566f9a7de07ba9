"""
Binary descriptor — what to install, from where, and where it lands.

The descriptor is built fresh for every invocation and never persisted.
Construction validates its inputs and raises ``InvalidConfiguration``
listing every problem at once, before any filesystem or network work.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, model_validator

from relbin.core.errors import InvalidConfiguration

USAGE = 'BinaryDescriptor(name="my-binary", url="https://example.com/binary/download.tar.gz", install_dir=...)'


def check_http_url(value: Any, label: str = "url") -> str | None:
    """Return a problem description, or ``None`` if ``value`` is an http(s) URL."""
    if not isinstance(value, str) or not value.strip():
        return f"{label} must be a non-empty string"
    parts = urlsplit(value.strip())
    if parts.scheme not in ("http", "https"):
        return f"{label} must be an http(s) URL, got {value!r}"
    if not parts.netloc:
        return f"{label} has no host: {value!r}"
    return None


def check_binary_name(value: Any) -> str | None:
    """Return a problem description, or ``None`` for a usable file name."""
    if value is None or value == "":
        return "You must specify the name of your binary"
    if not isinstance(value, str):
        return "name must be a string"
    if value.strip() != value or value in (".", "..") or "/" in value or "\\" in value:
        return f"name must be a plain file name, got {value!r}"
    return None


class BinaryDescriptor(BaseModel):
    """A single release binary: ``{name, url, install_dir, binary_path}``."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    install_dir: Path

    @model_validator(mode="before")
    @classmethod
    def _check_inputs(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        problems = [
            p
            for p in (
                check_binary_name(data.get("name")),
                check_http_url(data.get("url")),
            )
            if p
        ]
        if not data.get("install_dir"):
            problems.append("install_dir must be set")
        if problems:
            raise InvalidConfiguration(problems, usage=USAGE)
        return data

    @property
    def binary_path(self) -> Path:
        """Where the extracted executable is expected."""
        return self.install_dir / self.name

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "url": self.url,
            "install_dir": str(self.install_dir),
            "binary_path": str(self.binary_path),
        }
