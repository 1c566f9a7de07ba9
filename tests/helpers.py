"""
Test helpers — release constants, in-memory archives, a fake urllib opener.
"""

import hashlib
import io
import tarfile

from relbin.core.models.platform import PlatformKey

TOOL = "typescript-tools"
BINARY_NAME = "monorepo"
VERSION = "1.2.3"
HOST_KEY = PlatformKey("linux", "x64", "LE")
TARGET = "x86_64-unknown-linux-gnu"
WRAPPER = f"{TOOL}-{TARGET}"
REPOSITORY = "git+https://github.com/example/typescript-tools.git"
RELEASE_URL = (
    "https://github.com/example/typescript-tools/releases/download/"
    f"v{VERSION}/{TOOL}-{TARGET}.tar.gz"
)
BINARY_BODY = b"#!/bin/sh\necho hello from monorepo\nexit 0\n"


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def make_tarball(
    files: dict[str, bytes],
    *,
    wrapper: str | None = WRAPPER,
    mode: int = 0o755,
) -> bytes:
    """Build a .tar.gz in memory; ``files`` maps archive-relative names to bodies."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        if wrapper:
            info = tarfile.TarInfo(wrapper)
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tf.addfile(info)
        for name, data in files.items():
            info = tarfile.TarInfo(f"{wrapper}/{name}" if wrapper else name)
            info.size = len(data)
            info.mode = mode
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def make_raw_tarball(members: list[tarfile.TarInfo], bodies: dict[str, bytes] | None = None) -> bytes:
    """Build a .tar.gz from hand-made members (for hostile archives)."""
    bodies = bodies or {}
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for info in members:
            data = bodies.get(info.name)
            if data is not None:
                info.size = len(data)
                tf.addfile(info, io.BytesIO(data))
            else:
                tf.addfile(info)
    return buf.getvalue()


class FakeOpener:
    """Stands in for a urllib ``OpenerDirector``; records every request."""

    def __init__(self, payload):
        self.payload = payload
        self.requests = []

    def open(self, request, timeout=None):
        self.requests.append((request, timeout))
        if isinstance(self.payload, BaseException):
            raise self.payload
        return io.BytesIO(self.payload)

    @property
    def urls(self) -> list[str]:
        return [req.full_url for req, _ in self.requests]
