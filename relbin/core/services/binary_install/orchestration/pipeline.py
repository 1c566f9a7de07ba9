"""
L5 Orchestration — The install pipeline.

Composes the lower layers into the public operations:

    resolve_descriptor   config + host → ResolvedBinary (pure, no I/O)
    install_binary       lock → recreate → fetch → verify → chmod +x
    publish_binary       link the verified binary onto PATH
    verify_binary        re-check an installed binary
    run_binary           passthrough execution
    uninstall_binary     best-effort removal

Each stage gates the next; the first failure propagates as a
``BinaryInstallError`` subclass.  ``install_binary`` does NOT link: the
caller decides whether and how to publish.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from relbin.core.config.loader import (
    ENV_BIN_DIR,
    ENV_DOWNLOAD_HOST,
    load_config,
    locate_config,
    package_root,
)
from relbin.core.errors import (
    FetchError,
    InstallDirectoryError,
    InvalidConfiguration,
    NotInstalled,
)
from relbin.core.models.binary import BinaryDescriptor
from relbin.core.models.package import InstallerConfig
from relbin.core.models.platform import PlatformKey
from relbin.core.services.binary_install.detection.host import detect_platform_key
from relbin.core.services.binary_install.domain.platform_resolver import (
    PlatformResolver,
    table_for,
)
from relbin.core.services.binary_install.domain.release_locator import release_url
from relbin.core.services.binary_install.execution.fetch import (
    ArchiveFetcher,
    ExtractSummary,
)
from relbin.core.services.binary_install.execution.install_dir import InstallDirectory
from relbin.core.services.binary_install.execution.link import BinaryLinker, LinkOutcome
from relbin.core.services.binary_install.execution.process import (
    ProcessOutcome,
    ProcessRunner,
)
from relbin.core.services.binary_install.execution.uninstall import (
    Uninstaller,
    UninstallResult,
)
from relbin.core.services.binary_install.execution.verify import (
    IntegrityVerifier,
    load_manifest,
    make_executable,
)

logger = logging.getLogger(__name__)


# ── Resolution ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ResolvedBinary:
    """Everything the pipeline needs for one invocation."""

    config: InstallerConfig
    root: Path
    key: PlatformKey
    target: str
    descriptor: BinaryDescriptor
    link_path: Path
    manifest_path: Path

    @property
    def binary_path(self) -> Path:
        return self.descriptor.binary_path

    @property
    def expected_names(self) -> list[str]:
        """Manifest file names that may vouch for the binary, most specific first."""
        prefix = f"{self.config.release_name}-{self.target}"
        return [f"{prefix}/{self.descriptor.name}", prefix, self.descriptor.name]

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.descriptor.to_dict(),
            "version": self.config.version,
            "platform": str(self.key),
            "target": self.target,
            "link_path": str(self.link_path),
            "manifest": str(self.manifest_path),
            "package_root": str(self.root),
        }


def _under(root: Path, value: str | os.PathLike) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _check_layout(root: Path, install_dir: Path, manifest_path: Path) -> None:
    """Refuse layouts where ``recreate()`` would wipe the package itself."""
    problems: list[str] = []
    install_real = install_dir.resolve()
    if root.resolve().is_relative_to(install_real):
        problems.append(
            f"install_dir {install_dir} must not be the package root or one of its parents"
        )
    if manifest_path.resolve().is_relative_to(install_real):
        problems.append(f"manifest {manifest_path} must not live inside install_dir")
    if problems:
        raise InvalidConfiguration(problems)


def executable_name(name: str, key: PlatformKey) -> str:
    """The on-disk file name of the binary for ``key`` (``.exe`` on Windows)."""
    if key.os == "win32" and not name.lower().endswith(".exe"):
        return name + ".exe"
    return name


def resolve_descriptor(
    config: InstallerConfig,
    root: Path,
    *,
    key: PlatformKey | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolvedBinary:
    """Resolve platform, release URL and on-disk layout.  No I/O.

    Raises:
        InvalidConfiguration: Bad targets table, URL inputs or layout.
        UnsupportedPlatform: The host key is not in the platform table.
    """
    env = os.environ if environ is None else environ
    settings = config.binary

    try:
        table = table_for(settings.track, settings.targets)
    except ValueError as exc:
        raise InvalidConfiguration([str(exc)]) from exc

    key = key or detect_platform_key()
    target = PlatformResolver(table).resolve(key)
    logger.debug("Platform %s → target %s (%s table)", key, target, table.track)

    host = env.get(ENV_DOWNLOAD_HOST) or config.repository_url
    if env.get(ENV_DOWNLOAD_HOST):
        logger.info("Using download host %s from %s", host, ENV_DOWNLOAD_HOST)
    url = release_url(host, config.version, config.release_name, target)

    install_dir = _under(root, settings.install_dir)
    manifest_path = _under(root, settings.manifest)
    _check_layout(root, install_dir, manifest_path)

    descriptor = BinaryDescriptor(
        name=executable_name(config.binary_name, key), url=url, install_dir=install_dir,
    )
    bin_dir = _under(root, env.get(ENV_BIN_DIR) or settings.bin_dir)

    return ResolvedBinary(
        config=config,
        root=root,
        key=key,
        target=target,
        descriptor=descriptor,
        link_path=bin_dir / descriptor.name,
        manifest_path=manifest_path,
    )


def load_resolved(
    config_path: Path | None = None,
    *,
    key: PlatformKey | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolvedBinary:
    """Locate + load the config, then resolve it.

    Raises:
        ConfigError: No usable config file.
        InvalidConfiguration, UnsupportedPlatform: As ``resolve_descriptor``.
    """
    path = locate_config(config_path, environ)
    config = load_config(path)
    return resolve_descriptor(config, package_root(path), key=key, environ=environ)


# ── Install ─────────────────────────────────────────────────────


@dataclass
class InstallReceipt:
    """What a successful ``install_binary`` produced."""

    binary_path: Path
    digest: str
    url: str
    extract: ExtractSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "binary_path": str(self.binary_path),
            "sha256": self.digest,
            "url": self.url,
            "extract": self.extract.to_dict(),
        }


def install_binary(
    resolved: ResolvedBinary,
    *,
    fetcher: ArchiveFetcher | None = None,
    verifier: IntegrityVerifier | None = None,
) -> InstallReceipt:
    """Download, extract and verify the binary.  Linking is left to the caller.

    Raises:
        InvalidConfiguration: The checksum manifest is missing.
        InstallLocked: Another install holds the directory.
        InstallDirectoryError: The install directory or binary cannot be
            prepared (permissions, a file in the way).
        FetchError: Transport/extraction failure, or no binary in the archive.
        ChecksumMismatch: Digest rejected; binary quarantined.
    """
    settings = resolved.config.binary
    descriptor = resolved.descriptor

    # Read before touching the install dir so a missing manifest is harmless
    manifest_text = load_manifest(resolved.manifest_path)

    fetcher = fetcher or ArchiveFetcher(
        max_bytes=settings.max_extract_bytes,
        max_entries=settings.max_entries,
    )
    verifier = verifier or IntegrityVerifier(settings.verify_mode)
    directory = InstallDirectory(descriptor.install_dir)

    with directory.lock():
        directory.recreate()
        summary = fetcher.fetch(descriptor.url, descriptor.install_dir, settings.fetch.as_options())

        if not descriptor.binary_path.is_file():
            raise FetchError(
                f"Release archive {descriptor.url} did not contain '{descriptor.name}'"
            )

        try:
            digest = verifier.verify(
                descriptor.binary_path,
                manifest_text,
                resolved.expected_names,
                name=descriptor.name,
            )
            make_executable(descriptor.binary_path)
        except OSError as exc:
            raise InstallDirectoryError(
                f"Cannot finish installing {descriptor.binary_path}: {exc}"
            ) from exc

    logger.info("Installed %s %s at %s", descriptor.name, resolved.config.version, descriptor.binary_path)
    return InstallReceipt(
        binary_path=descriptor.binary_path,
        digest=digest,
        url=descriptor.url,
        extract=summary,
    )


def publish_binary(
    resolved: ResolvedBinary,
    *,
    strategy: str | None = None,
    linker: BinaryLinker | None = None,
) -> LinkOutcome:
    """Expose the installed binary at ``resolved.link_path``.

    Raises:
        NotInstalled: Nothing to publish.
        LinkError: Filesystem failure.
    """
    binary = resolved.binary_path
    if not binary.is_file():
        raise NotInstalled(resolved.descriptor.name, binary)
    linker = linker or BinaryLinker(strategy or resolved.config.binary.link_strategy)
    return linker.publish(binary, resolved.link_path)


# ── Verify / run / uninstall ────────────────────────────────────


def verify_binary(
    resolved: ResolvedBinary,
    *,
    verifier: IntegrityVerifier | None = None,
) -> str:
    """Re-hash the installed binary against the manifest; return the digest."""
    manifest_text = load_manifest(resolved.manifest_path)
    verifier = verifier or IntegrityVerifier(resolved.config.binary.verify_mode)
    return verifier.verify(
        resolved.binary_path,
        manifest_text,
        resolved.expected_names,
        name=resolved.descriptor.name,
    )


def run_binary(
    resolved: ResolvedBinary,
    args: Sequence[str] = (),
    *,
    cwd: Path | None = None,
) -> ProcessOutcome:
    """Run the installed binary with ``args``.

    Raises:
        NotInstalled: The binary is missing; nothing was spawned.
    """
    runner = ProcessRunner(resolved.binary_path, resolved.descriptor.name)
    return runner.launch(args, cwd=cwd)


def uninstall_binary(resolved: ResolvedBinary) -> UninstallResult:
    """Remove the published link and the install directory."""
    return Uninstaller(resolved.descriptor, resolved.link_path).uninstall()
