"""
Tests for best-effort uninstall.
"""

import json
from pathlib import Path

from relbin.core.models.binary import BinaryDescriptor
from relbin.core.services.binary_install import Uninstaller
from relbin.core.use_cases.install import install
from relbin.core.use_cases.uninstall import uninstall
from tests.helpers import BINARY_BODY, BINARY_NAME, make_tarball


def _descriptor(tmp_path: Path) -> BinaryDescriptor:
    return BinaryDescriptor(
        name=BINARY_NAME,
        url="https://example.com/tool.tar.gz",
        install_dir=tmp_path / "pkg" / "bin",
    )


class TestUninstaller:
    def test_removes_link_and_install_dir(self, make_package, serve_archive, tmp_path: Path):
        config = make_package()
        serve_archive(make_tarball({BINARY_NAME: BINARY_BODY}))
        assert install(config).ok
        link = tmp_path / "shared-bin" / BINARY_NAME

        result = uninstall(config)

        assert result.status == "removed"
        assert not link.exists()
        assert not (config.parent / "bin").exists()
        assert str(link) in result.removed
        assert config.is_file()

    def test_second_run_is_noop(self, make_package, serve_archive):
        config = make_package()
        serve_archive(make_tarball({BINARY_NAME: BINARY_BODY}))
        assert install(config).ok
        assert uninstall(config).status == "removed"

        again = uninstall(config)
        assert again.status == "noop"
        assert again.errors == []

    def test_nothing_installed(self, tmp_path: Path):
        result = Uninstaller(_descriptor(tmp_path), tmp_path / "shared" / BINARY_NAME).uninstall()
        assert result.status == "noop"
        assert result.ok

    def test_foreign_file_at_link_path_is_kept(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        descriptor.install_dir.mkdir(parents=True)
        descriptor.binary_path.write_bytes(BINARY_BODY)
        foreign = tmp_path / "shared" / BINARY_NAME
        foreign.parent.mkdir()
        foreign.write_bytes(b"a different tool with the same name")

        result = Uninstaller(descriptor, foreign).uninstall()

        assert foreign.exists()
        assert result.kept == [str(foreign)]
        assert not descriptor.install_dir.exists()
        assert result.status == "removed"

    def test_dangling_symlink_to_install_removed(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        link = tmp_path / "shared" / BINARY_NAME
        link.parent.mkdir()
        link.symlink_to(descriptor.binary_path)  # install dir already gone

        result = Uninstaller(descriptor, link).uninstall()

        assert not link.is_symlink()
        assert result.status == "removed"

    def test_copied_binary_recognized(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        descriptor.install_dir.mkdir(parents=True)
        descriptor.binary_path.write_bytes(BINARY_BODY)
        copy = tmp_path / "shared" / BINARY_NAME
        copy.parent.mkdir()
        copy.write_bytes(BINARY_BODY)

        Uninstaller(descriptor, copy).uninstall()

        assert not copy.exists()


    def test_install_dir_without_binary_is_kept(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        descriptor.install_dir.mkdir(parents=True)
        script = descriptor.install_dir / "deploy.sh"
        script.write_text("#!/bin/sh\n")

        result = Uninstaller(descriptor, tmp_path / "shared" / BINARY_NAME).uninstall()

        assert script.is_file()
        assert result.kept == [str(descriptor.install_dir)]
        assert result.status == "noop"

    def test_empty_install_dir_removed(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        descriptor.install_dir.mkdir(parents=True)
        result = Uninstaller(descriptor).uninstall()
        assert not descriptor.install_dir.exists()
        assert result.status == "removed"

    def test_quarantined_binary_still_removed(self, tmp_path: Path):
        descriptor = _descriptor(tmp_path)
        descriptor.install_dir.mkdir(parents=True)
        descriptor.binary_path.write_bytes(BINARY_BODY)
        descriptor.binary_path.chmod(0o400)
        result = Uninstaller(descriptor).uninstall()
        assert not descriptor.install_dir.exists()
        assert result.status == "removed"

    def test_lock_failure_is_partial(self, tmp_path: Path):
        (tmp_path / "pkg").write_text("a file where the package dir should be")
        result = Uninstaller(_descriptor(tmp_path)).uninstall()
        assert result.status == "partial"
        assert result.errors


class TestPlainNpmProject:
    """A package.json that never opted in to relbin is left alone."""

    def test_project_bin_dir_untouched(self, tmp_path: Path, monkeypatch):
        project = tmp_path / "myapp"
        (project / "bin").mkdir(parents=True)
        script = project / "bin" / "deploy.sh"
        script.write_text("#!/bin/sh\n")
        (project / "package.json").write_text(json.dumps({
            "name": "myapp",
            "version": "1.0.0",
            "repository": {"url": "git+https://github.com/me/myapp.git"},
        }))
        monkeypatch.chdir(project)

        result = uninstall()

        assert result.status == "noop"
        assert "relbin" in result.reason
        assert script.is_file()


class TestUninstallNoop:
    """Unresolvable configuration means there is nothing to remove."""

    def test_no_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = uninstall()
        assert result.status == "noop"
        assert "No relbin.yml" in result.reason

    def test_unsupported_platform(self, make_package, monkeypatch):
        config = make_package(settings={"targets": {"sunos sparc BE": "sparc-sun-solaris"}})
        result = uninstall(config)
        assert result.status == "noop"
        assert "Unsupported platform" in result.reason

    def test_invalid_configuration(self, make_package):
        config = make_package(repository="not a url")
        result = uninstall(config)
        assert result.status == "noop"
        assert result.to_dict()["errors"] == []
