"""
Tests for the passthrough process runner.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from relbin.core.errors import NotInstalled
from relbin.core.services.binary_install import ProcessRunner
from relbin.core.services.binary_install.execution.process import exit_status


def _script(tmp_path: Path, body: str, mode: int = 0o755) -> Path:
    path = tmp_path / "monorepo"
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(mode)
    return path


class TestRun:
    def test_not_installed_spawns_nothing(self, tmp_path: Path):
        runner = ProcessRunner(tmp_path / "monorepo")
        with patch("relbin.core.services.binary_install.execution.process.subprocess.run") as run:
            with pytest.raises(NotInstalled, match="You must install monorepo"):
                runner.run(["--help"])
        run.assert_not_called()

    def test_exit_status_mirrored(self, tmp_path: Path):
        assert ProcessRunner(_script(tmp_path, "exit 3")).run() == 3

    def test_args_passed_verbatim(self, tmp_path: Path):
        out = tmp_path / "args.txt"
        path = _script(tmp_path, f'printf "%s\\n" "$@" > "{out}"')
        status = ProcessRunner(path).run(["--flag", "two words", ""])
        assert status == 0
        assert out.read_text().split("\n")[:3] == ["--flag", "two words", ""]

    def test_runs_in_given_cwd(self, tmp_path: Path):
        out = tmp_path / "cwd.txt"
        work = tmp_path / "work"
        work.mkdir()
        path = _script(tmp_path, f'pwd > "{out}"')
        ProcessRunner(path).run(cwd=work)
        assert Path(out.read_text().strip()).resolve() == work.resolve()

    def test_defaults_to_caller_cwd(self, tmp_path: Path, monkeypatch):
        out = tmp_path / "cwd.txt"
        monkeypatch.chdir(tmp_path)
        ProcessRunner(_script(tmp_path, f'pwd > "{out}"')).run()
        assert Path(out.read_text().strip()).resolve() == tmp_path.resolve()

    def test_launch_failure(self, tmp_path: Path):
        path = _script(tmp_path, "exit 0", mode=0o644)
        outcome = ProcessRunner(path).launch()
        assert outcome.launched is False
        assert outcome.exit_status == 1
        assert outcome.error

    def test_killed_by_signal(self, tmp_path: Path):
        path = _script(tmp_path, "kill -TERM $$")
        assert ProcessRunner(path).run() == 128 + 15

    def test_keyboard_interrupt(self, tmp_path: Path):
        path = _script(tmp_path, "exit 0")
        with patch(
            "relbin.core.services.binary_install.execution.process.subprocess.run",
            side_effect=KeyboardInterrupt,
        ):
            assert ProcessRunner(path).run() == 130


class TestExitStatus:
    @pytest.mark.parametrize("returncode, expected", [(0, 0), (2, 2), (-9, 137), (-2, 130)])
    def test_mapping(self, returncode, expected):
        assert exit_status(returncode) == expected


@pytest.mark.skipif(os.name != "posix", reason="needs /bin/sh")
def test_stdout_inherited(tmp_path: Path, capfd):
    ProcessRunner(_script(tmp_path, "echo passthrough")).run()
    assert "passthrough" in capfd.readouterr().out
