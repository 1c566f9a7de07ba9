"""
Tests for logging setup — level precedence and the optional log file.
"""

import logging
from pathlib import Path

import pytest

from relbin.core.observability.logging_config import parse_level, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevels:
    def test_parse_level(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("bogus") == logging.WARNING
        assert parse_level(None, logging.INFO) == logging.INFO

    def test_cli_flag_beats_env(self):
        assert resolve_level("DEBUG", {"RELBIN_LOG_LEVEL": "ERROR"}) == "DEBUG"

    def test_env_beats_default(self):
        assert resolve_level(None, {"RELBIN_LOG_LEVEL": "info"}) == "INFO"

    def test_default_warning(self):
        assert resolve_level(None, {}) == "WARNING"


class TestSetup:
    def test_console_only(self):
        setup_logging("INFO", environ={})
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_from_env(self, tmp_path: Path):
        log_file = tmp_path / "relbin.log"
        setup_logging(
            "WARNING",
            environ={"RELBIN_LOG_FILE": str(log_file), "RELBIN_LOG_FILE_LEVEL": "DEBUG"},
        )
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("relbin.test").debug("to the file only")
        for h in root.handlers:
            h.flush()
        assert "to the file only" in log_file.read_text()
