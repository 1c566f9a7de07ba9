"""
Logging configuration — one-time setup for the ``relbin`` entrypoints.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides where those records go.

Console level precedence:
    CLI flag  >  RELBIN_LOG_LEVEL  >  WARNING

An additional log file can be requested with RELBIN_LOG_FILE, at its
own level via RELBIN_LOG_FILE_LEVEL (defaults to the console level).
Console output goes to stderr so that ``relbin run`` never mixes log
lines into the wrapped binary's stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "RELBIN_LOG_LEVEL"
ENV_FILE = "RELBIN_LOG_FILE"
ENV_FILE_LEVEL = "RELBIN_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_PLAIN = "%(levelname)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(process)d %(name)s:%(lineno)d - %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | None, default: int = logging.WARNING) -> int:
    """Level name → numeric level; unknown or empty names give ``default``."""
    if not level:
        return default
    numeric = getattr(logging, level.strip().upper(), None)
    return numeric if isinstance(numeric, int) else default


def resolve_level(cli_level: str | None, environ: Mapping[str, str] | None = None) -> str:
    """Pick the console level name from the CLI flag or the environment."""
    env = os.environ if environ is None else environ
    if cli_level:
        return cli_level.upper()
    return (env.get(ENV_LEVEL) or "WARNING").upper()


def _console_formatter(numeric_level: int) -> logging.Formatter:
    for threshold in (logging.DEBUG, logging.INFO):
        if numeric_level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_PLAIN)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name from the CLI, or None to consult
            RELBIN_LOG_LEVEL.
        log_file: Log file path; falls back to RELBIN_LOG_FILE.
        log_file_level: File level name; falls back to
            RELBIN_LOG_FILE_LEVEL, then to the console level.
        environ: Environment mapping (tests pass their own).
    """
    env = os.environ if environ is None else environ
    console_level = parse_level(resolve_level(level, env))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective = console_level

    log_file = log_file or env.get(ENV_FILE)
    if log_file:
        file_level = parse_level(log_file_level or env.get(ENV_FILE_LEVEL), console_level)
        effective = min(effective, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective)
    logging.raiseExceptions = False
