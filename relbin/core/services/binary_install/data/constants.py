"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Checksum manifest published next to every release archive.
MANIFEST_FILENAME = "SHASUMS256.txt"

# Release asset naming.
ARCHIVE_SUFFIX = ".tar.gz"
RELEASE_PATH = "releases/download"

# Wrapper directory levels removed from every archive entry.
ARCHIVE_STRIP_COMPONENTS = 1

# Extraction bounds.
MAX_EXTRACT_BYTES = 512 * 1024 * 1024
MAX_EXTRACT_ENTRIES = 10_000

# Streaming chunk size for hashing and copying.
CHUNK_SIZE = 64 * 1024

# HTTP transport defaults.
USER_AGENT = "relbin/1.0"
DEFAULT_TIMEOUT = 60

# Filesystem defaults (relative to the package root unless absolute).
DEFAULT_INSTALL_DIR = "bin"
DEFAULT_BIN_DIR = "~/.local/bin"

# Exit status used when the binary could not be spawned at all.
LAUNCH_FAILURE_STATUS = 1

# Mode applied to a binary that failed verification: owner read only.
QUARANTINE_MODE = 0o400
