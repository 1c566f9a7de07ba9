"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from relbin.core.services.binary_install.data.constants import (  # noqa: F401
    ARCHIVE_STRIP_COMPONENTS,
    ARCHIVE_SUFFIX,
    CHUNK_SIZE,
    DEFAULT_BIN_DIR,
    DEFAULT_INSTALL_DIR,
    DEFAULT_TIMEOUT,
    LAUNCH_FAILURE_STATUS,
    MANIFEST_FILENAME,
    MAX_EXTRACT_BYTES,
    MAX_EXTRACT_ENTRIES,
    QUARANTINE_MODE,
    RELEASE_PATH,
    USER_AGENT,
)
from relbin.core.services.binary_install.data.platforms import (  # noqa: F401
    DEFAULT_TRACK,
    EXTENDED_TARGETS,
    RELEASE_TRACKS,
    STABLE_TARGETS,
)
