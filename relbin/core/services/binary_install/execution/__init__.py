"""
L4 Execution — ``__init__.py`` re-exports all execution classes.

These touch the filesystem, the network or spawn processes.
"""

from relbin.core.services.binary_install.execution.fetch import (  # noqa: F401
    ArchiveFetcher,
    ExtractSummary,
)
from relbin.core.services.binary_install.execution.install_dir import (  # noqa: F401
    InstallDirectory,
)
from relbin.core.services.binary_install.execution.link import (  # noqa: F401
    LINK_STRATEGIES,
    BinaryLinker,
    LinkOutcome,
)
from relbin.core.services.binary_install.execution.process import (  # noqa: F401
    INTERRUPTED_STATUS,
    ProcessOutcome,
    ProcessRunner,
    exit_status,
)
from relbin.core.services.binary_install.execution.uninstall import (  # noqa: F401
    Uninstaller,
    UninstallResult,
    link_refers_to,
)
from relbin.core.services.binary_install.execution.verify import (  # noqa: F401
    VERIFY_MODES,
    IntegrityVerifier,
    load_manifest,
    make_executable,
    quarantine,
    sha256_file,
)
