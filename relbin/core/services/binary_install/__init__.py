"""
Binary install service — package re-exports.

Callers import from here::

    from relbin.core.services.binary_install import install_binary

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration).
"""

# ── L0: Data ──
from relbin.core.services.binary_install.data.platforms import (  # noqa: F401
    DEFAULT_TRACK,
    RELEASE_TRACKS,
)

# ── L1: Domain ──
from relbin.core.services.binary_install.domain.manifest import (  # noqa: F401
    ChecksumRecord,
    find_record,
    parse_manifest,
)
from relbin.core.services.binary_install.domain.platform_resolver import (  # noqa: F401
    PlatformResolver,
    table_for,
)
from relbin.core.services.binary_install.domain.release_locator import (  # noqa: F401
    release_url,
)

# ── L3: Detection ──
from relbin.core.services.binary_install.detection.host import (  # noqa: F401
    detect_platform_key,
)

# ── L4: Execution ──
from relbin.core.services.binary_install.execution.fetch import (  # noqa: F401
    ArchiveFetcher,
)
from relbin.core.services.binary_install.execution.install_dir import (  # noqa: F401
    InstallDirectory,
)
from relbin.core.services.binary_install.execution.link import (  # noqa: F401
    BinaryLinker,
    LinkOutcome,
)
from relbin.core.services.binary_install.execution.process import (  # noqa: F401
    ProcessOutcome,
    ProcessRunner,
)
from relbin.core.services.binary_install.execution.uninstall import (  # noqa: F401
    Uninstaller,
    UninstallResult,
)
from relbin.core.services.binary_install.execution.verify import (  # noqa: F401
    IntegrityVerifier,
    sha256_file,
)

# ── L5: Orchestration ──
from relbin.core.services.binary_install.orchestration.pipeline import (  # noqa: F401
    InstallReceipt,
    ResolvedBinary,
    executable_name,
    install_binary,
    load_resolved,
    publish_binary,
    resolve_descriptor,
    run_binary,
    uninstall_binary,
    verify_binary,
)
