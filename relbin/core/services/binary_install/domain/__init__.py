"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

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
    asset_name,
    normalize_host,
    normalize_version,
    release_url,
)
