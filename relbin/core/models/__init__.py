"""
Domain models — typed values shared by the install pipeline.

All models are re-exported here for convenient access:

    from relbin.core.models import BinaryDescriptor, InstallerConfig, PlatformKey
"""

from relbin.core.models.binary import BinaryDescriptor
from relbin.core.models.package import (
    BinarySettings,
    FetchSettings,
    InstallerConfig,
    Repository,
)
from relbin.core.models.platform import PlatformKey, PlatformTable

__all__ = [
    # binary.py
    "BinaryDescriptor",
    # package.py
    "BinarySettings",
    "FetchSettings",
    "InstallerConfig",
    # platform.py
    "PlatformKey",
    "PlatformTable",
    "Repository",
]
