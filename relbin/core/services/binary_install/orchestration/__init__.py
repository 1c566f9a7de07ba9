"""
L5 Orchestration — ``__init__.py`` re-exports the pipeline operations.
"""

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
