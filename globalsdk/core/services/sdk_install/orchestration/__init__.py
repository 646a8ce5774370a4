"""
L5 Orchestration — ``__init__.py`` re-exports top-level coordinators.

These are the entry points that external code calls.
"""

from globalsdk.core.services.sdk_install.orchestration.orchestrator import (  # noqa: F401
    GlobalSdkOrchestrator,
    VersionResolver,
)
from globalsdk.core.services.sdk_install.orchestration.win_mac_installer import (  # noqa: F401
    InstallerState,
    WinMacGlobalInstaller,
)
