"""
Domain models — Pydantic types for the SDK installer.

All models are re-exported here for convenient access:

    from globalsdk.core.models import InstallContext, CommandResult, InstallerSettings
"""

from globalsdk.core.models.install import (
    AvailableVersion,
    CommandResult,
    InstallationRecord,
    InstallContext,
    InstallEvent,
    InstallResult,
    SupportStatus,
)
from globalsdk.core.models.settings import InstallerSettings

__all__ = [
    # install.py
    "AvailableVersion",
    "CommandResult",
    "InstallContext",
    "InstallEvent",
    "InstallResult",
    "InstallationRecord",
    # settings.py
    "InstallerSettings",
    "SupportStatus",
]
