"""
L1 Domain — Error taxonomy for SDK installation.

Conflict and platform errors are raised before anything on the
machine changes.  Download and cleanup errors are raised only after
partial artifacts have been removed.
"""

from __future__ import annotations


class SdkInstallError(Exception):
    """Base class for every error raised by the installer."""


class ConflictingInstallError(SdkInstallError):
    """An SDK in the same feature band, at the same or a newer patch, is installed."""

    def __init__(self, conflicting_version: str, requested_version: str = "") -> None:
        self.conflicting_version = conflicting_version
        self.requested_version = requested_version
        super().__init__(
            f"A global install is already on the machine: version {conflicting_version}, "
            f"that conflicts with the requested version {requested_version or '(unknown)'}. "
            "Please uninstall this version first if you would like to continue."
        )


class CustomInstallExistsError(ConflictingInstallError):
    """A dotnet not managed by the distro package manager is already on PATH."""

    def __init__(self, conflicting_version: str, path: str, requested_version: str = "") -> None:
        self.path = path
        super().__init__(conflicting_version, requested_version)
        self.args = (
            f"A custom .NET install ({conflicting_version or 'unknown version'}) exists at "
            f"{path}. Remove it before installing a distro-managed SDK.",
        )


class UnsupportedPlatformError(SdkInstallError):
    """The host OS or architecture is not handled by this code path."""


class UnknownDistroError(UnsupportedPlatformError):
    """No distro variant matches the running Linux distribution."""

    def __init__(self, distro_id: str, version: str) -> None:
        self.distro_id = distro_id
        self.version = version
        super().__init__(
            f"Linux distribution '{distro_id} {version}' is not supported for "
            "global .NET SDK installs."
        )


class DownloadError(SdkInstallError):
    """The installer could not be downloaded."""


class CleanupError(SdkInstallError):
    """The scratch directory could not be wiped."""


class MalformedVersionError(SdkInstallError, ValueError):
    """A version string is not a fully-specified major.minor.patch version."""


class PrivilegeDeniedError(SdkInstallError):
    """An elevated operation was requested without a sanctioned way to elevate."""


class InstallTimeoutError(SdkInstallError):
    """An install request did not finish within the configured timeout."""
