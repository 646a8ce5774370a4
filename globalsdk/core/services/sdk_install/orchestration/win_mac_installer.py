"""
L5 Orchestration — Global SDK installs on Windows and macOS.

Both OSes ship official installers that can be downloaded and run.
Linux does not, and is handled by the distro providers instead.

Flow::

    Idle → ConflictCheck → Downloading → Installing → Cleanup → Done
                 └──────→ Rejected

The conflict check runs before anything is downloaded, so a rejected
request costs no network or disk work.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from globalsdk.core.models.install import InstallContext, InstallResult
from globalsdk.core.services.events import EventSink, make_emitter
from globalsdk.core.services.sdk_install.data.constants import (
    MACOS,
    WINDOWS,
    WINDOWS_ELEVATED_INSTALLER_FLAGS,
)
from globalsdk.core.services.sdk_install.detection.registry import get_global_sdk_versions_installed
from globalsdk.core.services.sdk_install.domain.compat import find_conflicting_version
from globalsdk.core.services.sdk_install.domain.errors import (
    CleanupError,
    ConflictingInstallError,
    DownloadError,
    UnsupportedPlatformError,
)
from globalsdk.core.services.sdk_install.domain.paths import get_expected_global_sdk_path
from globalsdk.core.services.sdk_install.execution.command_executor import CommandExecutor
from globalsdk.core.services.sdk_install.execution.download import download_file, installer_file_name
from globalsdk.core.services.sdk_install.execution.scratch import ensure_scratch_dir, wipe_directory

logger = logging.getLogger(__name__)


class InstallerState(str, Enum):
    IDLE = "idle"
    CONFLICT_CHECK = "conflict_check"
    DOWNLOADING = "downloading"
    INSTALLING = "installing"
    CLEANUP = "cleanup"
    DONE = "done"
    REJECTED = "rejected"


class WinMacGlobalInstaller:
    """Download and run the official SDK installer.

    Args:
        context: The install request; needs ``installer_url``.
        scratch_dir: Caller-owned directory for the downloaded installer.
            It is wiped before and after use.
        executor: Runs the installer.
        events: Where conflict and failure events are posted.
        system: ``platform.system()`` value; defaults to the host.
        installed_sdks: Returns installed global SDK versions
            (defaults to the Windows registry query).
        download_timeout: Seconds allowed for the download.
    """

    def __init__(
        self,
        context: InstallContext,
        scratch_dir: Path,
        executor: CommandExecutor,
        events: EventSink | None = None,
        *,
        system: str | None = None,
        installed_sdks: Callable[[], list[str]] | None = None,
        download_timeout: float = 600,
    ) -> None:
        if not context.installer_url:
            raise ValueError("WinMacGlobalInstaller needs an installer_url")
        self.context = context
        self.scratch_dir = scratch_dir
        self._executor = executor
        self._emit = make_emitter(events, "win-mac-installer")
        self._system = system or platform.system()
        self._installed_sdks = installed_sdks or get_global_sdk_versions_installed
        self._download_timeout = download_timeout
        self.state = InstallerState.IDLE

        if self._system not in (WINDOWS, MACOS):
            self._emit("unsupported-platform", f"{self._system} has no global installer")
            raise UnsupportedPlatformError(
                f"Global installers are only available on Windows and macOS, not {self._system}"
            )

    def _enter(self, state: InstallerState) -> None:
        logger.debug("Installer %s → %s", self.state.value, state.value)
        self.state = state

    async def install_sdk(self) -> InstallResult:
        """Run the whole install.

        Raises:
            ConflictingInstallError: Windows only, before any download.
            DownloadError: Installer could not be fetched.
            CleanupError: Scratch directory could not be wiped after an
                otherwise successful install (after a failure it is
                only logged).
        """
        version = self.context.version

        self._enter(InstallerState.CONFLICT_CHECK)
        if self._system == WINDOWS:
            conflict = self.find_conflicting_global_install(version)
            if conflict is not None:
                self._enter(InstallerState.REJECTED)
                self._emit(
                    "conflicting-install",
                    f"Global install {conflict} conflicts with requested {version}",
                    requested_version=version,
                    conflicting_version=conflict,
                )
                raise ConflictingInstallError(conflict, version)

        try:
            self._enter(InstallerState.DOWNLOADING)
            installer = await self.download_installer(self.context.installer_url or "")

            self._enter(InstallerState.INSTALLING)
            result = await self.execute_install(installer)
        except BaseException as exc:
            self._cleanup(pending=exc)
            raise
        self._cleanup()

        self._enter(InstallerState.DONE)
        return result

    def _cleanup(self, pending: BaseException | None = None) -> None:
        # A failed wipe must not mask the error that ended the install
        self._enter(InstallerState.CLEANUP)
        try:
            wipe_directory(self.scratch_dir)
        except CleanupError as exc:
            if pending is None:
                raise
            logger.warning(
                "Could not wipe %s after %s: %s", self.scratch_dir, type(pending).__name__, exc
            )

    def find_conflicting_global_install(self, requested_version: str) -> str | None:
        """The installed global SDK that blocks ``requested_version``, if any.

        macOS always shows its installer UI, which reports this itself;
        Linux is handled by the distro providers.
        """
        return find_conflicting_version(requested_version, self._installed_sdks())

    async def download_installer(self, installer_url: str) -> Path:
        """Fetch the installer into a freshly wiped scratch directory."""
        ensure_scratch_dir(self.scratch_dir)
        wipe_directory(self.scratch_dir)
        try:
            dest = self.scratch_dir / installer_file_name(installer_url)
            return await download_file(installer_url, dest, timeout=self._download_timeout)
        except DownloadError as exc:
            self._emit(
                "download-failed",
                str(exc),
                requested_version=self.context.version,
                url=installer_url,
            )
            raise

    async def execute_install(self, installer_path: Path) -> InstallResult:
        """Run the installer; its exit code is reported, not interpreted.

        macOS: ``open -W`` waits for the .pkg UI to close, which handles
        its own elevation, but the installer's exit code is not visible.
        Windows: silent flags only when already elevated; otherwise the
        installer brings up the OS elevation prompt.
        """
        installer = str(installer_path.resolve())

        if self._system == MACOS:
            result = await self._executor.execute(["open", "-W", installer])
            return InstallResult(
                version=self.context.version,
                output=result.output,
                exit_code=None,
                verified=False,
                installer_path=installer,
            )

        args = list(WINDOWS_ELEVATED_INSTALLER_FLAGS) if self._executor.is_elevated() else []
        result = await self._executor.execute([installer, *args])
        return InstallResult(
            version=self.context.version,
            output=result.output,
            exit_code=result.exit_code,
            verified=result.exit_code == 0,
            installer_path=installer,
        )

    def get_expected_global_sdk_path(self, version: str, arch: str) -> str:
        return get_expected_global_sdk_path(version, arch, self._system)
