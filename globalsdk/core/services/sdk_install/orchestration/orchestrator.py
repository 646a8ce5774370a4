"""
L5 Orchestration — Top-level coordinator.

Picks the Windows/macOS installer or a Linux distro provider for the
host, applies the install timeout, and turns version-resolver input
into a fully-specified install request.
"""

from __future__ import annotations

import asyncio
import logging
import os
import platform
from collections.abc import Awaitable
from pathlib import Path
from typing import Protocol, TypeVar

from globalsdk.core.models.install import (
    AvailableVersion,
    InstallationRecord,
    InstallContext,
    InstallResult,
)
from globalsdk.core.models.settings import InstallerSettings
from globalsdk.core.services.events import EventSink, LoggingEventSink, make_emitter
from globalsdk.core.services.sdk_install.data.constants import LINUX, MACOS, WINDOWS
from globalsdk.core.services.sdk_install.detection.host import host_arch
from globalsdk.core.services.sdk_install.detection.registry import (
    get_global_sdk_installs,
    get_global_sdk_versions_installed,
)
from globalsdk.core.services.sdk_install.domain.compat import find_conflicting_version
from globalsdk.core.services.sdk_install.domain.errors import (
    CustomInstallExistsError,
    DownloadError,
    InstallTimeoutError,
    UnsupportedPlatformError,
)
from globalsdk.core.services.sdk_install.domain.paths import get_expected_global_sdk_path
from globalsdk.core.services.sdk_install.domain.version import is_fully_specified, parse_version
from globalsdk.core.services.sdk_install.execution.command_executor import CommandExecutor
from globalsdk.core.services.sdk_install.execution.distro_provider import DistroSdkProvider
from globalsdk.core.services.sdk_install.orchestration.win_mac_installer import WinMacGlobalInstaller
from globalsdk.core.services.sdk_install.resolver.distro_resolver import resolve_distro_provider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VersionResolver(Protocol):
    """Turns a partial request ("8.0") into a fully-specified version."""

    async def resolve_version(self, requested: str) -> str: ...

    async def list_available_versions(self) -> list[AvailableVersion]: ...


class GlobalSdkOrchestrator:
    """Façade over every global install path.

    Args:
        settings: Installer settings (scratch dir, timeouts, policy).
        executor: Command executor; built from settings when omitted.
        events: Event sink; logs events when omitted.
        version_resolver: Used only for versions that are not fully specified.
        system: ``platform.system()`` value; defaults to the host.
    """

    def __init__(
        self,
        settings: InstallerSettings | None = None,
        *,
        executor: CommandExecutor | None = None,
        events: EventSink | None = None,
        version_resolver: VersionResolver | None = None,
        system: str | None = None,
    ) -> None:
        self.settings = settings or InstallerSettings()
        self._system = system or platform.system()
        self._executor = executor or CommandExecutor(
            sudo_password=os.environ.get(self.settings.sudo_password_env, "")
            if self.settings.sudo_password_env
            else "",
            system=self._system,
        )
        self._events = events if events is not None else LoggingEventSink()
        self._version_resolver = version_resolver
        self._emit = make_emitter(self._events, "orchestrator")
        self._provider: DistroSdkProvider | None = None

    @property
    def system(self) -> str:
        return self._system

    async def _with_timeout(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, self.settings.install_timeout)
        except asyncio.TimeoutError as exc:
            self._emit("install-timeout", f"{operation} exceeded {self.settings.install_timeout}s")
            raise InstallTimeoutError(
                f"{operation} did not finish within {self.settings.install_timeout}s"
            ) from exc

    def _require_linux(self) -> None:
        if self._system != LINUX:
            self._emit("unsupported-platform", f"Distro operations need Linux, not {self._system}")
            raise UnsupportedPlatformError(
                f"Distro package operations are only available on Linux, not {self._system}"
            )

    def distro_provider(self) -> DistroSdkProvider:
        """The provider for this Linux host (resolved once)."""
        self._require_linux()
        if self._provider is None:
            self._provider = resolve_distro_provider(
                self._executor,
                os_release_path=self.settings.os_release_path,
                events=self._events,
            )
        return self._provider

    async def resolve_version(self, requested: str) -> str:
        """Fully-specified version for ``requested``."""
        if is_fully_specified(requested) or self._version_resolver is None:
            parse_version(requested)
            return requested
        resolved = await self._version_resolver.resolve_version(requested)
        parse_version(resolved)
        logger.info("Resolved %s → %s", requested, resolved)
        return resolved

    # ── Install ─────────────────────────────────────────────────

    async def install(self, context: InstallContext) -> InstallResult:
        """Install a global SDK on this host.

        Raises:
            UnsupportedPlatformError: Host OS or distro version not handled.
            ConflictingInstallError: A blocking SDK is already present.
            InstallTimeoutError: The install exceeded ``install_timeout``.
        """
        version = await self.resolve_version(context.version)
        if version != context.version:
            context = context.model_copy(update={"version": version})

        logger.info("Installing .NET SDK %s on %s", version, self._system)

        if self._system in (WINDOWS, MACOS):
            if not context.installer_url:
                raise ValueError("An installer_url is required on Windows and macOS")
            self._check_download_scheme(context.installer_url)
            installer = WinMacGlobalInstaller(
                context,
                self.settings.scratch_dir,
                self._executor,
                self._events,
                system=self._system,
                download_timeout=self.settings.download_timeout,
            )
            return await self._with_timeout("install", installer.install_sdk())

        if self._system == LINUX:
            provider = self.distro_provider()
            await self._check_linux_preconditions(provider, version)
            ok = await self._with_timeout("install", provider.install_dotnet(context))
            return InstallResult(
                version=version,
                output=f"{provider.variant.package_manager} install {'succeeded' if ok else 'failed'}",
                exit_code=0 if ok else 1,
                verified=ok,
            )

        self._emit("unsupported-platform", f"No global install path for {self._system}")
        raise UnsupportedPlatformError(f"The operating system is unsupported: {self._system}")

    def _check_download_scheme(self, url: str) -> None:
        if url.lower().startswith("https://") or self.settings.allow_insecure_downloads:
            return
        self._emit("insecure-download-refused", url)
        raise DownloadError(
            f"Refusing to download an installer over a non-HTTPS URL: {url}"
        )

    async def _check_linux_preconditions(self, provider: DistroSdkProvider, version: str) -> None:
        status = provider.get_dotnet_version_support_status(version)
        if not status.supported and not self.settings.allow_unsupported:
            self._emit(
                "unsupported-version",
                f"{version} is {status.value} on {provider.variant.label}",
                requested_version=version,
                support_status=status.value,
            )
            raise UnsupportedPlatformError(
                f".NET {version} is {status.value} on {provider.variant.label}; "
                "set allow_unsupported to install anyway"
            )

        path = await provider.get_installed_global_dotnet_path_if_exists()
        expected_root = provider.get_expected_dotnet_installation_directory().rstrip("/")
        if path is not None and not path.startswith(expected_root + "/"):
            existing = await provider.get_installed_global_dotnet_version_if_exists()
            self._emit(
                "custom-install-exists",
                f"dotnet at {path} is not managed by {provider.variant.package_manager}",
                path=path,
                existing_version=existing,
            )
            raise CustomInstallExistsError(existing or "", path, version)

    # ── Queries ─────────────────────────────────────────────────

    async def installed_versions(self) -> list[str]:
        """Globally installed SDK versions (registry on Windows, distro elsewhere)."""
        if self._system == WINDOWS:
            return get_global_sdk_versions_installed()
        if self._system == LINUX:
            return await self.distro_provider().get_installed_dotnet_versions()
        if self._system == MACOS:
            return _list_macos_sdks(host_arch())
        raise UnsupportedPlatformError(f"The operating system is unsupported: {self._system}")

    async def installed_records(self, arch: str | None = None) -> list[InstallationRecord]:
        """Installed SDKs with the directory each one lives in.

        On Windows each record carries the architecture of the registry
        hive it came from, and ``arch`` (when given) keeps only that
        hive.  Elsewhere every SDK belongs to ``arch`` (default: host).
        """
        if self._system == WINDOWS:
            installs = [
                (version, hive) for version, hive in get_global_sdk_installs()
                if arch is None or hive == arch
            ]
        else:
            arch = arch or host_arch()
            installs = [(version, arch) for version in await self.installed_versions()]
        return [
            InstallationRecord(
                version=version,
                architecture=sdk_arch,
                install_dir=self.expected_path(version, sdk_arch),
            )
            for version, sdk_arch in installs
        ]

    async def find_conflict(self, version: str) -> str | None:
        """Installed version that would block ``version``, if any."""
        return find_conflicting_version(version, await self.installed_versions())

    def expected_path(self, version: str, arch: str | None = None) -> str:
        """Where ``version`` lives once installed globally."""
        if self._system == LINUX:
            root = self.distro_provider().get_expected_dotnet_installation_directory()
            return f"{root.rstrip('/')}/sdk/{version}"
        return get_expected_global_sdk_path(version, arch or host_arch(), self._system)

    # ── Linux lifecycle ─────────────────────────────────────────

    async def upgrade(self, version: str) -> bool:
        provider = self.distro_provider()
        return await self._with_timeout("upgrade", provider.upgrade_dotnet(version))

    async def uninstall(self, version: str) -> bool:
        provider = self.distro_provider()
        return await self._with_timeout("uninstall", provider.uninstall_dotnet(version))


def _list_macos_sdks(arch: str) -> list[str]:
    # Each SDK is a directory named after its version.
    sdk_root = Path(get_expected_global_sdk_path("_", arch, MACOS)).parent
    if not sdk_root.is_dir():
        return []
    names = [p.name for p in sdk_root.iterdir() if p.is_dir() and is_fully_specified(p.name)]
    return sorted(names, key=parse_version)

