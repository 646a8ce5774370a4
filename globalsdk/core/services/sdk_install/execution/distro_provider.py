"""
L4 Execution — Linux distro SDK provider.

One capability class for every distro.  What differs between distros
(package manager syntax, package names, install root, support table)
lives in a ``DistroVariant``; this class only sequences the steps.

Every subprocess goes through the injected ``CommandExecutor``;
privileged steps ask it for ``elevate=True``.  There is no other way
to gain root from here.
"""

from __future__ import annotations

import logging
import os
import re
import shutil

from globalsdk.core.models.install import InstallContext, SupportStatus
from globalsdk.core.services.events import EventSink, make_emitter
from globalsdk.core.services.sdk_install.domain.compat import find_conflicting_version
from globalsdk.core.services.sdk_install.domain.distro_variant import CommandName, DistroVariant
from globalsdk.core.services.sdk_install.domain.errors import ConflictingInstallError
from globalsdk.core.services.sdk_install.domain.version import (
    get_feature_band,
    get_major_minor,
    parse_version,
)
from globalsdk.core.services.sdk_install.execution.command_executor import CommandExecutor

logger = logging.getLogger(__name__)

# `dotnet --list-sdks` rows: "7.0.119 [/usr/lib/dotnet/sdk]"
_LIST_SDKS_RE = re.compile(r"^\s*(\S+)\s+\[(.+)\]\s*$")


class DistroSdkProvider:
    """Install, upgrade, uninstall and detect the SDK on one distro."""

    def __init__(
        self,
        variant: DistroVariant,
        executor: CommandExecutor,
        events: EventSink | None = None,
    ) -> None:
        self.variant = variant
        self._executor = executor
        self._emit = make_emitter(events, f"distro:{variant.key}")

    def __repr__(self) -> str:
        return f"DistroSdkProvider({self.variant.key})"

    async def _run(self, name: CommandName, version: str, package: str | None = None):
        cmd = self.variant.command(name, version, package)
        return await self._executor.execute(cmd, elevate=self.variant.needs_elevation(name))

    # ── Detection ───────────────────────────────────────────────

    async def get_installed_dotnet_versions(self) -> list[str]:
        """Fully-specified SDK versions installed under the distro's root."""
        dotnet = self._dotnet_executable()
        if dotnet is None:
            return []

        result = await self._executor.execute([dotnet, "--list-sdks"])
        if not result.ok:
            return []

        expected_root = self.get_expected_dotnet_installation_directory().rstrip("/")
        versions: list[str] = []
        for line in result.stdout.splitlines():
            match = _LIST_SDKS_RE.match(line)
            if not match:
                continue
            version, sdk_dir = match.groups()
            if os.path.dirname(sdk_dir.rstrip("/")) == expected_root:
                versions.append(version)
        return versions

    async def get_installed_global_dotnet_path_if_exists(self) -> str | None:
        """Resolved path of the ``dotnet`` on PATH, or None."""
        dotnet = shutil.which("dotnet")
        if dotnet is None:
            return None
        return os.path.realpath(dotnet)

    async def get_installed_global_dotnet_version_if_exists(self) -> str | None:
        """Version reported by the ``dotnet`` on PATH, or None."""
        dotnet = shutil.which("dotnet")
        if dotnet is None:
            return None
        result = await self._executor.execute([dotnet, "--version"])
        version = result.stdout.strip()
        return version if result.ok and version else None

    def get_expected_dotnet_installation_directory(self) -> str:
        return self.variant.install_dir

    async def dotnet_package_exists_on_system(self, version: str, package: str | None = None) -> bool:
        """Whether the repositories offer ``package`` (default: the one for
        ``version``'s major.minor)."""
        package = package or self.variant.package_name(version)
        result = await self._run("search", version, package)
        return result.ok and re.search(rf"^{re.escape(package)}\b", result.stdout, re.M) is not None

    def get_dotnet_version_support_status(self, version: str) -> SupportStatus:
        return self.variant.support_status(version)

    def is_dotnet_version_supported(self, version: str) -> bool:
        return self.get_dotnet_version_support_status(version).supported

    def _dotnet_executable(self) -> str | None:
        candidate = os.path.join(self.get_expected_dotnet_installation_directory(), "dotnet")
        if os.path.isfile(candidate):
            return candidate
        return shutil.which("dotnet")

    # ── Mutations ───────────────────────────────────────────────

    async def install_dotnet(self, context: InstallContext) -> bool:
        """Install the SDK with the distro package manager.

        Raises:
            ConflictingInstallError: A same-band SDK at the same or a
                newer patch is already installed.
        """
        version = context.version
        installed = await self.get_installed_dotnet_versions()
        conflict = find_conflicting_version(version, installed)
        if conflict is not None:
            self._emit(
                "conflicting-install",
                f"{conflict} already installed; refusing to install {version}",
                requested_version=version,
                conflicting_version=conflict,
            )
            raise ConflictingInstallError(conflict, version)

        package = context.package_id or self.variant.package_name(version)
        if self.variant.refresh:
            await self._run("refresh", version, package)

        if not await self.dotnet_package_exists_on_system(version, package):
            self._emit(
                "package-not-found",
                f"{package} is not available on {self.variant.label}",
                requested_version=version,
                package=package,
            )
            return False

        self._emit("install-started", f"Installing {package}", requested_version=version)
        result = await self._run("install", version, package)
        if not result.ok:
            self._emit(
                "install-failed",
                f"{package} install exited {result.exit_code}",
                requested_version=version,
                stderr=result.stderr[-500:],
            )
            return False

        self._emit("install-completed", f"Installed {package}", requested_version=version)
        return True

    async def upgrade_dotnet(self, version: str) -> bool:
        """Upgrade ``version`` to the newest patch in its feature band.

        Returns False (without touching the system) if the repository
        candidate would move to another feature band or major.minor.
        """
        current = parse_version(version)
        package = self.variant.package_name(version)

        result = await self._run("candidate", version, package)
        candidate = self.variant.parse_candidate(result.stdout) if result.ok else None
        if candidate is None:
            logger.info("No upgrade candidate for %s on %s", package, self.variant.label)
            return True

        if (
            get_major_minor(candidate) != current.major_minor
            or get_feature_band(candidate) != current.feature_band
        ):
            self._emit(
                "upgrade-refused",
                f"Candidate {candidate} is outside the {current.major_minor} "
                f"band {current.feature_band}xx of {version}",
                requested_version=version,
                candidate=candidate,
            )
            return False

        if parse_version(candidate).band_patch <= current.band_patch:
            logger.info("%s is already the newest in its band (%s)", version, candidate)
            return True

        result = await self._run("upgrade", version, package)
        if result.ok:
            self._emit("upgrade-completed", f"{version} → {candidate}", requested_version=version)
        else:
            self._emit(
                "upgrade-failed",
                f"{package} upgrade exited {result.exit_code}",
                requested_version=version,
            )
        return result.ok

    async def uninstall_dotnet(self, version: str) -> bool:
        """Remove exactly ``version``; False if it is not installed."""
        parse_version(version)
        installed = await self.get_installed_dotnet_versions()
        if version not in installed:
            logger.info("%s is not installed by %s; nothing to remove", version, self.variant.label)
            return False

        package = self.variant.package_name(version)
        result = await self._run("uninstall", version, package)
        self._emit(
            "uninstall-completed" if result.ok else "uninstall-failed",
            f"{package} removal exited {result.exit_code}",
            requested_version=version,
        )
        return result.ok
