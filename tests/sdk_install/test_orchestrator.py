"""
Tests for the top-level orchestrator — platform dispatch, policy checks,
timeouts and version resolution.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from globalsdk.core.models.install import AvailableVersion, InstallContext
from globalsdk.core.services.sdk_install.domain.errors import (
    ConflictingInstallError,
    CustomInstallExistsError,
    DownloadError,
    InstallTimeoutError,
    MalformedVersionError,
    UnsupportedPlatformError,
)
from globalsdk.core.services.sdk_install.execution import distro_provider as provider_mod
from globalsdk.core.services.sdk_install.orchestration import orchestrator as orch_mod
from globalsdk.core.services.sdk_install.orchestration import win_mac_installer
from globalsdk.core.services.sdk_install.orchestration.orchestrator import GlobalSdkOrchestrator
from tests.sdk_install.simulated_hosts import OS_RELEASE, FakeCommandExecutor

_URL = "https://builds.example.com/dotnet-sdk-8.0.204-win-x64.exe"
_APT_SEARCH_HIT = "dotnet-sdk-8.0 - .NET 8.0 Software Development Kit\n"


class _Resolver:
    def __init__(self, resolved: str) -> None:
        self.resolved = resolved
        self.asked: list[str] = []

    async def resolve_version(self, requested: str) -> str:
        self.asked.append(requested)
        return self.resolved

    async def list_available_versions(self) -> list[AvailableVersion]:
        return [AvailableVersion(version=self.resolved, channel_version="8.0", support_status="lts")]


@pytest.fixture
def stub_download(monkeypatch):
    calls: list[str] = []

    async def fake(url: str, dest: Path, *, timeout: float = 600, session=None) -> Path:
        calls.append(url)
        dest.write_bytes(b"installer")
        return dest

    monkeypatch.setattr(win_mac_installer, "download_file", fake)
    return calls


@pytest.fixture
def no_registry(monkeypatch):
    monkeypatch.setattr(win_mac_installer, "get_global_sdk_versions_installed", lambda: [])
    monkeypatch.setattr(orch_mod, "get_global_sdk_versions_installed", lambda: [])


@pytest.fixture
def ubuntu_settings(settings):
    settings.os_release_path.write_text(OS_RELEASE["ubuntu-22.04"])
    return settings


@pytest.fixture
def no_dotnet_on_path(monkeypatch):
    monkeypatch.setattr(provider_mod.shutil, "which", lambda name: None)


def _windows(settings, events, **kwargs) -> GlobalSdkOrchestrator:
    return GlobalSdkOrchestrator(
        settings,
        executor=FakeCommandExecutor(system="Windows", elevated=True),
        events=events,
        system="Windows",
        **kwargs,
    )


def _linux(settings, events, executor: FakeCommandExecutor | None = None) -> GlobalSdkOrchestrator:
    return GlobalSdkOrchestrator(
        settings,
        executor=executor or FakeCommandExecutor(),
        events=events,
        system="Linux",
    )


# ── Windows / macOS dispatch ────────────────────────────────────


class TestWinMacDispatch:

    def test_windows_install(self, settings, events, stub_download, no_registry):
        orch = _windows(settings, events)
        result = asyncio.run(orch.install(InstallContext(version="8.0.204", installer_url=_URL)))
        assert result.verified is True
        assert stub_download == [_URL]

    def test_windows_conflict_surfaces(self, settings, events, stub_download, monkeypatch):
        monkeypatch.setattr(win_mac_installer, "get_global_sdk_versions_installed", lambda: ["8.0.204"])
        orch = _windows(settings, events)
        with pytest.raises(ConflictingInstallError):
            asyncio.run(orch.install(InstallContext(version="8.0.204", installer_url=_URL)))
        assert stub_download == []

    def test_url_required(self, settings, events):
        with pytest.raises(ValueError):
            asyncio.run(_windows(settings, events).install(InstallContext(version="8.0.204")))

    def test_plain_http_refused(self, settings, events, stub_download):
        url = _URL.replace("https://", "http://")
        with pytest.raises(DownloadError, match="non-HTTPS"):
            asyncio.run(_windows(settings, events).install(InstallContext(version="8.0.204", installer_url=url)))
        assert stub_download == []
        assert events.names() == ["insecure-download-refused"]

    def test_plain_http_allowed_by_setting(self, settings, events, stub_download, no_registry):
        settings.allow_insecure_downloads = True
        url = _URL.replace("https://", "http://")
        asyncio.run(_windows(settings, events).install(InstallContext(version="8.0.204", installer_url=url)))
        assert stub_download == [url]

    def test_unsupported_os(self, settings, events):
        orch = GlobalSdkOrchestrator(settings, executor=FakeCommandExecutor(), events=events, system="FreeBSD")
        with pytest.raises(UnsupportedPlatformError):
            asyncio.run(orch.install(InstallContext(version="8.0.204", installer_url=_URL)))
        assert events.names() == ["unsupported-platform"]

    def test_timeout(self, settings, events, no_registry, monkeypatch):
        settings.install_timeout = 1

        async def slow(url, dest, *, timeout=600, session=None):
            await asyncio.sleep(30)

        monkeypatch.setattr(win_mac_installer, "download_file", slow)
        with pytest.raises(InstallTimeoutError):
            asyncio.run(_windows(settings, events).install(InstallContext(version="8.0.204", installer_url=_URL)))
        assert "install-timeout" in events.names()
        assert list(settings.scratch_dir.iterdir()) == []


# ── Version resolution ──────────────────────────────────────────


class TestResolveVersion:

    def test_partial_version_resolved(self, settings, events, stub_download, no_registry):
        resolver = _Resolver("8.0.204")
        orch = _windows(settings, events, version_resolver=resolver)
        result = asyncio.run(orch.install(InstallContext(version="8.0", installer_url=_URL)))
        assert resolver.asked == ["8.0"]
        assert result.version == "8.0.204"

    def test_full_version_not_sent_to_resolver(self, settings, events):
        resolver = _Resolver("8.0.999")
        orch = _windows(settings, events, version_resolver=resolver)
        assert asyncio.run(orch.resolve_version("8.0.204")) == "8.0.204"
        assert resolver.asked == []

    def test_partial_without_resolver(self, settings, events):
        with pytest.raises(MalformedVersionError):
            asyncio.run(_windows(settings, events).resolve_version("8.0"))

    def test_resolver_returning_garbage(self, settings, events):
        orch = _windows(settings, events, version_resolver=_Resolver("latest"))
        with pytest.raises(MalformedVersionError):
            asyncio.run(orch.resolve_version("8.0"))


# ── Linux dispatch ──────────────────────────────────────────────


class TestLinuxDispatch:

    def test_install(self, ubuntu_settings, events, no_dotnet_on_path):
        executor = FakeCommandExecutor()
        executor.respond("apt-cache search", stdout=_APT_SEARCH_HIT)
        result = asyncio.run(_linux(ubuntu_settings, events, executor).install(InstallContext(version="8.0.100")))
        assert result.verified is True
        assert result.exit_code == 0
        assert "apt-get install -y dotnet-sdk-8.0" in executor.elevated_commands()

    def test_install_failure_is_a_result(self, ubuntu_settings, events, no_dotnet_on_path):
        executor = FakeCommandExecutor()
        executor.respond("apt-cache search", stdout="")
        result = asyncio.run(_linux(ubuntu_settings, events, executor).install(InstallContext(version="8.0.100")))
        assert result.verified is False
        assert result.exit_code == 1

    def test_unsupported_version_refused(self, ubuntu_settings, events, no_dotnet_on_path):
        executor = FakeCommandExecutor()
        with pytest.raises(UnsupportedPlatformError, match="unsupported"):
            asyncio.run(_linux(ubuntu_settings, events, executor).install(InstallContext(version="5.0.100")))
        assert executor.calls == []
        assert events.names() == ["unsupported-version"]

    def test_unsupported_version_allowed_by_setting(self, ubuntu_settings, events, no_dotnet_on_path):
        ubuntu_settings.allow_unsupported = True
        executor = FakeCommandExecutor()
        executor.respond("apt-cache search", stdout="dotnet-sdk-5.0 - old\n")
        result = asyncio.run(_linux(ubuntu_settings, events, executor).install(InstallContext(version="5.0.100")))
        assert result.verified is True

    def test_custom_install_blocks(self, ubuntu_settings, events, monkeypatch):
        monkeypatch.setattr(provider_mod.shutil, "which", lambda name: "/opt/custom-dotnet/dotnet")
        executor = FakeCommandExecutor()
        executor.respond("--version", stdout="8.0.100\n")

        with pytest.raises(CustomInstallExistsError) as exc_info:
            asyncio.run(_linux(ubuntu_settings, events, executor).install(InstallContext(version="8.0.100")))

        assert exc_info.value.path == "/opt/custom-dotnet/dotnet"
        assert exc_info.value.conflicting_version == "8.0.100"
        assert executor.elevated_commands() == []
        assert events.names() == ["custom-install-exists"]

    def test_unknown_distro(self, settings, events):
        settings.os_release_path.write_text(OS_RELEASE["debian-12"])
        with pytest.raises(UnsupportedPlatformError):
            asyncio.run(_linux(settings, events).install(InstallContext(version="8.0.100")))
        assert "unknown-distro" in events.names()

    def test_provider_is_cached(self, ubuntu_settings, events):
        orch = _linux(ubuntu_settings, events)
        assert orch.distro_provider() is orch.distro_provider()

    def test_distro_provider_needs_linux(self, settings, events):
        with pytest.raises(UnsupportedPlatformError):
            _windows(settings, events).distro_provider()

    def test_upgrade_and_uninstall(self, ubuntu_settings, events, monkeypatch):
        monkeypatch.setattr(provider_mod.shutil, "which", lambda name: "/usr/lib/dotnet/dotnet")
        executor = FakeCommandExecutor()
        executor.respond("--list-sdks", stdout="8.0.100 [/usr/lib/dotnet/sdk]\n")
        executor.respond("apt-cache policy", stdout="Candidate: 8.0.105-0ubuntu1\n")
        orch = _linux(ubuntu_settings, events, executor)

        assert asyncio.run(orch.upgrade("8.0.100")) is True
        assert asyncio.run(orch.uninstall("8.0.100")) is True
        assert executor.elevated_commands() == [
            "apt-get install --only-upgrade -y dotnet-sdk-8.0",
            "apt-get remove -y dotnet-sdk-8.0",
        ]


# ── Queries ─────────────────────────────────────────────────────


class TestQueries:

    def test_windows_installed_and_conflict(self, settings, events, monkeypatch):
        monkeypatch.setattr(orch_mod, "get_global_sdk_versions_installed", lambda: ["7.0.203", "8.0.100"])
        orch = _windows(settings, events)
        assert asyncio.run(orch.installed_versions()) == ["7.0.203", "8.0.100"]
        assert asyncio.run(orch.find_conflict("7.0.201")) == "7.0.203"
        assert asyncio.run(orch.find_conflict("7.0.204")) is None

    def test_windows_records(self, settings, events, monkeypatch):
        monkeypatch.setattr(orch_mod, "get_global_sdk_installs", lambda: [("6.0.100", "x86"), ("8.0.100", "x64")])
        x86, x64 = asyncio.run(_windows(settings, events).installed_records())
        assert (x86.version, x86.architecture) == ("6.0.100", "x86")
        assert x86.install_dir == "C:\\Program Files (x86)\\dotnet\\sdk\\6.0.100\\dotnet.dll"
        assert (x64.version, x64.architecture) == ("8.0.100", "x64")
        assert x64.install_dir == "C:\\Program Files\\dotnet\\sdk\\8.0.100\\dotnet.dll"

    def test_windows_records_for_one_arch(self, settings, events, monkeypatch):
        monkeypatch.setattr(orch_mod, "get_global_sdk_installs", lambda: [("6.0.100", "x86"), ("8.0.100", "x64")])
        records = asyncio.run(_windows(settings, events).installed_records("x86"))
        assert [(r.version, r.architecture) for r in records] == [("6.0.100", "x86")]

    def test_macos_lists_sdk_directories(self, settings, events, tmp_path, monkeypatch):
        sdk_root = tmp_path / "sdk"
        for name in ("8.0.100", "7.0.203", "NuGetFallbackFolder"):
            (sdk_root / name).mkdir(parents=True)
        monkeypatch.setattr(
            orch_mod, "get_expected_global_sdk_path", lambda version, arch, system=None: str(sdk_root / version)
        )
        orch = GlobalSdkOrchestrator(settings, executor=FakeCommandExecutor(), events=events, system="Darwin")
        assert asyncio.run(orch.installed_versions()) == ["7.0.203", "8.0.100"]

    def test_linux_expected_path(self, ubuntu_settings, events):
        assert _linux(ubuntu_settings, events).expected_path("8.0.100") == "/usr/lib/dotnet/sdk/8.0.100"

    def test_windows_expected_path(self, settings, events):
        assert _windows(settings, events).expected_path("8.0.100", "x86") == (
            "C:\\Program Files (x86)\\dotnet\\sdk\\8.0.100\\dotnet.dll"
        )


class TestDefaults:

    def test_sudo_password_from_env(self, settings, monkeypatch):
        monkeypatch.setenv("GSDK_TEST_SUDO", "s3cret")
        settings.sudo_password_env = "GSDK_TEST_SUDO"
        orch = GlobalSdkOrchestrator(settings, system="Linux")
        assert orch._executor._sudo_password == "s3cret"

    def test_no_password_env(self, settings):
        orch = GlobalSdkOrchestrator(settings, system="Linux")
        assert orch._executor._sudo_password == ""
