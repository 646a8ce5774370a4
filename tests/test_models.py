"""
Tests for installer models.
"""

import pytest
from pydantic import ValidationError

from globalsdk.core.models import (
    AvailableVersion,
    CommandResult,
    InstallContext,
    InstallResult,
    SupportStatus,
)


class TestInstallContext:

    def test_defaults(self):
        ctx = InstallContext(version="8.0.100")
        assert ctx.installer_url is None
        assert ctx.package_id is None
        assert ctx.architecture == "x64"
        assert ctx.requires_elevation is True

    def test_frozen(self):
        ctx = InstallContext(version="8.0.100")
        with pytest.raises(ValidationError):
            ctx.version = "9.0.100"


class TestCommandResult:

    def test_ok(self):
        assert CommandResult(command=["true"], exit_code=0).ok

    def test_not_started(self):
        result = CommandResult(command=["missing"])
        assert result.exit_code is None
        assert not result.ok

    def test_timed_out_is_not_ok(self):
        assert not CommandResult(command=["x"], exit_code=0, timed_out=True).ok

    def test_output_skips_empty_streams(self):
        assert CommandResult(command=["x"], stdout="", stderr="err").output == "err"


class TestSupportStatus:

    def test_supported(self):
        assert SupportStatus.LTS.supported
        assert SupportStatus.STS.supported
        assert not SupportStatus.UNSUPPORTED.supported
        assert not SupportStatus.UNKNOWN.supported

    def test_values(self):
        assert SupportStatus("lts") is SupportStatus.LTS


class TestResults:

    def test_install_result_unverified_by_default(self):
        assert InstallResult(version="8.0.100").verified is False

    def test_available_version_status_restricted(self):
        with pytest.raises(ValidationError):
            AvailableVersion(version="8.0.100", channel_version="8.0", support_status="preview")
