"""
Tests for configuration loading — globalsdk.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from globalsdk.core.config.loader import ConfigError, find_config_file, load_settings
from globalsdk.core.models.settings import InstallerSettings


@pytest.fixture
def flat_config(tmp_path: Path) -> Path:
    """Create a flat globalsdk.yml in a temp directory."""
    content = textwrap.dedent("""\
        scratch_dir: ~/sdk-scratch
        install_timeout: 900
        allow_unsupported: true
        sudo_password_env: GSDK_SUDO
    """)
    path = tmp_path / "globalsdk.yml"
    path.write_text(content)
    return path


@pytest.fixture
def wrapped_config(tmp_path: Path) -> Path:
    """Create a globalsdk.yml with settings under an 'installer:' key."""
    content = textwrap.dedent("""\
        installer:
          download_timeout: 120
          allow_insecure_downloads: true
    """)
    path = tmp_path / "globalsdk.yml"
    path.write_text(content)
    return path


class TestLoadSettings:
    """Tests for load_settings."""

    def test_flat(self, flat_config: Path):
        settings = load_settings(flat_config)
        assert settings.install_timeout == 900
        assert settings.allow_unsupported is True
        assert settings.sudo_password_env == "GSDK_SUDO"
        assert settings.scratch_dir == Path.home() / "sdk-scratch"

    def test_wrapped(self, wrapped_config: Path):
        settings = load_settings(wrapped_config)
        assert settings.download_timeout == 120
        assert settings.allow_insecure_downloads is True
        assert settings.install_timeout == 1800

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "globalsdk.yml"
        path.write_text("")
        assert load_settings(path) == InstallerSettings()

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "globalsdk.yml"
        path.write_text("install_timeout: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "globalsdk.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_invalid_value(self, tmp_path: Path):
        path = tmp_path / "globalsdk.yml"
        path.write_text("install_timeout: -5\n")
        with pytest.raises(ConfigError, match="Invalid installer configuration"):
            load_settings(path)

    def test_no_file_anywhere_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            "globalsdk.core.config.loader.find_config_file", lambda start_dir=None: None
        )
        assert load_settings() == InstallerSettings()


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_walks_up(self, flat_config: Path):
        nested = flat_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == flat_config.resolve()

    def test_found_in_start_dir(self, flat_config: Path):
        assert find_config_file(flat_config.parent) == flat_config.resolve()


class TestSettingsDefaults:

    def test_defaults(self):
        settings = InstallerSettings()
        assert settings.install_timeout == 1800
        assert settings.download_timeout == 600
        assert settings.allow_unsupported is False
        assert settings.allow_insecure_downloads is False
        assert settings.scratch_dir == Path.home() / ".globalsdk" / "installers"
