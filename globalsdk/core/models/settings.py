"""
Installer settings — loaded from globalsdk.yml.

Every field has a default so a machine without a config file still
gets a working installer.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


def _default_scratch_dir() -> Path:
    return Path.home() / ".globalsdk" / "installers"


class InstallerSettings(BaseModel):
    """Runtime knobs for the global SDK installer."""

    scratch_dir: Path = Field(default_factory=_default_scratch_dir)
    install_timeout: int = 1800         # seconds, whole install request
    download_timeout: int = 600         # seconds, installer download
    allow_unsupported: bool = False     # install versions the distro does not support
    allow_insecure_downloads: bool = False
    os_release_path: Path = Path("/etc/os-release")
    sudo_password_env: str = ""         # env var holding a sudo password, if any

    @field_validator("scratch_dir", mode="before")
    @classmethod
    def _expand_scratch(cls, value: str | Path) -> Path:
        return Path(value).expanduser()

    @field_validator("install_timeout", "download_timeout")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeouts must be positive")
        return value
