"""
L1 Domain — Distro variant schema and helpers (pure).

Validates a ``DISTRO_VARIANTS`` entry into a typed, frozen model and
answers the questions a provider asks of it: which package, which
command, what support level.  No I/O, no subprocess.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from globalsdk.core.models.install import SupportStatus
from globalsdk.core.services.sdk_install.data.constants import ELEVATION_MARKERS
from globalsdk.core.services.sdk_install.domain.version import get_major_minor

CommandName = Literal["refresh", "install", "upgrade", "uninstall", "search", "candidate"]


def _mm_key(major_minor: str) -> tuple[int, int]:
    major, minor = major_minor.split(".", 1)
    return int(major), int(minor)


class DistroVariant(BaseModel):
    """One supported distro + version pair."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    id: str
    version: str
    match_major: bool = False
    package_manager: str
    package_template: str
    install_dir: str
    support: dict[str, Literal["lts", "sts"]] = Field(default_factory=dict)

    refresh: list[str] = Field(default_factory=list)
    install: list[str]
    upgrade: list[str]
    uninstall: list[str]
    search: list[str]
    candidate: list[str] = Field(default_factory=list)
    candidate_pattern: str = ""
    needs_sudo: list[str] = Field(default_factory=list)

    @field_validator("refresh", "install", "upgrade", "uninstall", "search", "candidate")
    @classmethod
    def _no_elevation_marker(cls, value: list[str]) -> list[str]:
        if value and value[0] in ELEVATION_MARKERS:
            raise ValueError(
                f"command must not start with '{value[0]}'; list it under needs_sudo"
            )
        return value

    @classmethod
    def from_entry(cls, key: str, entry: dict) -> DistroVariant:
        return cls.model_validate({"key": key, **entry})

    def matches(self, distro_id: str, version_id: str) -> bool:
        if distro_id.lower() != self.id:
            return False
        if self.match_major:
            return version_id.split(".", 1)[0] == self.version
        return version_id == self.version

    def package_name(self, version: str) -> str:
        return self.package_template.format(major_minor=get_major_minor(version))

    def command(self, name: CommandName, version: str, package: str | None = None) -> list[str]:
        """The argv for ``name`` with ``{package}`` filled in."""
        template: list[str] = getattr(self, name)
        pkg = package or self.package_name(version)
        return [part.replace("{package}", pkg) for part in template]

    def needs_elevation(self, name: CommandName) -> bool:
        return name in self.needs_sudo

    def parse_candidate(self, output: str) -> str | None:
        if not self.candidate_pattern:
            return None
        match = re.search(self.candidate_pattern, output)
        return match.group(1) if match else None

    def support_status(self, version: str) -> SupportStatus:
        """Support level this distro gives to ``version``'s major.minor."""
        major_minor = get_major_minor(version)
        status = self.support.get(major_minor)
        if status is not None:
            return SupportStatus(status)
        if not self.support:
            return SupportStatus.UNKNOWN
        newest = max(self.support, key=_mm_key)
        if _mm_key(major_minor) > _mm_key(newest):
            return SupportStatus.UNKNOWN
        return SupportStatus.UNSUPPORTED
