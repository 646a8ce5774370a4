"""
L1 Domain — SDK version parsing (pure).

A fully-specified SDK version is ``major.minor.patch`` with an optional
pre-release suffix, e.g. ``7.0.203`` or ``8.0.100-preview.7.23376.3``.
The hundreds digit group of the patch is the *feature band*; the rest
is the patch within that band.

No I/O, no subprocess.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from globalsdk.core.services.sdk_install.domain.errors import MalformedVersionError

_VERSION_RE = re.compile(r"^\s*v?(\d+)\.(\d+)\.(\d+)([-+][0-9A-Za-z.\-+]*)?\s*$")
_MAJOR_MINOR_RE = re.compile(r"^\s*v?(\d+)\.(\d+)\s*$")


class SdkVersion(NamedTuple):
    """A parsed fully-specified SDK version."""

    major: int
    minor: int
    patch: int
    suffix: str = ""

    @property
    def major_minor(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def feature_band(self) -> int:
        return self.patch // 100

    @property
    def band_patch(self) -> int:
        return self.patch % 100

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"


def parse_version(text: str) -> SdkVersion:
    """Parse a fully-specified version.

    Raises:
        MalformedVersionError: If ``text`` is not at least
            ``major.minor.patch`` with numeric components.
    """
    match = _VERSION_RE.match(text or "")
    if not match:
        raise MalformedVersionError(
            f"'{text}' is not a fully-specified version (expected major.minor.patch)"
        )
    major, minor, patch, suffix = match.groups()
    return SdkVersion(int(major), int(minor), int(patch), suffix or "")


def is_fully_specified(text: str) -> bool:
    """Whether ``text`` parses as a fully-specified version."""
    return bool(_VERSION_RE.match(text or ""))


def get_major_minor(text: str) -> str:
    """``"7.0.203"`` → ``"7.0"``.  Also accepts a bare ``"7.0"``."""
    match = _MAJOR_MINOR_RE.match(text or "")
    if match:
        return f"{int(match.group(1))}.{int(match.group(2))}"
    return parse_version(text).major_minor


def get_feature_band(text: str) -> int:
    """``"7.0.203"`` → ``2``."""
    return parse_version(text).feature_band


def get_feature_band_patch(text: str) -> int:
    """``"7.0.203"`` → ``3``."""
    return parse_version(text).band_patch
