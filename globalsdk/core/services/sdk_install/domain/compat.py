"""
L1 Domain — Version compatibility comparator (pure).

Side-by-side installs of the same major.minor and feature band are not
allowed unless the request is a strictly newer patch.  The native
installers reject the other cases anyway; checking first avoids the
download and means installer error codes never need interpreting.

No I/O, no subprocess.
"""

from __future__ import annotations

from collections.abc import Iterable

from globalsdk.core.services.sdk_install.domain.version import SdkVersion, parse_version


def versions_conflict(requested: str | SdkVersion, installed: str | SdkVersion) -> bool:
    """Whether installing ``requested`` conflicts with ``installed``.

    Raises:
        MalformedVersionError: If either version does not parse.
    """
    a = requested if isinstance(requested, SdkVersion) else parse_version(requested)
    b = installed if isinstance(installed, SdkVersion) else parse_version(installed)
    return (
        a.major_minor == b.major_minor
        and a.feature_band == b.feature_band
        and a.band_patch <= b.band_patch
    )


def find_conflicting_version(requested: str, installed_versions: Iterable[str]) -> str | None:
    """Return the first installed version that conflicts, or None.

    Installed versions are checked in enumeration order, so the caller
    controls which one is reported when several conflict.
    """
    wanted = parse_version(requested)
    for installed in installed_versions:
        if versions_conflict(wanted, installed):
            return installed
    return None
