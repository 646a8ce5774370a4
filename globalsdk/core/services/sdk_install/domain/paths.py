"""
L1 Domain — Expected global SDK locations (pure).

Paths are built with the *target* OS's path flavour, so the result is
the same whichever machine computes it.  Linux has no entry here: its
layout belongs to the distro provider.
"""

from __future__ import annotations

import platform
from pathlib import PurePosixPath, PureWindowsPath

from globalsdk.core.services.sdk_install.data.constants import (
    ARCH_ALIASES,
    MACOS,
    MACOS_SDK_ROOT,
    MACOS_X64_SDK_ROOT,
    WINDOWS,
    WINDOWS_SDK_ROOTS,
)
from globalsdk.core.services.sdk_install.domain.errors import UnsupportedPlatformError


def normalize_arch(arch: str) -> str:
    """Map ``amd64``/``x86_64``/``x32``… to dotnet's arch names."""
    key = (arch or "").strip().lower()
    return ARCH_ALIASES.get(key, key)


def get_expected_global_sdk_path(
    version: str,
    arch: str,
    system: str | None = None,
) -> str:
    """Where a global SDK of ``version``/``arch`` lives once installed.

    Args:
        version: Fully-specified SDK version, e.g. ``"7.0.103"``.
        arch: Architecture the SDK was installed for.
        system: ``platform.system()`` value; defaults to the host.

    Raises:
        UnsupportedPlatformError: For any OS other than Windows or macOS,
            or a Windows architecture without a known root.
    """
    system = system or platform.system()
    arch = normalize_arch(arch)

    if system == WINDOWS:
        root = WINDOWS_SDK_ROOTS.get(arch)
        if root is None:
            raise UnsupportedPlatformError(
                f"No known global SDK location for Windows {arch or '(no arch)'}"
            )
        return str(PureWindowsPath(root, version, "dotnet.dll"))

    if system == MACOS:
        # The x64 tree is only known for certain on Apple-silicon hosts
        # running x64 SDKs; it is assumed to be the same elsewhere.
        root = MACOS_X64_SDK_ROOT if arch == "x64" else MACOS_SDK_ROOT
        return str(PurePosixPath(root, version))

    raise UnsupportedPlatformError(f"The operating system is unsupported: {system}")
