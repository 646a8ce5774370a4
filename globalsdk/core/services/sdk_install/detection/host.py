"""
L3 Detection — Host operating system and architecture.
"""

from __future__ import annotations

import platform

from globalsdk.core.services.sdk_install.domain.paths import normalize_arch


def host_system() -> str:
    """``Windows``, ``Darwin``, ``Linux``… as ``platform.system()`` reports it."""
    return platform.system()


def host_arch() -> str:
    """Host architecture in dotnet naming (``x64``, ``x86``, ``arm64``)."""
    return normalize_arch(platform.machine())
