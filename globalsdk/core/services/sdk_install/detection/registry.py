"""
L3 Detection — Globally installed SDKs on Windows.

Read-only probe of the two registry hives that record 32-bit and
64-bit SDK installs.  Runs synchronously: the queries are fast and
callers are already inside an async task.
"""

from __future__ import annotations

import logging
import os
import subprocess

from globalsdk.core.services.sdk_install.data.constants import REG_EXE, REGISTRY_SDK_HIVES
from globalsdk.core.services.sdk_install.domain.registry_parse import (
    extract_versions_from_registry_output,
)

logger = logging.getLogger(__name__)


def _reg_exe() -> str:
    return os.path.expandvars(REG_EXE)


def query_registry_key(key: str) -> list[str]:
    """SDK versions recorded under one registry key.

    A missing key exits non-zero; that means no SDKs of that bitness
    are installed and yields an empty list.  So does a ``reg.exe`` that
    cannot be started or does not answer in time.
    """
    try:
        r = subprocess.run(
            [_reg_exe(), "query", key],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Registry query failed for %s: %s", key, exc)
        return []
    if r.returncode != 0:
        logger.debug("Registry key not present: %s", key)
        return []
    return extract_versions_from_registry_output(r.stdout)


def get_global_sdk_installs() -> list[tuple[str, str]]:
    """Every globally installed SDK as ``(version, architecture)``.

    The architecture is the hive the version was recorded under, x86
    first then x64.  A version present in both hives appears once per
    hive: each is a separate install.
    """
    installs = [
        (version, arch)
        for arch, key in REGISTRY_SDK_HIVES
        for version in query_registry_key(key)
    ]
    logger.info(
        "Found %d globally installed SDK(s): %s",
        len(installs),
        ", ".join(f"{v} ({a})" for v, a in installs) or "none",
    )
    return installs


def get_global_sdk_versions_installed() -> list[str]:
    """Every globally installed SDK version, x86 hive first then x64."""
    return [version for version, _ in get_global_sdk_installs()]
