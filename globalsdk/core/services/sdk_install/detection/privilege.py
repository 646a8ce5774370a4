"""
L3 Detection — Privilege detection.

Read-only probe: is this process already running with admin/root
rights?  Fails closed — anything unexpected means "not elevated".
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess

from globalsdk.core.services.sdk_install.data.constants import WINDOWS

logger = logging.getLogger(__name__)


def is_elevated(system: str | None = None) -> bool:
    """Whether the current process holds elevated privileges.

    Windows: ``net session`` only succeeds in an elevated session; any
    failure, including the command being absent, counts as not elevated.
    Elsewhere: effective uid 0.
    """
    system = system or platform.system()

    if system != WINDOWS:
        geteuid = getattr(os, "geteuid", None)
        return geteuid is not None and geteuid() == 0

    try:
        r = subprocess.run(
            ["net", "session"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Elevation probe failed: %s", exc)
        return False
    return r.returncode == 0
