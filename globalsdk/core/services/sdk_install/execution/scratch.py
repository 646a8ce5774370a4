"""
L4 Execution — Scratch directory handling.

The scratch directory holds at most one downloaded installer.  It is
wiped before each download and after each install so stale installers
can never be picked up and re-run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from globalsdk.core.services.sdk_install.domain.errors import CleanupError

logger = logging.getLogger(__name__)


def wipe_directory(directory: Path) -> int:
    """Delete everything inside ``directory``, keeping the directory.

    A missing directory, or an entry that vanishes mid-wipe, counts as
    already wiped.  Any other failure stops the wipe.

    Returns:
        Number of entries removed.

    Raises:
        CleanupError: An entry could not be removed.
    """
    if not directory.exists():
        return 0

    removed = 0
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise CleanupError(f"Cannot list scratch directory {directory}: {exc}") from exc

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise CleanupError(f"Cannot remove {entry}: {exc}") from exc
        removed += 1

    if removed:
        logger.debug("Wiped %d item(s) from %s", removed, directory)
    return removed


def ensure_scratch_dir(directory: Path) -> Path:
    """Create the scratch directory if needed and return it."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CleanupError(f"Cannot create scratch directory {directory}: {exc}") from exc
    return directory
