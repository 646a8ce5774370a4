"""
L3 Detection — Running Linux distribution.

Reads ``/etc/os-release`` (or the path given) into a ``DistroInfo``.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from globalsdk.core.services.sdk_install.domain.errors import UnknownDistroError

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


@dataclass(frozen=True)
class DistroInfo:
    """Identity of a Linux distribution, as os-release reports it."""

    id: str
    version_id: str
    pretty_name: str = ""
    id_like: tuple[str, ...] = field(default_factory=tuple)

    @property
    def major_version(self) -> str:
        return self.version_id.split(".", 1)[0]


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release ``KEY=value`` lines; quoting follows shell rules."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip().strip('"').strip("'")]
        fields[key.strip()] = parts[0] if parts else ""
    return fields


def detect_distro(os_release_path: Path | None = None) -> DistroInfo:
    """Identify the running distribution.

    Raises:
        UnknownDistroError: If os-release is missing or has no ``ID``.
    """
    path = os_release_path or OS_RELEASE_PATH
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        raise UnknownDistroError("unknown", "") from exc

    fields = parse_os_release(text)
    distro_id = fields.get("ID", "").lower()
    if not distro_id:
        raise UnknownDistroError("unknown", fields.get("VERSION_ID", ""))

    info = DistroInfo(
        id=distro_id,
        version_id=fields.get("VERSION_ID", ""),
        pretty_name=fields.get("PRETTY_NAME", ""),
        id_like=tuple(fields.get("ID_LIKE", "").lower().split()),
    )
    logger.debug("Detected distro %s %s", info.id, info.version_id)
    return info
