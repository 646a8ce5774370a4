"""
L2 Resolver — Pick the distro provider for the running Linux system.

Matching is exact on distro id and version (or major version where the
variant says so).  There is deliberately no "closest match" fallback:
guessing the wrong package manager syntax can damage package state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from globalsdk.core.services.events import EventSink, make_emitter
from globalsdk.core.services.sdk_install.data.distros import DISTRO_VARIANTS
from globalsdk.core.services.sdk_install.detection.distro import DistroInfo, detect_distro
from globalsdk.core.services.sdk_install.domain.distro_variant import DistroVariant
from globalsdk.core.services.sdk_install.domain.errors import UnknownDistroError
from globalsdk.core.services.sdk_install.execution.command_executor import CommandExecutor
from globalsdk.core.services.sdk_install.execution.distro_provider import DistroSdkProvider

logger = logging.getLogger(__name__)


def load_variants(table: dict[str, dict] | None = None) -> list[DistroVariant]:
    """Validate every entry of the variants table."""
    table = DISTRO_VARIANTS if table is None else table
    return [DistroVariant.from_entry(key, entry) for key, entry in table.items()]


def resolve_distro_variant(
    distro: DistroInfo,
    variants: list[DistroVariant] | None = None,
) -> DistroVariant:
    """The variant for ``distro``.

    Raises:
        UnknownDistroError: No variant matches.
    """
    candidates = load_variants() if variants is None else variants

    # Exact version matches win over major-only matches.
    exact = [v for v in candidates if not v.match_major and v.matches(distro.id, distro.version_id)]
    if exact:
        return exact[0]
    by_major = [v for v in candidates if v.match_major and v.matches(distro.id, distro.version_id)]
    if by_major:
        return by_major[0]

    raise UnknownDistroError(distro.id, distro.version_id)


def resolve_distro_provider(
    executor: CommandExecutor,
    *,
    distro: DistroInfo | None = None,
    os_release_path: Path | None = None,
    events: EventSink | None = None,
    variants: list[DistroVariant] | None = None,
) -> DistroSdkProvider:
    """Build the provider for the running (or given) distribution.

    Raises:
        UnknownDistroError: os-release unreadable or no variant matches.
    """
    _emit = make_emitter(events, "distro-resolver")
    try:
        distro = distro or detect_distro(os_release_path)
        variant = resolve_distro_variant(distro, variants)
    except UnknownDistroError as exc:
        _emit("unknown-distro", str(exc), distro_id=exc.distro_id, version=exc.version)
        raise

    logger.info("Using %s provider for %s", variant.label, distro.pretty_name or distro.id)
    return DistroSdkProvider(variant, executor, events)
