"""
Event sink — one place where installer events are posted.

The installer never decides where events end up (log file, telemetry,
UI).  It posts ``InstallEvent`` objects to whatever sink it was given.

Usage (preferred — factory pattern)::

    from globalsdk.core.services.events import make_emitter

    _emit = make_emitter(sink, "win-mac-installer")

    # Then in any method:
    _emit("conflicting-install", "7.0.203 already installed", conflicting_version="7.0.203")

Posting is fail-safe: a sink that raises is logged and ignored, so a
broken transport can never mask the installer error that follows.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, runtime_checkable

from globalsdk.core.models.install import InstallEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class EventSink(Protocol):
    """Anything that accepts installer events."""

    def post(self, event: InstallEvent) -> None: ...


class LoggingEventSink:
    """Default sink: writes each event to the ``globalsdk.events`` logger."""

    def __init__(self, logger_name: str = "globalsdk.events") -> None:
        self._logger = logging.getLogger(logger_name)

    def post(self, event: InstallEvent) -> None:
        self._logger.info("[%s] %s: %s", event.source or "-", event.name, event.summary)


class MemoryEventSink:
    """Collects events in order; handy for callers that report later."""

    def __init__(self) -> None:
        self.events: list[InstallEvent] = []

    def post(self, event: InstallEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [e.name for e in self.events]

    def clear(self) -> None:
        self.events = []


def post_event(sink: EventSink | None, event: InstallEvent) -> None:
    """Post ``event`` to ``sink`` without ever raising."""
    if sink is None:
        return
    try:
        sink.post(event)
    except Exception as exc:
        logger.debug("Event sink failed for %s: %s", event.name, exc)


def make_emitter(sink: EventSink | None, source: str) -> Callable[..., InstallEvent]:
    """Create an ``_emit`` function pre-bound to a sink and a source name.

    Returns a callable with signature ``(name, summary="", **detail)``
    that builds the event, posts it, and returns it.
    """

    def _emit(name: str, summary: str = "", **detail: Any) -> InstallEvent:
        event = InstallEvent(name=name, summary=summary, source=source, detail=detail)
        post_event(sink, event)
        return event

    return _emit
