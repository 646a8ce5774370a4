"""
Tests for the event sink and emitter factory.
"""

import logging

from globalsdk.core.models.install import InstallEvent
from globalsdk.core.services.events import (
    EventSink,
    LoggingEventSink,
    MemoryEventSink,
    make_emitter,
    post_event,
)


class _ExplodingSink:
    def post(self, event: InstallEvent) -> None:
        raise RuntimeError("transport down")


class TestEmitter:

    def test_builds_and_posts(self):
        sink = MemoryEventSink()
        emit = make_emitter(sink, "win-mac-installer")
        event = emit("conflicting-install", "7.0.203 present", conflicting_version="7.0.203")

        assert sink.events == [event]
        assert event.source == "win-mac-installer"
        assert event.detail == {"conflicting_version": "7.0.203"}
        assert event.timestamp

    def test_no_sink(self):
        event = make_emitter(None, "x")("anything")
        assert event.name == "anything"

    def test_failing_sink_is_swallowed(self):
        post_event(_ExplodingSink(), InstallEvent(name="download-failed"))

    def test_memory_sink_helpers(self):
        sink = MemoryEventSink()
        emit = make_emitter(sink, "x")
        emit("a")
        emit("b")
        assert sink.names() == ["a", "b"]
        sink.clear()
        assert sink.events == []


class TestLoggingSink:

    def test_logs_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="globalsdk.events"):
            LoggingEventSink().post(
                InstallEvent(name="unknown-distro", summary="debian 12", source="distro-resolver")
            )
        assert "[distro-resolver] unknown-distro: debian 12" in caplog.text

    def test_protocol(self):
        assert isinstance(LoggingEventSink(), EventSink)
        assert isinstance(MemoryEventSink(), EventSink)
