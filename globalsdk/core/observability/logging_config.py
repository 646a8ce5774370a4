"""
Logging configuration — central setup for the CLI and embedding callers.

Every module does ``logger = logging.getLogger(__name__)``; this module
decides where those records go.  Installer events posted through
``LoggingEventSink`` land on the ``globalsdk.events`` logger and get
their own, always-visible format.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  GSDK_LOG_LEVEL  >  WARNING

A log file is opt-in through GSDK_LOG_FILE (level: GSDK_LOG_FILE_LEVEL,
else the console level).
"""

from __future__ import annotations

import logging
import os
import sys

EVENTS_LOGGER = "globalsdk.events"

ENV_LEVEL = "GSDK_LOG_LEVEL"
ENV_FILE = "GSDK_LOG_FILE"
ENV_FILE_LEVEL = "GSDK_LOG_FILE_LEVEL"

# (format, datefmt) per console verbosity
_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("%(message)s", None)
_EVENTS_FORMAT = ("%(asctime)s event %(message)s", "%H:%M:%S")
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%Y-%m-%dT%H:%M:%S")

# HTTP and event-loop internals are only interesting when debugging
_NOISY_LOGGERS = ("aiohttp", "asyncio", "urllib3")


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
    show_events: bool = True,
) -> None:
    """Configure Python logging for the process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file; defaults to ``GSDK_LOG_FILE``.
        log_file_level: Level for the file; defaults to ``GSDK_LOG_FILE_LEVEL``
            and then to ``level``.
        quiet_third_party: Hold aiohttp/asyncio loggers at WARNING unless
            the console is at DEBUG.
        show_events: Print installer events to the console even when the
            console level would hide INFO records.
    """
    console_level = _to_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    log_file = log_file or os.environ.get(ENV_FILE)
    if log_file:
        file_level = _to_level(log_file_level or os.environ.get(ENV_FILE_LEVEL) or level)
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    _configure_events_logger(show_events and console_level > logging.INFO)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # A closed stderr must never turn a log call into a crash
    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    threshold = next((t for t in sorted(_CONSOLE_FORMATS) if level <= t), None)
    fmt, datefmt = _CONSOLE_FORMATS[threshold] if threshold is not None else _CONSOLE_DEFAULT
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(*_FILE_FORMAT))
    return handler


def _configure_events_logger(own_handler: bool) -> None:
    # Events still propagate to the root handlers (file output)
    events = logging.getLogger(EVENTS_LOGGER)
    events.handlers.clear()
    events.propagate = True
    if not own_handler:
        events.setLevel(logging.NOTSET)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(*_EVENTS_FORMAT))
    events.addHandler(handler)
    events.setLevel(logging.INFO)


def _to_level(name: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.WARNING
