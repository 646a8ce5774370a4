"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from globalsdk.core.models.settings import InstallerSettings
from globalsdk.core.services.events import MemoryEventSink


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Return an empty scratch directory for installer downloads."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, scratch_dir: Path) -> InstallerSettings:
    """Installer settings isolated to the test's temp directory."""
    return InstallerSettings(
        scratch_dir=scratch_dir,
        os_release_path=tmp_path / "os-release",
    )


@pytest.fixture
def events() -> MemoryEventSink:
    return MemoryEventSink()


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo handler changes made by setup_logging between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    events_logger = logging.getLogger("globalsdk.events")
    events_logger.handlers.clear()
    events_logger.setLevel(logging.NOTSET)
