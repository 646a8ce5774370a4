"""
Install models — the data that flows through an SDK installation.

Nothing here is persisted.  Installation records are produced by live
OS queries, install contexts are created per request, and command
results live only for the duration of a single executor call.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class SupportStatus(str, Enum):
    """Support level a distro gives to a .NET major.minor."""

    LTS = "lts"
    STS = "sts"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"

    @property
    def supported(self) -> bool:
        return self in (SupportStatus.LTS, SupportStatus.STS)


class InstallationRecord(BaseModel):
    """One SDK found on the machine."""

    version: str
    architecture: str = ""
    install_dir: str = ""


class InstallContext(BaseModel):
    """A single install request.

    Frozen: once handed to an installer or a distro provider it must
    not change underneath them.
    """

    model_config = ConfigDict(frozen=True)

    version: str                        # fully-specified, e.g. "7.0.203"
    installer_url: str | None = None    # Windows / macOS
    package_id: str | None = None       # Linux override of the distro package name
    architecture: str = "x64"
    requires_elevation: bool = True


class CommandResult(BaseModel):
    """Outcome of one executor call.

    Failures are captured here, never raised.  ``command`` is the argv
    that actually ran (including any ``sudo`` prefix) and never holds a
    password.
    """

    command: list[str]
    exit_code: int | None = None        # None: the process never started
    stdout: str = ""
    stderr: str = ""
    elevated: bool = False
    duration_ms: int = 0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Whether the command ran and exited 0."""
        return self.exit_code == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Raw combined output, stdout first."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class InstallResult(BaseModel):
    """What a global installer run produced.

    ``verified`` is True only for a zero exit code.  It is also False
    when the platform cannot report an exit code at all (macOS
    ``open -W``, ``exit_code`` None): the install was attempted,
    nothing more is known.
    """

    version: str
    output: str = ""
    exit_code: int | None = None
    verified: bool = False
    installer_path: str = ""


class AvailableVersion(BaseModel):
    """An SDK version offered by a version resolver."""

    version: str
    channel_version: str                # major.minor
    support_status: Literal["lts", "sts"]


class InstallEvent(BaseModel):
    """A structured event posted to the event sink."""

    name: str
    summary: str = ""
    source: str = ""
    detail: dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(default_factory=_now_iso)
