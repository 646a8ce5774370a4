"""
L4 Execution — Command executor.

The SINGLE PLACE where subprocesses are started for install
operations, and the only code allowed to add ``sudo``.  Every other
component asks for ``elevate=True`` and lets this module decide how
(or whether) elevation happens.

Security invariants:
- Password piped via stdin only (``sudo -S``)
- ``-k`` invalidates cached credentials every time
- Password never logged, never part of the recorded argv
- Elevation markers smuggled into argv are re-routed or rejected
"""

from __future__ import annotations

import asyncio
import logging
import os
import platform
import time
from collections.abc import Callable, Sequence

from globalsdk.core.models.install import CommandResult
from globalsdk.core.services.sdk_install.data.constants import ELEVATION_MARKERS, WINDOWS
from globalsdk.core.services.sdk_install.detection.privilege import is_elevated
from globalsdk.core.services.sdk_install.domain.errors import PrivilegeDeniedError

logger = logging.getLogger(__name__)

_OUTPUT_TAIL = 4000
_SUDO_PASSWORD_PROMPTS = ("a password is required", "incorrect password", "sorry, try again")


def _is_marker(token: str) -> bool:
    name = os.path.basename(token).lower()
    if name.endswith(".exe"):
        name = name[:-4]
    return name in ELEVATION_MARKERS


def _strip_leading_marker(command: list[str]) -> list[str]:
    """Drop ``sudo [-flags]`` from the front of argv."""
    rest = command[1:]
    while rest and rest[0].startswith("-"):
        rest = rest[1:]
    return rest


async def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    await proc.wait()


class CommandExecutor:
    """Run commands, elevating through one vetted path.

    Args:
        sudo_password: Password for ``sudo -S``; when empty, ``sudo -n``
            is used and only succeeds with passwordless sudo.
        system: ``platform.system()`` value; defaults to the host.
        elevation_probe: Returns True when already elevated.
    """

    def __init__(
        self,
        *,
        sudo_password: str = "",
        system: str | None = None,
        elevation_probe: Callable[[], bool] | None = None,
    ) -> None:
        self._sudo_password = sudo_password
        self._system = system or platform.system()
        self._elevation_probe = elevation_probe or (lambda: is_elevated(self._system))

    def is_elevated(self) -> bool:
        return self._elevation_probe()

    def prepare(self, command: Sequence[str], *, elevate: bool = False) -> tuple[list[str], bool]:
        """Validate argv and route it through the elevation policy.

        Returns:
            ``(argv, elevate)`` after re-routing a leading elevation marker.

        Raises:
            PrivilegeDeniedError: Empty command, or an elevation marker
                anywhere but the front of argv.
        """
        argv = [str(part) for part in command]
        if not argv:
            raise PrivilegeDeniedError("Refusing to run an empty command")

        if _is_marker(argv[0]):
            logger.warning("Re-routing '%s' prefix through the elevation path", argv[0])
            argv = _strip_leading_marker(argv)
            elevate = True
            if not argv:
                raise PrivilegeDeniedError("Elevation marker without a command")

        for token in argv:
            if any(_is_marker(word) for word in token.split()):
                raise PrivilegeDeniedError(
                    f"Command smuggles an elevation marker ({token!r}); "
                    "request elevation from the executor instead"
                )
        return argv, elevate

    async def execute(
        self,
        command: Sequence[str],
        *,
        elevate: bool = False,
        timeout: float | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        """Run ``command`` and capture its output.

        Process-level failures (missing executable, non-zero exit,
        timeout) are captured in the result.  Only elevation policy
        violations raise.

        Raises:
            PrivilegeDeniedError: Elevation requested but no sanctioned
                way to get it.
        """
        argv, elevate = self.prepare(command, elevate=elevate)

        stdin_data: bytes | None = None
        elevated = self.is_elevated()
        if elevate and not elevated:
            if self._system == WINDOWS:
                raise PrivilegeDeniedError(
                    f"'{argv[0]}' requires an elevated (administrator) session"
                )
            if self._sudo_password:
                argv = ["sudo", "-S", "-k"] + argv
                stdin_data = (self._sudo_password + "\n").encode()
            else:
                argv = ["sudo", "-n"] + argv
            elevated = True

        logger.debug("Executing: %s (elevated=%s)", " ".join(argv), elevated)
        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except OSError as exc:
            logger.debug("Could not start %s: %s", argv[0], exc)
            return CommandResult(command=argv, stderr=str(exc), elevated=elevated)

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(stdin_data), timeout)
        except asyncio.CancelledError:
            # Caller gave up (e.g. an outer install timeout); the child goes too
            logger.warning("Cancelled while running %s; killing it", argv[0])
            await _kill(proc)
            raise
        except asyncio.TimeoutError:
            await _kill(proc)
            logger.warning("Command timed out after %ss: %s", timeout, argv[0])
            return CommandResult(
                command=argv,
                elevated=elevated,
                timed_out=True,
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        result = CommandResult(
            command=argv,
            exit_code=proc.returncode,
            stdout=stdout.decode(errors="replace")[-_OUTPUT_TAIL:],
            stderr=stderr.decode(errors="replace")[-_OUTPUT_TAIL:],
            elevated=elevated,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

        if elevate and not result.ok and argv[0] == "sudo":
            lowered = result.stderr.lower()
            if any(prompt in lowered for prompt in _SUDO_PASSWORD_PROMPTS):
                raise PrivilegeDeniedError(
                    "sudo refused to elevate; provide a sudo password or run as root"
                )

        if not result.ok:
            logger.debug("Command exited %s: %s", result.exit_code, result.stderr.strip()[:200])
        return result
