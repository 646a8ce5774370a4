"""
L4 Execution — Installer download.

Streams an HTTP(S) response straight into an exclusively-created file.
The destination must not exist: an existing file may be a download
still in progress, and overwriting it would produce a corrupt
installer.  Any failure after the file is created removes it.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import BinaryIO
from urllib.parse import unquote, urlparse

import aiohttp

from globalsdk.core.services.sdk_install.domain.errors import DownloadError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_USER_AGENT = "globalsdk/0.1"


def installer_file_name(url: str) -> str:
    """Last path segment of ``url``: the name the artifact is saved under."""
    name = unquote(urlparse(url).path.rstrip("/").split("/")[-1])
    if not name:
        raise DownloadError(f"Cannot derive an installer file name from '{url}'")
    return name


def _remove_partial(dest: Path) -> None:
    try:
        dest.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not delete incomplete download %s: %s", dest, exc)


async def download_file(
    url: str,
    dest: Path,
    *,
    timeout: float = 600,
    session: aiohttp.ClientSession | None = None,
) -> Path:
    """Download ``url`` to ``dest``.

    Args:
        url: File server URL that returns the installer bytes as-is.
        dest: Destination path; must not exist yet.
        timeout: Total seconds allowed for the transfer.
        session: Existing session to reuse; one is created otherwise.

    Returns:
        ``dest``.

    Raises:
        DownloadError: Destination exists (left untouched), non-200
            response, transport or write failure (partial file removed).
    """
    dest.parent.mkdir(parents=True, exist_ok=True)

    try:
        fh = dest.open("xb")
    except FileExistsError as exc:
        raise DownloadError(f"File already exists: {dest}") from exc
    except OSError as exc:
        raise DownloadError(f"Cannot create {dest}: {exc}") from exc

    if session is not None:
        return await _stream_to_file(session, url, dest, fh)

    async with aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout),
        headers={"User-Agent": _USER_AGENT},
    ) as own_session:
        return await _stream_to_file(own_session, url, dest, fh)


async def _stream_to_file(
    session: aiohttp.ClientSession,
    url: str,
    dest: Path,
    fh: BinaryIO,
) -> Path:
    written = 0
    try:
        with fh:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise DownloadError(
                        f"Server responded with {resp.status}: {resp.reason or ''}".rstrip()
                    )
                async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
                    fh.write(chunk)
                    written += len(chunk)
    except DownloadError:
        _remove_partial(dest)
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        _remove_partial(dest)
        raise DownloadError(f"Download of {url} failed: {exc or type(exc).__name__}") from exc
    except OSError as exc:
        _remove_partial(dest)
        raise DownloadError(f"Writing {dest} failed: {exc}") from exc
    except asyncio.CancelledError:
        _remove_partial(dest)
        raise

    logger.info("Downloaded %s (%d bytes) to %s", url, written, dest)
    return dest
