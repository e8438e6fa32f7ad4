"""aiohttp implementation of the audio backend."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import aiohttp

from pyracescan._constants import USER_AGENT
from pyracescan._redact import redact_url
from pyracescan.exceptions import RaceScanStreamError

_logger = logging.getLogger(__name__)

_PLAYABLE_TYPES = ("audio/", "application/ogg", "application/octet-stream")


def _is_playable(content_type: str) -> bool:
    value = content_type.strip().lower()
    if not value:
        # Some relays omit the header; let the decoder decide.
        return True
    return value.startswith(_PLAYABLE_TYPES)


class HttpStreamHandle:
    """An open HTTP audio response."""

    def __init__(self, url: str, response: aiohttp.ClientResponse) -> None:
        self.url = url
        self._response = response

    @property
    def content_type(self) -> str:
        return self._response.headers.get("content-type", "")

    async def iter_chunks(self, chunk_size: int = 4096) -> AsyncIterator[bytes]:
        async for chunk in self._response.content.iter_chunked(chunk_size):
            yield chunk

    async def stop(self) -> None:
        self._response.close()

    async def close(self) -> None:
        self._response.release()
        self._response.close()


class HttpStreamBackend:
    """Opens Icecast/relay streams with a shared aiohttp session.

    The session is shared with :class:`~pyracescan.client.RaceScanClient` so
    the relay sees the backend session cookie.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        probe: bool = True,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
    ) -> None:
        self._http = http_session
        self._probe_enabled = probe
        self._timeout = aiohttp.ClientTimeout(total=None, sock_connect=connect_timeout, sock_read=read_timeout)

    async def probe(self, url: str) -> dict[str, Any]:
        """HEAD *url* and return what the server says about it (diagnostics only)."""
        try:
            async with self._http.head(url, timeout=self._timeout, allow_redirects=True) as resp:
                info = {
                    "status": resp.status,
                    "content_type": resp.headers.get("content-type"),
                    "content_length": resp.headers.get("content-length"),
                    "accept_ranges": resp.headers.get("accept-ranges"),
                }
        except (aiohttp.ClientError, OSError) as exc:
            info = {"error": str(exc) or type(exc).__name__}
        _logger.debug("HEAD %s -> %s", redact_url(url), info)
        return info

    async def open(self, url: str) -> HttpStreamHandle:
        if self._probe_enabled:
            await self.probe(url)
        response = await self._http.get(
            url,
            headers={"Accept": "audio/mpeg", "User-Agent": USER_AGENT},
            timeout=self._timeout,
        )
        if not 200 <= response.status < 300:
            status = response.status
            response.release()
            raise RaceScanStreamError(f"HTTP {status}", url=url)
        content_type = response.headers.get("content-type", "")
        if not _is_playable(content_type):
            response.release()
            raise RaceScanStreamError(f"unexpected content type {content_type!r}", url=url)
        return HttpStreamHandle(url, response)
