"""HTTP transport for the RaceScan backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyracescan._constants import USER_AGENT
from pyracescan._redact import redact_url
from pyracescan.config import RaceScanConfig
from pyracescan.exceptions import RaceScanTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, path: str, params: Mapping[str, str] | None = None) -> str:
        ...

    async def get_json(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        ...

    async def post_json(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        ...


class HttpTransport:
    """aiohttp transport; the session's cookie jar carries the backend session."""

    def __init__(self, config: RaceScanConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        payload: Mapping[str, Any] | None = None,
        accept: str = "*/*",
    ) -> str:
        url = self._url(path)
        headers = {"accept": accept, "user-agent": USER_AGENT, "cache-control": "no-store"}
        _logger.debug("%s %s", method, redact_url(url))
        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(payload) if payload is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                # Undecodable bytes (hand-edited Latin-1 feeds) become U+FFFD.
                text = await resp.text(errors="replace")
                if not 200 <= resp.status < 300:
                    raise RaceScanTransportError(
                        f"HTTP {resp.status} from {path}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=path,
                    )
        except RaceScanTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError, UnicodeError, LookupError) as exc:
            raise RaceScanTransportError(
                f"Request to {path} failed: {exc or type(exc).__name__}",
                endpoint=path,
            ) from exc
        return text

    @staticmethod
    def _decode(path: str, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RaceScanTransportError(
                f"Invalid JSON from {path}: {text[:200]}",
                endpoint=path,
            ) from exc

    async def get_text(self, path: str, params: Mapping[str, str] | None = None) -> str:
        return await self._request("GET", path, params=params, accept="text/csv, text/plain, */*")

    async def get_json(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        text = await self._request("GET", path, params=params, accept="application/json")
        return self._decode(path, text)

    async def post_json(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        text = await self._request("POST", path, payload=payload or {}, accept="application/json")
        return self._decode(path, text) if text.strip() else {}
