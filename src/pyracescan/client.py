"""High-level async client for the RaceScan backend."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pyracescan._cache import TtlCache
from pyracescan._constants import (
    DAY_PASSES_PATH,
    DRIVERS_CSV_PATH,
    EVENTS_CSV_PATH,
    ICECAST_STATUS_PATH,
    LOGIN_PATH,
    LOGOUT_PATH,
    SESSION_PATH,
    SLIDESHOW_PATH,
    USER_INFO_PATH,
)
from pyracescan._redact import redact_for_log
from pyracescan._transport import HttpTransport, Transport
from pyracescan.config import RaceScanConfig
from pyracescan.exceptions import (
    RaceScanApiError,
    RaceScanAuthenticationError,
    RaceScanError,
    RaceScanTransportError,
)
from pyracescan.ingestion.drivers import FALLBACK_DRIVERS, find_mount_collisions, parse_drivers
from pyracescan.ingestion.events import parse_events
from pyracescan.ingestion.icecast import UNKNOWN_STATUS, parse_active_mounts
from pyracescan.live.window import OFFLINE_LIVE_INFO, compute_live_info
from pyracescan.models.account import DayPass, SessionInfo, UserInfo
from pyracescan.models.driver import DriverRecord
from pyracescan.models.event import EventRecord
from pyracescan.models.live import LiveSnapshot
from pyracescan.models.stream import ActiveMountSet
from pyracescan.streams.http_backend import HttpStreamBackend
from pyracescan.streams.resolve import resolve_drivers

_logger = logging.getLogger(__name__)

_AUTH_STATUSES = frozenset({401, 403})
_SLIDESHOW_KEY = "slideshow"


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class RaceScanClient:
    """Async client for the RaceScan backend.

    Usage::

        async with RaceScanClient(config) as client:
            snapshot = await client.load_live_snapshot()
            info = await client.get_user_info()
    """

    def __init__(
        self,
        config: RaceScanConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or RaceScanConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None
        self._assets_cache = TtlCache(self._config.assets_cache_ttl)

    @property
    def config(self) -> RaceScanConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RaceScanClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RaceScanError("Client not initialized. Use 'async with RaceScanClient(...) as client:'")
        return self._transport

    def stream_backend(self, **kwargs: Any) -> HttpStreamBackend:
        """Audio backend sharing this client's HTTP session and cookies."""
        self._require_transport()
        assert self._http_session is not None  # noqa: S101
        return HttpStreamBackend(self._http_session, **kwargs)

    async def _get_account_json(self, path: str) -> dict[str, Any]:
        """GET a session-authenticated endpoint, mapping 401/403 to auth errors."""
        transport = self._require_transport()
        try:
            data = await transport.get_json(path)
        except RaceScanTransportError as exc:
            if exc.status_code in _AUTH_STATUSES:
                raise RaceScanAuthenticationError(f"{path} requires a logged-in session", endpoint=path) from exc
            raise
        if not isinstance(data, dict):
            raise RaceScanTransportError(f"Unexpected payload from {path}: {type(data).__name__}", endpoint=path)
        _logger.debug("%s -> %s", path, redact_for_log(data))
        return data

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    async def fetch_drivers_csv(self) -> str:
        """Raw roster CSV, cache-busted."""
        return await self._require_transport().get_text(DRIVERS_CSV_PATH, {"ts": str(_now_ms())})

    async def fetch_events_csv(self) -> str:
        """Raw schedule CSV, cache-busted."""
        return await self._require_transport().get_text(EVENTS_CSV_PATH, {"ts": str(_now_ms())})

    async def fetch_icecast_status(self) -> Any:
        """Raw Icecast ``status-json.xsl`` payload."""
        return await self._require_transport().get_json(ICECAST_STATUS_PATH)

    async def get_drivers(self) -> list[DriverRecord]:
        return parse_drivers(await self.fetch_drivers_csv())

    async def get_events(self) -> list[EventRecord]:
        return parse_events(await self.fetch_events_csv())

    async def get_active_mounts(self) -> ActiveMountSet:
        active = parse_active_mounts(await self.fetch_icecast_status())
        _logger.debug("Active mounts: %s", active.sorted_mounts())
        return active

    async def get_slideshow_images(self) -> list[str]:
        """Slideshow image paths, served from memory for ``assets_cache_ttl`` seconds."""
        cached = self._assets_cache.get(_SLIDESHOW_KEY)
        if cached is not None:
            return list(cached)
        data = await self._require_transport().get_json(SLIDESHOW_PATH)
        images = [str(item) for item in data] if isinstance(data, list) else []
        self._assets_cache.put(_SLIDESHOW_KEY, images)
        return images

    # ------------------------------------------------------------------
    # Live snapshot
    # ------------------------------------------------------------------

    def offline_snapshot(self, now: datetime | None = None) -> LiveSnapshot:
        """Snapshot shown when the feeds cannot be loaded."""
        drivers = resolve_drivers(FALLBACK_DRIVERS, UNKNOWN_STATUS, self._config.status_policy)
        return LiveSnapshot(
            live_info=OFFLINE_LIVE_INFO,
            drivers=tuple(drivers),
            active_mounts=UNKNOWN_STATUS,
            offline=True,
            fetched_at=now or datetime.now(UTC),
        )

    async def load_live_snapshot(self, now: datetime | None = None) -> LiveSnapshot:
        """Fetch events, roster and Icecast status together and derive live state.

        The three requests are joined; if any of them fails the whole
        snapshot falls back to :meth:`offline_snapshot`. Never raises for
        feed errors.
        """
        now = now or datetime.now(UTC)
        try:
            events_text, drivers_text, status_json = await asyncio.gather(
                self.fetch_events_csv(),
                self.fetch_drivers_csv(),
                self.fetch_icecast_status(),
            )
        except RaceScanError as exc:
            _logger.warning("Live feeds unavailable, using offline data: %s", exc)
            return self.offline_snapshot(now)

        events = parse_events(events_text)
        drivers = parse_drivers(drivers_text)
        active = parse_active_mounts(status_json)
        _logger.debug("Active mounts: %s", active.sorted_mounts())

        for mount, group in find_mount_collisions(drivers).items():
            _logger.warning(
                "Mount %s shared by drivers %s",
                mount,
                ", ".join(f"#{d.number} {d.name}" for d in group),
            )

        live_info = compute_live_info(events, now, self._config.live_window)
        statuses = resolve_drivers(drivers, active, self._config.status_policy)
        return LiveSnapshot(
            live_info=live_info,
            events=tuple(events),
            drivers=tuple(statuses),
            active_mounts=active,
            offline=False,
            fetched_at=now,
        )

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def get_user_info(self) -> UserInfo:
        """Profile of the logged-in user.

        Raises
        ------
        RaceScanAuthenticationError
            If there is no logged-in session.
        """
        data = await self._get_account_json(USER_INFO_PATH)
        info = UserInfo.model_validate(data)
        if not info.success:
            raise RaceScanAuthenticationError(
                str(data.get("message") or "user-info rejected the session"),
                endpoint=USER_INFO_PATH,
            )
        return info

    async def get_session(self) -> SessionInfo:
        """Server-side session summary; works without logging in."""
        return SessionInfo.model_validate(await self._get_account_json(SESSION_PATH))

    async def get_day_passes(self) -> list[DayPass]:
        data = await self._get_account_json(DAY_PASSES_PATH)
        passes = data.get("passes")
        if not isinstance(passes, list):
            return []
        return [DayPass.model_validate(item) for item in passes if isinstance(item, dict)]

    async def login(self, email: str, password: str) -> str:
        """Log in with an email (or phone number) and password.

        Returns the backend's welcome message. The session cookie is kept by
        the HTTP session.

        Raises
        ------
        RaceScanAuthenticationError
            If the backend rejects the credentials or the account is unverified.
        """
        transport = self._require_transport()
        try:
            data = await transport.post_json(LOGIN_PATH, {"email": email, "password": password})
        except RaceScanTransportError as exc:
            if exc.status_code is not None and 400 <= exc.status_code < 500:
                raise RaceScanAuthenticationError(f"Login failed: {exc}", endpoint=LOGIN_PATH) from exc
            raise
        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            raise RaceScanAuthenticationError(f"Login failed: {message or 'rejected'}", endpoint=LOGIN_PATH)
        return str(data.get("message") or "")

    async def logout(self) -> None:
        transport = self._require_transport()
        data = await transport.post_json(LOGOUT_PATH)
        if isinstance(data, dict) and data.get("success") is False:
            raise RaceScanApiError("Logout failed", endpoint=LOGOUT_PATH)
