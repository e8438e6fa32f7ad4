"""A live audio session: what the mobile live screen does, minus the UI."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from pyracescan.access import AccessAction, AuthProvider, access_action
from pyracescan.config import RaceScanConfig
from pyracescan.models.account import AuthState
from pyracescan.models.live import LiveSnapshot
from pyracescan.models.stream import DriverStatus
from pyracescan.streams.candidates import build_stream_candidates
from pyracescan.streams.player import PlaybackState, StreamPlayer

_logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    async def load_live_snapshot(self, now: datetime | None = None) -> LiveSnapshot:
        ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LiveSession:
    """Loads live state, gates access and drives one stream player.

    Collaborators are injected so several views can share one client, one
    :class:`AuthProvider` and their own player. After :meth:`aclose` any
    in-flight :meth:`refresh` result is discarded and the player is
    released, so no stream outlives the session.
    """

    def __init__(
        self,
        source: SnapshotSource,
        auth: AuthProvider,
        player: StreamPlayer,
        *,
        config: RaceScanConfig | None = None,
        list_only: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._auth = auth
        self._player = player
        # Candidates must target the same backend the snapshot came from.
        self._config = config or getattr(source, "config", None) or RaceScanConfig()
        self._list_only = list_only
        self._clock = clock
        self._closed = False
        self.snapshot: LiveSnapshot | None = None
        self.auth_state: AuthState = auth.current
        self.current_driver: DriverStatus | None = None
        self.candidates: list[str] = []

    @property
    def player(self) -> StreamPlayer:
        return self._player

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_live(self) -> bool:
        return self.snapshot is not None and self.snapshot.live_info.live

    @property
    def shows_player(self) -> bool:
        """Whether the view is a live player rather than a plain driver directory."""
        return not self._list_only and self.is_live

    @property
    def access_action(self) -> AccessAction:
        return access_action(self.auth_state)

    @property
    def last_error(self) -> str:
        return self._player.last_error

    def _candidates_for(self, status: DriverStatus) -> list[str]:
        mount = status.active_path or status.driver.plain_mount
        return build_stream_candidates(mount, self.auth_state.session_id, self._config)

    async def refresh(self) -> LiveSnapshot | None:
        """Reload feeds and access state.

        The selected driver is looked up again in the new snapshot so a
        renamed or dead mount is picked up; the first active driver replaces
        it when it is gone or inactive. Candidates are only built when
        playback is allowed. Returns ``None`` when the session was closed
        meanwhile.
        """
        snapshot = await self._source.load_live_snapshot(self._clock())
        if self._closed:
            return None
        auth_state = await self._auth.get(snapshot.live_info.active_race_id)
        if self._closed:
            return None

        self.snapshot = snapshot
        self.auth_state = auth_state
        first = snapshot.first_active()
        if first is not None and self.shows_player and auth_state.has_access:
            current = None
            if self.current_driver is not None:
                current = snapshot.find_driver(self.current_driver.driver.number)
            if current is None or not current.is_active:
                current = first
            self.current_driver = current
            self.candidates = self._candidates_for(current)
        elif self._player.state != PlaybackState.PLAYING:
            self.candidates = []
        return snapshot

    async def on_focus(self) -> AuthState:
        """Re-read access state, e.g. after returning from login or checkout."""
        self._auth.invalidate()
        race_id = self.snapshot.live_info.active_race_id if self.snapshot else None
        state = await self._auth.get(race_id)
        if not self._closed:
            self.auth_state = state
        return state

    def can_play(self, status: DriverStatus) -> bool:
        return self.shows_player and status.is_active and self.auth_state.has_access

    async def select_driver(self, number: str) -> bool:
        """Switch to driver *number* and start playing.

        Returns ``False`` without touching the player when the event is not
        live, the view is list-only, the driver is not active or the user has
        no access.
        """
        if self._closed or self.snapshot is None:
            return False
        status = self.snapshot.find_driver(number)
        if status is None or not self.can_play(status):
            return False
        self.current_driver = status
        self.candidates = self._candidates_for(status)
        _logger.debug("Switching stream to %s (%d candidates)", status.active_path, len(self.candidates))
        return await self._player.play(self.candidates, speculative=status.speculative)

    async def toggle(self) -> bool:
        """Play/stop the currently selected driver; returns whether playing."""
        if self._closed or not self.candidates or not self.auth_state.has_access:
            return False
        speculative = self.current_driver.speculative if self.current_driver else False
        return await self._player.toggle(self.candidates, speculative=speculative)

    async def aclose(self) -> None:
        self._closed = True
        await self._player.aclose()
