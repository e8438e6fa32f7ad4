"""Single source of the user's access state.

Every view used to fetch ``/api/user-info`` on its own. :class:`AuthProvider`
fetches once, serves the cached :class:`AuthState` to every consumer and is
refreshed explicitly via :meth:`AuthProvider.invalidate` when a view gains
focus.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import Protocol

from pyracescan.exceptions import RaceScanError
from pyracescan.models.account import LOGGED_OUT, AuthState, DayPass, SessionInfo, UserInfo

_logger = logging.getLogger(__name__)


class AccountSource(Protocol):
    """The account endpoints :class:`AuthProvider` needs."""

    async def get_user_info(self) -> UserInfo:
        ...

    async def get_session(self) -> SessionInfo:
        ...

    async def get_day_passes(self) -> list[DayPass]:
        ...


class AccessAction(StrEnum):
    """What a live view should offer the user."""

    PLAY = "play"
    LOGIN = "login"
    SUBSCRIBE = "subscribe"


def access_action(auth: AuthState) -> AccessAction:
    if auth.has_access:
        return AccessAction.PLAY
    if auth.logged_in:
        return AccessAction.SUBSCRIBE
    return AccessAction.LOGIN


class AuthProvider:
    """Caches :class:`AuthState` until invalidated or asked about another race."""

    def __init__(self, source: AccountSource) -> None:
        self._source = source
        self._lock = asyncio.Lock()
        self._state: AuthState | None = None
        self._race_id: str | None = None

    @property
    def current(self) -> AuthState:
        """Last known state; logged out until the first fetch."""
        return self._state or LOGGED_OUT

    @property
    def session_id(self) -> str | None:
        return self.current.session_id

    def invalidate(self) -> None:
        """Drop the cached state; the next :meth:`get` fetches again."""
        self._state = None

    async def get(self, race_id: str | None = None) -> AuthState:
        """Access state, with the day pass checked against *race_id*."""
        async with self._lock:
            if self._state is not None and race_id == self._race_id:
                return self._state
            self._state = await self._fetch(race_id)
            self._race_id = race_id
            return self._state

    async def _fetch(self, race_id: str | None) -> AuthState:
        info_result, session_result = await asyncio.gather(
            self._source.get_user_info(),
            self._source.get_session(),
            return_exceptions=True,
        )
        for result in (info_result, session_result):
            if isinstance(result, BaseException) and not isinstance(result, RaceScanError):
                raise result

        session_id = None
        if isinstance(session_result, SessionInfo):
            session_id = session_result.session_id
        else:
            _logger.debug("Session lookup failed: %s", session_result)

        if not isinstance(info_result, UserInfo):
            _logger.debug("Treating user as logged out: %s", info_result)
            return AuthState(session_id=session_id)

        has_day_pass = False
        if race_id:
            try:
                passes = await self._source.get_day_passes()
            except RaceScanError as exc:
                _logger.warning("Day pass lookup failed: %s", exc)
            else:
                has_day_pass = any(p.covers(race_id) for p in passes)

        return AuthState(
            logged_in=info_result.success,
            subscribed=info_result.subscribed,
            has_day_pass=has_day_pass,
            session_id=session_id,
        )
