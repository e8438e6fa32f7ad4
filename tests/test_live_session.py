from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from pyracescan.access import AuthProvider
from pyracescan.client import RaceScanClient
from pyracescan.live.session import LiveSession
from pyracescan.models.account import LOGGED_OUT, DayPass, SessionInfo, UserInfo
from pyracescan.models.live import LiveSnapshot
from pyracescan.streams.player import StreamPlayer


@dataclass
class GatedSource:
    """Snapshot source that blocks until ``release`` is set."""

    snapshot: LiveSnapshot
    started: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)

    async def load_live_snapshot(self, now: datetime | None = None) -> LiveSnapshot:
        self.started.set()
        await self.release.wait()
        return self.snapshot


@dataclass
class UnusedAccountSource:
    async def get_user_info(self) -> UserInfo:
        raise AssertionError("account looked up after close")

    async def get_session(self) -> SessionInfo:
        raise AssertionError("account looked up after close")

    async def get_day_passes(self) -> list[DayPass]:
        raise AssertionError("account looked up after close")


@dataclass
class NoAudioBackend:
    async def open(self, url: str) -> object:
        raise AssertionError(f"stream opened after close: {url}")


@pytest.mark.asyncio
async def test_refresh_result_dropped_after_close() -> None:
    source = GatedSource(RaceScanClient().offline_snapshot())
    session = LiveSession(source, AuthProvider(UnusedAccountSource()), StreamPlayer(NoAudioBackend()))

    pending = asyncio.create_task(session.refresh())
    await source.started.wait()
    await session.aclose()
    source.release.set()

    assert await pending is None
    assert session.closed is True
    assert session.snapshot is None
    assert session.auth_state == LOGGED_OUT
    assert session.current_driver is None
    assert session.candidates == []

