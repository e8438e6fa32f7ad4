"""Sequential stream playback over an ordered candidate list."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Protocol

import aiohttp

from pyracescan._redact import redact_url
from pyracescan.exceptions import RaceScanStreamError, StreamUnavailableError
from pyracescan.streams.candidates import with_cache_buster

_logger = logging.getLogger(__name__)


class PlaybackState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    ERROR = "error"


class StreamHandle(Protocol):
    """An open audio stream."""

    url: str

    async def stop(self) -> None:
        ...

    async def close(self) -> None:
        ...


class AudioBackend(Protocol):
    """Opens audio streams.

    ``open`` raises :class:`RaceScanStreamError` (or an aiohttp/OS error)
    when the URL cannot be played.
    """

    async def open(self, url: str) -> StreamHandle:
        ...


_CANDIDATE_ERRORS = (RaceScanStreamError, aiohttp.ClientError, OSError)


def _now_ms() -> int:
    return int(time.time() * 1000)


class StreamPlayer:
    """Plays the first working URL of a candidate list.

    At most one stream is open at a time: starting a new attempt always
    releases the previous handle first.

    State machine::

        idle -> loading -> playing -> idle (stop)
                loading -> error
        any  -> loading (new attempt)
    """

    def __init__(
        self,
        backend: AudioBackend,
        *,
        clock_ms: Callable[[], int] = _now_ms,
        on_state_change: Callable[[PlaybackState], None] | None = None,
    ) -> None:
        self._backend = backend
        self._clock_ms = clock_ms
        self._on_state_change = on_state_change
        self._lock = asyncio.Lock()
        self._handle: StreamHandle | None = None
        self._state = PlaybackState.IDLE
        self.last_error = ""
        self.failure: StreamUnavailableError | None = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def current_url(self) -> str | None:
        return self._handle.url if self._handle is not None else None

    def _set_state(self, state: PlaybackState) -> None:
        if state == self._state:
            return
        _logger.debug("Playback %s -> %s", self._state, state)
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)

    async def _teardown(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            await handle.close()
        except _CANDIDATE_ERRORS as exc:
            _logger.debug("Releasing stream %s failed: %s", redact_url(handle.url), exc)

    async def play(self, candidates: Sequence[str] | str, *, speculative: bool = False) -> bool:
        """Try each candidate in order until one opens.

        Intermediate failures are logged and recorded in :attr:`last_error`;
        only exhausting the list moves the player to ``ERROR``. *speculative*
        marks a mount Icecast never reported, which is reflected in the final
        error message.

        Returns ``True`` when a stream is playing.
        """
        urls = [candidates] if isinstance(candidates, str) else list(candidates)
        urls = [url for url in urls if url]
        if not urls:
            return False

        async with self._lock:
            await self._teardown()
            self.failure = None
            total = len(urls)
            for index, url in enumerate(urls, start=1):
                self._set_state(PlaybackState.LOADING)
                self.last_error = ""
                live_url = with_cache_buster(url, self._clock_ms())
                _logger.debug("Attempting stream %s", redact_url(live_url))
                try:
                    self._handle = await self._backend.open(live_url)
                except _CANDIDATE_ERRORS as exc:
                    label = f"Candidate {index}/{total}" if total > 1 else "Candidate"
                    message = str(exc) or type(exc).__name__
                    self.last_error = f"{label}: {message}"
                    if index < total:
                        _logger.warning("Stream candidate failed (%s): %s", label, message)
                        continue
                    if speculative:
                        self.last_error = f"{self.last_error} (mount not reported live)"
                    _logger.error("Stream play error after %d candidates: %s", total, message)
                    self.failure = StreamUnavailableError(
                        self.last_error,
                        url=url,
                        attempts=total,
                        speculative=speculative,
                    )
                    self._set_state(PlaybackState.ERROR)
                    return False
                self._set_state(PlaybackState.PLAYING)
                return True
        return False

    async def stop(self) -> None:
        """Stop the current stream; ``playing -> idle``."""
        async with self._lock:
            if self._handle is not None:
                try:
                    await self._handle.stop()
                except _CANDIDATE_ERRORS as exc:
                    _logger.debug("Stopping stream failed: %s", exc)
            await self._teardown()
            if self._state == PlaybackState.PLAYING:
                self._set_state(PlaybackState.IDLE)

    async def toggle(self, candidates: Sequence[str] | str, *, speculative: bool = False) -> bool:
        """Stop when playing, otherwise start playing *candidates*."""
        if self.is_playing:
            await self.stop()
            return False
        return await self.play(candidates, speculative=speculative)

    async def aclose(self) -> None:
        """Release any open stream without touching the error state."""
        async with self._lock:
            await self._teardown()
            if self._state in (PlaybackState.PLAYING, PlaybackState.LOADING):
                self._set_state(PlaybackState.IDLE)
