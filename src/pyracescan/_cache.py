"""Small in-memory TTL cache for slowly changing listings."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class _CacheEntry:
    value: Any
    stored_at: float


class TtlCache:
    """Key/value cache whose entries expire *ttl* seconds after being stored.

    Empty values are never cached, so an empty listing is fetched again on
    the next call.
    """

    def __init__(self, ttl: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self._ttl:
            del self._entries[key]
            return None
        return copy.deepcopy(entry.value)

    def put(self, key: str, value: Any) -> None:
        if not value or self._ttl <= 0:
            return
        self._entries[key] = _CacheEntry(value=copy.deepcopy(value), stored_at=self._clock())

    def invalidate(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)
