"""Derived live-state models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pyracescan.models.event import EventRecord
from pyracescan.models.stream import ActiveMountSet, DriverStatus


class LiveInfo(BaseModel):
    """What the schedule says is happening right now.

    Recomputed on every poll; nothing here is persisted.
    """

    model_config = ConfigDict(frozen=True)

    live: bool = False
    event_label: str = ""
    active_classes: tuple[str, ...] = Field(default_factory=tuple)
    """Classes of every event currently in its live window, first-seen order."""
    active_race_id: str | None = None
    active_class: str | None = None
    next_event: EventRecord | None = None
    """Earliest event that has not started yet, if any."""


class LiveSnapshot(BaseModel):
    """Everything a live view needs from one joined fetch of the feeds."""

    model_config = ConfigDict(frozen=True)

    live_info: LiveInfo
    events: tuple[EventRecord, ...] = Field(default_factory=tuple)
    drivers: tuple[DriverStatus, ...] = Field(default_factory=tuple)
    active_mounts: ActiveMountSet = Field(default_factory=ActiveMountSet)
    offline: bool = False
    """Set when the feeds could not be loaded and fallback data is shown."""
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def find_driver(self, number: str) -> DriverStatus | None:
        """First driver with car *number* (feed order)."""
        wanted = number.strip()
        for status in self.drivers:
            if status.driver.number == wanted:
                return status
        return None

    def first_active(self) -> DriverStatus | None:
        for status in self.drivers:
            if status.is_active:
                return status
        return None
