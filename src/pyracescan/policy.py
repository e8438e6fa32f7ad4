"""Live-window and stream-status policies.

The mobile app computed "is the event live" in three places with three
different windows. They are kept here as named presets so callers can see
the discrepancy; :data:`DEFAULT_LIVE_WINDOW` is the one the library uses
unless configured otherwise.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from enum import StrEnum


@dataclasses.dataclass(frozen=True)
class LiveWindowPolicy:
    """Window around a scheduled start during which an event counts as live.

    Parameters
    ----------
    pre_roll : timedelta
        How long before the scheduled start the event is already live.
    post_roll : timedelta
        How long after the scheduled start the event is still live.
    """

    pre_roll: timedelta = timedelta(minutes=30)
    post_roll: timedelta = timedelta(hours=6)

    def __post_init__(self) -> None:
        if self.pre_roll < timedelta(0) or self.post_roll < timedelta(0):
            raise ValueError("live window durations must not be negative")

    def contains(self, start: datetime, now: datetime) -> bool:
        """Whether *now* falls inside the window around *start* (inclusive)."""
        return start - self.pre_roll <= now <= start + self.post_roll


#: Window used by the live audio screen, where playback is gated.
LIVE_SCREEN_WINDOW = LiveWindowPolicy(pre_roll=timedelta(minutes=30), post_roll=timedelta(hours=6))
#: Window used by the home screen "Live Now!" call to action.
HOME_SCREEN_WINDOW = LiveWindowPolicy(pre_roll=timedelta(minutes=30), post_roll=timedelta(hours=7))
#: Window used to highlight rows on the schedule.
SCHEDULE_WINDOW = LiveWindowPolicy(pre_roll=timedelta(minutes=10), post_roll=timedelta(hours=7))

DEFAULT_LIVE_WINDOW = LIVE_SCREEN_WINDOW


class StatusPolicy(StrEnum):
    """How to treat drivers when Icecast reports no active mounts."""

    # No status evidence: every driver is considered playable.
    ASSUME_LIVE_WHEN_STATUS_UNKNOWN = "assume_live_when_status_unknown"
    # Only mounts Icecast reports are playable.
    REQUIRE_STATUS = "require_status"
