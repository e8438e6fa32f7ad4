"""Live-window computation over the event schedule."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pyracescan.ingestion.normalize import unique
from pyracescan.models.event import EventRecord
from pyracescan.models.live import LiveInfo
from pyracescan.policy import DEFAULT_LIVE_WINDOW, LiveWindowPolicy

OFFLINE_LIVE_INFO = LiveInfo(live=False, event_label="Offline mode")


def active_events(
    events: Sequence[EventRecord],
    now: datetime,
    policy: LiveWindowPolicy = DEFAULT_LIVE_WINDOW,
) -> list[EventRecord]:
    """Events whose live window contains *now*, in list order."""
    return [evt for evt in events if policy.contains(evt.start, now)]


def next_event(events: Sequence[EventRecord], now: datetime) -> EventRecord | None:
    """Earliest event that starts after *now*."""
    upcoming = [evt for evt in events if evt.start > now]
    if not upcoming:
        return None
    return min(upcoming, key=lambda evt: evt.start)


def compute_live_info(
    events: Sequence[EventRecord],
    now: datetime,
    policy: LiveWindowPolicy = DEFAULT_LIVE_WINDOW,
) -> LiveInfo:
    """Summarize the schedule at *now*.

    When several events are live at once the first in list order supplies
    the label, race id and class.
    """
    active = active_events(events, now, policy)
    upcoming = next_event(events, now)
    if active:
        first = active[0]
        classes = unique(evt.class_type for evt in active)
        return LiveInfo(
            live=True,
            event_label=first.track or "Live event",
            active_classes=tuple(classes),
            active_race_id=first.race_id or None,
            active_class=first.class_type or (classes[0] if classes else None),
            next_event=upcoming,
        )

    # Prefer the upcoming event over events[0] so a finished race is not
    # announced as next.
    if upcoming is not None:
        label = upcoming.track or "Next event"
    elif events:
        label = events[0].track or "Next event"
    else:
        label = "Next event"
    return LiveInfo(live=False, event_label=label, next_event=upcoming)
