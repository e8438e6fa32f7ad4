from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pyracescan._constants import EASTERN_OFFSET
from pyracescan.live.window import active_events, compute_live_info, next_event
from pyracescan.models.event import EventRecord
from pyracescan.policy import (
    DEFAULT_LIVE_WINDOW,
    HOME_SCREEN_WINDOW,
    LIVE_SCREEN_WINDOW,
    SCHEDULE_WINDOW,
    LiveWindowPolicy,
)

START = datetime(2026, 7, 4, 19, 30, tzinfo=EASTERN_OFFSET)


def _event(race_id: str, klass: str, start: datetime, track: str = "Daytona") -> EventRecord:
    return EventRecord(race_id=race_id, class_type=klass, track=track, start=start)


def test_twenty_minutes_before_start_depends_on_pre_roll() -> None:
    events = [_event("R1-PLM", "PLM", START)]
    now = START - timedelta(minutes=20)

    assert compute_live_info(events, now, LIVE_SCREEN_WINDOW).live is True
    assert compute_live_info(events, now, SCHEDULE_WINDOW).live is False


def test_default_window_is_live_screen_window() -> None:
    assert DEFAULT_LIVE_WINDOW == LiveWindowPolicy(pre_roll=timedelta(minutes=30), post_roll=timedelta(hours=6))


def test_post_roll_differs_between_windows() -> None:
    events = [_event("R1", "PLM", START)]
    now = START + timedelta(hours=6, minutes=30)

    assert compute_live_info(events, now, LIVE_SCREEN_WINDOW).live is False
    assert compute_live_info(events, now, HOME_SCREEN_WINDOW).live is True


def test_window_bounds_are_inclusive() -> None:
    policy = LIVE_SCREEN_WINDOW
    assert policy.contains(START, START - timedelta(minutes=30))
    assert policy.contains(START, START + timedelta(hours=6))
    assert not policy.contains(START, START + timedelta(hours=6, seconds=1))


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        LiveWindowPolicy(pre_roll=timedelta(minutes=-1))


def test_first_live_event_in_list_order_wins() -> None:
    later_start_first = _event("LMSC-1", "LMSC", START + timedelta(minutes=10), track="Track B")
    earlier = _event("PLM-1", "PLM", START, track="Track A")

    info = compute_live_info([later_start_first, earlier], START + timedelta(minutes=15))

    assert info.live is True
    assert info.event_label == "Track B"
    assert info.active_race_id == "LMSC-1"
    assert info.active_class == "LMSC"
    assert info.active_classes == ("LMSC", "PLM")


def test_not_live_label_is_next_upcoming_event() -> None:
    past = _event("OLD", "SMT", START - timedelta(days=7), track="Old Track")
    far = _event("FAR", "SMT", START + timedelta(days=14), track="Far Track")
    soon = _event("SOON", "SMT", START + timedelta(days=7), track="Soon Track")

    info = compute_live_info([past, far, soon], START)

    assert info.live is False
    assert info.event_label == "Soon Track"
    assert info.next_event == soon
    assert info.active_race_id is None
    assert info.active_classes == ()


def test_not_live_without_upcoming_falls_back_to_first_event() -> None:
    past = _event("OLD", "SMT", START - timedelta(days=7), track="Old Track")

    assert compute_live_info([past], START).event_label == "Old Track"
    assert compute_live_info([], START).event_label == "Next event"


def test_active_and_next_event_helpers() -> None:
    live = _event("LIVE", "SMT", START)
    upcoming = _event("NEXT", "SMT", START + timedelta(days=1))

    assert active_events([live, upcoming], START) == [live]
    assert next_event([live, upcoming], START) == upcoming
