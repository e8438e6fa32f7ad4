"""Race schedule feed (``events.csv``)."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime

from pyracescan._constants import (
    EASTERN_OFFSET,
    KNOWN_TRACK_CLASSES,
    SPLIT_CLASSES,
    SPLIT_SECOND_RACE_DELAY,
)
from pyracescan.ingestion.normalize import unique
from pyracescan.ingestion.rows import HeaderIndex, parse_csv_row, split_lines
from pyracescan.models.event import EventRecord

_logger = logging.getLogger(__name__)

# A class token counts only as the whole track name or glued to a trailing
# hyphen ("Daytona-LMSC"). "Daytona - LMSC" is not matched.
_TRACK_CLASS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (klass, re.compile(rf"(?:^|-){klass}$", re.IGNORECASE)) for klass in KNOWN_TRACK_CLASSES
)


def parse_event_start(date: str, time: str) -> datetime | None:
    """``YYYY-MM-DD`` + ``HH:MM`` at the fixed US Eastern offset."""
    try:
        naive = datetime.strptime(f"{date.strip()}T{time.strip()}", "%Y-%m-%dT%H:%M")
    except ValueError:
        return None
    return naive.replace(tzinfo=EASTERN_OFFSET)


def detect_track_class(track: str) -> str:
    """Class label encoded in a track name, or ``""``."""
    value = track.strip()
    for klass, pattern in _TRACK_CLASS_PATTERNS:
        if pattern.search(value):
            return klass
    return ""


def parse_events(csv_text: str | None) -> list[EventRecord]:
    """Parse the schedule in feed order.

    A row with no class (neither a ``class`` column value nor a class in the
    track name) describes a PLM race and an LMSC race two hours later, and
    yields two records with ``-PLM``/``-LMSC`` suffixed race ids.
    """
    lines = split_lines(csv_text)
    if len(lines) < 2:
        return []

    header = HeaderIndex.from_line(lines[0])
    events: list[EventRecord] = []
    for line in lines[1:]:
        cols = parse_csv_row(line)
        race_id = header.get(cols, "raceid", 0)
        track = header.get(cols, "track", 1)
        location = header.get(cols, "location", 2)
        date = header.get(cols, "date", 3)
        time = header.get(cols, "time", 4)
        klass = header.get(cols, "class").upper() or detect_track_class(track)

        start = parse_event_start(date, time)
        if start is None:
            _logger.warning("Skipping event %r: unparseable start %r %r", race_id, date, time)
            continue

        if klass:
            events.append(EventRecord(race_id=race_id, class_type=klass, track=track, location=location, start=start))
            continue

        first, second = SPLIT_CLASSES
        events.append(
            EventRecord(race_id=f"{race_id}-{first}", class_type=first, track=track, location=location, start=start)
        )
        events.append(
            EventRecord(
                race_id=f"{race_id}-{second}",
                class_type=second,
                track=track,
                location=location,
                start=start + SPLIT_SECOND_RACE_DELAY,
            )
        )
    return events


def sort_by_start(events: Iterable[EventRecord]) -> list[EventRecord]:
    """Chronological order, stable for equal starts."""
    return sorted(events, key=lambda evt: evt.start)


def event_classes(events: Iterable[EventRecord]) -> list[str]:
    """Distinct event classes in first-seen order."""
    return unique(evt.class_type for evt in events)
