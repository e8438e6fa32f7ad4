"""Reconcile computed driver mounts with what Icecast reports live."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from pyracescan.ingestion.normalize import slugify, unique
from pyracescan.models.driver import DriverRecord
from pyracescan.models.live import LiveInfo
from pyracescan.models.stream import ActiveMountSet, DriverStatus, MountMatch
from pyracescan.policy import StatusPolicy

_logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def mount_hint(driver: DriverRecord) -> str:
    """``<class>-<number>`` fragment used to spot renamed mounts."""
    return f"{driver.class_type}-{slugify(driver.number)}".lower()


def resolve_driver(
    driver: DriverRecord,
    active: ActiveMountSet,
    policy: StatusPolicy = StatusPolicy.ASSUME_LIVE_WHEN_STATUS_UNKNOWN,
) -> DriverStatus:
    """Pick the mount path to play for *driver*.

    Order: exact plain mount, exact icecast mount, any active path
    containing the ``<class>-<number>`` hint, and finally the computed plain
    mount so playback can still be attempted.
    """
    if active.contains(driver.plain_mount):
        path, match = driver.plain_mount, MountMatch.PLAIN
    elif active.contains(driver.icecast_mount):
        path, match = driver.icecast_mount, MountMatch.ICECAST
    else:
        hint = mount_hint(driver)
        alt = next((m for m in active.sorted_mounts() if hint in m.lower()), None)
        if alt is not None:
            path, match = alt, MountMatch.HINT
        else:
            path, match = driver.plain_mount, MountMatch.COMPUTED

    if active.is_empty and policy == StatusPolicy.ASSUME_LIVE_WHEN_STATUS_UNKNOWN:
        is_active = True
    else:
        is_active = active.contains(path)
    return DriverStatus(driver=driver, active_path=path, is_active=is_active, match=match)


def resolve_drivers(
    drivers: Iterable[DriverRecord],
    active: ActiveMountSet,
    policy: StatusPolicy = StatusPolicy.ASSUME_LIVE_WHEN_STATUS_UNKNOWN,
) -> list[DriverStatus]:
    statuses = [resolve_driver(driver, active, policy) for driver in drivers]
    _logger.debug(
        "Resolved %d drivers against %d active mounts (%d active)",
        len(statuses),
        len(active.mounts),
        sum(1 for s in statuses if s.is_active),
    )
    return statuses


# ------------------------------------------------------------------
# Roster filtering
# ------------------------------------------------------------------


def _live_classes(live_info: LiveInfo) -> frozenset[str]:
    if not live_info.live:
        return frozenset()
    return frozenset(c.upper() for c in live_info.active_classes if c)


def class_options(statuses: Sequence[DriverStatus], live_info: LiveInfo) -> list[str]:
    """Class filter choices: ``ALL`` then sorted classes.

    While an event is live only the classes racing are offered.
    """
    classes = sorted(set(unique(c.upper() for s in statuses for c in s.driver.classes)))
    allowed = _live_classes(live_info)
    if allowed:
        classes = [c for c in classes if c in allowed]
    return ["ALL", *classes]


def _normalize_query(value: str) -> str:
    return _WHITESPACE.sub(" ", value.lower()).strip()


def filter_drivers(
    statuses: Sequence[DriverStatus],
    live_info: LiveInfo,
    class_filter: str = "ALL",
    query: str = "",
) -> list[DriverStatus]:
    """Drivers matching the live classes, the class filter and a search query.

    The query matches the name (also with whitespace removed) or the number.
    """
    allowed = _live_classes(live_info)
    wanted_class = class_filter.upper()
    trimmed = _normalize_query(query)
    compact_query = trimmed.replace(" ", "")

    result: list[DriverStatus] = []
    for status in statuses:
        classes = {c.upper() for c in status.driver.classes}
        if allowed and not classes & allowed:
            continue
        if wanted_class != "ALL" and wanted_class not in classes:
            continue
        if trimmed:
            name = _normalize_query(status.driver.name)
            number = status.driver.number.lower().strip()
            if not (trimmed in name or compact_query in name.replace(" ", "") or trimmed in number):
                continue
        result.append(status)
    return result
