"""Driver roster feed (``drivers.csv``)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pyracescan.ingestion.rows import HeaderIndex, parse_csv_row, split_lines
from pyracescan.models.driver import DriverRecord

_logger = logging.getLogger(__name__)

FALLBACK_DRIVERS: tuple[DriverRecord, ...] = (
    DriverRecord(number="62", name="Keelen Harvick", class_type="SMT"),
    DriverRecord(number="00", name="Chase Burrow", class_type="SMT"),
    DriverRecord(number="28", name="Landon S. Huffman", class_type="LMSC"),
)


def parse_drivers(csv_text: str | None) -> list[DriverRecord]:
    """Parse the roster, falling back to :data:`FALLBACK_DRIVERS`.

    Columns are looked up by header name (``driver number``, ``driver name``,
    ``class``, ``number_logo``, ``frequency_1 (hz)``); number, name and
    class fall back to positions 0, 1 and 5 when their header is missing.
    """
    lines = split_lines(csv_text)
    if len(lines) < 2:
        _logger.warning("Driver feed empty or header-only, using fallback roster")
        return list(FALLBACK_DRIVERS)

    header = HeaderIndex.from_line(lines[0])
    drivers: list[DriverRecord] = []
    for line in lines[1:]:
        cols = parse_csv_row(line)
        drivers.append(
            DriverRecord(
                number=header.get(cols, "driver number", 0),
                name=header.get(cols, "driver name", 1),
                class_list=header.get(cols, "class", 5),
                logo=header.get(cols, "number_logo"),
                frequency=header.get(cols, "frequency_1 (hz)"),
            )
        )
    if not drivers:
        return list(FALLBACK_DRIVERS)
    return drivers


def find_mount_collisions(drivers: Iterable[DriverRecord]) -> dict[str, list[DriverRecord]]:
    """Plain mounts shared by more than one driver.

    Mount paths are derived from class, number and name only, so two roster
    rows that slug the same way resolve to the same stream.
    """
    by_mount: dict[str, list[DriverRecord]] = {}
    for driver in drivers:
        by_mount.setdefault(driver.plain_mount, []).append(driver)
    return {mount: group for mount, group in by_mount.items() if len(group) > 1}
