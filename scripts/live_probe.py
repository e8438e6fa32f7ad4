#!/usr/bin/env python3
"""Dump the live state the pyracescan library derives from the backend.

Fetches the schedule, roster and Icecast status once and prints the live
window summary, every driver's resolved mount and, for the first active
driver (or ``--driver``), the ordered stream candidates.

Usage
-----
::

    python scripts/live_probe.py
    python scripts/live_probe.py --driver 28 --probe
    RACESCAN_BASE_URL=http://localhost:3000 python scripts/live_probe.py --json

Options::

    --driver NUMBER     Show candidates for this car number
    --session-id SID    Session id appended to the relay URL
    --probe             HEAD each candidate and report the status
    --json              Output as machine-readable JSON
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyracescan import RaceScanClient, RaceScanConfig  # noqa: E402
from pyracescan._redact import redact_url  # noqa: E402
from pyracescan.models.live import LiveSnapshot  # noqa: E402
from pyracescan.models.stream import DriverStatus  # noqa: E402
from pyracescan.streams.candidates import build_stream_candidates  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    bar = "─" * 60
    return f"\n{bar}\n  {title}\n{bar}"


def _driver_row(status: DriverStatus) -> dict[str, Any]:
    return {
        "number": status.driver.number,
        "name": status.driver.name,
        "class": status.driver.class_type,
        "mount": status.active_path,
        "active": status.is_active,
        "match": str(status.match),
    }


def _pick_driver(snapshot: LiveSnapshot, number: str | None) -> DriverStatus | None:
    if number:
        return snapshot.find_driver(number)
    return snapshot.first_active()


async def _probe_candidates(client: RaceScanClient, candidates: list[str]) -> list[dict[str, Any]]:
    backend = client.stream_backend()
    results: list[dict[str, Any]] = []
    for url in candidates:
        info = await backend.probe(url)
        results.append({"url": redact_url(url), **info})
    return results


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(description="Dump RaceScan live state and stream candidates")
    parser.add_argument("--driver", help="Show candidates for this car number (default: first active)")
    parser.add_argument("--session-id", help="Session id appended to the relay URL")
    parser.add_argument("--probe", action="store_true", help="HEAD each candidate and report the status")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = RaceScanConfig.from_env()
    async with RaceScanClient(config) as client:
        snapshot = await client.load_live_snapshot()
        selected = _pick_driver(snapshot, args.driver)
        candidates: list[str] = []
        if selected is not None:
            mount = selected.active_path or selected.driver.plain_mount
            candidates = build_stream_candidates(mount, args.session_id, config)
        probes = await _probe_candidates(client, candidates) if args.probe else []

    info = snapshot.live_info
    if args.json_mode:
        payload = {
            "offline": snapshot.offline,
            "live": info.live,
            "event_label": info.event_label,
            "active_race_id": info.active_race_id,
            "active_classes": list(info.active_classes),
            "active_mounts": snapshot.active_mounts.sorted_mounts(),
            "status_known": snapshot.active_mounts.status_known,
            "drivers": [_driver_row(s) for s in snapshot.drivers],
            "candidates": [redact_url(url) for url in candidates],
            "probes": probes,
        }
        print(json.dumps(payload, indent=2))
        return

    out: list[str] = [_section("Live window")]
    out.append(f"  offline        = {snapshot.offline}")
    out.append(f"  live           = {info.live}")
    out.append(f"  event_label    = {info.event_label!r}")
    out.append(f"  active_race_id = {info.active_race_id!r}")
    out.append(f"  active_classes = {list(info.active_classes)}")
    out.append(f"  mounts         = {snapshot.active_mounts.sorted_mounts()}")

    out.append(_section(f"Drivers ({len(snapshot.drivers)})"))
    for status in snapshot.drivers:
        flag = "LIVE" if status.is_active else "    "
        out.append(
            f"  {flag} #{status.driver.number:<4} {status.driver.name:<28} {status.active_path} [{status.match}]"
        )

    if selected is None:
        out.append("\n  No driver selected.")
    else:
        out.append(_section(f"Candidates for #{selected.driver.number}"))
        for index, url in enumerate(candidates, start=1):
            out.append(f"  {index:>2}. {redact_url(url)}")
        for result in probes:
            outcome = result.get("status", result.get("error"))
            out.append(f"  probe {result['url']}: {outcome} {result.get('content_type') or ''}".rstrip())

    print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
