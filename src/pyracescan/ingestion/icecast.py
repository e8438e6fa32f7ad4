"""Icecast ``status-json.xsl`` parsing."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from pyracescan.models.stream import ActiveMountSet

_MOUNT_TAIL = re.compile(r"/[A-Za-z0-9_-]+\.mp3$")


def _listen_path(listen: str) -> str:
    """Path component of a listen URL; regex tail match when not absolute."""
    try:
        parts = urlsplit(listen)
    except ValueError:
        parts = None
    if parts is not None and parts.scheme and parts.netloc:
        return parts.path
    match = _MOUNT_TAIL.search(listen)
    return match.group(0) if match else ""


def _sources(status_json: Any) -> list[Any]:
    if not isinstance(status_json, dict):
        return []
    icestats = status_json.get("icestats")
    if not isinstance(icestats, dict):
        return []
    source = icestats.get("source")
    if isinstance(source, list):
        return source
    if source:
        return [source]
    return []


def parse_active_mounts(status_json: Any) -> ActiveMountSet:
    """Mount paths of every source Icecast reports.

    ``icestats.source`` may be a single object or a list. Only ``.mp3``
    paths are kept. A payload without ``icestats`` yields an empty set with
    ``status_known=False``.
    """
    known = isinstance(status_json, dict) and isinstance(status_json.get("icestats"), dict)
    mounts: set[str] = set()
    for source in _sources(status_json):
        if not isinstance(source, dict):
            continue
        listen = str(source.get("listenurl") or source.get("listen_url") or "")
        path = _listen_path(listen)
        if path.endswith(".mp3"):
            mounts.add(path)
    return ActiveMountSet(mounts=frozenset(mounts), status_known=known)


UNKNOWN_STATUS = ActiveMountSet(status_known=False)
