"""Helpers for safe debug logging.

Stream URLs and session payloads carry the backend session id, which is as
good as the session cookie. Everything logged at DEBUG passes through here.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_REDACTED = "<redacted>"

_SECRET_KEYS: frozenset[str] = frozenset(
    {"password", "sessionid", "session_id", "sid", "cookie", "set-cookie", "authorization"}
)

_SID_PARAM = re.compile(r"([?&](?:sid|session_id)=)[^&#]*", re.IGNORECASE)

_MAX_DEPTH = 8


def redact_url(url: str) -> str:
    """Replace session id query parameters in *url*."""
    return _SID_PARAM.sub(rf"\1{_REDACTED}", url)


def redact_for_log(value: Any, _depth: int = 0) -> Any:
    """Copy of a decoded JSON *value* with secrets masked.

    Keys named like a credential lose their value; strings that look like
    stream URLs lose their ``sid`` parameter.
    """
    if _depth >= _MAX_DEPTH:
        return "..."
    if isinstance(value, str):
        return redact_url(value) if "=" in value else value
    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED if str(key).lower() in _SECRET_KEYS else redact_for_log(item, _depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, _depth + 1) for item in value]
    return value
