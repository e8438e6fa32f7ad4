"""Ordered stream URL candidates for a mount."""

from __future__ import annotations

import logging
from urllib.parse import quote

from pyracescan._constants import ICECAST_PREFIX
from pyracescan._redact import redact_url
from pyracescan.config import RaceScanConfig
from pyracescan.ingestion.normalize import normalize_mount_base, unique

_logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone; the relay decodes with the same rules.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _with_extension(path: str, ext: str) -> str:
    return path if path.endswith(ext) else f"{path}{ext}"


def proxy_url(mount_path: str, session_id: str | None, config: RaceScanConfig) -> str:
    """Relay URL for *mount_path*, carrying the session id when known."""
    url = f"{config.stream_proxy_url}?mount={encode_uri_component(mount_path)}"
    if session_id:
        url = f"{url}&sid={encode_uri_component(session_id)}"
    return url


def build_stream_candidates(
    mount_path: str,
    session_id: str | None = None,
    config: RaceScanConfig | None = None,
) -> list[str]:
    """URLs to try for *mount_path*, best first and without duplicates.

    The backend relay comes first (with the session id when there is one),
    then every configured origin with the ``/icecast``-prefixed and the bare
    path, for each configured extension.
    """
    config = config or RaceScanConfig()
    base = normalize_mount_base(mount_path)
    if not base:
        return []

    primary = f"{ICECAST_PREFIX}{base}"
    paths = (primary, base)
    extensions = config.stream_extensions or (".mp3",)

    candidates = [proxy_url(_with_extension(primary, extensions[0]), session_id, config)]
    for origin in config.stream_origins:
        for path in paths:
            for ext in extensions:
                candidates.append(f"{origin}{_with_extension(path, ext)}")

    result = unique(candidates)
    _logger.debug("Stream candidates for %s: %s", base, [redact_url(url) for url in result])
    return result


def with_cache_buster(url: str, now_ms: int) -> str:
    """Append a ``ts`` query parameter so proxies do not serve a stale stream."""
    if not url:
        return url
    joiner = "&" if "?" in url else "?"
    return f"{url}{joiner}ts={now_ms}"
