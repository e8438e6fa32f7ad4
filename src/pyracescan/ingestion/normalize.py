"""Normalization helpers.

Centralizes slug, class-label and mount-path derivation so every consumer
computes the same paths from the same driver fields.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from pyracescan._constants import AUDIO_EXTENSIONS, ICECAST_PREFIX

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_CLASS_DELIMITERS = re.compile(r"[,/|;]")
_CLASS_TOKENS = re.compile(r"[A-Za-z]+")
_QUERY = re.compile(r"\?.*$", re.DOTALL)
_AUDIO_EXT = re.compile(r"\.(" + "|".join(AUDIO_EXTENSIONS) + r")$", re.IGNORECASE)


def safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def slugify(value: Any = "", fallback: str = "") -> str:
    """Lower-case, hyphen-delimited, URL-safe form of *value*.

    Returns *fallback* when nothing slug-worthy remains.
    """
    slug = _NON_ALNUM.sub("-", safe_str(value).strip().lower()).strip("-")
    return slug or safe_str(fallback)


def normalize_class_list(value: Any) -> list[str]:
    """Upper-cased class labels from a list, delimited string or ``[A, B]`` text."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [label for label in (safe_str(v).upper() for v in value if v) if label]
    text = safe_str(value)
    cleaned = [part.strip().upper() for part in _CLASS_DELIMITERS.split(text.replace("[", "").replace("]", ""))]
    labels = [label for label in cleaned if label]
    if labels:
        return labels
    return [token.upper() for token in _CLASS_TOKENS.findall(text)]


def unique(values: Iterable[str]) -> list[str]:
    """Drop empty and repeated values, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)


def strip_query_and_ext(value: Any = "") -> str:
    return _AUDIO_EXT.sub("", _QUERY.sub("", safe_str(value)))


def ensure_leading_slash(value: str) -> str:
    if not value:
        return ""
    return value if value.startswith("/") else f"/{value}"


def normalize_mount_base(mount_path: Any = "") -> str:
    """Bare mount path: no query, no audio extension, no ``/icecast`` prefix."""
    sanitized = ensure_leading_slash(strip_query_and_ext(mount_path))
    if not sanitized:
        return ""
    if sanitized.startswith(f"{ICECAST_PREFIX}/"):
        return sanitized[len(ICECAST_PREFIX) :]
    return sanitized


def derive_mounts(class_type: str, number: str, name: str) -> tuple[str, str]:
    """Plain and icecast-prefixed mount paths for a driver.

    ``/<class>-<number>-<name>.mp3``; the name slug falls back to the number
    when the driver has no name.
    """
    class_slug = slugify(class_type, "class")
    number_slug = slugify(number, "na")
    name_slug = slugify(name or number, "driver")
    plain = f"/{class_slug}-{number_slug}-{name_slug}.mp3"
    return plain, f"{ICECAST_PREFIX}{plain}"
