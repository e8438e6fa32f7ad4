"""Row-level CSV helpers for the loosely escaped RaceScan feeds."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Sequence

_LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(text: str | None) -> list[str]:
    """Split feed text into lines, dropping empty ones."""
    if not text:
        return []
    return [line for line in _LINE_SPLIT.split(text) if line]


def parse_csv_row(line: str = "") -> list[str]:
    """Split one CSV line into trimmed fields.

    Double quotes toggle quoting, ``""`` inside quotes is a literal quote, and
    commas inside quotes do not split. Unbalanced quotes are tolerated.
    """
    out: list[str] = []
    cur: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                cur.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            out.append("".join(cur).strip())
            cur = []
        else:
            cur.append(ch)
        i += 1
    out.append("".join(cur).strip())
    return out


@dataclasses.dataclass(frozen=True)
class HeaderIndex:
    """Case-insensitive header lookup with positional fallbacks."""

    names: tuple[str, ...]

    @classmethod
    def from_line(cls, header_line: str) -> HeaderIndex:
        # Feed headers are never quoted.
        return cls(tuple(h.strip().lower() for h in header_line.split(",")))

    def position(self, name: str) -> int | None:
        try:
            return self.names.index(name.lower())
        except ValueError:
            return None

    def get(self, cols: Sequence[str], name: str, fallback: int | None = None) -> str:
        """Value of column *name*, else column *fallback*, else ``""``.

        Short rows yield empty strings instead of failing.
        """
        idx = self.position(name)
        if idx is None:
            idx = fallback
        if idx is None or idx >= len(cols):
            return ""
        return cols[idx]
