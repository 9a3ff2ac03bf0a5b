"""Tolerant parsing of provider-supplied text fields.

Numeric fields arrive as text ("7.5", "142 min", "2008-2012") and may be
missing or hold placeholders like "N/A".  Every parser here returns 0 for
anything it cannot read; none of them raise.
"""

from __future__ import annotations

import math
import re
from typing import Optional

GENRE_SEPARATOR = ", "

_LEADING_FLOAT = re.compile(r"^\s*\+?(\d+(?:\.\d*)?|\.\d+)")
_LEADING_INT = re.compile(r"^\s*\+?(\d+)")


def parse_rating(raw: Optional[str]) -> float:
    """Parse a rating such as ``"7.5"`` or ``"7.5/10"``; 0.0 when unreadable."""
    if not raw:
        return 0.0
    m = _LEADING_FLOAT.match(raw)
    if not m:
        return 0.0
    value = float(m.group(1))
    if not math.isfinite(value):
        return 0.0
    return value


def parse_runtime(raw: Optional[str]) -> int:
    """Parse a runtime such as ``"142 min"`` into minutes; 0 when unreadable."""
    if not raw:
        return 0
    m = _LEADING_INT.match(raw)
    return int(m.group(1)) if m else 0


def parse_year(raw: Optional[str]) -> int:
    """Parse the leading year of ``"2008"`` or ``"2008–2012"``; 0 when unreadable."""
    if not raw:
        return 0
    m = _LEADING_INT.match(raw)
    return int(m.group(1)) if m else 0


def split_genres(raw: Optional[str]) -> list[str]:
    """Split a raw genre string on ``", "``.  No genre field means no genres."""
    if raw is None or raw == "":
        return []
    return raw.split(GENRE_SEPARATOR)


def clean_placeholder(value: object) -> Optional[str]:
    """Return ``None`` for missing values and OMDb's ``"N/A"`` placeholder."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == "N/A":
        return None
    return text
