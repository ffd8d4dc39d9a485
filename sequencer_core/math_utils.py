from __future__ import annotations

import re
from typing import Any

U16_MAX = 65535

_U16_TOKEN = re.compile(r"\+?[0-9]+")


def clamp_int(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def parse_u16(text: Any) -> int:
    token = str(text).strip()
    # ASCII digits with an optional leading '+'; no '_' separators or other scripts
    if _U16_TOKEN.fullmatch(token) is None:
        raise ValueError(f"{token!r} is not an unsigned integer")
    value = int(token)
    if value > U16_MAX:
        raise ValueError(f"{value} is outside 0..{U16_MAX}")
    return value


def coerce_u16(v: Any, fallback: int) -> int:
    try:
        return parse_u16(v)
    except (TypeError, ValueError):
        return int(fallback)
