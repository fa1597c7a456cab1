"""
utils.py

Small numeric and formatting helpers shared by the AreaSync core and UI.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* into ``[lo, hi]``."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity.

    ``-0.5 -> 0``, ``0.5 -> 1``, ``2.5 -> 3``; unlike ``round()``.
    """
    return int(math.floor(value + 0.5))


def snap_to_step(value: float, step: float) -> float:
    """Snap *value* to the nearest multiple of *step*.

    A non-positive step leaves the value untouched.
    """
    if not step or step <= 0:
        return value
    return round_half_up(value / step) * step


def format_xy(x: float, y: float) -> str:
    """Format a point the way the edit menu pre-fills it: ``"(x, y)"``."""
    return f"({round_half_up(x)}, {round_half_up(y)})"


def parse_hex_rgba(s: str) -> Optional[Tuple[int, int, int, int]]:
    """
    Parse a hex colour string to an ``(r, g, b, a)`` tuple.

    Args:
        s: Hex string like "#RRGGBB" or "#RRGGBBAA"

    Returns:
        Parsed channels (alpha 255 when omitted), or None if the string
        is not a valid colour
    """
    if not s:
        return None
    s = s.strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) not in (6, 8):
        return None
    try:
        r = int(s[0:2], 16)
        g = int(s[2:4], 16)
        b = int(s[4:6], 16)
        a = int(s[6:8], 16) if len(s) == 8 else 255
    except ValueError:
        return None
    return r, g, b, a
