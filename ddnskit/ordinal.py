"""Ordinal number formatting."""

from __future__ import annotations

_CHINESE = "zh"


def ordinal(x: int, lang: str) -> str:
    """Return ``x`` with an English ordinal suffix; Chinese gets the bare number."""
    s = str(x)
    if lang == _CHINESE:
        return s

    # Remainders keep the sign of the dividend, so negatives never get st/nd/rd.
    last = x % 10 if x >= 0 else -(-x % 10)
    last_two = x % 100 if x >= 0 else -(-x % 100)

    suffix = "th"
    if last == 1 and last_two != 11:
        suffix = "st"
    elif last == 2 and last_two != 12:
        suffix = "nd"
    elif last == 3 and last_two != 13:
        suffix = "rd"
    return s + suffix