"""
Temporal expression normalization.

Turns loosely formatted year strings such as "1939年", "05" or "今年" into an
integer year. Anything that cannot be read as a year becomes None.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Callable

# First run of 1-4 digits, optionally followed by a unit marker
_YEAR_PATTERN = re.compile(r"(\d{1,4})\s*(?:年|年代|ad|ce|yr)?", re.IGNORECASE)

# Markers meaning "the current year"
_RELATIVE_NOW_CJK = ("今天", "今年", "现在", "目前", "当前", "如今", "当下")
_RELATIVE_NOW_EN = re.compile(r"\b(?:today|now|nowadays|present|this year|current year)\b", re.IGNORECASE)

# Two-digit years below this pivot belong to the 2000s, the rest to the 1900s
TWO_DIGIT_PIVOT = 50


def expand_two_digit_year(year: int) -> int:
    """Disambiguate 1-99 as a two-digit year; other values pass through."""
    if 0 < year < 100:
        return 2000 + year if year < TWO_DIGIT_PIVOT else 1900 + year
    return year


def normalize_year(expression: Any, today: Callable[[], date] = date.today) -> int | None:
    """
    Convert a free-text time expression into a year.

    Rules, first match wins:
      1. a run of 1-4 digits (with an optional unit like 年) is the year;
         1-99 is read as a two-digit year (<50 -> 20xx, else 19xx)
      2. a "now" marker (今天, 今年, today, now, ...) is the current year
      3. anything else is None

    Never raises.
    """
    if expression is None:
        return None
    if isinstance(expression, bool):
        return None
    if isinstance(expression, int):
        return expand_two_digit_year(expression)
    text = str(expression).strip()
    if not text:
        return None

    match = _YEAR_PATTERN.search(text)
    if match:
        return expand_two_digit_year(int(match.group(1)))

    if any(marker in text for marker in _RELATIVE_NOW_CJK) or _RELATIVE_NOW_EN.search(text):
        return today().year

    return None
