"""Month-granularity date helpers.

Subscriptions are billed per calendar month, so every date the service handles
is a ``date`` pinned to the 1st of its month. Externally months travel as
``MM-YYYY`` strings.
"""
from __future__ import annotations

import re
from datetime import date, datetime

MONTH_FORMAT = "%m-%Y"
MONTH_PATTERN = r"^(0[1-9]|1[0-2])-(19\d{2}|20\d{2})$"

_MONTH_RE = re.compile(MONTH_PATTERN)


class MonthFormatError(ValueError):
    """Raised when a string is not a valid ``MM-YYYY`` month."""


def parse_month(value: str) -> date:
    """Parse ``MM-YYYY`` into the first day of that month."""
    if not isinstance(value, str) or not _MONTH_RE.match(value):
        raise MonthFormatError(f"invalid month {value!r}, expected MM-YYYY")
    return datetime.strptime(value, MONTH_FORMAT).date().replace(day=1)


def format_month(value: date) -> str:
    return value.strftime(MONTH_FORMAT)


def months_spanned(start: date, end: date) -> int:
    """Inclusive number of calendar months between two month-dates."""
    return (end.year - start.year) * 12 + end.month - start.month + 1
