"""Weekday arithmetic. Saturdays and Sundays are the only non-working days."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta

import numpy as np


def days_in_month(year: int, month_index: int) -> int:
    return monthrange(year, month_index + 1)[1]


def count_weekdays_between(start: date, end: date) -> int:
    """Count Monday-Friday days in the inclusive range ``[start, end]``."""

    if end < start:
        return 0
    stop = end + timedelta(days=1)
    return int(np.busday_count(np.datetime64(start, "D"), np.datetime64(stop, "D")))


def count_weekdays(year: int, month_index: int) -> int:
    """Count weekdays in a month given by its 0-based index."""

    first = date(year, month_index + 1, 1)
    last = date(year, month_index + 1, days_in_month(year, month_index))
    return count_weekdays_between(first, last)
