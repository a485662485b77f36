"""Period selectors: months, fiscal quarters, years and all time."""

from __future__ import annotations

import logging
from calendar import monthrange
from dataclasses import dataclass
from datetime import date

from worklog_analytics.errors import InvalidPeriodError

logger = logging.getLogger(__name__)

ALL_PERIODS = "all"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Fiscal year starts in April. Q4 is January-March of the same calendar year.
FISCAL_QUARTERS = {
    "Q1": (3, 4, 5),
    "Q2": (6, 7, 8),
    "Q3": (9, 10, 11),
    "Q4": (0, 1, 2),
}


@dataclass(frozen=True)
class ResolvedPeriod:
    """A period selector resolved against a reference year."""

    selector: str
    label: str
    year: int
    month_indices: tuple[int, ...] = ()
    is_all_time: bool = False
    is_year: bool = False

    @property
    def is_quarter(self) -> bool:
        return self.selector in FISCAL_QUARTERS

    @property
    def month_names(self) -> tuple[str, ...]:
        return tuple(MONTH_NAMES[index] for index in self.month_indices)

    @property
    def spans_months(self) -> bool:
        return bool(self.month_indices)


def month_name(index: int) -> str:
    return MONTH_NAMES[index]


def month_index(name: str) -> int:
    """Return the 0-based index of an exact, case-sensitive month name."""

    try:
        return MONTH_NAMES.index(name)
    except ValueError:
        raise InvalidPeriodError(name) from None


def quarter_for_month(index: int) -> str:
    """Return the fiscal quarter code containing a 0-based month index."""

    for code, months in FISCAL_QUARTERS.items():
        if index in months:
            return code
    raise InvalidPeriodError(index)


def month_label_for_date(value: date) -> str:
    return MONTH_NAMES[value.month - 1]


def _parse_year(selector) -> int | None:
    if isinstance(selector, bool):
        return None
    if isinstance(selector, int):
        return selector if selector > 0 else None
    if isinstance(selector, str) and len(selector) == 4 and selector.isdigit():
        year = int(selector)
        return year if year > 0 else None
    return None


def resolve_period(selector, reference_year: int, quarter_view: bool = False) -> ResolvedPeriod:
    """Resolve a month name, quarter code, year or 'all' into a period."""

    if selector is None or selector == ALL_PERIODS:
        label = "All Quarters" if quarter_view else "All Months"
        return ResolvedPeriod(selector=ALL_PERIODS, label=label, year=reference_year, is_all_time=True)

    if isinstance(selector, str) and selector in FISCAL_QUARTERS:
        return ResolvedPeriod(
            selector=selector,
            label=selector,
            year=reference_year,
            month_indices=FISCAL_QUARTERS[selector],
        )

    if isinstance(selector, str) and selector in MONTH_NAMES:
        return ResolvedPeriod(
            selector=selector,
            label=selector,
            year=reference_year,
            month_indices=(MONTH_NAMES.index(selector),),
        )

    year = _parse_year(selector)
    if year is not None:
        return ResolvedPeriod(selector=str(year), label=str(year), year=year, is_year=True)

    logger.debug("Rejected period selector %r", selector)
    raise InvalidPeriodError(selector)


def period_bounds(year: int, index: int) -> tuple[date, date]:
    """First and last calendar day of a month."""

    last_day = monthrange(year, index + 1)[1]
    return date(year, index + 1, 1), date(year, index + 1, last_day)


def last_n_months(count: int, reference_date: date) -> list[tuple[int, int]]:
    """Return ``(year, month_index)`` pairs for the last ``count`` months, oldest first."""

    months = []
    absolute = reference_date.year * 12 + reference_date.month - 1
    for offset in range(count - 1, -1, -1):
        year, index = divmod(absolute - offset, 12)
        months.append((year, index))
    return months


def last_n_quarters(count: int, reference_date: date) -> list[tuple[int, str]]:
    """Return ``(calendar_year, quarter_code)`` pairs for the last ``count`` fiscal quarters.

    The calendar year is the year of the quarter's months, so Q4 (Jan-Mar)
    carries the year after the Q1-Q3 quarters of the same fiscal year.
    """

    codes = ("Q4", "Q1", "Q2", "Q3")
    current = reference_date.year * 4 + (reference_date.month - 1) // 3
    quarters = []
    for offset in range(count - 1, -1, -1):
        year, slot = divmod(current - offset, 4)
        quarters.append((year, codes[slot]))
    return quarters
