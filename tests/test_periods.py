from datetime import date

import pytest

from worklog_analytics.errors import InvalidPeriodError
from worklog_analytics.periods import (
    last_n_months,
    last_n_quarters,
    month_index,
    period_bounds,
    quarter_for_month,
    resolve_period,
)


def test_quarter_mapping_is_fiscal():
    assert resolve_period("Q1", 2024).month_names == ("April", "May", "June")
    assert resolve_period("Q2", 2024).month_names == ("July", "August", "September")
    assert resolve_period("Q3", 2024).month_names == ("October", "November", "December")
    assert resolve_period("Q4", 2024).month_names == ("January", "February", "March")


def test_q1_does_not_depend_on_reference_year():
    for year in (1999, 2023, 2024, 2031):
        period = resolve_period("Q1", year)
        assert period.month_indices == (3, 4, 5)
        assert period.year == year


def test_month_selector_is_case_sensitive():
    assert resolve_period("January", 2024).month_indices == (0,)
    with pytest.raises(InvalidPeriodError):
        resolve_period("january", 2024)
    with pytest.raises(InvalidPeriodError):
        resolve_period("Jan", 2024)


def test_all_and_year_selectors():
    everything = resolve_period("all", 2024)
    assert everything.is_all_time
    assert everything.month_indices == ()
    assert everything.label == "All Months"
    assert resolve_period("all", 2024, quarter_view=True).label == "All Quarters"

    year = resolve_period("2023", 2024)
    assert year.is_year
    assert year.year == 2023
    assert year.month_indices == ()
    assert resolve_period(2025, 2024).label == "2025"


def test_invalid_selectors():
    for selector in ("Q5", "", "last month", "24", "0000", 0, True):
        with pytest.raises(InvalidPeriodError):
            resolve_period(selector, 2024)


def test_month_helpers():
    assert month_index("December") == 11
    assert quarter_for_month(0) == "Q4"
    assert quarter_for_month(4) == "Q1"
    assert period_bounds(2024, 1) == (date(2024, 2, 1), date(2024, 2, 29))
    assert period_bounds(2024, 11) == (date(2024, 12, 1), date(2024, 12, 31))


def test_last_n_months_crosses_year_boundary():
    assert last_n_months(4, date(2024, 2, 10)) == [(2023, 10), (2023, 11), (2024, 0), (2024, 1)]
    assert last_n_months(0, date(2024, 2, 10)) == []


def test_last_n_quarters_is_chronological():
    assert last_n_quarters(3, date(2024, 5, 10)) == [(2023, "Q3"), (2024, "Q4"), (2024, "Q1")]
