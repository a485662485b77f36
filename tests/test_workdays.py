from datetime import date

from worklog_analytics.workdays import count_weekdays, count_weekdays_between, days_in_month


def test_count_weekdays_known_months():
    assert count_weekdays(2024, 0) == 23
    assert count_weekdays(2024, 1) == 21
    assert count_weekdays(2024, 2) == 21
    assert count_weekdays(2024, 5) == 20


def test_leap_february():
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2023, 1) == 28
    assert count_weekdays(2023, 1) == 20


def test_count_weekdays_between_is_inclusive():
    # Friday to Monday
    assert count_weekdays_between(date(2024, 1, 5), date(2024, 1, 8)) == 2
    assert count_weekdays_between(date(2024, 1, 6), date(2024, 1, 7)) == 0
    assert count_weekdays_between(date(2024, 1, 8), date(2024, 1, 5)) == 0
