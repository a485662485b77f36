from datetime import date

import pytest

from worklog_analytics.schema import TaskRecord
from worklog_analytics.trends import build_trend, trend_changes


def sample_tasks():
    return [
        TaskRecord("t1", total_hours=8, approved_hours=6, month="January", status="done"),
        TaskRecord("t2", total_hours=4, approved_hours=5, month="January"),
        TaskRecord("t3", total_hours=84, month="March", status="done"),
    ]


def test_trend_length_order_and_labels():
    points = build_trend(sample_tasks(), [], 3, date(2024, 3, 15))
    assert [point.label for point in points] == ["Jan '24", "Feb '24", "Mar '24"]
    assert [(point.year, point.month_index) for point in points] == [(2024, 0), (2024, 1), (2024, 2)]


def test_empty_period_still_appears():
    points = build_trend(sample_tasks(), [], 3, date(2024, 3, 15))
    february = points[1]
    assert february.metrics.total_tasks == 0
    assert february.metrics.total_working_hours == 0
    assert february.productivity == 0
    assert february.working_days == 21
    assert february.completion_rate == 0.0


def test_points_carry_worked_and_available_days():
    points = build_trend(sample_tasks(), ["2024-01-15"], 3, date(2024, 3, 15))
    january = points[0]
    assert january.work_days == pytest.approx(1.5)
    assert january.working_days == 22
    assert january.metrics.total_leaves == 1
    assert january.productivity == pytest.approx(1.5 / 22)
    assert january.completion_rate == 50.0
    assert points[2].productivity == pytest.approx((84 / 8) / 21)


def test_trend_crosses_year_boundary():
    points = build_trend([], [], 4, date(2024, 2, 10))
    assert [point.label for point in points] == ["Nov '23", "Dec '23", "Jan '24", "Feb '24"]
    assert points[0].metrics.year == 2023


def test_trend_is_idempotent():
    tasks = sample_tasks()
    first = build_trend(tasks, ["2024-01-15"], 6, date(2024, 3, 15))
    second = build_trend(tasks, ["2024-01-15"], 6, date(2024, 3, 15))
    assert first == second


def test_quarter_trend():
    points = build_trend(sample_tasks(), [], 3, date(2024, 5, 10), granularity="quarter")
    assert [point.label for point in points] == ["Q3 '23", "Q4 '24", "Q1 '24"]
    q4 = points[1]
    assert q4.metrics.total_tasks == 3
    assert q4.metrics.total_working_days_in_month == 65
    assert q4.month_index == 0


def test_invalid_arguments():
    with pytest.raises(ValueError):
        build_trend([], [], -1, date(2024, 3, 15))
    with pytest.raises(ValueError):
        build_trend([], [], 3, date(2024, 3, 15), granularity="week")
    assert build_trend([], [], 0, date(2024, 3, 15)) == []


def test_trend_changes_direction():
    points = build_trend(sample_tasks(), [], 3, date(2024, 3, 15))
    changes = trend_changes(points)
    assert [change["period"] for change in changes] == ["Jan '24", "Feb '24", "Mar '24"]
    assert changes[0]["change"] == 0.0
    assert changes[1]["trend"] == "down"
    # previous period was zero, no change is reported
    assert changes[2]["change"] == 0.0
    assert changes[2]["trend"] == "neutral"
