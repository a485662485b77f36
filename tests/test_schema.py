from datetime import date

from worklog_analytics.schema import TaskRecord, TrendPoint, normalize_status


def test_normalize_status_vocabularies():
    assert normalize_status("done") == "done"
    assert normalize_status("Completed") == "done"
    assert normalize_status("Closed") == "done"
    assert normalize_status("approved") == "done"
    assert normalize_status("In Progress") == "in-progress"
    assert normalize_status("In Development") == "in-progress"
    assert normalize_status("Code Review") == "in-progress"
    assert normalize_status("pending") == "todo"
    assert normalize_status("New") == "todo"
    assert normalize_status("rejected") == "todo"
    assert normalize_status(None) == "todo"
    assert normalize_status("something else") == "todo"


def test_period_month_prefers_label_over_date():
    assert TaskRecord("a", month="March", task_date=date(2024, 1, 5)).period_month == "March"
    assert TaskRecord("a", task_date=date(2024, 1, 5)).period_month == "January"
    assert TaskRecord("a").period_month is None


def test_completed_follows_status():
    assert TaskRecord("a", status="done").completed
    assert not TaskRecord("a", status="in-progress").completed


def test_trend_point_as_dict_is_flat():
    row = TrendPoint(label="Jan '24", year=2024, month_index=0, work_days=1.5, working_days=22).as_dict()
    assert row["period"] == "Jan '24"
    assert row["workDays"] == 1.5
    assert row["workingDays"] == 22
    assert row["productivity"] == 0.0
