from datetime import date, datetime, timezone

from worklog_analytics.export import build_task_link, export_filename, shape_export
from worklog_analytics.metrics import calculate_metrics
from worklog_analytics.schema import JiraIntegration, LeaveRecord, ProjectRecord, TaskRecord
from worklog_analytics.trends import build_trend

TODAY = date(2024, 3, 15)
EXPORTED_AT = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def sample_projects():
    return [
        ProjectRecord("p1", "Portal", JiraIntegration("https://jira.example.com/browse/", "PORT")),
        ProjectRecord("p2", "Internal"),
    ]


def sample_tasks():
    return [
        TaskRecord("t1", 8.25, 6.5, project="Portal", project_id="p1", month="January", task_number="101"),
        TaskRecord("t2", 4, 5, project="Internal", project_id="p2", month="January", task_number="7"),
        TaskRecord("t3", 3, 3, project="Portal", month="January", task_number="102", status="done"),
    ]


def test_task_link_is_concatenated():
    project = sample_projects()[0]
    task = sample_tasks()[0]
    assert build_task_link(task, project) == "https://jira.example.com/browse/PORT-101"


def test_task_link_degrades_to_none():
    task = sample_tasks()[0]
    assert build_task_link(task, None) is None
    assert build_task_link(task, ProjectRecord("p2", "Internal")) is None
    assert build_task_link(task, ProjectRecord("p3", "X", JiraIntegration("https://jira", ""))) is None
    assert build_task_link(TaskRecord("t9"), sample_projects()[0]) is None


def test_shape_export_sections():
    tasks = sample_tasks()
    leaves = [LeaveRecord(date(2024, 1, 15), "vacation"), "2024-01-16", "garbage"]
    metrics = calculate_metrics(tasks, leaves, "January", 2024, today=TODAY)
    trend = build_trend(tasks, leaves, 3, TODAY)

    payload = shape_export(metrics, trend, tasks, leaves, sample_projects(), exported_at=EXPORTED_AT)

    assert set(payload.sections()) == {"summary", "trend", "tasks", "leaves"}
    assert [row["link"] for row in payload.tasks] == [
        "https://jira.example.com/browse/PORT-101",
        None,
        "https://jira.example.com/browse/PORT-102",
    ]
    assert payload.tasks[2]["completed"] is True
    assert payload.leaves == [
        {"date": "2024-01-15", "category": "vacation"},
        {"date": "2024-01-16", "category": ""},
    ]
    assert [row["period"] for row in payload.trend] == ["Jan '24", "Feb '24", "Mar '24"]
    assert payload.metadata == {
        "exportedAt": "2024-03-15T12:00:00+00:00",
        "period": "January 2024",
        "filename": "TaskFlow_January_2024",
    }


def test_summary_round_trip_keeps_values():
    tasks = sample_tasks()
    metrics = calculate_metrics(tasks, ["2024-01-15"], "January", 2024, today=TODAY)
    payload = shape_export(metrics, [], tasks, [], [], exported_at=EXPORTED_AT)
    assert payload.summary_values() == metrics.as_dict()
    assert payload.summary_values()["totalWorkingHours"] == 15.25
    assert payload.summary_values()["totalWorkingDays"] == 2


def test_export_filename():
    assert export_filename(calculate_metrics([], [], "Q1", 2024, today=TODAY)) == "TaskFlow_Q1_2024"
    assert export_filename(calculate_metrics([], [], "2025", 2024, today=TODAY)) == "TaskFlow_Year_2025"
    assert export_filename(calculate_metrics([], [], "all", 2024, today=TODAY)) == "TaskFlow_All_Months_2024"
