"""Flatten metrics, trends and raw records into tabular export sections."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from worklog_analytics.filters import iter_leave_dates
from worklog_analytics.schema import LeaveRecord, MetricsSnapshot, ProjectRecord, TaskRecord, TrendPoint

FILENAME_PREFIX = "TaskFlow"

TASK_COLUMNS = (
    "taskId",
    "taskNumber",
    "taskType",
    "description",
    "totalHours",
    "approvedHours",
    "project",
    "month",
    "note",
    "status",
    "completed",
    "link",
)
LEAVE_COLUMNS = ("date", "category")
TREND_COLUMNS = (
    "period",
    "totalTasks",
    "totalApprovedHours",
    "totalWorkingHours",
    "totalWorkingDays",
    "totalWorkingDaysInMonth",
    "totalLeaves",
    "effectiveWorkingDays",
    "productivity",
    "month",
    "year",
    "workDays",
    "workingDays",
    "completionRate",
)
SUMMARY_COLUMNS = ("metric", "value")


@dataclass
class ExportPayload:
    """Independent flat sections, each a list of rows with identical keys."""

    metadata: dict = field(default_factory=dict)
    summary: list[dict] = field(default_factory=list)
    trend: list[dict] = field(default_factory=list)
    tasks: list[dict] = field(default_factory=list)
    leaves: list[dict] = field(default_factory=list)

    def sections(self) -> dict[str, list[dict]]:
        return {
            "summary": self.summary,
            "trend": self.trend,
            "tasks": self.tasks,
            "leaves": self.leaves,
        }

    def summary_values(self) -> dict:
        return {row["metric"]: row["value"] for row in self.summary}


def build_task_link(task: TaskRecord, project: Optional[ProjectRecord]) -> Optional[str]:
    """Issue-tracker URL for a task, or None when the project has no integration."""

    if project is None or project.jira is None:
        return None
    url = project.jira.url or ""
    if url.endswith("/"):
        url = url[:-1]
    if not (url and project.jira.project_key and task.task_number):
        return None
    return f"{url}/{project.jira.project_key}-{task.task_number}"


def _find_project(task: TaskRecord, by_id: dict, by_name: dict) -> Optional[ProjectRecord]:
    if task.project_id and task.project_id in by_id:
        return by_id[task.project_id]
    return by_name.get(task.project)


def _task_row(task: TaskRecord, project: Optional[ProjectRecord]) -> dict:
    return {
        "taskId": task.task_id,
        "taskNumber": task.task_number or "",
        "taskType": task.task_type,
        "description": task.description,
        "totalHours": task.total_hours,
        "approvedHours": task.approved_hours,
        "project": task.project,
        "month": task.period_month or "",
        "note": task.note,
        "status": task.status,
        "completed": task.completed,
        "link": build_task_link(task, project),
    }


def export_filename(metrics: MetricsSnapshot) -> str:
    """File stem for a download, e.g. ``TaskFlow_Q1_2024`` or ``TaskFlow_Year_2024``."""

    if metrics.month == str(metrics.year):
        return f"{FILENAME_PREFIX}_Year_{metrics.year}"
    label = metrics.month.replace(" ", "_")
    return f"{FILENAME_PREFIX}_{label}_{metrics.year}"


def shape_export(
    metrics: MetricsSnapshot,
    trend: Iterable[TrendPoint] = (),
    tasks: Iterable[TaskRecord] = (),
    leaves: Iterable = (),
    projects: Iterable[ProjectRecord] = (),
    *,
    period_label: str | None = None,
    exported_at: datetime | None = None,
) -> ExportPayload:
    """Build an export payload; summary values are the snapshot's values unchanged."""

    projects = list(projects)
    by_id = {project.project_id: project for project in projects}
    by_name = {project.name: project for project in projects if project.name}

    leave_rows = []
    for leave, leave_date in iter_leave_dates(leaves):
        category = leave.category if isinstance(leave, LeaveRecord) else ""
        leave_rows.append({"date": leave_date.isoformat(), "category": category})

    if period_label is None:
        period_label = metrics.month if metrics.month == str(metrics.year) else f"{metrics.month} {metrics.year}"
    exported_at = exported_at or datetime.now(timezone.utc)
    return ExportPayload(
        metadata={
            "exportedAt": exported_at.isoformat(),
            "period": period_label,
            "filename": export_filename(metrics),
        },
        summary=[{"metric": key, "value": value} for key, value in metrics.as_dict().items()],
        trend=[point.as_dict() for point in trend],
        tasks=[_task_row(task, _find_project(task, by_id, by_name)) for task in tasks],
        leaves=leave_rows,
    )
