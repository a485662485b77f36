"""Core data schema for work-log analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from worklog_analytics.periods import month_label_for_date

STATUS_TODO = "todo"
STATUS_IN_PROGRESS = "in-progress"
STATUS_DONE = "done"
TASK_STATUSES = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE)

LEAVE_CATEGORIES = ("vacation", "sick", "personal", "other")

_TODO_STATUSES = {"pending", "new", "open", "to do", "not started", "not-started", "rejected"}
_DONE_WORDS = ("done", "closed", "complete", "approved", "resolved")
_IN_PROGRESS_WORDS = ("progress", "development", "review")


def normalize_status(raw: Optional[str]) -> str:
    """Map a source system's status vocabulary onto todo / in-progress / done."""

    if raw is None:
        return STATUS_TODO
    status = str(raw).strip().lower()
    if status in TASK_STATUSES:
        return status
    if status in _TODO_STATUSES:
        return STATUS_TODO
    if any(word in status for word in _DONE_WORDS):
        return STATUS_DONE
    if any(word in status for word in _IN_PROGRESS_WORDS):
        return STATUS_IN_PROGRESS
    return STATUS_TODO


@dataclass(frozen=True)
class TaskRecord:
    """A logged unit of work. Hours are never negative."""

    task_id: str
    total_hours: float = 0.0
    approved_hours: float = 0.0
    project: str = ""
    month: Optional[str] = None
    status: str = STATUS_TODO
    task_type: str = ""
    description: str = ""
    task_date: Optional[date] = None
    project_id: Optional[str] = None
    task_number: Optional[str] = None
    note: str = ""

    @property
    def completed(self) -> bool:
        return self.status == STATUS_DONE

    @property
    def period_month(self) -> Optional[str]:
        """Month name used for period matching.

        The literal ``month`` label wins for compatibility with records that
        only carry a display label; ``task_date`` is the preferred input and
        is used when no label is present.
        """

        if self.month:
            return self.month
        if self.task_date is not None:
            return month_label_for_date(self.task_date)
        return None


@dataclass(frozen=True)
class LeaveRecord:
    """A single day of absence; only the date takes part in counting."""

    date: date
    category: str = "other"


@dataclass(frozen=True)
class JiraIntegration:
    url: str = ""
    project_key: str = ""


@dataclass(frozen=True)
class ProjectRecord:
    project_id: str
    name: str = ""
    jira: Optional[JiraIntegration] = None


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time productivity metrics for one period."""

    total_tasks: int = 0
    total_approved_hours: float = 0.0
    total_working_hours: float = 0.0
    total_working_days: int = 0
    total_working_days_in_month: int = 0
    total_leaves: int = 0
    effective_working_days: int = 0
    productivity: float = 0.0
    month: str = ""
    year: int = 0

    def as_dict(self) -> dict:
        """Return the snapshot keyed by the dashboard's field names."""

        return {
            "totalTasks": self.total_tasks,
            "totalApprovedHours": self.total_approved_hours,
            "totalWorkingHours": self.total_working_hours,
            "totalWorkingDays": self.total_working_days,
            "totalWorkingDaysInMonth": self.total_working_days_in_month,
            "totalLeaves": self.total_leaves,
            "effectiveWorkingDays": self.effective_working_days,
            "productivity": self.productivity,
            "month": self.month,
            "year": self.year,
        }


@dataclass(frozen=True)
class TrendPoint:
    """One period of a trend series."""

    label: str
    year: int
    month_index: int
    metrics: MetricsSnapshot = field(default_factory=MetricsSnapshot)
    work_days: float = 0.0
    working_days: int = 0
    completion_rate: float = 0.0

    @property
    def productivity(self) -> float:
        return self.metrics.productivity

    def as_dict(self) -> dict:
        row = {"period": self.label}
        row.update(self.metrics.as_dict())
        row["workDays"] = self.work_days
        row["workingDays"] = self.working_days
        row["completionRate"] = self.completion_rate
        return row


@dataclass(frozen=True)
class ProjectProgress:
    """Status breakdown and hours for one project."""

    project: str
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0
    total_hours: float = 0.0
    completion_percentage: float = 0.0
    avg_completion_hours: float = 0.0

    def as_dict(self) -> dict:
        return {
            "project": self.project,
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "inProgressTasks": self.in_progress_tasks,
            "todoTasks": self.todo_tasks,
            "totalHours": self.total_hours,
            "completionPercentage": self.completion_percentage,
            "avgCompletionTime": self.avg_completion_hours,
        }


@dataclass(frozen=True)
class TimeAnalytics:
    """Approved versus logged hours for one project and task type.

    ``accuracy`` is 100 when logged hours equal approved hours and falls
    towards 0 as they diverge; it is 0 when nothing was approved.
    """

    project: str
    task_type: str
    task_count: int = 0
    approved_hours: float = 0.0
    total_hours: float = 0.0
    accuracy: float = 0.0
    variance: float = 0.0

    def as_dict(self) -> dict:
        return {
            "project": self.project,
            "taskType": self.task_type,
            "taskCount": self.task_count,
            "estimatedHours": self.approved_hours,
            "actualHours": self.total_hours,
            "accuracy": self.accuracy,
            "variance": self.variance,
        }
