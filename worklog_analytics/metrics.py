"""Productivity metrics for a single period."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date

from worklog_analytics import config
from worklog_analytics.filters import filter_leaves_by_period, filter_tasks_by_period, leaves_in_months
from worklog_analytics.periods import ResolvedPeriod, resolve_period
from worklog_analytics.schema import (
    STATUS_DONE,
    STATUS_IN_PROGRESS,
    MetricsSnapshot,
    ProjectProgress,
    TaskRecord,
    TimeAnalytics,
)
from worklog_analytics.workdays import count_weekdays

logger = logging.getLogger(__name__)


def _hours(value) -> float:
    return float(value or 0.0)


def productivity_ratio(working_hours: float, effective_working_days: int, clamp: bool = False) -> float:
    """Hour-derived work days over effective working days; 0 when no days are available.

    The ratio is unbounded above unless ``clamp`` is set: values over 1.0
    mean more work was logged than the available days allow.
    """

    if effective_working_days <= 0:
        return 0.0
    ratio = max(0.0, (working_hours / config.HOURS_PER_DAY) / effective_working_days)
    if clamp:
        return min(1.0, ratio)
    return ratio


def calculate_metrics(
    tasks: Iterable[TaskRecord],
    leaves: Iterable = (),
    period="all",
    reference_year: int | None = None,
    *,
    today: date | None = None,
    quarter_view: bool = False,
    clamp_productivity: bool | None = None,
) -> MetricsSnapshot:
    """Aggregate tasks and leaves into a metrics snapshot.

    Month and quarter periods count weekdays and leaves over their months in
    ``reference_year``. All-time and year periods take both from the month
    containing ``today`` instead; dashboards rely on that anchoring.
    """

    today = today or date.today()
    if reference_year is None:
        reference_year = today.year
    if clamp_productivity is None:
        clamp_productivity = config.CLAMP_PRODUCTIVITY

    if isinstance(period, ResolvedPeriod):
        resolved = period
    else:
        resolved = resolve_period(period, reference_year, quarter_view=quarter_view)

    leaves = list(leaves)
    scoped = filter_tasks_by_period(tasks, resolved)

    total_approved_hours = sum(_hours(task.approved_hours) for task in scoped)
    total_working_hours = sum(_hours(task.total_hours) for task in scoped)

    if resolved.spans_months:
        total_working_days_in_month = sum(count_weekdays(resolved.year, index) for index in resolved.month_indices)
        total_leaves = len(filter_leaves_by_period(leaves, resolved))
    else:
        current = today.month - 1
        total_working_days_in_month = count_weekdays(today.year, current)
        total_leaves = len(leaves_in_months(leaves, today.year, (current,)))

    effective_working_days = max(0, total_working_days_in_month - total_leaves)

    snapshot = MetricsSnapshot(
        total_tasks=len(scoped),
        total_approved_hours=total_approved_hours,
        total_working_hours=total_working_hours,
        total_working_days=math.ceil(total_working_hours / config.HOURS_PER_DAY),
        total_working_days_in_month=total_working_days_in_month,
        total_leaves=total_leaves,
        effective_working_days=effective_working_days,
        productivity=productivity_ratio(total_working_hours, effective_working_days, clamp_productivity),
        month=resolved.label,
        year=resolved.year,
    )
    logger.debug("Metrics for %s %d: %s", resolved.label, resolved.year, snapshot)
    return snapshot


def completion_rate(tasks: Iterable[TaskRecord]) -> float:
    """Percentage of tasks whose status is done."""

    tasks = list(tasks)
    if not tasks:
        return 0.0
    return sum(1 for task in tasks if task.completed) / len(tasks) * 100.0


def project_progress(tasks: Iterable[TaskRecord]) -> list[ProjectProgress]:
    """Per-project task counts by status, in first-seen project order.

    ``avg_completion_hours`` averages logged hours over done tasks only.
    """

    grouped: dict[str, list[TaskRecord]] = {}
    for task in tasks:
        grouped.setdefault(task.project, []).append(task)

    rows = []
    for project, items in grouped.items():
        done = [task for task in items if task.status == STATUS_DONE]
        in_progress = sum(1 for task in items if task.status == STATUS_IN_PROGRESS)
        done_hours = sum(_hours(task.total_hours) for task in done)
        rows.append(
            ProjectProgress(
                project=project,
                total_tasks=len(items),
                completed_tasks=len(done),
                in_progress_tasks=in_progress,
                todo_tasks=len(items) - len(done) - in_progress,
                total_hours=sum(_hours(task.total_hours) for task in items),
                completion_percentage=len(done) / len(items) * 100.0,
                avg_completion_hours=done_hours / len(done) if done else 0.0,
            )
        )
    return rows


def time_analytics(tasks: Iterable[TaskRecord]) -> list[TimeAnalytics]:
    """Approved versus logged hours grouped by ``(project, task_type)``."""

    grouped: dict[tuple[str, str], list[TaskRecord]] = {}
    for task in tasks:
        grouped.setdefault((task.project, task.task_type), []).append(task)

    rows = []
    for (project, task_type), items in grouped.items():
        approved = sum(_hours(task.approved_hours) for task in items)
        logged = sum(_hours(task.total_hours) for task in items)
        accuracy = 0.0
        if approved > 0:
            accuracy = max(0.0, (1 - abs(logged - approved) / approved) * 100.0)
        rows.append(
            TimeAnalytics(
                project=project,
                task_type=task_type,
                task_count=len(items),
                approved_hours=approved,
                total_hours=logged,
                accuracy=accuracy,
                variance=logged - approved,
            )
        )
    return rows
