"""Scope task and leave records to a period."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime

from worklog_analytics.errors import MalformedRecordError
from worklog_analytics.periods import ResolvedPeriod, period_bounds
from worklog_analytics.schema import LeaveRecord, TaskRecord

logger = logging.getLogger(__name__)


def coerce_leave_date(value) -> date:
    """Return the calendar date of a leave given as a record, date or ISO string."""

    if isinstance(value, LeaveRecord):
        value = value.date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as exc:
            raise MalformedRecordError(f"Unparsable leave date {value!r}") from exc
    raise MalformedRecordError(f"Unsupported leave value {value!r}")


def iter_leave_dates(leaves: Iterable) -> Iterator[tuple[object, date]]:
    """Yield ``(original, date)`` pairs, skipping leaves whose date cannot be read."""

    for position, leave in enumerate(leaves):
        try:
            yield leave, coerce_leave_date(leave)
        except MalformedRecordError as exc:
            logger.warning("Skipping leave #%d: %s", position, exc)


def leaves_in_months(leaves: Iterable, year: int, month_indices: Iterable[int]) -> list:
    """Leaves falling inside any of the given months of ``year``, bounds inclusive."""

    ranges = [period_bounds(year, index) for index in month_indices]
    return [
        leave
        for leave, leave_date in iter_leave_dates(leaves)
        if any(start <= leave_date <= end for start, end in ranges)
    ]


def filter_leaves_by_period(leaves: Iterable, period: ResolvedPeriod, year: int | None = None) -> list:
    """Return the leaves belonging to ``period``.

    Quarter periods are matched month by month in ``year`` (defaulting to the
    period's reference year), so Q4 (Jan-Mar) uses the same calendar year as
    Q1-Q3. All-time periods return the input unchanged.
    """

    if period.is_all_time:
        return list(leaves)
    if period.is_year:
        return [leave for leave, leave_date in iter_leave_dates(leaves) if leave_date.year == period.year]
    return leaves_in_months(leaves, period.year if year is None else year, period.month_indices)


def filter_tasks_by_period(tasks: Iterable[TaskRecord], period: ResolvedPeriod) -> list[TaskRecord]:
    """Return tasks whose month label is one of the period's months."""

    if not period.spans_months:
        return list(tasks)
    names = set(period.month_names)
    return [task for task in tasks if task.period_month in names]


def filter_tasks(
    tasks: Iterable[TaskRecord],
    projects: Iterable[str] = (),
    task_types: Iterable[str] = (),
    statuses: Iterable[str] = (),
) -> list[TaskRecord]:
    """Dashboard filters; an empty criterion matches every task."""

    projects = set(projects)
    task_types = set(task_types)
    statuses = set(statuses)

    selected = []
    for task in tasks:
        if projects and task.project not in projects:
            continue
        if task_types and task.task_type not in task_types:
            continue
        if statuses and task.status not in statuses:
            continue
        selected.append(task)
    return selected
