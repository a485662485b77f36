"""Boundary normalization of raw task, leave and project mappings."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime

from worklog_analytics.errors import MalformedRecordError
from worklog_analytics.schema import JiraIntegration, LeaveRecord, ProjectRecord, TaskRecord, normalize_status

logger = logging.getLogger(__name__)


def _first(row: dict, *keys: str):
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


def _parse_hours(raw, name: str, position: int) -> float:
    if raw in (None, ""):
        return 0.0
    try:
        hours = float(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Record {position}: invalid {name} {raw!r}") from exc
    if not math.isfinite(hours):
        raise MalformedRecordError(f"Record {position}: non-finite {name} {raw!r}")
    if hours < 0:
        raise MalformedRecordError(f"Record {position}: negative {name}")
    return hours


def _parse_date(raw, position: int) -> date | None:
    if raw in (None, ""):
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, dict) and "$date" in raw:
        raw = raw["$date"]
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError as exc:
        raise MalformedRecordError(f"Record {position}: malformed date {raw!r}") from exc


def task_from_mapping(row: dict, position: int) -> TaskRecord:
    if not isinstance(row, dict):
        raise MalformedRecordError(f"Record {position}: expected an object")
    task_id = _first(row, "task_id", "taskId", "_id", "id")
    if task_id is None:
        raise MalformedRecordError(f"Record {position}: missing task_id")

    number = _first(row, "task_number", "taskNumber")
    project_id = _first(row, "project_id", "projectId")
    return TaskRecord(
        task_id=_text(task_id),
        total_hours=_parse_hours(_first(row, "total_hours", "totalHours"), "total_hours", position),
        approved_hours=_parse_hours(_first(row, "approved_hours", "approvedHours"), "approved_hours", position),
        project=_text(row.get("project")),
        month=_text(row.get("month")) or None,
        status=normalize_status(row.get("status")),
        task_type=_text(_first(row, "task_type", "taskType", "type")),
        description=_text(_first(row, "description", "title")),
        task_date=_parse_date(_first(row, "date", "task_date"), position),
        project_id=_text(project_id) if project_id is not None else None,
        task_number=_text(number) if number is not None else None,
        note=_text(row.get("note")),
    )


def leave_from_value(value, position: int) -> LeaveRecord:
    if isinstance(value, dict):
        leave_date = _parse_date(value.get("date"), position)
        category = _text(_first(value, "category", "type")) or "other"
    else:
        leave_date = _parse_date(value, position)
        category = "other"
    if leave_date is None:
        raise MalformedRecordError(f"Record {position}: missing leave date")
    return LeaveRecord(date=leave_date, category=category)


def project_from_mapping(row: dict, position: int) -> ProjectRecord:
    if not isinstance(row, dict):
        raise MalformedRecordError(f"Record {position}: expected an object")
    project_id = _first(row, "project_id", "projectId", "_id", "id")
    if project_id is None:
        raise MalformedRecordError(f"Record {position}: missing project id")

    integrations = row.get("integrations")
    jira_raw = integrations.get("jira") if isinstance(integrations, dict) else None
    if not isinstance(jira_raw, dict):
        jira_raw = {}
    url = _text(_first(jira_raw, "url") or row.get("jira_url"))
    key = _text(_first(jira_raw, "projectKey", "project_key") or row.get("jira_project_key"))
    jira = JiraIntegration(url=url, project_key=key) if url or key else None
    return ProjectRecord(project_id=_text(project_id), name=_text(row.get("name")), jira=jira)


def _convert_all(items: Iterable, convert, kind: str, start: int) -> list:
    records = []
    for position, item in enumerate(items, start=start):
        try:
            records.append(convert(item, position))
        except MalformedRecordError as exc:
            logger.warning("Skipping %s: %s", kind, exc)
    return records


def tasks_from_rows(rows: Iterable[dict], start: int = 1) -> list[TaskRecord]:
    """Convert raw rows to tasks, skipping malformed rows with a warning."""

    return _convert_all(rows, task_from_mapping, "task", start)


def leaves_from_rows(rows: Iterable, start: int = 1) -> list[LeaveRecord]:
    return _convert_all(rows, leave_from_value, "leave", start)


def projects_from_rows(rows: Iterable[dict], start: int = 1) -> list[ProjectRecord]:
    return _convert_all(rows, project_from_mapping, "project", start)
