"""JSON adapter for work-log records and export payloads."""

from __future__ import annotations

import json
from pathlib import Path

from worklog_analytics.export import ExportPayload
from worklog_analytics.records import leaves_from_rows, projects_from_rows, tasks_from_rows
from worklog_analytics.schema import LeaveRecord, ProjectRecord, TaskRecord


def _load_list(file_path: str) -> list:
    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list")
    return payload


def parse_tasks(file_path: str) -> list[TaskRecord]:
    """Parse a JSON list of task objects; malformed items are skipped."""

    return tasks_from_rows(_load_list(file_path))


def parse_leaves(file_path: str) -> list[LeaveRecord]:
    """Parse a JSON list of ISO date strings or ``{"date", "category"}`` objects."""

    return leaves_from_rows(_load_list(file_path))


def parse_projects(file_path: str) -> list[ProjectRecord]:
    return projects_from_rows(_load_list(file_path))


def write_payload(payload: ExportPayload, file_path: str) -> Path:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = {"metadata": payload.metadata, "data": payload.sections()}
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path
