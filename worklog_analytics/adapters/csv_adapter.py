"""CSV adapter for work-log records and export payloads."""

from __future__ import annotations

import csv
from pathlib import Path

from worklog_analytics.export import LEAVE_COLUMNS, SUMMARY_COLUMNS, TASK_COLUMNS, TREND_COLUMNS, ExportPayload
from worklog_analytics.records import leaves_from_rows, projects_from_rows, tasks_from_rows
from worklog_analytics.schema import LeaveRecord, ProjectRecord, TaskRecord

_SECTION_COLUMNS = {
    "summary": SUMMARY_COLUMNS,
    "trend": TREND_COLUMNS,
    "tasks": TASK_COLUMNS,
    "leaves": LEAVE_COLUMNS,
}


def _read_rows(file_path: str) -> list[dict]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return list(reader)


def parse_tasks(file_path: str) -> list[TaskRecord]:
    """Parse a CSV file of tasks; malformed rows are skipped."""

    # Row numbers count the header line.
    return tasks_from_rows(_read_rows(file_path), start=2)


def parse_leaves(file_path: str) -> list[LeaveRecord]:
    """Parse a CSV file with a ``date`` column and an optional ``category`` column."""

    return leaves_from_rows(_read_rows(file_path), start=2)


def parse_projects(file_path: str) -> list[ProjectRecord]:
    return projects_from_rows(_read_rows(file_path), start=2)


def write_payload(payload: ExportPayload, directory: str, stem: str | None = None) -> list[Path]:
    """Write one CSV file per export section and return the written paths.

    Files are named ``<stem>_<section>.csv``; the stem defaults to the
    payload's export filename.
    """

    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = stem or payload.metadata.get("filename", "export")

    written = []
    for name, rows in payload.sections().items():
        columns = list(rows[0]) if rows else list(_SECTION_COLUMNS.get(name, ()))
        path = out_dir / f"{stem}_{name}.csv"
        with open(path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=columns)
            writer.writeheader()
            writer.writerows(rows)
        written.append(path)
    return written
