"""Spreadsheet writer for export payloads."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from worklog_analytics.export import ExportPayload

_HEADER_FONT = Font(bold=True, color="FFFFFFFF")
_HEADER_FILL = PatternFill(start_color="FF1E293B", end_color="FF1E293B", fill_type="solid")


def _write_sheet(workbook: Workbook, title: str, rows: list[dict]) -> None:
    sheet = workbook.create_sheet(title=title)
    if not rows:
        return

    columns = list(rows[0])
    sheet.append(columns)
    for cell in sheet[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL

    for row in rows:
        sheet.append([row.get(column) for column in columns])

    for index, column in enumerate(columns, start=1):
        width = max([len(column)] + [len(str(row.get(column) or "")) for row in rows])
        sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = width + 3


def write_payload(payload: ExportPayload, file_path: str) -> Path:
    """Write each export section to its own worksheet."""

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in payload.sections().items():
        _write_sheet(workbook, name.capitalize(), rows)
    _write_sheet(workbook, "Metadata", [{"key": key, "value": value} for key, value in payload.metadata.items()])

    workbook.save(path)
    return path
