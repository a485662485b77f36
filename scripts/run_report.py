"""Compute metrics and a trend from CSV/JSON work logs and optionally export them."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from worklog_analytics import config
from worklog_analytics.adapters import csv_adapter, json_adapter, xlsx_adapter
from worklog_analytics.errors import InvalidPeriodError
from worklog_analytics.export import shape_export
from worklog_analytics.filters import filter_tasks_by_period
from worklog_analytics.logging_config import setup_logging
from worklog_analytics.metrics import calculate_metrics, project_progress, time_analytics
from worklog_analytics.periods import resolve_period
from worklog_analytics.trends import build_trend

logger = logging.getLogger("run_report")


def _adapter_for(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported input format, expected .csv or .json")


def _write_export(payload, target: Path) -> list[Path]:
    suffix = target.suffix.lower()
    if suffix == ".json":
        json_adapter.write_payload(payload, str(target))
        written = [target]
    elif suffix == ".xlsx":
        xlsx_adapter.write_payload(payload, str(target))
        written = [target]
    elif suffix == ".csv":
        # out.csv -> out_summary.csv, out_trend.csv, ... beside it
        written = csv_adapter.write_payload(payload, str(target.parent), stem=target.stem)
    else:
        written = csv_adapter.write_payload(payload, str(target))
    logger.info("Saved export to %s", ", ".join(str(path) for path in written))
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description="Run work-log productivity analytics")
    parser.add_argument("--tasks", required=True, help="Path to CSV/JSON tasks file")
    parser.add_argument("--leaves", help="Path to CSV/JSON leaves file")
    parser.add_argument("--projects", help="Path to CSV/JSON projects file, used for task links")
    parser.add_argument("--period", default="all", help="Month name, Q1-Q4, a year, or 'all'")
    parser.add_argument("--year", type=int, help="Reference year (defaults to the year of --today)")
    parser.add_argument("--today", type=date.fromisoformat, default=date.today(), help="Reference date, YYYY-MM-DD")
    parser.add_argument("--trend", type=int, default=config.TREND_PERIODS, help="Number of trend periods")
    parser.add_argument("--granularity", choices=("month", "quarter"), default="month")
    parser.add_argument("--export", help="Write an export: .json or .xlsx file, .csv stem (one file per section), or a directory for CSV files")
    args = parser.parse_args()

    setup_logging()

    tasks_path = Path(args.tasks)
    tasks = _adapter_for(tasks_path).parse_tasks(str(tasks_path))
    leaves = []
    if args.leaves:
        leaves_path = Path(args.leaves)
        leaves = _adapter_for(leaves_path).parse_leaves(str(leaves_path))
    projects = []
    if args.projects:
        projects_path = Path(args.projects)
        projects = _adapter_for(projects_path).parse_projects(str(projects_path))

    try:
        metrics = calculate_metrics(tasks, leaves, args.period, args.year, today=args.today)
    except InvalidPeriodError as exc:
        parser.error(str(exc))

    trend = build_trend(tasks, leaves, args.trend, args.today, granularity=args.granularity)

    scoped = filter_tasks_by_period(tasks, resolve_period(args.period, args.year or args.today.year))
    report = {
        "metrics": metrics.as_dict(),
        "trend": [point.as_dict() for point in trend],
        "projects": [row.as_dict() for row in project_progress(scoped)],
        "timeAnalytics": [row.as_dict() for row in time_analytics(scoped)],
    }
    print(json.dumps(report, indent=2))

    if args.export:
        payload = shape_export(metrics, trend, tasks, leaves, projects)
        _write_export(payload, Path(args.export))


if __name__ == "__main__":
    main()
