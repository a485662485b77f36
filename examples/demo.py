"""Demo script for worklog-analytics."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from worklog_analytics.adapters.csv_adapter import parse_leaves, parse_tasks
from worklog_analytics.metrics import calculate_metrics
from worklog_analytics.trends import build_trend, trend_changes


def main() -> None:
    tasks = parse_tasks("examples/sample_tasks.csv")
    leaves = parse_leaves("examples/sample_leaves.csv")
    today = date(2024, 3, 28)

    print("January:", calculate_metrics(tasks, leaves, "January", 2024, today=today).as_dict())
    print("Q4:", calculate_metrics(tasks, leaves, "Q4", 2024, today=today).as_dict())
    trend = build_trend(tasks, leaves, 3, today)
    for point in trend:
        print(point.label, f"{point.productivity:.1%}", f"{point.work_days:.1f} / {point.working_days}")
    print("Changes:", trend_changes(trend))


if __name__ == "__main__":
    main()
