"""Rolling multi-period trend series."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from worklog_analytics import config
from worklog_analytics.filters import filter_tasks_by_period
from worklog_analytics.metrics import calculate_metrics, completion_rate
from worklog_analytics.periods import (
    FISCAL_QUARTERS,
    MONTH_NAMES,
    last_n_months,
    last_n_quarters,
    resolve_period,
)
from worklog_analytics.schema import TaskRecord, TrendPoint

GRANULARITIES = ("month", "quarter")
_TREND_THRESHOLD_PCT = 5


def _short_label(name: str, year: int) -> str:
    return f"{name} '{year % 100:02d}"


def _trend_point(label: str, month_index: int, resolved, tasks, leaves, reference_date, clamp) -> TrendPoint:
    scoped = filter_tasks_by_period(tasks, resolved)
    snapshot = calculate_metrics(
        scoped,
        leaves,
        resolved,
        resolved.year,
        today=reference_date,
        clamp_productivity=clamp,
    )
    return TrendPoint(
        label=label,
        year=resolved.year,
        month_index=month_index,
        metrics=snapshot,
        work_days=snapshot.total_working_hours / config.HOURS_PER_DAY,
        working_days=snapshot.effective_working_days,
        completion_rate=completion_rate(scoped),
    )


def build_trend(
    tasks: Iterable[TaskRecord],
    leaves: Iterable = (),
    period_count: int | None = None,
    reference_date: date | None = None,
    *,
    granularity: str = "month",
    clamp_productivity: bool | None = None,
) -> list[TrendPoint]:
    """Compute one point per period for the last ``period_count`` periods, oldest first.

    Periods without tasks still appear, with zero-valued metrics.
    """

    if period_count is None:
        period_count = config.TREND_PERIODS
    if period_count < 0:
        raise ValueError("period_count must not be negative")
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unsupported granularity '{granularity}'")

    reference_date = reference_date or date.today()
    tasks = list(tasks)
    leaves = list(leaves)

    points: list[TrendPoint] = []
    if granularity == "month":
        for year, index in last_n_months(period_count, reference_date):
            resolved = resolve_period(MONTH_NAMES[index], year)
            label = _short_label(MONTH_NAMES[index][:3], year)
            points.append(_trend_point(label, index, resolved, tasks, leaves, reference_date, clamp_productivity))
    else:
        for year, code in last_n_quarters(period_count, reference_date):
            resolved = resolve_period(code, year)
            label = _short_label(code, year)
            first_month = FISCAL_QUARTERS[code][0]
            points.append(_trend_point(label, first_month, resolved, tasks, leaves, reference_date, clamp_productivity))
    return points


def trend_changes(points: list[TrendPoint]) -> list[dict]:
    """Period-over-period productivity change with an up/down/neutral direction."""

    changes = []
    previous = None
    for point in points:
        value = point.productivity * 100.0
        if previous is None or previous <= 0:
            change = 0.0
        else:
            change = (value - previous) / previous * 100.0

        if change > _TREND_THRESHOLD_PCT:
            direction = "up"
        elif change < -_TREND_THRESHOLD_PCT:
            direction = "down"
        else:
            direction = "neutral"

        changes.append({"period": point.label, "value": value, "change": change, "trend": direction})
        previous = value
    return changes
