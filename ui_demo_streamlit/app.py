"""Streamlit demo dashboard for worklog-analytics."""

from __future__ import annotations

import json
import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from worklog_analytics.adapters import csv_adapter, json_adapter
from worklog_analytics.errors import InvalidPeriodError
from worklog_analytics.export import shape_export
from worklog_analytics.logging_config import setup_logging
from worklog_analytics.filters import filter_tasks_by_period
from worklog_analytics.metrics import calculate_metrics, project_progress
from worklog_analytics.periods import FISCAL_QUARTERS, MONTH_NAMES, quarter_for_month, resolve_period
from worklog_analytics.trends import build_trend, trend_changes

QUARTER_LABELS = {"Q1": "Q1 (Apr-Jun)", "Q2": "Q2 (Jul-Sep)", "Q3": "Q3 (Oct-Dec)", "Q4": "Q4 (Jan-Mar)"}


def _adapter_for(file_path: str):
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _save_uploaded(uploaded_file) -> str:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        return handle.name


def run_engine(tasks: list, leaves: list, period: str, year: int, today: date, trend_periods: int) -> dict[str, Any]:
    """Run metrics, trend and export shaping and return a UI-friendly payload."""

    metrics = calculate_metrics(tasks, leaves, period, year, today=today)
    trend = build_trend(tasks, leaves, trend_periods, today)
    payload = shape_export(metrics, trend, tasks, leaves)
    return {
        "metrics": metrics,
        "trend": trend,
        "changes": trend_changes(trend),
        "projects": project_progress(filter_tasks_by_period(tasks, resolve_period(period, year))),
        "payload": payload,
    }


def main() -> None:
    import streamlit as st

    setup_logging()
    st.set_page_config(page_title="Work-log Analytics", layout="wide")
    st.title("Work-log Analytics")

    today = date.today()
    with st.sidebar:
        st.header("Controls")
        tasks_file = st.file_uploader("Tasks", type=["csv", "json"])
        leaves_file = st.file_uploader("Leaves", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        view = st.radio("View", options=["month", "quarter", "year", "all"], index=0)
        if view == "month":
            period = st.selectbox("Month", options=MONTH_NAMES, index=today.month - 1)
        elif view == "quarter":
            quarters = list(FISCAL_QUARTERS)
            period = st.selectbox(
                "Quarter",
                options=quarters,
                index=quarters.index(quarter_for_month(today.month - 1)),
                format_func=QUARTER_LABELS.get,
            )
        else:
            period = view
        year = st.number_input("Year", min_value=2000, max_value=2100, value=today.year, step=1)
        if view == "year":
            period = str(int(year))
        trend_periods = st.slider("Trend periods", min_value=1, max_value=24, value=6)
        run = st.button("Run", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run**.")
        return

    try:
        if use_demo:
            tasks = csv_adapter.parse_tasks("examples/sample_tasks.csv")
            leaves = csv_adapter.parse_leaves("examples/sample_leaves.csv")
        elif tasks_file is not None:
            tasks_path = _save_uploaded(tasks_file)
            tasks = _adapter_for(tasks_path).parse_tasks(tasks_path)
            leaves = []
            if leaves_file is not None:
                leaves_path = _save_uploaded(leaves_file)
                leaves = _adapter_for(leaves_path).parse_leaves(leaves_path)
        else:
            st.error("Please upload a tasks file or enable 'Load demo dataset'.")
            return

        result = run_engine(tasks, leaves, period, int(year), today, trend_periods)
    except InvalidPeriodError as exc:
        st.error(f"Invalid period: {exc}")
        return
    except ValueError as exc:
        st.error(f"Input error: {exc}")
        return

    metrics = result["metrics"]
    st.subheader(f"{metrics.month} {metrics.year}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total tasks", metrics.total_tasks)
    c2.metric("Approved hours", f"{metrics.total_approved_hours:.1f}")
    c3.metric("Working hours", f"{metrics.total_working_hours:.1f}")
    c4.metric("Productivity", f"{metrics.productivity * 100:.1f}%")
    d1, d2, d3, d4 = st.columns(4)
    d1.metric("Working days (from hours)", metrics.total_working_days)
    d2.metric("Weekdays in period", metrics.total_working_days_in_month)
    d3.metric("Leaves", metrics.total_leaves)
    d4.metric("Effective working days", metrics.effective_working_days)

    st.subheader("Productivity trend")
    trend = result["trend"]
    st.line_chart(
        {"period": [point.label for point in trend], "productivity": [point.productivity * 100 for point in trend]},
        x="period",
        y="productivity",
    )
    st.table(result["changes"])

    st.subheader("Projects")
    st.table([row.as_dict() for row in result["projects"]])

    payload = result["payload"]
    st.download_button(
        "Download JSON export",
        data=json.dumps({"metadata": payload.metadata, "data": payload.sections()}, indent=2),
        file_name=f"{payload.metadata['filename']}.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
