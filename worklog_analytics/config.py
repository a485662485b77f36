"""Environment-driven settings."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

HOURS_PER_DAY = 8


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# Legacy dashboards capped productivity at 100%; off by default.
CLAMP_PRODUCTIVITY = _env_flag("WORKLOG_CLAMP_PRODUCTIVITY")
TREND_PERIODS = _env_int("WORKLOG_TREND_PERIODS", 6)

LOG_LEVEL = os.getenv("WORKLOG_LOG_LEVEL", "INFO")
LOG_JSON = _env_flag("WORKLOG_LOG_JSON")
