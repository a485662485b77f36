"""Logging setup for the CLI and demo entry points."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from worklog_analytics import config


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure the root logger; library modules only create named loggers."""

    level = level or config.LOG_LEVEL
    json_output = config.LOG_JSON if json_output is None else json_output

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s"))
    root.handlers = [handler]
