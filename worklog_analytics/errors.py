"""Error taxonomy for the analytics engine."""

from __future__ import annotations


class AnalyticsError(ValueError):
    """Base class for analytics input errors."""


class InvalidPeriodError(AnalyticsError):
    """Raised when a period selector is not a month, quarter, year or 'all'."""

    def __init__(self, selector) -> None:
        super().__init__(f"Unrecognized period selector {selector!r}")
        self.selector = selector


class MalformedRecordError(AnalyticsError):
    """A task or leave record that cannot be defaulted."""
