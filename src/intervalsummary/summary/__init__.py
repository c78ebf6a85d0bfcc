"""Interval loading, event sweep and report rendering."""

from intervalsummary.summary.aggregator import IntervalSweep, aggregate
from intervalsummary.summary.errors import (
    IntervalSummaryError,
    Issue,
    IssueKind,
    IssueLog,
    MissingColumnError,
    OutputOpenError,
)
from intervalsummary.summary.events import EventReader
from intervalsummary.summary.intervals import Event, Interval
from intervalsummary.summary.loader import LoadResult, load_intervals
from intervalsummary.summary.report import DEFAULT_HEADER, REPORT_COLUMNS, build_report, save_report, write_report

__all__ = [
    "DEFAULT_HEADER",
    "Event",
    "EventReader",
    "Interval",
    "IntervalSummaryError",
    "IntervalSweep",
    "Issue",
    "IssueKind",
    "IssueLog",
    "LoadResult",
    "MissingColumnError",
    "OutputOpenError",
    "REPORT_COLUMNS",
    "aggregate",
    "build_report",
    "load_intervals",
    "save_report",
    "write_report",
]
