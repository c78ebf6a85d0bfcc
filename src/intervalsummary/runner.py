"""Summary pipeline: times table -> intervals -> event sweep -> report.

Fatal conditions (times file unreadable or missing its Start/End columns,
data file unreadable or not UTF-8 text, output not writable) stop the run
with status 1. Every other problem is logged, counted and the run continues.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from typing import Optional, TextIO

import pandas as pd

from intervalsummary.config import SummarySettings
from intervalsummary.summary.aggregator import aggregate
from intervalsummary.summary.errors import Issue, IssueLog, MissingColumnError, OutputOpenError
from intervalsummary.summary.events import EventReader
from intervalsummary.summary.intervals import Interval
from intervalsummary.summary.loader import load_intervals
from intervalsummary.summary.report import save_report
from intervalsummary.tables.csv_table import CsvTable
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1

# Unreadable input: missing/locked file, bytes that are not UTF-8, broken quoting.
READ_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


@dataclass
class RunResult:
    """Outcome of one run; ``report`` is None when the run was aborted."""
    status: int
    intervals: list[Interval] = field(default_factory=list)
    report: Optional[pd.DataFrame] = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return sum(1 for i in self.issues if i.is_error)

    @property
    def warnings(self) -> int:
        return sum(1 for i in self.issues if not i.is_error)


def run_summary(settings: SummarySettings, *, stream: Optional[TextIO] = None) -> RunResult:
    """Run the whole pipeline for ``settings``.

    Args:
        settings: Paths and report options.
        stream: Optional open text stream to write the report to instead of
            ``settings.out_path``.

    Returns:
        RunResult with status 0 on success, 1 on a fatal error.
    """
    issues = IssueLog()

    def _abort(message: str) -> RunResult:
        logger.error(message)
        return RunResult(status=EXIT_FATAL, issues=issues.issues)

    if not settings.times_path:
        return _abort("Times file not specified.")
    if not settings.data_path:
        return _abort("Input file not specified.")

    # Load times
    logger.info(f"Opening times: {settings.times_path}")
    issues.source = settings.times_path
    try:
        with CsvTable.open(settings.times_path) as table:
            loaded = load_intervals(table, issues)
    except READ_ERRORS as exc:
        return _abort(f"Problem reading times file: {exc}")
    except MissingColumnError as exc:
        return _abort(str(exc))
    if loaded.errors:
        logger.error(f"There was a problem with the times data: {settings.times_path}")

    # Stream the data table through the sweep
    logger.info(f"Opening data: {settings.data_path}")
    issues.source = settings.data_path
    try:
        with CsvTable.open(settings.data_path) as table:
            reader = EventReader(table, issues)
            intervals = aggregate(loaded.intervals, reader)
    except READ_ERRORS as exc:
        return _abort(f"Problem reading data file: {exc}")
    logger.debug(f"{reader.events_read} events read, {reader.rows_skipped} rows skipped")
    issues.source = None

    out = stream if stream is not None else settings.out_path
    try:
        report = save_report(intervals, out, settings)
    except OutputOpenError as exc:
        return _abort(str(exc))

    return RunResult(status=EXIT_OK, intervals=intervals, report=report, issues=issues.issues)
