"""Interval Loader: build the reference interval list from the times table.

Rows are kept in file order; nothing is sorted. Each row is validated against
its own bounds (end before start) and against the running maximum of all
previous ends (start before an earlier interval finishes). Violations are
counted and logged but the interval is still kept, so the report has one row
per usable input row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from intervalsummary.summary.columns import TIMES_COLUMNS, TIMES_FALLBACK, resolve_columns
from intervalsummary.summary.errors import Issue, IssueKind, IssueLog, MissingColumnError
from intervalsummary.summary.intervals import Interval
from intervalsummary.tables.csv_table import CsvTable
from intervalsummary.tables.timestamps import parse_time
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class LoadResult:
    """Loaded intervals plus the number of errors found while loading."""
    intervals: list[Interval]
    errors: int = 0
    issues: list[Issue] = field(default_factory=list)


def load_intervals(table: CsvTable, issues: Optional[IssueLog] = None) -> LoadResult:
    """Load intervals from a times table.

    Args:
        table: Times table (header already detected by the reader).
        issues: Shared issue log; a new one is created if omitted.

    Returns:
        LoadResult with intervals in input order and the error count
        (inverted, out-of-order and unparseable rows).

    Raises:
        MissingColumnError: If the Start or End column cannot be resolved.
    """
    if issues is None:
        issues = IssueLog(source=table.name)
    first_issue = len(issues.issues)

    cols = resolve_columns(table.header, TIMES_COLUMNS, TIMES_FALLBACK, issues, table="times")
    missing = cols.missing(("Start", "End"))
    if missing:
        raise MissingColumnError("times", missing)

    col_start, col_end, col_label = cols["Start"], cols["End"], cols["Label"]

    intervals: list[Interval] = []
    last_end: Optional[float] = None

    for row in table:
        if row.is_blank:
            continue
        if not (row.has(col_start) and row.has(col_end)):
            issues.record(IssueKind.TOO_FEW_COLUMNS, "Too-few columns, ignoring row.", row.line)
            continue

        start_text = row.cells[col_start]
        if col_label is not None and len(row) > col_label:
            label = row.cells[col_label]
        else:
            label = start_text

        try:
            start = parse_time(start_text)
            end = parse_time(row.cells[col_end])
        except ValueError as exc:
            issues.record(IssueKind.INVALID_TIMESTAMP, f"Invalid interval time: {exc}.", row.line)
            continue

        if end < start:
            issues.record(
                IssueKind.INVERTED_INTERVAL,
                "Negative interval (end before start).",
                row.line,
            )
        if last_end is not None and start < last_end:
            issues.record(
                IssueKind.OUT_OF_ORDER_INTERVAL,
                "Interval starts before a preceding interval ends.",
                row.line,
            )
        if last_end is None or end > last_end:
            last_end = end

        intervals.append(Interval(label=label, start=start, end=end))

    new_issues = issues.issues[first_issue:]
    errors = sum(1 for i in new_issues if i.is_error)
    logger.debug(f"Loaded {len(intervals)} intervals from {table.name} ({errors} errors)")
    return LoadResult(intervals=intervals, errors=errors, issues=list(new_issues))
