"""Event reader: turn data-table rows into ``Event`` records lazily.

Events are produced one at a time so the aggregator can consume an
arbitrarily long data table without holding it in memory.
"""

from __future__ import annotations

from typing import Iterator, Optional

from intervalsummary.summary.columns import DATA_COLUMNS, DATA_FALLBACK, ColumnMap, resolve_columns
from intervalsummary.summary.errors import IssueKind, IssueLog
from intervalsummary.summary.intervals import Event
from intervalsummary.tables.csv_table import CsvTable, Row
from intervalsummary.tables.timestamps import parse_time
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

# Largest tolerated difference between an explicit duration and (end - start).
DURATION_TOLERANCE = 0.01


def _cell(row: Row, index: Optional[int]) -> Optional[str]:
    """Cell text, or None if the column is unresolved, absent or empty."""
    if index is None or len(row) <= index:
        return None
    return row.cells[index] or None


class EventReader:
    """Iterate the events of a data table.

    Rows without a Start cell, or with an empty one (``,,``), are skipped
    with a warning; only blank lines are skipped silently. A missing Start heading is not fatal for the data table: the
    default positions are used instead.
    """

    def __init__(self, table: CsvTable, issues: Optional[IssueLog] = None) -> None:
        self.table = table
        self.issues = issues if issues is not None else IssueLog(source=table.name)
        self.events_read = 0
        self.rows_skipped = 0
        self.columns = self._resolve()

    def _resolve(self) -> ColumnMap:
        cols = resolve_columns(
            self.table.header, DATA_COLUMNS, DATA_FALLBACK, self.issues, table="data"
        )
        if cols["Start"] is None:
            self.issues.record(
                IssueKind.MISSING_COLUMN,
                "Required data column ('start') is missing -- default columns will be used.",
            )
            cols = ColumnMap(indices=dict(DATA_FALLBACK), from_header=False)
        return cols

    def _parse(self, row: Row) -> Optional[Event]:
        col_start = self.columns["Start"]
        try:
            start = parse_time(row.cells[col_start])
            end_text = _cell(row, self.columns["End"])
            end = parse_time(end_text) if end_text is not None else None
        except ValueError as exc:
            self.issues.record(IssueKind.INVALID_TIMESTAMP, f"Invalid event time: {exc}.", row.line)
            return None

        duration = None
        duration_text = _cell(row, self.columns["Duration(s)"])
        if duration_text is not None:
            try:
                duration = float(duration_text)
            except ValueError:
                self.issues.record(
                    IssueKind.INVALID_DURATION,
                    f"Invalid duration '{duration_text}', using (end - start).",
                    row.line,
                )
            else:
                if end is not None and end != start and abs(duration - (end - start)) > DURATION_TOLERANCE:
                    self.issues.record(
                        IssueKind.DURATION_MISMATCH,
                        "Duration does not match (end - start).",
                        row.line,
                    )

        return Event(start=start, end=end, duration=duration, line=row.line)

    def __iter__(self) -> Iterator[Event]:
        col_start = self.columns["Start"]
        for row in self.table:
            if row.is_blank:
                continue
            if not row.has(col_start):
                self.issues.record(IssueKind.TOO_FEW_COLUMNS, "Too-few columns, ignoring row.", row.line)
                self.rows_skipped += 1
                continue
            event = self._parse(row)
            if event is None:
                self.rows_skipped += 1
                continue
            self.events_read += 1
            yield event
