"""Unit tests for EventReader."""

from intervalsummary.summary.errors import IssueKind, IssueLog
from intervalsummary.summary.events import EventReader
from intervalsummary.tables.csv_table import CsvTable


def _read(rows):
    issues = IssueLog()
    reader = EventReader(CsvTable.from_rows(rows), issues)
    return list(reader), issues, reader


def test_start_only_gives_instant_events():
    events, issues, _ = _read([["Start"], ["10"], ["20"]])
    assert [(e.start, e.end, e.duration) for e in events] == [(10, 10, 0), (20, 20, 0)]
    assert issues.issues == []


def test_start_end_gives_spans():
    events, _, _ = _read([["Start", "End"], ["10", "25"]])
    assert (events[0].start, events[0].end, events[0].duration) == (10, 25, 15)
    assert events[0].line == 2


def test_explicit_duration_wins_with_mismatch_warning():
    events, issues, _ = _read([["Start", "End", "Duration(s)"], ["10", "25", "20"]])
    assert events[0].duration == 20
    mismatches = issues.of_kind(IssueKind.DURATION_MISMATCH)
    assert [i.line for i in mismatches] == [2]
    assert issues.errors == 0


def test_duration_within_tolerance_is_quiet():
    _, issues, _ = _read([["Start", "End", "Duration(s)"], ["10", "25", "15.005"]])
    assert issues.issues == []


def test_duration_for_instant_not_checked():
    events, issues, _ = _read([["Start", "End", "Duration(s)"], ["10", "10", "5"]])
    assert events[0].duration == 5
    assert issues.issues == []


def test_no_header_uses_default_positions():
    events, _, _ = _read([["0", "5", "5"], ["10"]])
    assert [(e.start, e.end) for e in events] == [(0, 5), (10, 10)]


def test_missing_start_heading_falls_back_with_warning():
    events, issues, reader = _read([["End", "Note"], ["5"]])
    assert len(issues.of_kind(IssueKind.MISSING_COLUMN)) == 1
    assert reader.columns["Start"] == 0
    assert events[0].start == 5


def test_blank_and_bad_rows():
    events, issues, reader = _read(
        [["Extra", "Start"], ["x", "1"], ["only-one"], [], ["y", "later"], ["z", "3"]]
    )
    assert [e.start for e in events] == [1, 3]
    assert [i.kind for i in issues.issues] == [
        IssueKind.UNKNOWN_HEADER,
        IssueKind.TOO_FEW_COLUMNS,
        IssueKind.INVALID_TIMESTAMP,
    ]
    assert reader.events_read == 2
    assert reader.rows_skipped == 2


def test_row_of_empty_cells_warns_too_few_columns():
    """``,,`` in the data table is skipped with a warning like a short row."""
    events, issues, reader = _read([["Start", "End"], ["1", "2"], ["", "", ""], ["3", ""]])
    assert [(e.start, e.end) for e in events] == [(1, 2), (3, 3)]
    assert [(i.kind, i.line) for i in issues.issues] == [(IssueKind.TOO_FEW_COLUMNS, 3)]
    assert reader.rows_skipped == 1


def test_invalid_duration_uses_computed_value():
    events, issues, _ = _read([["Start", "End", "Duration(s)"], ["10", "25", "abc"]])
    assert events[0].duration == 15
    assert len(issues.of_kind(IssueKind.INVALID_DURATION)) == 1


def test_events_are_read_lazily():
    reader = EventReader(CsvTable.from_rows([["Start"], ["1"], ["2"]]))
    it = iter(reader)
    assert next(it).start == 1
    assert reader.events_read == 1
