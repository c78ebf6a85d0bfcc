"""Error taxonomy for interval summaries.

Two kinds of problems exist:

- Fatal conditions are raised as exceptions (``MissingColumnError`` for the
  times table, ``OutputOpenError`` for the report destination). The runner
  turns them into a non-zero exit status.
- Everything else is an ``Issue``: logged the moment it is recorded, counted,
  and processing continues. ``IssueKind`` carries the severity, so the loader
  and event reader never decide on their own whether something is a warning
  or an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)


class IntervalSummaryError(Exception):
    """Base class for fatal intervalsummary errors."""


class MissingColumnError(IntervalSummaryError):
    """A required column could not be resolved from the header or positions."""

    def __init__(self, table: str, columns: list[str]):
        self.table = table
        self.columns = list(columns)
        names = ", ".join(repr(c.lower()) for c in self.columns)
        super().__init__(f"One or more required {table} columns ({names}) are missing.")


class OutputOpenError(IntervalSummaryError):
    """The report destination could not be opened for writing."""

    def __init__(self, path: str, reason: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        msg = f"Problem opening CSV file for output: {path}"
        if reason is not None:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class IssueKind(Enum):
    """Non-fatal problem categories."""
    UNKNOWN_HEADER = "unknown_header"
    NO_RECOGNIZED_HEADER = "no_recognized_header"
    MISSING_COLUMN = "missing_column"  # data table only; the times table raises
    INVERTED_INTERVAL = "inverted_interval"
    OUT_OF_ORDER_INTERVAL = "out_of_order_interval"
    TOO_FEW_COLUMNS = "too_few_columns"
    DURATION_MISMATCH = "duration_mismatch"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_DURATION = "invalid_duration"

    @property
    def is_error(self) -> bool:
        return self in _ERROR_KINDS


# Kinds counted as errors; every other kind is a warning.
_ERROR_KINDS = frozenset({
    IssueKind.INVERTED_INTERVAL,
    IssueKind.OUT_OF_ORDER_INTERVAL,
    IssueKind.INVALID_TIMESTAMP,
})


@dataclass(frozen=True)
class Issue:
    """One recorded problem; ``line`` is the 1-based input line, if known."""
    kind: IssueKind
    message: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.kind.is_error

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Line {self.line}: {self.message}"


@dataclass
class IssueLog:
    """Collects issues and logs each one as it arrives."""
    issues: list[Issue] = field(default_factory=list)
    source: Optional[str] = None  # file name shown in log lines

    def record(self, kind: IssueKind, message: str, line: Optional[int] = None) -> Issue:
        issue = Issue(kind=kind, message=message, line=line)
        self.issues.append(issue)
        level = logging.ERROR if issue.is_error else logging.WARNING
        prefix = f"{self.source}: " if self.source else ""
        logger.log(level, f"{prefix}{issue}")
        return issue

    @property
    def errors(self) -> int:
        return sum(1 for i in self.issues if i.is_error)

    @property
    def warnings(self) -> int:
        return sum(1 for i in self.issues if not i.is_error)

    def of_kind(self, kind: IssueKind) -> list[Issue]:
        return [i for i in self.issues if i.kind is kind]
