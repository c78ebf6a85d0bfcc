"""Column resolution for the times and data tables.

Headings are matched case-insensitively against a fixed list of names. When
no heading is recognized (or there is no header row at all) the table falls
back to fixed positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from intervalsummary.summary.errors import IssueKind, IssueLog
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

TIMES_COLUMNS = ("Start", "End", "Label")
DATA_COLUMNS = ("Start", "End", "Duration(s)")

# Positional columns used when no heading is recognized.
TIMES_FALLBACK = {"Start": 0, "End": 1, "Label": 2}
DATA_FALLBACK = {"Start": 0, "End": 1, "Duration(s)": 2}


@dataclass(frozen=True)
class ColumnMap:
    """Resolved column indices keyed by canonical name (None = unresolved)."""
    indices: dict[str, Optional[int]]
    from_header: bool

    def __getitem__(self, name: str) -> Optional[int]:
        return self.indices.get(name)

    def missing(self, required: Sequence[str]) -> list[str]:
        return [name for name in required if self.indices.get(name) is None]


def resolve_columns(
    header: Optional[Sequence[str]],
    names: Sequence[str],
    fallback: dict[str, int],
    issues: IssueLog,
    *,
    table: str = "times",
) -> ColumnMap:
    """Map canonical column names to indices.

    Args:
        header: Header cells, or None when the table has no header row.
        names: Canonical column names to look for.
        fallback: Positions used when no heading is recognized.
        issues: Unknown headings are recorded here as warnings.
        table: Table name used in messages ("times" or "data").

    Returns:
        ColumnMap with an entry for every name in ``names``.
    """
    lookup = {n.lower(): n for n in names}
    indices: dict[str, Optional[int]] = {n: None for n in names}

    for i, heading in enumerate(header or []):
        name = lookup.get(heading.lower())
        if name is not None:
            indices[name] = i
        else:
            issues.record(
                IssueKind.UNKNOWN_HEADER,
                f"Unknown {table} column {i + 1} heading: '{heading}'.",
            )

    if all(v is None for v in indices.values()):
        if header is not None:
            issues.record(
                IssueKind.NO_RECOGNIZED_HEADER,
                f"No recognized {table} heading line -- default columns will be used.",
            )
        else:
            logger.debug(f"No {table} header row, using default columns {fallback}")
        return ColumnMap(indices={n: fallback.get(n) for n in names}, from_header=False)

    return ColumnMap(indices=indices, from_header=True)
