"""Streaming reader for delimited text tables.

A ``CsvTable`` yields ``Row`` objects one at a time, so the data table can be
arbitrarily long without being materialized. Each row keeps its physical line
number for diagnostics and its cells as stripped strings; rows have whatever
number of cells the line has (ragged rows are normal here, short rows are
the caller's business).

Header handling
---------------
``header="detect"`` (default) treats the first row as a header when it has at
least one non-empty cell and every non-empty cell is non-numeric. A first row
of timestamps therefore stays data, because timestamps start with digits.
``"none"`` and ``"always"`` force the choice.
"""

from __future__ import annotations

import csv
import io
import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TextIO, Union

from intervalsummary.tables.timestamps import looks_numeric
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

HEADER_MODES = ("detect", "none", "always")


@dataclass(frozen=True)
class Row:
    """One input line: 1-based ``line`` number and its cells.

    Only a line with no delimiter and no text is blank. A row of empty cells
    such as ``,,`` is not: it reaches the caller, which reports it.
    """
    line: int
    cells: list[str]

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def is_blank(self) -> bool:
        return len(self.cells) <= 1 and not any(self.cells)

    def has(self, index: int) -> bool:
        """True if cell ``index`` exists and is non-empty."""
        return index < len(self.cells) and bool(self.cells[index])


def is_header_row(cells: list[str]) -> bool:
    """True if every non-empty cell is non-numeric (and there is at least one)."""
    non_empty = [c for c in cells if c]
    return bool(non_empty) and not any(looks_numeric(c) for c in non_empty)


def _clean(cells: list[str]) -> list[str]:
    return [c.strip() for c in cells]


class CsvTable:
    """Row iterator over a delimited text source with optional header.

    Use ``CsvTable.open(path)`` as a context manager for files, or
    ``CsvTable.from_rows(...)`` for in-memory tables.
    """

    def __init__(
        self,
        stream: TextIO,
        *,
        header: str = "detect",
        name: str = "<stream>",
        delimiter: str = ",",
        owns_stream: bool = False,
    ) -> None:
        if header not in HEADER_MODES:
            raise ValueError(f"header must be one of {HEADER_MODES}, got {header!r}")
        self.name = name
        self._stream = stream
        self._owns_stream = owns_stream
        self._reader = csv.reader(stream, delimiter=delimiter)
        self._pending: Optional[Row] = None
        self.header: Optional[list[str]] = None

        first = self._next_row()
        if first is None:
            return
        if header == "always" or (header == "detect" and is_header_row(first.cells)):
            self.header = first.cells
            logger.debug(f"{self.name}: header detected: {self.header}")
        else:
            self._pending = first

    # -----------------------------
    # Construction
    # -----------------------------
    @classmethod
    def open(
        cls,
        path: Union[str, os.PathLike],
        *,
        header: str = "detect",
        delimiter: str = ",",
    ) -> "CsvTable":
        """Open a UTF-8 file for streaming.

        Raises:
            OSError: If the file cannot be opened.
            UnicodeDecodeError: If the first row is not valid UTF-8 (later
                rows raise it while iterating).
        """
        fp = open(path, "r", newline="", encoding="utf-8-sig")
        try:
            return cls(fp, header=header, name=str(path), delimiter=delimiter, owns_stream=True)
        except BaseException:
            fp.close()
            raise

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[str]],
        *,
        header: str = "detect",
        name: str = "<rows>",
    ) -> "CsvTable":
        """Build a table from already-split rows (each an iterable of cells)."""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        for row in rows:
            writer.writerow(list(row))
        buf.seek(0)
        return cls(buf, header=header, name=name, owns_stream=True)

    # -----------------------------
    # Iteration
    # -----------------------------
    @property
    def header_cells(self) -> int:
        """Number of header cells (0 when there is no header row)."""
        return len(self.header) if self.header is not None else 0

    def _next_row(self) -> Optional[Row]:
        try:
            cells = next(self._reader)
        except StopIteration:
            return None
        return Row(line=self._reader.line_num, cells=_clean(cells))

    def __iter__(self) -> Iterator[Row]:
        if self._pending is not None:
            row, self._pending = self._pending, None
            yield row
        while True:
            row = self._next_row()
            if row is None:
                return
            yield row

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "CsvTable":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
