"""Report Writer: render aggregated intervals as delimited text.

The report is built as a pandas DataFrame (one row per interval, derived
quantities taken from the ``Interval`` properties) and written with
``DataFrame.to_csv``. Cells whose value depends on an unset ``first`` or
``last`` (intervals no event touched) are NaN in the frame and empty in the
output.

Scaling:
  - every duration-like column is multiplied by ``settings.scale``
    (e.g. 1/60 for minutes);
  - ``Proportion`` is multiplied by ``settings.scale_prop`` (e.g. 100 for %);
  - ``Count`` has ``settings.count_offset`` added (e.g. -1 for transitions).
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, TextIO, Union

import numpy as np
import pandas as pd

from intervalsummary.config import SummarySettings
from intervalsummary.summary.errors import OutputOpenError
from intervalsummary.summary.intervals import Interval
from intervalsummary.tables.timestamps import format_time
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

REPORT_COLUMNS = [
    "Label",
    "Start",
    "End",
    "Interval",
    "First",
    "TimeUntilFirst",
    "Last",
    "TimeAfterLast",
    "FirstToLast",
    "Count",
    "Duration",
    "FirstToLastMinusDuration",
    "Proportion",
]

DEFAULT_HEADER = ",".join(REPORT_COLUMNS)

# Accepted spellings for "write to standard output".
STDOUT_TARGETS = (None, "", "-")

OutputTarget = Union[None, str, os.PathLike, TextIO]


def resolve_separator(text: Optional[str]) -> str:
    """Turn a separator option into the actual field separator.

    ``None`` or ``""`` gives a comma; the two-character escape ``\\t`` gives a
    TAB. Any other text, including multi-character strings such as ``"; "``,
    is used verbatim.
    """
    if not text:
        return ","
    if text == "\\t":
        return "\t"
    return text


def header_line(settings: SummarySettings, separator: str) -> Optional[str]:
    """Header text with commas replaced by ``separator``; None if suppressed."""
    header = DEFAULT_HEADER if settings.header is None else settings.header
    if header == "":
        return None
    return header.replace(",", separator)


def _optional(values: Sequence[Optional[float]]) -> np.ndarray:
    return np.array([np.nan if v is None else v for v in values], dtype=float)


def build_report(intervals: Sequence[Interval], settings: SummarySettings) -> pd.DataFrame:
    """Build the report frame for aggregated intervals.

    Derived quantities come from the ``Interval`` properties; this function
    only converts unset values to NaN and applies the scaling.

    Args:
        intervals: Intervals after the aggregator sweep.
        settings: Supplies scale, scale_prop and count_offset.

    Returns:
        DataFrame with columns REPORT_COLUMNS, one row per interval.
    """
    scale = settings.scale

    def _scaled(values: Sequence[Optional[float]]) -> np.ndarray:
        return _optional(values) * scale

    frame = pd.DataFrame(
        {
            "Label": [it.label for it in intervals],
            "Start": [format_time(it.start) for it in intervals],
            "End": [format_time(it.end) for it in intervals],
            "Interval": _scaled([it.span for it in intervals]),
            "First": [None if it.first is None else format_time(it.first) for it in intervals],
            "TimeUntilFirst": _scaled([it.time_until_first for it in intervals]),
            "Last": [None if it.last is None else format_time(it.last) for it in intervals],
            "TimeAfterLast": _scaled([it.time_after_last for it in intervals]),
            "FirstToLast": _scaled([it.first_to_last for it in intervals]),
            "Count": np.array([it.count for it in intervals], dtype=int) + settings.count_offset,
            "Duration": _scaled([it.duration for it in intervals]),
            "FirstToLastMinusDuration": _scaled(
                [it.first_to_last_minus_duration for it in intervals]
            ),
            "Proportion": _optional([it.proportion for it in intervals]) * settings.scale_prop,
        },
        columns=REPORT_COLUMNS,
    )
    return frame


def _format_cell(value) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return ""
    if isinstance(value, (float, np.floating)):
        return "%f" % value
    return str(value)


def write_report(frame: pd.DataFrame, stream: TextIO, settings: SummarySettings) -> None:
    """Write the header line (if any) and the report body to ``stream``.

    Single-character separators go through ``DataFrame.to_csv``; longer ones
    are joined by hand with the same cell formatting (``%f`` floats, empty
    cells for NaN), since ``to_csv`` only accepts one character.
    """
    separator = resolve_separator(settings.separator)
    header = header_line(settings, separator)
    if header is not None:
        stream.write(header + "\n")
    if frame.empty:
        return
    if len(separator) == 1:
        frame.to_csv(
            stream,
            sep=separator,
            header=False,
            index=False,
            float_format="%f",
            na_rep="",
            lineterminator="\n",
        )
        return
    for row in frame.itertuples(index=False, name=None):
        stream.write(separator.join(_format_cell(v) for v in row) + "\n")


@contextmanager
def open_output(out: OutputTarget) -> Iterator[TextIO]:
    """Yield a writable text stream for ``out``.

    A path is opened for writing and always closed afterwards. ``None``,
    ``""`` and ``"-"`` mean standard output, and an already-open stream is
    used as-is; neither is closed here.

    Raises:
        OutputOpenError: If the path cannot be opened.
    """
    if out in STDOUT_TARGETS:
        yield sys.stdout
        return
    if not isinstance(out, (str, os.PathLike)):
        yield out
        return

    logger.info(f"Saving data: {out}")
    try:
        fp = open(out, "w", newline="", encoding="utf-8")
    except OSError as exc:
        raise OutputOpenError(str(out), exc) from exc
    with fp:
        yield fp


def save_report(
    intervals: Sequence[Interval],
    out: OutputTarget,
    settings: SummarySettings,
) -> pd.DataFrame:
    """Build the report and write it to ``out``. Returns the report frame."""
    frame = build_report(intervals, settings)
    with open_output(out) as stream:
        write_report(frame, stream, settings)
    return frame
