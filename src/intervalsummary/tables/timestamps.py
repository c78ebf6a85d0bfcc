"""Timestamp codec: text <-> linear numeric time.

Times are carried through the pipeline as fractional seconds since the Unix
epoch, so interval arithmetic is plain float subtraction.

Parsing rules:
  - Plain numeric text (``"12.5"``, ``"-3"``, ``"1e3"``) is already a time
    value and is returned as-is.
  - Anything else goes through ``pandas.Timestamp`` (ISO-8601 and the usual
    ``YYYY-MM-DD hh:mm:ss[.fff]`` forms). Naive times are taken as UTC and
    aware times are converted to UTC; no other timezone handling is done.
"""

from __future__ import annotations

import re

import pandas as pd

# Output format; %f is truncated to milliseconds in format_time().
TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

_EPOCH = pd.Timestamp(0, tz="UTC")
_NUMERIC_RE = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")
_LEADING_NUMBER_RE = re.compile(r"^\s*[-+]?(\d|\.\d)")


def looks_numeric(text: str) -> bool:
    """True if the cell starts like a number (timestamps included)."""
    return bool(_LEADING_NUMBER_RE.match(text))


def parse_time(text: str) -> float:
    """Parse a timestamp cell into seconds since the epoch.

    Raises:
        ValueError: If the text is empty or not a recognizable time.
    """
    s = text.strip() if text is not None else ""
    if not s:
        raise ValueError("empty timestamp")

    if _NUMERIC_RE.match(s):
        return float(s)

    try:
        ts = pd.Timestamp(s)
    except (ValueError, TypeError, OverflowError) as exc:
        raise ValueError(f"unrecognized timestamp {text!r}") from exc
    if pd.isna(ts):
        raise ValueError(f"unrecognized timestamp {text!r}")

    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    else:
        ts = ts.tz_convert("UTC")
    return (ts - _EPOCH).total_seconds()


def format_time(value: float) -> str:
    """Format seconds since the epoch as ``YYYY-MM-DD hh:mm:ss.fff`` (UTC)."""
    ts = pd.to_datetime(value, unit="s", utc=True).round("ms")
    return ts.strftime(TIME_FORMAT)[:-3]
