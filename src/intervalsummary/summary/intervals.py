"""Interval and Event records.

An ``Interval`` is one labeled reference period. Its accumulator fields
(``first``, ``last``, ``duration``, ``count``) start unset/zero and are only
ever filled in by the aggregator sweep. ``first``/``last`` are ``None`` until
an event contributes, so a legitimate time of 0 is never mistaken for
"unset".

An ``Event`` is one row of the data table: an instant (``end == start``) or
a span.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Interval:
    """One reference period plus its accumulated statistics."""
    label: str
    start: float
    end: float
    first: Optional[float] = None   # earliest clipped event time
    last: Optional[float] = None    # latest clipped event time
    duration: float = 0.0           # sum of clipped overlap durations
    count: int = 0                  # number of events touching this interval

    def fresh(self) -> "Interval":
        """Copy with the accumulators reset."""
        return replace(self, first=None, last=None, duration=0.0, count=0)

    @property
    def span(self) -> float:
        return self.end - self.start

    @property
    def proportion(self) -> float:
        """Fraction of the interval covered by events (0 for empty intervals)."""
        span = self.span
        if span > 0:
            return self.duration / span
        return 0.0

    @property
    def time_until_first(self) -> Optional[float]:
        if self.first is None:
            return None
        return self.first - self.start

    @property
    def time_after_last(self) -> Optional[float]:
        if self.last is None:
            return None
        return self.end - self.last

    @property
    def first_to_last(self) -> Optional[float]:
        if self.first is None or self.last is None:
            return None
        return self.last - self.first

    @property
    def first_to_last_minus_duration(self) -> Optional[float]:
        first_to_last = self.first_to_last
        if first_to_last is None:
            return None
        return first_to_last - self.duration


@dataclass(frozen=True)
class Event:
    """An instant or span from the data table.

    ``end`` defaults to ``start``. ``duration`` is the explicit override from
    the data table when present, otherwise ``end - start``.
    """
    start: float
    end: Optional[float] = None
    duration: Optional[float] = None
    line: Optional[int] = None

    def __post_init__(self) -> None:
        if self.end is None:
            object.__setattr__(self, "end", self.start)
        if self.duration is None:
            object.__setattr__(self, "duration", self.end - self.start)
