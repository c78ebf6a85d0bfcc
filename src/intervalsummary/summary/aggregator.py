"""Interval Aggregator: one forward sweep of events against intervals.

Both streams are assumed sorted by start, and the intervals non-overlapping.
A single cursor walks the interval list and never moves backwards, so the
whole sweep is O(intervals + events).

For each event, starting at the cursor:

  1. Clip the event to the current interval:
     ``local_start = max(event.start, it.start)``,
     ``local_end = min(event.end, it.end)``.
  2. If ``local_end - local_start >= 0`` the event touches the interval
     (zero-length touches count): set ``first`` on the first touch, always
     move ``last`` to ``local_end``, add the clipped length to ``duration``
     and bump ``count``.
  3. If the event reaches or passes the end of the interval, advance the
     cursor and try the same event against the next interval; otherwise
     move on to the next event.

Events in a gap between intervals (or before the first one) touch nothing.
An instant exactly on a shared boundary (``start == it.end``) touches the
interval that ends there and, because the cursor then advances, also the one
that starts there.

If the intervals are not actually sorted and disjoint the sweep still runs
and follows exactly these rules; the loader has already reported the problem.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from intervalsummary.summary.intervals import Event, Interval
from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)


class IntervalSweep:
    """Fold state for the sweep: owned interval accumulators plus the cursor.

    The intervals passed in are copied with reset accumulators, so the
    caller's list is never modified and repeated sweeps are independent.
    """

    def __init__(self, intervals: Sequence[Interval]) -> None:
        self._intervals = [it.fresh() for it in intervals]
        self.cursor = 0
        self.events_seen = 0
        self.events_dropped = 0  # touched no interval

    def add(self, event: Event) -> int:
        """Fold one event into the state. Returns the cursor afterwards."""
        self.events_seen += 1
        touched = False
        intervals = self._intervals
        while self.cursor < len(intervals):
            it = intervals[self.cursor]
            local_start = max(event.start, it.start)
            local_end = min(event.end, it.end)
            local_duration = local_end - local_start

            if local_duration >= 0:
                if it.count == 0:
                    it.first = local_start
                it.last = local_end
                it.duration += local_duration
                it.count += 1
                touched = True

            # Reaches the end of this interval: the next one may need it too.
            if event.end >= it.end:
                self.cursor += 1
                continue
            break

        if not touched:
            self.events_dropped += 1
        return self.cursor

    def add_all(self, events: Iterable[Event]) -> "IntervalSweep":
        for event in events:
            self.add(event)
        return self

    def result(self) -> list[Interval]:
        """The accumulated intervals, in input order."""
        return self._intervals


def aggregate(intervals: Sequence[Interval], events: Iterable[Event]) -> list[Interval]:
    """Sweep ``events`` against ``intervals`` and return the filled-in intervals.

    Args:
        intervals: Reference intervals sorted by start, non-overlapping.
        events: Events sorted by start; consumed lazily, one at a time.

    Returns:
        New Interval objects (same order) with first/last/duration/count set.
    """
    sweep = IntervalSweep(intervals).add_all(events)
    logger.debug(
        f"Swept {sweep.events_seen} events over {len(intervals)} intervals "
        f"({sweep.events_dropped} outside every interval)"
    )
    return sweep.result()
