"""Unit tests for the interval aggregator sweep."""

import pytest

from intervalsummary.summary.aggregator import IntervalSweep, aggregate
from intervalsummary.summary.intervals import Event, Interval


def _intervals(*bounds):
    return [Interval(label=chr(ord("A") + i), start=s, end=e) for i, (s, e) in enumerate(bounds)]


def _stats(it):
    return (it.first, it.last, it.duration, it.count)


def test_single_interval_partial_overlap_scenario():
    """Second event runs past the end and is clipped to it."""
    result = aggregate(_intervals((0, 100)), [Event(10, 30), Event(50, 200)])
    assert _stats(result[0]) == (10, 100, 70, 2)


def test_first_is_frozen_last_follows_latest_clip():
    result = aggregate(_intervals((0, 100)), [Event(10, 20), Event(30, 40), Event(60, 65)])
    assert _stats(result[0]) == (10, 65, 25, 3)


def test_event_before_all_intervals_touches_nothing():
    sweep = IntervalSweep(_intervals((100, 200)))
    assert sweep.add(Event(10, 20)) == 0
    assert sweep.result()[0].count == 0
    assert sweep.events_dropped == 1


def test_event_in_gap_touches_nothing():
    result = aggregate(_intervals((0, 10), (20, 30)), [Event(12, 15)])
    assert [it.count for it in result] == [0, 0]
    assert result[0].first is None and result[0].last is None


def test_event_spanning_several_intervals():
    """Each interval gets its own clipped share; the cursor ends on the last one touched."""
    sweep = IntervalSweep(_intervals((0, 10), (10, 20), (20, 30), (40, 50)))
    cursor = sweep.add(Event(5, 25))
    result = sweep.result()
    assert [it.count for it in result] == [1, 1, 1, 0]
    assert [it.duration for it in result] == [5, 10, 5, 0]
    assert (result[1].first, result[1].last) == (10, 20)
    assert cursor == 2


def test_instant_event_inside_interval():
    result = aggregate(_intervals((0, 100)), [Event(42)])
    assert _stats(result[0]) == (42, 42, 0, 1)


def test_instant_on_shared_boundary_touches_both_intervals():
    """Boundary touches count: the interval ending at t and the one starting at t."""
    result = aggregate(_intervals((0, 100), (100, 200)), [Event(100, 100)])
    assert _stats(result[0]) == (100, 100, 0, 1)
    assert _stats(result[1]) == (100, 100, 0, 1)


def test_instant_on_end_of_last_interval():
    sweep = IntervalSweep(_intervals((0, 100)))
    assert sweep.add(Event(100)) == 1
    assert _stats(sweep.result()[0]) == (100, 100, 0, 1)


def test_cursor_never_moves_back():
    """Once an event reaches an interval's end, later events start from the next interval."""
    sweep = IntervalSweep(_intervals((0, 100), (200, 300)))
    assert sweep.add(Event(0, 100)) == 1
    assert sweep.add(Event(50, 60)) == 1
    result = sweep.result()
    assert result[0].count == 1
    assert result[1].count == 0


def test_events_after_all_intervals_are_dropped():
    sweep = IntervalSweep(_intervals((0, 10)))
    sweep.add_all([Event(20), Event(30, 40)])
    assert sweep.cursor == 1
    assert sweep.events_dropped == 2
    assert sweep.result()[0].count == 0


def test_no_intervals():
    assert aggregate([], [Event(1, 2)]) == []


def test_inputs_not_mutated_and_runs_are_identical():
    intervals = _intervals((0, 10), (10, 20))
    events = [Event(1, 4), Event(8, 15), Event(19)]
    first_run = aggregate(intervals, events)
    second_run = aggregate(intervals, events)
    assert first_run == second_run
    assert all(it.count == 0 and it.first is None for it in intervals)


def test_total_duration_never_exceeds_event_durations():
    intervals = _intervals((0, 10), (15, 25), (25, 40), (60, 61))
    events = [Event(s, s + d) for s, d in [(-5, 7), (3, 1), (9, 20), (24, 0), (30, 45), (80, 3)]]
    result = aggregate(intervals, events)
    assert sum(it.duration for it in result) <= sum(e.duration for e in events)
    assert result[3].duration == pytest.approx(1.0)


def test_unsorted_intervals_follow_cursor_rules():
    """Overlapping input is not corrected; the sweep still terminates deterministically."""
    intervals = _intervals((0, 100), (50, 60))
    result = aggregate(intervals, [Event(55, 56), Event(120)])
    assert [it.count for it in result] == [1, 0]


def test_explicit_duration_does_not_change_clip():
    result = aggregate(_intervals((0, 100)), [Event(10, 30, duration=99)])
    assert result[0].duration == 20
