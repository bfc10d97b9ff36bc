"""Tests for cursor_replay.cursor_index — advance/retreat index tracking."""

import bisect

import pytest

from cursor_replay.cursor_index import CursorIndexTracker
from cursor_replay.models import EMPTY_STORE, EventStore, PointerSample


def _expected_index(store: EventStore, t: float) -> int:
    """Last index with time <= t, or 0 before the first sample."""
    times = [s.time for s in store]
    return max(bisect.bisect_right(times, t) - 1, 0)


class TestAdvance:
    def test_worked_example(self, five_store: EventStore) -> None:
        tracker = CursorIndexTracker(five_store)
        assert tracker.advance_to(2.5) == 2
        assert tracker.current_sample is five_store[2]

    def test_exact_timestamp_included(self, five_store: EventStore) -> None:
        assert CursorIndexTracker(five_store).advance_to(3.0) == 3

    def test_before_first_sample(self, five_store: EventStore) -> None:
        assert CursorIndexTracker(five_store).advance_to(-1.0) == 0

    def test_past_end(self, five_store: EventStore) -> None:
        assert CursorIndexTracker(five_store).advance_to(99.0) == 4

    def test_monotonic_playback(self, five_store: EventStore) -> None:
        tracker = CursorIndexTracker(five_store)
        prev = -1
        for i in range(0, 500):
            t = i * 0.01
            idx = tracker.advance_to(t)
            assert idx >= prev
            assert idx == _expected_index(five_store, t)
            prev = idx

    def test_retreats_after_backward_jump(self, five_store: EventStore) -> None:
        tracker = CursorIndexTracker(five_store)
        tracker.advance_to(3.5)
        assert tracker.advance_to(1.2) == 1

    def test_duplicate_timestamps(self) -> None:
        store = EventStore([
            PointerSample(0, 0, 0.0),
            PointerSample(0.1, 0, 1.0),
            PointerSample(0.2, 0, 1.0),
            PointerSample(0.3, 0, 2.0),
        ])
        tracker = CursorIndexTracker(store)
        assert tracker.advance_to(1.0) == 2


class TestSeek:
    @pytest.mark.parametrize("start, target", [
        (0.0, 3.7), (3.7, 0.2), (4.0, 0.0), (2.0, 2.0), (1.0, -5.0),
    ])
    def test_seek_matches_search(self, five_store: EventStore,
                                 start: float, target: float) -> None:
        tracker = CursorIndexTracker(five_store)
        tracker.advance_to(start)
        assert tracker.seek(target) == _expected_index(five_store, target)

    def test_reset(self, five_store: EventStore) -> None:
        tracker = CursorIndexTracker(five_store)
        tracker.advance_to(3.0)
        tracker.reset()
        assert tracker.index == 0


class TestEmptyStore:
    def test_no_sample(self) -> None:
        tracker = CursorIndexTracker(EMPTY_STORE)
        assert tracker.advance_to(1.0) is None
        assert tracker.seek(1.0) is None
        assert tracker.index is None
        assert tracker.current_sample is None

    def test_set_store_rewinds(self, five_store: EventStore) -> None:
        tracker = CursorIndexTracker(five_store)
        tracker.advance_to(4.0)
        tracker.set_store(EventStore([PointerSample(0, 0, 10.0)]))
        assert tracker.index == 0
        assert tracker.advance_to(20.0) == 0
