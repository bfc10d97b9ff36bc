"""Cursor index tracker — maps a playback time to the current pointer sample.

Keeps a single cursor into the :class:`EventStore`.  During forward
playback the cursor only moves forward a few steps per frame (O(1)
amortized); after a seek it walks in whichever direction is needed.
"""

import logging
from typing import Optional

from .models import EventStore, PointerSample

logger = logging.getLogger(__name__)


class CursorIndexTracker:
    """Tracks the index of the most recent sample at or before a query time.

    The index is ``None`` while the store is empty.
    """

    def __init__(self, store: EventStore) -> None:
        self._store = store
        self._index: int = 0

    @property
    def store(self) -> EventStore:
        return self._store

    @property
    def index(self) -> Optional[int]:
        return None if self._store.is_empty else self._index

    @property
    def current_sample(self) -> Optional[PointerSample]:
        if self._store.is_empty:
            return None
        return self._store[self._index]

    def set_store(self, store: EventStore) -> None:
        """Replace the event store and rewind to the first sample."""
        self._store = store
        self._index = 0

    def reset(self) -> None:
        self._index = 0

    def advance_to(self, target_time: float) -> Optional[int]:
        """Move the cursor to the last sample with ``time <= target_time``.

        Advances while the next sample is due, then retreats while the
        current sample lies in the future.  Before the first sample the
        index stays at 0.
        """
        samples = self._store.samples
        if not samples:
            return None

        last = len(samples) - 1
        i = min(self._index, last)
        while i < last and samples[i + 1].time <= target_time:
            i += 1
        while i > 0 and samples[i].time > target_time:
            i -= 1
        self._index = i
        return i

    def seek(self, target_time: float) -> Optional[int]:
        """Resynchronize after a discrete jump in playback time."""
        self.reset()
        index = self.advance_to(target_time)
        logger.debug("Seek to %.3fs -> sample %s", target_time, index)
        return index
