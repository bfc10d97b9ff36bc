"""Core data models for CursorReplay.

Defines the pointer samples replayed over the video and the immutable,
time-ordered :class:`EventStore` that holds them after ingestion.  All
coordinates are normalized (0-1) relative to the video frame so they are
independent of the rendering resolution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple


class SampleKind(str, Enum):
    """Kind of pointer event a sample was recorded from."""
    MOVED = "moved"
    PRESSED = "pressed"
    RELEASED = "released"
    OTHER = "other"


# mouseEventType values seen in capture files → sample kind
_KIND_ALIASES = {
    "moved": SampleKind.MOVED,
    "move": SampleKind.MOVED,
    "down": SampleKind.PRESSED,
    "pressed": SampleKind.PRESSED,
    "up": SampleKind.RELEASED,
    "released": SampleKind.RELEASED,
}


def kind_from_event_type(event_type: Optional[str]) -> SampleKind:
    """Map a raw ``mouseEventType`` string to a :class:`SampleKind`.

    A missing type means a plain move; unknown types map to ``OTHER``.
    """
    if not event_type:
        return SampleKind.MOVED
    return _KIND_ALIASES.get(str(event_type).lower(), SampleKind.OTHER)


@dataclass(frozen=True)
class PointerSample:
    """A single recorded cursor position.

    ``x`` / ``y`` are normalized to the video frame, ``time`` is in
    seconds on the capture tool's clock.
    """
    x: float
    y: float
    time: float  # seconds
    kind: SampleKind = SampleKind.MOVED

    @property
    def is_click(self) -> bool:
        return self.kind is SampleKind.PRESSED


class EventStore:
    """Immutable, time-ordered sequence of :class:`PointerSample`.

    Samples are sorted by ``time`` once at construction with a stable
    sort, so samples sharing a timestamp keep their input order.
    """

    __slots__ = ("_samples",)

    def __init__(self, samples: Iterable[PointerSample] = ()) -> None:
        self._samples: Tuple[PointerSample, ...] = tuple(
            sorted(samples, key=lambda s: s.time)
        )

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def __iter__(self) -> Iterator[PointerSample]:
        return iter(self._samples)

    def __bool__(self) -> bool:
        return bool(self._samples)

    def __repr__(self) -> str:
        return f"EventStore({len(self._samples)} samples)"

    @property
    def is_empty(self) -> bool:
        return not self._samples

    @property
    def samples(self) -> Tuple[PointerSample, ...]:
        return self._samples

    @property
    def first_time(self) -> float:
        return self._samples[0].time if self._samples else 0.0

    @property
    def last_time(self) -> float:
        return self._samples[-1].time if self._samples else 0.0

    @property
    def duration(self) -> float:
        """Span between the first and last sample, in seconds."""
        return self.last_time - self.first_time

    @property
    def click_count(self) -> int:
        return sum(1 for s in self._samples if s.is_click)


EMPTY_STORE = EventStore()
