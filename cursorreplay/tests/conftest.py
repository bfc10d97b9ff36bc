"""Shared pytest fixtures for CursorReplay tests."""

import os

# Qt must not try to open a display when tests touch QImage/QPainter
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from cursor_replay.models import EventStore, PointerSample, SampleKind


class RecordingSurface:
    """In-memory :class:`RasterSurface` that records every draw call."""

    def __init__(self, width: int = 1000, height: int = 500) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple] = []
        self.open = False
        self.sessions = 0

    def begin(self) -> None:
        self.open = True
        self.sessions += 1

    def end(self) -> None:
        self.open = False

    def clear(self) -> None:
        self.calls.clear()
        self.calls.append(("clear",))

    def stroke_line(self, x0, y0, x1, y1, color, alpha, width) -> None:
        self.calls.append(("line", x0, y0, x1, y1, color, alpha, width))

    def fill_disc(self, x, y, radius, color, alpha) -> None:
        self.calls.append(("disc", x, y, radius, color, alpha))

    def stroke_circle(self, x, y, radius, color, alpha, width) -> None:
        self.calls.append(("circle", x, y, radius, color, alpha, width))

    def glow(self, x, y, radius, blur, color, alpha) -> None:
        self.calls.append(("glow", x, y, radius, blur, color, alpha))

    def stroke_rect(self, x, y, w, h, color, alpha, width, dash=()) -> None:
        self.calls.append(("rect", x, y, w, h, color, alpha, width, tuple(dash)))

    def kinds(self) -> list[str]:
        return [c[0] for c in self.calls]


# ── Sample helpers ─────────────────────────────────────────────────

@pytest.fixture
def five_samples() -> list[PointerSample]:
    """5 samples one second apart moving right along y=0.5."""
    return [
        PointerSample(x=0.1 + i * 0.2, y=0.5, time=float(i))
        for i in range(5)
    ]


@pytest.fixture
def five_store(five_samples: list[PointerSample]) -> EventStore:
    return EventStore(five_samples)


@pytest.fixture
def click_store() -> EventStore:
    """Moves with a press/release pair at 1.0s."""
    return EventStore([
        PointerSample(0.2, 0.2, 0.0),
        PointerSample(0.3, 0.3, 0.5),
        PointerSample(0.4, 0.4, 1.0, SampleKind.PRESSED),
        PointerSample(0.4, 0.4, 1.1, SampleKind.RELEASED),
        PointerSample(0.6, 0.5, 1.5),
    ])


@pytest.fixture
def events_json() -> str:
    """A capture file as written by the recording tool."""
    return """[
        {"type": "mouse", "x": 0.5, "y": 0.5, "time": {"seconds": 2.0}, "mouseEventType": "moved"},
        {"type": "keyboard", "key": "a", "time": {"seconds": 1.5}},
        {"type": "mouse", "x": 0.1, "y": 0.2, "time": {"seconds": 0.5}, "mouseEventType": "down"},
        {"type": "mouse", "x": 0.1, "y": 0.2, "time": 1.0, "mouseEventType": "up"}
    ]"""


# ── Surfaces ───────────────────────────────────────────────────────

@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def make_surface():
    """Factory for recording surfaces of a given size."""
    return RecordingSurface


@pytest.fixture(scope="session")
def qt_app():
    """A QApplication for tests that paint or build widgets."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
