"""Overlay settings — the single configuration object read every frame.

Widgets write a new :class:`OverlaySettings` instead of the engine
reading slider values directly.  :meth:`OverlaySettings.validated`
clamps every field to its supported range at that boundary.  Settings
persist between runs via ``QSettings``.
"""

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Tuple

from PySide6.QtCore import QSettings

from .camera_engine import DEFAULT_MARGIN, DEFAULT_SMOOTHING, DEFAULT_ZOOM
from .trail_renderer import DEFAULT_FADE_TIMEOUT_S

logger = logging.getLogger(__name__)


_GROUP = "overlay"


@dataclass(frozen=True)
class OverlaySettings:
    """User-adjustable trail, sync and camera settings."""
    opacity: float = 0.8
    point_size: float = 8.0             # px at video resolution
    trail_length: int = 20              # samples
    fade_timeout: float = DEFAULT_FADE_TIMEOUT_S  # s
    hide_when_still: bool = False
    time_offset: float = 0.0            # s, added to video time
    zoom: float = DEFAULT_ZOOM          # requested (target) zoom
    margin: float = DEFAULT_MARGIN
    smoothing: float = DEFAULT_SMOOTHING
    follow_cursor: bool = True
    playback_rate: float = 1.0

    def validated(self) -> "OverlaySettings":
        """Return a copy with every numeric field clamped to its range."""
        changes = {}
        for name, (lo, hi) in RANGES.items():
            value = getattr(self, name)
            clamped = min(max(value, lo), hi)
            if name == "trail_length":
                clamped = int(round(clamped))
            if clamped != value:
                logger.warning("Setting %s=%r out of range, using %r", name, value, clamped)
                changes[name] = clamped
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(d: dict) -> "OverlaySettings":
        """Build from a dict, ignoring unknown keys for forward compat."""
        known = {f.name for f in fields(OverlaySettings)}
        filtered = {k: v for k, v in d.items() if k in known}
        return OverlaySettings(**filtered).validated()


# field → (min, max)
RANGES: Dict[str, Tuple[float, float]] = {
    "opacity": (0.0, 1.0),
    "point_size": (1.0, 50.0),
    "trail_length": (0, 200),
    "fade_timeout": (0.0, 10.0),
    "time_offset": (-30.0, 30.0),
    "zoom": (0.5, 4.0),
    "margin": (0.0, 0.95),
    "smoothing": (0.01, 1.0),
    "playback_rate": (0.25, 4.0),
}

DEFAULT_SETTINGS = OverlaySettings()


def load_settings(qs: QSettings) -> OverlaySettings:
    """Read persisted settings, falling back to defaults per field."""
    values = {}
    qs.beginGroup(_GROUP)
    try:
        for f in fields(OverlaySettings):
            default = getattr(DEFAULT_SETTINGS, f.name)
            if not qs.contains(f.name):
                continue
            values[f.name] = qs.value(f.name, default, type=type(default))
    finally:
        qs.endGroup()
    return OverlaySettings.from_dict(values)


def save_settings(qs: QSettings, settings: OverlaySettings) -> None:
    qs.beginGroup(_GROUP)
    try:
        for name, value in settings.to_dict().items():
            qs.setValue(name, value)
    finally:
        qs.endGroup()
