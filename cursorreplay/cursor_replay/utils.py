"""Shared utilities used by multiple modules."""

import os

from .event_loader import EVENTS_EXT
from .media_source import VIDEO_EXT


def fmt_time(seconds: float) -> str:
    """Format seconds as mm:ss (negative and NaN durations show 00:00)."""
    if not seconds or seconds != seconds or seconds < 0:
        seconds = 0.0
    s = int(seconds)
    return f"{s // 60:02d}:{s % 60:02d}"


def fmt_clock(current: float, duration: float) -> str:
    """``"mm:ss / mm:ss"`` for the transport bar."""
    return f"{fmt_time(current)} / {fmt_time(duration)}"


def classify_path(path: str) -> str:
    """Return ``"video"``, ``"events"`` or ``""`` based on the file extension."""
    ext = os.path.splitext(path)[1].lower()
    if ext in VIDEO_EXT:
        return "video"
    if ext in EVENTS_EXT:
        return "events"
    return ""


def fmt_size_mb(path: str) -> str:
    """File size as ``"12.3MB"`` (empty if the file is missing)."""
    try:
        return f"{os.path.getsize(path) / 1024 / 1024:.1f}MB"
    except OSError:
        return ""
