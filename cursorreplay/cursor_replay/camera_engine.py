"""Camera engine — keeps the cursor inside the viewport's safe zone.

Each frame the engine nudges a *target* camera position just far enough
that the current cursor sample lies inside the safe zone (the viewport
shrunk by ``margin``), then moves the actual camera toward the target
with a first-order low-pass filter::

    v += (target - v) * smoothing

Position is normalized to the video frame; zoom is a scale factor
where values <= 1 show the whole frame.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .models import PointerSample

logger = logging.getLogger(__name__)


DEFAULT_ZOOM = 0.8
DEFAULT_SMOOTHING = 0.08
DEFAULT_MARGIN = 0.4

# Preset buttons: label → zoom level
ZOOM_PRESETS = {
    "0.8x": 0.8,
    "1x": 1.0,
    "1.5x": 1.5,
    "2x": 2.0,
}


@dataclass
class CameraState:
    """Current and target camera; ``zoom`` is what gets rendered."""
    x: float = 0.5
    y: float = 0.5
    zoom: float = DEFAULT_ZOOM
    target_x: float = 0.5
    target_y: float = 0.5
    target_zoom: float = DEFAULT_ZOOM
    smoothing: float = DEFAULT_SMOOTHING


@dataclass
class CameraSettings:
    margin: float = DEFAULT_MARGIN
    follow_cursor: bool = True


@dataclass(frozen=True)
class SafeZone:
    """Viewport and safe-zone rectangles in surface pixels."""
    view_left: float
    view_top: float
    view_width: float
    view_height: float
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def view_right(self) -> float:
        return self.view_left + self.view_width

    @property
    def view_bottom(self) -> float:
        return self.view_top + self.view_height

    def contains(self, px: float, py: float, tol: float = 0.0) -> bool:
        return (self.left - tol <= px <= self.right + tol
                and self.top - tol <= py <= self.bottom + tol)

    def in_view(self, px: float, py: float) -> bool:
        return (self.view_left <= px <= self.view_right
                and self.view_top <= py <= self.view_bottom)


def compute_safe_zone(
    cam_x: float, cam_y: float, zoom: float, margin: float,
    width: float, height: float,
) -> SafeZone:
    """Viewport centred on ``(cam_x, cam_y)`` at *zoom*, and its safe zone.

    The safe zone loses ``margin / 2`` of the viewport on every side.
    """
    view_w = width / zoom
    view_h = height / zoom
    view_x = cam_x * width - view_w / 2
    view_y = cam_y * height - view_h / 2
    mx = view_w * margin / 2
    my = view_h * margin / 2
    return SafeZone(
        view_left=view_x, view_top=view_y,
        view_width=view_w, view_height=view_h,
        left=view_x + mx, top=view_y + my,
        right=view_x + view_w - mx, bottom=view_y + view_h - my,
    )


class CameraEngine:
    """Auto-framing camera driven by the current cursor sample.

    *state* and *settings* are owned by the caller (one of each per
    playback session) and mutated in place.
    """

    def __init__(
        self,
        state: Optional[CameraState] = None,
        settings: Optional[CameraSettings] = None,
    ) -> None:
        self.state = state if state is not None else CameraState()
        self.settings = settings if settings is not None else CameraSettings()

    # ── controls ────────────────────────────────────────────────────

    def set_target_zoom(self, zoom: float) -> None:
        """Request a zoom level; applied immediately when not following."""
        self.state.target_zoom = zoom
        if not self.settings.follow_cursor:
            self.state.zoom = zoom

    def set_smoothing(self, smoothing: float) -> None:
        self.state.smoothing = smoothing

    def reset(self, zoom: float = DEFAULT_ZOOM) -> None:
        """Centre the camera and set both current and target zoom."""
        s = self.state
        s.x = s.y = 0.5
        s.target_x = s.target_y = 0.5
        s.zoom = s.target_zoom = zoom

    # ── per-frame update ────────────────────────────────────────────

    def update(self, sample: Optional[PointerSample],
               width: float, height: float) -> None:
        """Advance the camera one frame for the current cursor *sample*.

        With follow off the pan target recentres and zoom snaps to the
        target zoom; the rendered position is left where it is.  Without
        a sample the camera does not move.
        """
        s = self.state
        if not self.settings.follow_cursor:
            s.target_x = s.target_y = 0.5
            s.zoom = s.target_zoom
            return
        if sample is None:
            return

        if width > 0 and height > 0:
            self.update_target(sample.x, sample.y, width, height)
        self.smooth()

    def update_target(self, cursor_x: float, cursor_y: float,
                      width: float, height: float) -> None:
        """Nudge the target so the cursor lands inside the safe zone.

        The viewport is evaluated at the *current* camera position but
        sized by the *target* zoom.  Axes where the cursor is already
        inside keep their previous target.  Results are not clamped to
        0-1: near a frame edge at high zoom the focus point may sit
        outside the frame.
        """
        s = self.state
        zoom = s.target_zoom
        if zoom <= 1:
            s.target_x = 0.5
            s.target_y = 0.5
            return

        zone = compute_safe_zone(s.x, s.y, zoom, self.settings.margin, width, height)
        px = cursor_x * width
        py = cursor_y * height

        if px < zone.left:
            s.target_x = s.x - (zone.left - px) / width
        elif px > zone.right:
            s.target_x = s.x + (px - zone.right) / width

        if py < zone.top:
            s.target_y = s.y - (zone.top - py) / height
        elif py > zone.bottom:
            s.target_y = s.y + (py - zone.bottom) / height

    def smooth(self) -> None:
        s = self.state
        k = s.smoothing
        s.x += (s.target_x - s.x) * k
        s.y += (s.target_y - s.y) * k
        s.zoom += (s.target_zoom - s.zoom) * k
