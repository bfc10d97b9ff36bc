"""Playback session — one frame of index → camera → transform → trail.

A :class:`PlaybackSession` owns all per-session mutable state (cursor
index, camera, settings) so nothing is global.  The UI calls
:meth:`PlaybackSession.render_frame` from its frame loop with the
video's current time and :meth:`PlaybackSession.seek` when the user
jumps; each call is a complete recomputation from current state.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .camera_engine import DEFAULT_ZOOM, CameraEngine, CameraSettings, CameraState
from .cursor_index import CursorIndexTracker
from .debug_overlay import draw_safe_zone
from .models import EMPTY_STORE, EventStore, PointerSample
from .settings import OverlaySettings
from .surface import RasterSurface
from .trail_renderer import TrailPlan, render_trail
from .viewport import ViewportTransform, compute_transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """What one rendered frame resolved to."""
    target_time: float
    index: Optional[int]
    sample: Optional[PointerSample]
    transform: ViewportTransform
    plan: TrailPlan


class PlaybackSession:
    """Synchronizes the pointer trail and camera with a video clock."""

    def __init__(
        self,
        store: EventStore = EMPTY_STORE,
        settings: Optional[OverlaySettings] = None,
        camera_state: Optional[CameraState] = None,
    ) -> None:
        self._settings = (settings or OverlaySettings()).validated()
        self._tracker = CursorIndexTracker(store)
        self._camera = CameraEngine(
            camera_state if camera_state is not None else CameraState(),
            CameraSettings(),
        )
        self.show_debug: bool = False
        self._apply_camera_settings(reset=camera_state is None)

    # ── accessors ───────────────────────────────────────────────────

    @property
    def settings(self) -> OverlaySettings:
        return self._settings

    @property
    def camera(self) -> CameraState:
        return self._camera.state

    def target_time(self, video_time: float) -> float:
        return video_time + self._settings.time_offset

    # ── configuration ───────────────────────────────────────────────

    def load_events(self, store: EventStore) -> None:
        self._tracker.set_store(store)
        logger.info("Session loaded %d samples", len(store))

    def apply_settings(self, settings: OverlaySettings) -> None:
        """Validate and adopt new settings; camera fields take effect now."""
        prev_zoom = self._settings.zoom
        self._settings = settings.validated()
        self._apply_camera_settings(zoom_changed=self._settings.zoom != prev_zoom)

    def _apply_camera_settings(self, reset: bool = False, zoom_changed: bool = True) -> None:
        s = self._settings
        self._camera.settings.margin = s.margin
        self._camera.settings.follow_cursor = s.follow_cursor
        self._camera.set_smoothing(s.smoothing)
        if reset:
            self._camera.reset(s.zoom)
        elif zoom_changed or not s.follow_cursor:
            self._camera.set_target_zoom(s.zoom)

    def reset_camera(self) -> None:
        """Centre the camera at the default zoom; the zoom setting follows."""
        self._settings = replace(self._settings, zoom=DEFAULT_ZOOM)
        self._camera.reset(DEFAULT_ZOOM)

    # ── frame loop ──────────────────────────────────────────────────

    def render_frame(
        self,
        video_time: float,
        surface: RasterSurface,
        container_w: float,
        container_h: float,
    ) -> FrameResult:
        """Run one frame: index, camera, transform, then the trail."""
        s = self._settings
        t = self.target_time(video_time)

        index = self._tracker.advance_to(t)
        sample = self._tracker.current_sample

        self._camera.update(sample, surface.width, surface.height)
        transform = compute_transform(self._camera.state, container_w, container_h)

        surface.begin()
        try:
            plan = render_trail(
                surface, self._tracker.store.samples, index, t,
                s.trail_length, s.opacity, s.point_size,
                s.fade_timeout, s.hide_when_still,
            )
            if self.show_debug and sample is not None:
                draw_safe_zone(surface, self._camera.state, s.margin)
        finally:
            surface.end()

        return FrameResult(t, index, sample, transform, plan)

    def seek(
        self,
        video_time: float,
        surface: RasterSurface,
        container_w: float,
        container_h: float,
    ) -> FrameResult:
        """Jump to *video_time* and render it immediately (even when paused)."""
        self._tracker.seek(self.target_time(video_time))
        return self.render_frame(video_time, surface, container_w, container_h)

    def reset(self) -> None:
        """Rewind the cursor index to the first sample."""
        self._tracker.reset()

    def status_summary(self, video_duration: float) -> str:
        store = self._tracker.store
        return (
            f"Ready to play | Video: {video_duration:.1f}s | "
            f"Cursor: {store.duration:.1f}s | Events: {len(store)}"
        )
