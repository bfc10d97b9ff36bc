"""Video source — decodes frames with OpenCV and exposes a playback clock.

Plays a video file with wall-clock timing: a fast ``QTimer`` picks the
frame that should be visible *now* (scaled by the playback rate)
instead of trusting timer intervals.  Emits ``metadata_ready`` once the
frame size is known and ``ended`` when playback reaches the duration.
"""

import logging
import time as _time
from typing import Optional

import cv2
import numpy as np

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


VIDEO_EXT = (".mp4", ".mov", ".m4v", ".avi", ".mkv", ".webm")

_TICK_MS = 8          # playback timer interval
_MAX_SKIP = 8         # frames grabbed without decoding when behind


class VideoSource(QObject):
    """OpenCV-backed media source with play/pause/seek/rate controls.

    Times are in seconds.
    """

    metadata_ready = Signal(int, int)   # frame width, height
    frame_ready = Signal(QImage)
    ended = Signal()
    error = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cap: Optional[cv2.VideoCapture] = None
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._advance)
        self._playing: bool = False
        self._fps: float = 30.0
        self._duration: float = 0.0
        self._position: float = 0.0
        self._rate: float = 1.0
        # Wall-clock anchors so playback speed is independent of timer jitter
        self._anchor_wall: float = 0.0
        self._anchor_pos: float = 0.0
        self._last_frame: int = -1

    # ── properties ──────────────────────────────────────────────────

    @property
    def current_time(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_playing(self) -> bool:
        return self._playing

    # ── commands ────────────────────────────────────────────────────

    def open(self, path: str) -> bool:
        """Open *path* for playback.  Returns False (and emits ``error``) on failure."""
        self.close()
        cap = cv2.VideoCapture(path)
        if not cap.isOpened():
            cap.release()
            msg = f"Could not open video: {path}"
            logger.warning(msg)
            self.error.emit(msg)
            return False

        self._cap = cap
        self._fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self._duration = frame_count / self._fps if self._fps > 0 else 0.0
        w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(
            "Opened video %s: %dx%d frames=%d fps=%.2f duration=%.2fs",
            path, w, h, frame_count, self._fps, self._duration,
        )
        self.metadata_ready.emit(w, h)
        self.seek(0.0)
        return True

    def close(self) -> None:
        self.pause()
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        self._position = 0.0
        self._duration = 0.0

    def play(self) -> None:
        if self._cap is None or self._playing:
            return
        # At the end: start over
        if self._position >= self._duration - 0.1:
            self._position = 0.0
        target = self._time_to_frame(self._position)
        self._cap.set(cv2.CAP_PROP_POS_FRAMES, target)
        self._last_frame = target - 1
        self._anchor_wall = _time.perf_counter()
        self._anchor_pos = self._position
        self._playing = True
        self._timer.start(_TICK_MS)

    def pause(self) -> None:
        self._playing = False
        self._timer.stop()

    def seek(self, t: float) -> None:
        """Jump to *t* seconds and decode the frame there."""
        if self._cap is None:
            return
        t = max(0.0, min(t, self._duration))
        self._position = t
        target = self._time_to_frame(t)
        self._cap.set(cv2.CAP_PROP_POS_FRAMES, target)
        ok, frame = self._cap.read()
        if ok:
            self._last_frame = target
            self._set_frame(frame)
        if self._playing:
            self._anchor_wall = _time.perf_counter()
            self._anchor_pos = t

    def set_playback_rate(self, rate: float) -> None:
        # Re-anchor so the position does not jump when the rate changes
        if self._playing:
            self._anchor_wall = _time.perf_counter()
            self._anchor_pos = self._position
        self._rate = rate

    # ── internal ────────────────────────────────────────────────────

    def _time_to_frame(self, t: float) -> int:
        return max(0, int(t * self._fps))

    def _advance(self) -> None:
        if self._cap is None:
            self.pause()
            return

        elapsed = (_time.perf_counter() - self._anchor_wall) * self._rate
        target_t = self._anchor_pos + elapsed
        if target_t >= self._duration:
            self._position = self._duration
            self.pause()
            self.ended.emit()
            return

        self._position = target_t
        target = self._time_to_frame(target_t)
        if target <= self._last_frame:
            return

        behind = target - self._last_frame
        for _ in range(min(behind - 1, _MAX_SKIP)):
            if not self._cap.grab():
                break
        ok, frame = self._cap.read()
        if not ok:
            return
        self._last_frame = target
        self._set_frame(frame)

    def _set_frame(self, frame: np.ndarray) -> None:
        self.frame_ready.emit(self._numpy_to_qimage(frame))

    @staticmethod
    def _numpy_to_qimage(frame: np.ndarray) -> QImage:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        h, w, _ = rgb.shape
        return QImage(rgb.data, w, h, rgb.strides[0], QImage.Format.Format_RGB888).copy()
