"""Overlay view — paints the video frame with the trail overlay on top.

The video is letterboxed into the widget; the letterboxed rectangle is
the *container* the camera transform is computed for.  Both the frame
and the overlay image are drawn through the same transform so the
trail stays glued to the video while the camera pans and zooms.
"""

import logging
from typing import List, Optional, Tuple

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QImage, QPainter
from PySide6.QtWidgets import QWidget

from ..viewport import IDENTITY, ViewportTransform

logger = logging.getLogger(__name__)


class OverlayView(QWidget):
    """Central canvas: video frame + overlay, scaled by the camera transform.

    Accepts dropped files and re-emits their local paths.
    """

    files_dropped = Signal(list)  # list[str]

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("OverlayView")
        self.setMinimumSize(480, 270)
        self.setAcceptDrops(True)

        self._frame: Optional[QImage] = None
        self._overlay: Optional[QImage] = None
        self._transform: ViewportTransform = IDENTITY
        self._placeholder: str = "Drop a video and its input-events file here"

    # ── public API ──────────────────────────────────────────────────

    def set_frame(self, frame: Optional[QImage]) -> None:
        self._frame = frame
        self.update()

    def set_overlay(self, overlay: Optional[QImage]) -> None:
        self._overlay = overlay
        self.update()

    def set_transform(self, transform: ViewportTransform) -> None:
        self._transform = transform
        self.update()

    def container_rect(self) -> Tuple[float, float, float, float]:
        """``(x, y, w, h)`` of the letterboxed video area within the widget."""
        W, H = float(self.width()), float(self.height())
        if self._frame is None or self._frame.width() <= 0 or self._frame.height() <= 0:
            return 0.0, 0.0, W, H
        aspect = self._frame.width() / self._frame.height()
        if W / max(H, 1.0) > aspect:
            cw, ch = H * aspect, H
        else:
            cw, ch = W, W / aspect
        return (W - cw) / 2, (H - ch) / 2, cw, ch

    def container_size(self) -> Tuple[float, float]:
        _, _, w, h = self.container_rect()
        return w, h

    # ── drag & drop ─────────────────────────────────────────────────

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        paths: List[str] = [
            url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()
        ]
        if paths:
            logger.debug("Dropped %d file(s)", len(paths))
            event.acceptProposedAction()
            self.files_dropped.emit(paths)

    # ── painting ────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(QRectF(0, 0, self.width(), self.height()), QColor(14, 13, 25))

        if self._frame is None:
            font = QFont()
            font.setPixelSize(15)
            painter.setFont(font)
            painter.setPen(QColor(136, 134, 160))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self._placeholder)
            painter.end()
            return

        x, y, w, h = self.container_rect()
        target = QRectF(0, 0, w, h)
        painter.translate(x, y)
        painter.setClipRect(target)
        painter.setTransform(self._transform.to_qtransform(), True)

        painter.drawImage(target, self._frame)
        if self._overlay is not None:
            painter.drawImage(target, self._overlay)
        painter.end()
