"""Raster surfaces the trail renderer draws onto.

:class:`RasterSurface` is the small set of primitives the renderer
needs (clear, stroked lines, filled/stroked arcs, a soft glow and a
dashed rectangle).  :class:`QImageSurface` implements it on a
transparent ``QImage`` sized to the video's native resolution, which
the overlay view then paints over the video frame.
"""

from typing import Optional, Protocol, Sequence, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QImage,
    QPainter,
    QPen,
    QRadialGradient,
)

RGB = Tuple[int, int, int]


class RasterSurface(Protocol):
    """2D drawing target in pixel coordinates. Alpha values are 0-1."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def begin(self) -> None: ...

    def end(self) -> None: ...

    def clear(self) -> None: ...

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float,
                    color: RGB, alpha: float, width: float) -> None: ...

    def fill_disc(self, x: float, y: float, radius: float,
                  color: RGB, alpha: float) -> None: ...

    def stroke_circle(self, x: float, y: float, radius: float,
                      color: RGB, alpha: float, width: float) -> None: ...

    def glow(self, x: float, y: float, radius: float, blur: float,
             color: RGB, alpha: float) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float,
                    color: RGB, alpha: float, width: float,
                    dash: Sequence[float] = ()) -> None: ...


def _qcolor(color: RGB, alpha: float) -> QColor:
    c = QColor(*color)
    c.setAlphaF(max(0.0, min(1.0, alpha)))
    return c


class QImageSurface:
    """:class:`RasterSurface` backed by an ARGB32 premultiplied ``QImage``.

    Drawing calls must happen between :meth:`begin` and :meth:`end`;
    they are no-ops otherwise.
    """

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self._image = self._new_image(width, height)
        self._painter: Optional[QPainter] = None

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        img = QImage(max(int(width), 1), max(int(height), 1),
                     QImage.Format.Format_ARGB32_Premultiplied)
        img.fill(Qt.GlobalColor.transparent)
        return img

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    @property
    def image(self) -> QImage:
        return self._image

    def resize(self, width: int, height: int) -> None:
        """Reallocate at a new size (called when video metadata arrives)."""
        self.end()
        self._image = self._new_image(width, height)

    # ── painter session ─────────────────────────────────────────────

    def begin(self) -> None:
        if self._painter is not None:
            return
        self._painter = QPainter(self._image)
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

    def end(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    # ── primitives ──────────────────────────────────────────────────

    def clear(self) -> None:
        p = self._painter
        if p is None:
            self._image.fill(Qt.GlobalColor.transparent)
            return
        p.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
        p.fillRect(QRectF(0, 0, self.width, self.height), Qt.GlobalColor.transparent)
        p.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

    def stroke_line(self, x0, y0, x1, y1, color, alpha, width) -> None:
        p = self._painter
        if p is None:
            return
        p.setPen(QPen(_qcolor(color, alpha), width, Qt.PenStyle.SolidLine,
                      Qt.PenCapStyle.RoundCap))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawLine(QPointF(x0, y0), QPointF(x1, y1))

    def fill_disc(self, x, y, radius, color, alpha) -> None:
        p = self._painter
        if p is None or radius <= 0:
            return
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(_qcolor(color, alpha)))
        p.drawEllipse(QPointF(x, y), radius, radius)

    def stroke_circle(self, x, y, radius, color, alpha, width) -> None:
        p = self._painter
        if p is None or radius <= 0:
            return
        p.setPen(QPen(_qcolor(color, alpha), width))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(QPointF(x, y), radius, radius)

    def glow(self, x, y, radius, blur, color, alpha) -> None:
        """Soft halo: radial falloff from *radius* out to *radius + blur*."""
        p = self._painter
        outer = radius + blur
        if p is None or outer <= 0:
            return
        grad = QRadialGradient(QPointF(x, y), outer)
        grad.setColorAt(0.0, _qcolor(color, alpha))
        grad.setColorAt(max(0.0, min(1.0, radius / outer)), _qcolor(color, alpha * 0.6))
        grad.setColorAt(1.0, _qcolor(color, 0.0))
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(grad))
        p.drawEllipse(QPointF(x, y), outer, outer)

    def stroke_rect(self, x, y, w, h, color, alpha, width, dash=()) -> None:
        p = self._painter
        if p is None:
            return
        pen = QPen(_qcolor(color, alpha), width)
        if dash:
            # Qt dash lengths are in units of the pen width
            pen.setDashPattern([d / max(width, 1.0) for d in dash])
        p.setPen(pen)
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawRect(QRectF(x, y, w, h))
