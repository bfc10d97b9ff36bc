"""Viewport transform — turns camera state into a scale-about-origin transform.

The video (and the overlay drawn on top of it) is scaled by the camera
zoom about a single origin point.  For ``zoom > 1`` the origin is
chosen so that the camera's focus pixel ends up exactly at the centre
of the container::

    origin + (focus - origin) * zoom = center
    origin = (center - focus * zoom) / (1 - zoom)

For ``zoom <= 1`` the video is simply shrunk about the container centre.
"""

from dataclasses import dataclass
from typing import Tuple

from PySide6.QtGui import QTransform

from .camera_engine import CameraState


@dataclass(frozen=True)
class ViewportTransform:
    origin_x: float
    origin_y: float
    scale: float

    def map_point(self, px: float, py: float) -> Tuple[float, float]:
        """Where container pixel ``(px, py)`` lands after the transform."""
        return (
            self.origin_x + (px - self.origin_x) * self.scale,
            self.origin_y + (py - self.origin_y) * self.scale,
        )

    def to_qtransform(self) -> QTransform:
        t = QTransform()
        t.translate(self.origin_x, self.origin_y)
        t.scale(self.scale, self.scale)
        t.translate(-self.origin_x, -self.origin_y)
        return t


IDENTITY = ViewportTransform(0.0, 0.0, 1.0)


def compute_transform(camera: CameraState, container_w: float,
                      container_h: float) -> ViewportTransform:
    """Scale/origin that centres ``camera.(x, y)`` in the container."""
    zoom = camera.zoom
    cx = container_w / 2
    cy = container_h / 2
    if zoom <= 1:
        return ViewportTransform(cx, cy, zoom)

    fx = camera.x * container_w
    fy = camera.y * container_h
    return ViewportTransform(
        (cx - fx * zoom) / (1 - zoom),
        (cy - fy * zoom) / (1 - zoom),
        zoom,
    )
