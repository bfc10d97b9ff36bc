"""Debug overlay — visualises the camera's viewport and safe zone.

Draws the safe-zone and viewport rectangles onto the overlay surface
and formats a text readout of the camera/cursor state for the side
panel.
"""

from typing import Optional

from .camera_engine import CameraState, compute_safe_zone
from .models import PointerSample
from .settings import OverlaySettings
from .surface import RasterSurface


SAFE_ZONE_COLOR = (255, 255, 0)      # yellow
VIEWPORT_COLOR = (255, 0, 0)         # red
DEBUG_ALPHA = 0.8


def draw_safe_zone(surface: RasterSurface, camera: CameraState, margin: float) -> None:
    """Outline the safe zone (dashed yellow) and viewport (dashed red)."""
    if camera.zoom <= 1:
        return
    zone = compute_safe_zone(camera.x, camera.y, camera.zoom, margin,
                             surface.width, surface.height)
    surface.stroke_rect(zone.left, zone.top, zone.width, zone.height,
                        SAFE_ZONE_COLOR, DEBUG_ALPHA, 3.0, dash=(10, 5))
    surface.stroke_rect(zone.view_left, zone.view_top, zone.view_width, zone.view_height,
                        VIEWPORT_COLOR, DEBUG_ALPHA, 10.0, dash=(15, 5))


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def format_debug_info(
    sample: Optional[PointerSample],
    camera: CameraState,
    settings: OverlaySettings,
    width: float,
    height: float,
) -> str:
    """Multi-line readout; all coordinates normalized to the frame."""
    if sample is None or width <= 0 or height <= 0:
        return "No cursor sample"

    zone = compute_safe_zone(camera.x, camera.y, camera.zoom, settings.margin,
                             width, height)
    px, py = sample.x * width, sample.y * height

    lines = [
        f"Cursor: ({sample.x:.3f}, {sample.y:.3f})",
        f"Camera: ({camera.x:.3f}, {camera.y:.3f}) Zoom: {camera.zoom:.2f}x",
        f"Target: ({camera.target_x:.3f}, {camera.target_y:.3f}) "
        f"Target Zoom: {camera.target_zoom:.2f}x",
        f"Viewport: {zone.view_width / width:.3f} x {zone.view_height / height:.3f}",
        f"View Bounds: [{zone.view_left / width:.3f}, {zone.view_top / height:.3f}] to "
        f"[{zone.view_right / width:.3f}, {zone.view_bottom / height:.3f}]",
        f"Safe Zone: [{zone.left / width:.3f}, {zone.top / height:.3f}] to "
        f"[{zone.right / width:.3f}, {zone.bottom / height:.3f}]",
        f"Cursor in Viewport: {_yes_no(zone.in_view(px, py))}",
        f"Cursor in Safe Zone: {_yes_no(zone.contains(px, py))}",
        f"Follow Cursor: {'ON' if settings.follow_cursor else 'OFF'}",
    ]
    return "\n".join(lines)
