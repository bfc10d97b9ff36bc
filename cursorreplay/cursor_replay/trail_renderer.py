"""Trail renderer — draws the decaying cursor trail onto the overlay surface.

The trail is the last ``trail_length`` samples up to the current index.
Older samples get lighter and thinner, and the whole trail fades out
once the cursor has been still for ``fade_timeout`` seconds.  The pure
planning step (:func:`plan_trail`) is kept separate from the drawing
step (:func:`draw_plan`) so the fade maths can be checked without a
paint device.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import PointerSample
from .surface import RasterSurface


# ── Trail appearance ────────────────────────────────────────────────

TRAIL_COLOR = (0, 136, 255)          # blue (#0088ff)
SEGMENT_ALPHA_SCALE = 0.5
SEGMENT_WIDTH_SCALE = 2.0
POINT_ALPHA_SCALE = 0.6
POINT_SIZE_SCALE = 0.7
MIN_DRAW_ALPHA = 0.01                # anything fainter is not drawn

# ── Cursor appearance ───────────────────────────────────────────────

CURSOR_COLOR = (255, 255, 255)       # white fill for move samples
CURSOR_OUTLINE = (0, 0, 0)
CLICK_COLOR = (255, 68, 68)          # red (#ff4444)
CLICK_RING_COLOR = (255, 255, 255)
CLICK_RADIUS_SCALE = 1.5
CLICK_RING_SCALE = 2.0
GLOW_BLUR = 20.0
GLOW_ALPHA = 0.8

# ── Hide-when-still timing (seconds) ───────────────────────────────

STILL_AFTER_S = 1.0
CURSOR_FADE_S = 0.3

DEFAULT_FADE_TIMEOUT_S = 1.0


def clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return lo if v < lo else hi if v > hi else v


def time_fade_factor(time_since_last: float, fade_timeout: float) -> float:
    """Overall trail fade: 1 right after a move, 0 after *fade_timeout* s."""
    if fade_timeout <= 0:
        return 0.0
    return clamp(1.0 - time_since_last / fade_timeout)


def cursor_opacity(time_since_last: float, opacity: float,
                   hide_when_still: bool) -> float:
    """Opacity of the current-cursor marker.

    With *hide_when_still* the cursor fades out over 0.3s after one
    second without movement and fades back in over 0.3s when it moves.
    """
    if not hide_when_still:
        return opacity
    if time_since_last > STILL_AFTER_S:
        return opacity * (1.0 - clamp((time_since_last - STILL_AFTER_S) / CURSOR_FADE_S))
    if time_since_last < CURSOR_FADE_S:
        return opacity * clamp(time_since_last / CURSOR_FADE_S)
    return opacity


def trail_window_start(index: int, trail_length: int) -> int:
    return max(0, index - trail_length + 1)


@dataclass(frozen=True)
class TrailSegment:
    x0: float
    y0: float
    x1: float
    y1: float
    alpha: float
    width: float


@dataclass(frozen=True)
class TrailPoint:
    x: float
    y: float
    radius: float
    alpha: float
    is_click: bool
    is_cursor: bool = False


@dataclass
class TrailPlan:
    """Everything one overlay frame draws, in pixel coordinates."""
    segments: List[TrailSegment] = field(default_factory=list)
    points: List[TrailPoint] = field(default_factory=list)
    cursor: Optional[TrailPoint] = None
    time_since_last: float = 0.0
    fade: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.segments and not self.points and self.cursor is None


def plan_trail(
    samples: Sequence[PointerSample],
    index: Optional[int],
    target_time: float,
    width: float,
    height: float,
    trail_length: int,
    opacity: float,
    point_size: float,
    fade_timeout: float = DEFAULT_FADE_TIMEOUT_S,
    hide_when_still: bool = False,
) -> TrailPlan:
    """Compute segment/point/cursor draw parameters for the trail window.

    *samples* is the whole event store; *index* the tracked current
    sample (``None`` when there is none).
    """
    if index is None or not samples or trail_length <= 0:
        return TrailPlan()

    start = trail_window_start(index, trail_length)
    window = samples[start:index + 1]
    n = len(window)
    if n == 0:
        return TrailPlan()

    current = window[-1]
    time_since = target_time - current.time
    fade = time_fade_factor(time_since, fade_timeout)
    plan = TrailPlan(time_since_last=time_since, fade=fade)

    if n > 1 and fade > 0:
        for i in range(1, n):
            progress = i / n
            alpha = progress ** 2 * opacity * SEGMENT_ALPHA_SCALE * fade
            if alpha <= MIN_DRAW_ALPHA:
                continue
            a, b = window[i - 1], window[i]
            plan.segments.append(TrailSegment(
                a.x * width, a.y * height, b.x * width, b.y * height,
                alpha, SEGMENT_WIDTH_SCALE * progress * fade,
            ))

    if fade > 0:
        for i in range(n - 1):
            progress = i / n
            # cubic, so history points fade faster than the segments
            alpha = progress ** 3 * opacity * POINT_ALPHA_SCALE * fade
            if alpha <= MIN_DRAW_ALPHA:
                continue
            s = window[i]
            plan.points.append(TrailPoint(
                s.x * width, s.y * height,
                point_size * POINT_SIZE_SCALE * progress * fade,
                alpha, s.is_click,
            ))

    c_alpha = cursor_opacity(time_since, opacity, hide_when_still)
    if c_alpha > MIN_DRAW_ALPHA:
        plan.cursor = TrailPoint(
            current.x * width, current.y * height,
            point_size, c_alpha, current.is_click, is_cursor=True,
        )
    return plan


# ── Drawing ─────────────────────────────────────────────────────────


def draw_point(surface: RasterSurface, pt: TrailPoint) -> None:
    """Draw one trail point or the cursor marker."""
    if pt.is_cursor:
        glow_color = CLICK_COLOR if pt.is_click else TRAIL_COLOR
        halo_r = pt.radius * (CLICK_RADIUS_SCALE if pt.is_click else 1.0)
        surface.glow(pt.x, pt.y, halo_r, GLOW_BLUR, glow_color, GLOW_ALPHA * pt.alpha)

    if pt.is_click:
        surface.fill_disc(pt.x, pt.y, pt.radius * CLICK_RADIUS_SCALE, CLICK_COLOR, pt.alpha)
        surface.stroke_circle(pt.x, pt.y, pt.radius * CLICK_RING_SCALE,
                              CLICK_RING_COLOR, pt.alpha, 2.0)
    else:
        surface.fill_disc(pt.x, pt.y, pt.radius, CURSOR_COLOR, pt.alpha)
        surface.stroke_circle(pt.x, pt.y, pt.radius, CURSOR_OUTLINE, pt.alpha, 1.0)


def draw_plan(surface: RasterSurface, plan: TrailPlan) -> None:
    for seg in plan.segments:
        surface.stroke_line(seg.x0, seg.y0, seg.x1, seg.y1, TRAIL_COLOR, seg.alpha, seg.width)
    for pt in plan.points:
        draw_point(surface, pt)
    if plan.cursor is not None:
        draw_point(surface, plan.cursor)


def render_trail(
    surface: RasterSurface,
    samples: Sequence[PointerSample],
    index: Optional[int],
    target_time: float,
    trail_length: int,
    opacity: float,
    point_size: float,
    fade_timeout: float = DEFAULT_FADE_TIMEOUT_S,
    hide_when_still: bool = False,
) -> TrailPlan:
    """Clear *surface* and draw the trail ending at *index*.

    Must be called inside an open surface session
    (:meth:`RasterSurface.begin`).  Returns the plan that was drawn.
    """
    surface.clear()
    plan = plan_trail(
        samples, index, target_time,
        surface.width, surface.height,
        trail_length, opacity, point_size,
        fade_timeout, hide_when_still,
    )
    draw_plan(surface, plan)
    return plan
