"""Tests for cursor_replay.trail_renderer — fade maths, trail planning, drawing."""

import pytest

from cursor_replay.models import EventStore, PointerSample, SampleKind
from cursor_replay.trail_renderer import (
    CLICK_COLOR,
    MIN_DRAW_ALPHA,
    TRAIL_COLOR,
    cursor_opacity,
    plan_trail,
    render_trail,
    time_fade_factor,
    trail_window_start,
)


# ── time_fade_factor ────────────────────────────────────────────────


class TestTimeFadeFactor:
    def test_boundaries(self) -> None:
        assert time_fade_factor(0.0, 1.0) == pytest.approx(1.0)
        assert time_fade_factor(1.0, 1.0) == pytest.approx(0.0)
        assert time_fade_factor(5.0, 1.0) == 0.0

    def test_clamped_above_one(self) -> None:
        """Queries before the sample (negative elapsed) never exceed 1."""
        assert time_fade_factor(-0.5, 1.0) == 1.0

    def test_non_increasing(self) -> None:
        prev = time_fade_factor(0.0, 2.0)
        for i in range(1, 301):
            curr = time_fade_factor(i * 0.01, 2.0)
            assert curr <= prev
            prev = curr

    def test_zero_timeout(self) -> None:
        assert time_fade_factor(0.0, 0.0) == 0.0


# ── cursor_opacity ──────────────────────────────────────────────────


class TestCursorOpacity:
    def test_always_full_without_hide(self) -> None:
        for t in (0.0, 0.1, 0.5, 2.0, 10.0):
            assert cursor_opacity(t, 0.8, False) == 0.8

    def test_fades_in_after_move(self) -> None:
        assert cursor_opacity(0.0, 1.0, True) == pytest.approx(0.0)
        assert cursor_opacity(0.15, 1.0, True) == pytest.approx(0.5)

    def test_full_while_recently_moved(self) -> None:
        assert cursor_opacity(0.5, 0.8, True) == pytest.approx(0.8)

    def test_fades_out_when_still(self) -> None:
        assert cursor_opacity(1.15, 1.0, True) == pytest.approx(0.5)
        assert cursor_opacity(1.3, 1.0, True) == pytest.approx(0.0)
        assert cursor_opacity(5.0, 1.0, True) == 0.0


# ── plan_trail ──────────────────────────────────────────────────────


class TestPlanTrail:
    def test_worked_example(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 2, 2.5, 1000, 500,
                          trail_length=3, opacity=0.8, point_size=8)
        assert plan.time_since_last == pytest.approx(0.5)
        assert plan.fade == pytest.approx(0.5)

        assert len(plan.segments) == 2
        s1, s2 = plan.segments
        assert s1.alpha == pytest.approx((1 / 3) ** 2 * 0.8 * 0.5 * 0.5)
        assert s1.width == pytest.approx(2 * (1 / 3) * 0.5)
        assert s2.alpha == pytest.approx((2 / 3) ** 2 * 0.8 * 0.5 * 0.5)
        assert (s2.x0, s2.y0, s2.x1, s2.y1) == pytest.approx((300, 250, 500, 250))

        # oldest point has progress 0; the next one falls under the cutoff
        assert plan.points == []

        assert plan.cursor is not None
        assert (plan.cursor.x, plan.cursor.y) == pytest.approx((500, 250))
        assert plan.cursor.radius == 8
        assert plan.cursor.alpha == pytest.approx(0.8)

    def test_point_values(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 4, 4.0, 100, 100,
                          trail_length=5, opacity=1.0, point_size=10)
        # fade = 1, n = 5: i = 0 and i = 1 fall under the alpha cutoff
        assert [round(p.x) for p in plan.points] == [50, 70]
        p = plan.points[-1]
        assert p.alpha == pytest.approx((3 / 5) ** 3 * 0.6)
        assert p.radius == pytest.approx(10 * 0.7 * 3 / 5)

    def test_all_drawn_alphas_above_cutoff(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 4, 4.3, 1000, 500,
                          trail_length=20, opacity=0.5, point_size=8)
        for item in plan.segments + plan.points:
            assert item.alpha > MIN_DRAW_ALPHA

    def test_window_clipped_at_start(self) -> None:
        assert trail_window_start(1, 20) == 0
        assert trail_window_start(30, 20) == 11

    def test_fully_faded_draws_cursor_only(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 4, 10.0, 1000, 500,
                          trail_length=5, opacity=0.8, point_size=8)
        assert plan.fade == 0.0
        assert plan.segments == [] and plan.points == []
        assert plan.cursor is not None

    def test_hidden_cursor_when_still(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 4, 10.0, 1000, 500,
                          trail_length=5, opacity=0.8, point_size=8,
                          hide_when_still=True)
        assert plan.is_empty

    def test_trail_length_zero(self, five_store: EventStore) -> None:
        plan = plan_trail(five_store.samples, 4, 4.0, 1000, 500,
                          trail_length=0, opacity=0.8, point_size=8)
        assert plan.is_empty

    def test_no_index(self, five_store: EventStore) -> None:
        assert plan_trail(five_store.samples, None, 1.0, 10, 10, 5, 1.0, 8).is_empty
        assert plan_trail((), 0, 1.0, 10, 10, 5, 1.0, 8).is_empty

    def test_single_sample(self) -> None:
        plan = plan_trail([PointerSample(0.5, 0.5, 0.0)], 0, 0.2, 100, 100, 10, 1.0, 8)
        assert plan.segments == [] and plan.points == []
        assert plan.cursor is not None

    def test_click_flag_carried(self, click_store: EventStore) -> None:
        plan = plan_trail(click_store.samples, 2, 1.0, 100, 100, 10, 1.0, 8)
        assert plan.cursor is not None and plan.cursor.is_click


# ── render_trail ────────────────────────────────────────────────────


class TestRenderTrail:
    def test_clears_first(self, surface, five_store: EventStore) -> None:
        surface.calls.append(("stale",))
        render_trail(surface, five_store.samples, 4, 4.0, 5, 1.0, 8)
        assert surface.kinds()[0] == "clear"
        assert "stale" not in surface.kinds()

    def test_segments_then_points_then_cursor(self, surface, five_store: EventStore) -> None:
        plan = render_trail(surface, five_store.samples, 4, 4.0, 5, 1.0, 8)
        kinds = surface.kinds()
        lines = [c for c in surface.calls if c[0] == "line"]
        assert len(lines) == len(plan.segments)
        assert all(c[5] == TRAIL_COLOR for c in lines)
        # cursor glow is the last glow and comes after every line
        assert kinds.index("glow") > max(i for i, k in enumerate(kinds) if k == "line")

    def test_click_cursor_red(self, surface, click_store: EventStore) -> None:
        render_trail(surface, click_store.samples, 2, 1.0, 10, 1.0, 8)
        discs = [c for c in surface.calls if c[0] == "disc"]
        glows = [c for c in surface.calls if c[0] == "glow"]
        assert discs[-1][4] == CLICK_COLOR
        assert glows[-1][5] == CLICK_COLOR

    def test_empty_only_clears(self, surface) -> None:
        render_trail(surface, (), None, 0.0, 10, 1.0, 8)
        assert surface.kinds() == ["clear"]

    def test_uses_surface_resolution(self, make_surface, five_store: EventStore) -> None:
        small = make_surface(200, 100)
        plan = render_trail(small, five_store.samples, 2, 2.0, 3, 1.0, 8)
        assert plan.cursor is not None
        assert (plan.cursor.x, plan.cursor.y) == pytest.approx((100, 50))

    def test_other_kind_not_click(self) -> None:
        store = EventStore([PointerSample(0.5, 0.5, 0.0, SampleKind.OTHER)])
        plan = plan_trail(store.samples, 0, 0.0, 10, 10, 5, 1.0, 8)
        assert plan.cursor is not None and not plan.cursor.is_click
