"""Tests for ViewConfig and CoordinateMapper (mm <-> px transform)."""
from __future__ import annotations

import pytest

from geometry.mapper import CoordinateMapper, ViewConfig
from settings import AppSettings

# Default view: 1600 px viewport, 16 px padding, 5000 x 5200 mm workspace
DEFAULT_SCALE = (1600 - 32) / 5200


def _small_view(**kw) -> ViewConfig:
    """100 x 100 mm workspace in a 200 px viewport: exactly 2 px/mm."""
    base = dict(workspace_width_mm=100, workspace_height_mm=100,
                viewport_width_px=200, viewport_height_px=200, padding_px=0)
    base.update(kw)
    return ViewConfig(**base)


# ─────────────────────────────────────────────────────────
# Scale and anchor
# ─────────────────────────────────────────────────────────


class TestScale:
    def test_fit_uses_limiting_axis(self):
        m = CoordinateMapper(ViewConfig())
        assert m.base_scale == pytest.approx(DEFAULT_SCALE)
        assert m.scale == pytest.approx(DEFAULT_SCALE)

    def test_zoom_multiplies_base_scale(self):
        m = CoordinateMapper(ViewConfig(zoom=2.5))
        assert m.scale == pytest.approx(DEFAULT_SCALE * 2.5)

    def test_padding_larger_than_viewport_keeps_scale_positive(self):
        m = CoordinateMapper(ViewConfig(viewport_width_px=20, viewport_height_px=20, padding_px=16))
        assert m.base_scale == pytest.approx(1 / 5200)

    def test_anchor_includes_scroll_and_pan(self):
        m = CoordinateMapper(_small_view(scroll_left_px=30, scroll_top_px=40, pan_x_px=5, pan_y_px=-5))
        assert m.anchor == pytest.approx((30 + 100 + 5, 40 + 100 - 5))


# ─────────────────────────────────────────────────────────
# Forward / inverse mapping
# ─────────────────────────────────────────────────────────


class TestMapping:
    def test_origin_maps_to_anchor(self):
        m = CoordinateMapper(_small_view())
        assert m.mm_to_px(0, 0) == pytest.approx((100, 100))

    def test_y_axis_is_flipped(self):
        m = CoordinateMapper(_small_view())
        assert m.mm_to_px(10, 10) == pytest.approx((120, 80))

    def test_origin_offset(self):
        m = CoordinateMapper(_small_view(origin_x_mm=-123, origin_y_mm=7))
        assert m.mm_to_px(-123, 7) == pytest.approx((100, 100))

    @pytest.mark.parametrize("view", [
        ViewConfig(),
        ViewConfig(zoom=3.7, scroll_left_px=1300, scroll_top_px=1250),
        ViewConfig(origin_x_mm=-123, pan_x_px=17.5, pan_y_px=-3),
        ViewConfig(workspace_width_mm=12.5, workspace_height_mm=9000, viewport_width_px=333),
    ])
    @pytest.mark.parametrize("pt", [(0, 0), (417, -635), (-2623, 2600), (1e-3, -7.25)])
    def test_round_trip(self, view, pt):
        m = CoordinateMapper(view)
        px = m.mm_to_px(*pt)
        assert m.px_to_mm(*px) == pytest.approx(pt, abs=1e-9)

    def test_delta_conversion(self):
        m = CoordinateMapper(_small_view(zoom=2))
        assert m.px_delta_to_mm_delta(40, 20) == pytest.approx((10, -5))

    def test_visible_rect(self):
        m = CoordinateMapper(_small_view())
        assert m.visible_rect_mm() == pytest.approx((-50, 50, -50, 50))

    def test_visible_rect_follows_scroll(self):
        m = CoordinateMapper(_small_view(zoom=2, scroll_left_px=100, scroll_top_px=0))
        # zoom 2 -> 4 px/mm, anchor (200, 100)
        min_x, max_x, min_y, max_y = m.visible_rect_mm()
        assert (min_x, max_x) == pytest.approx((-25, 25))
        assert (min_y, max_y) == pytest.approx((-25, 25))

    def test_bounds(self):
        m = CoordinateMapper(_small_view(origin_x_mm=10))
        assert (m.bounds.min_x, m.bounds.max_x) == (-40, 60)


# ─────────────────────────────────────────────────────────
# ViewConfig construction
# ─────────────────────────────────────────────────────────


class TestViewConfig:
    @pytest.mark.parametrize("kw", [
        dict(workspace_width_mm=0),
        dict(workspace_height_mm=-5),
        dict(viewport_width_px=0),
        dict(zoom=0),
    ])
    def test_invalid_raises(self, kw):
        with pytest.raises(ValueError):
            ViewConfig(**kw)

    def test_with_changes_revalidates(self):
        v = ViewConfig()
        assert v.with_changes(zoom=2).zoom == 2
        with pytest.raises(ValueError):
            v.with_changes(workspace_width_mm=0)

    def test_from_settings_centres_scroll(self):
        s = AppSettings()
        v = ViewConfig.from_settings(s)
        assert v.origin_x_mm == -123
        assert v.workspace_width_mm == 5000
        assert v.scroll_left_px == (4200 - 1600) / 2
        assert v.scroll_top_px == (4200 - 1600) / 2
        assert v.zoom == 1.0
