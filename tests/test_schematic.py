"""Tests for the schematic builder — layer order and layout."""

import pytest

from lenssketch.core.geometry_mapper import GeometryMapper
from lenssketch.core.presets import create_demo_lens
from lenssketch.core.schematic import (
    Background,
    Label,
    Line,
    Polygon,
    Rect,
    build_schematic,
    bulge_px,
    quad_curve,
    surface_positions,
)
from lenssketch.models.lens import Surface, ViewParameters

W, H = 1000, 600


def _roles(prims):
    return [p.role for p in prims]


class TestBulge:

    def test_flat_is_zero(self):
        assert bulge_px(0.0) == 0.0

    def test_lower_clamp(self):
        assert bulge_px(10.0) == pytest.approx(0.6 * 18)

    def test_upper_clamp(self):
        assert bulge_px(-1000.0) == pytest.approx(-2.6 * 18)

    def test_mid_range(self):
        assert bulge_px(120.0) == pytest.approx(1.5 * 18)

    def test_sign_follows_radius(self):
        assert bulge_px(-40.0) < 0 < bulge_px(40.0)


class TestCurve:

    def test_endpoints(self):
        pts = quad_curve((0, 0), (5, 5), (0, 10), samples=8)
        assert len(pts) == 9
        assert pts[0] == pytest.approx((0.0, 0.0))
        assert pts[-1] == pytest.approx((0.0, 10.0))

    def test_midpoint_pulled_halfway(self):
        pts = quad_curve((0, 0), (10, 5), (0, 10), samples=2)
        assert pts[1] == pytest.approx((5.0, 5.0))


class TestPositions:

    def test_cursor_starts_left_of_mount(self):
        surfaces = [Surface(thickness=5.0), Surface(thickness=2.0), Surface()]
        assert surface_positions(surfaces, 52.0) == [-62.0, -57.0, -55.0]


class TestLayerOrder:

    def setup_method(self):
        self.session = create_demo_lens()
        self.prims = build_schematic(self.session.surfaces, self.session.view, W, H)

    def test_background_first(self):
        assert isinstance(self.prims[0], Background)
        assert (self.prims[0].width, self.prims[0].height) == (W, H)

    def test_axis_before_sensor_before_mount_before_glass(self):
        roles = _roles(self.prims)
        assert roles.index("axis") < roles.index("sensor")
        assert roles.index("sensor") < roles.index("ruler")
        assert roles.index("ruler") < roles.index("mount")
        assert roles.index("mount") < roles.index("aperture")
        assert roles.index("mount") < roles.index("body")

    def test_sensor_at_center(self):
        sensor = next(p for p in self.prims if p.role == "sensor")
        assert sensor.x1 == sensor.x2 == W // 2

    def test_ruler_ticks(self):
        ticks = [p for p in self.prims if isinstance(p, Line) and p.role == "ruler"]
        assert len(ticks) == 1 + 61  # baseline + one tick per mm
        labels = [p.text for p in self.prims if p.role == "ruler_text"]
        assert labels == ["0", "10", "20", "30", "40", "50", "60"]

    def test_major_ticks_longer(self):
        ticks = [p for p in self.prims if isinstance(p, Line) and p.role == "ruler"][1:]
        assert abs(ticks[0].y2 - ticks[0].y1) == 8
        assert abs(ticks[1].y2 - ticks[1].y1) == 4

    def test_mount_at_minus_flange(self):
        mapper = GeometryMapper(W, H, self.session.view.px_per_mm)
        rects = [p for p in self.prims if isinstance(p, Rect)]
        assert len(rects) == 2
        outer, inner = rects
        assert outer.x + outer.width == mapper.to_pixel_x(-52.0)
        # inner rectangle sits inside the outer one
        assert inner.x > outer.x and inner.y > outer.y
        assert inner.x + inner.width < outer.x + outer.width
        assert any(p.text == "PL" for p in self.prims if isinstance(p, Label))

    def test_one_body_per_gap_and_outline_last(self):
        polys = [p for p in self.prims if isinstance(p, Polygon)]
        assert len(polys) == 11
        assert all(p.closed and p.role == "body" for p in polys[:-1])
        assert not polys[-1].closed and polys[-1].role == "outline"
        assert polys[-1].glass is None

    def test_body_carries_glass(self):
        polys = [p for p in self.prims if isinstance(p, Polygon)]
        assert polys[1].glass == "LASF35"

    def test_labels_one_based(self):
        labels = [p.text for p in self.prims if p.role == "label"]
        assert labels == [str(i) for i in range(1, 12)]

    def test_first_surface_position(self):
        mapper = GeometryMapper(W, H, self.session.view.px_per_mm)
        aperture = next(p for p in self.prims if p.role == "aperture")
        assert aperture.x1 == mapper.to_pixel_x(-62.0)
        assert aperture.y1 == mapper.to_pixel_y(22.0)
        assert aperture.y2 == mapper.to_pixel_y(-22.0)

    def test_body_spans_thickness(self):
        mapper = GeometryMapper(W, H, self.session.view.px_per_mm)
        body = next(p for p in self.prims if isinstance(p, Polygon))
        # first and last points sit on the surface vertices (flat surface 0)
        assert body.points[0][0] == mapper.to_pixel_x(-62.0)
        assert body.points[-1][0] == mapper.to_pixel_x(-52.0)


class TestToggles:

    def test_hidden_axis_mount_apertures(self):
        view = ViewParameters(show_axis=False, show_mount=False, show_apertures=False)
        prims = build_schematic([Surface(), Surface()], view, W, H)
        roles = set(_roles(prims))
        assert "axis" not in roles
        assert "mount" not in roles
        assert "aperture" not in roles
        assert "sensor" in roles

    def test_empty_surface_list(self):
        prims = build_schematic([], ViewParameters(), W, H)
        assert not any(isinstance(p, Polygon) for p in prims)

    def test_single_surface_outline_only(self):
        prims = build_schematic([Surface(radius=30.0)], ViewParameters(), W, H)
        polys = [p for p in prims if isinstance(p, Polygon)]
        assert len(polys) == 1
        assert polys[0].role == "outline"

    def test_degenerate_scale_still_renders(self):
        view = ViewParameters(px_per_mm=0.0)
        prims = build_schematic([Surface(), Surface()], view, W, H)
        sensor = next(p for p in prims if p.role == "sensor")
        assert sensor.y1 < sensor.y2  # top above bottom
