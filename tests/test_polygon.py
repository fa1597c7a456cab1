"""Tests for the pure polygon helpers in geometry/polygon.py."""
from __future__ import annotations

import math

import pytest

from geometry.polygon import (
    bounding_box,
    centroid,
    find_interior_point,
    iter_edges,
    point_in_polygon,
    rectangle_from_center,
    translate_points,
    vertex_mean,
)
from models import Point, WorkspaceBounds

SQUARE = [Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)]

# 30 x 30 block with a 10 x 20 notch cut from the top middle
U_SHAPE = [
    Point(0, 0), Point(30, 0), Point(30, 30), Point(20, 30),
    Point(20, 10), Point(10, 10), Point(10, 30), Point(0, 30),
]


def _regular(n: int, r: float = 50.0, cx: float = 7.0, cy: float = -3.0):
    return [
        Point(cx + r * math.cos(2 * math.pi * k / n), cy + r * math.sin(2 * math.pi * k / n))
        for k in range(n)
    ]


# ─────────────────────────────────────────────────────────
# Edge iteration
# ─────────────────────────────────────────────────────────


class TestIterEdges:
    def test_n_edges_for_n_vertices(self):
        assert len(list(iter_edges(SQUARE))) == 4

    def test_first_edge_is_closing_edge(self):
        edges = list(iter_edges(SQUARE))
        assert edges[0] == (SQUARE[0], SQUARE[3])
        assert edges[1] == (SQUARE[1], SQUARE[0])

    def test_empty(self):
        assert list(iter_edges([])) == []


# ─────────────────────────────────────────────────────────
# Containment
# ─────────────────────────────────────────────────────────


class TestPointInPolygon:
    def test_strict_interior(self):
        assert point_in_polygon(Point(5, 5), SQUARE)
        assert point_in_polygon(Point(0.01, 9.99), SQUARE)

    def test_strict_exterior(self):
        assert not point_in_polygon(Point(15, 5), SQUARE)
        assert not point_in_polygon(Point(-1, 5), SQUARE)
        assert not point_in_polygon(Point(5, 11), SQUARE)

    def test_concave_notch_is_outside(self):
        assert not point_in_polygon(Point(15, 20), U_SHAPE)
        assert point_in_polygon(Point(5, 20), U_SHAPE)
        assert point_in_polygon(Point(15, 5), U_SHAPE)

    def test_works_on_plain_tuples(self):
        assert point_in_polygon((5, 5), [(0, 0), (0, 10), (10, 10), (10, 0)])


# ─────────────────────────────────────────────────────────
# Centroid / mean
# ─────────────────────────────────────────────────────────


class TestCentroid:
    @pytest.mark.parametrize("poly", [
        SQUARE,
        [Point(0, 0), Point(40, 5), Point(10, 30)],
        _regular(6),
        _regular(17, r=1000, cx=-2000, cy=400),
        [Point(0, 0), Point(100, 100), Point(90, 110), Point(-10, 10)],
    ])
    def test_convex_centroid_is_inside(self, poly):
        assert point_in_polygon(centroid(poly), poly)

    def test_square_centroid(self):
        assert centroid(SQUARE) == pytest.approx((5, 5))

    def test_orientation_independent(self):
        assert centroid(list(reversed(SQUARE))) == pytest.approx((5, 5))

    def test_all_vertices_equal(self):
        poly = [Point(3, 4)] * 4
        assert centroid(poly) == pytest.approx((3, 4))

    def test_collinear_falls_back_to_mean(self):
        poly = [Point(0, 0), Point(5, 5), Point(10, 10)]
        assert centroid(poly) == pytest.approx((5, 5))

    def test_vertex_mean(self):
        assert vertex_mean(U_SHAPE) == pytest.approx((15, 17.5))


# ─────────────────────────────────────────────────────────
# Interior point
# ─────────────────────────────────────────────────────────


class TestFindInteriorPoint:
    def test_square_returns_centre(self):
        assert find_interior_point(SQUARE) == pytest.approx((5, 5))

    def test_too_few_points(self):
        assert find_interior_point([]) == (0, 0)
        assert find_interior_point([Point(4, 4), Point(5, 5)]) == (0, 0)

    def test_concave_uses_grid_search(self):
        c = centroid(U_SHAPE)
        assert not point_in_polygon(c, U_SHAPE)
        p = find_interior_point(U_SHAPE)
        assert point_in_polygon(p, U_SHAPE)
        # first candidate of ring 1 is one step down-left of the centroid
        assert p == pytest.approx((c.x - 10, c.y - 10))

    def test_search_exhausted_returns_first_vertex(self):
        big_u = [Point(x * 100, y * 100) for x, y in U_SHAPE]
        assert find_interior_point(big_u) == (0, 0)


# ─────────────────────────────────────────────────────────
# Construction and transforms
# ─────────────────────────────────────────────────────────


class TestRectangle:
    def test_vertex_order(self):
        assert rectangle_from_center(0, 0, 10, 20) == ((-5, -10), (-5, 10), (5, 10), (5, -10))

    def test_offset_centre(self):
        rect = rectangle_from_center(420, -640, 150, 300)
        assert rect == ((345, -790), (345, -490), (495, -490), (495, -790))


class TestBoundingBoxAndTranslate:
    def test_bounding_box(self):
        assert bounding_box(U_SHAPE) == (0, 0, 30, 30)

    def test_translate_without_clamping(self):
        b = WorkspaceBounds.from_workspace(1000, 1000)
        assert translate_points(SQUARE, 5, -5, b) == (
            (5, -5), (5, 5), (15, 5), (15, -5),
        )

    def test_translate_clamps_per_vertex(self):
        b = WorkspaceBounds.from_workspace(30, 1000)  # x in [-15, 15]
        moved = translate_points(SQUARE, 8, 1, b)
        assert moved == ((8, 1), (8, 11), (15, 11), (15, 1))
