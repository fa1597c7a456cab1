"""
geometry/grid.py

Reference geometry drawn behind the areas: grid lines, axes, the
workspace border and the coordinate labels along the viewport edges.

Everything here is returned in px-space, ready for a renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from geometry.mapper import CoordinateMapper
from utils import round_half_up


MAJOR_TOLERANCE = 1e-9
MIN_COORD_STEP_MM = 10


@dataclass(frozen=True)
class GridLine:
    """One grid line segment in px-space."""
    key: str
    x1: float
    y1: float
    x2: float
    y2: float
    major: bool = False


@dataclass(frozen=True)
class Axes:
    """The X axis (through origin Y) and Y axis (through origin X) in px-space."""
    x_axis: Tuple[float, float, float, float]
    y_axis: Tuple[float, float, float, float]


@dataclass(frozen=True)
class CoordLabel:
    """A coordinate value and where to draw it."""
    key: str
    x: float
    y: float
    value: float


@dataclass
class CoordLabels:
    """X labels along the bottom edge, Y labels along the left edge."""
    xs: List[CoordLabel] = field(default_factory=list)
    ys: List[CoordLabel] = field(default_factory=list)
    used_step_mm: float = 0.0


def _fmt_key(value: float) -> str:
    # 100.0 -> "100", 12.5 -> "12.5"
    return f"{value:g}"


def _step_values(lo: float, hi: float, step: float) -> List[float]:
    """Multiples of *step* inside ``[lo, hi]``, ascending."""
    values = []
    k = math.ceil(lo / step)
    v = k * step
    while v <= hi:
        values.append(v)
        k += 1
        v = k * step
    return values


def _is_major(value: float, major_step: float) -> bool:
    return major_step > 0 and abs(math.fmod(value, major_step)) < MAJOR_TOLERANCE


def grid_lines(mapper: CoordinateMapper, grid_mm: float, major_grid_mm: float) -> List[GridLine]:
    """Vertical then horizontal grid lines covering the workspace bounds."""
    if not grid_mm or grid_mm <= 0:
        return []
    b = mapper.bounds
    lines: List[GridLine] = []

    for x in _step_values(b.min_x, b.max_x, grid_mm):
        a = mapper.mm_to_px(x, b.min_y)
        c = mapper.mm_to_px(x, b.max_y)
        lines.append(GridLine(f"v_{_fmt_key(x)}", a.x, a.y, c.x, c.y, _is_major(x, major_grid_mm)))

    for y in _step_values(b.min_y, b.max_y, grid_mm):
        a = mapper.mm_to_px(b.min_x, y)
        c = mapper.mm_to_px(b.max_x, y)
        lines.append(GridLine(f"h_{_fmt_key(y)}", a.x, a.y, c.x, c.y, _is_major(y, major_grid_mm)))

    return lines


def axes(mapper: CoordinateMapper) -> Axes:
    """Axes through the workspace origin, spanning the bounds."""
    b = mapper.bounds
    v = mapper.view
    xa = mapper.mm_to_px(b.min_x, v.origin_y_mm)
    xb = mapper.mm_to_px(b.max_x, v.origin_y_mm)
    ya = mapper.mm_to_px(v.origin_x_mm, b.min_y)
    yb = mapper.mm_to_px(v.origin_x_mm, b.max_y)
    return Axes(
        x_axis=(xa.x, xa.y, xb.x, xb.y),
        y_axis=(ya.x, ya.y, yb.x, yb.y),
    )


def workspace_border(mapper: CoordinateMapper) -> Tuple[float, float, float, float]:
    """Return ``(left, top, width, height)`` of the workspace rectangle in px."""
    b = mapper.bounds
    top_left = mapper.mm_to_px(b.min_x, b.max_y)
    bottom_right = mapper.mm_to_px(b.max_x, b.min_y)
    return (
        top_left.x,
        top_left.y,
        bottom_right.x - top_left.x,
        bottom_right.y - top_left.y,
    )


def normalize_coord_step(step_mm: float) -> int:
    """Coordinate label spacing: a multiple of 10 mm, at least 10."""
    return max(MIN_COORD_STEP_MM, round_half_up(step_mm / 10) * 10)


def coord_labels(mapper: CoordinateMapper, step_mm: float, margin_px: float = 12.0) -> CoordLabels:
    """Labels for every step-aligned mm value inside the visible viewport.

    X values sit *margin_px* above the viewport's bottom edge, Y values
    *margin_px* right of its left edge, so they stay on screen while
    scrolling.
    """
    step = normalize_coord_step(step_mm)
    v = mapper.view
    vis_min_x, vis_max_x, vis_min_y, vis_max_y = mapper.visible_rect_mm()

    labels = CoordLabels(used_step_mm=step)
    bottom_px = v.scroll_top_px + v.viewport_height_px - margin_px
    left_px = v.scroll_left_px + margin_px

    for x in _step_values(vis_min_x, vis_max_x, step):
        p = mapper.mm_to_px(x, vis_min_y)
        labels.xs.append(CoordLabel(f"xl_{_fmt_key(x)}", p.x, bottom_px, x))

    for y in _step_values(vis_min_y, vis_max_y, step):
        p = mapper.mm_to_px(vis_min_x, y)
        labels.ys.append(CoordLabel(f"yl_{_fmt_key(y)}", left_px, p.y, y))

    return labels
