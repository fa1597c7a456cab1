"""
canvas/presenter.py

Per-area geometry bundles handed to the renderer, plus the reference
geometry (grid, axes, border, coordinate labels) for one frame.

All positions are px-space; ``summary_mm`` is the only mm value and is
rounded for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from areas.store import AreaStore
from geometry.grid import Axes, CoordLabels, GridLine, axes, coord_labels, grid_lines, workspace_border
from geometry.mapper import CoordinateMapper
from geometry.polygon import bounding_box, find_interior_point, point_in_polygon
from models import Area, Point, Provenance, display_label
from settings import AppSettings
from utils import round_half_up


@dataclass(frozen=True)
class AreaRenderInfo:
    """Everything a renderer needs to draw one area.

    Attributes:
        id: Area id.
        label: Display label (never blank).
        provenance: Single-form or batch area, for colouring.
        polygon_px: Vertices in px-space.
        label_px: Where to draw the label: the inset top-left corner when
            it is inside the polygon, otherwise the interior point.
        interior_px: The interior (summary) point in px-space.
        top_left_px: Inset top-left corner in px-space.
        summary_mm: Interior point in mm, rounded to integers.
        selected: Whether this is the selected area.
    """
    id: str
    label: str
    provenance: Provenance
    polygon_px: Tuple[Point, ...]
    label_px: Point
    interior_px: Point
    top_left_px: Point
    summary_mm: Tuple[int, int]
    selected: bool = False


@dataclass
class SceneGeometry:
    """One frame's worth of renderable geometry."""
    areas: List[AreaRenderInfo] = field(default_factory=list)
    grid: List[GridLine] = field(default_factory=list)
    axes: Optional[Axes] = None
    border: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    coords: Optional[CoordLabels] = None


def build_render_info(area: Area, mapper: CoordinateMapper, label_pad_mm: float = 20.0,
                      selected_id: str = "") -> AreaRenderInfo:
    """Compute the render bundle for *area* under *mapper*."""
    poly = area.points
    min_x, _min_y, _max_x, max_y = bounding_box(poly)

    top_left_mm = Point(min_x + label_pad_mm, max_y - label_pad_mm)
    interior_mm = find_interior_point(poly)
    label_mm = top_left_mm if point_in_polygon(top_left_mm, poly) else interior_mm

    return AreaRenderInfo(
        id=area.id,
        label=display_label(area.label),
        provenance=area.provenance,
        polygon_px=tuple(mapper.mm_to_px(x, y) for x, y in poly),
        label_px=mapper.mm_to_px(*label_mm),
        interior_px=mapper.mm_to_px(*interior_mm),
        top_left_px=mapper.mm_to_px(*top_left_mm),
        summary_mm=(round_half_up(interior_mm.x), round_half_up(interior_mm.y)),
        selected=bool(selected_id) and area.id == selected_id,
    )


def build_scene(store: AreaStore, mapper: CoordinateMapper, settings: AppSettings,
                selected_id: str = "") -> SceneGeometry:
    """Render bundles for every area plus the reference geometry."""
    scene = SceneGeometry(
        areas=[
            build_render_info(a, mapper, settings.areas.label_pad_mm, selected_id)
            for a in store
        ],
        grid=grid_lines(mapper, settings.grid.step_mm, settings.grid.major_step_mm),
        axes=axes(mapper),
        border=workspace_border(mapper),
    )
    if settings.coords.visible:
        scene.coords = coord_labels(mapper, settings.coords.step_mm, settings.coords.margin_px)
    return scene
