"""
geometry package

mm <-> px mapping, polygon helpers and reference-grid geometry.
"""

from geometry.mapper import CoordinateMapper, ViewConfig
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
from geometry.grid import (
    Axes,
    CoordLabel,
    CoordLabels,
    GridLine,
    axes,
    coord_labels,
    grid_lines,
    workspace_border,
)

__all__ = [
    "CoordinateMapper",
    "ViewConfig",
    "bounding_box",
    "centroid",
    "find_interior_point",
    "iter_edges",
    "point_in_polygon",
    "rectangle_from_center",
    "translate_points",
    "vertex_mean",
    "Axes",
    "CoordLabel",
    "CoordLabels",
    "GridLine",
    "axes",
    "coord_labels",
    "grid_lines",
    "workspace_border",
]
