"""
geometry/polygon.py

Pure polygon helpers: containment, centroid, interior-point search and
rectangle construction.

Polygons are ordered vertex sequences with an implicit closing edge from
the last vertex back to the first.  Coordinates are millimetres unless a
caller says otherwise; none of these functions care about units.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

from models import Point, WorkspaceBounds


# Degenerate-area threshold for the shoelace centroid
AREA_EPSILON = 1e-9

# Interior-point grid search: rings 1..MAX_RADIUS, STEP units apart
INTERIOR_SEARCH_STEP = 10.0
INTERIOR_SEARCH_MAX_RADIUS = 20


def iter_edges(polygon: Sequence[Point]) -> Iterator[Tuple[Point, Point]]:
    """Yield ``(vertex[i], vertex[i-1])`` for every vertex.

    Produces exactly ``n`` edges for ``n`` vertices; the first pair is the
    closing edge ``(v[0], v[n-1])``.
    """
    n = len(polygon)
    for i in range(n):
        yield polygon[i], polygon[i - 1]


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Crossing-number containment test with a ray toward +X.

    Points exactly on an edge may land either way.
    """
    x, y = point
    inside = False
    for (xi, yi), (xj, yj) in iter_edges(polygon):
        if (yi > y) != (yj > y):
            # yi != yj is guaranteed by the straddle test above
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
    return inside


def vertex_mean(polygon: Sequence[Point]) -> Point:
    """Arithmetic mean of the vertices."""
    n = len(polygon)
    sx = sum(p[0] for p in polygon)
    sy = sum(p[1] for p in polygon)
    return Point(sx / n, sy / n)


def centroid(polygon: Sequence[Point]) -> Point:
    """Area-weighted centroid via the signed shoelace formula.

    Falls back to :func:`vertex_mean` when the signed area is below
    ``AREA_EPSILON`` (collinear or coincident vertices).
    """
    a = 0.0
    cx = 0.0
    cy = 0.0
    n = len(polygon)
    for i in range(n):
        x0, y0 = polygon[i]
        x1, y1 = polygon[(i + 1) % n]
        cross = x0 * y1 - x1 * y0
        a += cross
        cx += (x0 + x1) * cross
        cy += (y0 + y1) * cross
    a *= 0.5
    if abs(a) < AREA_EPSILON:
        return vertex_mean(polygon)
    return Point(cx / (6 * a), cy / (6 * a))


def find_interior_point(polygon: Sequence[Point]) -> Point:
    """Best-effort point inside *polygon*.

    Tries, in order: the centroid, the vertex mean, then a square grid
    search around the centroid (rings 1 to ``INTERIOR_SEARCH_MAX_RADIUS``,
    ``INTERIOR_SEARCH_STEP`` apart).  If nothing is found the first vertex
    is returned, which is not guaranteed to be interior.  Polygons with
    fewer than three vertices yield ``(0, 0)``.
    """
    if not polygon or len(polygon) < 3:
        return Point(0.0, 0.0)

    c = centroid(polygon)
    if point_in_polygon(c, polygon):
        return c

    mean = vertex_mean(polygon)
    if point_in_polygon(mean, polygon):
        return mean

    step = INTERIOR_SEARCH_STEP
    for r in range(1, INTERIOR_SEARCH_MAX_RADIUS + 1):
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                candidate = Point(c.x + dx * step, c.y + dy * step)
                if point_in_polygon(candidate, polygon):
                    return candidate

    return Point(*polygon[0])


def rectangle_from_center(cx: float, cy: float, width: float, height: float) -> Tuple[Point, ...]:
    """Axis-aligned rectangle around ``(cx, cy)``.

    Vertex order: bottom-left, top-left, top-right, bottom-right.
    """
    half_w = width / 2
    half_h = height / 2
    left = cx - half_w
    right = cx + half_w
    bottom = cy - half_h
    top = cy + half_h
    return (
        Point(left, bottom),
        Point(left, top),
        Point(right, top),
        Point(right, bottom),
    )


def bounding_box(polygon: Sequence[Point]) -> Tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)`` of a non-empty polygon."""
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    return min(xs), min(ys), max(xs), max(ys)


def translate_points(points: Sequence[Point], dx: float, dy: float,
                     bounds: WorkspaceBounds) -> Tuple[Point, ...]:
    """Shift every vertex by ``(dx, dy)`` then clamp it into *bounds*.

    Each vertex is clamped on its own, so a polygon pushed against a wall
    is squashed rather than stopped.
    """
    return tuple(bounds.clamp(Point(x + dx, y + dy)) for x, y in points)
