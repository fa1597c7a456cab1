"""
areas/store.py

The authoritative in-memory collection of areas.

Every mutation rebinds the internal list (and the touched ``Area`` is a
new frozen instance), so tuples handed out by :attr:`AreaStore.areas`
stay valid for as long as the caller holds them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from areas.codec import format_document
from geometry.polygon import translate_points
from models import (
    Area,
    ErrorKind,
    Point,
    Provenance,
    Result,
    WorkspaceBounds,
    display_label,
    new_area_id,
)

log = logging.getLogger(__name__)


class AreaStore:
    """Ordered set of areas keyed by id."""

    def __init__(self, areas: Iterable[Area] = ()):
        self._areas: List[Area] = list(areas)

    # ── Queries ───────────────────────────────────────

    @property
    def areas(self) -> Tuple[Area, ...]:
        """Immutable snapshot of the current areas, in insertion order."""
        return tuple(self._areas)

    def get(self, area_id: str) -> Optional[Area]:
        for a in self._areas:
            if a.id == area_id:
                return a
        return None

    def __len__(self) -> int:
        return len(self._areas)

    def __iter__(self) -> Iterator[Area]:
        return iter(self.areas)

    def __contains__(self, area_id: object) -> bool:
        return any(a.id == area_id for a in self._areas)

    def to_text(self) -> str:
        """The whole store in the area description format."""
        return format_document(self._areas)

    # ── Mutations ─────────────────────────────────────

    def add_single(self, label: Optional[str], points: Sequence[Point]) -> str:
        """Append an area created by the single-point form; returns its id."""
        area = Area(
            id=new_area_id(),
            label=display_label(label),
            points=tuple(Point(*p) for p in points),
            provenance=Provenance.SINGLE,
        )
        self._areas = self._areas + [area]
        log.debug("Added area %s (%s) with %d points", area.id, area.label, len(area.points))
        return area.id

    def replace_all(self, areas: Iterable[Area]) -> None:
        """Replace the entire contents (batch apply is never incremental)."""
        self._areas = list(areas)
        log.debug("Replaced store contents: %d areas", len(self._areas))

    def delete(self, area_id: str) -> bool:
        """Remove an area; returns False if it was not present."""
        remaining = [a for a in self._areas if a.id != area_id]
        if len(remaining) == len(self._areas):
            return False
        self._areas = remaining
        log.debug("Deleted area %s", area_id)
        return True

    def translate(self, area_id: str, dx: float, dy: float, bounds: WorkspaceBounds,
                  base_points: Optional[Sequence[Point]] = None) -> Result[Area]:
        """Move an area by ``(dx, dy)`` mm and clamp each vertex into *bounds*.

        Args:
            area_id: Area to move.
            dx: X displacement in mm.
            dy: Y displacement in mm.
            bounds: Workspace rectangle every vertex is clamped into.
            base_points: Vertices to start from.  Drag gestures pass the
                snapshot taken at drag start; ``None`` uses the live points.

        Returns:
            The updated area, or an ``UnknownArea`` failure.
        """
        area = self.get(area_id)
        if area is None:
            return Result.failure(ErrorKind.UNKNOWN_AREA, "Area no longer exists.")
        start = area.points if base_points is None else base_points
        moved = replace(area, points=translate_points(start, dx, dy, bounds))
        self._swap(moved)
        return Result.success(moved)

    def set_label(self, area_id: str, label: Optional[str]) -> Result[Area]:
        """Rename an area (trimmed, cut to five characters, blank -> ``AREA``)."""
        area = self.get(area_id)
        if area is None:
            return Result.failure(ErrorKind.UNKNOWN_AREA, "Area no longer exists.")
        renamed = replace(area, label=display_label(label))
        self._swap(renamed)
        return Result.success(renamed)

    def _swap(self, updated: Area) -> None:
        self._areas = [updated if a.id == updated.id else a for a in self._areas]
