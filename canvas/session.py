"""
canvas/session.py

Pointer- and menu-driven editing of areas, independent of any UI toolkit.

Drag protocol::

    IDLE --begin_drag--> DRAGGING --update_drag*--> DRAGGING --end_drag--> IDLE

Every ``update_drag`` recomputes the area from the snapshot taken at
``begin_drag`` plus the total pointer displacement, so intermediate moves
never accumulate rounding error.  Ending a drag keeps the last applied
position; there is no rollback.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from areas.codec import DocumentParse, format_area_line, parse_point
from areas.document import AreaDocument
from areas.store import AreaStore
from geometry.mapper import CoordinateMapper, ViewConfig
from geometry.polygon import find_interior_point, rectangle_from_center
from models import Area, ErrorKind, Point, Result, WorkspaceBounds, display_label
from settings import GridSettings
from utils import format_xy, snap_to_step

log = logging.getLogger(__name__)


class EditState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragState:
    """What an active drag gesture remembers from its first event."""
    area_id: str
    pointer_start_px: Point
    snapshot: Tuple[Point, ...]


@dataclass(frozen=True)
class MenuDraft:
    """Pre-filled contents of the area edit menu."""
    area_id: str
    label: str
    xy_text: str


class InteractiveEditSession:
    """Coordinates selection, dragging, menu edits and area creation.

    Args:
        store: Area collection every edit commits to.
        view: Current view transform; replace it with :meth:`set_view`.
        grid: Snap settings used by drags and area creation.
        document: Text description that new areas are echoed into.
    """

    def __init__(self, store: AreaStore, view: ViewConfig,
                 grid: Optional[GridSettings] = None,
                 document: Optional[AreaDocument] = None):
        self.store = store
        self.grid = grid if grid is not None else GridSettings()
        self.document = document if document is not None else AreaDocument()
        self.mapper = CoordinateMapper(view)
        self.selected_id = ""
        self._drag: Optional[DragState] = None

    # ── View ──────────────────────────────────────────

    @property
    def view(self) -> ViewConfig:
        return self.mapper.view

    @property
    def bounds(self) -> WorkspaceBounds:
        return self.mapper.bounds

    def set_view(self, view: ViewConfig) -> None:
        """Swap the view transform (zoom, scroll, pan or workspace change)."""
        self.mapper = CoordinateMapper(view)

    # ── Selection ─────────────────────────────────────

    def select(self, area_id: str) -> None:
        self.selected_id = area_id

    def clear_selection(self) -> None:
        self.selected_id = ""

    # ── Drag state machine ────────────────────────────

    @property
    def state(self) -> EditState:
        return EditState.DRAGGING if self._drag is not None else EditState.IDLE

    @property
    def drag(self) -> Optional[DragState]:
        return self._drag

    def begin_drag(self, area_id: str, pointer_px: Tuple[float, float]) -> Result[DragState]:
        """Start dragging *area_id* from *pointer_px* (surface pixels)."""
        if self._drag is not None:
            return Result.failure(ErrorKind.INVALID_STATE, "A drag is already in progress.")
        area = self.store.get(area_id)
        if area is None:
            return Result.failure(ErrorKind.UNKNOWN_AREA, "Area no longer exists.")

        self.select(area_id)
        self._drag = DragState(
            area_id=area_id,
            pointer_start_px=Point(*pointer_px),
            snapshot=area.points,
        )
        log.debug("Drag started on %s at %s", area_id, self._drag.pointer_start_px)
        return Result.success(self._drag)

    def update_drag(self, pointer_px: Tuple[float, float]) -> Result[Area]:
        """Move the dragged area to follow the pointer."""
        drag = self._drag
        if drag is None:
            return Result.failure(ErrorKind.INVALID_STATE, "No drag in progress.")

        dx_px = pointer_px[0] - drag.pointer_start_px.x
        dy_px = pointer_px[1] - drag.pointer_start_px.y
        dx, dy = self.mapper.px_delta_to_mm_delta(dx_px, dy_px)
        step = self.grid.snap_step
        dx = snap_to_step(dx, step)
        dy = snap_to_step(dy, step)

        return self.store.translate(drag.area_id, dx, dy, self.bounds, base_points=drag.snapshot)

    def end_drag(self) -> None:
        """Finish or cancel the gesture; safe to call when idle."""
        if self._drag is not None:
            log.debug("Drag ended on %s", self._drag.area_id)
        self._drag = None

    # ── Menu edit ─────────────────────────────────────

    def summary_point(self, area: Area) -> Point:
        """The area's semantic location: its best-effort interior point."""
        return find_interior_point(area.points)

    def open_menu(self, area_id: str) -> Result[MenuDraft]:
        """Select *area_id* and return the edit menu's initial field values."""
        area = self.store.get(area_id)
        if area is None:
            return Result.failure(ErrorKind.UNKNOWN_AREA, "Area no longer exists.")
        self.select(area_id)
        p = self.summary_point(area)
        return Result.success(MenuDraft(area_id, display_label(area.label), format_xy(p.x, p.y)))

    def apply_menu_edit(self, area_id: str, new_label: Optional[str], new_xy_text: str,
                        snap_enabled: bool, grid_step: float,
                        bounds: WorkspaceBounds) -> Result[Area]:
        """Rename an area and move it so its summary point lands on *new_xy_text*.

        The move is applied to the live points, not a drag snapshot.
        """
        area = self.store.get(area_id)
        if area is None:
            return Result.failure(ErrorKind.UNKNOWN_AREA, "Area no longer exists.")

        target = parse_point(new_xy_text)
        if not target.ok:
            log.warning("Menu edit of %s rejected: %s", area_id, target.error)
            return Result(error=target.error)

        current = self.summary_point(area)
        dx = target.value.x - current.x
        dy = target.value.y - current.y
        if snap_enabled:
            dx = snap_to_step(dx, grid_step)
            dy = snap_to_step(dy, grid_step)

        moved = self.store.translate(area_id, dx, dy, bounds)
        if not moved.ok:
            return moved
        return self.store.set_label(area_id, new_label)

    # ── Creation / deletion ───────────────────────────

    def create_area(self, label: Optional[str], xy_text: str,
                    width_mm: Optional[float], height_mm: Optional[float]) -> Result[Area]:
        """Create a rectangle centred on *xy_text* and echo it into the document."""
        parsed = parse_point(xy_text)
        if not parsed.ok:
            return Result.failure(parsed.error.kind, f"Invalid coordinates: {parsed.error.message}")

        x, y = parsed.value
        step = self.grid.snap_step
        x = snap_to_step(x, step)
        y = snap_to_step(y, step)
        center = self.bounds.clamp(Point(x, y))

        if not _positive(width_mm) or not _positive(height_mm):
            return Result.failure(ErrorKind.INVALID_DIMENSION, "Width and height must be > 0.")

        points = rectangle_from_center(center.x, center.y, float(width_mm), float(height_mm))
        points = tuple(self.bounds.clamp(p) for p in points)

        area_id = self.store.add_single(label, points)
        area = self.store.get(area_id)
        self.select(area_id)
        self.document.append_line(format_area_line(area.label, area.points))
        log.info("Created area %s (%s)", area_id, area.label)
        return Result.success(area)

    def delete_area(self, area_id: str) -> bool:
        """Delete an area and drop the selection if it pointed at it."""
        if self._drag is not None and self._drag.area_id == area_id:
            self.end_drag()
        removed = self.store.delete(area_id)
        if self.selected_id == area_id:
            self.clear_selection()
        return removed

    def apply_document(self) -> DocumentParse:
        """Re-parse the description text and replace every area."""
        self.end_drag()
        parsed = self.document.apply(self.store)
        if self.selected_id and self.selected_id not in self.store:
            self.clear_selection()
        return parsed


def _positive(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        v = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(v) and v > 0
