"""
geometry/mapper.py

Bidirectional millimetre <-> pixel mapping under zoom, scroll and pan.

mm-space is Y-up and centred on the workspace origin; px-space is the
scroll surface, Y-down.  The workspace origin sits at the *anchor*: the
viewport centre (offset by the current scroll position) plus any pan.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Tuple

from models import Point, WorkspaceBounds

if TYPE_CHECKING:
    from settings import AppSettings


@dataclass(frozen=True)
class ViewConfig:
    """Everything the mm <-> px transform depends on.

    Attributes:
        workspace_width_mm: Workspace extent along X (must be > 0).
        workspace_height_mm: Workspace extent along Y (must be > 0).
        origin_x_mm: Real-world X of the workspace centre.
        origin_y_mm: Real-world Y of the workspace centre.
        zoom: Multiplier on top of the fit-to-viewport scale.
        viewport_width_px: Visible viewport width.
        viewport_height_px: Visible viewport height.
        padding_px: Margin kept free on each side when fitting.
        scroll_left_px: Horizontal scroll offset of the viewport.
        scroll_top_px: Vertical scroll offset of the viewport.
        pan_x_px: Extra horizontal offset of the anchor.
        pan_y_px: Extra vertical offset of the anchor.
    """
    workspace_width_mm: float = 5000.0
    workspace_height_mm: float = 5200.0
    origin_x_mm: float = 0.0
    origin_y_mm: float = 0.0
    zoom: float = 1.0
    viewport_width_px: float = 1600.0
    viewport_height_px: float = 1600.0
    padding_px: float = 16.0
    scroll_left_px: float = 0.0
    scroll_top_px: float = 0.0
    pan_x_px: float = 0.0
    pan_y_px: float = 0.0

    def __post_init__(self):
        if not self.workspace_width_mm > 0 or not self.workspace_height_mm > 0:
            raise ValueError(
                f"workspace size must be > 0, got "
                f"{self.workspace_width_mm} x {self.workspace_height_mm}"
            )
        if not self.viewport_width_px > 0 or not self.viewport_height_px > 0:
            raise ValueError(
                f"viewport size must be > 0, got "
                f"{self.viewport_width_px} x {self.viewport_height_px}"
            )
        if not self.zoom > 0:
            raise ValueError(f"zoom must be > 0, got {self.zoom}")

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "ViewConfig":
        """Build the initial view from application settings.

        The scroll offset starts centred within the scroll surface.
        """
        ws = settings.workspace
        view = settings.view
        start = max(0.0, (view.surface_px - view.viewport_px) / 2)
        return cls(
            workspace_width_mm=ws.width_mm,
            workspace_height_mm=ws.height_mm,
            origin_x_mm=ws.origin_x_mm,
            origin_y_mm=ws.origin_y_mm,
            zoom=max(view.zoom_min, 1.0),
            viewport_width_px=view.viewport_px,
            viewport_height_px=view.viewport_px,
            padding_px=view.padding_px,
            scroll_left_px=start,
            scroll_top_px=start,
        )

    def with_changes(self, **changes) -> "ViewConfig":
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)


class CoordinateMapper:
    """Pure mm <-> px transform for one :class:`ViewConfig`.

    The mapper is cheap to build; create a new one whenever the view
    changes rather than mutating it.
    """

    def __init__(self, view: ViewConfig):
        self.view = view

        usable_w = max(1.0, view.viewport_width_px - view.padding_px * 2)
        usable_h = max(1.0, view.viewport_height_px - view.padding_px * 2)
        sx = usable_w / view.workspace_width_mm
        sy = usable_h / view.workspace_height_mm
        self.base_scale = min(sx, sy)
        self.scale = self.base_scale * view.zoom

        self.anchor = Point(
            view.scroll_left_px + view.viewport_width_px / 2 + view.pan_x_px,
            view.scroll_top_px + view.viewport_height_px / 2 + view.pan_y_px,
        )
        self.bounds = WorkspaceBounds.from_workspace(
            view.workspace_width_mm,
            view.workspace_height_mm,
            view.origin_x_mm,
            view.origin_y_mm,
        )

    def mm_to_px(self, x_mm: float, y_mm: float) -> Point:
        """Map a workspace point to the scroll surface (Y flipped)."""
        v = self.view
        return Point(
            self.anchor.x + (x_mm - v.origin_x_mm) * self.scale,
            self.anchor.y - (y_mm - v.origin_y_mm) * self.scale,
        )

    def px_to_mm(self, x_px: float, y_px: float) -> Point:
        """Exact inverse of :meth:`mm_to_px`."""
        v = self.view
        return Point(
            (x_px - self.anchor.x) / self.scale + v.origin_x_mm,
            (self.anchor.y - y_px) / self.scale + v.origin_y_mm,
        )

    def px_delta_to_mm_delta(self, dx_px: float, dy_px: float) -> Point:
        """Convert a pointer displacement to a workspace displacement."""
        return Point(dx_px / self.scale, -dy_px / self.scale)

    def visible_rect_mm(self) -> Tuple[float, float, float, float]:
        """Return ``(min_x, max_x, min_y, max_y)`` of the visible viewport in mm."""
        v = self.view
        tl = self.px_to_mm(v.scroll_left_px, v.scroll_top_px)
        br = self.px_to_mm(v.scroll_left_px + v.viewport_width_px,
                           v.scroll_top_px + v.viewport_height_px)
        return (
            min(tl.x, br.x),
            max(tl.x, br.x),
            min(tl.y, br.y),
            max(tl.y, br.y),
        )
