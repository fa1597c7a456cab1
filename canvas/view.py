"""
canvas/view.py

QGraphicsScene / QGraphicsView pair that draws the workspace and routes
pointer input to an :class:`InteractiveEditSession`.

Scene coordinates are the scroll-surface pixels the mapper produces; the
view never applies a Qt transform of its own, zoom lives in the
``ViewConfig``.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsPolygonItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
)

from canvas.presenter import AreaRenderInfo, SceneGeometry, build_scene
from canvas.session import EditState, InteractiveEditSession
from debug_trace import trace
from models import Provenance
from settings import AppSettings
from utils import clamp, parse_hex_rgba

AREA_ID_KEY = 1  # QGraphicsItem.data key for the area id

# Z layers
Z_GRID = 0
Z_AXES = 10
Z_AREAS = 100
Z_LABELS = 200
Z_COORDS = 300


def _qcolor(s: str, fallback: QColor) -> QColor:
    """Hex string to QColor, or *fallback* when it does not parse."""
    rgba = parse_hex_rgba(s)
    if rgba is None:
        return QColor(fallback)
    return QColor(*rgba)


class AreaScene(QGraphicsScene):
    """Scene holding the reference layer and the area layer.

    The reference layer (grid, axes, border, coordinate labels) only
    changes with the view; the area layer changes on every edit, so the
    two are rebuilt independently.
    """

    def __init__(self, settings: AppSettings, parent=None):
        super().__init__(parent)
        self.settings = settings
        surface = settings.view.surface_px
        self.setSceneRect(QRectF(0, 0, surface, surface))
        self._reference_items: List[QGraphicsItem] = []
        self._area_items: List[QGraphicsItem] = []
        self.areas_visible = True

    def set_areas_visible(self, visible: bool) -> None:
        """Show or hide the area layer; kept across re-renders."""
        self.areas_visible = visible
        for it in self._area_items:
            it.setVisible(visible)

    def area_items(self) -> List[QGraphicsItem]:
        return list(self._area_items)

    # ── Reference layer ───────────────────────────────

    def render_reference(self, geo: SceneGeometry) -> None:
        """Redraw grid lines, axes, workspace border and coordinate labels."""
        for it in self._reference_items:
            self.removeItem(it)
        self._reference_items = []

        minor_pen = QPen(QColor("#EFEFEF"), 1)
        major_pen = QPen(QColor("#D2D2D2"), 1.2)
        for ln in geo.grid:
            it = self.addLine(ln.x1, ln.y1, ln.x2, ln.y2, major_pen if ln.major else minor_pen)
            it.setZValue(Z_GRID)
            self._reference_items.append(it)

        left, top, w, h = geo.border
        border_pen = QPen(QColor("#999999"), 2, Qt.PenStyle.DashLine)
        border = self.addRect(QRectF(left, top, w, h), border_pen)
        border.setZValue(Z_AXES)
        self._reference_items.append(border)

        if geo.axes is not None:
            axis_pen = QPen(QColor("#FF4D4D"), 2)
            for seg in (geo.axes.x_axis, geo.axes.y_axis):
                it = self.addLine(*seg, axis_pen)
                it.setZValue(Z_AXES)
                self._reference_items.append(it)

        if geo.coords is not None:
            font = QFont("monospace")
            font.setPixelSize(int(clamp(self.settings.coords.font_px, 4, 16)))
            for lab in geo.coords.xs:
                self._add_coord_label(lab.x, lab.y, lab.value, font, centered=True)
            for lab in geo.coords.ys:
                self._add_coord_label(lab.x, lab.y, lab.value, font, centered=False)

    def _add_coord_label(self, x: float, y: float, value: float, font: QFont, centered: bool) -> None:
        text = QGraphicsSimpleTextItem(f"{value:g}")
        text.setFont(font)
        text.setBrush(QBrush(QColor("#333333")))
        br = text.boundingRect()
        tx = x - br.width() / 2 if centered else x
        ty = y - br.height() / 2
        text.setPos(tx, ty)

        box = QGraphicsRectItem(QRectF(tx - 3, ty - 2, br.width() + 6, br.height() + 4))
        box.setBrush(QBrush(QColor(255, 255, 255, 191)))
        box.setPen(QPen(Qt.PenStyle.NoPen))
        for z, it in ((Z_COORDS, box), (Z_COORDS + 1, text)):
            it.setZValue(z)
            self.addItem(it)
            self._reference_items.append(it)

    # ── Area layer ────────────────────────────────────

    def render_areas(self, areas: List[AreaRenderInfo], zoom: float) -> None:
        """Redraw every area polygon with its label and summary coordinates."""
        for it in self._area_items:
            self.removeItem(it)
        self._area_items = []

        colors = self.settings.areas
        label_font = QFont()
        label_font.setPixelSize(int(clamp(18 / zoom, 12, 22)))
        label_font.setBold(True)
        coord_font = QFont("monospace")
        coord_font.setPixelSize(int(clamp(16 / zoom, 11, 20)))

        for info in areas:
            single = info.provenance == Provenance.SINGLE
            stroke = _qcolor(colors.single_stroke if single else colors.batch_stroke, QColor("black"))
            fill = _qcolor(colors.single_fill if single else colors.batch_fill, QColor(0, 0, 0, 0))
            if info.selected:
                stroke = _qcolor(colors.selected_stroke, stroke)

            poly = QGraphicsPolygonItem(QPolygonF([QPointF(p.x, p.y) for p in info.polygon_px]))
            poly.setPen(QPen(stroke, 3 if info.selected else 2))
            poly.setBrush(QBrush(fill))
            poly.setData(AREA_ID_KEY, info.id)
            poly.setZValue(Z_AREAS)
            self.addItem(poly)
            self._area_items.append(poly)

            label = QGraphicsSimpleTextItem(info.label)
            label.setFont(label_font)
            label.setBrush(QBrush(stroke))
            label.setPos(info.label_px.x, info.label_px.y)
            label.setZValue(Z_LABELS)
            self.addItem(label)
            self._area_items.append(label)

            summary = QGraphicsSimpleTextItem(f"({info.summary_mm[0]}, {info.summary_mm[1]})")
            summary.setFont(coord_font)
            summary.setBrush(QBrush(stroke))
            br = summary.boundingRect()
            summary.setPos(info.interior_px.x - br.width() / 2, info.interior_px.y - br.height() / 2)
            summary.setZValue(Z_LABELS)
            self.addItem(summary)
            self._area_items.append(summary)

        if not self.areas_visible:
            for it in self._area_items:
                it.setVisible(False)

    def area_id_at(self, pos: QPointF) -> Optional[str]:
        """Id of the topmost area polygon under scene position *pos*."""
        for it in self.items(pos):
            if not it.isVisible():
                continue
            area_id = it.data(AREA_ID_KEY)
            if isinstance(area_id, str) and area_id:
                return area_id
        return None


class AreaView(QGraphicsView):
    """
    Scrollable workspace view.

    Mouse behaviour:
    - Left press on an area starts a drag, elsewhere clears the selection
    - Move while dragging follows the pointer; release or leave ends it
    - Right click on an area opens the edit menu callback
    - Wheel zooms between the configured limits
    """

    def __init__(self, scene: AreaScene, session: InteractiveEditSession, settings: AppSettings,
                 on_changed: Optional[Callable[[], None]] = None,
                 on_area_menu: Optional[Callable[[str, QPointF], None]] = None,
                 parent=None):
        super().__init__(scene, parent)
        self.session = session
        self.settings = settings
        self.on_changed = on_changed
        self.on_area_menu = on_area_menu
        self.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setMouseTracking(True)

        self.horizontalScrollBar().valueChanged.connect(self._on_scrolled)
        self.verticalScrollBar().valueChanged.connect(self._on_scrolled)

    # ── Rendering ─────────────────────────────────────

    def area_scene(self) -> AreaScene:
        return self.scene()

    def refresh(self, reference: bool = True) -> None:
        """Rebuild the area layer, and the reference layer when *reference*."""
        geo = build_scene(self.session.store, self.session.mapper, self.settings, self.session.selected_id)
        if reference:
            self.area_scene().render_reference(geo)
        self.area_scene().render_areas(geo.areas, self.session.view.zoom)

    def _notify(self, reference: bool = False) -> None:
        self.refresh(reference=reference)
        if self.on_changed:
            self.on_changed()

    # ── View state ────────────────────────────────────

    def center_scroll(self) -> None:
        """Scroll so the viewport sits in the middle of the surface."""
        h = self.horizontalScrollBar()
        v = self.verticalScrollBar()
        h.setValue((h.minimum() + h.maximum()) // 2)
        v.setValue((v.minimum() + v.maximum()) // 2)

    def _on_scrolled(self, _value: int) -> None:
        self.session.set_view(self.session.view.with_changes(
            scroll_left_px=float(self.horizontalScrollBar().value()),
            scroll_top_px=float(self.verticalScrollBar().value()),
        ))
        self._notify(reference=True)

    def set_zoom(self, zoom: float) -> None:
        vs = self.settings.view
        zoom = clamp(zoom, vs.zoom_min, vs.zoom_max)
        if zoom == self.session.view.zoom:
            return
        trace(f"zoom -> {zoom:.3f}", "VIEW")
        self.session.set_view(self.session.view.with_changes(zoom=zoom))
        self._notify(reference=True)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        vp = self.viewport()
        if vp.width() > 0 and vp.height() > 0:
            self.session.set_view(self.session.view.with_changes(
                viewport_width_px=float(vp.width()),
                viewport_height_px=float(vp.height()),
            ))
            self.refresh(reference=True)

    def wheelEvent(self, event):
        """Zoom with mouse wheel."""
        delta = event.angleDelta().y()
        factor = self.settings.view.wheel_factor
        zoom = self.session.view.zoom
        self.set_zoom(zoom * factor if delta > 0 else zoom / factor)
        event.accept()

    # ── Pointer input ─────────────────────────────────

    def mousePressEvent(self, event):
        pos = self.mapToScene(event.position().toPoint())
        area_id = self.area_scene().area_id_at(pos)

        if event.button() == Qt.MouseButton.RightButton:
            if area_id and self.on_area_menu:
                self.on_area_menu(area_id, event.globalPosition())
                self._notify()
            event.accept()
            return

        if event.button() == Qt.MouseButton.LeftButton:
            if area_id:
                self.session.begin_drag(area_id, (pos.x(), pos.y()))
                trace(f"drag start {area_id}", "DRAG")
            else:
                self.session.clear_selection()
            self._notify()
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.session.state == EditState.DRAGGING:
            pos = self.mapToScene(event.position().toPoint())
            trace(f"drag move ({pos.x():.1f}, {pos.y():.1f})", "MOVE")
            self.session.update_drag((pos.x(), pos.y()))
            self._notify()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self.session.state == EditState.DRAGGING:
            self.session.end_drag()
            trace("drag end", "DRAG")
            self._notify()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.session.end_drag()
        super().leaveEvent(event)
