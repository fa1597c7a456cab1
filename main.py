"""
main.py

AreaSync - Main Application

PyQt6 application for editing 2D workspace areas with:
- Text description (``Label,(x,y),(x,y),...`` per line) applied on demand
- Drag-to-move with grid snapping
- Right-click edit of an area's label and summary point
- Rectangle creation from a centre point and size

Usage:
    python main.py

Dependencies:
    pip install PyQt6 platformdirs tomli-w

Environment:
    AREASYNC_TRACE=0|1|2 (trace verbosity, 2 includes pointer moves)
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtWidgets import QApplication, QDockWidget, QMainWindow

import debug_trace
from areas.document import AreaDocument
from areas.store import AreaStore
from canvas.session import InteractiveEditSession
from canvas.view import AreaScene, AreaView
from debug_trace import close_log, trace, trace_call, trace_exception
from editor.area_dock import AreaTextDock
from geometry.mapper import ViewConfig
from properties.area_dialog import AreaEditDialog
from properties.view_panel import ViewPanel
from settings import SettingsManager, get_settings

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window for AreaSync.

    Args:
        settings_manager: The SettingsManager instance for application settings.
    """

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        self.settings = settings_manager.settings
        self.setWindowTitle("AreaSync - Workspace Area Editor")

        # Model
        self.store = AreaStore()
        self.document = AreaDocument(self.settings.areas.initial_text)
        self.session = InteractiveEditSession(
            self.store,
            ViewConfig.from_settings(self.settings),
            grid=self.settings.grid,
            document=self.document,
        )

        # Left panel: workspace, grid, coordinates, zoom
        self.panel = ViewPanel(self.settings)
        self.panel_dock = self._wrap_dock("View", self.panel)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.panel_dock)

        # Scene and view
        self.scene = AreaScene(self.settings)
        self.view = AreaView(
            self.scene,
            self.session,
            self.settings,
            on_changed=self._update_status,
            on_area_menu=self._open_area_menu,
        )
        self.setCentralWidget(self.view)

        # Right dock: description editor and add-area form
        self.area_dock = AreaTextDock(self.settings.areas, self)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.area_dock)

        # Connect signals
        self.panel.changed.connect(self._on_panel_changed)
        self.panel.zoom_changed.connect(self.view.set_zoom)
        self.area_dock.apply_requested.connect(self.apply_document)
        self.area_dock.add_requested.connect(self.add_area)
        self.area_dock.paint_toggled.connect(self._on_paint_toggled)

        self.apply_document()
        self.statusBar().showMessage("Edit the description and Apply, or drag areas on the canvas.")

    def _wrap_dock(self, title: str, widget) -> QDockWidget:
        dock = QDockWidget(title, self)
        dock.setWidget(widget)
        return dock

    # ── Document ──────────────────────────────────────

    @trace_call("DOC")
    def apply_document(self) -> None:
        """Replace every area with the parsed description text."""
        self.document.set_text(self.area_dock.get_text())
        parsed = self.session.apply_document()
        self.area_dock.set_document_error(self.document.error_message)
        trace(f"applied document: {len(parsed.areas)} areas, {len(parsed.errors)} errors", "DOC")
        self.view.refresh(reference=False)
        self._update_status()

    def add_area(self, label: str, xy_text: str, width_mm: float, height_mm: float) -> None:
        """Create a rectangle area from the add-area form."""
        self.document.set_text(self.area_dock.get_text())
        result = self.session.create_area(label, xy_text, width_mm, height_mm)
        if not result.ok:
            self.area_dock.set_add_error(result.error.message)
            return
        self.area_dock.set_add_error("")
        self.area_dock.set_text(self.document.text)
        self.view.refresh(reference=False)
        self._update_status()

    # ── Area menu ─────────────────────────────────────

    def _open_area_menu(self, area_id: str, global_pos: QPointF) -> None:
        draft = self.session.open_menu(area_id)
        if not draft.ok:
            self.statusBar().showMessage(draft.error.message)
            return
        self.view.refresh(reference=False)

        dlg = AreaEditDialog(draft.value, self._apply_area_edit, self._delete_area, self)
        dlg.move(global_pos.toPoint())
        dlg.exec()

    def _apply_area_edit(self, area_id: str, label: str, xy_text: str):
        grid = self.settings.grid
        result = self.session.apply_menu_edit(
            area_id, label, xy_text, grid.snap_enabled, grid.step_mm, self.session.bounds,
        )
        self.view.refresh(reference=False)
        self._update_status()
        return result

    def _delete_area(self, area_id: str) -> None:
        self.session.delete_area(area_id)
        self.view.refresh(reference=False)
        self._update_status()

    # ── View controls ─────────────────────────────────

    def _on_panel_changed(self) -> None:
        self.panel.write_settings(self.settings)
        ws = self.settings.workspace
        self.session.set_view(self.session.view.with_changes(
            workspace_width_mm=ws.width_mm,
            workspace_height_mm=ws.height_mm,
            origin_x_mm=ws.origin_x_mm,
            origin_y_mm=ws.origin_y_mm,
        ))
        self.view.refresh(reference=True)
        self._update_status()

    def _on_paint_toggled(self, checked: bool) -> None:
        self.scene.set_areas_visible(checked)

    def _update_status(self) -> None:
        mapper = self.session.mapper
        min_x, max_x, min_y, max_y = mapper.visible_rect_mm()
        self.panel.show_status(min_x, max_x, min_y, max_y, mapper.scale)
        self.panel.set_zoom(self.session.view.zoom)


def main():
    """Application entry point."""
    debug_trace.configure()
    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)

    # Load settings (use singleton to ensure single instance)
    trace("Loading settings", "MAIN")
    settings_manager = get_settings()
    trace(f"Settings file: {settings_manager.get_settings_path()}", "MAIN")

    # Ensure settings file has all sections
    settings_manager.ensure_file_complete()

    # Save settings on application quit
    def save_on_quit():
        trace("Saving settings on quit", "MAIN")
        settings_manager.save()
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    trace("Creating MainWindow", "MAIN")
    w = MainWindow(settings_manager)
    w.resize(1550, 980)
    trace("Showing MainWindow", "MAIN")
    w.show()
    w.view.center_scroll()
    trace("Entering event loop", "MAIN")
    sys.exit(app.exec())


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        main()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
