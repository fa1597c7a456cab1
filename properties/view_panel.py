"""
properties/view_panel.py

Left-hand panel: workspace size and origin, grid and snapping, coordinate
labels and zoom.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from settings import AppSettings, WorkspaceSettings

ZOOM_SLIDER_SCALE = 10  # slider ticks per 1.0 zoom


class ViewPanel(QWidget):
    """Controls that change the view or workspace.

    Emits ``changed`` after any control is edited; the owner reads the
    new values back with :meth:`write_settings`.
    """

    changed = pyqtSignal()
    zoom_changed = pyqtSignal(float)

    def __init__(self, settings: AppSettings, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        # ── Workspace
        ws_box = QGroupBox("Workspace (mm)")
        ws_form = QFormLayout(ws_box)
        self.width_spin = self._spin(1, 1_000_000, settings.workspace.width_mm)
        self.height_spin = self._spin(1, 1_000_000, settings.workspace.height_mm)
        self.origin_x_spin = self._spin(-1_000_000, 1_000_000, settings.workspace.origin_x_mm)
        self.origin_y_spin = self._spin(-1_000_000, 1_000_000, settings.workspace.origin_y_mm)
        ws_form.addRow("workspace_x_mm", self.width_spin)
        ws_form.addRow("workspace_y_mm", self.height_spin)
        ws_form.addRow("origin_x_mm", self.origin_x_spin)
        ws_form.addRow("origin_y_mm", self.origin_y_spin)
        self.range_label = QLabel("")
        self.range_label.setStyleSheet("font-family: monospace; color: #555;")
        ws_form.addRow(self.range_label)
        self.reset_origin_btn = QPushButton("Reset origin")
        self.reset_origin_btn.clicked.connect(self._reset_origin)
        ws_form.addRow(self.reset_origin_btn)
        layout.addWidget(ws_box)

        # ── Grid
        grid_box = QGroupBox("Grid")
        grid_form = QFormLayout(grid_box)
        self.grid_spin = self._spin(1, 100_000, settings.grid.step_mm)
        self.major_spin = self._spin(1, 100_000, settings.grid.major_step_mm)
        self.snap_check = QCheckBox("Snap to grid")
        self.snap_check.setChecked(settings.grid.snap_enabled)
        self.snap_check.toggled.connect(self.changed.emit)
        grid_form.addRow("grid_mm", self.grid_spin)
        grid_form.addRow("major_grid_mm", self.major_spin)
        grid_form.addRow(self.snap_check)
        layout.addWidget(grid_box)

        # ── Coordinates
        coord_box = QGroupBox("Coordinates")
        coord_form = QFormLayout(coord_box)
        self.coords_check = QCheckBox("Show numbers")
        self.coords_check.setChecked(settings.coords.visible)
        self.coords_check.toggled.connect(self.changed.emit)
        self.coord_step_spin = QSpinBox()
        self.coord_step_spin.setRange(10, 100_000)
        self.coord_step_spin.setSingleStep(10)
        self.coord_step_spin.setValue(int(settings.coords.step_mm))
        self.coord_step_spin.valueChanged.connect(self.changed.emit)
        self.coord_font_spin = QSpinBox()
        self.coord_font_spin.setRange(4, 16)
        self.coord_font_spin.setValue(int(settings.coords.font_px))
        self.coord_font_spin.valueChanged.connect(self.changed.emit)
        coord_form.addRow(self.coords_check)
        coord_form.addRow("step_mm", self.coord_step_spin)
        coord_form.addRow("coord_font_px", self.coord_font_spin)
        layout.addWidget(coord_box)

        # ── Zoom
        view_box = QGroupBox("View")
        view_form = QFormLayout(view_box)
        self.zoom_slider = QSlider(Qt.Orientation.Horizontal)
        self.zoom_slider.setRange(
            int(settings.view.zoom_min * ZOOM_SLIDER_SCALE),
            int(settings.view.zoom_max * ZOOM_SLIDER_SCALE),
        )
        self.zoom_slider.setValue(int(settings.view.zoom_min * ZOOM_SLIDER_SCALE))
        self.zoom_slider.valueChanged.connect(
            lambda v: self.zoom_changed.emit(v / ZOOM_SLIDER_SCALE)
        )
        self.scale_label = QLabel("")
        self.scale_label.setStyleSheet("font-family: monospace; color: #555;")
        view_form.addRow("zoom", self.zoom_slider)
        view_form.addRow(self.scale_label)
        layout.addWidget(view_box)

        layout.addStretch()

    def _spin(self, lo: float, hi: float, value: float) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setDecimals(1)
        spin.setRange(lo, hi)
        spin.setValue(value)
        spin.valueChanged.connect(self.changed.emit)
        return spin

    def _reset_origin(self) -> None:
        defaults = WorkspaceSettings()
        self.origin_x_spin.setValue(defaults.origin_x_mm)
        self.origin_y_spin.setValue(defaults.origin_y_mm)

    def write_settings(self, settings: AppSettings) -> None:
        """Copy the control values into *settings*."""
        settings.workspace.width_mm = self.width_spin.value()
        settings.workspace.height_mm = self.height_spin.value()
        settings.workspace.origin_x_mm = self.origin_x_spin.value()
        settings.workspace.origin_y_mm = self.origin_y_spin.value()
        settings.grid.step_mm = self.grid_spin.value()
        settings.grid.major_step_mm = self.major_spin.value()
        settings.grid.snap_enabled = self.snap_check.isChecked()
        settings.coords.visible = self.coords_check.isChecked()
        settings.coords.step_mm = self.coord_step_spin.value()
        settings.coords.font_px = self.coord_font_spin.value()

    def set_zoom(self, zoom: float) -> None:
        """Move the slider without re-emitting ``zoom_changed``."""
        self.zoom_slider.blockSignals(True)
        self.zoom_slider.setValue(int(round(zoom * ZOOM_SLIDER_SCALE)))
        self.zoom_slider.blockSignals(False)

    def show_status(self, min_x: float, max_x: float, min_y: float, max_y: float, scale: float) -> None:
        self.range_label.setText(f"X range: [{min_x:g}, {max_x:g}]\nY range: [{min_y:g}, {max_y:g}]")
        self.scale_label.setText(f"scale(px/mm): {scale:.6f}")
