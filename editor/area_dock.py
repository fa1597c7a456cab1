"""
editor/area_dock.py

Dock widget with the area description editor and the add-area form.
"""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QCheckBox,
    QDockWidget,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from models import LABEL_MAX_CHARS
from settings import AreaSettings


class AreaTextDock(QDockWidget):
    """
    Right-hand dock:
    - editable ``Label,(x,y),...`` description with Apply and an error line
    - "Add area" form (label, centre, width, height)
    - show/hide toggle for the painted areas
    """

    apply_requested = pyqtSignal()
    add_requested = pyqtSignal(str, str, float, float)
    paint_toggled = pyqtSignal(bool)

    def __init__(self, defaults: AreaSettings, parent=None):
        super().__init__("Areas", parent)
        w = QWidget()
        self.setWidget(w)
        layout = QVBoxLayout(w)

        # ── Add-area form
        add_box = QGroupBox("Add area")
        form = QFormLayout(add_box)
        self.label_edit = QLineEdit(defaults.default_label)
        self.label_edit.setMaxLength(LABEL_MAX_CHARS)
        self.xy_edit = QLineEdit(defaults.default_xy)
        self.xy_edit.setPlaceholderText("(x, y) in mm")
        self.width_spin = self._dimension_spin(defaults.default_width_mm)
        self.height_spin = self._dimension_spin(defaults.default_height_mm)
        form.addRow("Label", self.label_edit)
        form.addRow("Centre (mm)", self.xy_edit)
        form.addRow("Width (mm)", self.width_spin)
        form.addRow("Height (mm)", self.height_spin)
        self.add_btn = QPushButton("Add")
        self.add_btn.clicked.connect(self._emit_add)
        form.addRow(self.add_btn)
        self.add_error = self._error_label()
        form.addRow(self.add_error)
        layout.addWidget(add_box)

        # ── Description editor
        self.paint_check = QCheckBox("Paint areas")
        self.paint_check.setChecked(True)
        self.paint_check.toggled.connect(self.paint_toggled.emit)
        layout.addWidget(self.paint_check)

        self.text = QPlainTextEdit()
        mono = QFont("monospace")
        mono.setStyleHint(QFont.StyleHint.Monospace)
        self.text.setFont(mono)
        self.text.setPlaceholderText("Label,(x,y),(x,y),(x,y)  one area per line")
        self.text.setPlainText(defaults.initial_text)
        layout.addWidget(self.text, 1)

        row = QHBoxLayout()
        self.apply_btn = QPushButton("Apply")
        self.apply_btn.clicked.connect(self.apply_requested.emit)
        row.addWidget(self.apply_btn)
        row.addStretch()
        layout.addLayout(row)

        self.doc_error = self._error_label()
        layout.addWidget(self.doc_error)

    @staticmethod
    def _dimension_spin(value: float) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setDecimals(1)
        spin.setRange(0.0, 1_000_000.0)
        spin.setValue(value)
        return spin

    @staticmethod
    def _error_label() -> QLabel:
        label = QLabel("")
        label.setStyleSheet("color: #C0392B;")
        label.setWordWrap(True)
        return label

    def _emit_add(self) -> None:
        self.add_requested.emit(
            self.label_edit.text(),
            self.xy_edit.text(),
            self.width_spin.value(),
            self.height_spin.value(),
        )

    def get_text(self) -> str:
        return self.text.toPlainText()

    def set_text(self, text: str) -> None:
        self.text.setPlainText(text)

    def set_document_error(self, message: str) -> None:
        self.doc_error.setText(message)

    def set_add_error(self, message: str) -> None:
        self.add_error.setText(message)
