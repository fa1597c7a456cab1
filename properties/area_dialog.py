"""
properties/area_dialog.py

Context-menu editor for one area: rename it and move its summary point.
"""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from canvas.session import MenuDraft
from models import LABEL_MAX_CHARS, Result


class AreaEditDialog(QDialog):
    """Label + ``(x, y)`` editor with an inline error line.

    Args:
        draft: Initial field values from ``InteractiveEditSession.open_menu``.
        on_apply: Called with ``(area_id, label, xy_text)``; its failure
            message is shown inline and the dialog stays open.
        on_delete: Called with the area id; closes the dialog.
        parent: Parent widget.
    """

    def __init__(self, draft: MenuDraft,
                 on_apply: Callable[[str, str, str], Result],
                 on_delete: Optional[Callable[[str], None]] = None,
                 parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit area")
        self.area_id = draft.area_id
        self._on_apply = on_apply
        self._on_delete = on_delete

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self.label_edit = QLineEdit(draft.label)
        self.label_edit.setMaxLength(LABEL_MAX_CHARS)
        self.xy_edit = QLineEdit(draft.xy_text)
        self.xy_edit.setPlaceholderText("(x, y) in mm")
        form.addRow("Label", self.label_edit)
        form.addRow("Point (mm)", self.xy_edit)
        layout.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #C0392B;")
        self.error_label.setWordWrap(True)
        layout.addWidget(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        self.apply_btn = QPushButton("Apply")
        self.delete_btn = QPushButton("Delete")
        buttons.addButton(self.apply_btn, QDialogButtonBox.ButtonRole.ApplyRole)
        buttons.addButton(self.delete_btn, QDialogButtonBox.ButtonRole.DestructiveRole)
        self.apply_btn.clicked.connect(self.apply)
        self.delete_btn.clicked.connect(self.delete)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def apply(self) -> None:
        result = self._on_apply(self.area_id, self.label_edit.text(), self.xy_edit.text())
        self.error_label.setText("" if result.ok else result.error.message)

    def delete(self) -> None:
        if self._on_delete:
            self._on_delete(self.area_id)
        self.accept()
