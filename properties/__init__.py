"""
properties package

View-settings panel and the per-area edit dialog.
"""

from properties.view_panel import ViewPanel
from properties.area_dialog import AreaEditDialog

__all__ = ["ViewPanel", "AreaEditDialog"]
