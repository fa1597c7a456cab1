"""
editor package

Dock widget holding the area description text and the add-area form.
"""

from editor.area_dock import AreaTextDock

__all__ = ["AreaTextDock"]
