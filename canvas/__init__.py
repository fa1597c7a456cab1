"""
canvas package

Edit session, render bundles, and (in ``canvas.view``) the PyQt6 scene and
view that display them.  ``canvas.view`` is not imported here so the
session and presenter stay usable without a Qt installation.
"""

from canvas.session import DragState, EditState, InteractiveEditSession, MenuDraft
from canvas.presenter import AreaRenderInfo, SceneGeometry, build_render_info, build_scene

__all__ = [
    "DragState",
    "EditState",
    "InteractiveEditSession",
    "MenuDraft",
    "AreaRenderInfo",
    "SceneGeometry",
    "build_render_info",
    "build_scene",
]
