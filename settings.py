"""
settings.py

Persistent settings management for AreaSync.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/areasync/settings.toml
    - macOS: ~/Library/Application Support/areasync/settings.toml
    - Linux: ~/.config/areasync/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "areasync"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Workspace Settings
# =============================================================================

@dataclass
class WorkspaceSettings:
    """Physical workspace extent and origin.

    Defaults:
        width_mm: 5000.0
        height_mm: 5200.0
        origin_x_mm: -123.0
        origin_y_mm: 0.0
    """
    width_mm: float = 5000.0      # Default: 5000 mm
    height_mm: float = 5200.0     # Default: 5200 mm
    origin_x_mm: float = -123.0   # Default: -123 mm (robot centre)
    origin_y_mm: float = 0.0      # Default: 0 mm


# =============================================================================
# Grid Settings
# =============================================================================

@dataclass
class GridSettings:
    """Reference grid and snapping.

    Defaults:
        step_mm: 10.0
        major_step_mm: 50.0
        snap_enabled: True
    """
    step_mm: float = 10.0         # Default: 10 mm
    major_step_mm: float = 50.0   # Default: 50 mm
    snap_enabled: bool = True     # Default: True

    @property
    def snap_step(self) -> float:
        """Step applied to moves, or 0 when snapping is off."""
        return self.step_mm if self.snap_enabled else 0.0


# =============================================================================
# Coordinate Label Settings
# =============================================================================

@dataclass
class CoordLabelSettings:
    """Coordinate numbers along the viewport edges.

    Defaults:
        visible: True
        step_mm: 200
        font_px: 13
        margin_px: 12.0
    """
    visible: bool = True          # Default: True
    step_mm: int = 200            # Default: 200 mm (rounded to a multiple of 10)
    font_px: int = 13             # Default: 13 px (clamped to 4..16)
    margin_px: float = 12.0       # Default: 12 px from the viewport edge


# =============================================================================
# View Settings
# =============================================================================

@dataclass
class ViewSettings:
    """Viewport, scroll surface and zoom.

    Defaults:
        viewport_px: 1600.0
        surface_px: 4200.0
        padding_px: 16.0
        zoom_min: 1.0
        zoom_max: 4.0
        wheel_factor: 1.15
    """
    viewport_px: float = 1600.0   # Default: 1600 px square viewport
    surface_px: float = 4200.0    # Default: 4200 px square scroll surface
    padding_px: float = 16.0      # Default: 16 px fit margin
    zoom_min: float = 1.0         # Default: 1.0
    zoom_max: float = 4.0         # Default: 4.0
    wheel_factor: float = 1.15    # Default: 1.15 (15% per scroll step)


# =============================================================================
# Area Settings
# =============================================================================

DEFAULT_AREA_TEXT = (
    "Robot,(-623,-425),(-623,425),(377,425),(377,-425)\n"
    "RRight,(-623,425),(-623,1625),(577,1625),(577,425)\n"
    "RLeft,(-623,-425),(-623,-1625),(577,-1625),(577,-425)"
)


@dataclass
class AreaSettings:
    """Area creation defaults and colours.

    Defaults:
        label_pad_mm: 20.0
        default_label: "B1"
        default_xy: "(417, -635)"
        default_width_mm: 150.0
        default_height_mm: 300.0
        single_fill: "#2B6CFF1A"
        batch_fill: "#FF8C001A"
        single_stroke: "#2B6CFF"
        batch_stroke: "#FF8C00"
        selected_stroke: "#0078D7"
        initial_text: three sample areas
    """
    label_pad_mm: float = 20.0           # Default: 20 mm inset for the label anchor
    default_label: str = "B1"            # Default: "B1"
    default_xy: str = "(417, -635)"      # Default: "(417, -635)"
    default_width_mm: float = 150.0      # Default: 150 mm
    default_height_mm: float = 300.0     # Default: 300 mm
    single_fill: str = "#2B6CFF1A"       # Default: translucent blue
    batch_fill: str = "#FF8C001A"        # Default: translucent orange
    single_stroke: str = "#2B6CFF"       # Default: blue
    batch_stroke: str = "#FF8C00"        # Default: orange
    selected_stroke: str = "#0078D7"     # Default: selection blue
    initial_text: str = DEFAULT_AREA_TEXT


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        workspace: Workspace extent and origin.
        grid: Grid lines and snapping.
        coords: Coordinate labels.
        view: Viewport and zoom.
        areas: Area defaults and colours.
    """
    workspace: WorkspaceSettings = field(default_factory=WorkspaceSettings)
    grid: GridSettings = field(default_factory=GridSettings)
    coords: CoordLabelSettings = field(default_factory=CoordLabelSettings)
    view: ViewSettings = field(default_factory=ViewSettings)
    areas: AreaSettings = field(default_factory=AreaSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Override for the config directory (tests use a tmp dir).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        self.settings_dir = Path(settings_dir) if settings_dir else Path(platformdirs.user_config_dir(app_name))
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except (OSError, tomllib.TOMLDecodeError, AttributeError, TypeError) as e:
            # If file is corrupted or invalid, return defaults
            log.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # Workspace section
        ws = data.get("workspace", {})
        settings.workspace.width_mm = ws.get("width_mm", settings.workspace.width_mm)
        settings.workspace.height_mm = ws.get("height_mm", settings.workspace.height_mm)
        settings.workspace.origin_x_mm = ws.get("origin_x_mm", settings.workspace.origin_x_mm)
        settings.workspace.origin_y_mm = ws.get("origin_y_mm", settings.workspace.origin_y_mm)

        # Grid section
        grid = data.get("grid", {})
        settings.grid.step_mm = grid.get("step_mm", settings.grid.step_mm)
        settings.grid.major_step_mm = grid.get("major_step_mm", settings.grid.major_step_mm)
        settings.grid.snap_enabled = grid.get("snap_enabled", settings.grid.snap_enabled)

        # Coordinate label section
        coords = data.get("coords", {})
        settings.coords.visible = coords.get("visible", settings.coords.visible)
        settings.coords.step_mm = coords.get("step_mm", settings.coords.step_mm)
        settings.coords.font_px = coords.get("font_px", settings.coords.font_px)
        settings.coords.margin_px = coords.get("margin_px", settings.coords.margin_px)

        # View section
        view = data.get("view", {})
        settings.view.viewport_px = view.get("viewport_px", settings.view.viewport_px)
        settings.view.surface_px = view.get("surface_px", settings.view.surface_px)
        settings.view.padding_px = view.get("padding_px", settings.view.padding_px)
        settings.view.zoom_min = view.get("zoom_min", settings.view.zoom_min)
        settings.view.zoom_max = view.get("zoom_max", settings.view.zoom_max)
        settings.view.wheel_factor = view.get("wheel_factor", settings.view.wheel_factor)

        # Areas section
        areas = data.get("areas", {})
        settings.areas.label_pad_mm = areas.get("label_pad_mm", settings.areas.label_pad_mm)
        settings.areas.default_label = areas.get("default_label", settings.areas.default_label)
        settings.areas.default_xy = areas.get("default_xy", settings.areas.default_xy)
        settings.areas.default_width_mm = areas.get("default_width_mm", settings.areas.default_width_mm)
        settings.areas.default_height_mm = areas.get("default_height_mm", settings.areas.default_height_mm)
        settings.areas.initial_text = areas.get("initial_text", settings.areas.initial_text)
        if "colors" in areas:
            c = areas["colors"]
            settings.areas.single_fill = c.get("single_fill", settings.areas.single_fill)
            settings.areas.batch_fill = c.get("batch_fill", settings.areas.batch_fill)
            settings.areas.single_stroke = c.get("single_stroke", settings.areas.single_stroke)
            settings.areas.batch_stroke = c.get("batch_stroke", settings.areas.batch_stroke)
            settings.areas.selected_stroke = c.get("selected_stroke", settings.areas.selected_stroke)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)
        log.debug("Saved settings to %s", self.settings_file)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "workspace": {
                "width_mm": s.workspace.width_mm,
                "height_mm": s.workspace.height_mm,
                "origin_x_mm": s.workspace.origin_x_mm,
                "origin_y_mm": s.workspace.origin_y_mm,
            },
            "grid": {
                "step_mm": s.grid.step_mm,
                "major_step_mm": s.grid.major_step_mm,
                "snap_enabled": s.grid.snap_enabled,
            },
            "coords": {
                "visible": s.coords.visible,
                "step_mm": s.coords.step_mm,
                "font_px": s.coords.font_px,
                "margin_px": s.coords.margin_px,
            },
            "view": {
                "viewport_px": s.view.viewport_px,
                "surface_px": s.view.surface_px,
                "padding_px": s.view.padding_px,
                "zoom_min": s.view.zoom_min,
                "zoom_max": s.view.zoom_max,
                "wheel_factor": s.view.wheel_factor,
            },
            "areas": {
                "label_pad_mm": s.areas.label_pad_mm,
                "default_label": s.areas.default_label,
                "default_xy": s.areas.default_xy,
                "default_width_mm": s.areas.default_width_mm,
                "default_height_mm": s.areas.default_height_mm,
                "initial_text": s.areas.initial_text,
                "colors": {
                    "single_fill": s.areas.single_fill,
                    "batch_fill": s.areas.batch_fill,
                    "single_stroke": s.areas.single_stroke,
                    "batch_stroke": s.areas.batch_stroke,
                    "selected_stroke": s.areas.selected_stroke,
                },
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
