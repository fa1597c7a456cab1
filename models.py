"""
models.py

Data models and constants for the AreaSync workspace editor.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Generic, NamedTuple, Optional, Tuple, TypeVar


# ----------------------------
# Constants
# ----------------------------

LABEL_MAX_CHARS = 5
DEFAULT_LABEL = "AREA"
MIN_POLYGON_POINTS = 3
MAX_SURFACED_ERRORS = 4  # per-line messages shown for a failing document


# ----------------------------
# Geometry values
# ----------------------------

class Point(NamedTuple):
    """A 2D point.

    Used for both mm-space (Y-up) and px-space (Y-down) values; the unit
    is whatever the producing function documents.
    """
    x: float
    y: float


@dataclass(frozen=True)
class WorkspaceBounds:
    """Axis-aligned workspace rectangle in millimetres."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_workspace(cls, width_mm: float, height_mm: float,
                       origin_x_mm: float = 0.0, origin_y_mm: float = 0.0) -> "WorkspaceBounds":
        """Build bounds centred on the workspace origin.

        Raises:
            ValueError: If width or height is not strictly positive.
        """
        if not width_mm > 0 or not height_mm > 0:
            raise ValueError(f"workspace size must be > 0, got {width_mm} x {height_mm}")
        half_w = width_mm / 2
        half_h = height_mm / 2
        return cls(
            min_x=origin_x_mm - half_w,
            max_x=origin_x_mm + half_w,
            min_y=origin_y_mm - half_h,
            max_y=origin_y_mm + half_h,
        )

    def clamp(self, point: Point) -> Point:
        """Clamp each coordinate of *point* into the rectangle independently."""
        return Point(
            max(self.min_x, min(self.max_x, point.x)),
            max(self.min_y, min(self.max_y, point.y)),
        )

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y


# ----------------------------
# Areas
# ----------------------------

class Provenance(str, Enum):
    """Where an area came from."""
    SINGLE = "single"   # single-point creation form
    BATCH = "batch"     # full re-parse of the text description


@dataclass(frozen=True)
class Area:
    """A labelled polygon with a stable identity.

    Instances are immutable; the store swaps in new instances on every
    mutation so snapshots held by an edit gesture never change under it.
    """
    id: str
    label: str
    points: Tuple[Point, ...]
    provenance: Provenance = Provenance.BATCH


def truncate_label(label: Optional[str]) -> str:
    """Trim *label* and keep at most ``LABEL_MAX_CHARS`` characters.

    Returns an empty string for blank input.
    """
    s = (label or "").strip()
    return s[:LABEL_MAX_CHARS]


def display_label(label: Optional[str]) -> str:
    """Like :func:`truncate_label` but blank input becomes ``DEFAULT_LABEL``."""
    return truncate_label(label) or DEFAULT_LABEL


def new_area_id() -> str:
    """Generate a fresh opaque area id."""
    return uuid.uuid4().hex


# ----------------------------
# Results and errors
# ----------------------------

class ErrorKind(str, Enum):
    """Discriminator for recoverable, user-facing failures."""
    EMPTY_INPUT = "EmptyInput"
    INVALID_NUMERIC_FORMAT = "InvalidNumericFormat"
    MISSING_SEPARATOR = "MissingSeparator"
    MISSING_POINTS = "MissingPoints"
    INSUFFICIENT_POINTS = "InsufficientPoints"
    INVALID_DIMENSION = "InvalidDimension"
    NO_VALID_AREAS = "NoValidAreas"
    UNKNOWN_AREA = "UnknownArea"
    INVALID_STATE = "InvalidState"


@dataclass(frozen=True)
class AreaError:
    """A recoverable error with a message suitable for showing to the user."""
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success/failure outcome of a fallible operation.

    Exactly one of ``value`` / ``error`` is meaningful; check ``ok`` first.
    """
    value: Optional[T] = None
    error: Optional[AreaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=AreaError(kind, message))
