"""
areas/codec.py

Parse and format the line-oriented area description language::

    Label,(x1,y1),(x2,y2),(x3,y3)[,...]

One area per line, blank lines ignored.  Labels are trimmed and cut to
five characters (blank becomes ``AREA``); coordinates are signed
integers or decimals; every area needs at least three coordinate pairs.

Nothing here raises for bad input: every parser returns a
:class:`models.Result` carrying an :class:`models.ErrorKind`.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from models import (
    MAX_SURFACED_ERRORS,
    MIN_POLYGON_POINTS,
    Area,
    AreaError,
    ErrorKind,
    Point,
    Provenance,
    Result,
    display_label,
    new_area_id,
)
from utils import round_half_up

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════
# Patterns
# ═══════════════════════════════════════════════════════════

_NUMBER = r"[+-]?\d+(?:\.\d+)?"
_NUMBER_RE = re.compile(_NUMBER)
_TUPLE_RE = re.compile(rf"\(\s*{_NUMBER}\s*,\s*{_NUMBER}\s*\)")
_LINE_SPLIT_RE = re.compile(r"\r?\n")

ERROR_JOINER = " | "


# ═══════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ParsedArea:
    """Label and vertices of one successfully parsed line."""
    label: str
    points: Tuple[Point, ...]


@dataclass(frozen=True)
class LineError:
    """A failure on one document line.

    Attributes:
        line_number: 1-based index among the non-blank lines.
        error: Why the line was rejected.
    """
    line_number: int
    error: AreaError

    @property
    def message(self) -> str:
        return f"Line {self.line_number}: {self.error.message}"


@dataclass
class DocumentParse:
    """Outcome of :func:`parse_document`.

    Attributes:
        areas: One batch area per line that parsed.
        errors: One entry per line that did not.
    """
    areas: List[Area] = field(default_factory=list)
    errors: List[LineError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.areas)

    @property
    def error(self) -> Optional[AreaError]:
        """Document-level failure, set only when no line produced an area."""
        if self.areas:
            return None
        if not self.errors:
            return AreaError(ErrorKind.NO_VALID_AREAS, "No valid areas.")
        return AreaError(ErrorKind.NO_VALID_AREAS, self.summary())

    def summary(self) -> str:
        """The first ``MAX_SURFACED_ERRORS`` line messages, joined."""
        return ERROR_JOINER.join(e.message for e in self.errors[:MAX_SURFACED_ERRORS])


# ═══════════════════════════════════════════════════════════
# Parsing
# ═══════════════════════════════════════════════════════════

def parse_point(text: Optional[str]) -> Result[Point]:
    """Extract ``(x, y)`` from the first two numbers found anywhere in *text*.

    ``"(417, -635)"``, ``"417 -635"`` and ``"x=417 y=-635"`` all parse.
    """
    s = (text or "").strip()
    if not s:
        return Result.failure(ErrorKind.EMPTY_INPUT, "Empty.")

    matches = _NUMBER_RE.findall(s)
    if len(matches) < 2:
        return Result.failure(ErrorKind.INVALID_NUMERIC_FORMAT, "Invalid format (x,y).")

    x = float(matches[0])
    y = float(matches[1])
    if not math.isfinite(x) or not math.isfinite(y):
        return Result.failure(ErrorKind.INVALID_NUMERIC_FORMAT, "X or Y invalid.")
    return Result.success(Point(x, y))


def parse_area_line(line: Optional[str]) -> Result[ParsedArea]:
    """Parse one ``Label,(x,y),(x,y),(x,y)...`` line.

    Malformed tuples are skipped; the line fails only if fewer than
    ``MIN_POLYGON_POINTS`` valid tuples remain.
    """
    raw = (line or "").strip()
    if not raw:
        return Result.failure(ErrorKind.EMPTY_INPUT, "Empty line.")

    first_comma = raw.find(",")
    if first_comma == -1:
        return Result.failure(ErrorKind.MISSING_SEPARATOR, "Missing comma after the label.")

    label = display_label(raw[:first_comma])
    rest = raw[first_comma + 1:].strip()
    if not rest:
        return Result.failure(ErrorKind.MISSING_POINTS, "Missing points.")

    points: List[Point] = []
    for tup in _TUPLE_RE.findall(rest):
        parsed = parse_point(tup)
        if parsed.ok:
            points.append(parsed.value)

    if len(points) < MIN_POLYGON_POINTS:
        return Result.failure(
            ErrorKind.INSUFFICIENT_POINTS,
            f"An area needs at least {MIN_POLYGON_POINTS} (x,y) points.",
        )
    return Result.success(ParsedArea(label=label, points=tuple(points)))


def parse_document(text: Optional[str]) -> DocumentParse:
    """Parse every non-blank line of *text* independently.

    A bad line never stops the others from parsing.  Every good line
    becomes a fresh :class:`Area` with ``Provenance.BATCH``.
    """
    lines = [ln.strip() for ln in _LINE_SPLIT_RE.split(text or "")]
    lines = [ln for ln in lines if ln]

    result = DocumentParse()
    for i, line in enumerate(lines, start=1):
        parsed = parse_area_line(line)
        if not parsed.ok:
            result.errors.append(LineError(i, parsed.error))
            continue
        result.areas.append(Area(
            id=new_area_id(),
            label=parsed.value.label,
            points=parsed.value.points,
            provenance=Provenance.BATCH,
        ))

    log.debug("Parsed document: %d areas, %d errors", len(result.areas), len(result.errors))
    return result


# ═══════════════════════════════════════════════════════════
# Formatting
# ═══════════════════════════════════════════════════════════

def format_area_line(label: Optional[str], points: Sequence[Point]) -> str:
    """Serialize an area back to one description line.

    Coordinates are rounded half-up to integers; vertex order is kept.
    """
    tuples = ",".join(f"({round_half_up(x)},{round_half_up(y)})" for x, y in points)
    return f"{display_label(label)},{tuples}"


def format_document(areas: Iterable[Area]) -> str:
    """One :func:`format_area_line` per area, newline separated."""
    return "\n".join(format_area_line(a.label, a.points) for a in areas)
