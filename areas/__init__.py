"""
areas package

Area description codec, the in-memory area store and the text document.
"""

from areas.codec import (
    DocumentParse,
    LineError,
    ParsedArea,
    format_area_line,
    format_document,
    parse_area_line,
    parse_document,
    parse_point,
)
from areas.store import AreaStore
from areas.document import AreaDocument

__all__ = [
    "DocumentParse",
    "LineError",
    "ParsedArea",
    "format_area_line",
    "format_document",
    "parse_area_line",
    "parse_document",
    "parse_point",
    "AreaStore",
    "AreaDocument",
]
