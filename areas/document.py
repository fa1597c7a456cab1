"""
areas/document.py

The editable text description of all areas and its persisted error state.
"""

from __future__ import annotations

import logging
from typing import Optional

from areas.codec import DocumentParse, parse_document
from areas.store import AreaStore

log = logging.getLogger(__name__)


class AreaDocument:
    """Text shown in the description editor.

    ``error_message`` survives text edits; only :meth:`apply` replaces it.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.error_message = ""

    def set_text(self, text: Optional[str]) -> None:
        self.text = text or ""

    def append_line(self, line: str) -> None:
        """Append *line*, starting a new line only when text is present."""
        base = self.text.strip()
        self.text = f"{base}\n{line}" if base else line

    def apply(self, store: AreaStore) -> DocumentParse:
        """Parse the text and replace the store contents with the result.

        When no line parses the store is emptied and the document error
        becomes the message; otherwise any per-line errors are kept as a
        summary next to the applied areas.
        """
        parsed = parse_document(self.text)
        if parsed.error is not None:
            store.replace_all([])
            self.error_message = parsed.error.message
            log.warning("Area description rejected: %s", self.error_message)
            return parsed

        store.replace_all(parsed.areas)
        self.error_message = parsed.summary()
        log.info("Applied %d areas (%d lines rejected)", len(parsed.areas), len(parsed.errors))
        return parsed
