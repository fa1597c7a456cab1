"""Tests for AreaDocument apply / error persistence."""
from __future__ import annotations

from areas.document import AreaDocument
from areas.store import AreaStore
from models import Area, ErrorKind, Point
from settings import DEFAULT_AREA_TEXT

GOOD = "A,(0,0),(0,10),(10,10)"


class TestApply:
    def test_success_replaces_store(self, square_area):
        store = AreaStore([square_area])
        doc = AreaDocument(DEFAULT_AREA_TEXT)
        parsed = doc.apply(store)
        assert parsed.ok
        assert len(store) == 3
        assert "sq" not in store
        assert doc.error_message == ""

    def test_partial_failure_keeps_summary(self):
        store = AreaStore()
        doc = AreaDocument(f"{GOOD}\nbad")
        doc.apply(store)
        assert len(store) == 1
        assert doc.error_message == "Line 2: Missing comma after the label."

    def test_failure_clears_store(self, square_area):
        store = AreaStore([square_area])
        doc = AreaDocument("bad")
        parsed = doc.apply(store)
        assert parsed.error.kind == ErrorKind.NO_VALID_AREAS
        assert len(store) == 0
        assert doc.error_message == "Line 1: Missing comma after the label."

    def test_error_persists_until_next_apply(self):
        store = AreaStore()
        doc = AreaDocument("bad")
        doc.apply(store)
        doc.set_text(GOOD)
        assert doc.error_message != ""
        doc.apply(store)
        assert doc.error_message == ""

    def test_reapply_gives_new_ids(self):
        store = AreaStore()
        doc = AreaDocument(GOOD)
        doc.apply(store)
        first = store.areas[0].id
        doc.apply(store)
        assert store.areas[0].id != first


class TestText:
    def test_append_to_empty(self):
        doc = AreaDocument()
        doc.append_line(GOOD)
        assert doc.text == GOOD

    def test_append_strips_trailing_whitespace(self):
        doc = AreaDocument(f"{GOOD}\n\n  ")
        doc.append_line("B,(1,1),(1,2),(2,2)")
        assert doc.text == f"{GOOD}\nB,(1,1),(1,2),(2,2)"

    def test_set_text_none(self):
        doc = AreaDocument(GOOD)
        doc.set_text(None)
        assert doc.text == ""

    def test_store_text_round_trip(self):
        store = AreaStore([Area("a", "A", (Point(0, 0), Point(0, 10), Point(10, 10)))])
        doc = AreaDocument(store.to_text())
        doc.apply(store)
        assert store.areas[0].points == ((0, 0), (0, 10), (10, 10))
