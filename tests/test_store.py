"""Tests for AreaStore mutations and snapshot semantics."""
from __future__ import annotations

import pytest

from areas.store import AreaStore
from models import Area, ErrorKind, Point, Provenance, WorkspaceBounds

BOUNDS = WorkspaceBounds.from_workspace(100, 100)  # [-50, 50] on both axes


@pytest.fixture()
def store(square_area):
    return AreaStore([square_area])


class TestQueries:
    def test_len_iter_contains(self, store):
        assert len(store) == 1
        assert [a.id for a in store] == ["sq"]
        assert "sq" in store
        assert "nope" not in store

    def test_get_missing(self, store):
        assert store.get("nope") is None

    def test_to_text(self, store):
        assert store.to_text() == "Sq,(0,0),(0,100),(100,100),(100,0)"


class TestAddSingle:
    def test_returns_new_id(self, store):
        area_id = store.add_single("Bench1", [(0, 0), (0, 1), (1, 1)])
        area = store.get(area_id)
        assert area.provenance == Provenance.SINGLE
        assert area.label == "Bench"
        assert area.points == ((0, 0), (0, 1), (1, 1))
        assert isinstance(area.points[0], Point)

    def test_blank_label(self, store):
        area_id = store.add_single("", [(0, 0), (0, 1), (1, 1)])
        assert store.get(area_id).label == "AREA"

    def test_snapshot_unaffected(self, store):
        snap = store.areas
        store.add_single("B", [(0, 0), (0, 1), (1, 1)])
        assert len(snap) == 1
        assert len(store.areas) == 2


class TestReplaceAndDelete:
    def test_replace_all(self, store):
        new = [Area("x", "X", (Point(1, 1), Point(1, 2), Point(2, 2)))]
        store.replace_all(new)
        assert [a.id for a in store.areas] == ["x"]

    def test_delete(self, store):
        assert store.delete("sq") is True
        assert len(store) == 0
        assert store.delete("sq") is False


class TestTranslate:
    def test_translate_live_points(self):
        store = AreaStore([Area("a", "A", (Point(0, 0), Point(0, 10), Point(10, 10)))])
        r = store.translate("a", 5, -5, BOUNDS)
        assert r.ok
        assert r.value.points == ((5, -5), (5, 5), (15, 5))
        assert store.get("a").points == r.value.points

    def test_clamps_only_offending_coordinate(self):
        pts = (Point(0, 0), Point(0, 40), Point(40, 40), Point(40, 0))
        store = AreaStore([Area("a", "A", pts)])
        r = store.translate("a", 20, 0, BOUNDS)
        assert r.value.points == ((20, 0), (20, 40), (50, 40), (50, 0))

    def test_translate_from_base_points(self):
        store = AreaStore([Area("a", "A", (Point(0, 0), Point(0, 10), Point(10, 10)))])
        base = store.get("a").points
        store.translate("a", 30, 0, BOUNDS)
        r = store.translate("a", 1, 1, BOUNDS, base_points=base)
        assert r.value.points == ((1, 1), (1, 11), (11, 11))

    def test_unknown_area(self, store):
        r = store.translate("nope", 1, 1, BOUNDS)
        assert r.error.kind == ErrorKind.UNKNOWN_AREA

    def test_old_instance_unchanged(self, store):
        before = store.get("sq")
        store.translate("sq", 1, 1, BOUNDS)
        assert before.points[0] == (0, 0)
        assert store.get("sq") is not before

    def test_keeps_id_label_provenance(self, store):
        moved = store.translate("sq", 1, 1, BOUNDS).value
        assert (moved.id, moved.label, moved.provenance) == ("sq", "Sq", Provenance.BATCH)


class TestSetLabel:
    def test_rename(self, store):
        r = store.set_label("sq", "  NewName ")
        assert r.value.label == "NewNa"
        assert store.get("sq").label == "NewNa"

    def test_blank_label(self, store):
        assert store.set_label("sq", "").value.label == "AREA"

    def test_unknown(self, store):
        assert store.set_label("nope", "A").error.kind == ErrorKind.UNKNOWN_AREA
