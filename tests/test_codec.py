"""Tests for the area description parser / formatter in areas/codec.py."""
from __future__ import annotations

import pytest

from areas.codec import (
    format_area_line,
    format_document,
    parse_area_line,
    parse_document,
    parse_point,
)
from models import Area, ErrorKind, Point, Provenance
from settings import DEFAULT_AREA_TEXT

ROBOT = "Robot,(-623,-425),(-623,425),(377,425),(377,-425)"


# ─────────────────────────────────────────────────────────
# parse_point
# ─────────────────────────────────────────────────────────


class TestParsePoint:
    @pytest.mark.parametrize("text", ["(417, -635)", "417 -635", "x=417 y=-635", " ( 417 ,-635 ) "])
    def test_accepts_loose_formats(self, text):
        r = parse_point(text)
        assert r.ok
        assert r.value == (417, -635)

    def test_decimals_and_signs(self):
        assert parse_point("(+1.5, -2.25)").value == (1.5, -2.25)

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank(self, text):
        r = parse_point(text)
        assert r.error.kind == ErrorKind.EMPTY_INPUT

    @pytest.mark.parametrize("text", ["abc", "(12)", "(x, y)"])
    def test_fewer_than_two_numbers(self, text):
        r = parse_point(text)
        assert r.error.kind == ErrorKind.INVALID_NUMERIC_FORMAT
        assert r.error.message == "Invalid format (x,y)."

    def test_non_finite(self):
        r = parse_point(f"({'9' * 400}, 1)")
        assert r.error.kind == ErrorKind.INVALID_NUMERIC_FORMAT
        assert r.error.message == "X or Y invalid."


# ─────────────────────────────────────────────────────────
# parse_area_line
# ─────────────────────────────────────────────────────────


class TestParseAreaLine:
    def test_robot_line(self):
        r = parse_area_line(ROBOT)
        assert r.ok
        assert r.value.label == "Robot"
        assert r.value.points == ((-623, -425), (-623, 425), (377, 425), (377, -425))

    def test_insufficient_points(self):
        r = parse_area_line("X,(1,2)")
        assert r.error.kind == ErrorKind.INSUFFICIENT_POINTS
        assert r.error.message == "An area needs at least 3 (x,y) points."

    def test_empty(self):
        assert parse_area_line("").error.kind == ErrorKind.EMPTY_INPUT
        assert parse_area_line("  \t ").error.kind == ErrorKind.EMPTY_INPUT

    def test_missing_separator(self):
        r = parse_area_line("Robot (0 0) (0 1) (1 1)")
        assert r.error.kind == ErrorKind.MISSING_SEPARATOR

    @pytest.mark.parametrize("line", ["Robot,", "Robot,   "])
    def test_missing_points(self, line):
        assert parse_area_line(line).error.kind == ErrorKind.MISSING_POINTS

    def test_label_truncated(self):
        assert parse_area_line("LongLabel,(0,0),(0,1),(1,1)").value.label == "LongL"

    def test_blank_label_defaults(self):
        assert parse_area_line(" ,(0,0),(0,1),(1,1)").value.label == "AREA"

    def test_malformed_tuples_are_skipped(self):
        r = parse_area_line("A,(0,0),(x,1),(0,1),(1,1)")
        assert r.value.points == ((0, 0), (0, 1), (1, 1))

    def test_malformed_tuples_can_leave_too_few(self):
        r = parse_area_line("A,(0,0),(x,1),(0,1)")
        assert r.error.kind == ErrorKind.INSUFFICIENT_POINTS

    def test_whitespace_inside_tuples(self):
        r = parse_area_line("A, ( 1 , 2 ) ,(3,4), (5 ,6)")
        assert r.value.points == ((1, 2), (3, 4), (5, 6))


# ─────────────────────────────────────────────────────────
# parse_document
# ─────────────────────────────────────────────────────────


class TestParseDocument:
    def test_sample_document(self):
        doc = parse_document(DEFAULT_AREA_TEXT)
        assert doc.ok
        assert doc.error is None
        assert [a.label for a in doc.areas] == ["Robot", "RRigh", "RLeft"]
        assert all(a.provenance == Provenance.BATCH for a in doc.areas)
        assert len({a.id for a in doc.areas}) == 3

    def test_fresh_ids_each_parse(self):
        first = parse_document(ROBOT).areas[0].id
        second = parse_document(ROBOT).areas[0].id
        assert first != second

    def test_crlf_and_blank_lines(self):
        doc = parse_document(f"\r\n{ROBOT}\r\n\r\n   \n{ROBOT}\n")
        assert len(doc.areas) == 2
        assert doc.errors == []

    def test_line_numbers_count_non_blank_lines(self):
        doc = parse_document(f"\n\n{ROBOT}\n\nbad line\n")
        assert len(doc.areas) == 1
        assert doc.errors[0].line_number == 2
        assert doc.errors[0].message == "Line 2: Missing comma after the label."

    def test_partial_failure_keeps_good_lines(self):
        doc = parse_document(f"{ROBOT}\nX,(1,2)\n{ROBOT}")
        assert len(doc.areas) == 2
        assert doc.error is None
        assert doc.summary() == "Line 2: An area needs at least 3 (x,y) points."

    def test_all_bad_is_document_error(self):
        doc = parse_document("nope\nX,(1,2)")
        assert not doc.ok
        assert doc.error.kind == ErrorKind.NO_VALID_AREAS
        assert doc.error.message == (
            "Line 1: Missing comma after the label. | "
            "Line 2: An area needs at least 3 (x,y) points."
        )

    def test_error_summary_capped_at_four(self):
        doc = parse_document("\n".join(f"bad{i}" for i in range(6)))
        assert len(doc.errors) == 6
        assert doc.error.message.count("Line ") == 4
        assert "Line 5" not in doc.error.message

    @pytest.mark.parametrize("text", ["", "\n\n  \n", None])
    def test_empty_document(self, text):
        doc = parse_document(text)
        assert doc.error.kind == ErrorKind.NO_VALID_AREAS
        assert doc.error.message == "No valid areas."


# ─────────────────────────────────────────────────────────
# Formatting
# ─────────────────────────────────────────────────────────


class TestFormat:
    def test_format_robot(self):
        pts = [Point(-623, -425), Point(-623, 425), Point(377, 425), Point(377, -425)]
        assert format_area_line("Robot", pts) == ROBOT

    def test_rounds_half_up(self):
        assert format_area_line("A", [(-0.5, 2.5), (1.4, 1.6), (-2.5, -0.49)]) == "A,(0,3),(1,2),(-2,0)"

    def test_blank_label(self):
        assert format_area_line("", [(0, 0), (0, 1), (1, 1)]) == "AREA,(0,0),(0,1),(1,1)"

    def test_format_document(self):
        areas = [
            Area("a", "A", (Point(0, 0), Point(0, 1), Point(1, 1))),
            Area("b", "B", (Point(2, 2), Point(2, 3), Point(3, 3))),
        ]
        assert format_document(areas) == "A,(0,0),(0,1),(1,1)\nB,(2,2),(2,3),(3,3)"

    def test_formatted_line_parses_back(self):
        line = format_area_line("Robot", parse_area_line(ROBOT).value.points)
        assert parse_area_line(line).value.points == parse_area_line(ROBOT).value.points
