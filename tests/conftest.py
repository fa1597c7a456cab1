"""Shared fixtures for the AreaSync test suite."""
from __future__ import annotations

import os
import sys

import pytest

# Ensure project root is on sys.path so imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models import Area, Point, Provenance
from settings import SettingsManager


@pytest.fixture()
def square_points():
    """100 mm square with its lower-left corner on the origin."""
    return (Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0))


@pytest.fixture()
def square_area(square_points):
    return Area(id="sq", label="Sq", points=square_points, provenance=Provenance.BATCH)


@pytest.fixture()
def settings_manager(tmp_path):
    """SettingsManager rooted in a temporary config directory."""
    return SettingsManager(settings_dir=tmp_path)
