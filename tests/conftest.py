"""Shared fixtures for FacetZoom tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from facetzoom_core.engine import FilterEngine
from facetzoom_core.model.record import Record


@pytest.fixture
def sample_records():
    """Three catalogue items with multi-valued categories and dates."""
    return [
        Record(
            id="1",
            title="Alpha",
            facets={
                "Category": ["Tool", "Outdoor"],
                "Year": 2021,
                "Added": datetime(2024, 1, 5),
            },
            metrics={"score": 0.73, "value": 42.1},
        ),
        Record(
            id="2",
            title="Beta",
            facets={
                "Category": ["Outdoor"],
                "Year": 2022,
                "Added": datetime(2024, 2, 11),
            },
            metrics={"score": 0.9, "value": 10},
        ),
        Record(
            id="3",
            title="Gamma",
            facets={
                "Category": ["Tool"],
                "Year": 2019,
                "Added": datetime(2023, 12, 30),
            },
            metrics={"score": 0.12, "value": 88.2},
        ),
    ]


@pytest.fixture
def engine(sample_records):
    return FilterEngine(sample_records)


@pytest.fixture
def market_records():
    """Small equity universe."""
    return [
        Record(
            id="BETA",
            title="Beta",
            facets={"Sector": "Finance", "Region": "US"},
            metrics={"score": 2, "price": 15},
        ),
        Record(
            id="ALPHA",
            title="Alpha",
            facets={"Sector": "Health", "Exchange": "NASDAQ"},
            metrics={"score": 5, "price": 10},
        ),
        Record(
            id="GAMMA",
            title="Gamma",
            facets={"Sector": "Finance", "Region": "EU", "Style": "Value"},
            metrics={"score": -1, "price": 20},
        ),
    ]


def ids(records):
    return [r.id for r in records]
