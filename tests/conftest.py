"""Shared fixtures for the Bill Splitter tests."""

import json

import pytest
import structlog

from splitbill.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees the environment it sets up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI runs."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def raw_bill() -> dict:
    """The two-person dinner: one shared pizza, one drink each."""
    return {
        "date": "2024-03-21",
        "location": "開心小館",
        "tipPercentage": 10,
        "items": [
            {"name": "Pizza", "price": 100, "isShared": True},
            {"name": "Coke", "price": 10, "isShared": False, "person": "Alice"},
            {"name": "Coffee", "price": 5, "isShared": False, "person": "Bob"},
        ],
    }


@pytest.fixture
def three_way_raw_bill() -> dict:
    """Ten split three ways: 3.3 each leaves 0.1 of rounding drift."""
    return {
        "date": "2024-01-05",
        "location": "Corner Cafe",
        "tipPercentage": 0,
        "items": [
            {"name": "Cake", "price": 10, "isShared": True},
            {"name": "Water", "price": 0, "isShared": False, "person": "Alice"},
            {"name": "Water", "price": 0, "isShared": False, "person": "Bob"},
            {"name": "Water", "price": 0, "isShared": False, "person": "Carol"},
        ],
    }


@pytest.fixture
def write_json():
    """Write a JSON document to a path and return the path."""
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write
