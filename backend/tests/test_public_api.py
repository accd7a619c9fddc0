"""Tests for the names re-exported from the quickest package."""

from __future__ import annotations

import quickest


def test_all_names_exist() -> None:
    for name in quickest.__all__:
        assert hasattr(quickest, name), name


def test_version() -> None:
    assert quickest.__version__ == "0.1.0"


def test_default_engine_runs() -> None:
    engine = quickest.create_default_engine()
    building = quickest.BuildingModel.from_input(
        {"spans": "1@24", "bays": "6@6", "backEaveHeight": 8, "frontEaveHeight": 8}
    )
    assert engine.calculate(building).item_count > 0
