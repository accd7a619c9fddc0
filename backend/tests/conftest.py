"""Shared fixtures: a seed-data store, engine and estimation service."""

from __future__ import annotations

from typing import Any

import pytest

from quickest.data.seed import SEED_RECORDS
from quickest.data.store import ReferenceStore
from quickest.engine import CalculationEngine
from quickest.service import EstimationService
from quickest.subsystems import default_calculators


@pytest.fixture()
def store() -> ReferenceStore:
    """Reference store over the seed catalogs."""
    return ReferenceStore.from_records(SEED_RECORDS)


@pytest.fixture()
def engine(store: ReferenceStore) -> CalculationEngine:
    """CalculationEngine wired to the seed store."""
    return CalculationEngine(store)


@pytest.fixture()
def service(engine: CalculationEngine, store: ReferenceStore) -> EstimationService:
    """EstimationService with every sub-system calculator registered."""
    return EstimationService(engine, default_calculators(store), max_workers=4)


@pytest.fixture()
def warehouse() -> dict[str, Any]:
    """A single-span 24m x 36m warehouse payload in input-sheet keys."""
    return {
        "projectName": "Test Project",
        "buildingName": "Warehouse",
        "spans": "1@24",
        "bays": "6@6",
        "slopes": "1@0.1",
        "backEaveHeight": 8,
        "frontEaveHeight": 8,
        "windSpeed": 130,
    }
