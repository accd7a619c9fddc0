"""Tests for the EstimationService end-to-end flow."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

import pytest

from quickest.data.seed import SEED_RECORDS
from quickest.data.store import ReferenceStore
from quickest.engine import CalculationEngine
from quickest.exceptions import MissingReferenceError
from quickest.models.building import BuildingModel
from quickest.models.enums import SubsystemKind
from quickest.models.estimate import FreightOptions, Markups
from quickest.service import EstimationService
from quickest.subsystems import default_calculators

if TYPE_CHECKING:
    from quickest.service import EstimationOutcome


def _every_subsystem(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        **payload,
        "mezzanines": [{"colSpacing": "2@6", "beamSpacing": "3@5"}],
        "cranes": [{"capacity": 5, "craneRun": "6@6"}],
        "accessoryItems": [{"description": "Personnel Door (900x2100)", "quantity": 2}],
        "partitions": [{"colSpacing": "4@6", "height": 6}],
        "canopies": [{"type": "Canopy", "colSpacing": "2@6"}],
        "monitors": [{"monitorType": "Curve-CF", "baySpacing": "6@6"}],
        "liners": [{"type": "Roof Liner"}],
    }


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class TestEstimate:
    def test_valid_building(self, service: EstimationService, warehouse: dict[str, Any]) -> None:
        outcome = service.estimate(warehouse)
        assert outcome.ok
        assert outcome.errors == []
        assert outcome.result is not None
        assert outcome.result.dimensions.width == pytest.approx(24)
        assert outcome.result.summary.total_weight_kg > 0
        assert outcome.processing_time_seconds >= 0

    def test_invalid_building_returns_errors(self, service: EstimationService) -> None:
        outcome = service.estimate({"spans": "abc", "bays": "6@6"})
        assert not outcome.ok
        assert outcome.result is None
        fields = {error.field for error in outcome.errors}
        assert {"spans", "back_eave_height", "front_eave_height"} <= fields

    def test_accepts_a_model(self, service: EstimationService, warehouse: dict[str, Any]) -> None:
        outcome = service.estimate(BuildingModel.from_input(warehouse))
        assert outcome.ok

    def test_every_subsystem(self, service: EstimationService, warehouse: dict[str, Any]) -> None:
        outcome = service.estimate(_every_subsystem(warehouse))
        assert outcome.result is not None
        kinds = [entry.kind for entry in outcome.result.subsystems]
        assert kinds == [
            SubsystemKind.MEZZANINE,
            SubsystemKind.CRANE,
            SubsystemKind.ACCESSORY,
            SubsystemKind.PARTITION,
            SubsystemKind.CANOPY,
            SubsystemKind.MONITOR,
            SubsystemKind.LINER,
        ]
        assert all(entry.bom.item_count > 0 for entry in outcome.result.subsystems)
        total = sum(row.total_weight for row in outcome.result.bom.data_rows)
        assert outcome.result.summary.total_weight_kg == pytest.approx(total)

    def test_invalid_block_is_a_field_error(
        self, service: EstimationService, warehouse: dict[str, Any]
    ) -> None:
        outcome = service.estimate({**warehouse, "cranes": [{"craneRun": ""}]})
        assert outcome.result is None
        assert [error.field for error in outcome.errors] == ["cranes[0].crane_run"]

    def test_single_worker(
        self, engine: CalculationEngine, store: ReferenceStore, warehouse: dict[str, Any]
    ) -> None:
        service = EstimationService(engine, default_calculators(store), max_workers=1)
        outcome = service.estimate(_every_subsystem(warehouse))
        assert outcome.ok
        assert outcome.result is not None
        assert len(outcome.result.subsystems) == 7


# ---------------------------------------------------------------------------
# Pricing options
# ---------------------------------------------------------------------------


class TestOptions:
    def test_per_call_markups(self, service: EstimationService, warehouse: dict[str, Any]) -> None:
        plain = service.estimate(warehouse).result
        marked = service.estimate(warehouse, markups=Markups(steel=0.1)).result
        assert plain is not None
        assert marked is not None
        assert marked.summary.total_price_aed > plain.summary.total_price_aed
        assert marked.summary.total_weight_kg == pytest.approx(plain.summary.total_weight_kg)

    def test_service_defaults(
        self, engine: CalculationEngine, store: ReferenceStore, warehouse: dict[str, Any]
    ) -> None:
        service = EstimationService(
            engine,
            default_calculators(store),
            markups=Markups(panels=0.2),
            freight=FreightOptions(freight_rate=1000),
        )
        assert service.default_markups.panels == 0.2
        result = service.estimate(warehouse).result
        assert result is not None
        assert result.markups.panels == 0.2
        assert result.freight.freight_cost > 0

    def test_per_call_freight_wins(
        self, service: EstimationService, warehouse: dict[str, Any]
    ) -> None:
        result = service.estimate(
            warehouse, freight=FreightOptions(freight_type="Customer Pickup", freight_rate=1000)
        ).result
        assert result is not None
        assert result.freight.freight_cost == 0
        assert result.freight.total_loads > 0


# ---------------------------------------------------------------------------
# Errors and wiring
# ---------------------------------------------------------------------------


class TestErrors:
    def test_missing_reference_propagates(self, warehouse: dict[str, Any]) -> None:
        store = ReferenceStore.from_records([r for r in SEED_RECORDS if r.code != "Z15P"])
        service = EstimationService(CalculationEngine(store), default_calculators(store))
        with pytest.raises(MissingReferenceError):
            service.estimate(warehouse)

    def test_missing_reference_in_subsystem(self, warehouse: dict[str, Any]) -> None:
        store = ReferenceStore.from_records([r for r in SEED_RECORDS if r.code != "CRS"])
        service = EstimationService(CalculationEngine(store), default_calculators(store))
        with pytest.raises(MissingReferenceError) as exc_info:
            service.estimate({**warehouse, "cranes": [{}]})
        assert exc_info.value.code == "CRS"

    def test_unregistered_subsystem(
        self, engine: CalculationEngine, warehouse: dict[str, Any]
    ) -> None:
        service = EstimationService(engine, {})
        assert service.estimate(warehouse).ok
        with pytest.raises(KeyError, match="crane"):
            service.estimate({**warehouse, "cranes": [{}]})

    def test_max_workers_must_be_positive(self, engine: CalculationEngine) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            EstimationService(engine, {}, max_workers=0)


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


def test_concurrent_estimates(service: EstimationService, warehouse: dict[str, Any]) -> None:
    widths = [12, 18, 24, 30, 36, 42, 48, 60]

    def _estimate(width: int) -> EstimationOutcome:
        return service.estimate({**warehouse, "spans": f"1@{width}", "cranes": [{}]})

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(_estimate, widths))

    for width, outcome in zip(widths, outcomes, strict=True):
        assert outcome.result is not None
        assert outcome.result.dimensions.width == pytest.approx(width)

    # Same input, same answer, whichever thread ran it
    first = service.estimate(warehouse).result
    second = service.estimate(warehouse).result
    assert first is not None
    assert second is not None
    assert first.summary == second.summary
