"""Tests for the FastAPI endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from fastapi.testclient import TestClient

from quickest import __version__
from quickest.api.app import SAMPLE_BUILDING, create_app
from quickest.config import Settings
from quickest.data.seed import SEED_RECORDS
from quickest.data.store import ReferenceStore
from quickest.engine import CalculationEngine
from quickest.models.enums import Catalog
from quickest.service import EstimationService
from quickest.subsystems import default_calculators

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quickest.data.records import ReferenceRecord


@pytest.fixture()
def client(service: EstimationService) -> TestClient:
    """TestClient over an app with the seed-data service injected."""
    return TestClient(create_app(service=service, settings=Settings()))


def _client_over(records: Iterable[ReferenceRecord]) -> TestClient:
    store = ReferenceStore.from_records(records)
    service = EstimationService(CalculationEngine(store), default_calculators(store))
    return TestClient(create_app(service=service, settings=Settings()))


# ---------------------------------------------------------------------------
# GET /api/health
# ---------------------------------------------------------------------------


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# POST /api/estimate
# ---------------------------------------------------------------------------


class TestEstimate:
    def test_valid_building(self, client: TestClient, warehouse: dict[str, Any]) -> None:
        response = client.post("/api/estimate", json=warehouse)
        assert response.status_code == 200
        body = response.json()
        assert body["summary_dict"]["width"] == pytest.approx(24)
        assert body["summary_dict"]["length"] == pytest.approx(36)
        assert set(body["reports"]) == {"recap", "fcpbs", "sal", "boq", "jaf", "rawmat"}
        assert body["processing_time_seconds"] >= 0
        assert body["estimate"]["summary"]["total_weight_kg"] > 0

    def test_invalid_building(self, client: TestClient) -> None:
        response = client.post("/api/estimate", json={})
        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["detail"]}
        assert {"spans", "bays"} <= fields

    def test_bad_markups(self, client: TestClient, warehouse: dict[str, Any]) -> None:
        response = client.post("/api/estimate", json={**warehouse, "markups": {"steel": -2}})
        assert response.status_code == 422
        assert response.json()["detail"][0]["field"] == "steel"

    def test_markups_raise_the_price(self, client: TestClient, warehouse: dict[str, Any]) -> None:
        plain = client.post("/api/estimate", json=warehouse).json()["estimate"]["summary"]
        marked = client.post(
            "/api/estimate", json={**warehouse, "markups": {"steel": 0.1, "panels": 0.1}}
        ).json()["estimate"]["summary"]
        assert marked["total_price_aed"] > plain["total_price_aed"]
        assert marked["total_weight_kg"] == pytest.approx(plain["total_weight_kg"])

    def test_freight(self, client: TestClient, warehouse: dict[str, Any]) -> None:
        body = client.post(
            "/api/estimate",
            json={**warehouse, "freight": {"freight_rate": 1000, "container_count": 1}},
        ).json()
        freight = body["estimate"]["freight"]
        assert freight["freight_cost"] > 0
        assert freight["container_cost"] == pytest.approx(2000)

    def test_subsystems(self, client: TestClient, warehouse: dict[str, Any]) -> None:
        payload = {**warehouse, "cranes": [{"capacity": 5, "craneRun": "6@6"}]}
        body = client.post("/api/estimate", json=payload).json()
        assert body["summary_dict"]["subsystem_count"] == 1

    def test_missing_reference(self, warehouse: dict[str, Any]) -> None:
        client = _client_over(r for r in SEED_RECORDS if r.code != "Z15P")
        response = client.post("/api/estimate", json=warehouse)
        assert response.status_code == 500
        assert response.json()["detail"].startswith("Could not calculate")
        assert "Z15P" in response.json()["detail"]


# ---------------------------------------------------------------------------
# GET /api/sample-estimate
# ---------------------------------------------------------------------------


def test_sample_estimate(client: TestClient) -> None:
    response = client.get("/api/sample-estimate")
    assert response.status_code == 200
    body = response.json()
    assert body["building"] == SAMPLE_BUILDING
    assert body["summary_dict"]["subsystem_count"] == 2
    assert body["reports"]["boq"]["items"][0]["sl_no"] == 1


# ---------------------------------------------------------------------------
# GET /api/products
# ---------------------------------------------------------------------------


class TestProducts:
    def test_search_by_code(self, client: TestClient) -> None:
        response = client.get("/api/products", params={"q": "Z20P"})
        assert response.status_code == 200
        assert "Z20P" in [record["code"] for record in response.json()]

    def test_search_by_description(self, client: TestClient) -> None:
        codes = [record["code"] for record in client.get("/api/products?q=purlin").json()]
        assert "Z15P" in codes

    def test_unavailable_catalog(self) -> None:
        def _broken() -> list[ReferenceRecord]:
            msg = "catalog file missing"
            raise OSError(msg)

        store = ReferenceStore({catalog: _broken for catalog in Catalog})
        broken = EstimationService(CalculationEngine(store), default_calculators(store))
        client = TestClient(create_app(service=broken, settings=Settings()))
        response = client.get("/api/products", params={"q": "Z"})
        assert response.status_code == 500
        assert "catalog file missing" in response.json()["detail"]


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def test_service_is_created_lazily(warehouse: dict[str, Any]) -> None:
    app = create_app(settings=Settings())
    assert app.state.service is None
    client = TestClient(app)
    response = client.post("/api/estimate", json=warehouse)
    assert response.status_code == 200
    assert app.state.service is not None
