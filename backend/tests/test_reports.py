"""Tests for the Recap, Detail, FCPBS, SAL, BOQ and JAF projections."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import pytest

from quickest.aggregation import aggregate
from quickest.engine import PrimaryCalculation
from quickest.models.blocks import CraneBlock
from quickest.models.bom import DataRow
from quickest.models.building import BuildingModel
from quickest.models.enums import CostCategory, SubsystemKind
from quickest.models.estimate import EstimationResult, FreightOptions, Markups, SubsystemBom
from quickest.openings import OpeningAreas
from quickest.reports import (
    AED_PER_USD,
    BOQ_DESCRIPTIONS,
    OTHER_MATERIALS,
    RAWMAT_CATEGORIES,
    SALES_DESCRIPTIONS,
    boq,
    boq_line_for,
    detail,
    fcpbs,
    jaf,
    per_mt,
    rawmat,
    rawmat_category,
    recap,
    sal,
    scope_of,
)
from quickest.subsystems.crane import CraneCalculator

if TYPE_CHECKING:
    from quickest.data.store import ReferenceStore
    from quickest.engine import CalculationEngine


@pytest.fixture()
def crane(store: ReferenceStore) -> SubsystemBom:
    bom = CraneCalculator(store).calculate(CraneBlock(capacity=5, crane_run="6@6"))
    return SubsystemBom(kind=SubsystemKind.CRANE, description="EOT Crane", bom=bom)


@pytest.fixture()
def result(
    engine: CalculationEngine, warehouse: dict[str, Any], crane: SubsystemBom
) -> EstimationResult:
    """Warehouse plus crane, with markups, freight and one container."""
    primary = engine.run(BuildingModel.from_input(warehouse))
    return aggregate(
        primary,
        [crane],
        Markups(steel=0.1, panels=0.05),
        FreightOptions(freight_rate=500, container_count=1),
    )


# ---------------------------------------------------------------------------
# Recap and Detail
# ---------------------------------------------------------------------------


class TestRecap:
    def test_figures(self, result: EstimationResult) -> None:
        report = recap(result)
        assert report.width == pytest.approx(24)
        assert report.length == pytest.approx(36)
        assert report.n_frames == 7
        assert report.item_count == result.bom.item_count
        assert report.total_price_aed == pytest.approx(result.summary.total_price_aed)
        assert report.freight_aed == pytest.approx(result.freight.freight_cost)
        assert report.container_aed == pytest.approx(2000)

    def test_detail_numbering(self, result: EstimationResult) -> None:
        report = detail(result)
        numbers = [row.line_number for row in report.rows if isinstance(row, DataRow)]
        assert numbers == list(range(1, report.item_count + 1))
        assert report.total_weight_kg == pytest.approx(result.summary.total_weight_kg)


# ---------------------------------------------------------------------------
# FCPBS
# ---------------------------------------------------------------------------


class TestFcpbs:
    def test_one_line_per_category(self, result: EstimationResult) -> None:
        report = fcpbs(result)
        assert [line.key for line in report.lines] == [str(c) for c in CostCategory]

    def test_totals(self, result: EstimationResult) -> None:
        report = fcpbs(result)
        assert report.total.selling_price == pytest.approx(result.summary.total_price_aed)
        assert report.total.weight_kg == pytest.approx(result.summary.total_weight_kg)
        assert report.fob.selling_price == pytest.approx(result.summary.fob_price_aed)
        assert report.steel.weight_pct + report.panels.weight_pct == pytest.approx(100)
        assert sum(line.selling_pct for line in report.lines) == pytest.approx(100)

    def test_markup_uses_real_cost(self, result: EstimationResult) -> None:
        frames = next(line for line in fcpbs(result).lines if line.key == "A")
        category = result.category(CostCategory.MAIN_FRAMES)
        assert frames.total_cost == pytest.approx(category.total_cost)
        assert frames.markup == pytest.approx(category.selling_price / category.total_cost)
        assert frames.value_added == pytest.approx(
            category.selling_price - category.material_cost
        )

    def test_painting_is_priced(self, result: EstimationResult) -> None:
        painting = next(line for line in fcpbs(result).lines if line.key == "B")
        assert painting.selling_price > 0
        assert "DSW" not in result.bom.codes()

    def test_empty_categories_are_zero(self, result: EstimationResult) -> None:
        erection = next(line for line in fcpbs(result).lines if line.key == "T")
        assert erection.selling_price == 0
        assert erection.markup == 0
        assert erection.price_per_mt == 0


# ---------------------------------------------------------------------------
# SAL
# ---------------------------------------------------------------------------


class TestSal:
    def test_every_standard_code_is_listed(self, result: EstimationResult) -> None:
        codes = [line.code for line in sal(result).lines]
        assert codes[: len(SALES_DESCRIPTIONS)] == list(SALES_DESCRIPTIONS)

    def test_sales_codes(self, result: EstimationResult, crane: SubsystemBom) -> None:
        lines = {line.code: line for line in sal(result).lines}
        assert lines[4].weight_kg == pytest.approx(crane.bom.total_weight)
        assert lines[4].cost == pytest.approx(crane.bom.total_price)
        assert lines[4].price == pytest.approx(crane.bom.total_price * 1.1)
        assert lines[1].cost == pytest.approx(result.primary.total_price)
        assert lines[2].weight_kg == 0

    def test_freight_and_containers(self, result: EstimationResult) -> None:
        lines = {line.code: line for line in sal(result).lines}
        assert lines["S"].price == pytest.approx(result.freight.freight_cost)
        assert lines["P"].price == pytest.approx(2000)
        assert lines["S"].weight_kg == 0

    def test_totals_match_summary(self, result: EstimationResult) -> None:
        report = sal(result)
        assert report.total_price == pytest.approx(result.summary.total_price_aed)
        assert report.total_weight_kg == pytest.approx(result.summary.total_weight_kg)


# ---------------------------------------------------------------------------
# BOQ
# ---------------------------------------------------------------------------


class TestBoq:
    def test_nine_lines(self, result: EstimationResult) -> None:
        report = boq(result)
        assert [item.sl_no for item in report.items] == list(range(1, 10))
        assert [item.description for item in report.items] == list(BOQ_DESCRIPTIONS)

    def test_totals(self, result: EstimationResult) -> None:
        report = boq(result)
        assert report.total_price == pytest.approx(result.summary.total_price_aed, abs=0.1)
        assert report.total_weight_mt == pytest.approx(result.summary.total_weight_mt, abs=1e-3)

    def test_unit_rate(self, result: EstimationResult) -> None:
        primary_steel = boq(result).items[0]
        assert primary_steel.quantity > 0
        assert primary_steel.unit_rate == pytest.approx(
            primary_steel.total_price / primary_steel.quantity, rel=1e-3
        )

    def test_line_assignment(self, store: ReferenceStore) -> None:
        def _line(code: str) -> int | None:
            return boq_line_for(DataRow.from_record(store.require(code), size=1, quantity=1))

        assert _line("BU") == 1
        assert _line("Z20P") == 2
        assert _line("PU50") == 3
        assert _line("S5OW") == 4
        assert _line("TTE") == 4
        assert _line("CS2") == 5
        assert _line("AB24") == 6
        assert _line("PD09") == 7
        assert _line("FG50") == 8
        assert _line("SKY1S") == 9
        assert _line("WRM") == 9
        assert _line("PPLBu") is None


# ---------------------------------------------------------------------------
# RAWMAT
# ---------------------------------------------------------------------------


class TestRawmat:
    def test_codes_are_merged(self, result: EstimationResult) -> None:
        report = rawmat(result)
        codes = [line.code.upper() for line in report.items]
        assert len(codes) == len(set(codes))
        assert report.unique_materials == len(report.items)
        assert report.total_items_before == len(result.bom.data_rows)
        assert report.total_items_before > report.unique_materials

    def test_quantities_in_catalog_units(self, result: EstimationResult) -> None:
        lines = {line.code: line for line in rawmat(result).items}
        rows = result.bom.find("CS2")
        assert len(rows) > 1
        assert lines["CS2"].quantity == pytest.approx(
            sum(row.cost_basis for row in rows), abs=0.01
        )
        built_up = sum(row.quantity for row in result.bom.find("BU"))
        assert lines["BU"].quantity == pytest.approx(built_up, abs=0.01)

    def test_weight_matches_the_bom(self, result: EstimationResult) -> None:
        report = rawmat(result)
        assert report.total_weight_kg == pytest.approx(result.bom.total_weight, abs=0.01)
        assert sum(group.weight_kg for group in report.categories) == pytest.approx(
            report.total_weight_kg, abs=0.1
        )
        assert sum(group.count for group in report.categories) == report.unique_materials

    def test_ordered_by_group_then_code(self, result: EstimationResult) -> None:
        items = rawmat(result).items
        assert [item.no for item in items] == list(range(1, len(items) + 1))
        order = [name for name, _ in RAWMAT_CATEGORIES] + [OTHER_MATERIALS]
        keys = [(order.index(item.category), item.code.upper()) for item in items]
        assert keys == sorted(keys)

    def test_sources_list_sales_codes(self, result: EstimationResult) -> None:
        lines = {line.code: line for line in rawmat(result).items}
        assert lines["Blast"].sources == "1"
        assert lines["BU"].sources == "1, 4"

    def test_paint_rows_are_listed(self, result: EstimationResult) -> None:
        lines = {line.code: line for line in rawmat(result).items}
        assert lines["Blast"].category == "Blasting & Painting"
        assert lines["Blast"].cost_code == "10611"

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            ("BU", "Primary Steel"),
            ("BUCRB1", "Crane Components"),
            ("HRB30", "Fasteners & Bolts"),
            ("CS2", "Fasteners & Bolts"),
            ("Z20P", "Secondary Steel"),
            ("250Z20G", "Secondary Steel"),
            ("TTE", "Trim & Flashing"),
            ("GUT", "Gutters & Downspouts"),
            ("Blast", "Blasting & Painting"),
            ("PaintEP", "Blasting & Painting"),
            ("s5ow", "Roof/Wall Sheeting"),
            ("PPLBu", OTHER_MATERIALS),
        ],
    )
    def test_category(self, code: str, category: str) -> None:
        assert rawmat_category(code) == category


# ---------------------------------------------------------------------------
# JAF
# ---------------------------------------------------------------------------


class TestJaf:
    def test_figures(self, result: EstimationResult) -> None:
        report = jaf(result)
        summary = result.summary
        assert report.supply_price_aed == pytest.approx(summary.total_price_aed, abs=0.01)
        assert report.total_contract_aed == report.supply_price_aed
        assert report.contract_value_usd == round(summary.total_price_aed / AED_PER_USD)
        assert report.bottom_line_markup > 1
        assert report.scope == "Both"
        assert report.min_delivery_weeks == 10 + math.ceil(summary.steel_weight_kg / 1000 / 150)

    def test_erection(self, result: EstimationResult) -> None:
        report = jaf(result, erection_price=10_000)
        assert report.erection_price_aed == 10_000
        assert report.total_contract_aed == pytest.approx(report.supply_price_aed + 10_000)

    def test_value_added(self, result: EstimationResult) -> None:
        report = jaf(result)
        fob_material = fcpbs(result).fob.material_cost
        weight = result.summary.total_weight_kg
        assert report.value_added_l == pytest.approx(
            per_mt(result.summary.fob_price_aed - fob_material, weight), abs=0.01
        )
        assert report.value_added_r > report.value_added_l

    def test_steel_only_scope(self, crane: SubsystemBom) -> None:
        building = BuildingModel(
            spans="1@24", bays="6@6", back_eave_height=8, front_eave_height=8
        )
        dims = building.dimensions()
        primary = PrimaryCalculation(
            bom=crane.bom,
            dimensions=dims,
            loads=building.loads(),
            openings=OpeningAreas(),
            frame_weight=0.0,
        )
        assert scope_of(aggregate(primary)) == "Steel Only"


def test_per_mt() -> None:
    assert per_mt(1000, 2000) == pytest.approx(500)
    assert per_mt(1000, 0) == 0
