"""Tests for BuildingModel input handling, validation and geometry."""

from __future__ import annotations

import math
from typing import Any

import pytest

from quickest.models.blocks import CraneBlock, LinerBlock, MezzanineBlock, PartitionBlock
from quickest.models.building import BuildingModel
from quickest.models.enums import SubsystemKind


def _fields(building: BuildingModel) -> set[str]:
    return {error.field for error in building.validate()}


# ---------------------------------------------------------------------------
# Input mapping
# ---------------------------------------------------------------------------


class TestFromInput:
    def test_camel_case_keys(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(warehouse)
        assert building.spans == "1@24"
        assert building.back_eave_height == 8
        assert building.project_name == "Test Project"

    def test_snake_case_keys(self) -> None:
        building = BuildingModel.from_input({"back_eave_height": 7.5})
        assert building.back_eave_height == 7.5

    def test_unknown_keys_are_ignored(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "colourScheme": "Blue"})
        assert building.is_valid()

    def test_bad_value_falls_back_and_is_reported(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "windSpeed": "fast"})
        assert building.wind_speed == 130.0
        assert "wind_speed" in _fields(building)

    def test_none_payload(self) -> None:
        building = BuildingModel.from_input(None)
        assert building.spans == ""

    def test_nested_blocks(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {**warehouse, "cranes": [{"capacity": 10, "craneRun": "6@6"}]}
        )
        assert building.cranes == [CraneBlock(capacity=10, crane_run="6@6")]

    def test_bare_numbers_are_dimension_lists(self) -> None:
        building = BuildingModel.from_input(
            {"spans": 24, "bays": "6@6", "backEaveHeight": 8, "frontEaveHeight": 8}
        )
        assert building.spans == "24"
        assert building.validate() == []
        assert building.dimensions().width == pytest.approx(24)

    def test_bare_numbers_in_blocks(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {**warehouse, "cranes": [{"craneRun": 36}], "partitions": [{"colSpacing": 6.5}]}
        )
        assert building.cranes[0].crane_run == "36"
        assert building.partitions[0].col_spacing == "6.5"
        assert building.validate() == []

    def test_paint_system_default(self, warehouse: dict[str, Any]) -> None:
        assert BuildingModel.from_input(warehouse).paint_system == "Primer Only"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidate:
    def test_valid(self, warehouse: dict[str, Any]) -> None:
        assert BuildingModel.from_input(warehouse).validate() == []

    def test_empty_payload_reports_every_required_field(self) -> None:
        fields = _fields(BuildingModel.from_input({}))
        assert {"spans", "bays", "back_eave_height", "front_eave_height"} <= fields

    def test_bad_dimension_list(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "spans": "abc"})
        errors = building.validate()
        assert [e.field for e in errors] == ["spans"]
        assert "abc" in errors[0].message

    def test_zero_length(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "bays": "2@0"})
        assert "bays" in _fields(building)

    def test_negative_wind_speed(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "windSpeed": -5})
        assert "wind_speed" in _fields(building)

    def test_block_errors_are_prefixed(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {**warehouse, "mezzanines": [{"colSpacing": "", "beamSpacing": "3@5"}]}
        )
        assert "mezzanines[0].col_spacing" in _fields(building)

    def test_member_count_is_capped(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {
                **warehouse,
                "bays": "1e12@6",
                "mezzanines": [{"colSpacing": "5000@1", "beamSpacing": "3@5"}],
            }
        )
        errors = {error.field: error.message for error in building.validate()}
        assert "too many members" in errors["bays"]
        assert "too many members" in errors["mezzanines[0].col_spacing"]
        assert BuildingModel.from_input({**warehouse, "bays": "1000@0.5"}).is_valid()

    @pytest.mark.parametrize("size", [200, 250, 360])
    def test_purlin_sizes(self, warehouse: dict[str, Any], size: int) -> None:
        assert BuildingModel.from_input({**warehouse, "purlinSize": size}).is_valid()

    def test_unknown_purlin_size(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "purlinSize": 300})
        assert _fields(building) == {"purlin_size"}

    def test_partition_direction(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "partitions": [{"direction": "Up"}]})
        assert _fields(building) == {"partitions[0].direction"}

    def test_validation_does_not_raise(self) -> None:
        building = BuildingModel.from_input({"spans": "??", "bays": "!!"})
        assert len(building.validate()) >= 2


# ---------------------------------------------------------------------------
# Loads and geometry
# ---------------------------------------------------------------------------


class TestGeometry:
    def test_dimensions(self, warehouse: dict[str, Any]) -> None:
        dims = BuildingModel.from_input(warehouse).dimensions()
        assert dims.width == pytest.approx(24)
        assert dims.length == pytest.approx(36)
        assert dims.n_spans == 1
        assert dims.n_bays == 6
        assert dims.n_frames == 7
        assert dims.avg_bay == pytest.approx(6)
        assert dims.slope == pytest.approx(0.1)
        assert dims.peak_height == pytest.approx(9.2)
        assert dims.rafter_length == pytest.approx(12 * math.sqrt(1.01))
        assert dims.roof_area == pytest.approx(2 * 12 * math.sqrt(1.01) * 36)
        assert dims.back_wall_area == pytest.approx(8 * 36)

    def test_multi_span(self, warehouse: dict[str, Any]) -> None:
        dims = BuildingModel.from_input({**warehouse, "spans": "2@24,1@18"}).dimensions()
        assert dims.width == pytest.approx(66)
        assert dims.n_spans == 3
        assert dims.avg_span == pytest.approx(22)

    def test_default_slope(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "slopes": ""})
        assert building.roof_slope() == pytest.approx(0.1)

    def test_smallest_slope_wins(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "slopes": "1@0.1,1@0.05"})
        assert building.roof_slope() == pytest.approx(0.05)

    def test_per_span_slope_override(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "spans": "2@12@0.08"})
        assert building.roof_slope() == pytest.approx(0.08)
        assert building.dimensions().width == pytest.approx(24)

    def test_loads(self, warehouse: dict[str, Any]) -> None:
        loads = BuildingModel.from_input(warehouse).loads()
        assert loads.wind_load == pytest.approx(130**2 / 20000)
        assert loads.total_purlin_load == pytest.approx(0.67)
        assert loads.total_frame_load == pytest.approx(0.67)


# ---------------------------------------------------------------------------
# Sub-system blocks
# ---------------------------------------------------------------------------


class TestSubsystemBlocks:
    def test_no_blocks(self, warehouse: dict[str, Any]) -> None:
        assert BuildingModel.from_input(warehouse).subsystem_blocks() == []

    def test_estimate_order(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {
                **warehouse,
                "liners": [{}],
                "cranes": [{}],
                "accessoryItems": [{"description": "Ridge Ventilator", "quantity": 2}],
                "mezzanines": [{"colSpacing": "2@6", "beamSpacing": "3@5"}],
            }
        )
        kinds = [kind for kind, _ in building.subsystem_blocks()]
        assert kinds == [
            SubsystemKind.MEZZANINE,
            SubsystemKind.CRANE,
            SubsystemKind.ACCESSORY,
            SubsystemKind.LINER,
        ]

    def test_accessory_block_takes_wall_skins(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {
                **warehouse,
                "wallCore": "PU50",
                "accessoryItems": [{"description": "Louver 600x600", "quantity": 1}],
            }
        )
        block = building.accessory_block()
        assert block is not None
        assert block.wall_core == "PU50"

    def test_liner_inherits_building_dimensions(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "spans": "1@30", "liners": [{}]})
        ((_, block),) = building.subsystem_blocks()
        assert isinstance(block, LinerBlock)
        assert block.building_width == pytest.approx(30)
        assert block.building_length == pytest.approx(36)
        assert block.rafter_length == pytest.approx(2 * 15 * math.sqrt(1.01))

    def test_liner_keeps_explicit_dimensions(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input({**warehouse, "liners": [{"buildingWidth": 12}]})
        ((_, block),) = building.subsystem_blocks()
        assert block.building_width == pytest.approx(12)

    def test_partition_across_spaces_columns_over_the_width(
        self, warehouse: dict[str, Any]
    ) -> None:
        building = BuildingModel.from_input({**warehouse, "spans": "1@30", "partitions": [{}]})
        ((kind, block),) = building.subsystem_blocks()
        assert kind == SubsystemKind.PARTITION
        assert isinstance(block, PartitionBlock)
        assert block.col_spacing == "5@6"

    def test_partition_along_follows_the_bays(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {**warehouse, "bays": "2@7.5,4@6", "partitions": [{"direction": "Along"}]}
        )
        ((_, block),) = building.subsystem_blocks()
        assert block.col_spacing == "2@7.5,4@6"

    def test_partition_keeps_explicit_spacing(self, warehouse: dict[str, Any]) -> None:
        building = BuildingModel.from_input(
            {**warehouse, "partitions": [{"direction": "Along", "colSpacing": "3@4"}]}
        )
        ((_, block),) = building.subsystem_blocks()
        assert block.col_spacing == "3@4"

    def test_mezzanine_block_defaults(self) -> None:
        block = MezzanineBlock(col_spacing="2@6", beam_spacing="3@5")
        assert block.validate_block("m") == []
        assert block.sales_code == 2
