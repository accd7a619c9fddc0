"""Tests for wall opening sizes and areas."""

from __future__ import annotations

import pytest

from quickest.models.blocks import Opening
from quickest.models.building import BuildingModel, Dimensions
from quickest.openings import MAX_OPENINGS, OpeningAreas, is_sized, parse_opening_size


@pytest.fixture()
def dims() -> Dimensions:
    """24m x 36m, 8m eaves, 1:10 roof."""
    return BuildingModel(
        spans="1@24", bays="6@6", back_eave_height=8, front_eave_height=8
    ).dimensions()


class TestOpeningSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            ("4x4", (4.0, 4.0)),
            ("4X5", (4.0, 5.0)),
            ("3.5x4.2", (3.5, 4.2)),
            ("Full", (0.0, 0.0)),
            ("6xFull", (6.0, 0.0)),
            ("none", (0.0, 0.0)),
            ("", (0.0, 0.0)),
        ],
    )
    def test_parse(self, size: str, expected: tuple[float, float]) -> None:
        assert parse_opening_size(size) == pytest.approx(expected)

    def test_is_sized(self) -> None:
        assert is_sized("4x4")
        assert is_sized("Full")
        assert not is_sized("4")


class TestOpeningAreas:
    def test_no_openings(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings([], dims)
        assert areas.total == 0
        assert areas.girt_factor(dims) == pytest.approx(1.0)

    def test_sized_opening(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings(
            [Opening(location="Front Sidewall", size="4x4")], dims
        )
        assert areas.front_sidewall == pytest.approx(16)
        assert areas.sidewalls == pytest.approx(16)
        assert areas.total_width == pytest.approx(4)
        assert areas.width_on("Front Sidewall") == pytest.approx(4)
        assert areas.width_on("Back Sidewall") == 0
        assert areas.girt_factor(dims) == pytest.approx(1 - 16 / (2 * 8 * 36))

    def test_full_opening_takes_the_wall(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings([Opening(location="Back Sidewall", size="Full")], dims)
        assert areas.back_sidewall == pytest.approx(36 * 8)
        assert areas.details[0].width == pytest.approx(36)
        assert areas.details[0].height == pytest.approx(8)

    def test_area_is_capped_to_the_wall(self, dims: Dimensions) -> None:
        openings = [Opening(location="Front Sidewall", size="Full")] * 2
        areas = OpeningAreas.from_openings(openings, dims)
        assert areas.front_sidewall == pytest.approx(36 * 8)

    def test_endwall_full_height_uses_peak(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings([Opening(location="Left Endwall", size="4xFull")], dims)
        assert areas.left_endwall == pytest.approx(4 * 9.2)
        assert areas.right_endwall == 0

    def test_endwall_capped_to_endwall_area(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings([Opening(location="Right Endwall", size="Full")], dims)
        assert areas.right_endwall == pytest.approx(dims.endwall_area)

    def test_unsized_rows_are_skipped(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings(
            [Opening(location="Front Sidewall", size=""), Opening(size="door")], dims
        )
        assert areas.details == ()

    def test_only_the_first_rows_count(self, dims: Dimensions) -> None:
        openings = [Opening(location="Front Sidewall", size="1x1")] * (MAX_OPENINGS + 3)
        areas = OpeningAreas.from_openings(openings, dims)
        assert areas.front_sidewall == pytest.approx(MAX_OPENINGS)

    def test_unknown_location_counts_width_only(self, dims: Dimensions) -> None:
        areas = OpeningAreas.from_openings([Opening(location="Roof", size="2x2")], dims)
        assert areas.total == 0
        assert areas.total_width == pytest.approx(2)
