"""Roof and wall liner panels hung below the main cladding."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from quickest.models.blocks import LinerBlock, has_skin
from quickest.models.enums import LinerType, SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, fmt

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

LINER_WASTE = 1.075
ROOF_LAP = 1.12
WALL_LAP = 1.1
SCREWS_PER_M2 = 4
STITCHES_PER_M2 = 0.5
# Rafter slope assumed when no rafter length is given (1:10)
DEFAULT_SLOPE = 0.1


def liner_screw_code(liner: str) -> str:
    text = liner.upper()
    if text.startswith("PUA"):
        return "SS4"
    if text.startswith("PUS"):
        return "CS4"
    if "A" in text:
        return "SS2"
    return "CS2"


def liner_stitch_code(liner: str) -> str:
    return "SS1" if "a" in liner.lower() else "CS1"


def liner_areas(block: LinerBlock) -> tuple[float, float]:
    """Roof and wall liner areas in m2, waste included.

    Areas given on the block are used as is; zero areas are derived from
    the building dimensions less the openings.
    """
    width = block.building_width
    length = block.building_length
    rafter = block.rafter_length
    if rafter <= 0:
        rafter = width * math.sqrt(1 + DEFAULT_SLOPE**2)

    endwall = block.endwall_area
    if endwall <= 0:
        eave = (block.back_eave_height + block.front_eave_height) / 2
        peak = eave + width / 2 * DEFAULT_SLOPE
        endwall = eave * width + (peak - eave) * width / 2

    roof = block.roof_area
    if roof == 0:
        roof = rafter * length * ROOF_LAP - block.roof_openings
    wall = block.wall_area
    if wall == 0:
        eaves = block.back_eave_height + block.front_eave_height
        wall = length * eaves * WALL_LAP + 2 * endwall * WALL_LAP - block.wall_openings
    return roof * LINER_WASTE, wall * LINER_WASTE


class LinerCalculator(SubsystemCalculator[LinerBlock]):
    kind = SubsystemKind.LINER
    block_type = LinerBlock

    def _build(self, block: LinerBlock, out: BomBuilder) -> None:
        roof_area, wall_area = liner_areas(block)
        title = (
            f"{block.description} (Building: {fmt(block.building_width)}m x "
            f"{fmt(block.building_length)}m)"
        )
        liner_type = block.type.strip()
        with out.section(title):
            if liner_type in (LinerType.ROOF, LinerType.BOTH):
                self._liner("Roof Liner", block.roof_liner_type, roof_area, out)
            if liner_type in (LinerType.WALL, LinerType.BOTH):
                self._liner("Wall Liner", block.wall_liner_type, wall_area, out)

    def _liner(self, label: str, liner: str, area: float, out: BomBuilder) -> None:
        if not has_skin(liner) or area <= 0:
            return
        out.add(self.resolve(liner), 1, round(area, 2), header=label)
        out.add(liner_screw_code(liner), 1, int(area * SCREWS_PER_M2))
        stitches = int(area * STITCHES_PER_M2)
        if stitches > 0:
            out.add(liner_stitch_code(liner), 1, stitches)
