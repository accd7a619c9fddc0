"""Internal partition walls: columns, girts, sheeting and insulation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.dimensions import parse
from quickest.models.blocks import PartitionBlock, has_skin
from quickest.models.enums import SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, fmt, screw_code

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

PARTITION_GIRT_SPACING = 1.9


def partition_column_code(design_index: float) -> str:
    if design_index > 500:
        return "T200"
    if design_index > 300:
        return "T150"
    if design_index > 150:
        return "IPEa"
    if design_index > 80:
        return "C20G"
    return "C15G"


class PartitionCalculator(SubsystemCalculator[PartitionBlock]):
    kind = SubsystemKind.PARTITION
    block_type = PartitionBlock

    def _build(self, block: PartitionBlock, out: BomBuilder) -> None:
        spacing = parse(block.col_spacing)
        length = spacing.total_sum
        n_bays = spacing.total_count
        wind = block.wind_speed**2 / 20000
        height = block.height
        clad_height = height - block.open_height

        title = f"Partition: {block.description}, Width={fmt(length)}m, Height={fmt(height)}m"
        with out.section(title):
            header = "Partition Columns"
            last = len(spacing) - 1
            for index, group in enumerate(spacing):
                quantity = group.count + (1 if index == last else 0)
                design_index = wind * height**3 * group.value / 3
                out.add(partition_column_code(design_index), height, quantity, header=header)
                header = ""
            out.add("CFClip", 1, 4 * n_bays + 4)
            out.add("HSB12", 1, 6 * n_bays + 6)
            out.add("AB16", 1, 2 * n_bays + 2)

            lines = int(clad_height / PARTITION_GIRT_SPACING) + 1
            clips = bolts = sag_rods = 0
            header = "Partition Wall Girts"
            for group in spacing:
                quantity = group.count * lines
                if quantity <= 0:
                    continue
                code = self._store.girt_code(2.01 * wind * group.value**2)
                out.add(code, group.value, quantity, header=header)
                header = ""
                clips += 2 * quantity
                bolts += 8 * quantity
                if group.value > 7.5:
                    sag_rods += quantity
            out.add("HSB12", 1, bolts)
            if clips:
                out.add("CFClip", 1, clips)
            out.add("Gang", 1, 2 * length)
            if block.open_height == 0:
                out.add("Bang", 1, 2 * length)
            if sag_rods:
                out.add("SR12", 1, sag_rods)

            area = length * clad_height
            trim = fasteners = 0.0
            header = "Sheeting & Trims"
            for sheeting, screws_per_m2 in ((block.front_sheeting, 4), (block.back_sheeting, 1)):
                if not has_skin(sheeting):
                    continue
                out.add(self.resolve(sheeting), 1, area, header=header)
                header = ""
                trim += length + 2 * clad_height
                fasteners += screws_per_m2 * area
            if trim:
                out.add("TTS1", 1, trim)
            if fasteners:
                screw = screw_code(block.front_sheeting, block.back_sheeting)
                out.add(screw, 1, fasteners)

            if has_skin(block.insulation):
                out.add(self.resolve(block.insulation), 1, area, header="Insulation")
