"""Mezzanine floors: deck, joists, beams and columns."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from quickest.dimensions import parse
from quickest.models.blocks import MezzanineBlock
from quickest.models.enums import SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, fmt

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

DECK_CODES = {
    "Deck-0.75": "Deck75",
    "Deck-1.00": "Deck100",
    "Deck-1.25": "Deck125",
    "Chequered Plate": "ChqPl",
}

DEFAULT_JOIST_SPACING = 1.5
# Beams lighter than this (kg per piece) take the small end connection.
SMALL_BEAM_LIMIT = 450


def column_selection(design_index: float, size: float) -> tuple[str, float]:
    """Column code and size; built-up columns are sized in kg per piece."""
    if design_index < 600:
        return "IPEa", size
    if design_index < 1950:
        return "T150", size
    if design_index < 4500:
        return "T200", size
    return "BUC", int(size * design_index / 4500 * 36)


class MezzanineCalculator(SubsystemCalculator[MezzanineBlock]):
    kind = SubsystemKind.MEZZANINE
    block_type = MezzanineBlock

    def _build(self, block: MezzanineBlock, out: BomBuilder) -> None:
        col_spacing = parse(block.col_spacing).expand()
        beam_list = parse(block.beam_spacing)
        beam_spacing = beam_list.expand()
        joist_spacing = parse(block.joist_spacing).expand()

        width = sum(col_spacing)
        length = sum(beam_spacing)
        area = width * length
        load = block.dead_load + block.live_load + block.additional_load
        min_weight_per_m = math.sqrt(block.min_thickness / 3.5) * 18.5
        double_welded = block.double_welded == "Yes"

        title = f"{block.description} ({fmt(width)}m X {fmt(length)}m Load= {fmt(load)} kN/m2)"
        with out.section(title):
            out.add(DECK_CODES.get(block.deck_type, "Deck75"), 1, area)
            out.add("MEA", 1, 2 * (length + width))
            out.add("MDF", 1, 6 * area)

            # Joists
            spacing = joist_spacing[0] if joist_spacing else DEFAULT_JOIST_SPACING
            n_joists = int(width / spacing) + 1
            header = f"Joists ({n_joists} runs @ {fmt(length)}m)"
            built_up_length = 0.0
            clips = 0
            for beam in beam_list:
                quantity = n_joists * beam.count
                design_index = beam.value**2 * load * spacing
                code = self._store.joist_code(design_index)
                size: float = beam.value
                if code == "BUB":
                    size = int(design_index / 1000 * beam.value * 40)
                    built_up_length += quantity * beam.value
                out.add(code, size, quantity, header=header)
                header = ""
                clips += quantity
            if double_welded:
                out.add("DSW", 1, built_up_length)
            out.add("BuLeng", 1, built_up_length)
            out.add("JCL", 1, 2 * clips)
            out.add("HSB12", 1, 2 * clips * 3)

            # Beams, one line per beam grid line across every column bay
            n_lines = len(beam_spacing) + 1
            beams: dict[int, int] = {}
            beam_length = 0.0
            for i in range(n_lines):
                if 0 < i < n_lines - 1:
                    line_load = load * (beam_spacing[i - 1] + beam_spacing[i]) / 2
                elif i == 0:
                    line_load = 0.6 * load * beam_spacing[0]
                else:
                    line_load = 0.6 * load * beam_spacing[-1]
                for span in col_spacing:
                    moment = line_load * span**2 / 8
                    weight_per_m = max(
                        0.55 * moment / span + 0.66 * moment**0.67,
                        1.32 * moment**0.67,
                        min_weight_per_m,
                    )
                    piece = int(weight_per_m * span)
                    beams[piece] = beams.get(piece, 0) + 1
                    beam_length += span

            header = f"Mezzanine Beams {len(col_spacing) * n_lines} Nos"
            small_clips = large_clips = 0
            for piece, quantity in beams.items():
                out.add("BUB", piece, quantity, header=header)
                header = ""
                if piece < SMALL_BEAM_LIMIT:
                    small_clips += quantity * 4
                else:
                    large_clips += quantity * 4
            if double_welded:
                out.add("DSW", 1, beam_length)
            out.add("BuLeng", 1, beam_length)
            if small_clips:
                out.add("MFC1", 1, small_clips)
            if large_clips:
                out.add("MFC3", 1, large_clips)
            if small_clips + large_clips:
                out.add("HSB2060", 1, 6 * small_clips + 8 * large_clips)

            # Columns at every grid intersection
            n_columns = (len(col_spacing) + 1) * (len(beam_spacing) + 1)
            height = max(2.0, block.clear_height + 0.3)
            columns: dict[tuple[str, float], int] = {}
            for i in range(len(col_spacing) + 1):
                across = (col_spacing[i - 1] if i > 0 else 0) + (
                    col_spacing[i] if i < len(col_spacing) else 0
                )
                for j in range(len(beam_spacing) + 1):
                    along = (beam_spacing[j - 1] if j > 0 else 0) + (
                        beam_spacing[j] if j < len(beam_spacing) else 0
                    )
                    design_index = load * along * across / 4 * height**2
                    key = column_selection(design_index, block.clear_height + 0.3)
                    columns[key] = columns.get(key, 0) + 1

            header = f"Mezzanine Columns {n_columns} Nos"
            for (code, size), quantity in columns.items():
                out.add(code, size, quantity, header=header)
                header = ""
            out.add("MFC1", 1, n_columns)
            out.add("AB24", 1, 4 * n_columns)

            if block.n_stairs > 0:
                out.add("DSP", 1, block.n_stairs)
