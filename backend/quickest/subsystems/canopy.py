"""Canopies, roof extensions and fascias along a building wall."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.dimensions import DimensionList, parse
from quickest.models.blocks import CanopyBlock, has_skin
from quickest.models.enums import SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, cold_formed_length, fmt, screw_code

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

# Canopy dead load allowance on top of the live load, kN/m2
CANOPY_DEAD_LOAD = 0.15
# Roof extensions wider than this are framed like a canopy.
MAX_EXTENSION_WIDTH = 1.5
SIDEWALLS = ("Back Sidewall", "Front Sidewall")


def canopy_post_code(design_index: float) -> str:
    if design_index > 100:
        return "UB4"
    if design_index > 60:
        return "UB3"
    if design_index > 49:
        return "UB2"
    return "IPEa"


def fascia_post_code(design_index: float) -> str:
    if design_index > 6000:
        return "UB3"
    if design_index > 2500:
        return "UB2"
    return "IPEa"


def _group_counts(codes: list[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for code in codes:
        counts[code] = counts.get(code, 0) + 1
    return counts


class CanopyCalculator(SubsystemCalculator[CanopyBlock]):
    kind = SubsystemKind.CANOPY
    block_type = CanopyBlock

    def _build(self, block: CanopyBlock, out: BomBuilder) -> None:
        spacing = parse(block.col_spacing)
        wind_load = block.wind_speed**2 / 20000
        design_load = max(block.live_load + CANOPY_DEAD_LOAD, wind_load)

        kind = block.type.strip()[:1].upper()
        if kind == "R" and block.width <= MAX_EXTENSION_WIDTH:
            self._roof_extension(block, spacing, design_load, out)
        elif kind == "F":
            self._fascia(block, spacing, wind_load, out)
        else:
            self._canopy(block, spacing, design_load, out)

    def _roof_extension(
        self, block: CanopyBlock, spacing: DimensionList, load: float, out: BomBuilder
    ) -> None:
        length = spacing.total_sum
        n_posts = spacing.total_count
        title = (
            f"Roof Extension: {block.location}, "
            f"Length={fmt(length)}m, Width={fmt(block.width)}m"
        )
        with out.section(title):
            if block.location in SIDEWALLS:
                purlin_lines = 1
                bolts = 0
                out.add("IPEa", 0.2 + block.width, n_posts + 1)
                out.add("MFC1", 1, 2 * n_posts + 4)
                out.add("HSB16", 1, 8 * n_posts + 6)
                header = "Purlins"
                for group in spacing:
                    code = self._store.purlin_code(0.65 * load * group.value**2)
                    quantity = group.count * purlin_lines
                    out.add(code, cold_formed_length(group.value), quantity, header=header)
                    header = ""
                    bolts += quantity * 2
            else:
                purlin_lines = int(length / 1.5) + 1
                code = self._store.purlin_code(load * block.width**2)
                out.add(code, block.width + 0.706, purlin_lines, header="Purlins")
                out.add("Gang", 1, length)
                bolts = 6 * purlin_lines
            out.add("HSB12", 1, bolts)
            self._sheeting_and_trims(block, length, purlin_lines, out)

    def _canopy(
        self, block: CanopyBlock, spacing: DimensionList, load: float, out: BomBuilder
    ) -> None:
        bays = spacing.expand()
        length = spacing.total_sum
        n_posts = spacing.total_count
        title = (
            f"Canopy: {block.location}, Length={fmt(length)}m, "
            f"Height={fmt(block.height)}m, Width={fmt(block.width)}m"
        )
        with out.section(title):
            posts = _group_counts([canopy_post_code(load * block.width**2 * bay) for bay in bays])
            header = "Rafters"
            for code, quantity in posts.items():
                out.add(code, block.height + block.width + 0.2, quantity, header=header)
                header = ""
            out.add("MFC1", 1, n_posts)
            out.add("HSB16", 1, 8 * n_posts)

            purlin_lines = int(block.width / 1.5) + 1
            first = bays[0]
            quantity = purlin_lines
            if len(bays) == 1 and n_posts > 1:
                quantity = 2 * purlin_lines
            code = self._store.purlin_code(1.25 * load * first**2)
            out.add(code, cold_formed_length(first), quantity, header="End Bay Purlins")
            bolts = quantity * 2

            if len(bays) > 1:
                header = "Interior Bay Purlins"
                for bay in bays[1:-1]:
                    code = self._store.purlin_code(load * bay**2)
                    out.add(code, cold_formed_length(bay), purlin_lines, header=header)
                    header = ""
                    bolts += purlin_lines * 8
                last = bays[-1]
                code = self._store.purlin_code(1.25 * load * last**2)
                out.add(code, cold_formed_length(last), purlin_lines)
                bolts += purlin_lines * 2

            out.add("HSB12", 1, bolts)
            self._sheeting_and_trims(block, length, purlin_lines, out)

    def _fascia(
        self, block: CanopyBlock, spacing: DimensionList, wind_load: float, out: BomBuilder
    ) -> None:
        length = spacing.total_sum
        n_posts = spacing.total_count
        depth = block.height + block.width
        title = f"Fascia: {block.location}, Length={fmt(length)}m, Height={fmt(block.height)}m"
        with out.section(title):
            posts = _group_counts(
                [fascia_post_code(block.wind_speed * depth * bay) for bay in spacing.expand()]
            )
            header = "Posts"
            for code, quantity in posts.items():
                out.add(code, depth + 0.2, quantity, header=header)
                header = ""
            out.add("MFC1", 1, n_posts)
            out.add("HSB16", 1, 8 * n_posts)

            girt_lines = 3 if block.height <= 1.2 else int(depth / 1.7) + 1
            clips = bolts = 0
            header = "Fascia Girts"
            for group in spacing:
                quantity = group.count * girt_lines
                if quantity <= 0:
                    continue
                code = self._store.girt_code(2 * wind_load * group.value**2)
                out.add(code, group.value, quantity, header=header)
                header = ""
                clips += 2 * quantity
                bolts += 8 * quantity
            out.add("HSB12", 1, bolts)
            if clips:
                out.add("CFClip", 1, clips)

            if has_skin(block.wall_sheeting):
                area = length * depth
                out.add(self.resolve(block.wall_sheeting), 1, area, header="Fascia Sheeting")
                out.add("TTS1", 1, 2 * length + 4 * depth)
                out.add(screw_code(block.wall_sheeting), 1, 4 * area)

    def _sheeting_and_trims(
        self, block: CanopyBlock, length: float, purlin_lines: int, out: BomBuilder
    ) -> None:
        header = "Sheeting & Trims"
        fasteners = 0.0
        if has_skin(block.roof_sheeting):
            out.add(self.resolve(block.roof_sheeting), 1, block.width * length, header=header)
            header = ""
            fasteners += (purlin_lines * 3 + 3) * length

        if block.drainage == "Eave Trim":
            out.add("ETS1", 1, length)
        elif block.drainage == "Gutter+Dwnspts":
            out.add("EGS1", 1, length)
            out.add("DSS1", block.height, int(length / 12) + 1)

        if has_skin(block.soffit):
            out.add(self.resolve(block.soffit), 1, block.width * length, header=header)
            out.add("STS1", 1, length)
            fasteners += length * 9

        if fasteners > 0:
            out.add(screw_code(block.roof_sheeting, block.soffit), 1, fasteners)
