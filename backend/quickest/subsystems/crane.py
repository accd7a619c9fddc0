"""EOT crane runway beams, corbels and brackets."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

from quickest.dimensions import parse
from quickest.models.blocks import CraneBlock
from quickest.models.enums import SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, fmt

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

DUTY_FACTORS = {"L": 1.0, "M": 1.1, "H": 1.2}

# Runway beams heavier than this index are built up.
BUILT_UP_INDEX = 1400


class RunwayCodes(NamedTuple):
    beam: str
    corbel: str
    bracket: str


# (index above which the row applies, codes), heaviest first
_RUNWAY_TABLE: tuple[tuple[float, RunwayCodes], ...] = (
    (1000, RunwayCodes("BUCRB4", "CRC4", "BUCRBr6")),
    (800, RunwayCodes("BUCRB3", "CRC4", "BUCRBr5")),
    (600, RunwayCodes("BUCRB2", "CRC3", "BUCRBr5")),
    (400, RunwayCodes("BUCRB2", "CRC3", "BUCRBr3")),
)
_LIGHTEST = RunwayCodes("BUCRB1", "CRC2", "BUCRBr3")


def duty_factor(duty: str) -> float:
    return DUTY_FACTORS.get(duty.strip()[:1].upper(), 1.0)


def crane_beam_index(capacity: float, bay: float, rail_centers: float, duty: str = "M") -> float:
    """Runway design index: capacity x bay x sqrt(rail centres) x duty factor."""
    return capacity * bay * math.sqrt(rail_centers) * duty_factor(duty)


def runway_codes(design_index: float) -> RunwayCodes:
    for threshold, codes in _RUNWAY_TABLE:
        if design_index > threshold:
            return codes
    return _LIGHTEST


class CraneCalculator(SubsystemCalculator[CraneBlock]):
    kind = SubsystemKind.CRANE
    block_type = CraneBlock

    def _build(self, block: CraneBlock, out: BomBuilder) -> None:
        run = parse(block.crane_run)
        n_bays = run.total_count
        header = (
            f"{block.description} Capacity={fmt(block.capacity)} MT, "
            f"Run={block.crane_run} Width={fmt(block.rail_centers)}"
        )

        with out.section(header):
            last = len(run) - 1
            for index, group in enumerate(run):
                design_index = crane_beam_index(
                    block.capacity, group.value, block.rail_centers, block.duty
                )
                codes = runway_codes(design_index)
                beam, size = codes.beam, group.value
                if design_index > BUILT_UP_INDEX:
                    beam = "BUB"
                    size = int(design_index / BUILT_UP_INDEX * 101 * group.value)
                quantity = 2 * group.count
                out.add(beam, size, quantity)
                out.add(codes.corbel, group.value, quantity)
                out.add(codes.bracket, 1, quantity + (2 if index == last else 0))

            out.add("CRA", 1, 4 * n_bays)
            out.add("CRS", 1, 4)

            # Extra frame steel to carry the runway, booked by weight
            average_index = crane_beam_index(
                block.capacity, run.total_sum / n_bays, block.rail_centers, block.duty
            )
            extra_per_frame = int(4 * math.sqrt(average_index))
            out.add("BU", 1, extra_per_frame * (2 * n_bays + 2))
            out.add("HSB2060", 1, 8 * (n_bays + 1))
            out.add("HSB16", 1, 8 * n_bays)
