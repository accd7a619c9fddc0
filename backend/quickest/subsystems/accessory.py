"""Description-driven accessories: skylights, doors, louvers and ventilators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.models.blocks import AccessoryBlock
from quickest.models.enums import SubsystemKind
from quickest.subsystems.base import SubsystemCalculator

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

# Input-sheet dropdown text -> product code
ACCESSORY_CODES: dict[str, str] = {
    "Skylight 3250mm (GRP,Single Skin )": "SKY1S",
    "Skylight 3250mm (GRP, Double Skin 35 mm thk)": "SKY2S35",
    "Skylight 3250mm (GRP, Double Skin 50 mm thk)": "SKY2S50",
    "Skylight 3250mm (GRP, Double Skin 75 mm thk)": "SKY2S75",
    "Skylight 3250mm (GRP, Double Skin 100 mm thk)": "SKY2S100",
    "Personnel Door (900x2100)": "PD09",
    "Personnel Door (1200x2100)": "PD12",
    "Personnel Door Double (1800x2100)": "PD18",
    "Slide door 3mX3m Steel Only with Framed Opening (Top Sliding)": "SD3T",
    "Slide door 4mX4m Steel Only with Framed Opening (Top Sliding)": "SD4T",
    "Slide door 5mX5m Steel Only with Framed Opening (Top Sliding)": "SD5T",
    "Slide door 6mX6m Steel Only with Framed Opening (Top Sliding)": "SD6T",
    "Slide door 3mX3m Steel Only with Framed Opening (Dual Sliding)": "SD3D",
    "Slide door 4mX4m Steel Only with Framed Opening (Dual Sliding)": "SD4D",
    "Slide door 5mX5m Steel Only with Framed Opening (Dual Sliding)": "SD5D",
    "Slide door 6mX6m Steel Only with Framed Opening (Dual Sliding)": "SD6D",
    "Louver 600x600": "LV66",
    "Louver 900x900": "LV99",
    "Louver 1200x900": "LV129",
    "Ridge Ventilator": "RV",
    "Turbo Ventilator": "TV",
}

# Sliding door leaf area in m2, clad with the wall sheeting
SLIDING_DOOR_AREAS: dict[str, float] = {
    "SD3T": 9,
    "SD3D": 9,
    "SD4T": 16,
    "SD4D": 16,
    "SD5T": 25,
    "SD5D": 25,
    "SD6T": 36,
    "SD6D": 36,
}

SKYLIGHTS = frozenset({"SKY1S", "SKY2S35", "SKY2S50", "SKY2S75", "SKY2S100"})

# Wire mesh under one skylight: 3.8 m long by a 1.219 m sheet.
WIRE_MESH_PER_SKYLIGHT = 3.8 * 1.219


class AccessoryCalculator(SubsystemCalculator[AccessoryBlock]):
    kind = SubsystemKind.ACCESSORY
    block_type = AccessoryBlock

    def accessory_code(self, description: str) -> str:
        """Code for a dropdown entry.

        Exact match first, then any known entry contained in the text, then
        the product catalog.
        """
        if description in ACCESSORY_CODES:
            return ACCESSORY_CODES[description]
        lowered = description.lower()
        for text, code in ACCESSORY_CODES.items():
            if text.lower() in lowered:
                return code
        return self._store.code_of(description).code

    def _build(self, block: AccessoryBlock, out: BomBuilder) -> None:
        items = [
            (item, self.accessory_code(item.description))
            for item in block.items
            if item.description.strip() and item.quantity > 0
        ]
        if not items:
            return

        wire_mesh = 0.0
        door_area = 0.0
        with out.section(block.description):
            for item, code in items:
                out.add(code, 1, item.quantity, header=item.description)
                if code in SKYLIGHTS:
                    wire_mesh += item.quantity * WIRE_MESH_PER_SKYLIGHT
                door_area += SLIDING_DOOR_AREAS.get(code, 0) * item.quantity

            if wire_mesh > 0:
                out.add("WRM", 1, round(wire_mesh, 2), header="GI Wire Mesh for Skylights")
            if door_area > 0:
                self._door_sheeting(block, out, door_area)

    def _door_sheeting(self, block: AccessoryBlock, out: BomBuilder, area: float) -> None:
        top = self.resolve(block.wall_top_skin)
        if block.wall_core != "-" and block.wall_bot_skin != "-":
            panel = f"PU{block.wall_top_skin}{block.wall_core}{block.wall_bot_skin}"
            out.header("Door Sheeting")
            out.add(top, 1, area, header=f"SWP Code: {panel}")
            out.add(self.resolve(block.wall_core), 1, area)
            out.add(self.resolve(block.wall_bot_skin), 1, area)
        else:
            out.add(top, 1, area, header="Door Sheeting")
