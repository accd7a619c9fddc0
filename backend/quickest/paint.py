"""Blasting and paint rows for the painted steel of a bill of materials.

Built-up and hot-rolled items carry a paintable surface area per unit in
the catalog. The area of every such row is summed and booked twice under
FCPBS category B: once for blasting, once for the chosen paint system.
Each system's rate per m2 is the catalog price of its paint code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quickest.bom_builder import BomBuilder
    from quickest.models.bom import DataRow

logger = logging.getLogger(__name__)

BLAST_CODE = "Blast"
DEFAULT_PAINT_SYSTEM = "Primer Only"
# Built-up steel with this finish is hot-dip galvanized, never blasted or painted.
GALVANIZED_FINISH = "Galvanized"


@dataclass(frozen=True)
class PaintSystem:
    name: str
    paint_code: str | None
    blast_code: str | None = BLAST_CODE

    @property
    def is_painted(self) -> bool:
        return self.paint_code is not None


NO_PAINT = PaintSystem(name="None", paint_code=None, blast_code=None)

PAINT_SYSTEMS: dict[str, PaintSystem] = {
    "None": NO_PAINT,
    "Primer Only": PaintSystem(name="Primer Only", paint_code="PaintPO"),
    "Primer + Finish": PaintSystem(name="Primer + Finish", paint_code="PaintPF"),
    "Primer + Intermediate + Finish": PaintSystem(
        name="Primer + Intermediate + Finish", paint_code="PaintPIF"
    ),
    "Epoxy": PaintSystem(name="Epoxy System", paint_code="PaintEP"),
}


def paint_system(name: str, bu_finish: str = "") -> PaintSystem:
    """The paint system for a building; unknown names fall back to primer only."""
    if bu_finish.strip() == GALVANIZED_FINISH:
        return NO_PAINT
    system = PAINT_SYSTEMS.get(name.strip())
    if system is None:
        logger.warning("Unknown paint system '%s', using %s", name, DEFAULT_PAINT_SYSTEM)
        return PAINT_SYSTEMS[DEFAULT_PAINT_SYSTEM]
    return system


def painted_area(rows: Iterable[DataRow]) -> float:
    """Total paintable surface of ``rows`` in m2."""
    return sum(row.total_surface_area for row in rows)


def add_paint_rows(out: BomBuilder, area: float, system: PaintSystem) -> None:
    """Append the blasting and paint rows for ``area`` m2.

    A row is only added when both the area and its catalog rate are positive.
    """
    if area <= 0 or not system.is_painted:
        return
    rows = [
        (system.blast_code, "Blasting"),
        (system.paint_code, f"Paint System - {system.name}"),
    ]
    for code, description in rows:
        if code is None or out.store.price(code) <= 0:
            continue
        out.add(code, 1, round(area, 2), description=description)
