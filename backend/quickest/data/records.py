"""Schema for reference catalog records and selection bands."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from quickest.models.enums import Catalog, CostCategory


class ReferenceRecord(BaseModel):
    """A single product, structural steel section or raw material.

    ``code`` is the case-insensitive key the calculators emit; ``unit``
    drives how quantities turn into weight and price on a BOM row.
    """

    code: str
    description: str
    unit: str = "EA"
    weight_per_unit: float = Field(default=0.0, ge=0)
    material_cost: float = Field(default=0.0, ge=0)
    manufacturing_cost: float = Field(default=0.0, ge=0)
    overhead_cost: float = Field(default=0.0, ge=0)
    price: float = Field(default=0.0, ge=0)
    category: CostCategory = CostCategory.SECONDARY
    catalog: Catalog = Catalog.MBSDB
    grade: str | None = None
    cost_code: str = ""
    # Paintable surface in m2 per catalog unit; 0 for items that are not painted.
    surface_area: float = Field(default=0.0, ge=0)

    @field_validator("code")
    @classmethod
    def code_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "code must not be blank"
            raise ValueError(msg)
        return v.strip()

    @property
    def key(self) -> str:
        return self.code.strip().upper()


@dataclass(frozen=True)
class BandEntry:
    max_index: float
    code: str


@dataclass(frozen=True)
class SelectionBand:
    """Ordered design-index thresholds mapping to component codes.

    Selection picks the first entry whose ``max_index`` is at least the
    design index; the last entry is the built-up fallback and also catches
    any index beyond it.
    """

    name: str
    entries: tuple[BandEntry, ...]

    def __post_init__(self) -> None:
        if not self.entries:
            msg = f"Selection band '{self.name}' has no entries"
            raise ValueError(msg)
        thresholds = [e.max_index for e in self.entries]
        if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
            msg = f"Selection band '{self.name}' thresholds must be strictly ascending"
            raise ValueError(msg)

    @property
    def fallback(self) -> str:
        return self.entries[-1].code

    def entry_for(self, design_index: float) -> BandEntry:
        for entry in self.entries:
            if design_index <= entry.max_index:
                return entry
        return self.entries[-1]

    def select(self, design_index: float) -> str:
        return self.entry_for(design_index).code
