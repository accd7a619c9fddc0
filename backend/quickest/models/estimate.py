"""Estimation output models: markups, category totals, freight and the result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from quickest.models.bom import BillOfMaterials, DataRow
from quickest.models.building import Dimensions, Loads
from quickest.models.enums import Catalog, CostCategory, SubsystemKind

CATEGORY_NAMES: dict[CostCategory, str] = {
    CostCategory.MAIN_FRAMES: "Main Frames",
    CostCategory.PAINTING: "Blasting & Painting",
    CostCategory.SECONDARY: "Secondary Members",
    CostCategory.STEEL_BUYOUTS: "Steel Standard Buyouts",
    CostCategory.SINGLE_SKIN: "Single Skin Panels",
    CostCategory.SANDWICH: "Sandwich Panels",
    CostCategory.TRIMS: "Trims",
    CostCategory.PANEL_BUYOUTS: "Panels Standard Buyouts",
    CostCategory.PANEL_ACCESSORIES: "Panels Accessories + Special Buyouts",
    CostCategory.CONTAINER: "Container & Skids",
    CostCategory.FREIGHT: "Freight",
    CostCategory.OTHER: "Other Charges",
    CostCategory.ERECTION: "Erection",
}

STEEL_CATEGORIES = frozenset(
    {
        CostCategory.MAIN_FRAMES,
        CostCategory.PAINTING,
        CostCategory.SECONDARY,
        CostCategory.STEEL_BUYOUTS,
    }
)
PANEL_CATEGORIES = frozenset(
    {
        CostCategory.SINGLE_SKIN,
        CostCategory.SANDWICH,
        CostCategory.TRIMS,
        CostCategory.PANEL_BUYOUTS,
        CostCategory.PANEL_ACCESSORIES,
    }
)


class Markups(BaseModel):
    """Fractional price uplifts; 0 leaves the book price unchanged.

    ``steel`` applies to categories A-D, ``panels`` to F-J, ``ssl`` to
    every structural-steel-ledger (SSDB) row on top of those, and
    ``finance`` to every row. Uplifts compound and never touch weight.
    """

    model_config = ConfigDict(frozen=True)

    steel: float = Field(default=0.0, gt=-1)
    panels: float = Field(default=0.0, gt=-1)
    ssl: float = Field(default=0.0, gt=-1)
    finance: float = Field(default=0.0, gt=-1)

    def factor_for(self, row: DataRow) -> float:
        factor = 1.0 + self.finance
        if row.category in STEEL_CATEGORIES:
            factor *= 1.0 + self.steel
        elif row.category in PANEL_CATEGORIES:
            factor *= 1.0 + self.panels
        if row.catalog is Catalog.SSDB:
            factor *= 1.0 + self.ssl
        return factor


class FreightOptions(BaseModel):
    """How the building is delivered and what trucks and containers cost."""

    freight_type: str = "Delivered"
    freight_rate: float = Field(default=0.0, ge=0)
    container_count: int = Field(default=0, ge=0)
    container_rate: float = Field(default=2000.0, ge=0)


class TruckLoads(BaseModel):
    category: CostCategory
    name: str
    weight_mt: float
    capacity_mt: float
    loads: float


class FreightSummary(BaseModel):
    """Truck loads per category and the resulting freight and container costs."""

    freight_type: str
    loads: list[TruckLoads] = Field(default_factory=list)
    total_loads: float = 0.0
    freight_rate: float = 0.0
    freight_cost: float = 0.0
    container_count: int = 0
    container_rate: float = 0.0
    container_cost: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.freight_cost + self.container_cost


class CategoryTotal(BaseModel):
    """One FCPBS category line."""

    category: CostCategory
    name: str
    weight_kg: float = 0.0
    material_cost: float = 0.0
    total_cost: float = 0.0
    book_price: float = 0.0
    selling_price: float = 0.0

    @property
    def value_added(self) -> float:
        return self.selling_price - self.material_cost


class Summary(BaseModel):
    """Headline figures for the Recap sheet (weights in kg, prices in AED)."""

    total_weight_kg: float
    total_weight_mt: float
    total_price_aed: float
    price_per_mt: float
    fob_price_aed: float
    steel_weight_kg: float
    panels_weight_kg: float


class SubsystemBom(BaseModel):
    """BOM of one sub-system block, tagged with its kind."""

    kind: SubsystemKind
    description: str = ""
    bom: BillOfMaterials


class EstimationResult(BaseModel):
    """Immutable output of one estimation.

    ``primary`` and every entry of ``subsystems`` carry their marked-up
    rows; :attr:`bom` joins them in estimate order.
    """

    model_config = ConfigDict(frozen=True)

    dimensions: Dimensions
    loads: Loads
    primary: BillOfMaterials
    subsystems: tuple[SubsystemBom, ...] = ()
    markups: Markups = Field(default_factory=Markups)
    categories: tuple[CategoryTotal, ...] = ()
    freight: FreightSummary
    summary: Summary

    @property
    def bom(self) -> BillOfMaterials:
        return BillOfMaterials.concat([self.primary, *(s.bom for s in self.subsystems)])

    def by_kind(self) -> dict[SubsystemKind, list[BillOfMaterials]]:
        """Sub-system BOMs grouped by kind, in estimate order."""
        grouped: dict[SubsystemKind, list[BillOfMaterials]] = {}
        for entry in self.subsystems:
            grouped.setdefault(entry.kind, []).append(entry.bom)
        return grouped

    def category(self, category: CostCategory) -> CategoryTotal:
        for total in self.categories:
            if total.category == category:
                return total
        return CategoryTotal(category=category, name=CATEGORY_NAMES[category])

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict for display.

        Returns a dict with formatted strings next to the raw figures.
        """
        from quickest.formatting import format_aed, format_rate, format_weight

        summary = self.summary
        return {
            "width": self.dimensions.width,
            "length": self.dimensions.length,
            "item_count": self.bom.item_count,
            "subsystem_count": len(self.subsystems),
            "total_weight_kg": summary.total_weight_kg,
            "total_weight_formatted": format_weight(summary.total_weight_kg),
            "steel_weight_formatted": format_weight(summary.steel_weight_kg),
            "panels_weight_formatted": format_weight(summary.panels_weight_kg),
            "total_price_aed": summary.total_price_aed,
            "total_price_formatted": format_aed(summary.total_price_aed),
            "fob_price_formatted": format_aed(summary.fob_price_aed),
            "freight_formatted": format_aed(self.freight.total_cost),
            "price_per_mt_formatted": format_rate(summary.price_per_mt),
        }
