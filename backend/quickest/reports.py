"""Report projections of an EstimationResult.

Each projection is a pure function returning a pydantic model:

- :func:`recap`: headline summary.
- :func:`detail`: the whole BOM numbered 1..n.
- :func:`fcpbs`: cost and price by FCPBS category with steel, panels and
  FOB subtotals.
- :func:`sal`: weight, cost and price per sales code.
- :func:`boq`: the nine customer-facing bill of quantities lines.
- :func:`jaf`: pricing metrics for the job acceptance form.
- :func:`rawmat`: material take-off grouped by code for procurement.

Layout, export formats and currency display are left to the caller.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from quickest.models.bom import BomRow, DataRow
from quickest.models.enums import CostCategory
from quickest.models.estimate import PANEL_CATEGORIES, STEEL_CATEGORIES, CategoryTotal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quickest.models.estimate import EstimationResult

AED_PER_USD = 3.67
BASE_DELIVERY_WEEKS = 10
STEEL_MT_PER_DELIVERY_WEEK = 150
PACKING_SALES_CODE = "P"
TRANSPORT_SALES_CODE = "S"

SALES_DESCRIPTIONS: dict[int | str, str] = {
    1: "Supply of Pre-Engineered Building",
    2: "Supply of Mezzanine Structure",
    3: "Supply of Canopy Structure",
    4: "Supply of Crane System",
    5: "Supply of Car Parking Shade",
    6: "Supply of Roof Monitor",
    7: "Supply of Walkway & Platforms",
    8: "Supply of Staircase & Handrails",
    9: "Supply of Checkered Plates & Grating",
    10: "Supply of Cold Storage Panels",
    11: "Supply of Partitions",
    12: "Supply of Steel Doors & Louvers",
    13: "Supply of Windows",
    14: "Supply of Rolling Shutters",
    15: "Supply of Skylights",
    16: "Supply of Fire Protection",
    17: "Supply of Gutters & Downspouts",
    18: "Supply of Insulation",
    19: "Supply of Translucent Panels",
    20: "Supply of Expansion Joints",
    21: "Supply of Miscellaneous Items",
    22: "Supply of Structural Steel",
    PACKING_SALES_CODE: "Packing & Handling",
    TRANSPORT_SALES_CODE: "Transportation",
}


def per_mt(value: float, weight_kg: float) -> float:
    """``value`` per metric ton of ``weight_kg``; 0 when there is no weight."""
    if weight_kg <= 0:
        return 0.0
    return 1000 * value / weight_kg


# ----------------------------------------------------------------------
# Recap and Detail
# ----------------------------------------------------------------------


class Recap(BaseModel):
    width: float
    length: float
    back_eave_height: float
    front_eave_height: float
    n_frames: int
    item_count: int
    total_weight_kg: float
    total_weight_mt: float
    fob_price_aed: float
    freight_aed: float
    container_aed: float
    total_price_aed: float
    price_per_mt: float


def recap(result: EstimationResult) -> Recap:
    dims, summary = result.dimensions, result.summary
    return Recap(
        width=dims.width,
        length=dims.length,
        back_eave_height=dims.back_eave_height,
        front_eave_height=dims.front_eave_height,
        n_frames=dims.n_frames,
        item_count=result.bom.item_count,
        total_weight_kg=summary.total_weight_kg,
        total_weight_mt=summary.total_weight_mt,
        fob_price_aed=summary.fob_price_aed,
        freight_aed=result.freight.freight_cost,
        container_aed=result.freight.container_cost,
        total_price_aed=summary.total_price_aed,
        price_per_mt=summary.price_per_mt,
    )


class DetailReport(BaseModel):
    rows: list[BomRow]
    item_count: int
    total_weight_kg: float
    total_price_aed: float


def detail(result: EstimationResult) -> DetailReport:
    """Every BOM row, data rows renumbered across sub-systems."""
    bom = result.bom.renumbered()
    return DetailReport(
        rows=list(bom.rows),
        item_count=bom.item_count,
        total_weight_kg=bom.total_weight,
        total_price_aed=bom.total_selling_price,
    )


# ----------------------------------------------------------------------
# FCPBS
# ----------------------------------------------------------------------


class FcpbsLine(BaseModel):
    """One category, or a subtotal of several, on the FCPBS sheet."""

    key: str
    name: str
    weight_kg: float = 0.0
    weight_pct: float = 0.0
    material_cost: float = 0.0
    total_cost: float = 0.0
    selling_price: float = 0.0
    selling_pct: float = 0.0
    markup: float = 0.0
    value_added: float = 0.0
    price_per_mt: float = 0.0
    value_added_per_mt: float = 0.0


class FcpbsReport(BaseModel):
    lines: list[FcpbsLine]
    steel: FcpbsLine
    panels: FcpbsLine
    fob: FcpbsLine
    total: FcpbsLine


def _fcpbs_line(
    key: str, name: str, totals: Iterable[CategoryTotal], weight: float, price: float
) -> FcpbsLine:
    totals = list(totals)
    weight_kg = sum(t.weight_kg for t in totals)
    material = sum(t.material_cost for t in totals)
    cost = sum(t.total_cost for t in totals)
    selling = sum(t.selling_price for t in totals)
    return FcpbsLine(
        key=key,
        name=name,
        weight_kg=weight_kg,
        weight_pct=100 * weight_kg / weight if weight > 0 else 0.0,
        material_cost=material,
        total_cost=cost,
        selling_price=selling,
        selling_pct=100 * selling / price if price > 0 else 0.0,
        markup=selling / cost if cost > 0 else 0.0,
        value_added=selling - material,
        price_per_mt=per_mt(selling, weight_kg),
        value_added_per_mt=per_mt(selling - material, weight_kg),
    )


def fcpbs(result: EstimationResult) -> FcpbsReport:
    weight = result.summary.total_weight_kg
    price = result.summary.total_price_aed
    categories = result.categories
    steel = [t for t in categories if t.category in STEEL_CATEGORIES]
    panels = [t for t in categories if t.category in PANEL_CATEGORIES]
    return FcpbsReport(
        lines=[_fcpbs_line(str(t.category), t.name, [t], weight, price) for t in categories],
        steel=_fcpbs_line("steel", "Steel Subtotal", steel, weight, price),
        panels=_fcpbs_line("panels", "Panels Subtotal", panels, weight, price),
        fob=_fcpbs_line("fob", "FOB", steel + panels, weight, price),
        total=_fcpbs_line("total", "Total Supply", categories, weight, price),
    )


# ----------------------------------------------------------------------
# SAL
# ----------------------------------------------------------------------


class SalLine(BaseModel):
    code: int | str
    description: str
    weight_kg: float = 0.0
    cost: float = 0.0
    price: float = 0.0
    markup: float = 0.0
    price_per_mt: float = 0.0


class SalReport(BaseModel):
    lines: list[SalLine]
    total_weight_kg: float
    total_cost: float
    total_price: float


def sal(result: EstimationResult) -> SalReport:
    """Totals per sales code; freight goes to ``S`` and containers to ``P``.

    Cost is the book price and price the marked-up selling price. Every
    standard sales code is listed, followed by any other code in use.
    """
    sums: dict[int | str, list[float]] = {code: [0.0, 0.0, 0.0] for code in SALES_DESCRIPTIONS}
    for row in result.bom.data_rows:
        entry = sums.setdefault(row.sales_code, [0.0, 0.0, 0.0])
        entry[0] += row.total_weight
        entry[1] += row.total_price
        entry[2] += row.selling_price
    for code, amount in (
        (TRANSPORT_SALES_CODE, result.freight.freight_cost),
        (PACKING_SALES_CODE, result.freight.container_cost),
    ):
        sums[code][1] += amount
        sums[code][2] += amount

    lines = [
        SalLine(
            code=code,
            description=SALES_DESCRIPTIONS.get(code, ""),
            weight_kg=weight,
            cost=cost,
            price=price,
            markup=price / cost if cost > 0 else 0.0,
            price_per_mt=per_mt(price, weight),
        )
        for code, (weight, cost, price) in sums.items()
    ]
    return SalReport(
        lines=lines,
        total_weight_kg=sum(line.weight_kg for line in lines),
        total_cost=sum(line.cost for line in lines),
        total_price=sum(line.price for line in lines),
    )


# ----------------------------------------------------------------------
# BOQ
# ----------------------------------------------------------------------

BOQ_DESCRIPTIONS: tuple[str, ...] = (
    "Primary steel: All Built-up & Hot rolled steel including cleaning & painting",
    "Secondary (Cold form purlins, girts, sheeting angles)",
    "Sandwich panels",
    "Single skin Panels, trims & flashings",
    "Standard Sheeting accessories (sheeting fasteners, bead mastic, foam closure etc), "
    "Gutter & downspouts (if applicable)",
    "Anchor bolts, connection bolts, sag rods, cable bracing",
    "Accessories (excluding insulation & translucent panels)",
    "Fiberglass Insulation",
    "Translucent panels w/ wiremesh protection",
)

_BOQ_BY_CATEGORY: dict[CostCategory, int] = {
    CostCategory.MAIN_FRAMES: 1,
    CostCategory.PAINTING: 1,
    CostCategory.SECONDARY: 2,
    CostCategory.SANDWICH: 3,
    CostCategory.SINGLE_SKIN: 4,
    CostCategory.TRIMS: 4,
    CostCategory.PANEL_BUYOUTS: 5,
    CostCategory.STEEL_BUYOUTS: 6,
    CostCategory.PANEL_ACCESSORIES: 7,
}
INSULATION_PREFIXES = ("FG",)
TRANSLUCENT_PREFIXES = ("SKY", "WRM")


def boq_line_for(row: DataRow) -> int | None:
    """BOQ line number (1-9) a data row belongs to, None when it is not material."""
    line = _BOQ_BY_CATEGORY.get(row.category)
    if line == 7:
        code = row.code.upper()
        if code.startswith(INSULATION_PREFIXES):
            return 8
        if code.startswith(TRANSLUCENT_PREFIXES):
            return 9
    return line


class BoqLine(BaseModel):
    sl_no: int
    description: str
    unit: str = "MT"
    quantity: float = 0.0
    unit_rate: float = 0.0
    total_price: float = 0.0


class BoqReport(BaseModel):
    items: list[BoqLine] = Field(default_factory=list)
    total_weight_mt: float = 0.0
    total_price: float = 0.0


def boq(result: EstimationResult) -> BoqReport:
    """The nine BOQ lines.

    Transport (categories M and O) and other charges (Q) are spread over
    the lines in proportion to their material price.
    """
    weights = [0.0] * len(BOQ_DESCRIPTIONS)
    prices = [0.0] * len(BOQ_DESCRIPTIONS)
    for row in result.bom.data_rows:
        line = boq_line_for(row)
        if line is None:
            continue
        weights[line - 1] += row.total_weight / 1000
        prices[line - 1] += row.selling_price

    material_price = sum(prices)
    overheads = sum(
        result.category(category).selling_price
        for category in (CostCategory.CONTAINER, CostCategory.FREIGHT, CostCategory.OTHER)
    )
    items = []
    for index, description in enumerate(BOQ_DESCRIPTIONS):
        price = prices[index]
        if material_price > 0:
            price += overheads * prices[index] / material_price
        weight = weights[index]
        items.append(
            BoqLine(
                sl_no=index + 1,
                description=description,
                quantity=round(weight, 4),
                unit_rate=round(price / weight, 2) if weight > 0 else 0.0,
                total_price=round(price, 2),
            )
        )
    return BoqReport(
        items=items,
        total_weight_mt=round(sum(weights), 4),
        total_price=round(sum(item.total_price for item in items), 2),
    )


# ----------------------------------------------------------------------
# JAF
# ----------------------------------------------------------------------


class JafReport(BaseModel):
    bottom_line_markup: float
    value_added_l: float
    value_added_r: float
    total_weight_mt: float
    primary_weight_mt: float
    supply_price_aed: float
    erection_price_aed: float
    total_contract_aed: float
    contract_value_usd: float
    price_per_mt: float
    min_delivery_weeks: int
    scope: str


def scope_of(result: EstimationResult) -> str:
    steel = sum(
        result.category(c).weight_kg
        for c in (CostCategory.MAIN_FRAMES, CostCategory.SECONDARY, CostCategory.STEEL_BUYOUTS)
    )
    panels = sum(
        result.category(c).weight_kg
        for c in (CostCategory.SINGLE_SKIN, CostCategory.SANDWICH, CostCategory.TRIMS)
    )
    if steel > 0 and panels <= 0:
        return "Steel Only"
    if panels > 0 and steel <= 0:
        return "Cladding Only"
    return "Both"


def jaf(result: EstimationResult, erection_price: float = 0.0) -> JafReport:
    """Job acceptance form figures.

    Value added "L" is taken at FOB level and "R" at total supply level,
    both against the FOB material cost and per metric ton of the total weight.
    """
    report = fcpbs(result)
    summary = result.summary
    weight_kg = summary.total_weight_kg
    total_price = summary.total_price_aed
    fob_material = report.fob.material_cost
    total_cost = report.total.total_cost
    contract = total_price + erection_price
    return JafReport(
        bottom_line_markup=round(total_price / total_cost, 8) if total_cost > 0 else 0.0,
        value_added_l=round(per_mt(summary.fob_price_aed - fob_material, weight_kg), 2),
        value_added_r=round(per_mt(total_price - fob_material, weight_kg), 2),
        total_weight_mt=round(summary.total_weight_mt, 4),
        primary_weight_mt=round(result.category(CostCategory.MAIN_FRAMES).weight_kg / 1000, 4),
        supply_price_aed=round(total_price, 2),
        erection_price_aed=round(erection_price, 2),
        total_contract_aed=round(contract, 2),
        contract_value_usd=round(contract / AED_PER_USD),
        price_per_mt=round(summary.price_per_mt, 2),
        min_delivery_weeks=BASE_DELIVERY_WEEKS
        + math.ceil(summary.steel_weight_kg / 1000 / STEEL_MT_PER_DELIVERY_WEEK),
        scope=scope_of(result),
    )


# ----------------------------------------------------------------------
# RAWMAT
# ----------------------------------------------------------------------

OTHER_MATERIALS = "Other"

# First match wins, so narrower prefixes sit in earlier groups.
RAWMAT_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Fasteners & Bolts", ("HSB", "HRB", "AB", "SS", "CS", "PRV", "MDF", "TBCON")),
    ("Sealants & Closures", ("BM", "BT", "FCM", "FLM")),
    ("Blasting & Painting", ("BLAST", "PAINT", "DSW")),
    ("Crane Components", ("BUCR", "CR")),
    ("Primary Steel", ("BU", "CON", "IPE", "T150", "T200", "UB", "PC", "FC", "HRP")),
    ("Mezzanine", ("DECK", "CHQ", "MEA", "MFC", "DSP", "JCL")),
    ("Roof/Wall Sheeting", ("S4", "S5", "S7", "A7", "PU")),
    ("Gutters & Downspouts", ("GUT", "DWSP", "DS", "EG")),
    ("Trim & Flashing", ("TT", "RC", "ET", "ST", "GT", "CT", "DT", "CLT", "PEAK")),
    ("Doors & Windows", ("PD", "SD", "LV")),
    ("Secondary Steel", ("Z", "25Z", "250Z", "M18", "M20", "C", "GANG", "BA", "BR", "FB", "LA")),
    ("Sag Rods & Clips", ("SR", "RM")),
)
_RAWMAT_ORDER = {name: i for i, (name, _) in enumerate(RAWMAT_CATEGORIES)}


def rawmat_category(code: str) -> str:
    """Procurement group of a product code, by its prefix."""
    key = code.strip().upper()
    for name, prefixes in RAWMAT_CATEGORIES:
        if key.startswith(prefixes):
            return name
    return OTHER_MATERIALS


class RawmatLine(BaseModel):
    no: int
    code: str
    cost_code: str = ""
    description: str = ""
    unit: str = ""
    quantity: float = 0.0
    unit_weight: float = 0.0
    total_weight: float = 0.0
    category: str = OTHER_MATERIALS
    sources: str = ""


class RawmatCategory(BaseModel):
    name: str
    count: int = 0
    weight_kg: float = 0.0


class RawmatReport(BaseModel):
    items: list[RawmatLine] = Field(default_factory=list)
    total_items_before: int = 0
    unique_materials: int = 0
    total_weight_kg: float = 0.0
    categories: list[RawmatCategory] = Field(default_factory=list)


def rawmat(result: EstimationResult) -> RawmatReport:
    """Every data row merged by code, quantities in catalog units.

    Lines are ordered by procurement group, then code; ``sources`` lists the
    sales codes a material is used under.
    """
    merged: dict[str, RawmatLine] = {}
    sources: dict[str, set[str]] = {}
    rows = [row for row in result.bom.data_rows if row.code.strip() not in ("", "-")]
    for row in rows:
        key = row.code.strip().upper()
        line = merged.get(key)
        if line is None:
            line = merged[key] = RawmatLine(
                no=0,
                code=row.code,
                cost_code=row.cost_code,
                description=row.description,
                unit=row.unit,
                unit_weight=row.unit_weight,
                category=rawmat_category(row.code),
            )
            sources[key] = set()
        line.quantity += row.cost_basis
        line.total_weight += row.total_weight
        sources[key].add(str(row.sales_code))

    ordered = sorted(
        merged.items(),
        key=lambda item: (_RAWMAT_ORDER.get(item[1].category, len(_RAWMAT_ORDER)), item[0]),
    )
    items: list[RawmatLine] = []
    groups: dict[str, RawmatCategory] = {}
    for no, (key, line) in enumerate(ordered, start=1):
        group = groups.setdefault(line.category, RawmatCategory(name=line.category))
        group.count += 1
        group.weight_kg += line.total_weight
        items.append(
            line.model_copy(
                update={
                    "no": no,
                    "quantity": round(line.quantity, 2),
                    "total_weight": round(line.total_weight, 2),
                    "sources": ", ".join(sorted(sources[key])),
                }
            )
        )
    return RawmatReport(
        items=items,
        total_items_before=len(rows),
        unique_materials=len(items),
        total_weight_kg=round(sum(line.total_weight for line in merged.values()), 2),
        categories=[
            group.model_copy(update={"weight_kg": round(group.weight_kg, 2)})
            for group in groups.values()
        ],
    )
