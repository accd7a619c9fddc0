"""Join the primary and sub-system BOMs into one EstimationResult.

Aggregation is pure: the same BOMs, markups and freight options always
produce an equal result. Markups only ever change the selling price of a
row; weights pass through untouched, so the summary weight is exactly the
sum of every data row's ``total_weight``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from quickest.freight import calculate_freight
from quickest.models.bom import BillOfMaterials, DataRow, HeaderRow, SeparatorRow
from quickest.models.enums import CostCategory
from quickest.models.estimate import (
    CATEGORY_NAMES,
    PANEL_CATEGORIES,
    STEEL_CATEGORIES,
    CategoryTotal,
    EstimationResult,
    FreightOptions,
    FreightSummary,
    Markups,
    SubsystemBom,
    Summary,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quickest.engine import PrimaryCalculation

logger = logging.getLogger(__name__)


def apply_markups(bom: BillOfMaterials, markups: Markups) -> BillOfMaterials:
    """Copy of ``bom`` with each data row's markup factor set."""
    rows: list[DataRow | HeaderRow | SeparatorRow] = []
    for row in bom.rows:
        if isinstance(row, DataRow):
            rows.append(row.with_markup(markups.factor_for(row)))
        else:
            rows.append(row)
    return BillOfMaterials(rows=tuple(rows))


def category_totals(bom: BillOfMaterials, freight: FreightSummary) -> tuple[CategoryTotal, ...]:
    """One total per FCPBS category, in category order.

    Freight is booked under O and container charges under M; neither
    carries weight.
    """
    totals = {
        category: CategoryTotal(category=category, name=CATEGORY_NAMES[category])
        for category in CostCategory
    }
    for row in bom.data_rows:
        current = totals[row.category]
        totals[row.category] = current.model_copy(
            update={
                "weight_kg": current.weight_kg + row.total_weight,
                "material_cost": current.material_cost + row.total_material_cost,
                "total_cost": current.total_cost + row.total_cost,
                "book_price": current.book_price + row.total_price,
                "selling_price": current.selling_price + row.selling_price,
            }
        )
    for category, amount in (
        (CostCategory.FREIGHT, freight.freight_cost),
        (CostCategory.CONTAINER, freight.container_cost),
    ):
        current = totals[category]
        totals[category] = current.model_copy(
            update={
                "total_cost": current.total_cost + amount,
                "book_price": current.book_price + amount,
                "selling_price": current.selling_price + amount,
            }
        )
    return tuple(totals.values())


def summarize(categories: Sequence[CategoryTotal]) -> Summary:
    total_weight = sum(c.weight_kg for c in categories)
    total_price = sum(c.selling_price for c in categories)
    total_mt = total_weight / 1000
    return Summary(
        total_weight_kg=total_weight,
        total_weight_mt=total_mt,
        total_price_aed=total_price,
        price_per_mt=total_price / total_mt if total_mt > 0 else 0.0,
        fob_price_aed=sum(
            c.selling_price
            for c in categories
            if c.category in STEEL_CATEGORIES or c.category in PANEL_CATEGORIES
        ),
        steel_weight_kg=sum(c.weight_kg for c in categories if c.category in STEEL_CATEGORIES),
        panels_weight_kg=sum(c.weight_kg for c in categories if c.category in PANEL_CATEGORIES),
    )


def aggregate(
    primary: PrimaryCalculation,
    subsystems: Sequence[SubsystemBom] = (),
    markups: Markups | None = None,
    freight: FreightOptions | None = None,
) -> EstimationResult:
    """Build the estimation result.

    Args:
        primary: Output of :meth:`CalculationEngine.run`.
        subsystems: Sub-system BOMs in estimate order.
        markups: Price uplifts; none means book prices.
        freight: Delivery options; none means no freight rate and no containers.
    """
    markups = markups or Markups()
    primary_bom = apply_markups(primary.bom, markups)
    marked = tuple(
        entry.model_copy(update={"bom": apply_markups(entry.bom, markups)})
        for entry in subsystems
    )
    combined = BillOfMaterials.concat([primary_bom, *(entry.bom for entry in marked)])

    freight_summary = calculate_freight(combined.weight_by_category(), freight)
    categories = category_totals(combined, freight_summary)
    summary = summarize(categories)
    logger.debug(
        "Aggregated %d BOMs: %.0f kg, AED %.2f",
        1 + len(marked),
        summary.total_weight_kg,
        summary.total_price_aed,
    )
    return EstimationResult(
        dimensions=primary.dimensions,
        loads=primary.loads,
        primary=primary_bom,
        subsystems=marked,
        markups=markups,
        categories=categories,
        freight=freight_summary,
        summary=summary,
    )
