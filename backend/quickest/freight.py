"""Truck loads and freight cost from the category weights of an estimate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.models.enums import CostCategory
from quickest.models.estimate import FreightOptions, FreightSummary, TruckLoads

if TYPE_CHECKING:
    from collections.abc import Mapping

CUSTOMER_PICKUP = "Customer Pickup"

# Metric tons one truck carries, per category; panels fill a truck by volume first.
TRUCK_CAPACITY_MT: dict[CostCategory, tuple[str, float]] = {
    CostCategory.MAIN_FRAMES: ("Loads for Frames", 15),
    CostCategory.SECONDARY: ("Loads for Secondary Members", 20),
    CostCategory.SANDWICH: ("Loads for Sandwich Panels", 5.3),
    CostCategory.SINGLE_SKIN: ("Loads for Single Skin Sheeting", 8),
    CostCategory.TRIMS: ("Loads for Trims", 10),
    CostCategory.STEEL_BUYOUTS: ("Loads for Standard Buyouts", 20),
    CostCategory.PANEL_ACCESSORIES: ("Loads for Accessories & Buyouts", 10),
}


def truck_loads(weight_mt: float, capacity_mt: float) -> float:
    if weight_mt <= 0 or capacity_mt <= 0:
        return 0.0
    return weight_mt / capacity_mt


def calculate_freight(
    weights: Mapping[CostCategory, float], options: FreightOptions | None = None
) -> FreightSummary:
    """Freight for category weights given in kg.

    Loads are fractional; ``Customer Pickup`` keeps the loads but books no
    freight cost. Containers are charged whatever the freight type.
    """
    options = options or FreightOptions()
    loads = [
        TruckLoads(
            category=category,
            name=name,
            weight_mt=weights.get(category, 0.0) / 1000,
            capacity_mt=capacity,
            loads=truck_loads(weights.get(category, 0.0) / 1000, capacity),
        )
        for category, (name, capacity) in TRUCK_CAPACITY_MT.items()
    ]
    total_loads = sum(load.loads for load in loads)
    freight_cost = 0.0
    if options.freight_type != CUSTOMER_PICKUP:
        freight_cost = total_loads * options.freight_rate
    return FreightSummary(
        freight_type=options.freight_type,
        loads=loads,
        total_loads=round(total_loads, 3),
        freight_rate=options.freight_rate,
        freight_cost=round(freight_cost, 2),
        container_count=options.container_count,
        container_rate=options.container_rate,
        container_cost=round(options.container_count * options.container_rate, 2),
    )
