"""Domain models for the QuickEst estimation engine."""

from quickest.models.blocks import (
    AccessoryBlock,
    AccessoryItem,
    AccessoryLine,
    CanopyBlock,
    CraneBlock,
    FieldError,
    LinerBlock,
    MezzanineBlock,
    MonitorBlock,
    Opening,
    PartitionBlock,
    SubsystemBlock,
)
from quickest.models.bom import BillOfMaterials, BomRow, DataRow, HeaderRow, SeparatorRow
from quickest.models.building import BuildingModel, Dimensions, Loads
from quickest.models.enums import (
    BaseType,
    BracingType,
    CanopyType,
    Catalog,
    CostCategory,
    CraneDuty,
    EndwallType,
    LinerType,
    MonitorType,
    OpeningLocation,
    PartitionDirection,
    SubsystemKind,
)
from quickest.models.estimate import (
    CategoryTotal,
    EstimationResult,
    FreightOptions,
    FreightSummary,
    Markups,
    SubsystemBom,
    Summary,
    TruckLoads,
)

__all__ = [
    "AccessoryBlock",
    "AccessoryItem",
    "AccessoryLine",
    "BaseType",
    "BillOfMaterials",
    "BomRow",
    "BracingType",
    "BuildingModel",
    "CanopyBlock",
    "CanopyType",
    "Catalog",
    "CategoryTotal",
    "CostCategory",
    "CraneBlock",
    "CraneDuty",
    "DataRow",
    "Dimensions",
    "EndwallType",
    "EstimationResult",
    "FieldError",
    "FreightOptions",
    "FreightSummary",
    "HeaderRow",
    "LinerBlock",
    "LinerType",
    "Loads",
    "Markups",
    "MezzanineBlock",
    "MonitorBlock",
    "MonitorType",
    "Opening",
    "OpeningLocation",
    "PartitionBlock",
    "PartitionDirection",
    "SeparatorRow",
    "SubsystemBlock",
    "SubsystemBom",
    "SubsystemKind",
    "Summary",
    "TruckLoads",
]
