"""QuickEst pre-engineered metal building estimation engine.

Usage::

    from quickest import BuildingModel, create_default_engine, create_default_service

    engine = create_default_engine()
    bom = engine.calculate(BuildingModel.from_input(payload))

    service = create_default_service()
    outcome = service.estimate(payload)
"""

__version__ = "0.1.0"

from quickest.aggregation import aggregate
from quickest.dimensions import DimensionList, parse
from quickest.engine import CalculationEngine, PrimaryCalculation
from quickest.exceptions import (
    FormatError,
    MissingReferenceError,
    QuickEstError,
    ReferenceStoreUnavailable,
    ValidationError,
)
from quickest.factory import create_default_engine, create_default_service, create_default_store
from quickest.models.bom import BillOfMaterials
from quickest.models.building import BuildingModel, Dimensions, Loads
from quickest.models.estimate import EstimationResult, FreightOptions, Markups
from quickest.service import EstimationOutcome, EstimationService

__all__ = [
    "BillOfMaterials",
    "BuildingModel",
    "CalculationEngine",
    "DimensionList",
    "Dimensions",
    "EstimationOutcome",
    "EstimationResult",
    "EstimationService",
    "FormatError",
    "FreightOptions",
    "Loads",
    "Markups",
    "MissingReferenceError",
    "PrimaryCalculation",
    "QuickEstError",
    "ReferenceStoreUnavailable",
    "ValidationError",
    "aggregate",
    "create_default_engine",
    "create_default_service",
    "create_default_store",
    "parse",
]
