"""Factory functions for creating pre-configured QuickEst objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.config import Settings
from quickest.data.loader import catalog_loaders
from quickest.data.seed import SEED_RECORDS
from quickest.data.store import ReferenceStore
from quickest.engine import CalculationEngine
from quickest.service import EstimationService
from quickest.subsystems import default_calculators

if TYPE_CHECKING:
    from pathlib import Path


def create_default_store(catalog_path: Path | str | None = None) -> ReferenceStore:
    """Create a ReferenceStore over the CSV catalogs at ``catalog_path``.

    Without a path the built-in seed catalog is used, which covers every
    code the engine and sub-system calculators emit.
    """
    if catalog_path is None:
        return ReferenceStore.from_records(SEED_RECORDS)
    return ReferenceStore(catalog_loaders(catalog_path))


def create_default_engine(store: ReferenceStore | None = None) -> CalculationEngine:
    """Create a CalculationEngine wired up with the seed reference data.

    Example::

        from quickest import BuildingModel, create_default_engine

        engine = create_default_engine()
        bom = engine.calculate(BuildingModel.from_input({"spans": "1@24", ...}))
    """
    return CalculationEngine(store or create_default_store())


def create_default_service(settings: Settings | None = None) -> EstimationService:
    """Create an EstimationService configured from ``settings``.

    This is the recommended entry point for full estimates. Settings default
    to :meth:`Settings.from_env`, so ``QUICKEST_*`` variables (and ``.env``
    files) pick the catalog, worker count, freight rate and default markups.
    """
    settings = settings or Settings.from_env()
    store = create_default_store(settings.catalog_path)
    return EstimationService(
        CalculationEngine(store),
        default_calculators(store),
        max_workers=settings.max_workers,
        markups=settings.markups,
        freight=settings.freight,
    )
