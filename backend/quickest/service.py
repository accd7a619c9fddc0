"""Estimation service: validate, calculate in parallel, aggregate."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from quickest.aggregation import aggregate
from quickest.models.building import BuildingModel
from quickest.models.estimate import FreightOptions, Markups, SubsystemBom

if TYPE_CHECKING:
    from collections.abc import Mapping
    from concurrent.futures import Future

    from quickest.engine import CalculationEngine
    from quickest.models.blocks import FieldError
    from quickest.models.bom import BillOfMaterials
    from quickest.models.enums import SubsystemKind
    from quickest.models.estimate import EstimationResult
    from quickest.subsystems.base import SubsystemCalculator

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class EstimationOutcome:
    """Either field errors or a result, never both."""

    errors: list[FieldError] = field(default_factory=list)
    result: EstimationResult | None = None
    processing_time_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors and self.result is not None


class EstimationService:
    """Runs one estimation end to end.

    The primary engine and every active sub-system calculator are
    independent, so they run side by side on a thread pool; aggregation
    waits for all of them. Validation problems come back as data in
    :class:`EstimationOutcome`. Reference errors (``MissingReferenceError``,
    ``ReferenceStoreUnavailable``) propagate and no result is produced.

    Example::

        service = create_default_service()
        outcome = service.estimate({"spans": "1@24", "bays": "6@6", ...})
        if outcome.ok:
            outcome.result.summary.total_weight_mt
    """

    def __init__(
        self,
        engine: CalculationEngine,
        calculators: Mapping[SubsystemKind, SubsystemCalculator[Any]],
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        markups: Markups | None = None,
        freight: FreightOptions | None = None,
    ) -> None:
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self._engine = engine
        self._calculators = dict(calculators)
        self._max_workers = max_workers
        self._markups = markups or Markups()
        self._freight = freight or FreightOptions()

    @property
    def engine(self) -> CalculationEngine:
        return self._engine

    @property
    def default_markups(self) -> Markups:
        return self._markups

    @property
    def default_freight(self) -> FreightOptions:
        return self._freight

    def estimate(
        self,
        payload: Mapping[str, Any] | BuildingModel,
        *,
        markups: Markups | None = None,
        freight: FreightOptions | None = None,
    ) -> EstimationOutcome:
        """Validate and calculate one building.

        Raises:
            MissingReferenceError: If any calculator selects an unknown code.
            ReferenceStoreUnavailable: If a catalog cannot be loaded.
        """
        start = time.monotonic()
        building = (
            payload if isinstance(payload, BuildingModel) else BuildingModel.from_input(payload)
        )
        errors = building.validate()
        if errors:
            logger.info("Estimation rejected with %d field error(s)", len(errors))
            return EstimationOutcome(errors=errors)

        blocks = building.subsystem_blocks()
        for kind, _ in blocks:
            if kind not in self._calculators:
                msg = f"No calculator registered for sub-system '{kind}'"
                raise KeyError(msg)

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            primary_future = pool.submit(self._engine.run, building)
            futures: list[tuple[SubsystemKind, str, Future[BillOfMaterials]]] = [
                (kind, block.description, pool.submit(self._calculators[kind].calculate, block))
                for kind, block in blocks
            ]
            primary = primary_future.result()
            subsystems = [
                SubsystemBom(kind=kind, description=description, bom=future.result())
                for kind, description, future in futures
            ]

        result = aggregate(
            primary,
            subsystems,
            markups or self._markups,
            freight or self._freight,
        )
        elapsed = time.monotonic() - start
        logger.info(
            "Estimated %s: %d sub-system(s), %.3f MT, AED %.2f in %.3fs",
            building.building_name or building.project_name or "building",
            len(subsystems),
            result.summary.total_weight_mt,
            result.summary.total_price_aed,
            elapsed,
        )
        return EstimationOutcome(result=result, processing_time_seconds=round(elapsed, 3))
