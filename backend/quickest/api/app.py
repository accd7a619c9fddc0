"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as PydanticValidationError

from quickest import __version__
from quickest.config import Settings
from quickest.exceptions import QuickEstError
from quickest.models.estimate import FreightOptions, Markups
from quickest.reports import boq, fcpbs, jaf, rawmat, recap, sal

if TYPE_CHECKING:
    from quickest.models.estimate import EstimationResult
    from quickest.service import EstimationService

logger = logging.getLogger(__name__)

SAMPLE_BUILDING: dict[str, Any] = {
    "projectName": "Sample Warehouse",
    "buildingName": "Warehouse 1",
    "spans": "1@24",
    "bays": "6@6",
    "slopes": "1@0.1",
    "backEaveHeight": 8,
    "frontEaveHeight": 8,
    "windSpeed": 130,
    "openings": [{"location": "Front Sidewall", "size": "4x4"}],
    "accessoryItems": [
        {"description": "Skylight 3250mm (GRP,Single Skin )", "quantity": 6},
        {"description": "Personnel Door (900x2100)", "quantity": 2},
    ],
    "canopies": [{"type": "Canopy", "location": "Front Sidewall", "colSpacing": "2@6"}],
}


def _result_payload(result: EstimationResult) -> dict[str, Any]:
    return {
        "estimate": result.model_dump(mode="json"),
        "summary_dict": result.to_summary_dict(),
        "reports": {
            "recap": recap(result).model_dump(mode="json"),
            "fcpbs": fcpbs(result).model_dump(mode="json"),
            "sal": sal(result).model_dump(mode="json"),
            "boq": boq(result).model_dump(mode="json"),
            "jaf": jaf(result).model_dump(mode="json"),
            "rawmat": rawmat(result).model_dump(mode="json"),
        },
    }


def _options(payload: dict[str, Any]) -> tuple[Markups | None, FreightOptions | None]:
    """Pop the optional ``markups`` and ``freight`` objects off a request body.

    Raises:
        HTTPException: 422 if either object is malformed.
    """
    try:
        markups = Markups.model_validate(payload.pop("markups")) if "markups" in payload else None
        freight = (
            FreightOptions.model_validate(payload.pop("freight")) if "freight" in payload else None
        )
    except PydanticValidationError as exc:
        detail = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise HTTPException(status_code=422, detail=detail) from exc
    return markups, freight


def create_app(
    *,
    service: EstimationService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    service
        Optional pre-built estimation service for dependency injection
        (e.g. tests). If not provided, one is created from the settings
        on first request.
    settings
        Optional settings; read from the environment (and ``.env``) when
        not provided.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="QuickEst", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject their own service
    app.state.service = service
    app.state.settings = settings

    def _get_service() -> EstimationService:
        svc: EstimationService | None = app.state.service
        if svc is not None:
            return svc
        from quickest.factory import create_default_service

        svc = create_default_service(app.state.settings)
        app.state.service = svc
        return svc

    def _estimate(payload: dict[str, Any]) -> dict[str, Any]:
        markups, freight = _options(payload)
        try:
            outcome = _get_service().estimate(payload, markups=markups, freight=freight)
        except QuickEstError as exc:
            logger.exception("Estimation failed")
            raise HTTPException(
                status_code=500, detail=f"Could not calculate: {exc}"
            ) from exc
        if outcome.result is None:
            raise HTTPException(
                status_code=422,
                detail=[error.model_dump() for error in outcome.errors],
            )
        response = _result_payload(outcome.result)
        response["processing_time_seconds"] = outcome.processing_time_seconds
        return response

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    # ------------------------------------------------------------------
    # POST /api/estimate
    # ------------------------------------------------------------------

    @app.post("/api/estimate")
    def estimate(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:  # noqa: B008
        return _estimate(dict(payload))

    # ------------------------------------------------------------------
    # GET /api/sample-estimate
    # ------------------------------------------------------------------

    @app.get("/api/sample-estimate")
    def sample_estimate() -> dict[str, Any]:
        response = _estimate(dict(SAMPLE_BUILDING))
        response["building"] = SAMPLE_BUILDING
        return response

    # ------------------------------------------------------------------
    # GET /api/products
    # ------------------------------------------------------------------

    @app.get("/api/products")
    def products(q: str = "") -> list[dict[str, Any]]:
        store = _get_service().engine.store
        try:
            records = store.search(q)
        except QuickEstError as exc:
            logger.exception("Product search failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return [record.model_dump(mode="json") for record in records]

    return app
