from __future__ import annotations

import logging
import os
from dataclasses import asdict
from functools import lru_cache

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from zipmiles import __version__
from zipmiles.models import DistanceFailure, ValidationOutcome
from zipmiles.postal import InvalidFormatError
from zipmiles.service import DistanceService, build_service_from_path

LOG = logging.getLogger(__name__)

app = FastAPI(title="ZIP Distance Engine")

CONFIG_ENV = "ZIPMILES_CONFIG"


@lru_cache(maxsize=1)
def _service() -> DistanceService:
    return build_service_from_path(os.getenv(CONFIG_ENV))


def _outcome_payload(outcome: ValidationOutcome) -> dict[str, object]:
    return {
        "valid": outcome.is_valid,
        "errors": outcome.errors,
        "warnings": outcome.warnings,
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.get("/distance")
def distance(origin: str, destination: str) -> JSONResponse:
    service = _service()
    try:
        result = service.resolve_distance(origin, destination)
    except InvalidFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if isinstance(result, DistanceFailure):
        raise HTTPException(status_code=502, detail=result.reasons)

    return JSONResponse(
        {
            "origin": origin,
            "destination": destination,
            "miles": result.miles,
            "description": service.describe_distance(result.miles),
            "computed_at": result.computed_at,
        }
    )


@app.get("/postal-codes/{code}/validation")
def validate_postal_code(code: str) -> JSONResponse:
    return JSONResponse(_outcome_payload(_service().validate_postal_code(code)))


@app.post("/validate/distance")
def validate_distance(
    origin: str = Form(...),
    destination: str = Form(...),
    miles: float = Form(...),
) -> JSONResponse:
    service = _service()
    payload = _outcome_payload(service.validate_distance(origin, destination, miles))
    payload["sanity"] = service.guard.sanity_check_message(miles)
    return JSONResponse(payload)


@app.post("/validate/rate")
def validate_rate(rate: float = Form(...)) -> JSONResponse:
    return JSONResponse(_outcome_payload(_service().validate_per_mile_rate(rate)))


@app.get("/cache/stats")
def cache_stats() -> JSONResponse:
    service = _service()
    payload = asdict(service.cache_statistics())
    payload["geocodes"] = service.resolver.cache_size()
    return JSONResponse(payload)


@app.post("/cache/clear")
def clear_cache(geocodes: bool = Form(default=True), distances: bool = Form(default=True)) -> dict[str, bool]:
    service = _service()
    if geocodes:
        service.clear_geocode_cache()
    if distances:
        service.clear_distance_cache()
    LOG.info("cache clear geocodes=%s distances=%s", geocodes, distances)
    return {"geocodes": geocodes, "distances": distances}
