# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics, statistics."""
from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from reviewer_service.core.config import settings
from reviewer_service.core.dependencies import (
    get_directory,
    get_stats_service,
    get_store,
)
from reviewer_service.schemas import ErrorResponse, StatsResponse
from reviewer_service.services.stats_service import StatsService

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "storage": settings.STORAGE_BACKEND,
    }


@router.get("/health/ready")
def readiness_check():
    try:
        get_directory().verify_connection()
        get_store().verify_connection()
        return {"status": "ok", "storage": settings.STORAGE_BACKEND}
    except Exception as exc:
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}")


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_stats(service: StatsService = Depends(get_stats_service)):
    """Team, user and pull request totals plus per-reviewer assignment counts."""
    return service.get_stats()
