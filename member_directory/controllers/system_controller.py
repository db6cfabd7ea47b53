# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from member_directory.core.config import settings
from member_directory.core.dependencies import get_member_repo
from member_directory.repositories.base import RepositoryError

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe — the process is up. Does not touch the store."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(repo=Depends(get_member_repo)):
    """Readiness probe — verifies the store answers a ping."""
    try:
        repo.ping()
    except RepositoryError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unavailable",
                "service": settings.SERVICE_NAME,
                "store": settings.STORE_BACKEND,
                "error": str(e),
            },
        )
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "store": settings.STORE_BACKEND,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
