"""Health & Stats — liveness, readiness and resource counts (unversioned).

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - GET /stats counts stored resources; store failures surface as 503 STORE_FAILURE

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from termserver.api.dependencies import get_store
from termserver.config import get_settings
from termserver.core.repository_protocols import TerminologyStore
from termserver.infrastructure import database
from termserver.services.handle_resources import ResourceQueries

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.software_name,
        "version": settings.software_version,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/stats")
async def resource_stats(store: TerminologyStore = Depends(get_store)):
    return await ResourceQueries(store).stats()
