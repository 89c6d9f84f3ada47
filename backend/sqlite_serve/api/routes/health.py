"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /_health/ always returns 200 if process is up (liveness)
    - GET /_health/ready returns 503 if no route loaded (readiness)
    - Readiness lists routes disabled by configuration errors

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Prefix "/_health" keeps probes out of the way of configured route paths
"""


from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/_health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": request.app.state.settings.service_name,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — at least one route must be servable."""
    registry = request.app.state.registry
    failed = [
        {"path": f.path, "code": f.code, "message": f.message}
        for f in registry.failures
    ]
    if not registry.routes:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "no_routes_loaded",
                "failed_routes": failed,
            },
        )
    return {
        "status": "ready",
        "routes": sorted(registry.routes),
        "failed_routes": failed,
    }
