"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 while any board is still loading (readiness)

Design Decisions:
    - A FAILED board counts as settled: readiness reports it, the board view carries
      the error, and reload is the retry path
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_registry
from app.services.board_registry import BoardRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "sortboard-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(registry: BoardRegistry = Depends(get_registry)):
    """Readiness probe - every board has finished its initial load."""
    checks = {board.name: board.status.value for board in registry}
    if not registry.all_settled:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "boards_loading",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
