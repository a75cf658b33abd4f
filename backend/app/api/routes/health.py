"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if no model API key is configured (readiness)

Design Decisions:
    - Readiness never calls the model service: a probe must not consume quota
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.infrastructure.anthropic_client import (
    AnthropicCompletionClient, get_completion_client,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "textcards-api",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check(
    client: AnthropicCompletionClient = Depends(get_completion_client),
):
    """Readiness probe. Requires a configured model credential."""
    if not client.configured:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "api_key_missing",
            },
        )
    return {"status": "ready", "checks": {"anthropic": "configured"}}
