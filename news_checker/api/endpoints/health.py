"""Health check endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends

from ...infrastructure.dependencies import ServiceContainer, get_service_container

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


@router.get("/health")
async def health_check(
    container: ServiceContainer = Depends(get_service_container),
) -> Dict[str, object]:
    """Check configuration and provider readiness.

    Returns:
        Service status, version and evidence strategy status
    """
    status = container.status
    return {
        "status": "healthy" if status["llm_configured"] else "degraded",
        "version": VERSION,
        **status,
    }
