"""
Health check and status endpoints.
"""

from fastapi import APIRouter, Depends, Request

from api.deps import get_provider_manager, uptime_seconds
from api.rate_limiter import limiter, rate_limit_config
from config.settings import settings
from core.generation.models import utc_now
from core.generation.provider_manager import ProviderManager

router = APIRouter(tags=["Health"])


@router.get("/health")
@limiter.limit(rate_limit_config.get_limit("health"))
async def health_check(
    request: Request,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Basic health check with provider availability"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "timestamp": utc_now(),
        "ai_providers": manager.get_provider_status(),
    }


@router.get("/api/status")
@limiter.limit(rate_limit_config.get_limit("status"))
async def api_status(
    request: Request,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Aggregate service status: providers, environment and feature flags."""
    return {
        "message": f"{settings.app_name} API Online",
        "version": settings.app_version,
        "timestamp": utc_now(),
        "uptime": round(uptime_seconds(), 1),
        "environment": settings.environment,
        "ai_providers": manager.get_provider_status(),
        "failover_chain": manager.failover_chain,
        "features": {
            "ai_generation": True,
            "book_creation": True,
            "multi_provider_failover": True,
            "quality_control": True,
        },
    }


@router.get("/api/ai-status")
@limiter.limit(rate_limit_config.get_limit("status"))
async def ai_status(
    request: Request,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Per-provider availability snapshot."""
    return {
        "providers": manager.get_provider_status(),
        "timestamp": utc_now(),
    }
