"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings, get_browser_pool
from src.config.settings import Settings
from src.core.rendering.png_generator import BrowserPool
from src.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    browser_pool: Optional[BrowserPool] = Depends(get_browser_pool),
) -> HealthStatus:
    """Report whether the browser pool can take render requests."""
    if browser_pool is None:
        return HealthStatus(status="unhealthy", version=settings.app_version, browser_pool=False)

    # Busy browsers still count, only a closed or never-started pool is unhealthy
    healthy = browser_pool.initialized
    return HealthStatus(
        status="healthy" if healthy else "unhealthy",
        version=settings.app_version,
        browser_pool=healthy,
        available_browsers=browser_pool.available,
        total_browsers=browser_pool.pool_size,
    )
