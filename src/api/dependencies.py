"""
API Dependencies
================

FastAPI dependencies resolving per-application resources from ``app.state``.
"""

from typing import Optional

from fastapi import Request

from src.config.settings import Settings
from src.core.rendering.png_generator import (
    BrowserPool,
    PlaywrightPNGGenerator,
    PNGGenerationError,
)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_browser_pool(request: Request) -> Optional[BrowserPool]:
    """Browser pool started by the lifespan, None before startup."""
    return getattr(request.app.state, "browser_pool", None)


def get_png_generator(request: Request) -> PlaywrightPNGGenerator:
    """PNG generator bound to the application's browser pool."""
    generator: Optional[PlaywrightPNGGenerator] = getattr(
        request.app.state, "png_generator", None
    )
    if generator is None:
        raise PNGGenerationError("Browser pool not initialized")
    return generator
