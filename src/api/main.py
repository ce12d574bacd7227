"""
FastAPI Application
==================

Main FastAPI application exposing HTML to PNG rendering.
Interactive API documentation is served at the root path.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from src.config.settings import get_settings, Settings
from src.config.logging import get_logger, setup_logging
from src.core.rendering.png_generator import (
    BrowserPool,
    PlaywrightPNGGenerator,
    PNGGenerationError,
)
from src.api.routes.health import router as health_router
from src.api.routes.render import router as render_router
from src.models.schemas import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info("Starting FastAPI application", environment=settings.environment)

    browser_pool = BrowserPool(settings.browser_pool_size, settings=settings)
    try:
        await browser_pool.initialize()
    except PNGGenerationError as e:
        logger.error("Browser pool initialization failed", error=str(e))
        raise RuntimeError(f"Browser pool initialization failed: {e}") from e

    app.state.browser_pool = browser_pool
    app.state.png_generator = PlaywrightPNGGenerator(browser_pool, settings=settings)
    logger.info("Browser pool ready", pool_size=settings.browser_pool_size)

    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")
        app.state.png_generator = None
        app.state.browser_pool = None
        try:
            await browser_pool.close()
        except Exception as e:
            logger.error("Error closing browser pool", error=str(e))


def _classify_png_error(error_message: str) -> tuple[int, str, str]:
    """Map a renderer failure message to (status code, error code, user message)."""
    lowered = error_message.lower()
    if "browser pool not initialized" in lowered:
        return 503, "BROWSER_POOL_NOT_INITIALIZED", "Browser pool is not available. Please try again later."
    if "browser pool initialization failed" in lowered or "launch" in lowered:
        return 503, "BROWSER_LAUNCH_FAILED", "Failed to launch browser instance. Service temporarily unavailable."
    if "timeout" in lowered or "timed out" in lowered:
        return 504, "BROWSER_TIMEOUT", "Browser operation timed out. Please try again."
    return 500, "PNG_GENERATION_ERROR", "PNG generation failed due to an internal error."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Render HTML, or a title card, to a PNG image",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/" if settings.enable_docs else None,
        redoc_url=None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore[no-untyped-def]
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Exception handlers
    @app.exception_handler(StarletteHTTPException)
    async def custom_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Custom HTTP exception handler with structured error response."""
        error_response = ErrorResponse(
            error=str(exc.detail),
            error_code=str(exc.status_code),
            request_id=getattr(request.state, "request_id", None),
        )

        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            request_id=error_response.request_id,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(PNGGenerationError)
    async def png_generation_exception_handler(
        request: Request, exc: PNGGenerationError
    ) -> JSONResponse:
        """Handle PNG generation errors with specific error codes."""
        error_message = str(exc)
        status_code, error_code, user_message = _classify_png_error(error_message)

        error_response = ErrorResponse(
            error=user_message,
            error_code=error_code,
            details={"message": error_message} if settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "PNG generation error",
            error_code=error_code,
            error_message=error_message,
            request_id=error_response.request_id,
        )

        return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        error_response = ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            details={"exception": str(exc)} if settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=error_response.request_id,
            exc_info=True,
        )

        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))

    app.include_router(render_router)
    app.include_router(health_router)

    return app


# Development server runner
def run_development_server() -> None:
    """Run development server."""
    settings = get_settings()
    uvicorn.run(
        "src.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug and settings.environment == "development",
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
