"""
Pydantic Models and Schemas
===========================

Data models for render requests, resolved render parameters and API responses.
"""

from typing import Optional, Dict, Any, Literal
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Request Models
class RenderQuery(BaseModel):
    """Query string parameters of a render request, as received."""
    width: Optional[str] = Field(None, description="Render width in pixels")
    height: Optional[str] = Field(None, description="Render height in pixels")
    title: Optional[str] = Field(None, description="Title shown on the fallback card")


class RenderBody(BaseModel):
    """JSON body of a render request."""
    html: Optional[str] = Field(None, description="HTML content to render")
    width: Optional[Any] = Field(
        None,
        description="Render width in pixels",
        json_schema_extra={"type": "integer", "minimum": 1},
    )
    height: Optional[Any] = Field(
        None,
        description="Render height in pixels",
        json_schema_extra={"type": "integer", "minimum": 1},
    )
    title: Optional[str] = Field(None, description="Title shown on the fallback card")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"html": "<h1>Hello</h1>", "width": 1200, "height": 630},
                {"title": "Release notes", "width": 800},
            ]
        }
    )


class RenderInput(BaseModel):
    """Everything the normalizer needs from one HTTP request, free of transport types."""
    content_type: str = Field("", description="Declared Content-Type header")
    body: Optional[bytes] = Field(
        None, description="Raw request body, None when the body could not be read"
    )
    query: RenderQuery = Field(default_factory=RenderQuery, description="Query parameters")


class ResolvedRenderParams(BaseModel):
    """Final renderer inputs after precedence and validation."""
    html: str = Field(..., min_length=1, description="HTML passed to the renderer")
    width: int = Field(..., gt=0, description="Viewport width in pixels")
    height: int = Field(..., gt=0, description="Viewport height in pixels")

    model_config = ConfigDict(frozen=True)


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""
    status: Literal["healthy", "unhealthy"] = Field(..., description="Overall status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    browser_pool: bool = Field(..., description="Browser pool status")
    available_browsers: int = Field(0, ge=0, description="Idle browsers in the pool")
    total_browsers: int = Field(0, ge=0, description="Configured pool size")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
