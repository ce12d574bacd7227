"""
Render Routes
=============

FastAPI route for HTML to PNG rendering.
Accepts a JSON body, a raw HTML body, or nothing at all.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from src.config.logging import get_logger
from src.api.dependencies import get_png_generator
from src.core.rendering.params import resolve_params
from src.core.rendering.png_generator import PlaywrightPNGGenerator
from src.models.schemas import ErrorResponse, RenderBody, RenderInput, RenderQuery

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Render"])


_REQUEST_BODY_DOC = {
    "required": False,
    "content": {
        "application/json": {"schema": RenderBody.model_json_schema()},
        "text/html": {"schema": {"type": "string", "description": "Raw HTML to render"}},
        "text/plain": {"schema": {"type": "string", "description": "Raw HTML to render"}},
    },
}


async def read_render_input(
    request: Request,
    width: Optional[str] = Query(None, description="Render width in pixels (default 1200)"),
    height: Optional[str] = Query(None, description="Render height in pixels (default 630)"),
    title: Optional[str] = Query(None, description="Title for the fallback card"),
) -> RenderInput:
    """Collect the transport-level pieces of a render request."""
    body: Optional[bytes]
    try:
        body = await request.body()
    except Exception as e:
        # An unreadable body degrades to the fallback card
        logger.warning("Failed to read render request body", error=str(e))
        body = None

    return RenderInput(
        content_type=request.headers.get("content-type", ""),
        body=body,
        query=RenderQuery(width=width, height=height, title=title),
    )


@router.post(
    "/render",
    summary="Render HTML to PNG",
    response_class=Response,
    responses={
        200: {"description": "Returns a PNG image", "content": {"image/png": {}}},
        500: {"description": "Rendering failed", "model": ErrorResponse},
        503: {"description": "Renderer unavailable", "model": ErrorResponse},
    },
    openapi_extra={"requestBody": _REQUEST_BODY_DOC},
)
async def render_image(
    render_input: RenderInput = Depends(read_render_input),
    generator: PlaywrightPNGGenerator = Depends(get_png_generator),
) -> Response:
    """
    Render HTML to a PNG image.

    The HTML comes from the JSON ``html`` field or the raw request body. When
    neither is usable a title card is rendered instead. Width and height come
    from the JSON body, then the query string, then 1200x630.
    """
    params = resolve_params(render_input)

    logger.info(
        "Render requested",
        width=params.width,
        height=params.height,
        html_length=len(params.html),
    )

    png_bytes = await generator.render(params.html, params.width, params.height)

    return Response(
        content=png_bytes,
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=render.png"},
    )
