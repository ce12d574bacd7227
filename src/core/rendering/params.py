"""
Render Parameters
=================

Request normalization for the render endpoint. Turns a transport-free
RenderInput into the (html, width, height) triple handed to the renderer.

Precedence rules:
- html: JSON ``html`` field or raw text body, else the fallback title card
- title: JSON ``title`` -> query ``title`` -> DEFAULT_TITLE
- width/height: JSON value -> query value -> DEFAULT_WIDTH / DEFAULT_HEIGHT

Nothing in here raises on bad client input. Unusable bodies and dimensions
degrade to defaults so a request always produces an image.
"""

import html as html_lib
import json
import math
import re
from typing import Any, Optional

from src.config.logging import get_logger
from src.models.schemas import RenderBody, RenderInput, ResolvedRenderParams

logger = get_logger(__name__)

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 630
DEFAULT_TITLE = "Lorem ipsum"

# Largest accepted viewport side, larger values fall back to the default
MAX_DIMENSION = 16384

JSON_CONTENT_TYPE = "application/json"

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

_FALLBACK_TEMPLATE = """\
<div style="display: flex; flex-direction: column; align-items: center; justify-content: center; height: 100vh; width: 100vw; font-family: sans-serif; background: #160f29">
  <div style="display: flex; width: 100vw; padding: 40px; color: white;">
    <h1 style="font-size: 60px; font-weight: 500; margin: 0; font-family: 'Bitter', serif">{title}</h1>
  </div>
</div>"""


def fallback_fragment(title: str) -> str:
    """
    Build the default title card shown when a request carries no usable HTML.

    Args:
        title: Text for the heading, HTML-escaped before insertion

    Returns:
        Full-viewport dark HTML fragment
    """
    return _FALLBACK_TEMPLATE.format(title=html_lib.escape(title))


def coerce_dimension(value: Any, default: int) -> int:
    """
    Coerce a width/height candidate to a positive integer.

    Strings are read like a base-10 integer prefix ("640", " 640 ", "12.7" -> 12).
    Numbers must be finite and are truncated. Anything else, and any result
    outside 1..MAX_DIMENSION, yields ``default``.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        if isinstance(value, str):
            match = _INTEGER_PREFIX.match(value)
            if not match:
                return default
            number = int(match.group(1))
        elif isinstance(value, (int, float)):
            if not math.isfinite(value):
                return default
            number = int(value)
        else:
            return default
    except (ValueError, OverflowError):
        # digit-limit string conversion, ints too large for float
        return default

    return number if 0 < number <= MAX_DIMENSION else default


def _first_present(*candidates: Optional[str]) -> str:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return DEFAULT_TITLE


def _resolve_dimension(default: int, *candidates: Any) -> int:
    for candidate in candidates:
        number = coerce_dimension(candidate, 0)
        if number:
            return number
    return default


def _parse_json_body(raw: Optional[bytes]) -> RenderBody:
    if raw is None:
        raise ValueError("request body could not be read")

    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

    return RenderBody.model_validate(payload)


def _decode_text_body(raw: Optional[bytes]) -> str:
    if raw is None:
        raise ValueError("request body could not be read")
    return raw.decode("utf-8")


def resolve_params(render_input: RenderInput) -> ResolvedRenderParams:
    """
    Resolve the renderer inputs for one request.

    Args:
        render_input: Content type, raw body and query parameters of the request

    Returns:
        ResolvedRenderParams with non-empty html and positive dimensions
    """
    query = render_input.query
    body_width: Any = None
    body_height: Any = None

    try:
        if JSON_CONTENT_TYPE in render_input.content_type.lower():
            body = _parse_json_body(render_input.body)
            body_width = body.width
            body_height = body.height

            if body.html:
                html = body.html
            else:
                html = fallback_fragment(_first_present(body.title, query.title))
        else:
            text = _decode_text_body(render_input.body)
            if text.strip():
                html = text
            else:
                html = fallback_fragment(_first_present(query.title))

    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError and pydantic ValidationError are ValueErrors
        logger.warning(
            "Unusable render body, falling back to title card",
            content_type=render_input.content_type,
            error=str(e),
        )
        body_width = body_height = None
        html = fallback_fragment(_first_present(query.title))

    width = _resolve_dimension(DEFAULT_WIDTH, body_width, query.width)
    height = _resolve_dimension(DEFAULT_HEIGHT, body_height, query.height)

    return ResolvedRenderParams(html=html, width=width, height=height)
