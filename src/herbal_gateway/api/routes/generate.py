"""API route for prompt generation."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ...config import Settings
from ...errors import PayloadTooLarge
from ...gateway import GenerationGateway
from ...schemas import ErrorResponse, NormalizedReply

logger = logging.getLogger(__name__)

router = APIRouter()

# Marker for bodies that are not valid JSON; the gateway rejects it as a bad body
_UNREADABLE = object()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Malformed body, wrong domain or empty message"},
    413: {"model": ErrorResponse, "description": "Request body too large"},
    429: {"model": ErrorResponse, "description": "Provider rate limit"},
    500: {"model": ErrorResponse, "description": "Gateway misconfigured"},
    502: {"model": ErrorResponse, "description": "Provider unreachable or returned no usable answer"},
    504: {"model": ErrorResponse, "description": "Provider timed out"},
}


def get_gateway(request: Request) -> GenerationGateway:
    return request.app.state.gateway


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _read_body(request: Request, max_bytes: int) -> bytes:
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLarge(f"body exceeded {max_bytes} bytes on {request.url.path}")
    return bytes(body)


def _decode_json(raw: bytes) -> Any:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.info("Could not decode request body as JSON")
        return _UNREADABLE


@router.post("/generate", response_model=NormalizedReply, responses=_ERROR_RESPONSES)
async def generate(
    request: Request,
    gateway: GenerationGateway = Depends(get_gateway),
    settings: Settings = Depends(get_app_settings),
):
    """Forward a prompt to Gemini and return the normalized reply."""
    try:
        raw = await _read_body(request, settings.max_body_bytes)
    except PayloadTooLarge as e:
        logger.info("Rejected request body: %s", e.message)
        return JSONResponse(status_code=e.status_code, content=e.to_body())

    result = await gateway.handle(_decode_json(raw))
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.options("/generate", include_in_schema=False)
async def generate_preflight(settings: Settings = Depends(get_app_settings)) -> Response:
    return Response(status_code=204, headers=settings.cors_headers)
