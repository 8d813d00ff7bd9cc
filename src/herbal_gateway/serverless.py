"""Serverless entry point (Netlify / AWS Lambda style).

The function receives an event dict with ``httpMethod`` and a string ``body``
and returns ``{"statusCode", "headers", "body"}``. It shares the pipeline with
the FastAPI app; only the (de)serialization lives here.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any

import pydantic

from .config import CORS_HEADERS, Settings, get_settings
from .errors import ConfigurationError
from .gateway import GenerationGateway, build_gateway

logger = logging.getLogger(__name__)

_UNREADABLE = object()


def _response(status_code: int, body: Any, headers: dict[str, str]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {**headers, "Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _decode_body(event: dict[str, Any]) -> Any:
    raw = event.get("body")
    if not raw:
        return {}
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (ValueError, TypeError):
        logger.warning("Could not JSON.parse request body")
        return _UNREADABLE


async def handle_event(
    event: dict[str, Any],
    gateway: GenerationGateway | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    if settings is None:
        try:
            settings = get_settings()
        except pydantic.ValidationError as e:
            logger.error("Invalid gateway settings: %s", e)
            error = ConfigurationError("invalid settings", details=str(e))
            return _response(error.status_code, error.to_body(), dict(CORS_HEADERS))
    headers = settings.cors_headers

    method = (event.get("httpMethod") or "POST").upper()
    if method == "OPTIONS":
        return {"statusCode": 204, "headers": headers, "body": ""}
    if method != "POST":
        return _response(
            405,
            {"error": "Method not allowed", "reply": "Send your question with a POST request."},
            {**headers, "Allow": "POST, OPTIONS"},
        )

    body = _decode_body(event)
    gateway = gateway or build_gateway(settings)
    result = await gateway.handle(body)
    return _response(result.status_code, result.body, headers)


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Synchronous function entry point."""
    return asyncio.run(handle_event(event))
