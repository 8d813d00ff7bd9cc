"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, Settings, get_settings
from ..errors import GatewayError, PayloadTooLarge, ValidationError
from ..gateway import GenerationGateway, build_gateway
from ..schemas import HealthResponse
from .routes import generate

logger = logging.getLogger(__name__)


class PreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers accepted preflights with 204 No Content."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body is larger than ``max_bytes``.

    Bodies without a ``Content-Length`` (chunked uploads) are capped while the
    route reads them.
    """

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next):
        length = request.headers.get("content-length")
        if length is None:
            return await call_next(request)

        error: GatewayError | None = None
        try:
            if int(length) > self.max_bytes:
                error = PayloadTooLarge(f"declared {length} bytes on {request.url.path}")
        except ValueError:
            error = ValidationError.invalid_content_length(length)
        if error is not None:
            logger.info("Rejected request body: %s", error.message)
            return JSONResponse(status_code=error.status_code, content=error.to_body())
        return await call_next(request)


def create_app(settings: Settings | None = None, gateway: GenerationGateway | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt ``gateway`` skips creating the shared Gemini HTTP client.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Herbal gateway starting (model=%s)...", settings.gemini_model)
        if gateway is not None:
            app.state.gateway = gateway
            yield
            return

        async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
            app.state.gateway = build_gateway(settings, client=client)
            yield
        logger.info("Herbal gateway shutdown complete")

    app = FastAPI(
        title="Herbal Gateway",
        description="Domain-restricted Gemini proxy for the virtual herbal garden",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    # Registered first so the CORS layer wraps its rejections
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=list(CORS_ALLOW_METHODS),
        allow_headers=list(CORS_ALLOW_HEADERS),
    )

    app.include_router(generate.router, prefix="/api", tags=["generate"])

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse()

    return app


app = create_app()
