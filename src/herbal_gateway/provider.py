"""Gemini REST provider with a two-shape call strategy."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from .errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamInvalidResponse,
    UpstreamRateLimit,
    UpstreamTimeout,
)
from .payload import to_inline_payload

logger = logging.getLogger(__name__)

SHAPE_STRUCTURED = "structured"
SHAPE_INLINE = "inline"


@dataclass(frozen=True)
class Ok:
    response: dict[str, Any]
    shape: str


@dataclass(frozen=True)
class RetryableShapeError:
    """The provider rejected the request shape; another shape may succeed."""

    error: UpstreamError
    shape: str


@dataclass(frozen=True)
class Fatal:
    error: UpstreamError


CallOutcome = Union[Ok, RetryableShapeError, Fatal]


def _error_info(response: httpx.Response) -> tuple[str, str, list[str]]:
    """Return ``(status, message, reasons)`` from a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return "", response.text[:500], []
    err = body.get("error") if isinstance(body, dict) else None
    if not isinstance(err, dict):
        return "", str(body)[:500], []
    reasons = [
        d.get("reason", "")
        for d in err.get("details") or []
        if isinstance(d, dict) and d.get("reason")
    ]
    return str(err.get("status", "")), str(err.get("message", ""))[:500], reasons


def classify_response(response: httpx.Response, shape: str) -> CallOutcome:
    """Map a completed HTTP exchange to a call outcome."""
    status = response.status_code

    if response.is_success:
        try:
            payload = response.json()
        except ValueError:
            return Fatal(
                UpstreamInvalidResponse(
                    "malformed JSON body", status=status, details=response.text[:2000]
                )
            )
        if not isinstance(payload, dict):
            return Fatal(UpstreamInvalidResponse("response body is not an object", status=status, details=payload))
        return Ok(payload, shape)

    api_status, message, reasons = _error_info(response)

    if status in (401, 403) or "API_KEY_INVALID" in reasons:
        return Fatal(UpstreamAuthError(f"credentials rejected: {message}", status=status))
    if status == 429 or api_status == "RESOURCE_EXHAUSTED":
        return Fatal(UpstreamRateLimit(f"rate limited: {message}", status=status))
    if status == 400:
        error = UpstreamHTTPError(f"request rejected ({api_status or status}): {message}", status=status)
        if shape == SHAPE_STRUCTURED:
            return RetryableShapeError(error, shape)
        return Fatal(error)
    return Fatal(UpstreamHTTPError(f"provider error ({status}): {message}", status=status))


class GeminiProvider:
    """Calls ``models/{model}:generateContent`` on the Gemini REST API.

    The structured payload is tried first; if the provider rejects that shape
    the same request is retried once in the inline shape. Timeouts and every
    other failure end the call immediately. The whole call, both attempts
    included, is bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("Gemini API key is not configured (set GENERATIVE_API_KEY)")
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    async def _post(self, payload: dict[str, Any], timeout: float) -> httpx.Response:
        headers = self._headers()
        if self._client is not None:
            return await self._client.post(self.url, json=payload, headers=headers, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(self.url, json=payload, headers=headers)

    async def attempt(self, payload: dict[str, Any], shape: str, timeout: float) -> CallOutcome:
        """Send one request and classify the result. Never raises ``UpstreamError``."""
        try:
            response = await asyncio.wait_for(self._post(payload, timeout), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return Fatal(UpstreamTimeout(f"no response within {timeout:.1f}s"))
        except httpx.TransportError as e:
            return Fatal(UpstreamConnectionError(f"transport failure: {type(e).__name__}: {e}"))
        return classify_response(response, shape)

    async def generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Return the raw provider response or raise a classified ``UpstreamError``."""
        self._headers()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout

        outcome = await self.attempt(payload, SHAPE_STRUCTURED, self.timeout)
        if isinstance(outcome, RetryableShapeError):
            logger.warning(
                "generateContent rejected %s payload (%s), retrying with %s payload",
                outcome.shape,
                outcome.error.message,
                SHAPE_INLINE,
            )
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise UpstreamTimeout(f"no time left for {SHAPE_INLINE} retry")
            outcome = await self.attempt(to_inline_payload(payload), SHAPE_INLINE, remaining)

        if isinstance(outcome, Ok):
            logger.debug("generateContent succeeded with %s payload", outcome.shape)
            return outcome.response
        raise outcome.error
