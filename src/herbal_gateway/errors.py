"""Error taxonomy for the generation gateway and its mapping to client responses."""

from __future__ import annotations

import logging
from typing import Any

from . import prompts

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base error carrying the HTTP status and client-facing texts."""

    status_code: int = 500
    error: str = "internal_error"
    reply: str = prompts.GENERIC_ERROR_REPLY

    def __init__(self, message: str, *, details: Any = None):
        super().__init__(message)
        self.message = message
        # Server-side diagnostics only, never sent to the client
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "reply": self.reply}


class ConfigurationError(GatewayError):
    """Deployment is missing something the gateway needs (API key, client)."""

    status_code = 500
    error = "server_misconfigured"
    reply = prompts.MISCONFIGURED_REPLY


class ValidationError(GatewayError):
    """Request body is malformed or fails the domain gate."""

    status_code = 400

    def __init__(self, message: str, *, error: str, reply: str):
        super().__init__(message)
        self.error = error
        self.reply = reply

    @classmethod
    def invalid_domain(cls) -> ValidationError:
        return cls("invalid domain", error="Invalid domain", reply=prompts.INVALID_DOMAIN_REPLY)

    @classmethod
    def no_message(cls) -> ValidationError:
        return cls("no message", error="No message provided", reply=prompts.NO_MESSAGE_REPLY)

    @classmethod
    def bad_body(cls) -> ValidationError:
        return cls("bad body", error="Request body must be a JSON object", reply=prompts.BAD_BODY_REPLY)

    @classmethod
    def invalid_content_length(cls, value: str) -> ValidationError:
        return cls(f"invalid content-length {value!r}", error="Invalid Content-Length", reply=prompts.BAD_BODY_REPLY)


class PayloadTooLarge(GatewayError):
    """Request body exceeds the configured size limit."""

    status_code = 413
    error = "payload_too_large"
    reply = prompts.PAYLOAD_TOO_LARGE_REPLY


class UpstreamError(GatewayError):
    """Base class for failures talking to the generative provider."""

    status_code = 502
    error = "upstream_error"
    reply = prompts.UNAVAILABLE_REPLY

    def __init__(self, message: str, *, status: int | None = None, details: Any = None):
        super().__init__(message, details=details)
        self.status = status


class UpstreamTimeout(UpstreamError):
    status_code = 504
    error = "upstream_timeout"
    reply = prompts.TIMEOUT_REPLY

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "message": "AI provider did not respond in time", "reply": self.reply}


class UpstreamAuthError(UpstreamError):
    """Provider rejected the credentials; treated as a configuration issue."""

    status_code = 500
    error = "upstream_auth_failed"
    reply = prompts.MISCONFIGURED_REPLY


class UpstreamRateLimit(UpstreamError):
    status_code = 429
    error = "upstream_rate_limited"
    reply = prompts.RATE_LIMIT_REPLY

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "message": "Too many requests, wait and retry", "reply": self.reply}


class UpstreamConnectionError(UpstreamError):
    """Provider could not be reached at the transport level."""

    status_code = 502
    error = "upstream_unreachable"
    reply = prompts.UNAVAILABLE_REPLY


class UpstreamHTTPError(UpstreamError):
    """Provider answered with a non-2xx status not covered by a narrower class."""

    status_code = 502
    error = "upstream_error"
    reply = prompts.UNAVAILABLE_REPLY


class UpstreamInvalidResponse(UpstreamError):
    """Provider body is not JSON or does not hold a usable candidate."""

    status_code = 502
    error = "invalid_upstream_response"
    reply = prompts.PROCESSING_PROBLEM_REPLY

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "message": "AI provider returned no usable answer", "reply": self.reply}


class UnknownError(GatewayError):
    status_code = 500
    error = "internal_error"
    reply = prompts.GENERIC_ERROR_REPLY


def classify_error(exc: BaseException) -> tuple[int, dict[str, Any]]:
    """Map any exception raised by the pipeline to ``(status_code, body)``.

    Also does the server-side logging for the failure so callers only need to
    serialize the result.
    """
    if not isinstance(exc, GatewayError):
        logger.error("Unhandled error in generation pipeline", exc_info=exc)
        exc = UnknownError(str(exc))
    elif isinstance(exc, (ConfigurationError, UpstreamAuthError)):
        logger.error("Gateway misconfigured: %s", exc.message)
    elif isinstance(exc, (ValidationError, PayloadTooLarge)):
        logger.info("Rejected request: %s", exc.message)
    elif isinstance(exc, UpstreamInvalidResponse):
        logger.error("Invalid response from provider: %s details=%.2000s", exc.message, exc.details)
    elif isinstance(exc, UpstreamError):
        logger.warning("Provider call failed (%s, status=%s): %s", exc.error, exc.status, exc.message)

    return exc.status_code, exc.to_body()
