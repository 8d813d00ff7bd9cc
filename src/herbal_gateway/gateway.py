"""Transport-agnostic generation pipeline.

``GenerationGateway.handle`` takes the decoded request body and always returns
a ``GatewayResponse``; the HTTP and serverless adapters only translate that
into their own response types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .config import Settings
from .errors import classify_error
from .extractor import extract_text, validate_provider_response
from .normalizer import DomainGate, normalize_request
from .payload import build_structured_payload
from .provider import GeminiProvider
from .schemas import NormalizedReply
from .topic_filter import OffTopicPolicy, apply_topic_filter, is_off_topic

logger = logging.getLogger(__name__)


class Provider(Protocol):
    async def generate(self, payload: dict[str, Any]) -> dict[str, Any]: ...


@dataclass(frozen=True)
class GatewayResponse:
    status_code: int
    body: dict[str, Any]


class GenerationGateway:
    def __init__(
        self,
        settings: Settings,
        provider: Provider,
        off_topic_policy: OffTopicPolicy = is_off_topic,
    ):
        self.settings = settings
        self.provider = provider
        self.off_topic_policy = off_topic_policy
        self.gate = DomainGate(settings.required_domain)

    async def run(self, body: Any) -> NormalizedReply:
        """Run the pipeline, raising classified errors."""
        request = normalize_request(body, self.gate, fallback=self.settings.fallback_message)
        logger.debug("Normalized request from %s (%d chars)", request.source, len(request.message))

        payload = build_structured_payload(
            request,
            self.settings.system_instruction,
            self.settings.generation_config,
        )
        response = await self.provider.generate(payload)

        candidate = validate_provider_response(response)
        text = apply_topic_filter(extract_text(candidate), self.off_topic_policy)
        return NormalizedReply.from_text(text)

    async def handle(self, body: Any) -> GatewayResponse:
        """Run the pipeline and map every failure to a well-formed response."""
        try:
            reply = await self.run(body)
        except Exception as exc:
            status_code, error_body = classify_error(exc)
            return GatewayResponse(status_code, error_body)
        return GatewayResponse(200, reply.model_dump())


def build_gateway(settings: Settings, client=None) -> GenerationGateway:
    """Wire a gateway against the Gemini REST provider described by ``settings``."""
    if not settings.gemini_api_key:
        logger.error("No Gemini API key configured; every generate request will fail with 500")
    provider = GeminiProvider(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.request_timeout_seconds,
        client=client,
    )
    return GenerationGateway(settings, provider)
