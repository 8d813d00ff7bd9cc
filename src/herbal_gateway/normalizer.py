"""Turn an arbitrary client body into the user message the provider will see."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedRequest:
    """Extracted user text plus the conversation turns to forward."""

    message: str
    source: str
    # Raw client turns, only set when ``contents`` was the authoritative source
    contents: list[dict[str, Any]] | None = field(default=None)


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _first_part_text(contents: Any) -> str | None:
    if not isinstance(contents, list) or not contents:
        return None
    first = contents[0]
    if not isinstance(first, dict):
        return None
    parts = first.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    return _text_or_none(parts[0].get("text"))


def _forwardable_contents(contents: list[Any]) -> list[dict[str, Any]]:
    """Copy client turns, defaulting missing roles to ``user`` and dropping junk entries."""
    turns: list[dict[str, Any]] = []
    for item in contents:
        if not isinstance(item, dict) or not isinstance(item.get("parts"), list):
            continue
        turns.append({"role": item.get("role") or "user", "parts": item["parts"]})
    return turns


class DomainGate:
    """Reject requests whose ``domain`` is not the configured one.

    A gate built with ``None`` or an empty string lets everything through.
    """

    def __init__(self, required_domain: str | None):
        self.required_domain = required_domain or None

    @property
    def enabled(self) -> bool:
        return self.required_domain is not None

    def check(self, body: dict[str, Any]) -> None:
        if not self.enabled:
            return
        if body.get("domain") != self.required_domain:
            raise ValidationError.invalid_domain()


def extract_user_message(body: dict[str, Any], fallback: str | None = None) -> NormalizedRequest:
    """Pick the user message by precedence ``prompt`` > ``message`` > ``contents``.

    Blank strings do not count. Raises ``ValidationError`` when nothing is
    extractable and no ``fallback`` is configured.
    """
    prompt = _text_or_none(body.get("prompt"))
    if prompt is not None:
        return NormalizedRequest(message=prompt, source="prompt")

    message = _text_or_none(body.get("message"))
    if message is not None:
        return NormalizedRequest(message=message, source="message")

    text = _first_part_text(body.get("contents"))
    if text is not None:
        return NormalizedRequest(
            message=text,
            source="contents",
            contents=_forwardable_contents(body["contents"]),
        )

    if fallback:
        logger.debug("No message in request, substituting fallback")
        return NormalizedRequest(message=fallback, source="fallback")
    raise ValidationError.no_message()


def normalize_request(
    body: Any,
    gate: DomainGate,
    fallback: str | None = None,
) -> NormalizedRequest:
    """Validate the body shape, run the domain gate, then extract the message."""
    if not isinstance(body, dict):
        raise ValidationError.bad_body()
    gate.check(body)
    return extract_user_message(body, fallback=fallback)
