"""Validate provider responses and pull out the reply text."""

from __future__ import annotations

from typing import Any

from .errors import UpstreamInvalidResponse


def validate_provider_response(response: Any) -> dict[str, Any]:
    """Return the first candidate, or raise when the response holds none with content."""
    candidates = response.get("candidates") if isinstance(response, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise UpstreamInvalidResponse("invalid response: no candidates", details=response)
    first = candidates[0]
    if not isinstance(first, dict) or not first.get("content"):
        raise UpstreamInvalidResponse("invalid response: candidate has no content", details=response)
    return first


def extract_text(candidate: dict[str, Any]) -> str:
    """``content.parts[0].text`` of a candidate, or ``""`` when absent."""
    content = candidate.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""
