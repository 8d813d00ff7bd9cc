"""Build ``generateContent`` request bodies with the system instruction attached.

Two request shapes are supported:

``structured``
    The instruction travels in ``systemInstruction``, next to ``contents``
    and ``generationConfig``. This is what current API versions expect.

``inline``
    Everything is wrapped under ``contents``: the instruction is folded into
    the first user turn as a leading text part and ``systemInstruction`` is
    omitted. Used as a fallback when the structured shape is rejected.
"""

from __future__ import annotations

import copy
from typing import Any

from .normalizer import NormalizedRequest


def user_turns(request: NormalizedRequest) -> list[dict[str, Any]]:
    """Conversation turns to send for ``request``."""
    if request.contents:
        return copy.deepcopy(request.contents)
    return [{"role": "user", "parts": [{"text": request.message}]}]


def build_structured_payload(
    request: NormalizedRequest,
    instruction: str,
    generation_config: dict[str, Any],
) -> dict[str, Any]:
    return {
        "contents": user_turns(request),
        "systemInstruction": {"parts": [{"text": instruction}]},
        "generationConfig": dict(generation_config),
    }


def to_inline_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Rewrite a structured payload into the ``inline`` shape."""
    contents = copy.deepcopy(payload.get("contents") or [])
    instruction_parts = (payload.get("systemInstruction") or {}).get("parts") or []

    if instruction_parts:
        first_user = next((turn for turn in contents if turn.get("role", "user") == "user"), None)
        if first_user is None:
            contents.insert(0, {"role": "user", "parts": list(instruction_parts)})
        else:
            first_user["parts"] = list(instruction_parts) + list(first_user.get("parts") or [])

    inline: dict[str, Any] = {"contents": contents}
    if "generationConfig" in payload:
        inline["generationConfig"] = dict(payload["generationConfig"])
    return inline
