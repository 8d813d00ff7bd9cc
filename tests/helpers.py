"""Shared test helpers (e.g. for building provider responses)."""

from __future__ import annotations


def gemini_response(*texts: str) -> dict:
    """Build a generateContent response with one candidate per text."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
                "index": i,
            }
            for i, text in enumerate(texts)
        ],
        "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 30},
    }
