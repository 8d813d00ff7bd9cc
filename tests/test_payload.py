"""Tests for generateContent payload construction."""

from __future__ import annotations

from herbal_gateway.normalizer import NormalizedRequest
from herbal_gateway.payload import build_structured_payload, to_inline_payload

GENERATION_CONFIG = {"temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 1024}


class TestBuildStructuredPayload:
    """Tests for build_structured_payload."""

    def test_wraps_message_with_instruction(self):
        payload = build_structured_payload(
            NormalizedRequest(message="How do I grow tulsi?", source="prompt"),
            "Only talk about herbs.",
            GENERATION_CONFIG,
        )

        assert payload == {
            "contents": [{"role": "user", "parts": [{"text": "How do I grow tulsi?"}]}],
            "systemInstruction": {"parts": [{"text": "Only talk about herbs."}]},
            "generationConfig": GENERATION_CONFIG,
        }

    def test_forwards_raw_contents(self):
        """Client turns should be forwarded untouched when contents was the source."""
        turns = [
            {"role": "user", "parts": [{"text": "Hi"}]},
            {"role": "model", "parts": [{"text": "Hello!"}]},
            {"role": "user", "parts": [{"text": "Lavender pruning?"}]},
        ]
        request = NormalizedRequest(message="Hi", source="contents", contents=turns)

        payload = build_structured_payload(request, "x", GENERATION_CONFIG)

        assert payload["contents"] == turns
        assert payload["contents"] is not turns

    def test_generation_config_is_copied(self):
        config = dict(GENERATION_CONFIG)
        payload = build_structured_payload(NormalizedRequest("q", "prompt"), "x", config)

        payload["generationConfig"]["temperature"] = 0.1

        assert config["temperature"] == 0.7


class TestToInlinePayload:
    """Tests for the inline fallback shape."""

    def test_folds_instruction_into_first_user_turn(self):
        structured = build_structured_payload(
            NormalizedRequest("Neem oil for pests?", "prompt"), "Only talk about herbs.", GENERATION_CONFIG
        )

        inline = to_inline_payload(structured)

        assert "systemInstruction" not in inline
        assert inline["contents"] == [
            {
                "role": "user",
                "parts": [{"text": "Only talk about herbs."}, {"text": "Neem oil for pests?"}],
            }
        ]
        assert inline["generationConfig"] == GENERATION_CONFIG

    def test_does_not_mutate_structured_payload(self):
        structured = build_structured_payload(NormalizedRequest("q", "prompt"), "rule", GENERATION_CONFIG)

        to_inline_payload(structured)

        assert structured["contents"][0]["parts"] == [{"text": "q"}]

    def test_prepends_user_turn_when_none_exists(self):
        inline = to_inline_payload(
            {
                "contents": [{"role": "model", "parts": [{"text": "Hello"}]}],
                "systemInstruction": {"parts": [{"text": "rule"}]},
            }
        )

        assert inline["contents"][0] == {"role": "user", "parts": [{"text": "rule"}]}
        assert "generationConfig" not in inline
