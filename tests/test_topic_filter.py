"""Tests for the off-topic keyword post-filter."""

from __future__ import annotations

import pytest

from herbal_gateway import prompts
from herbal_gateway.topic_filter import apply_topic_filter, is_off_topic, make_keyword_policy


class TestIsOffTopic:
    """Tests for the default keyword policy."""

    @pytest.mark.parametrize(
        "text",
        [
            "The election was won by the incumbent party.",
            "The FOOTBALL final ended 2-1.",
            "Bitcoin rose 5% today.",
            "Install the software on your computer.",
        ],
    )
    def test_flags_off_topic_replies(self, text):
        assert is_off_topic(text)

    @pytest.mark.parametrize(
        "text",
        [
            "Tulsi grows best in warm, sunny spots with well-drained soil.",
            "Neem oil keeps aphids away from most herbs.",
            "Water your garden early in the morning.",
        ],
    )
    def test_accepts_gardening_replies(self, text):
        assert not is_off_topic(text)

    def test_allow_terms_override_keywords(self):
        """A keyword next to plant vocabulary should not trigger the filter."""
        assert not is_off_topic("The government subsidizes medicinal plant nurseries.")

    def test_custom_policy(self):
        policy = make_keyword_policy(keywords=["weather"], allow_terms=["rain garden"])

        assert policy("The WEATHER is bad")
        assert not policy("Weather matters for a rain garden")
        assert not policy("Bitcoin is up")


class TestApplyTopicFilter:
    """Tests for apply_topic_filter."""

    def test_passes_on_topic_text(self):
        text = "Harvest mint before it flowers."

        assert apply_topic_filter(text) == text

    def test_replaces_off_topic_with_refusal(self):
        assert apply_topic_filter("Who won the election? The incumbent.") == prompts.OFF_TOPIC_REPLY

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_replaces_empty_with_rephrase(self, text):
        assert apply_topic_filter(text) == prompts.EMPTY_REPLY

    def test_refusal_and_rephrase_differ(self):
        assert prompts.OFF_TOPIC_REPLY != prompts.EMPTY_REPLY

    def test_uses_injected_policy(self):
        assert apply_topic_filter("anything", policy=lambda text: True) == prompts.OFF_TOPIC_REPLY
        assert apply_topic_filter("Bitcoin", policy=lambda text: False) == "Bitcoin"
