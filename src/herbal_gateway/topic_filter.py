"""Keyword post-filter that replaces replies drifting away from gardening.

This is a best-effort heuristic on top of the system instruction. It is not a
security boundary: a determined user can still get off-topic text through, and
legitimate replies can occasionally be refused.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from . import prompts

logger = logging.getLogger(__name__)

OffTopicPolicy = Callable[[str], bool]


def make_keyword_policy(
    keywords: Iterable[str] = prompts.OFF_TOPIC_KEYWORDS,
    allow_terms: Iterable[str] = prompts.ON_TOPIC_TERMS,
) -> OffTopicPolicy:
    """Build an ``is_off_topic`` predicate from keyword and allow-term lists."""
    lowered_keywords = tuple(k.lower() for k in keywords)
    lowered_allow = tuple(t.lower() for t in allow_terms)

    def is_off_topic(text: str) -> bool:
        lowered = text.lower()
        if any(term in lowered for term in lowered_allow):
            return False
        return any(keyword in lowered for keyword in lowered_keywords)

    return is_off_topic


is_off_topic: OffTopicPolicy = make_keyword_policy()


def apply_topic_filter(text: str, policy: OffTopicPolicy = is_off_topic) -> str:
    """Return ``text`` or the matching fixed replacement."""
    if not text or not text.strip():
        logger.info("Provider returned an empty reply, asking user to rephrase")
        return prompts.EMPTY_REPLY
    if policy(text):
        logger.info("Reply classified off-topic, replacing with refusal")
        return prompts.OFF_TOPIC_REPLY
    return text
