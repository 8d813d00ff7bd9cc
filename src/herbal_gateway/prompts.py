"""Fixed instruction and reply texts for the herbal garden assistant."""

from __future__ import annotations

SYSTEM_INSTRUCTION = (
    "You are the assistant of a virtual herbal garden. Only answer questions about "
    "herbal and medicinal plants, their identification, cultivation, care, harvesting, "
    "traditional uses and gardening in general. If the user asks about anything else "
    "(politics, sports, technology, finance, entertainment or any other unrelated topic), "
    "politely refuse and invite them to ask about herbs, plants or gardening instead. "
    "Do not give medical diagnoses; recommend consulting a qualified practitioner for "
    "health concerns. Keep answers clear, practical and concise."
)

# Post-filter replies
OFF_TOPIC_REPLY = (
    "I'm sorry, I can only help with questions about herbal plants and gardening. "
    "Try asking about growing, caring for or using a herb."
)
EMPTY_REPLY = (
    "I couldn't come up with a helpful answer to that. "
    "Please try rephrasing your question about herbs or gardening."
)

# Error replies shown to the end user
INVALID_DOMAIN_REPLY = "This assistant only accepts questions from the herbal garden."
NO_MESSAGE_REPLY = "Please type a question about herbs or gardening."
BAD_BODY_REPLY = "Your message could not be read. Please try again."
MISCONFIGURED_REPLY = "The assistant is temporarily unavailable. Please try again later."
TIMEOUT_REPLY = "The assistant took too long to respond. Please try again with a shorter or simpler question."
RATE_LIMIT_REPLY = "The assistant is receiving too many requests right now. Please wait a moment and try again."
PROCESSING_PROBLEM_REPLY = "Sorry, there was a problem processing the response. Please try again."
UNAVAILABLE_REPLY = "The assistant could not be reached. Please try again in a moment."
GENERIC_ERROR_REPLY = "Something went wrong on our side. Please try again."
PAYLOAD_TOO_LARGE_REPLY = "Your message is too long. Please shorten it."

# Off-topic keywords matched as case-insensitive substrings of the reply.
# Entries must not occur inside common plant words ("sport" would match "transport").
OFF_TOPIC_KEYWORDS: tuple[str, ...] = (
    # politics
    "politic",
    "election",
    "president",
    "prime minister",
    "parliament",
    "congress",
    "senate",
    "government",
    "democrat",
    "republican",
    "campaign",
    # sports
    "sports",
    "football",
    "soccer",
    "cricket",
    "basketball",
    "baseball",
    "tennis",
    "olympic",
    "world cup",
    "championship",
    # technology
    "technology",
    "software",
    "computer",
    "smartphone",
    "iphone",
    "android",
    "programming",
    "javascript",
    "python",
    "artificial intelligence",
    # finance
    "stock market",
    "cryptocurrency",
    "bitcoin",
    "forex",
    "investment",
    "interest rate",
    "mortgage",
    "bank account",
    # entertainment
    "movie",
    "celebrity",
    "netflix",
    "video game",
)

# A reply mentioning any of these is treated as on-topic.
ON_TOPIC_TERMS: tuple[str, ...] = ("plant", "herb", "garden")
