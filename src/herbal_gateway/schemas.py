from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Part(BaseModel):
    text: str


class Content(BaseModel):
    parts: list[Part]


class Candidate(BaseModel):
    content: Content


class NormalizedReply(BaseModel):
    """Stable success body: ``candidates[0].content.parts[0].text`` mirrors ``reply``."""

    reply: str
    candidates: list[Candidate]

    @classmethod
    def from_text(cls, text: str) -> NormalizedReply:
        return cls(reply=text, candidates=[Candidate(content=Content(parts=[Part(text=text)]))])


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
    reply: str


class HealthResponse(BaseModel):
    status: str = "ok"
    time: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
