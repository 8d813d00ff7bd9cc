"""Runtime configuration for the herbal gateway."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .prompts import SYSTEM_INSTRUCTION

CORS_ALLOW_METHODS = ("GET", "POST", "OPTIONS")
CORS_ALLOW_HEADERS = ("Content-Type", "Authorization")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
}


class Settings(BaseSettings):
    """Runtime configuration for the herbal gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Gemini AI. Several env names are accepted so existing deployments keep working.
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "GENERATIVE_API_KEY",
            "GEMINI_API_KEY",
            "GOOGLE_API_KEY",
            "GENERATIVE_API",
            "API_KEY",
        ),
        repr=False,
    )
    gemini_model: str = Field(default="gemini-2.0-flash", alias="GENERATIVE_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    request_timeout_seconds: float = Field(default=20.0, alias="REQUEST_TIMEOUT_SECONDS", ge=1.0, le=60.0)

    # Generation parameters
    temperature: float = Field(default=0.7, alias="GEN_TEMPERATURE", ge=0.0, le=2.0)
    top_k: int = Field(default=40, alias="GEN_TOP_K", ge=1)
    top_p: float = Field(default=0.95, alias="GEN_TOP_P", gt=0.0, le=1.0)
    max_output_tokens: int = Field(default=1024, alias="GEN_MAX_OUTPUT_TOKENS", ge=1)

    # Domain restriction
    system_instruction: str = Field(default=SYSTEM_INSTRUCTION, alias="SYSTEM_INSTRUCTION")
    # Empty string disables the domain gate
    required_domain: str | None = Field(default="herbal-garden", alias="REQUIRED_DOMAIN")
    # When set, used in place of an empty request instead of rejecting it
    fallback_message: str | None = Field(default=None, alias="FALLBACK_MESSAGE")

    # HTTP boundary
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")
    max_body_bytes: int = Field(default=300 * 1024, alias="MAX_BODY_BYTES", ge=1)

    # FastAPI
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=3000, alias="APP_PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def generation_config(self) -> dict[str, float | int]:
        """Generation parameters in the provider's camelCase wire format."""
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def cors_headers(self) -> dict[str, str]:
        """CORS headers for responses that do not pass through the CORS middleware."""
        headers = dict(CORS_HEADERS)
        if self.cors_origins and "*" not in self.cors_origins:
            headers["Access-Control-Allow-Origin"] = self.cors_origins[0]
        return headers


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings so multiple imports share a single instance."""

    return Settings()  # type: ignore[call-arg]
