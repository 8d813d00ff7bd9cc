"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from herbal_gateway.config import Settings
from herbal_gateway.gateway import GenerationGateway

from tests.helpers import gemini_response


API_KEY_ENV_VARS = ("GENERATIVE_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "GENERATIVE_API", "API_KEY")
# Settings the tests assert defaults for
SETTINGS_ENV_VARS = ("LOG_LEVEL", "DEBUG", "REQUIRED_DOMAIN", "CORS_ALLOW_ORIGINS", "MAX_BODY_BYTES")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer credentials and overrides out of the tests."""
    for name in API_KEY_ENV_VARS + SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, gemini_api_key="test-key")


@pytest.fixture
def mock_provider():
    """Provider whose ``generate`` answers with a neem-oil reply by default."""
    provider = AsyncMock()
    provider.generate.return_value = gemini_response(
        "Neem oil is a natural plant-based pesticide. Mix 5 ml with 1 litre of water "
        "and a drop of soap, then spray the leaves of your herbs every 7 days."
    )
    return provider


@pytest.fixture
def gateway(settings, mock_provider):
    return GenerationGateway(settings, mock_provider)
