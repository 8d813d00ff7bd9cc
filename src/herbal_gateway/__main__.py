"""Entry point for running the herbal gateway."""

import logging

import uvicorn

from .config import get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main():
    """Run the herbal gateway with uvicorn, using DEBUG for auto-reload and LOG_LEVEL for verbosity."""
    settings = get_settings()
    log_level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    logger.info(
        "Starting herbal gateway on %s:%s (model=%s, log_level=%s)",
        settings.app_host,
        settings.app_port,
        settings.gemini_model,
        log_level,
    )

    uvicorn.run(
        "herbal_gateway.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
