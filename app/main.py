import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.api import chat, frontend, health
from app.core.errors import StartupError
from app.core.logging import configure_logging
from app.core.middleware import install_middleware
from app.core.settings import Settings, get_settings
from app.services.groq_service import GroqService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    groq_service: GroqService | None = None,
) -> FastAPI:
    """Build the relay application.

    Building the default GroqService raises StartupError when GROQ_API_KEY
    is not configured.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    groq_service = groq_service or GroqService(settings=settings)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.groq_service = groq_service

    install_middleware(app, settings)
    app.add_exception_handler(RequestValidationError, chat.request_validation_handler)

    app.include_router(health.router)
    app.include_router(chat.router, prefix="/api")

    # Catch-all; must stay last.
    app.include_router(frontend.router)

    return app


def run() -> None:
    settings = get_settings()
    try:
        app = create_app(settings)
    except StartupError as e:
        logger.error("Startup failed: %s", e)
        raise SystemExit(1)

    logger.info(
        "Serving on http://localhost:%s (ENVIRONMENT=%s, model=%s)",
        settings.port,
        settings.environment,
        settings.groq_model,
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
