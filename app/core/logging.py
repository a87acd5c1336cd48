from __future__ import annotations

import logging

from app.core.settings import Settings

ACCESS_LOGGER = "app.access"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(name: str | None, default: int) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(settings: Settings) -> None:
    """Configure root, uvicorn and request-line loggers from settings.

    Request lines are written by ``ACCESS_LOGGER`` (see app.core.middleware),
    so uvicorn's own access log is kept at WARNING or above.
    """
    level = _parse_level(settings.log_level, logging.INFO)
    access_level = _parse_level(settings.access_log_level, level)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(max(access_level, logging.WARNING))
    logging.getLogger(ACCESS_LOGGER).setLevel(access_level)
