from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from app.core.errors import (
    INTERNAL_ERROR,
    MESSAGES_REQUIRED,
    UPSTREAM_FAILED,
    ErrorKind,
    StartupError,
)
from app.core.settings import Settings, get_settings
from app.models.chat import ChatReply, ChatRequest, RelayFailure, UpstreamPayload
from app.services.normalizer import extract_reply

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTPUT_TOKENS = 512
DEFAULT_TEMPERATURE = 0.2


class GroqService:
    """Relays chat requests to the Groq chat completions endpoint.

    Holds only read-only configuration, so one instance can serve concurrent
    requests. ``session`` may be any object with a ``requests``-compatible
    ``post``; when omitted each call goes through ``requests.post``.
    """

    def __init__(self, settings: Settings | None = None, session: Any | None = None):
        self._settings = settings or get_settings()

        if not self._settings.groq_api_key:
            raise StartupError("GROQ_API_KEY is not configured")

        self._session = session

    @property
    def model(self) -> str:
        return self._settings.groq_model

    def build_payload(self, request: ChatRequest) -> UpstreamPayload:
        max_output_tokens = request.max_output_tokens
        if max_output_tokens is None:
            max_output_tokens = DEFAULT_MAX_OUTPUT_TOKENS

        temperature = request.temperature
        if temperature is None:
            temperature = DEFAULT_TEMPERATURE

        return UpstreamPayload(
            model=self._settings.groq_model,
            messages=[m.model_dump() for m in request.messages or []],
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )

    def _post(self, payload: UpstreamPayload) -> requests.Response:
        post = self._session.post if self._session is not None else requests.post
        return post(
            self._settings.groq_api_url,
            json=payload.model_dump(),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._settings.groq_api_key}",
            },
            timeout=self._settings.groq_timeout,
        )

    async def handle(self, request: ChatRequest) -> ChatReply | RelayFailure:
        if not request.messages:
            logger.info("Rejected chat request without messages")
            return RelayFailure(kind=ErrorKind.VALIDATION, error=MESSAGES_REQUIRED)

        try:
            payload = self.build_payload(request)
            response = await asyncio.to_thread(self._post, payload)

            if not 200 <= response.status_code < 300:
                text = response.text
                logger.error("Groq API error: %s %s", response.status_code, text)
                return RelayFailure(
                    kind=ErrorKind.GATEWAY, error=UPSTREAM_FAILED, detail=text
                )

            data = response.json()
            return ChatReply(reply=extract_reply(data))
        except Exception:
            logger.exception("Groq relay failed")
            return RelayFailure(kind=ErrorKind.INTERNAL, error=INTERNAL_ERROR)
