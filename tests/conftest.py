from __future__ import annotations

import json
import threading

import pytest

from app.core.settings import Settings


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, text: str | None = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class FakeSession:
    """Stands in for requests.Session; records every POST it receives."""

    def __init__(self, response=None, responder=None, error: Exception | None = None):
        self._response = response or FakeResponse(
            body={"choices": [{"message": {"content": "hi"}}]}
        )
        self._responder = responder
        self._error = error
        self._lock = threading.Lock()
        self.calls: list[dict] = []

    def post(self, url, json=None, headers=None, timeout=None):
        with self._lock:
            self.calls.append(
                {"url": url, "json": json, "headers": headers, "timeout": timeout}
            )
        if self._error is not None:
            raise self._error
        if self._responder is not None:
            return self._responder(json)
        return self._response


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        GROQ_API_KEY="test-key",
        GROQ_MODEL="test-model",
        STATIC_DIR=str(tmp_path),
    )
