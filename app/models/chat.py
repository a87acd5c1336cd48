from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from app.core.errors import ErrorKind


class ChatMessage(BaseModel):
    # Extra keys (e.g. "name") are forwarded upstream untouched.
    model_config = ConfigDict(extra="allow")

    role: Literal["user", "system", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: list[ChatMessage] | None = None
    max_output_tokens: PositiveInt | None = None
    temperature: float | None = None


class ChatReply(BaseModel):
    success: Literal[True] = True
    reply: str


class RelayFailure(BaseModel):
    """Failed relay call. ``kind`` selects the HTTP status and is not serialized."""

    kind: ErrorKind = Field(exclude=True)
    success: Literal[False] = False
    error: str
    detail: str | None = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class UpstreamPayload(BaseModel):
    model: str
    messages: list[dict]
    max_output_tokens: int
    temperature: float


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"
    time: int
