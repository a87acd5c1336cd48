from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GROQ_CHAT_COMPLETIONS_URL = "https://api.groq.com/openai/v1/chat/completions"

# Frontend bundle shipped inside the package (app/public).
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "public"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(default="Groq Chat Relay", alias="APP_NAME")
    environment: Literal["local", "dev", "staging", "prod"] = Field(
        default="local", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Falls back to log_level when unset.
    access_log_level: str | None = Field(default=None, alias="ACCESS_LOG_LEVEL")

    groq_api_key: str | None = Field(default=None, alias="GROQ_API_KEY")
    groq_model: str = Field(default="llama3-7b", alias="GROQ_MODEL")
    groq_api_url: str = Field(default=GROQ_CHAT_COMPLETIONS_URL, alias="GROQ_API_URL")
    # None keeps the transport default (wait indefinitely).
    groq_timeout: float | None = Field(
        default=None, gt=0, alias="GROQ_TIMEOUT_SECONDS"
    )

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    static_dir: str = Field(default=str(DEFAULT_STATIC_DIR), alias="STATIC_DIR")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )
    max_body_bytes: int = Field(default=1024 * 1024, gt=0, alias="MAX_BODY_BYTES")


@lru_cache
def get_settings() -> Settings:
    return Settings()
