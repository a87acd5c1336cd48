from __future__ import annotations

from fastapi import Request

from app.core.settings import Settings
from app.services.groq_service import GroqService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_groq_service(request: Request) -> GroqService:
    return request.app.state.groq_service
