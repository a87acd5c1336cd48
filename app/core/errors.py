from __future__ import annotations

from enum import Enum

MESSAGES_REQUIRED = "messages (array) é obrigatório"
INVALID_REQUEST = "Requisição inválida"
UPSTREAM_FAILED = "Erro na Groq API"
INTERNAL_ERROR = "Erro interno do servidor"
PAYLOAD_TOO_LARGE = "Payload muito grande"


class ErrorKind(str, Enum):
    """Classification of a failed relay call, mapped to an HTTP status."""

    VALIDATION = "validation"
    GATEWAY = "gateway"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.GATEWAY: 502,
    ErrorKind.INTERNAL: 500,
}


class StartupError(RuntimeError):
    """Required configuration is missing; the server must not start."""
