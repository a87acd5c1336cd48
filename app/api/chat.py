import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import INTERNAL_ERROR, INVALID_REQUEST, MESSAGES_REQUIRED, ErrorKind
from app.dependencies import get_groq_service
from app.models.chat import ChatReply, ChatRequest, RelayFailure
from app.services.groq_service import GroqService

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure_response(failure: RelayFailure) -> JSONResponse:
    return JSONResponse(status_code=failure.status_code, content=failure.to_body())


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {}, 500: {}, 502: {}},
)
async def chat_endpoint(
    request: ChatRequest,
    groq_service: GroqService = Depends(get_groq_service),
):
    try:
        result = await groq_service.handle(request)
    except Exception:
        logger.exception("Chat endpoint failed")
        result = RelayFailure(kind=ErrorKind.INTERNAL, error=INTERNAL_ERROR)

    if isinstance(result, RelayFailure):
        return _failure_response(result)
    return result


def _describe_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body validation errors as the chat failure envelope (400, not 422)."""
    errors = exc.errors()
    # A missing body, a non-object body or a non-array "messages" all mean the
    # conversation itself is absent.
    if any(tuple(err.get("loc", ())) in {("body",), ("body", "messages")} for err in errors):
        failure = RelayFailure(kind=ErrorKind.VALIDATION, error=MESSAGES_REQUIRED)
    else:
        failure = RelayFailure(
            kind=ErrorKind.VALIDATION,
            error=INVALID_REQUEST,
            detail=_describe_errors(errors),
        )
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return _failure_response(failure)
