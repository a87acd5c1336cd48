from fastapi.testclient import TestClient

from app.core.errors import ErrorKind
from app.dependencies import get_groq_service
from app.main import create_app
from app.models.chat import ChatReply, RelayFailure
from app.services.groq_service import GroqService

from conftest import FakeResponse, FakeSession


class _FakeGroqService:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.requests = []

    async def handle(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return ChatReply(reply=f"echo:{request.messages[-1].content}")


def _client(settings, fake=None) -> TestClient:
    app = create_app(settings)
    if fake is not None:
        app.dependency_overrides[get_groq_service] = lambda: fake
    return TestClient(app)


def test_chat_happy_path(settings):
    client = _client(settings, _FakeGroqService())

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 200
    assert r.json() == {"success": True, "reply": "echo:hi"}


def test_chat_missing_messages_is_400(settings):
    session = FakeSession()
    app = create_app(settings, groq_service=GroqService(settings=settings, session=session))
    client = TestClient(app)

    for body in ({}, {"messages": []}, {"messages": None}):
        r = client.post("/api/chat", json=body)
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "messages (array) é obrigatório"}

    assert session.calls == []


def test_chat_non_array_messages_is_400(settings):
    fake = _FakeGroqService()
    client = _client(settings, fake)

    r = client.post("/api/chat", json={"messages": "hello"})

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "messages (array) é obrigatório"}
    assert fake.requests == []


def test_chat_without_body_is_400(settings):
    client = _client(settings, _FakeGroqService())

    r = client.post("/api/chat")

    assert r.status_code == 400
    assert r.json()["error"] == "messages (array) é obrigatório"


def test_chat_invalid_role_is_400_with_detail(settings):
    client = _client(settings, _FakeGroqService())

    r = client.post("/api/chat", json={"messages": [{"role": "robot", "content": "x"}]})

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Requisição inválida"
    assert "messages.0.role" in body["detail"]


def test_chat_malformed_json_is_400(settings):
    client = _client(settings, _FakeGroqService())

    r = client.post(
        "/api/chat",
        content=b'{"messages": [',
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["success"] is False


def test_chat_gateway_failure_is_502_with_detail(settings):
    failure = RelayFailure(kind=ErrorKind.GATEWAY, error="Erro na Groq API", detail="rate limited")
    client = _client(settings, _FakeGroqService(result=failure))

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 502
    assert r.json() == {"success": False, "error": "Erro na Groq API", "detail": "rate limited"}


def test_chat_unexpected_exception_is_generic_500(settings):
    client = _client(settings, _FakeGroqService(error=RuntimeError("secret internals")))

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Erro interno do servidor"}
    assert "secret" not in r.text


def test_chat_end_to_end_through_relay(settings):
    raw = "upstream exploded"
    session = FakeSession(response=FakeResponse(status_code=503, text=raw))
    app = create_app(settings, groq_service=GroqService(settings=settings, session=session))
    client = TestClient(app)

    r = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "model": "evil"},
    )

    assert r.status_code == 502
    assert r.json()["detail"] == raw
    assert session.calls[0]["json"]["model"] == "test-model"


def test_chat_end_to_end_success(settings):
    session = FakeSession(response=FakeResponse(body={"output": ["a", {"text": "b"}]}))
    app = create_app(settings, groq_service=GroqService(settings=settings, session=session))
    client = TestClient(app)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 200
    assert r.json() == {"success": True, "reply": "a\nb"}
