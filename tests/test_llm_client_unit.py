import pytest
import requests

from infrastructure import llm_client
from infrastructure.llm_client import (
    ChatCompletionsClient,
    LLMAuthError,
    LLMClientError,
    LLMRateLimitError,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _ok(message):
    return FakeResponse(200, {"choices": [{"index": 0, "message": message}]})


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(llm_client.time, "sleep", lambda s: None)


def _client(session, key="sk-test", max_attempts=3):
    return ChatCompletionsClient(
        api_base="https://llm.example/v1/",
        model="test-model",
        key_provider=lambda: key,
        session=session,
        max_attempts=max_attempts,
    )


def test_complete_returns_first_message():
    session = FakeSession([_ok({"role": "assistant", "content": "hi"})])
    message = _client(session).complete([{"role": "user", "content": "hello"}])
    assert message == {"role": "assistant", "content": "hi"}

    call = session.calls[0]
    assert call["url"] == "https://llm.example/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["json"]["model"] == "test-model"
    assert "tools" not in call["json"]


def test_tools_are_sent_with_auto_choice():
    session = FakeSession([_ok({"role": "assistant", "content": "ok"})])
    tools = [{"type": "function", "function": {"name": "format_list", "parameters": {"type": "object"}}}]
    _client(session).complete([], tools)
    assert session.calls[0]["json"]["tools"] == tools
    assert session.calls[0]["json"]["tool_choice"] == "auto"


def test_missing_key():
    with pytest.raises(LLMAuthError):
        _client(FakeSession([]), key="").complete([])


def test_auth_error():
    with pytest.raises(LLMAuthError):
        _client(FakeSession([FakeResponse(401, text="bad key")])).complete([])


def test_client_error_is_not_retried():
    session = FakeSession([FakeResponse(400, text="bad request")])
    with pytest.raises(LLMClientError):
        _client(session).complete([])
    assert len(session.calls) == 1


def test_server_error_is_retried():
    session = FakeSession([FakeResponse(502), _ok({"role": "assistant", "content": "recovered"})])
    assert _client(session).complete([])["content"] == "recovered"
    assert len(session.calls) == 2


def test_network_error_is_retried_then_raised():
    session = FakeSession([requests.ConnectionError("down")] * 3)
    with pytest.raises(LLMClientError):
        _client(session).complete([])
    assert len(session.calls) == 3


def test_rate_limit_exhausted():
    session = FakeSession([FakeResponse(429, text="slow down")] * 2)
    with pytest.raises(LLMRateLimitError):
        _client(session, max_attempts=2).complete([])


def test_invalid_json():
    with pytest.raises(LLMClientError):
        _client(FakeSession([FakeResponse(200, None)])).complete([])


def test_no_choices():
    with pytest.raises(LLMClientError):
        _client(FakeSession([FakeResponse(200, {"choices": []})])).complete([])
