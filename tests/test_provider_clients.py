from types import SimpleNamespace

import pytest

from api.base_client import BaseAIClient
from api.factory import create_client, resolve_api_key
from api.openai_client import OpenAIClient

pytestmark = pytest.mark.unit


class DummyClient(BaseAIClient):
    provider = "test"

    def __init__(self):
        # BaseAIClient.__init__ is abstract; only the helpers are under test
        self.model_name = "dummy"

    def get_completion(self, prompt, **kwargs):
        raise NotImplementedError


class StatusError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class APIConnectionError(Exception):
    pass


@pytest.mark.parametrize(
    "exc, expected_code, expected_retryable",
    [
        (TimeoutError("timed out"), "timeout", True),
        (StatusError("Unauthorized", 401), "auth", False),
        (StatusError("Too Many Requests", 429), "rate_limit", True),
        (StatusError("Bad Request", 400), "bad_request", False),
        (StatusError("Service Unavailable", 503), "provider_error", True),
        (APIConnectionError("connection reset"), "provider_error", True),
        (ValueError("odd"), "unknown", False),
    ],
)
def test_error_normalization(exc, expected_code, expected_retryable):
    err = DummyClient()._normalize_error(exc)
    assert err.code == expected_code
    assert err.retryable == expected_retryable
    assert err.provider == "test"


@pytest.mark.parametrize(
    "raw,expected",
    [("STOP", "stop"), ("FinishReason.MAX_TOKENS", "length"), ("SAFETY", "content_filter")],
)
def test_finish_reason_normalization(raw, expected):
    assert BaseAIClient._normalize_finish_reason(raw) == expected


def test_resolve_api_key_accepts_alias(monkeypatch, no_provider_keys):
    assert resolve_api_key("GOOGLE_AI_API_KEY") is None
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "alias-key")
    assert resolve_api_key("GOOGLE_AI_API_KEY") == "alias-key"
    monkeypatch.setenv("GOOGLE_AI_API_KEY", "primary-key")
    assert resolve_api_key("GOOGLE_AI_API_KEY") == "primary-key"


def test_create_client_without_key_or_unknown_provider():
    assert create_client("gemini", None) is None
    assert create_client("carrier-pigeon", "key") is None


def test_create_openai_client():
    client = create_client("openai", "sk-test", "gpt-4o-mini")
    assert isinstance(client, OpenAIClient)
    assert client.model_name == "gpt-4o-mini"


def _fake_sdk(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def test_openai_completion_success():
    client = OpenAIClient(api_key="sk-test")
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(
            choices=[
                SimpleNamespace(
                    message=SimpleNamespace(content='{"score": 70}'), finish_reason="stop"
                )
            ],
            usage=SimpleNamespace(prompt_tokens=12, completion_tokens=4, total_tokens=16),
        )

    client.client = _fake_sdk(create)
    response = client.get_completion("prompt", system_instruction="be brief", max_tokens=50)

    assert response.is_success
    assert response.text == '{"score": 70}'
    assert response.finish_reason == "stop"
    assert response.token_usage.total_tokens == 16
    assert captured["messages"][0] == {"role": "system", "content": "be brief"}
    assert captured["max_tokens"] == 50


def test_openai_completion_never_raises():
    client = OpenAIClient(api_key="sk-test")

    def create(**kwargs):
        raise StatusError("Service Unavailable", 503)

    client.client = _fake_sdk(create)
    response = client.get_completion("prompt")

    assert response.is_error
    assert response.text == ""
    assert response.error.code == "provider_error"
    assert response.finish_reason == "error"


def test_openai_requires_key():
    with pytest.raises(ValueError):
        OpenAIClient(api_key="")
