"""Offline stand-ins for provider clients."""

from api.base_client import BaseAIClient
from models.provider_response import NormalizedError, ProviderResponse, TokenUsage


class FakeClient(BaseAIClient):
    """
    In-memory provider client.

    ``replies`` maps a substring of the prompt to the text returned for it;
    ``default`` is used when nothing matches. ``error_code`` turns every call
    into a normalized error response.
    """

    provider = "fake"

    def __init__(self, replies=None, default="", error_code=None, model_name="fake-model"):
        self.api_key = "test-key"
        self.model_name = model_name
        self.replies = replies or {}
        self.default = default
        self.error_code = error_code
        self.calls = []

    def get_completion(self, prompt: str, **kwargs) -> ProviderResponse:
        self.calls.append({"prompt": prompt, **kwargs})
        if self.error_code:
            return ProviderResponse(
                request_id="req_fake",
                text="",
                provider=self.provider,
                model=self.model_name,
                latency_ms=1,
                finish_reason="error",
                error=NormalizedError(
                    code=self.error_code,
                    message=f"fake {self.error_code}",
                    provider=self.provider,
                    retryable=self.error_code in {"timeout", "rate_limit"},
                ),
            )

        text = self.default
        for needle, reply in self.replies.items():
            if needle in prompt:
                text = reply
                break
        return ProviderResponse(
            request_id="req_fake",
            text=text,
            provider=self.provider,
            model=self.model_name,
            latency_ms=1,
            token_usage=TokenUsage(prompt_tokens=10, completion_tokens=5),
            finish_reason="stop",
        )
