import time
import uuid
from abc import ABC, abstractmethod
from typing import Any

from models.provider_response import NormalizedError, ProviderResponse

_FINISH_REASON_MAP = {
    "stop": "stop",
    "end_turn": "stop",
    "length": "length",
    "max_tokens": "length",
    "content_filter": "content_filter",
    "safety": "content_filter",
}


class BaseAIClient(ABC):
    """
    Base class for provider clients.

    ``get_completion`` never raises: every failure is returned as a
    ProviderResponse carrying a NormalizedError.
    """

    provider: str = "unknown"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        self.api_key = api_key
        self.model_name = kwargs.get("model_name")

    @abstractmethod
    def get_completion(self, prompt: str, **kwargs) -> ProviderResponse:
        """
        Send a single prompt to the provider.

        Args:
            prompt: The full prompt text
            **kwargs: Provider parameters
                - model: Override the default model for this call
                - temperature: Sampling temperature
                - max_tokens: Maximum number of tokens to generate
        """

    @staticmethod
    def _generate_request_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _measure_latency(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    @staticmethod
    def _normalize_finish_reason(reason: Any) -> str | None:
        if reason is None:
            return None
        # SDK enums stringify as "FinishReason.STOP"
        key = str(getattr(reason, "name", reason)).rsplit(".", 1)[-1].lower()
        return _FINISH_REASON_MAP.get(key, key)

    def _normalize_error(self, exc: Exception) -> NormalizedError:
        """Map an SDK exception onto the shared error codes by HTTP status and type name."""
        status = getattr(exc, "status_code", None) or getattr(exc, "code", None)
        name = type(exc).__name__.lower()

        if isinstance(exc, TimeoutError) or "timeout" in name:
            code, retryable = "timeout", True
        elif status in (401, 403) or "authentication" in name or "permission" in name:
            code, retryable = "auth", False
        elif status == 429 or "ratelimit" in name:
            code, retryable = "rate_limit", True
        elif status in (400, 404, 422) or "badrequest" in name:
            code, retryable = "bad_request", False
        elif isinstance(status, int) and status >= 500:
            code, retryable = "provider_error", True
        elif "api" in name or "connection" in name:
            code, retryable = "provider_error", True
        else:
            code, retryable = "unknown", False

        details = {"exception_type": type(exc).__name__}
        if isinstance(status, int):
            details["status"] = status
        return NormalizedError(
            code=code,
            message=str(exc) or type(exc).__name__,
            provider=self.provider,
            retryable=retryable,
            details=details,
        )

    def _create_error_response(
        self, request_id: str, error: NormalizedError, latency_ms: int, model: str | None
    ) -> ProviderResponse:
        return ProviderResponse(
            request_id=request_id,
            text="",
            provider=self.provider,
            model=model or self.model_name or "",
            latency_ms=latency_ms,
            finish_reason="error",
            error=error,
        )
