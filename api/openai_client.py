import time

import openai

from models.provider_response import NormalizedError, ProviderResponse, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class OpenAIClient(BaseAIClient):
    """OpenAI chat-completions client."""

    provider = "openai"

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini", **kwargs):
        super().__init__(api_key, model_name=model_name, **kwargs)

        if not api_key:
            raise ValueError("API key is required for OpenAI")

        self.client = openai.OpenAI(api_key=api_key)
        self.model_name = model_name

    def _normalize_error(self, exc: Exception) -> NormalizedError:
        if isinstance(exc, openai.APITimeoutError):
            return NormalizedError("timeout", str(exc), self.provider, retryable=True)
        if isinstance(exc, openai.AuthenticationError):
            return NormalizedError("auth", str(exc), self.provider)
        if isinstance(exc, openai.RateLimitError):
            return NormalizedError("rate_limit", str(exc), self.provider, retryable=True)
        if isinstance(exc, openai.BadRequestError):
            return NormalizedError("bad_request", str(exc), self.provider)
        return super()._normalize_error(exc)

    def get_completion(self, prompt: str, **kwargs) -> ProviderResponse:
        """
        Get a completion from OpenAI.

        Args:
            prompt: The input prompt
            **kwargs:
                - model: Override the default model for this call
                - temperature: 0.0 to 2.0 (default 0.7)
                - max_tokens: Maximum number of tokens to generate (default 500)
                - system_instruction: Optional system prompt
        """
        request_id = self._generate_request_id()
        start_time = time.time()

        model = kwargs.get("model") or self.model_name
        messages = []
        if kwargs.get("system_instruction"):
            messages.append({"role": "system", "content": kwargs["system_instruction"]})
        messages.append({"role": "user", "content": prompt})

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=kwargs.get("temperature", 0.7),
                max_tokens=kwargs.get("max_tokens", 500),
            )
            latency_ms = self._measure_latency(start_time)

            text = (response.choices[0].message.content or "") if response.choices else ""
            usage = getattr(response, "usage", None)
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            )
            finish_reason = self._normalize_finish_reason(
                response.choices[0].finish_reason if response.choices else None
            )

            logger.info(
                "OpenAI completion successful",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "latency_ms": latency_ms,
                        "tokens": token_usage.total_tokens,
                    }
                },
            )

            return ProviderResponse(
                request_id=request_id,
                text=text,
                provider=self.provider,
                model=model,
                latency_ms=latency_ms,
                token_usage=token_usage,
                finish_reason=finish_reason,
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            error = self._normalize_error(e)

            logger.error(
                f"OpenAI completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "error_code": error.code,
                        "error_message": error.message,
                        "retryable": error.retryable,
                    }
                },
            )
            return self._create_error_response(
                request_id=request_id, error=error, latency_ms=latency_ms, model=model
            )
