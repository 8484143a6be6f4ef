import time

from google import genai

from models.provider_response import ProviderResponse, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class GeminiClient(BaseAIClient):
    """Google Gemini client built on the ``google.genai`` SDK."""

    provider = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-1.5-flash", **kwargs):
        super().__init__(api_key, model_name=model_name, **kwargs)

        if not api_key:
            raise ValueError("API key is required for Gemini")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name

    def get_completion(self, prompt: str, **kwargs) -> ProviderResponse:
        """
        Get a completion from Gemini.

        Args:
            prompt: The input prompt
            **kwargs:
                - model: Override the default model for this call
                - temperature: 0.0 to 1.0 (default 0.7)
                - max_tokens: Maximum output tokens (default 2048)
                - system_instruction: Optional system prompt
        """
        request_id = self._generate_request_id()
        start_time = time.time()

        model = kwargs.get("model") or self.model_name
        generation_config = {
            "temperature": kwargs.get("temperature", 0.7),
            "max_output_tokens": kwargs.get("max_tokens", 2048),
        }
        if kwargs.get("system_instruction"):
            generation_config["system_instruction"] = kwargs["system_instruction"]

        try:
            response = self.client.models.generate_content(
                model=model,
                contents=prompt,
                config=generation_config,
            )
            latency_ms = self._measure_latency(start_time)

            text = getattr(response, "text", None) or ""

            usage = getattr(response, "usage_metadata", None)
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage, "prompt_token_count", 0) or 0,
                completion_tokens=getattr(usage, "candidates_token_count", 0) or 0,
                total_tokens=getattr(usage, "total_token_count", 0) or 0,
            )

            candidates = getattr(response, "candidates", None) or []
            finish_reason = self._normalize_finish_reason(
                getattr(candidates[0], "finish_reason", None) if candidates else None
            )

            logger.info(
                "Gemini completion successful",
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
                f"Gemini completion failed: {error.code}",
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
