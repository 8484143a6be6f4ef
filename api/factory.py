"""Build provider clients from environment configuration."""

import os

from utils.logger import get_logger

from .base_client import BaseAIClient
from .google_gemini_client import GeminiClient
from .openai_client import OpenAIClient

logger = get_logger(__name__)

_CLIENT_CLASSES: dict[str, type[BaseAIClient]] = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
}

# Alternate env var names accepted for each primary key name
_KEY_ALIASES = {
    "GOOGLE_AI_API_KEY": ("GOOGLE_GEMINI_API_KEY",),
}


def resolve_api_key(env_var: str) -> str | None:
    """Read an API key from ``env_var`` or one of its accepted aliases."""
    for name in (env_var, *_KEY_ALIASES.get(env_var, ())):
        value = os.getenv(name, "").strip()
        if value:
            return value
    return None


def create_client(
    provider: str, api_key: str | None, model_name: str | None = None
) -> BaseAIClient | None:
    """
    Create a client for ``provider``.

    Returns None when the provider is unknown or no key is available; callers
    treat that as "provider unavailable".
    """
    client_cls = _CLIENT_CLASSES.get(provider)
    if client_cls is None:
        logger.warning(
            "Unknown AI provider requested",
            extra={"extra_fields": {"provider": provider}},
        )
        return None
    if not api_key:
        return None

    kwargs = {"model_name": model_name} if model_name else {}
    return client_cls(api_key=api_key, **kwargs)
