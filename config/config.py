import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class ProviderType(str, Enum):
    """Supported AI providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


class Config:
    """Environment configuration for the analysis service."""

    def __init__(self):
        env_path = Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # API keys. GOOGLE_AI_API_KEY is the primary name, GOOGLE_GEMINI_API_KEY is accepted too.
        self.GOOGLE_AI_API_KEY = os.getenv("GOOGLE_AI_API_KEY") or os.getenv(
            "GOOGLE_GEMINI_API_KEY"
        )
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

        self.DEFAULT_PROVIDER = os.getenv("DEFAULT_PROVIDER", ProviderType.GEMINI.value)
        self.DEFAULT_GEMINI_MODEL = os.getenv("DEFAULT_GEMINI_MODEL", "gemini-1.5-flash")
        self.DEFAULT_OPENAI_MODEL = os.getenv("DEFAULT_OPENAI_MODEL", "gpt-4o-mini")

        # Master switch for AI-backed metrics; metric modes are ignored while off
        self.METRICS_AI_ENABLED = os.getenv("METRICS_AI_ENABLED", "false").lower() == "true"
        self.SUMMARY_ENABLED = os.getenv("SUMMARY_ENABLED", "true").lower() == "true"

    def api_key_for(self, provider: str) -> str | None:
        if provider == ProviderType.GEMINI.value:
            return self.GOOGLE_AI_API_KEY
        if provider == ProviderType.OPENAI.value:
            return self.OPENAI_API_KEY
        return None

    def default_model_for(self, provider: str) -> str | None:
        if provider == ProviderType.GEMINI.value:
            return self.DEFAULT_GEMINI_MODEL
        if provider == ProviderType.OPENAI.value:
            return self.DEFAULT_OPENAI_MODEL
        return None

    def validate(self) -> list[str]:
        """Return human-readable configuration problems; empty means usable."""
        problems = []
        if self.DEFAULT_PROVIDER not in {p.value for p in ProviderType}:
            problems.append(
                f"Unknown DEFAULT_PROVIDER '{self.DEFAULT_PROVIDER}'. "
                f"Must be one of: {', '.join(p.value for p in ProviderType)}"
            )
        elif not self.api_key_for(self.DEFAULT_PROVIDER):
            problems.append(
                f"No API key configured for provider '{self.DEFAULT_PROVIDER}'; "
                "AI metrics and summaries will use local fallbacks."
            )
        return problems
