import re
from dataclasses import dataclass

from config.thresholds import SUMMARY_MAX_PARAGRAPHS
from models.provider_response import ProviderResponse
from models.summary import SummaryValidation
from orchestrator.citations import find_citations

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n+")


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str
    severity: str = "none"


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text or "") if p.strip()]


def validate_summary(summary: str) -> SummaryValidation:
    """At most three paragraphs and at least one ``[n]`` source reference."""
    paragraphs = split_paragraphs(summary)
    has_refs = bool(find_citations(summary))

    reason = ""
    if len(paragraphs) > SUMMARY_MAX_PARAGRAPHS:
        reason = "too_many_paragraphs"
    elif not has_refs:
        reason = "missing_source_references"

    return SummaryValidation(
        is_valid=not reason,
        paragraph_count=len(paragraphs),
        has_source_references=has_refs,
        reason=reason,
    )


class ResponseValidator:
    """Screens a provider answer before it is turned into a summary."""

    def __init__(self, min_chars: int = 40):
        self.min_chars = min_chars

    def validate(self, response: ProviderResponse) -> ValidationResult:
        if response.is_error:
            reason = "provider_error"
            if response.error and response.error.code in {"timeout", "rate_limit", "auth"}:
                reason = response.error.code
            return ValidationResult(ok=False, reason=reason, severity="high")

        text = (response.text or "").strip()
        if not text:
            return ValidationResult(ok=False, reason="empty", severity="high")

        if response.finish_reason == "content_filter":
            return ValidationResult(ok=False, reason="content_filter", severity="high")

        if self._looks_like_refusal(text):
            return ValidationResult(ok=False, reason="refusal", severity="medium")

        if len(text) < self.min_chars:
            return ValidationResult(ok=False, reason="too_short", severity="medium")

        return ValidationResult(ok=True, reason="ok")

    def _looks_like_refusal(self, text: str) -> bool:
        text_lower = text.lower()
        refusal_phrases = [
            "i'm sorry, but i can't assist",
            "i am sorry, but i can't assist",
            "i'm sorry, but i cannot assist",
            "i can't assist with",
            "i cannot assist with",
            "i can't help with",
            "i cannot help with",
            "i'm unable to help with",
            "i am unable to help with",
        ]
        if any(phrase in text_lower for phrase in refusal_phrases):
            return True

        # Only the opening of the answer; summaries may quote refusals further in
        return bool(
            re.search(
                r"^\W*(i\s+)?(can(?:not|'t)|unable to|won't)\b"
                r".{0,40}\b(assist|help|comply|summari[sz]e)\b",
                text_lower[:120],
                re.I | re.S,
            )
        )
