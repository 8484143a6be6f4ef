"""
Turn raw AI provider text into metric records.

Providers are asked for bare JSON but often wrap it in Markdown fences or
prose. Anything that cannot be coerced into a valid record raises
MalformedResponseError, which the evaluator turns into a fallback.
"""

import json
import re
from typing import Any

from analyzers.ai_detector import get_ai_content_color, get_ai_content_label
from analyzers.bias_analyzer import get_gender_bias_label
from analyzers.credibility_scorer import (
    get_credibility_label,
    get_domain_type,
    is_verified_news,
    is_women_focused,
)
from analyzers.sustainability_scorer import get_sustainability_label
from config.thresholds import COMMERCIAL_PROMOTIONAL_MIN
from models.analysis import (
    AIContentDetection,
    CommercialBiasAnalysis,
    CredibilityScore,
    EmotionalTone,
    GenderBiasAnalysis,
    PoliticalBiasAnalysis,
    PoliticalBiasIndicator,
    SustainabilityScore,
)
from models.errors import MalformedResponseError
from models.metric_types import MetricName
from models.search_result import SearchResult

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.S | re.I)
_OBJECT_RE = re.compile(r"\{.*\}", re.S)


def extract_json_object(text: str) -> dict[str, Any]:
    """Pull the first JSON object out of ``text``."""
    if not text or not text.strip():
        raise MalformedResponseError("empty response")

    candidate = text.strip()
    fenced = _FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()
    if not candidate.startswith("{"):
        match = _OBJECT_RE.search(candidate)
        if not match:
            raise MalformedResponseError("no JSON object in response")
        candidate = match.group(0)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("JSON payload is not an object")
    return data


def _bounded_int(data: dict, key: str, low: int = 0, high: int = 100) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"'{key}' must be a number")
    if not low <= value <= high:
        raise MalformedResponseError(f"'{key}' out of range: {value}")
    return int(round(value))


def _string_list(data: dict, key: str) -> tuple[str, ...]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise MalformedResponseError(f"'{key}' must be a list")
    return tuple(str(v) for v in value if str(v).strip())


def _enum_value(enum_cls, raw: Any, key: str):
    if not isinstance(raw, str):
        raise MalformedResponseError(f"'{key}' must be a string")
    wanted = raw.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    raise MalformedResponseError(f"unknown {key} '{raw}'")


def _parse_vibe(data: dict, result: SearchResult) -> EmotionalTone:
    return _enum_value(EmotionalTone, data.get("tone", data.get("vibe")), "tone")


def _parse_gender(data: dict, result: SearchResult) -> GenderBiasAnalysis:
    # The label is recomputed from the score so thresholds stay authoritative
    score = _bounded_int(data, "score")
    return GenderBiasAnalysis(score=score, label=get_gender_bias_label(score))


def _parse_political(data: dict, result: SearchResult) -> PoliticalBiasAnalysis:
    indicator = _enum_value(PoliticalBiasIndicator, data.get("indicator"), "indicator")
    confidence = _bounded_int(data, "confidence") if "confidence" in data else 50
    return PoliticalBiasAnalysis(indicator=indicator, confidence=confidence)


def _parse_commercial(data: dict, result: SearchResult) -> CommercialBiasAnalysis:
    score = _bounded_int(data, "score")
    return CommercialBiasAnalysis(
        is_promotional=score >= COMMERCIAL_PROMOTIONAL_MIN,
        score=score,
        has_affiliate_links=bool(data.get("has_affiliate_links", False)),
        is_sponsored=bool(data.get("is_sponsored", False)),
    )


def _parse_ai_detection(data: dict, result: SearchResult) -> AIContentDetection:
    value = data.get("probability")
    if value is None and "percentage" in data:
        value = _bounded_int(data, "percentage") / 100
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError("'probability' must be a number")
    if not 0.0 <= value <= 1.0:
        raise MalformedResponseError(f"'probability' out of range: {value}")
    probability = round(float(value), 2)
    return AIContentDetection(
        probability=probability,
        label=get_ai_content_label(probability),
        color=get_ai_content_color(probability),
        indicators=_string_list(data, "indicators"),
    )


def _parse_sustainability(data: dict, result: SearchResult) -> SustainabilityScore | None:
    if data.get("score") is None:
        return None
    score = _bounded_int(data, "score")
    return SustainabilityScore(
        score=score,
        label=get_sustainability_label(score),
        indicators=_string_list(data, "indicators"),
    )


def _parse_credibility(data: dict, result: SearchResult) -> CredibilityScore:
    # Domain facts come from the allowlists, only the score is the model's opinion
    score = _bounded_int(data, "score")
    return CredibilityScore(
        score=score,
        label=get_credibility_label(score),
        domain_type=get_domain_type(result.domain),
        is_women_focused=is_women_focused(result.domain),
        is_verified_news=is_verified_news(result.domain),
    )


_PARSERS = {
    MetricName.VIBE: _parse_vibe,
    MetricName.GENDER_BIAS: _parse_gender,
    MetricName.POLITICAL_BIAS: _parse_political,
    MetricName.COMMERCIAL_BIAS: _parse_commercial,
    MetricName.AI_DETECTION: _parse_ai_detection,
    MetricName.SUSTAINABILITY: _parse_sustainability,
    MetricName.CREDIBILITY: _parse_credibility,
}


def parse_metric_response(metric: MetricName, text: str, result: SearchResult) -> Any:
    """Parse provider text for ``metric``. Raises MalformedResponseError."""
    return _PARSERS[metric](extract_json_object(text), result)
