"""Batch-level aggregates over annotated results."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from analyzers.ai_detector import calculate_average_ai_content, get_ai_content_label
from analyzers.bias_analyzer import get_gender_bias_label
from analyzers.credibility_scorer import calculate_average_credibility, get_credibility_label
from analyzers.safety_analyzer import has_safety_warnings, is_women_centered
from config.thresholds import (
    AI_CONTENT_HIGH_MIN,
    CREDIBILITY_MODERATE_MIN,
    GENDER_NEUTRAL_MIN,
    GENDER_NEUTRAL_SCORE,
)
from models.analysis import (
    AIContentLabel,
    CredibilityLabel,
    GenderBiasLabel,
    PoliticalBiasIndicator,
    to_jsonable,
)
from models.annotated_result import AnnotatedResult


@dataclass(frozen=True)
class SearchInsights:
    average_gender_bias: int
    average_gender_bias_label: GenderBiasLabel
    average_credibility: int
    average_credibility_label: CredibilityLabel
    average_ai_content: float
    average_ai_content_label: AIContentLabel
    political_distribution: dict[PoliticalBiasIndicator, int] = field(default_factory=dict)
    women_focused_count: int = 0
    women_focused_percentage: int = 0
    safety_warning_count: int = 0
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)


def _recommendations(
    avg_credibility: int,
    avg_ai: float,
    avg_gender: int,
    women_count: int,
    warning_count: int,
) -> list[str]:
    recs = []
    if avg_credibility < CREDIBILITY_MODERATE_MIN:
        recs.append("Many sources have low credibility. Cross-check facts with trusted outlets.")
    if avg_ai >= AI_CONTENT_HIGH_MIN:
        recs.append("Several results look machine-generated. Prefer first-hand sources.")
    if avg_gender < GENDER_NEUTRAL_MIN:
        recs.append("Results show signs of gender bias. Look for women-led perspectives.")
    if women_count == 0:
        recs.append("No women-focused sources found. Try adding 'women' to your query.")
    if warning_count:
        recs.append(
            f"{warning_count} result(s) carry scam or safety warnings. Review them carefully."
        )
    return recs


def compute_insights(annotated: list[AnnotatedResult]) -> SearchInsights:
    """
    Per-batch averages. Each average stays within its own metric; metrics
    are never mixed into a combined score.
    """
    total = len(annotated)
    if total == 0:
        return SearchInsights(
            average_gender_bias=GENDER_NEUTRAL_SCORE,
            average_gender_bias_label=get_gender_bias_label(GENDER_NEUTRAL_SCORE),
            average_credibility=0,
            average_credibility_label=get_credibility_label(0),
            average_ai_content=0.0,
            average_ai_content_label=get_ai_content_label(0.0),
            political_distribution={i: 0 for i in PoliticalBiasIndicator},
        )

    avg_gender = round(sum(a.bias.gender.score for a in annotated) / total)
    avg_credibility = calculate_average_credibility([a.credibility for a in annotated])
    avg_ai = calculate_average_ai_content([a.ai_content for a in annotated])

    counts = Counter(a.bias.political.indicator for a in annotated)
    distribution = {i: counts.get(i, 0) for i in PoliticalBiasIndicator}

    women_count = sum(1 for a in annotated if is_women_centered(list(a.safety_flags)))
    warning_count = sum(1 for a in annotated if has_safety_warnings(list(a.safety_flags)))

    return SearchInsights(
        average_gender_bias=avg_gender,
        average_gender_bias_label=get_gender_bias_label(avg_gender),
        average_credibility=avg_credibility,
        average_credibility_label=get_credibility_label(avg_credibility),
        average_ai_content=avg_ai,
        average_ai_content_label=get_ai_content_label(avg_ai),
        political_distribution=distribution,
        women_focused_count=women_count,
        women_focused_percentage=round(women_count / total * 100),
        safety_warning_count=warning_count,
        recommendations=tuple(
            _recommendations(avg_credibility, avg_ai, avg_gender, women_count, warning_count)
        ),
    )
