from dataclasses import dataclass, field
from typing import Any

from models.analysis import (
    AIContentDetection,
    BiasAnalysis,
    CredibilityScore,
    SafetyFlag,
    SustainabilityScore,
    to_jsonable,
)
from models.metric_types import MetricName, MetricProvenance
from models.search_result import SearchResult


@dataclass(frozen=True)
class AnalysisMeta:
    total_time_ms: int = 0
    ai_requests_made: int = 0
    cache_hits: int = 0
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotatedResult:
    """A search result with every metric attached. Only ``sustainability`` may be None."""

    result: SearchResult
    credibility: CredibilityScore
    bias: BiasAnalysis
    ai_content: AIContentDetection
    safety_flags: tuple[SafetyFlag, ...]
    sustainability: SustainabilityScore | None
    provenance: dict[MetricName, MetricProvenance] = field(default_factory=dict)
    meta: AnalysisMeta = field(default_factory=AnalysisMeta)

    def __post_init__(self):
        object.__setattr__(self, "safety_flags", tuple(self.safety_flags))

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "credibility": to_jsonable(self.credibility),
            "bias": to_jsonable(self.bias),
            "ai_content": to_jsonable(self.ai_content),
            "safety_flags": to_jsonable(self.safety_flags),
            "sustainability": to_jsonable(self.sustainability),
            "provenance": {name.value: p.to_dict() for name, p in self.provenance.items()},
            "meta": to_jsonable(self.meta),
        }
