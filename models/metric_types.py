from dataclasses import dataclass
from enum import Enum


class MetricName(str, Enum):
    VIBE = "vibe"
    GENDER_BIAS = "gender_bias"
    POLITICAL_BIAS = "political_bias"
    COMMERCIAL_BIAS = "commercial_bias"
    AI_DETECTION = "ai_detection"
    SUSTAINABILITY = "sustainability"
    CREDIBILITY = "credibility"


class MetricMode(str, Enum):
    LOCAL = "local"
    AI = "ai"


class Provenance(str, Enum):
    LOCAL = "local"
    AI = "ai"
    LOCAL_FALLBACK = "local-fallback"
    NEUTRAL_DEFAULT = "neutral-default"
    DISABLED = "disabled"


@dataclass(frozen=True)
class MetricProvenance:
    source: Provenance
    cache_hit: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        return {"source": self.source.value, "cache_hit": self.cache_hit, "error": self.error}
