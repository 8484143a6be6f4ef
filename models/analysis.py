from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GenderBiasLabel(str, Enum):
    WOMEN_POSITIVE = "Women-Positive"
    BALANCED = "Balanced"
    NEUTRAL = "Neutral"
    CAUTION = "Caution"
    POTENTIAL_BIAS = "Potential Bias"


class PoliticalBiasIndicator(str, Enum):
    FAR_LEFT = "Far Left"
    LEFT = "Left"
    CENTER_LEFT = "Center-Left"
    CENTER = "Center"
    CENTER_RIGHT = "Center-Right"
    RIGHT = "Right"
    FAR_RIGHT = "Far Right"
    UNKNOWN = "Unknown"  # no political markers at all; distinct from CENTER


class EmotionalTone(str, Enum):
    FACTUAL = "Factual"
    CALM = "Calm"
    BALANCED = "Balanced"
    INSPIRING = "Inspiring"
    EMOTIONAL = "Emotional"
    CONTROVERSIAL = "Controversial"
    SENSATIONAL = "Sensational"
    TOXIC = "Toxic"


class CredibilityLabel(str, Enum):
    HIGHLY_TRUSTED = "Highly Trusted"
    TRUSTED = "Trusted"
    MODERATE = "Moderate"
    VERIFY_SOURCE = "Verify Source"


class DomainType(str, Enum):
    GOV = "gov"
    EDU = "edu"
    NEWS_VERIFIED = "news-verified"
    WOMEN_FOCUSED = "women-focused"
    COMMERCIAL = "commercial"
    UNKNOWN = "unknown"


class AIContentLabel(str, Enum):
    MOSTLY_HUMAN = "Mostly Human"
    SOME_AI = "Some AI Content"
    HIGH_AI = "High AI Content"
    INSUFFICIENT_DATA = "Insufficient Data"


class AIContentColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GRAY = "gray"


class SafetyCategory(str, Enum):
    VERIFIED_CONTENT = "Verified Content"
    WOMEN_LED = "Women-Led"
    SAFE_SPACE = "Safe Space"
    SCAM_WARNING = "Scam Warning"
    SAFETY_CONCERN = "Safety Concern"
    WOMEN_FOCUSED = "Women-Focused"


class SustainabilityLabel(str, Enum):
    ECO_LEADER = "Eco-Leader"
    ECO_AWARE = "Eco-Aware"
    NEUTRAL = "Neutral"
    CAUTION = "Caution"
    CONCERN = "Concern"


@dataclass(frozen=True)
class GenderBiasAnalysis:
    score: int  # 0-100, higher = more women-positive
    label: GenderBiasLabel


@dataclass(frozen=True)
class PoliticalBiasAnalysis:
    indicator: PoliticalBiasIndicator
    confidence: int = 0  # 0-100


@dataclass(frozen=True)
class CommercialBiasAnalysis:
    is_promotional: bool
    score: int  # 0-100
    has_affiliate_links: bool = False
    is_sponsored: bool = False


@dataclass(frozen=True)
class BiasAnalysis:
    gender: GenderBiasAnalysis
    political: PoliticalBiasAnalysis
    commercial: CommercialBiasAnalysis
    emotional_tone: EmotionalTone


@dataclass(frozen=True)
class CredibilityScore:
    score: int  # 0-100
    label: CredibilityLabel
    domain_type: DomainType
    is_women_focused: bool
    is_verified_news: bool = False


@dataclass(frozen=True)
class AIContentDetection:
    probability: float  # 0.0-1.0
    label: AIContentLabel
    color: AIContentColor
    indicators: tuple[str, ...] = ()


@dataclass(frozen=True)
class SafetyFlag:
    category: SafetyCategory
    reason: str


@dataclass(frozen=True)
class SustainabilityScore:
    score: int  # 0-100
    label: SustainabilityLabel
    indicators: tuple[str, ...] = field(default_factory=tuple)


def to_jsonable(value: Any) -> Any:
    """Convert analysis records (dataclasses, enums, tuples) into plain JSON types."""
    if value is None or isinstance(value, (bool, int, float, str)) and not isinstance(value, Enum):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {to_jsonable(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return {name: to_jsonable(getattr(value, name)) for name in value.__dataclass_fields__}
    return str(value)
