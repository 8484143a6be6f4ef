"""
Safety flags for a search result.

Flags are not mutually exclusive. Each carries a fixed justification string
so the same input always yields the same output.
"""

from analyzers.credibility_scorer import is_women_focused
from config.thresholds import VERIFIED_CONTENT_MIN_CREDIBILITY, WOMEN_FOCUSED_MIN_PHRASES
from models.analysis import CredibilityScore, SafetyCategory, SafetyFlag
from models.search_result import SearchResult
from utils.domains import extract_domain
from utils.text import matched_phrases, normalize_text

WOMEN_LED_PHRASES = (
    "women-owned", "woman-owned", "female-founded", "women-led", "woman-led",
    "female-led", "founded by women", "led by women", "women entrepreneurs",
    "female entrepreneurs", "women in leadership", "female ceo", "woman ceo",
    "women executives",
)

SAFE_SPACE_PHRASES = (
    "safe space", "safe environment", "inclusive space", "welcoming environment",
    "supportive community", "judgment-free", "lgbtq+ friendly", "women-friendly",
    "family-friendly", "harassment-free", "discrimination-free", "zero tolerance",
    "support group", "peer support",
)

SCAM_PHRASES = (
    "scam", "fraud", "fraudulent", "phishing", "pyramid scheme", "ponzi",
    "get rich quick", "too good to be true", "wire transfer", "western union",
    "gift cards", "cryptocurrency scam", "romance scam", "job scam",
    "lottery scam", "inheritance scam",
)

SAFETY_CONCERN_PHRASES = (
    "harassment", "abuse", "violence", "assault", "stalking",
    "domestic violence", "sexual harassment", "workplace harassment",
    "cyberbullying", "online harassment", "threats", "intimidation",
    "discrimination", "hostile environment", "toxic workplace", "unsafe",
    "dangerous",
)

WOMEN_FOCUSED_PHRASES = (
    "for women", "women's", "female", "feminine", "girl", "mother", "sister",
    "daughter", "women empowerment", "women's health", "women's rights",
    "gender equality", "women in tech", "women in stem", "women in business",
)

CRISIS_PHRASES = (
    "emergency", "crisis", "hotline", "helpline", "shelter",
    "domestic violence", "sexual assault", "suicide prevention",
    "mental health crisis", "abuse hotline", "safe house",
)

_WARNING_CATEGORIES = frozenset({SafetyCategory.SCAM_WARNING, SafetyCategory.SAFETY_CONCERN})


def _matched_reason(prefix: str, phrases: list[str]) -> str:
    return f"{prefix}: {', '.join(phrases[:3])}"


def analyze_safety(result: SearchResult, credibility: CredibilityScore) -> list[SafetyFlag]:
    text = normalize_text(result.text)
    domain = result.domain or extract_domain(result.url)
    flags: list[SafetyFlag] = []

    if credibility.score >= VERIFIED_CONTENT_MIN_CREDIBILITY:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.VERIFIED_CONTENT,
                reason=f"Source credibility {credibility.score} ({credibility.label.value})",
            )
        )

    led = matched_phrases(text, WOMEN_LED_PHRASES)
    if is_women_focused(domain):
        flags.append(
            SafetyFlag(
                category=SafetyCategory.WOMEN_LED,
                reason=f"Domain {domain} is on the women-focused list",
            )
        )
    elif led:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.WOMEN_LED,
                reason=_matched_reason("Women-led language", led),
            )
        )

    safe = matched_phrases(text, SAFE_SPACE_PHRASES)
    if safe:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.SAFE_SPACE,
                reason=_matched_reason("Safe space language", safe),
            )
        )

    scam = matched_phrases(text, SCAM_PHRASES)
    if scam:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.SCAM_WARNING,
                reason=_matched_reason("Scam markers", scam),
            )
        )

    concern = matched_phrases(text, SAFETY_CONCERN_PHRASES)
    if concern:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.SAFETY_CONCERN,
                reason=_matched_reason("Safety markers", concern),
            )
        )

    focused = matched_phrases(text, WOMEN_FOCUSED_PHRASES)
    if len(focused) >= WOMEN_FOCUSED_MIN_PHRASES:
        flags.append(
            SafetyFlag(
                category=SafetyCategory.WOMEN_FOCUSED,
                reason=_matched_reason("Women-focused topics", focused),
            )
        )

    return flags


def has_safety_warnings(flags: list[SafetyFlag]) -> bool:
    return any(f.category in _WARNING_CATEGORIES for f in flags)


def is_safety_critical(text: str) -> bool:
    """Crisis or emergency content that a UI should surface prominently."""
    return bool(matched_phrases(normalize_text(text), CRISIS_PHRASES))


def is_women_centered(flags: list[SafetyFlag]) -> bool:
    return any(
        f.category in (SafetyCategory.WOMEN_LED, SafetyCategory.WOMEN_FOCUSED) for f in flags
    )
