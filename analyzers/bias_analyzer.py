"""
Bias analysis along four independent dimensions: gender, political,
commercial and emotional tone.

Each sub-analyzer is callable on its own and never raises. Matching is
case-insensitive, whitespace-insensitive and respects word boundaries, so
"ad" does not fire inside "already".
"""

import re

from config.thresholds import (
    COMMERCIAL_PROMOTIONAL_MIN,
    GENDER_BALANCED_MIN,
    GENDER_CAUTION_MIN,
    GENDER_NEUTRAL_MIN,
    GENDER_NEUTRAL_SCORE,
    GENDER_WOMEN_POSITIVE_MIN,
    POLITICAL_CENTER_BAND,
    POLITICAL_FAR_MIN,
    POLITICAL_STRONG_MIN,
)
from models.analysis import (
    BiasAnalysis,
    CommercialBiasAnalysis,
    EmotionalTone,
    GenderBiasAnalysis,
    GenderBiasLabel,
    PoliticalBiasAnalysis,
    PoliticalBiasIndicator,
)
from models.search_result import SearchResult
from utils.domains import extract_domain
from utils.text import count_phrases, matched_phrases, normalize_text, tokenize_words

# ---------------------------------------------------------------------------
# Gender
# ---------------------------------------------------------------------------

GENDER_POSITIVE_PHRASES = (
    "women", "woman", "female", "feminine", "inclusive", "equality",
    "diverse", "diversity", "empower", "empowerment", "support", "safe space",
    "gender equality", "women-led", "female-founded", "maternity",
    "work-life balance", "flexible", "inclusive workplace", "women in tech",
    "women in stem", "girl power", "sisterhood", "feminist", "feminism",
    "equal pay", "representation", "mentorship for women",
    "women entrepreneurs", "female leadership",
)

GENDER_BIAS_PHRASES = (
    "boys club", "male-dominated", "aggressive culture", "hostile",
    "discrimination", "harassment", "toxic", "glass ceiling", "pay gap",
    "sexism", "sexist", "misogyny", "misogynist", "bro culture",
    "old boys network", "mansplaining", "gender bias", "workplace harassment",
    "sexual harassment", "hostile work environment", "gender discrimination",
)

GENDER_POSITIVE_WEIGHT = 5
GENDER_BIAS_WEIGHT = 8


def get_gender_bias_label(score: int) -> GenderBiasLabel:
    if score >= GENDER_WOMEN_POSITIVE_MIN:
        return GenderBiasLabel.WOMEN_POSITIVE
    if score >= GENDER_BALANCED_MIN:
        return GenderBiasLabel.BALANCED
    if score >= GENDER_NEUTRAL_MIN:
        return GenderBiasLabel.NEUTRAL
    if score >= GENDER_CAUTION_MIN:
        return GenderBiasLabel.CAUTION
    return GenderBiasLabel.POTENTIAL_BIAS


def analyze_gender_bias(text: str) -> GenderBiasAnalysis:
    """Score 0-100, higher is more women-positive. No signal stays at 50."""
    text = normalize_text(text)
    if not text:
        return GenderBiasAnalysis(
            score=GENDER_NEUTRAL_SCORE, label=get_gender_bias_label(GENDER_NEUTRAL_SCORE)
        )

    score = GENDER_NEUTRAL_SCORE
    score += GENDER_POSITIVE_WEIGHT * count_phrases(text, GENDER_POSITIVE_PHRASES)
    score -= GENDER_BIAS_WEIGHT * count_phrases(text, GENDER_BIAS_PHRASES)
    score = max(0, min(100, score))

    return GenderBiasAnalysis(score=score, label=get_gender_bias_label(score))


# ---------------------------------------------------------------------------
# Political
# ---------------------------------------------------------------------------

POLITICAL_DOMAIN_MAP = {
    "msnbc.com": PoliticalBiasIndicator.LEFT,
    "huffpost.com": PoliticalBiasIndicator.LEFT,
    "vox.com": PoliticalBiasIndicator.CENTER_LEFT,
    "nytimes.com": PoliticalBiasIndicator.CENTER_LEFT,
    "washingtonpost.com": PoliticalBiasIndicator.CENTER_LEFT,
    "theguardian.com": PoliticalBiasIndicator.CENTER_LEFT,
    "npr.org": PoliticalBiasIndicator.CENTER_LEFT,
    "reuters.com": PoliticalBiasIndicator.CENTER,
    "apnews.com": PoliticalBiasIndicator.CENTER,
    "bbc.com": PoliticalBiasIndicator.CENTER,
    "pbs.org": PoliticalBiasIndicator.CENTER,
    "c-span.org": PoliticalBiasIndicator.CENTER,
    "wsj.com": PoliticalBiasIndicator.CENTER_RIGHT,
    "foxnews.com": PoliticalBiasIndicator.RIGHT,
    "breitbart.com": PoliticalBiasIndicator.FAR_RIGHT,
    "dailywire.com": PoliticalBiasIndicator.RIGHT,
    "nationalreview.com": PoliticalBiasIndicator.CENTER_RIGHT,
}

LEFT_PHRASES = (
    "progressive", "social justice", "systemic", "marginalized", "equity",
    "intersectional", "privilege", "oppression",
)

RIGHT_PHRASES = (
    "traditional values", "free market", "limited government",
    "personal responsibility", "patriot", "liberty", "constitutional",
)

POLITICAL_PHRASE_WEIGHT = 10
KNOWN_OUTLET_CONFIDENCE = 80


def _lookup_outlet(domain: str) -> PoliticalBiasIndicator | None:
    domain = domain.strip().lower().removeprefix("www.")
    for outlet, indicator in POLITICAL_DOMAIN_MAP.items():
        if domain == outlet or domain.endswith(f".{outlet}"):
            return indicator
    return None


def analyze_political_bias(text: str, domain: str | None = None) -> PoliticalBiasAnalysis:
    """Known outlets map directly; otherwise compare left and right phrasing."""
    if domain:
        indicator = _lookup_outlet(domain)
        if indicator is not None:
            return PoliticalBiasAnalysis(indicator=indicator, confidence=KNOWN_OUTLET_CONFIDENCE)

    text = normalize_text(text)
    left = count_phrases(text, LEFT_PHRASES)
    right = count_phrases(text, RIGHT_PHRASES)
    if left == 0 and right == 0:
        return PoliticalBiasAnalysis(indicator=PoliticalBiasIndicator.UNKNOWN, confidence=0)

    diff = (left - right) * POLITICAL_PHRASE_WEIGHT
    if abs(diff) < POLITICAL_CENTER_BAND:
        return PoliticalBiasAnalysis(indicator=PoliticalBiasIndicator.CENTER, confidence=60)

    magnitude = abs(diff)
    if magnitude >= POLITICAL_FAR_MIN:
        indicator = (
            PoliticalBiasIndicator.FAR_LEFT if diff > 0 else PoliticalBiasIndicator.FAR_RIGHT
        )
        confidence = 70
    elif magnitude >= POLITICAL_STRONG_MIN:
        indicator = PoliticalBiasIndicator.LEFT if diff > 0 else PoliticalBiasIndicator.RIGHT
        confidence = 65
    else:
        indicator = (
            PoliticalBiasIndicator.CENTER_LEFT if diff > 0 else PoliticalBiasIndicator.CENTER_RIGHT
        )
        confidence = 60

    return PoliticalBiasAnalysis(indicator=indicator, confidence=confidence)


# ---------------------------------------------------------------------------
# Commercial
# ---------------------------------------------------------------------------

CALL_TO_ACTION_PHRASES = (
    "buy now", "shop now", "order now", "subscribe now", "sign up now",
    "act now", "click here", "limited time", "exclusive offer", "free trial",
    "don't miss out", "money back guarantee", "add to cart", "promo code",
    "coupon", "discount", "sale", "promo",
)

PRICING_PATTERNS = (
    re.compile(r"\d+\s?%\s?off\b", re.I),
    re.compile(r"[$€£]\s?\d+"),
    re.compile(r"\bsave\s+(?:up\s+to\s+)?[$€£]?\d+", re.I),
    re.compile(r"\bhalf[\s-]price\b", re.I),
    re.compile(r"\bfree shipping\b", re.I),
    re.compile(r"\bbogo\b|\bbuy one,? get one\b", re.I),
)

SUPERLATIVE_PHRASES = (
    "best price", "lowest price", "best deal", "unbeatable", "revolutionary",
    "#1", "number one", "world's best", "top-rated", "must-have",
    "guaranteed", "once in a lifetime",
)

SPONSORED_PHRASES = ("sponsored", "paid partnership", "advertisement", "affiliate")

AFFILIATE_URL_PATTERNS = (
    re.compile(r"[?&]ref=", re.I),
    re.compile(r"[?&]affiliate=", re.I),
    re.compile(r"[?&]partner=", re.I),
    re.compile(r"[?&]utm_", re.I),
    re.compile(r"[?&]tag=", re.I),
    re.compile(r"amzn\.to", re.I),
    re.compile(r"bit\.ly", re.I),
    re.compile(r"tinyurl", re.I),
)

CTA_WEIGHT = 10
PRICING_WEIGHT = 12
SUPERLATIVE_WEIGHT = 6
SPONSORED_WEIGHT = 30
AFFILIATE_WEIGHT = 20
DENSITY_BONUS = 10
DENSITY_MIN = 0.1  # promotional markers per word


def _count_superlatives(text: str) -> int:
    # "#1" has no word boundary on the left, match it literally
    count = 0
    lowered = text.lower()
    for phrase in SUPERLATIVE_PHRASES:
        if phrase.startswith("#"):
            count += int(phrase in lowered)
        else:
            count += count_phrases(text, (phrase,))
    return count


def analyze_commercial_bias(text: str, url: str | None = None) -> CommercialBiasAnalysis:
    text = normalize_text(text)

    cta = count_phrases(text, CALL_TO_ACTION_PHRASES)
    pricing = sum(1 for p in PRICING_PATTERNS if p.search(text))
    superlatives = _count_superlatives(text) if text else 0
    is_sponsored = bool(matched_phrases(text, SPONSORED_PHRASES))
    has_affiliate = bool(url) and any(p.search(url) for p in AFFILIATE_URL_PATTERNS)

    score = cta * CTA_WEIGHT + pricing * PRICING_WEIGHT + superlatives * SUPERLATIVE_WEIGHT
    if is_sponsored:
        score += SPONSORED_WEIGHT
    if has_affiliate:
        score += AFFILIATE_WEIGHT

    markers = cta + pricing + superlatives
    words = len(tokenize_words(text))
    if words and markers / words >= DENSITY_MIN:
        score += DENSITY_BONUS

    score = min(100, score)
    return CommercialBiasAnalysis(
        is_promotional=score >= COMMERCIAL_PROMOTIONAL_MIN,
        score=score,
        has_affiliate_links=has_affiliate,
        is_sponsored=is_sponsored,
    )


# ---------------------------------------------------------------------------
# Emotional tone
# ---------------------------------------------------------------------------

SENSATIONAL_PHRASES = (
    "shocking", "unbelievable", "incredible", "amazing", "outrageous",
    "breaking", "urgent", "explosive", "bombshell", "devastating",
    "horrifying", "terrifying", "mind-blowing", "jaw-dropping",
    "you won't believe",
)

EMOTIONAL_PHRASES = (
    "heartbreaking", "moving", "emotional", "passionate", "angry", "furious",
    "sad", "happy", "excited", "worried", "anxious", "disappointed",
)

INSPIRING_PHRASES = (
    "inspiring", "empowering", "empowerment", "uplifting", "hope", "hopeful",
    "strong", "courage", "resilient", "growth", "healing", "success",
    "triumph", "supportive", "inclusive", "community", "love", "kindness",
)

TOXIC_PHRASES = (
    "disgusting", "idiot", "stupid", "fake", "scam", "hate", "racist",
    "sexist", "ugly", "fat", "shame", "worst", "terrible", "horrible", "trash",
)

FACTUAL_PHRASES = (
    "according to", "research shows", "study finds", "data indicates",
    "statistics show", "evidence suggests", "experts say", "report states",
    "analysis reveals", "survey found", "university", "scientific",
)

CONTROVERSIAL_PHRASES = (
    "debate", "controversy", "polarizing", "argues", "claims", "denies",
    "alleged", "accused", "scandal", "conflict", "war", "fight",
)

_EXCESSIVE_PUNCTUATION_RE = re.compile(r"[!?]{2,}")
_SHOUTING_RE = re.compile(r"\b[A-Z]{4,}\b")


def _sensational_markers(text: str) -> int:
    count = count_phrases(text, SENSATIONAL_PHRASES)
    if _EXCESSIVE_PUNCTUATION_RE.search(text):
        count += 1
    if len(_SHOUTING_RE.findall(text)) >= 2:
        count += 1
    return count


def analyze_emotional_tone(text: str) -> EmotionalTone:
    """Highest-priority matching tone wins; no signal is Balanced."""
    text = normalize_text(text)
    if not text:
        return EmotionalTone.BALANCED

    toxic = count_phrases(text, TOXIC_PHRASES)
    sensational = _sensational_markers(text)
    controversial = count_phrases(text, CONTROVERSIAL_PHRASES)
    inspiring = count_phrases(text, INSPIRING_PHRASES)
    factual = count_phrases(text, FACTUAL_PHRASES)
    emotional = count_phrases(text, EMOTIONAL_PHRASES)

    if toxic >= 1:
        return EmotionalTone.TOXIC
    if sensational >= 2 and sensational > factual:
        return EmotionalTone.SENSATIONAL
    if controversial >= 2:
        return EmotionalTone.CONTROVERSIAL
    if inspiring >= 1:
        return EmotionalTone.INSPIRING
    if factual >= 2:
        return EmotionalTone.FACTUAL
    if emotional >= 2:
        return EmotionalTone.EMOTIONAL
    if factual == 1:
        return EmotionalTone.CALM
    return EmotionalTone.BALANCED


def analyze_bias(result: SearchResult) -> BiasAnalysis:
    text = result.text
    domain = result.domain or extract_domain(result.url)
    return BiasAnalysis(
        gender=analyze_gender_bias(text),
        political=analyze_political_bias(text, domain),
        commercial=analyze_commercial_bias(text, result.url),
        emotional_tone=analyze_emotional_tone(text),
    )
