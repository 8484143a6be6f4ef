"""
Eco metric. Returns None when a result carries no sustainability signal at
all, which callers render as "N/A" rather than a low score.
"""

import re

from config.thresholds import (
    SUSTAINABILITY_AWARE_MIN,
    SUSTAINABILITY_CAUTION_MIN,
    SUSTAINABILITY_LEADER_MIN,
    SUSTAINABILITY_NEUTRAL_MIN,
    SUSTAINABILITY_NEUTRAL_SCORE,
)
from models.analysis import SustainabilityLabel, SustainabilityScore
from models.search_result import SearchResult
from utils.domains import extract_domain, matches_domain
from utils.text import count_phrases, normalize_text

ECO_PHRASES = (
    # environmental
    "sustainable", "sustainability", "eco-friendly", "eco friendly",
    "environmentally friendly", "renewable", "solar", "wind power",
    "clean energy", "carbon neutral", "carbon footprint", "zero waste",
    "plastic-free", "biodegradable", "compostable", "recyclable", "recycled",
    "upcycled", "organic", "plant-based", "cruelty-free", "fair trade",
    "ethically sourced", "locally sourced", "farm to table",
    # climate
    "climate action", "climate change", "global warming", "emissions reduction",
    "net zero", "carbon offset", "greenhouse gas",
    # conservation
    "conservation", "wildlife protection", "endangered species", "biodiversity",
    "ecosystem", "reforestation", "ocean conservation", "marine protection",
    # ethical business
    "b corp", "certified b corporation", "social enterprise",
    "conscious consumer", "slow fashion",
)

CONCERN_PHRASES = (
    "greenwashing", "fast fashion", "single-use plastic", "throwaway culture",
    "oil drilling", "fracking", "coal mining", "deforestation", "pollution",
    "toxic waste", "climate denial", "climate hoax",
)

ECO_DOMAINS = frozenset(
    {
        "treehugger.com", "grist.org", "ecowatch.com", "greenbiz.com",
        "sustainablebrands.com", "insideclimatenews.org", "epa.gov", "unep.org",
        "worldwildlife.org", "wwf.org", "greenpeace.org", "sierraclub.org",
        "nrdc.org", "edf.org", "conservation.org", "nature.org",
        "rainforest-alliance.org", "bcorporation.net", "fairtrade.net",
        "fsc.org", "wedo.org", "womenenvironment.org", "globalfundforwomen.org",
    }
)

ANTI_ECO_DOMAINS = frozenset({"wattsupwiththat.com", "climatedepot.com", "cfact.org"})

# Whole path segments only: /eco matches /eco/tips but not /economy
ECO_URL_SECTION_RE = re.compile(
    r"/(?:sustainability|environment|green|eco|climate)(?=[/?#]|$)"
)

ECO_PHRASE_WEIGHT = 8
ECO_PHRASE_CAP = 40
CONCERN_PHRASE_WEIGHT = 12
ECO_DOMAIN_BONUS = 25
ANTI_ECO_DOMAIN_PENALTY = 30
ORG_BONUS = 5
URL_SECTION_BONUS = 10


def get_sustainability_label(score: int) -> SustainabilityLabel:
    if score >= SUSTAINABILITY_LEADER_MIN:
        return SustainabilityLabel.ECO_LEADER
    if score >= SUSTAINABILITY_AWARE_MIN:
        return SustainabilityLabel.ECO_AWARE
    if score >= SUSTAINABILITY_NEUTRAL_MIN:
        return SustainabilityLabel.NEUTRAL
    if score >= SUSTAINABILITY_CAUTION_MIN:
        return SustainabilityLabel.CAUTION
    return SustainabilityLabel.CONCERN


def _url_path(url: str) -> str:
    lowered = (url or "").lower()
    _, sep, rest = lowered.partition("://")
    rest = rest if sep else lowered
    slash = rest.find("/")
    return rest[slash:] if slash >= 0 else ""


def calculate_sustainability(result: SearchResult) -> SustainabilityScore | None:
    text = normalize_text(result.text)
    domain = result.domain or extract_domain(result.url)

    score = SUSTAINABILITY_NEUTRAL_SCORE
    indicators: list[str] = []

    eco = count_phrases(text, ECO_PHRASES)
    if eco:
        score += min(eco * ECO_PHRASE_WEIGHT, ECO_PHRASE_CAP)
        indicators.append(f"{eco} eco-positive term(s)")

    concern = count_phrases(text, CONCERN_PHRASES)
    if concern:
        score -= concern * CONCERN_PHRASE_WEIGHT
        indicators.append(f"{concern} concerning term(s)")

    if matches_domain(domain, ECO_DOMAINS):
        score += ECO_DOMAIN_BONUS
        indicators.append("Eco-focused source")
    if matches_domain(domain, ANTI_ECO_DOMAINS):
        score -= ANTI_ECO_DOMAIN_PENALTY
        indicators.append("Known anti-environment source")
    if domain.endswith(".org") and eco >= 2:
        score += ORG_BONUS

    path = _url_path(result.url)
    if ECO_URL_SECTION_RE.search(path):
        score += URL_SECTION_BONUS
        indicators.append("Dedicated sustainability section")

    if not indicators:
        return None

    score = max(0, min(100, score))
    return SustainabilityScore(
        score=score, label=get_sustainability_label(score), indicators=tuple(indicators)
    )
