"""
Source credibility from domain classification.

Pure string matching against frozen allowlists; no network calls.
"""

import re

from config.thresholds import (
    CREDIBILITY_HIGHLY_TRUSTED_MIN,
    CREDIBILITY_MODERATE_MIN,
    CREDIBILITY_TRUSTED_MIN,
)
from models.analysis import CredibilityLabel, CredibilityScore, DomainType
from models.search_result import SearchResult
from utils.domains import extract_domain, has_suffix, matches_domain

__all__ = [
    "calculate_average_credibility",
    "calculate_credibility",
    "extract_domain",
    "get_credibility_label",
    "get_domain_type",
    "is_verified_news",
    "is_women_focused",
]

GOV_SUFFIXES = (".gov", ".gov.uk", ".gov.au", ".gov.ca", ".gob.mx")
EDU_SUFFIXES = (".edu", ".ac.uk", ".edu.au")
COMMERCIAL_SUFFIXES = (".com", ".net")

VERIFIED_NEWS_DOMAINS = frozenset(
    {
        "reuters.com", "apnews.com", "bbc.com", "bbc.co.uk",
        "nytimes.com", "washingtonpost.com", "theguardian.com",
        "npr.org", "pbs.org", "cnn.com", "nbcnews.com",
        "abcnews.go.com", "cbsnews.com", "usatoday.com",
        "wsj.com", "ft.com", "economist.com", "bloomberg.com",
        "nature.com", "sciencedirect.com", "pubmed.gov",
        "who.int", "un.org", "worldbank.org",
    }
)

WOMEN_FOCUSED_DOMAINS = frozenset(
    {
        "womenshealth.gov", "unwomen.org", "catalyst.org", "leanin.org",
        "girlswhocode.com", "womenintechnology.org", "sheeo.world",
        "globalfundforwomen.org", "womendeliver.org", "womensmedia.com",
        "womenshistory.org", "aauw.org", "now.org", "feminist.org",
        "womensenews.org", "msmagazine.com", "bust.com", "refinery29.com",
        "thecut.com", "bustle.com", "hellogiggles.com", "sheknows.com",
        "womenshealthmag.com", "self.com", "glamour.com", "cosmopolitan.com",
        "elle.com", "marieclaire.com", "harpersbazaar.com", "vogue.com",
        "allure.com", "instyle.com", "realsimple.com", "parents.com",
        "babycenter.com", "whattoexpect.com", "thebump.com",
    }
)

# Applied to the hostname only
SUSPICIOUS_PATTERNS = (
    re.compile(r"\d{4,}"),
    re.compile(r"free.*download", re.I),
    re.compile(r"click.*bait", re.I),
    re.compile(r"fake.*news", re.I),
)

BASE_SCORE = 50
DOMAIN_TYPE_ADJUSTMENT = {
    DomainType.GOV: 40,
    DomainType.EDU: 35,
    DomainType.NEWS_VERIFIED: 25,
    DomainType.WOMEN_FOCUSED: 20,
    DomainType.COMMERCIAL: 0,
    DomainType.UNKNOWN: -10,
}
VERIFIED_NEWS_BONUS = 10
WOMEN_FOCUSED_BONUS = 10
ORG_BONUS = 5
SUSPICIOUS_PENALTY = 15
BLOG_PENALTY = 10


def is_verified_news(domain: str) -> bool:
    return matches_domain(domain, VERIFIED_NEWS_DOMAINS)


def is_women_focused(domain: str) -> bool:
    return matches_domain(domain, WOMEN_FOCUSED_DOMAINS)


def get_domain_type(domain: str) -> DomainType:
    """Classify a hostname. Order matters: gov and edu win over the allowlists."""
    if not domain:
        return DomainType.UNKNOWN
    if has_suffix(domain, GOV_SUFFIXES):
        return DomainType.GOV
    if has_suffix(domain, EDU_SUFFIXES):
        return DomainType.EDU
    if is_women_focused(domain):
        return DomainType.WOMEN_FOCUSED
    if is_verified_news(domain):
        return DomainType.NEWS_VERIFIED
    if has_suffix(domain, COMMERCIAL_SUFFIXES):
        return DomainType.COMMERCIAL
    return DomainType.UNKNOWN


def get_credibility_label(score: int) -> CredibilityLabel:
    if score >= CREDIBILITY_HIGHLY_TRUSTED_MIN:
        return CredibilityLabel.HIGHLY_TRUSTED
    if score >= CREDIBILITY_TRUSTED_MIN:
        return CredibilityLabel.TRUSTED
    if score >= CREDIBILITY_MODERATE_MIN:
        return CredibilityLabel.MODERATE
    return CredibilityLabel.VERIFY_SOURCE


def _score_domain(domain: str, domain_type: DomainType, verified: bool, women: bool) -> int:
    score = BASE_SCORE + DOMAIN_TYPE_ADJUSTMENT[domain_type]

    if verified:
        score += VERIFIED_NEWS_BONUS
    if women:
        score += WOMEN_FOCUSED_BONUS
    if domain.endswith(".org"):
        score += ORG_BONUS

    for pattern in SUSPICIOUS_PATTERNS:
        if pattern.search(domain):
            score -= SUSPICIOUS_PENALTY

    if "blog" in domain and "official" not in domain:
        score -= BLOG_PENALTY

    return max(0, min(100, score))


def calculate_credibility(result: SearchResult) -> CredibilityScore:
    domain = result.domain or extract_domain(result.url)
    domain_type = get_domain_type(domain)
    verified = is_verified_news(domain)
    women = is_women_focused(domain)

    score = _score_domain(domain, domain_type, verified, women)
    return CredibilityScore(
        score=score,
        label=get_credibility_label(score),
        domain_type=domain_type,
        is_women_focused=women,
        is_verified_news=verified,
    )


def calculate_average_credibility(scores: list[CredibilityScore]) -> int:
    if not scores:
        return 0
    return round(sum(s.score for s in scores) / len(scores))
