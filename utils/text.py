"""Phrase matching helpers for the lexicon-based analyzers."""

import re
from collections.abc import Iterable
from functools import lru_cache

_WS_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"\b[\w'-]+\b")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")


def normalize_text(text: str | None) -> str:
    """Collapse whitespace runs and straighten curly apostrophes."""
    if not text:
        return ""
    text = text.replace("’", "'").replace("‘", "'")
    return _WS_RE.sub(" ", text).strip()


@lru_cache(maxsize=2048)
def _phrase_pattern(phrase: str) -> re.Pattern:
    # Word-boundary lookarounds instead of \b so phrases ending in "!" still match
    parts = [re.escape(p) for p in phrase.split()]
    body = r"\s+".join(parts)
    return re.compile(rf"(?<!\w){body}(?!\w)", re.I)


def contains_phrase(text: str, phrase: str) -> bool:
    return bool(_phrase_pattern(phrase).search(text))


def matched_phrases(text: str, phrases: Iterable[str]) -> list[str]:
    """Distinct phrases from ``phrases`` present in ``text``, in lexicon order."""
    if not text:
        return []
    return [p for p in phrases if contains_phrase(text, p)]


def count_phrases(text: str, phrases: Iterable[str]) -> int:
    return len(matched_phrases(text, phrases))


def tokenize_words(text: str) -> list[str]:
    return _WORD_RE.findall(text or "")


def split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text or "") if s.strip()]
