"""
Heuristic detection of machine-generated text.

Combines stock AI phrasing, structural templates, formal register, hedging,
sentence-length uniformity, missing personal voice and list-heavy layout
into a probability between 0 and 1.
"""

import re
import statistics

from config.thresholds import AI_CONTENT_HIGH_MIN, AI_CONTENT_MIN_WORDS, AI_CONTENT_SOME_MIN
from models.analysis import AIContentColor, AIContentDetection, AIContentLabel
from utils.text import count_phrases, normalize_text, split_sentences, tokenize_words

AI_PHRASES = (
    "as an ai", "i cannot", "i'm unable to", "it's important to note",
    "it is important to note", "in conclusion", "to summarize", "let me explain",
    "i'd be happy to", "certainly!", "absolutely!", "great question",
    "that's a great question", "i hope this helps", "feel free to ask",
    "don't hesitate to", "please let me know", "i'm here to help",
    "delve into", "in today's fast-paced world",
)

AI_STRUCTURAL_PATTERNS = (
    re.compile(r"firstly.*secondly.*thirdly", re.I | re.S),
    re.compile(r"on one hand.*on the other hand", re.I | re.S),
    re.compile(r"in this article.*we will", re.I | re.S),
    re.compile(r"let's explore", re.I),
    re.compile(r"let's dive into", re.I),
    re.compile(r"let's take a look", re.I),
    re.compile(r"comprehensive guide", re.I),
    re.compile(r"ultimate guide", re.I),
    re.compile(r"everything you need to know", re.I),
    re.compile(r"step-by-step", re.I),
    re.compile(r"here are \d+ (ways|tips|reasons|things)", re.I),
    re.compile(r"\d+ (ways|tips|reasons|things) to", re.I),
)

FORMAL_MARKERS = (
    "furthermore", "moreover", "subsequently", "consequently", "nevertheless",
    "notwithstanding", "henceforth", "whereby", "thereof", "herein",
    "aforementioned", "pursuant to", "in accordance with", "with respect to",
    "in light of", "it is worth noting", "it should be noted", "it bears mentioning",
)

HEDGING_PHRASES = (
    "it's possible that", "it may be", "it could be", "it might be",
    "generally speaking", "in general", "typically", "usually", "often",
    "sometimes", "in most cases", "in many cases", "depending on", "it depends",
)

PERSONAL_VOICE_MARKERS = ("i", "my", "me", "we", "our", "us", "i'm", "i've")

_NUMBERED_LINE_RE = re.compile(r"^\d+\.\s", re.M)
_BULLET_LINE_RE = re.compile(r"^[•\-\*]\s", re.M)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n+")

AI_PHRASE_WEIGHT = 0.12
STRUCTURAL_WEIGHT = 0.10
FORMAL_WEIGHT = 0.05
HEDGING_WEIGHT = 0.03
NO_PERSONAL_VOICE_WEIGHT = 0.15
UNIFORM_SENTENCES_WEIGHT = 0.10
NUMBERED_LIST_WEIGHT = 0.15
BULLET_LIST_WEIGHT = 0.10
UNIFORM_PARAGRAPHS_WEIGHT = 0.10

PERSONAL_VOICE_MIN_CHARS = 200
SENTENCE_CV_MAX = 0.25


def get_ai_content_label(probability: float) -> AIContentLabel:
    if probability >= AI_CONTENT_HIGH_MIN:
        return AIContentLabel.HIGH_AI
    if probability >= AI_CONTENT_SOME_MIN:
        return AIContentLabel.SOME_AI
    return AIContentLabel.MOSTLY_HUMAN


def get_ai_content_color(probability: float) -> AIContentColor:
    if probability >= AI_CONTENT_HIGH_MIN:
        return AIContentColor.RED
    if probability >= AI_CONTENT_SOME_MIN:
        return AIContentColor.YELLOW
    return AIContentColor.GREEN


def _has_uniform_sentences(text: str) -> bool:
    lengths = [len(tokenize_words(s)) for s in split_sentences(text)]
    lengths = [n for n in lengths if n > 0]
    if len(lengths) < 3:
        return False
    mean = statistics.fmean(lengths)
    return statistics.pstdev(lengths) / mean < SENTENCE_CV_MAX


def _structure_score(raw: str) -> float:
    score = 0.0
    if len(_NUMBERED_LINE_RE.findall(raw)) >= 3:
        score += NUMBERED_LIST_WEIGHT
    if len(_BULLET_LINE_RE.findall(raw)) >= 3:
        score += BULLET_LIST_WEIGHT

    paragraphs = [p for p in _PARAGRAPH_SPLIT_RE.split(raw) if p.strip()]
    if len(paragraphs) >= 3:
        lengths = [len(p) for p in paragraphs]
        mean = statistics.fmean(lengths)
        if statistics.pstdev(lengths) < mean * 0.2:
            score += UNIFORM_PARAGRAPHS_WEIGHT
    return score


def _insufficient() -> AIContentDetection:
    return AIContentDetection(
        probability=0.0,
        label=AIContentLabel.INSUFFICIENT_DATA,
        color=AIContentColor.GRAY,
        indicators=(),
    )


def detect_ai_content(text: str) -> AIContentDetection:
    raw = (text or "").replace("\r\n", "\n").strip()
    flat = normalize_text(raw)
    if len(tokenize_words(flat)) < AI_CONTENT_MIN_WORDS:
        return _insufficient()

    score = 0.0
    indicators: list[str] = []

    phrase_count = count_phrases(flat, AI_PHRASES)
    if phrase_count:
        score += phrase_count * AI_PHRASE_WEIGHT
        indicators.append(f"{phrase_count} AI phrase(s) detected")

    structural_count = sum(1 for p in AI_STRUCTURAL_PATTERNS if p.search(flat))
    if structural_count:
        score += structural_count * STRUCTURAL_WEIGHT
        indicators.append(f"{structural_count} AI structural pattern(s)")

    formal_count = count_phrases(flat, FORMAL_MARKERS)
    if formal_count >= 2:
        score += formal_count * FORMAL_WEIGHT
        indicators.append("Overly formal language")

    hedging_count = count_phrases(flat, HEDGING_PHRASES)
    if hedging_count >= 3:
        score += hedging_count * HEDGING_WEIGHT
        indicators.append("Excessive hedging language")

    if len(flat) > PERSONAL_VOICE_MIN_CHARS and count_phrases(flat, PERSONAL_VOICE_MARKERS) < 2:
        score += NO_PERSONAL_VOICE_WEIGHT
        indicators.append("Lack of personal voice")

    if _has_uniform_sentences(flat):
        score += UNIFORM_SENTENCES_WEIGHT
        indicators.append("Uniform sentence length")

    structure = _structure_score(raw)
    if structure:
        score += structure
        if structure >= NUMBERED_LIST_WEIGHT:
            indicators.append("Uniform structure typical of AI")

    probability = round(max(0.0, min(1.0, score)), 2)
    return AIContentDetection(
        probability=probability,
        label=get_ai_content_label(probability),
        color=get_ai_content_color(probability),
        indicators=tuple(indicators),
    )


def calculate_average_ai_content(detections: list[AIContentDetection]) -> float:
    """Mean probability over detections that had enough text to judge."""
    judged = [d.probability for d in detections if d.label != AIContentLabel.INSUFFICIENT_DATA]
    if not judged:
        return 0.0
    return round(sum(judged) / len(judged), 2)
