"""
Parser for ordinal ``[n]`` citation markers in generated summaries.

Citations are 1-based indices into the result list the summary was built
from. Anything outside ``1..max_index`` is invalid and gets removed.
"""

import re
from dataclasses import dataclass

CITATION_RE = re.compile(r"\[(\d+)\]")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"[ \t]+([.,;:!?])")
_MULTI_SPACE_RE = re.compile(r"[ \t]{2,}")


@dataclass(frozen=True)
class Citation:
    index: int
    start: int
    end: int


def find_citations(text: str) -> list[Citation]:
    return [
        Citation(index=int(m.group(1)), start=m.start(), end=m.end())
        for m in CITATION_RE.finditer(text or "")
    ]


def is_valid_index(index: int, max_index: int) -> bool:
    return 1 <= index <= max_index


def strip_invalid_citations(text: str, max_index: int) -> str:
    """Remove every marker whose index is out of range, tidying the spacing it leaves."""
    if not text:
        return ""

    pieces = []
    cursor = 0
    for citation in find_citations(text):
        if is_valid_index(citation.index, max_index):
            continue
        pieces.append(text[cursor : citation.start])
        cursor = citation.end
    if not pieces:
        return text
    pieces.append(text[cursor:])

    cleaned = "".join(pieces)
    cleaned = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", cleaned)
    cleaned = _MULTI_SPACE_RE.sub(" ", cleaned)
    return "\n".join(line.rstrip() for line in cleaned.split("\n"))


def cited_indices(text: str, max_index: int) -> list[int]:
    """Valid indices in order of first appearance, without duplicates."""
    seen: list[int] = []
    for citation in find_citations(text):
        if is_valid_index(citation.index, max_index) and citation.index not in seen:
            seen.append(citation.index)
    return seen
