from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Perspective(str, Enum):
    WOMEN_FIRST = "women-first"
    BALANCED = "balanced"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SummaryResponse:
    summary: str
    sources: tuple[str, ...] = ()
    perspective: Perspective = Perspective.BALANCED
    generated_at: str = field(default_factory=_utc_now_iso)

    def __post_init__(self):
        object.__setattr__(self, "sources", tuple(self.sources))

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "sources": list(self.sources),
            "perspective": self.perspective.value,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class SummaryValidation:
    is_valid: bool
    paragraph_count: int
    has_source_references: bool
    reason: str = ""
