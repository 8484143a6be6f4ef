from dataclasses import dataclass

from utils.domains import extract_domain


@dataclass(frozen=True)
class SearchResult:
    """A raw result handed over by the search provider."""

    title: str
    description: str
    url: str
    domain: str = ""

    def __post_init__(self):
        object.__setattr__(self, "title", self.title or "")
        object.__setattr__(self, "description", self.description or "")
        object.__setattr__(self, "url", self.url or "")
        if not self.domain:
            object.__setattr__(self, "domain", extract_domain(self.url))
        else:
            object.__setattr__(self, "domain", self.domain.strip().lower().removeprefix("www."))

    @property
    def text(self) -> str:
        return f"{self.title} {self.description}".strip()

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "domain": self.domain,
        }
