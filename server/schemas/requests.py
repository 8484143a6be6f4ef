"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, Field, model_validator

from models.search_result import SearchResult

MAX_RESULTS_PER_REQUEST = 50


class SearchResultRequest(BaseModel):
    title: str = ""
    description: str = ""
    url: str = Field(..., min_length=1)
    domain: str | None = None

    @model_validator(mode="after")
    def validate_has_text(self):
        if not self.title.strip() and not self.description.strip():
            raise ValueError("title or description is required")
        return self

    def to_search_result(self) -> SearchResult:
        return SearchResult(
            title=self.title,
            description=self.description,
            url=self.url,
            domain=self.domain or "",
        )


class AnalyzeRequest(BaseModel):
    query: str = Field(..., min_length=1)
    results: list[SearchResultRequest] = Field(
        default_factory=list, max_length=MAX_RESULTS_PER_REQUEST
    )
    include_insights: bool = True


class SummaryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    results: list[SearchResultRequest] = Field(
        default_factory=list, max_length=MAX_RESULTS_PER_REQUEST
    )
