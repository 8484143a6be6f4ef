"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str
    metrics: dict[str, Any] = Field(default_factory=dict)
    config_warnings: list[str] = Field(default_factory=list)


class AnalyzeResponseDTO(BaseModel):
    query: str
    results: list[dict[str, Any]]
    insights: dict[str, Any] | None = None
    result_count: int
    ai_requests_made: int = 0
    cache_hits: int = 0

    @classmethod
    def from_annotated(cls, query: str, annotated, insights=None):
        """Convert AnnotatedResult records (and optional SearchInsights) to a DTO."""
        return cls(
            query=query,
            results=[a.to_dict() for a in annotated],
            insights=insights.to_dict() if insights is not None else None,
            result_count=len(annotated),
            ai_requests_made=sum(a.meta.ai_requests_made for a in annotated),
            cache_hits=sum(a.meta.cache_hits for a in annotated),
        )


class SummaryResponseDTO(BaseModel):
    summary: str
    sources: list[str] = Field(default_factory=list)
    perspective: str
    generated_at: str

    @classmethod
    def from_summary(cls, summary):
        return cls(**summary.to_dict())
