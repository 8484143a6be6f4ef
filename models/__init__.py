"""
Domain records for search results, analysis output and provider calls.
"""

from .annotated_result import AnalysisMeta, AnnotatedResult
from .metric_types import MetricMode, MetricName, MetricProvenance, Provenance
from .provider_response import NormalizedError, ProviderResponse, TokenUsage
from .search_result import SearchResult
from .summary import Perspective, SummaryResponse, SummaryValidation

__all__ = [
    "AnalysisMeta",
    "AnnotatedResult",
    "MetricMode",
    "MetricName",
    "MetricProvenance",
    "NormalizedError",
    "Perspective",
    "Provenance",
    "ProviderResponse",
    "SearchResult",
    "SummaryResponse",
    "SummaryValidation",
    "TokenUsage",
]
