"""Analyze endpoint: annotate a batch of search results with every metric."""

from fastapi import APIRouter, Depends, Request

from orchestrator.insights import compute_insights
from orchestrator.metrics_analyzer import MetricsAnalyzer
from server.dependencies import get_metrics_analyzer
from server.schemas.requests import AnalyzeRequest
from server.schemas.responses import AnalyzeResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Analyze"])


@router.post("/analyze", response_model=AnalyzeResponseDTO)
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    analyzer: MetricsAnalyzer = Depends(get_metrics_analyzer),
):
    request_id = getattr(request.state, "request_id", "unknown")
    results = [r.to_search_result() for r in body.results]

    annotated = await analyzer.analyze(results, body.query)
    insights = compute_insights(annotated) if body.include_insights else None

    logger.info(
        "Analyze request served",
        extra={"extra_fields": {"request_id": request_id, "result_count": len(annotated)}},
    )
    return AnalyzeResponseDTO.from_annotated(body.query, annotated, insights)


@router.post("/analyze/cache/clear", status_code=204)
async def clear_cache(analyzer: MetricsAnalyzer = Depends(get_metrics_analyzer)):
    analyzer.clear_cache()
