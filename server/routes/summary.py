"""Summary endpoint: women-first synthesis of the top-ranked results."""

from fastapi import APIRouter, Depends, Request

from orchestrator.summary_generator import SummaryGenerator
from server.dependencies import get_summary_generator
from server.schemas.requests import SummaryRequest
from server.schemas.responses import SummaryResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Summary"])


@router.post("/summary", response_model=SummaryResponseDTO)
async def summarize(
    request: Request,
    body: SummaryRequest,
    generator: SummaryGenerator = Depends(get_summary_generator),
):
    """Summarize results in the given order. Provider failures yield a fallback message."""
    request_id = getattr(request.state, "request_id", "unknown")
    results = [r.to_search_result() for r in body.results]

    summary = await generator.generate(body.query, results)

    logger.info(
        "Summary request served",
        extra={"extra_fields": {"request_id": request_id, "sources": len(summary.sources)}},
    )
    return SummaryResponseDTO.from_summary(summary)
