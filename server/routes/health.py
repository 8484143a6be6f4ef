"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from orchestrator.metrics_analyzer import MetricsAnalyzer
from server.dependencies import get_config, get_metrics_analyzer
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(analyzer: MetricsAnalyzer = Depends(get_metrics_analyzer)):
    """Health check endpoint. Missing provider keys are reported, not treated as failures."""
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=API_VERSION,
        metrics=analyzer.get_status(),
        config_warnings=get_config().validate(),
    )
