"""FastAPI dependencies for the analyzer and summary generator."""

from config.config import Config
from config.metrics_config import DEFAULT_METRICS_CONFIG
from orchestrator.metrics_analyzer import MetricsAnalyzer
from orchestrator.summary_generator import SummaryGenerator
from utils.logger import get_logger

logger = get_logger(__name__)


def get_config() -> Config:
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance


def get_metrics_analyzer() -> MetricsAnalyzer:
    """Dependency to get the metrics analyzer (singleton, so the cache is shared)."""
    if not hasattr(get_metrics_analyzer, "_instance"):
        config = get_config()
        metrics_config = DEFAULT_METRICS_CONFIG.with_global(
            ai_enabled=config.METRICS_AI_ENABLED,
            default_provider=config.DEFAULT_PROVIDER,
            default_model=config.default_model_for(config.DEFAULT_PROVIDER),
        )
        get_metrics_analyzer._instance = MetricsAnalyzer(metrics_config)
    return get_metrics_analyzer._instance


def get_summary_generator() -> SummaryGenerator:
    """Dependency to get the summary generator (singleton)."""
    if not hasattr(get_summary_generator, "_instance"):
        config = get_config()
        if config.SUMMARY_ENABLED:
            generator = SummaryGenerator.from_env(
                provider=config.DEFAULT_PROVIDER,
                model_name=config.default_model_for(config.DEFAULT_PROVIDER),
            )
        else:
            logger.info("Summaries disabled by SUMMARY_ENABLED")
            generator = SummaryGenerator(None)
        get_summary_generator._instance = generator
    return get_summary_generator._instance
