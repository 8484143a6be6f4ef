"""
Per-metric evaluation strategies.

LocalHeuristicEvaluator runs the offline analyzers. AIBackedEvaluator asks a
provider, and on any failure hands over to the local evaluator it wraps (or
to the metric's neutral default) as the FallbackManager decides.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from analyzers.ai_detector import detect_ai_content
from analyzers.bias_analyzer import (
    analyze_commercial_bias,
    analyze_emotional_tone,
    analyze_gender_bias,
    analyze_political_bias,
    get_gender_bias_label,
)
from analyzers.credibility_scorer import calculate_credibility, get_credibility_label
from analyzers.sustainability_scorer import calculate_sustainability
from api.base_client import BaseAIClient
from config.metrics_config import MetricConfig, build_ai_prompt
from config.thresholds import GENDER_NEUTRAL_SCORE
from models.analysis import (
    AIContentColor,
    AIContentDetection,
    AIContentLabel,
    CommercialBiasAnalysis,
    CredibilityScore,
    DomainType,
    EmotionalTone,
    GenderBiasAnalysis,
    PoliticalBiasAnalysis,
    PoliticalBiasIndicator,
)
from models.errors import ProviderUnavailableError
from models.metric_types import MetricName, MetricProvenance, Provenance
from models.search_result import SearchResult
from orchestrator.fallback_manager import FallbackAction, FallbackManager
from orchestrator.response_parser import parse_metric_response
from utils.logger import get_logger
from utils.rate_limiter import SlidingWindowRateLimiter

logger = get_logger(__name__)

NEUTRAL_CREDIBILITY_SCORE = 50

# Denied by our own limiter, so no request reached the provider
LOCAL_RATE_LIMIT_CODE = "rate_limited_locally"

LOCAL_METRIC_FUNCTIONS: dict[MetricName, Callable[[SearchResult], Any]] = {
    MetricName.VIBE: lambda r: analyze_emotional_tone(r.text),
    MetricName.GENDER_BIAS: lambda r: analyze_gender_bias(r.text),
    MetricName.POLITICAL_BIAS: lambda r: analyze_political_bias(r.text, r.domain),
    MetricName.COMMERCIAL_BIAS: lambda r: analyze_commercial_bias(r.text, r.url),
    MetricName.AI_DETECTION: lambda r: detect_ai_content(r.text),
    MetricName.SUSTAINABILITY: calculate_sustainability,
    MetricName.CREDIBILITY: calculate_credibility,
}


def neutral_default(metric: MetricName) -> Any:
    """The value a metric takes when it is disabled or failed without fallback."""
    if metric == MetricName.VIBE:
        return EmotionalTone.BALANCED
    if metric == MetricName.GENDER_BIAS:
        return GenderBiasAnalysis(
            score=GENDER_NEUTRAL_SCORE, label=get_gender_bias_label(GENDER_NEUTRAL_SCORE)
        )
    if metric == MetricName.POLITICAL_BIAS:
        return PoliticalBiasAnalysis(indicator=PoliticalBiasIndicator.UNKNOWN, confidence=0)
    if metric == MetricName.COMMERCIAL_BIAS:
        return CommercialBiasAnalysis(is_promotional=False, score=0)
    if metric == MetricName.AI_DETECTION:
        return AIContentDetection(
            probability=0.0,
            label=AIContentLabel.INSUFFICIENT_DATA,
            color=AIContentColor.GRAY,
        )
    if metric == MetricName.SUSTAINABILITY:
        return None
    if metric == MetricName.CREDIBILITY:
        return CredibilityScore(
            score=NEUTRAL_CREDIBILITY_SCORE,
            label=get_credibility_label(NEUTRAL_CREDIBILITY_SCORE),
            domain_type=DomainType.UNKNOWN,
            is_women_focused=False,
        )
    raise ValueError(f"Unknown metric: {metric}")


@dataclass(frozen=True)
class MetricOutcome:
    value: Any
    provenance: MetricProvenance
    ai_request_made: bool = False


class MetricEvaluator(ABC):
    """Computes one metric for one search result."""

    def __init__(self, metric: MetricName):
        self.metric = metric

    @abstractmethod
    async def evaluate(self, result: SearchResult) -> MetricOutcome:
        pass


class LocalHeuristicEvaluator(MetricEvaluator):
    def compute(self, result: SearchResult) -> Any:
        return LOCAL_METRIC_FUNCTIONS[self.metric](result)

    async def evaluate(self, result: SearchResult) -> MetricOutcome:
        # Pure CPU work, never awaits
        return MetricOutcome(
            value=self.compute(result),
            provenance=MetricProvenance(source=Provenance.LOCAL),
        )


class AIBackedEvaluator(MetricEvaluator):
    """
    Calls the metric's provider with its prompt template.

    ``client`` is None when no API key is configured; every call then fails
    fast with ProviderUnavailableError and goes down the fallback path.
    """

    def __init__(
        self,
        metric: MetricName,
        metric_config: MetricConfig,
        client: BaseAIClient | None,
        local: LocalHeuristicEvaluator,
        limiter: SlidingWindowRateLimiter,
        semaphore: asyncio.Semaphore,
        fallback_manager: FallbackManager | None = None,
    ):
        super().__init__(metric)
        self.metric_config = metric_config
        self.client = client
        self.local = local
        self.limiter = limiter
        self.semaphore = semaphore
        self.fallback_manager = fallback_manager or FallbackManager()

    async def _call_provider(self, result: SearchResult) -> Any:
        if self.client is None:
            raise ProviderUnavailableError("no API key configured", code="auth")
        if not self.limiter.try_acquire():
            raise ProviderUnavailableError("rate limit reached", code=LOCAL_RATE_LIMIT_CODE)

        prompt = build_ai_prompt(self.metric_config, result.text, result.domain)
        loop = asyncio.get_running_loop()
        # wait_for cancels the wait, not the executor thread; a timed-out call
        # leaves the semaphore while its thread may still be running, so slow
        # providers can briefly exceed max_concurrent_requests.
        async with self.semaphore:
            response = await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    lambda: self.client.get_completion(
                        prompt,
                        model=self.metric_config.ai_model,
                        max_tokens=self.metric_config.max_tokens,
                        temperature=0.0,
                    ),
                ),
                timeout=self.metric_config.timeout_s,
            )

        if response.is_error:
            raise ProviderUnavailableError(response.error.message, code=response.error.code)
        return parse_metric_response(self.metric, response.text, result)

    async def evaluate(self, result: SearchResult) -> MetricOutcome:
        attempted = self.client is not None
        try:
            value = await self._call_provider(result)
            return MetricOutcome(
                value=value,
                provenance=MetricProvenance(source=Provenance.AI),
                ai_request_made=True,
            )
        except Exception as e:
            decision = self.fallback_manager.decide(
                fallback_to_local=self.metric_config.fallback_to_local, error=e
            )
            logger.debug(
                "AI metric fell back",
                extra={
                    "extra_fields": {
                        "metric": self.metric.value,
                        "reason": decision.reason,
                        "action": decision.action.value,
                        "error_type": type(e).__name__,
                    }
                },
            )
            if decision.action == FallbackAction.LOCAL:
                value = self.local.compute(result)
            else:
                value = neutral_default(self.metric)
            return MetricOutcome(
                value=value,
                provenance=MetricProvenance(source=decision.provenance, error=decision.reason),
                ai_request_made=attempted and decision.reason != LOCAL_RATE_LIMIT_CODE,
            )
