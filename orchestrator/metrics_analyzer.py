"""
Metrics orchestration: runs every configured metric over a batch of search
results and bundles the outputs into AnnotatedResult records.

Results fan out concurrently with ``asyncio.gather``; output order always
matches input order. A failing metric on one result never affects another
metric or another result.
"""

import asyncio
import time
from collections.abc import Callable

from analyzers.safety_analyzer import analyze_safety
from api.base_client import BaseAIClient
from api.factory import create_client, resolve_api_key
from config.metrics_config import DEFAULT_METRICS_CONFIG, MetricConfig, MetricsConfiguration
from models.analysis import BiasAnalysis
from models.annotated_result import AnalysisMeta, AnnotatedResult
from models.metric_types import MetricMode, MetricName, MetricProvenance, Provenance
from models.search_result import SearchResult
from orchestrator.evaluators import (
    AIBackedEvaluator,
    LocalHeuristicEvaluator,
    MetricEvaluator,
    MetricOutcome,
    neutral_default,
)
from orchestrator.fallback_manager import FallbackManager
from utils.cache import MetricCache
from utils.logger import get_logger
from utils.rate_limiter import RateLimiterRegistry
from utils.sync import run_sync

logger = get_logger(__name__)

ClientFactory = Callable[[str, MetricConfig], BaseAIClient | None]

_CACHEABLE_SOURCES = frozenset({Provenance.LOCAL, Provenance.AI})


def default_client_factory(provider: str, metric_config: MetricConfig) -> BaseAIClient | None:
    env_var = metric_config.api_key_env_var
    api_key = resolve_api_key(env_var) if env_var else None
    return create_client(provider, api_key, metric_config.ai_model)


class MetricsAnalyzer:
    def __init__(
        self,
        config: MetricsConfiguration = DEFAULT_METRICS_CONFIG,
        client_factory: ClientFactory = default_client_factory,
        cache: MetricCache | None = None,
        rate_limiters: RateLimiterRegistry | None = None,
        fallback_manager: FallbackManager | None = None,
    ):
        self.config = config
        self.client_factory = client_factory
        self.cache = cache if cache is not None else MetricCache()
        self.rate_limiters = rate_limiters or RateLimiterRegistry(
            config.global_settings.rate_limit_per_minute
        )
        self.fallback_manager = fallback_manager or FallbackManager()

    # ------------------------------------------------------------------
    # Evaluator wiring
    # ------------------------------------------------------------------

    def _build_evaluators(self, config: MetricsConfiguration) -> dict[MetricName, MetricEvaluator]:
        """One evaluator per enabled metric for this run."""
        evaluators: dict[MetricName, MetricEvaluator] = {}
        clients: dict[tuple[str, str, str], BaseAIClient | None] = {}
        semaphores: dict[str, asyncio.Semaphore] = {}
        missing_keys: set[str] = set()

        for metric in config.enabled_metrics():
            local = LocalHeuristicEvaluator(metric)
            if not config.should_use_ai(metric):
                evaluators[metric] = local
                continue

            metric_config = config.resolve(metric)
            provider = metric_config.ai_provider
            client_key = (provider, metric_config.ai_model, metric_config.api_key_env_var)
            if client_key not in clients:
                clients[client_key] = self.client_factory(provider, metric_config)
            client = clients[client_key]

            if client is None:
                missing_keys.add(metric_config.api_key_env_var or provider)

            if provider not in semaphores:
                semaphores[provider] = asyncio.Semaphore(
                    max(1, config.global_settings.max_concurrent_requests)
                )

            evaluators[metric] = AIBackedEvaluator(
                metric=metric,
                metric_config=metric_config,
                client=client,
                local=local,
                limiter=self.rate_limiters.for_provider(provider),
                semaphore=semaphores[provider],
                fallback_manager=self.fallback_manager,
            )

        # Missing keys are a run-level condition, reported once
        for env_var in sorted(missing_keys):
            logger.warning(
                "AI mode requested but provider unavailable; using fallbacks for this run",
                extra={"extra_fields": {"api_key_env_var": env_var}},
            )
        return evaluators

    # ------------------------------------------------------------------
    # Per-metric and per-result evaluation
    # ------------------------------------------------------------------

    async def _evaluate_metric(
        self,
        metric: MetricName,
        evaluator: MetricEvaluator | None,
        result: SearchResult,
        config: MetricsConfiguration,
    ) -> MetricOutcome:
        if evaluator is None:
            return MetricOutcome(
                value=neutral_default(metric),
                provenance=MetricProvenance(source=Provenance.DISABLED),
            )

        metric_config = config.get(metric)
        mode = MetricMode.AI if isinstance(evaluator, AIBackedEvaluator) else MetricMode.LOCAL
        key = MetricCache.make_key(result, metric, mode)

        if metric_config.cache_results:
            hit, cached = self.cache.get(key)
            if hit:
                value, source = cached
                return MetricOutcome(
                    value=value, provenance=MetricProvenance(source=source, cache_hit=True)
                )

        try:
            outcome = await evaluator.evaluate(result)
        except Exception as e:
            # Local heuristics do not raise on bad input; this is a programming error
            logger.error(
                "Metric evaluation crashed",
                exc_info=True,
                extra={"extra_fields": {"metric": metric.value, "url": result.url}},
            )
            return MetricOutcome(
                value=neutral_default(metric),
                provenance=MetricProvenance(
                    source=Provenance.NEUTRAL_DEFAULT, error=type(e).__name__
                ),
            )

        if metric_config.cache_results and outcome.provenance.source in _CACHEABLE_SOURCES:
            self.cache.set(key, (outcome.value, outcome.provenance.source), metric_config.cache_ttl)
        return outcome

    async def _analyze_one(
        self,
        result: SearchResult,
        evaluators: dict[MetricName, MetricEvaluator],
        config: MetricsConfiguration,
    ) -> AnnotatedResult:
        start = time.perf_counter()
        metrics = list(MetricName)
        outcomes = await asyncio.gather(
            *(self._evaluate_metric(m, evaluators.get(m), result, config) for m in metrics)
        )
        by_metric = dict(zip(metrics, outcomes))

        credibility = by_metric[MetricName.CREDIBILITY].value
        bias = BiasAnalysis(
            gender=by_metric[MetricName.GENDER_BIAS].value,
            political=by_metric[MetricName.POLITICAL_BIAS].value,
            commercial=by_metric[MetricName.COMMERCIAL_BIAS].value,
            emotional_tone=by_metric[MetricName.VIBE].value,
        )

        errors = tuple(
            f"{m.value}: {o.provenance.error}" for m, o in by_metric.items() if o.provenance.error
        )
        meta = AnalysisMeta(
            total_time_ms=int((time.perf_counter() - start) * 1000),
            ai_requests_made=sum(1 for o in outcomes if o.ai_request_made),
            cache_hits=sum(1 for o in outcomes if o.provenance.cache_hit),
            errors=errors,
        )

        return AnnotatedResult(
            result=result,
            credibility=credibility,
            bias=bias,
            ai_content=by_metric[MetricName.AI_DETECTION].value,
            safety_flags=tuple(analyze_safety(result, credibility)),
            sustainability=by_metric[MetricName.SUSTAINABILITY].value,
            provenance={m: o.provenance for m, o in by_metric.items()},
            meta=meta,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def analyze(
        self,
        results: list[SearchResult],
        query: str,
        config: MetricsConfiguration | None = None,
    ) -> list[AnnotatedResult]:
        """
        Annotate ``results`` with every metric.

        Args:
            results: Search results in the caller's ranking order
            query: The user's query, used for logging only
            config: Per-call override of the analyzer's configuration

        Returns:
            One AnnotatedResult per input, in input order
        """
        if not results:
            return []

        config = config or self.config
        start = time.perf_counter()
        evaluators = self._build_evaluators(config)

        annotated = await asyncio.gather(
            *(self._analyze_one(r, evaluators, config) for r in results)
        )

        logger.info(
            "Search results analyzed",
            extra={
                "extra_fields": {
                    "query_length": len(query or ""),
                    "result_count": len(results),
                    "ai_requests": sum(a.meta.ai_requests_made for a in annotated),
                    "cache_hits": sum(a.meta.cache_hits for a in annotated),
                    "degraded_metrics": sum(len(a.meta.errors) for a in annotated),
                    "elapsed_ms": int((time.perf_counter() - start) * 1000),
                }
            },
        )
        return list(annotated)

    def analyze_sync(
        self,
        results: list[SearchResult],
        query: str,
        config: MetricsConfiguration | None = None,
    ) -> list[AnnotatedResult]:
        return run_sync(self.analyze(results, query, config))

    def get_status(self, config: MetricsConfiguration | None = None) -> dict:
        config = config or self.config
        enabled = config.enabled_metrics()
        ai_metrics = [m for m in enabled if config.should_use_ai(m)]

        if ai_metrics and len(ai_metrics) == len(enabled):
            mode = "all-ai"
        elif ai_metrics:
            mode = "mixed"
        else:
            mode = "all-local"

        g = config.global_settings
        return {
            "mode": mode,
            "enabled_metrics": [m.value for m in enabled],
            "ai_metrics": [m.value for m in ai_metrics],
            "cache_size": len(self.cache),
            "global": {
                "default_provider": g.default_provider,
                "ai_enabled": g.ai_enabled,
                "max_concurrent_requests": g.max_concurrent_requests,
                "rate_limit_per_minute": g.rate_limit_per_minute,
            },
        }

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Metrics cache cleared")
