import time

import pytest

from analyzers.credibility_scorer import calculate_credibility
from config.metrics_config import DEFAULT_METRICS_CONFIG
from models.analysis import (
    AIContentLabel,
    CredibilityLabel,
    EmotionalTone,
    GenderBiasLabel,
    PoliticalBiasIndicator,
    SafetyCategory,
)
from models.metric_types import MetricMode, MetricName, Provenance
from models.search_result import SearchResult
from orchestrator.metrics_analyzer import MetricsAnalyzer, default_client_factory
from tests.fakes import FakeClient
from utils.rate_limiter import RateLimiterRegistry

pytestmark = pytest.mark.unit


def _ai_config(metric=MetricName.GENDER_BIAS, **metric_changes):
    return DEFAULT_METRICS_CONFIG.with_global(ai_enabled=True).with_metric(
        metric, mode=MetricMode.AI, **metric_changes
    )


def _factory(client):
    return lambda provider, metric_config: client


def _values(annotated):
    return [
        (a.credibility, a.bias, a.ai_content, a.safety_flags, a.sustainability) for a in annotated
    ]


class SlowClient(FakeClient):
    def get_completion(self, prompt, **kwargs):
        time.sleep(0.2)
        return super().get_completion(prompt, **kwargs)


def test_empty_input_returns_empty_list():
    assert MetricsAnalyzer().analyze_sync([], "query") == []


def test_all_local_preserves_order(sample_results):
    annotated = MetricsAnalyzer().analyze_sync(sample_results, "women's health")

    assert [a.result for a in annotated] == sample_results
    for a in annotated:
        assert set(a.provenance) == set(MetricName)
        assert all(p.source == Provenance.LOCAL for p in a.provenance.values())
        assert a.meta.ai_requests_made == 0


def test_all_local_matches_analyzers(sample_results):
    annotated = MetricsAnalyzer().analyze_sync(sample_results, "q")
    assert [a.credibility for a in annotated] == [calculate_credibility(r) for r in sample_results]


def test_ai_metric_uses_provider(sample_results):
    client = FakeClient(default='{"score": 90}')
    analyzer = MetricsAnalyzer(_ai_config(), client_factory=_factory(client))

    annotated = analyzer.analyze_sync(sample_results, "q")

    for a in annotated:
        assert a.bias.gender.score == 90
        assert a.bias.gender.label == GenderBiasLabel.WOMEN_POSITIVE
        assert a.provenance[MetricName.GENDER_BIAS].source == Provenance.AI
        assert a.provenance[MetricName.VIBE].source == Provenance.LOCAL
        assert a.meta.ai_requests_made == 1
    assert len(client.calls) == len(sample_results)
    assert client.calls[0]["max_tokens"] == DEFAULT_METRICS_CONFIG.get(
        MetricName.GENDER_BIAS
    ).max_tokens


def test_missing_key_matches_all_local(sample_results):
    local = MetricsAnalyzer().analyze_sync(sample_results, "q")
    no_key = MetricsAnalyzer(_ai_config(), client_factory=lambda p, c: None).analyze_sync(
        sample_results, "q"
    )

    assert _values(no_key) == _values(local)
    for a in no_key:
        provenance = a.provenance[MetricName.GENDER_BIAS]
        assert provenance.source == Provenance.LOCAL_FALLBACK
        assert provenance.error == "auth"
        assert a.meta.ai_requests_made == 0


def test_malformed_reply_falls_back_to_local(sample_results):
    client = FakeClient(default="I think the score is pretty high")
    annotated = MetricsAnalyzer(_ai_config(), client_factory=_factory(client)).analyze_sync(
        sample_results, "q"
    )
    local = MetricsAnalyzer().analyze_sync(sample_results, "q")

    assert _values(annotated) == _values(local)
    assert annotated[0].provenance[MetricName.GENDER_BIAS].error == "malformed_response"
    assert annotated[0].meta.errors == ("gender_bias: malformed_response",)


def test_provider_error_response_falls_back(sample_results):
    client = FakeClient(error_code="rate_limit")
    annotated = MetricsAnalyzer(_ai_config(), client_factory=_factory(client)).analyze_sync(
        sample_results, "q"
    )
    provenance = annotated[0].provenance[MetricName.GENDER_BIAS]
    assert provenance.source == Provenance.LOCAL_FALLBACK
    assert provenance.error == "rate_limit"


def test_timeout_falls_back(make_result):
    client = SlowClient(default='{"score": 90}')
    config = _ai_config(timeout_s=0.01)
    annotated = MetricsAnalyzer(config, client_factory=_factory(client)).analyze_sync(
        [make_result(title="Quarterly earnings")], "q"
    )
    assert annotated[0].bias.gender.score == 50
    assert annotated[0].provenance[MetricName.GENDER_BIAS].error == "timeout"


def test_failure_without_local_fallback_is_neutral(sample_results):
    client = FakeClient(error_code="provider_error")
    config = _ai_config(metric=MetricName.POLITICAL_BIAS, fallback_to_local=False)
    annotated = MetricsAnalyzer(config, client_factory=_factory(client)).analyze_sync(
        sample_results, "q"
    )

    for a in annotated:
        assert a.bias.political.indicator == PoliticalBiasIndicator.UNKNOWN
        assert a.provenance[MetricName.POLITICAL_BIAS].source == Provenance.NEUTRAL_DEFAULT


def test_ai_mode_ignored_when_globally_disabled(sample_results):
    config = DEFAULT_METRICS_CONFIG.with_metric(MetricName.GENDER_BIAS, mode=MetricMode.AI)
    client = FakeClient(default='{"score": 90}')
    annotated = MetricsAnalyzer(config, client_factory=_factory(client)).analyze_sync(
        sample_results, "q"
    )
    assert client.calls == []
    assert annotated[0].provenance[MetricName.GENDER_BIAS].source == Provenance.LOCAL


def test_disabled_metrics_get_neutral_values(sample_results):
    config = DEFAULT_METRICS_CONFIG.with_metric(MetricName.VIBE, enabled=False).with_metric(
        MetricName.AI_DETECTION, enabled=False
    )
    annotated = MetricsAnalyzer(config).analyze_sync(sample_results, "q")

    for a in annotated:
        assert a.bias.emotional_tone == EmotionalTone.BALANCED
        assert a.ai_content.label == AIContentLabel.INSUFFICIENT_DATA
        assert a.provenance[MetricName.VIBE].source == Provenance.DISABLED
        assert a.provenance[MetricName.AI_DETECTION].source == Provenance.DISABLED


def test_second_run_is_served_from_cache(sample_results):
    analyzer = MetricsAnalyzer()
    first = analyzer.analyze_sync(sample_results, "q")
    second = analyzer.analyze_sync(sample_results, "q")

    assert _values(first) == _values(second)
    assert all(a.meta.cache_hits == 0 for a in first)
    assert all(a.meta.cache_hits == len(MetricName) for a in second)
    assert all(p.cache_hit for p in second[0].provenance.values())


def test_fallback_values_are_not_cached(sample_results):
    analyzer = MetricsAnalyzer(_ai_config(), client_factory=lambda p, c: None)
    analyzer.analyze_sync(sample_results, "q")
    second = analyzer.analyze_sync(sample_results, "q")

    provenance = second[0].provenance[MetricName.GENDER_BIAS]
    assert provenance.cache_hit is False
    assert provenance.source == Provenance.LOCAL_FALLBACK


def test_rate_limit_degrades_to_local(sample_results):
    client = FakeClient(default='{"score": 90}')
    analyzer = MetricsAnalyzer(
        _ai_config(),
        client_factory=_factory(client),
        rate_limiters=RateLimiterRegistry(1),
    )
    annotated = analyzer.analyze_sync(sample_results, "q")

    sources = [a.provenance[MetricName.GENDER_BIAS].source for a in annotated]
    assert sources.count(Provenance.AI) == 1
    assert sources.count(Provenance.LOCAL_FALLBACK) == len(sample_results) - 1
    assert len(client.calls) == 1


def test_safety_uses_final_credibility(make_result):
    client = FakeClient(default='{"score": 95}')
    analyzer = MetricsAnalyzer(
        _ai_config(metric=MetricName.CREDIBILITY), client_factory=_factory(client)
    )
    annotated = analyzer.analyze_sync([make_result(title="Local news")], "q")

    assert annotated[0].credibility.label == CredibilityLabel.HIGHLY_TRUSTED
    categories = [f.category for f in annotated[0].safety_flags]
    assert SafetyCategory.VERIFIED_CONTENT in categories


CORPUS = [
    SearchResult("", "", ""),
    SearchResult("!!!???", "", "not a url"),
    SearchResult("SHOCKING BOMBSHELL", "You won't believe it!!!", "https://clickbait-99999.xyz"),
    SearchResult("Women-owned solar co-op", "Sustainable, fair trade", "https://grist.org"),
    SearchResult("Buy now", "50% off " * 50, "https://shop.example.com/?utm_source=x"),
    SearchResult("Policy", "Progressive equity vs limited government", "https://c-span.org"),
]


@pytest.mark.parametrize("result", CORPUS)
def test_outputs_are_deterministic_and_in_range(result):
    first = MetricsAnalyzer().analyze_sync([result], "q")[0]
    second = MetricsAnalyzer().analyze_sync([result], "q")[0]
    assert _values([first]) == _values([second])

    assert 0 <= first.credibility.score <= 100
    assert 0 <= first.bias.gender.score <= 100
    assert 0 <= first.bias.political.confidence <= 100
    assert 0 <= first.bias.commercial.score <= 100
    assert 0.0 <= first.ai_content.probability <= 1.0
    if first.sustainability is not None:
        assert 0 <= first.sustainability.score <= 100
    assert isinstance(first.bias.emotional_tone, EmotionalTone)


def test_status_reports_mode():
    assert MetricsAnalyzer().get_status()["mode"] == "all-local"

    status = MetricsAnalyzer(_ai_config()).get_status()
    assert status["mode"] == "mixed"
    assert status["ai_metrics"] == ["gender_bias"]

    config = DEFAULT_METRICS_CONFIG.with_global(ai_enabled=True)
    for metric in MetricName:
        config = config.with_metric(metric, mode=MetricMode.AI)
    assert MetricsAnalyzer(config).get_status()["mode"] == "all-ai"


def test_clear_cache(sample_results):
    analyzer = MetricsAnalyzer()
    analyzer.analyze_sync(sample_results, "q")
    assert analyzer.get_status()["cache_size"] > 0

    analyzer.clear_cache()
    assert analyzer.get_status()["cache_size"] == 0


def _recording_factory(client):
    calls = []

    def factory(provider, metric_config):
        calls.append((provider, metric_config.ai_model, metric_config.api_key_env_var))
        return client

    return factory, calls


def test_global_default_provider_reaches_ai_metrics(make_result):
    client = FakeClient(default='{"score": 90}')
    factory, calls = _recording_factory(client)
    config = DEFAULT_METRICS_CONFIG.with_global(
        ai_enabled=True, default_provider="openai"
    ).with_metric(MetricName.GENDER_BIAS, mode=MetricMode.AI)

    MetricsAnalyzer(config, client_factory=factory).analyze_sync([make_result(title="x")], "q")

    assert calls == [("openai", "gpt-4o-mini", "OPENAI_API_KEY")]
    assert client.calls[0]["model"] == "gpt-4o-mini"


def test_metric_provider_override_picks_its_own_key_and_model(make_result):
    factory, calls = _recording_factory(FakeClient(default='{"score": 90}'))
    config = _ai_config(ai_provider="openai")

    MetricsAnalyzer(config, client_factory=factory).analyze_sync([make_result(title="x")], "q")

    assert calls == [("openai", "gpt-4o-mini", "OPENAI_API_KEY")]


def test_global_default_model_applies_to_default_provider_only():
    config = DEFAULT_METRICS_CONFIG.with_global(
        default_provider="gemini", default_model="gemini-2.0-flash"
    )
    assert config.resolve(MetricName.VIBE).ai_model == "gemini-2.0-flash"

    openai_metric = config.with_metric(MetricName.VIBE, ai_provider="openai")
    assert openai_metric.resolve(MetricName.VIBE).ai_model == "gpt-4o-mini"

    pinned = config.with_metric(MetricName.VIBE, ai_model="gemini-pinned")
    assert pinned.resolve(MetricName.VIBE).ai_model == "gemini-pinned"


def test_default_factory_builds_openai_client_from_openai_key(no_provider_keys, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config = _ai_config(ai_provider="openai")

    client = default_client_factory("openai", config.resolve(MetricName.GENDER_BIAS))

    assert client is not None
    assert client.provider == "openai"
    assert client.model_name == "gpt-4o-mini"


def test_default_factory_without_key_returns_none(no_provider_keys):
    config = _ai_config()
    assert default_client_factory("gemini", config.resolve(MetricName.GENDER_BIAS)) is None


def test_provider_rate_limit_reply_counts_as_request(sample_results):
    client = FakeClient(error_code="rate_limit")
    annotated = MetricsAnalyzer(_ai_config(), client_factory=_factory(client)).analyze_sync(
        sample_results, "q"
    )
    assert [a.meta.ai_requests_made for a in annotated] == [1] * len(sample_results)


def test_local_limiter_denial_is_not_a_request(sample_results):
    analyzer = MetricsAnalyzer(
        _ai_config(),
        client_factory=_factory(FakeClient(default='{"score": 90}')),
        rate_limiters=RateLimiterRegistry(1),
    )
    annotated = analyzer.analyze_sync(sample_results, "q")

    assert sum(a.meta.ai_requests_made for a in annotated) == 1
    errors = [a.provenance[MetricName.GENDER_BIAS].error for a in annotated]
    assert errors.count("rate_limited_locally") == len(sample_results) - 1


@pytest.mark.parametrize("metric", list(MetricName))
def test_disabling_cache_does_not_change_output(sample_results, metric):
    cached = MetricsAnalyzer()
    uncached = MetricsAnalyzer(DEFAULT_METRICS_CONFIG.with_metric(metric, cache_results=False))

    for _ in range(2):
        assert _values(cached.analyze_sync(sample_results, "q")) == _values(
            uncached.analyze_sync(sample_results, "q")
        )


def test_one_result_failure_does_not_affect_others(make_result):
    client = FakeClient(replies={"Alpha": '{"score": 90}'}, default="garbage")
    results = [
        make_result(title="Alpha women's health guide"),
        make_result(title="Beta quarterly report"),
    ]

    annotated = MetricsAnalyzer(_ai_config(), client_factory=_factory(client)).analyze_sync(
        results, "q"
    )

    assert [a.result for a in annotated] == results
    assert annotated[0].provenance[MetricName.GENDER_BIAS].source == Provenance.AI
    assert annotated[0].bias.gender.score == 90
    assert annotated[1].provenance[MetricName.GENDER_BIAS].source == Provenance.LOCAL_FALLBACK
    assert annotated[1].provenance[MetricName.GENDER_BIAS].error == "malformed_response"
    assert all(
        p.source == Provenance.LOCAL
        for m, p in annotated[1].provenance.items()
        if m != MetricName.GENDER_BIAS
    )
