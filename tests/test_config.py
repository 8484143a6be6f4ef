import pytest

from config.config import Config
from config.metrics_config import (
    DEFAULT_METRICS_CONFIG,
    PROMPT_CONTENT_LIMIT,
    build_ai_prompt,
)
from models.metric_types import MetricMode, MetricName
from server import dependencies

pytestmark = pytest.mark.unit


def test_every_metric_has_a_config():
    assert set(DEFAULT_METRICS_CONFIG.metrics) == set(MetricName)


def test_defaults_are_local():
    assert DEFAULT_METRICS_CONFIG.global_settings.ai_enabled is False
    assert not any(DEFAULT_METRICS_CONFIG.should_use_ai(m) for m in MetricName)


def test_slow_changing_metrics_cache_longer():
    assert DEFAULT_METRICS_CONFIG.get(MetricName.CREDIBILITY).cache_ttl == 86400
    assert DEFAULT_METRICS_CONFIG.get(MetricName.POLITICAL_BIAS).cache_ttl == 86400
    assert DEFAULT_METRICS_CONFIG.get(MetricName.VIBE).cache_ttl == 3600


def test_with_metric_leaves_original_untouched():
    changed = DEFAULT_METRICS_CONFIG.with_global(ai_enabled=True).with_metric(
        MetricName.VIBE, mode=MetricMode.AI
    )
    assert changed.should_use_ai(MetricName.VIBE)
    assert DEFAULT_METRICS_CONFIG.get(MetricName.VIBE).mode == MetricMode.LOCAL


def test_enabled_metrics_in_priority_order():
    config = DEFAULT_METRICS_CONFIG.with_metric(MetricName.VIBE, enabled=False)
    enabled = config.enabled_metrics()
    assert MetricName.VIBE not in enabled
    priorities = [config.get(m).priority for m in enabled]
    assert priorities == sorted(priorities)


def test_prompt_truncates_content():
    metric_config = DEFAULT_METRICS_CONFIG.get(MetricName.GENDER_BIAS)
    prompt = build_ai_prompt(metric_config, "x" * (PROMPT_CONTENT_LIMIT + 500), "example.com")
    assert "x" * PROMPT_CONTENT_LIMIT in prompt
    assert "x" * (PROMPT_CONTENT_LIMIT + 1) not in prompt


def test_config_reports_missing_key(monkeypatch, no_provider_keys):
    monkeypatch.setenv("DEFAULT_PROVIDER", "gemini")
    problems = Config().validate()
    assert any("No API key configured" in p for p in problems)


def test_config_rejects_unknown_provider(monkeypatch):
    monkeypatch.setenv("DEFAULT_PROVIDER", "carrier-pigeon")
    assert any("Unknown DEFAULT_PROVIDER" in p for p in Config().validate())


def test_config_reads_gemini_alias(monkeypatch, no_provider_keys):
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "alias-key")
    assert Config().api_key_for("gemini") == "alias-key"


def test_metrics_analyzer_dependency_follows_default_provider(monkeypatch, no_provider_keys):
    monkeypatch.setenv("DEFAULT_PROVIDER", "openai")
    monkeypatch.setenv("DEFAULT_OPENAI_MODEL", "gpt-4.1-mini")
    for dep in (dependencies.get_config, dependencies.get_metrics_analyzer):
        monkeypatch.delattr(dep, "_instance", raising=False)

    try:
        resolved = dependencies.get_metrics_analyzer().config.resolve(MetricName.VIBE)
    finally:
        for dep in (dependencies.get_config, dependencies.get_metrics_analyzer):
            if hasattr(dep, "_instance"):
                del dep._instance

    assert resolved.ai_provider == "openai"
    assert resolved.ai_model == "gpt-4.1-mini"
    assert resolved.api_key_env_var == "OPENAI_API_KEY"
