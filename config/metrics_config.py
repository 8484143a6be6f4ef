"""
Static per-metric configuration table.

Every metric runs on local heuristics by default. Switching one to AI needs
three things: ``ai_enabled`` on the global settings, ``mode=AI`` on the
metric, and an API key in the environment variable the metric names.
"""

from dataclasses import dataclass, field, replace

from models.metric_types import MetricMode, MetricName

PROMPT_CONTENT_LIMIT = 2000
# Key env var and model used when a metric names only a provider
PROVIDER_KEY_ENV_VARS = {
    "gemini": "GOOGLE_AI_API_KEY",
    "openai": "OPENAI_API_KEY",
}
PROVIDER_DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}

VIBE_PROMPT = """Analyze the emotional tone of this content. Classify as ONE of: Factual, Calm, Balanced, Inspiring, Emotional, Controversial, Sensational, Toxic.

Content: {content}
Source: {domain}

Return ONLY a JSON object: {{"tone": "Factual|Calm|Balanced|Inspiring|Emotional|Controversial|Sensational|Toxic", "confidence": 0-100}}"""

GENDER_BIAS_PROMPT = """Analyze this content for gender bias from a women's perspective.

Score from 0-100 where:
- 80-100: Women-Positive (actively supportive of women)
- 60-79: Balanced (fair representation)
- 40-59: Neutral (no clear signals)
- 20-39: Caution (some concerning patterns)
- 0-19: Potential Bias (problematic content)

Content: {content}
Source: {domain}

Return ONLY JSON: {{"score": 0-100, "label": "Women-Positive|Balanced|Neutral|Caution|Potential Bias", "reason": "brief explanation"}}"""

POLITICAL_BIAS_PROMPT = """Analyze the political bias of this content.

Classify as: Far Left, Left, Center-Left, Center, Center-Right, Right, Far Right, or Unknown when there is no political content.

Content: {content}
Source: {domain}

Return ONLY JSON: {{"indicator": "Center", "confidence": 0-100}}"""

AI_DETECTION_PROMPT = """Analyze if this content was written by AI (ChatGPT, Claude, etc.) or a human.

Look for:
- Overly formal language
- Common AI phrases ("It's important to note", "Let me explain")
- Lack of personal voice
- Uniform paragraph structure

Content: {content}

Return ONLY JSON: {{"probability": 0.0-1.0, "indicators": ["list", "of", "detected", "patterns"]}}"""

SUSTAINABILITY_PROMPT = """Evaluate this content's environmental/sustainability focus.

Score 0-100 where:
- 80-100: Eco-Leader (actively promotes sustainability)
- 60-79: Eco-Aware (discusses environmental topics positively)
- 40-59: Neutral (no clear sustainability focus)
- 20-39: Caution (may promote harmful practices)
- 0-19: Concern (anti-environmental content)

Use null for the score when the content has nothing to do with sustainability.

Content: {content}
Source: {domain}

Return ONLY JSON: {{"score": 0-100 or null, "indicators": ["list", "of", "signals"]}}"""

CREDIBILITY_PROMPT = """Evaluate the credibility of this content and source.

Consider:
- Source reputation ({domain})
- Writing quality and professionalism
- Use of citations or evidence
- Balanced vs sensational language
- Factual accuracy signals

Content: {content}

Return ONLY JSON: {{"score": 0-100, "factors": ["list", "of", "credibility", "factors"]}}"""

COMMERCIAL_BIAS_PROMPT = """Analyze this content for commercial bias.

Look for:
- Promotional language ("Buy now", "Limited time")
- Affiliate links or sponsored content
- Product placement
- Advertorial content disguised as articles

Content: {content}
URL: {domain}

Return ONLY JSON: {{"score": 0-100, "has_affiliate_links": true|false, "is_sponsored": true|false}}"""


@dataclass(frozen=True)
class MetricConfig:
    display_name: str
    description: str
    prompt_template: str
    enabled: bool = True
    mode: MetricMode = MetricMode.LOCAL
    ai_provider: str | None = None  # None: global default_provider
    ai_model: str | None = None
    fallback_to_local: bool = True
    cache_results: bool = True
    cache_ttl: int = 3600  # seconds
    max_tokens: int = 100
    priority: int = 0
    api_key_env_var: str | None = None
    timeout_s: float = 10.0


@dataclass(frozen=True)
class GlobalMetricsConfig:
    default_provider: str = "gemini"
    default_model: str | None = None  # applies to default_provider only
    ai_enabled: bool = False
    max_concurrent_requests: int = 3
    rate_limit_per_minute: int = 15  # Gemini free tier


@dataclass(frozen=True)
class MetricsConfiguration:
    global_settings: GlobalMetricsConfig = field(default_factory=GlobalMetricsConfig)
    metrics: dict[MetricName, MetricConfig] = field(default_factory=dict)

    def get(self, metric: MetricName) -> MetricConfig:
        return self.metrics[metric]

    def should_use_ai(self, metric: MetricName) -> bool:
        cfg = self.metrics[metric]
        return self.global_settings.ai_enabled and cfg.enabled and cfg.mode == MetricMode.AI

    def resolve(self, metric: MetricName) -> MetricConfig:
        """
        The metric's config with provider, model and key env var filled in.

        Provider falls back to the global default; key env var and model then
        follow from the provider, with ``default_model`` applying only when
        the provider is the global default.
        """
        cfg = self.metrics[metric]
        settings = self.global_settings
        provider = cfg.ai_provider or settings.default_provider
        model = cfg.ai_model
        if model is None and provider == settings.default_provider:
            model = settings.default_model
        return replace(
            cfg,
            ai_provider=provider,
            ai_model=model or PROVIDER_DEFAULT_MODELS.get(provider),
            api_key_env_var=cfg.api_key_env_var or PROVIDER_KEY_ENV_VARS.get(provider),
        )

    def enabled_metrics(self) -> list[MetricName]:
        """Enabled metrics in priority order (lower first)."""
        enabled = [name for name, cfg in self.metrics.items() if cfg.enabled]
        return sorted(enabled, key=lambda name: self.metrics[name].priority)

    def with_metric(self, metric: MetricName, **changes) -> "MetricsConfiguration":
        metrics = dict(self.metrics)
        metrics[metric] = replace(metrics[metric], **changes)
        return replace(self, metrics=metrics)

    def with_global(self, **changes) -> "MetricsConfiguration":
        return replace(self, global_settings=replace(self.global_settings, **changes))


DEFAULT_METRICS_CONFIG = MetricsConfiguration(
    global_settings=GlobalMetricsConfig(),
    metrics={
        MetricName.VIBE: MetricConfig(
            display_name="Vibe",
            description="Emotional tone of the content",
            prompt_template=VIBE_PROMPT,
            priority=1,
        ),
        MetricName.GENDER_BIAS: MetricConfig(
            display_name="Gender",
            description="How women-friendly or potentially biased the content is",
            prompt_template=GENDER_BIAS_PROMPT,
            max_tokens=150,
            priority=2,
        ),
        MetricName.POLITICAL_BIAS: MetricConfig(
            display_name="Political",
            description="Political leaning of the source",
            prompt_template=POLITICAL_BIAS_PROMPT,
            cache_ttl=86400,  # leaning of a source is stable
            priority=3,
        ),
        MetricName.AI_DETECTION: MetricConfig(
            display_name="AI",
            description="Likelihood that the content was machine-generated",
            prompt_template=AI_DETECTION_PROMPT,
            priority=4,
        ),
        MetricName.SUSTAINABILITY: MetricConfig(
            display_name="Eco",
            description="Environmental and sustainability focus of the content",
            prompt_template=SUSTAINABILITY_PROMPT,
            priority=5,
        ),
        MetricName.CREDIBILITY: MetricConfig(
            display_name="Credibility",
            description="Trustworthiness of the source",
            prompt_template=CREDIBILITY_PROMPT,
            cache_ttl=86400,
            max_tokens=150,
            priority=6,
        ),
        MetricName.COMMERCIAL_BIAS: MetricConfig(
            display_name="Commercial",
            description="Promotional content and affiliate link detection",
            prompt_template=COMMERCIAL_BIAS_PROMPT,
            priority=7,
        ),
    },
)


def build_ai_prompt(metric_config: MetricConfig, content: str, domain: str) -> str:
    return metric_config.prompt_template.format(
        content=(content or "")[:PROMPT_CONTENT_LIMIT], domain=domain or "unknown"
    )
