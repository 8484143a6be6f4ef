"""
Women-first summaries of the top search results.

The generator never raises to its caller. Every failure mode maps to a
fixed fallback SummaryResponse with empty sources.
"""

import asyncio
import time

from api.base_client import BaseAIClient
from api.factory import create_client, resolve_api_key
from config.metrics_config import PROVIDER_KEY_ENV_VARS
from config.thresholds import SUMMARY_MAX_PARAGRAPHS, SUMMARY_TOP_K
from models.provider_response import NormalizedError, ProviderResponse
from models.search_result import SearchResult
from models.summary import Perspective, SummaryResponse
from orchestrator.citations import cited_indices, strip_invalid_citations
from orchestrator.response_validator import ResponseValidator, split_paragraphs
from utils.logger import get_logger
from utils.sync import run_sync

logger = get_logger(__name__)

NO_RESULTS_MESSAGE = "No results found to summarize."
UNAVAILABLE_MESSAGE = "AI summary unavailable. Configure GOOGLE_AI_API_KEY to enable summaries."
FAILURE_MESSAGE = (
    "Unable to generate AI summary at this time. Please review the search results directly."
)

WOMEN_FIRST_PROMPT = """You are Aurora's search assistant for a women-first search engine.
Your role is to summarize search results with a focus on women's safety, wellbeing, and empowerment.

Guidelines:
1. Prioritize information relevant to women's perspectives and needs
2. Highlight safety considerations when relevant
3. Note any potential biases or concerns in the sources
4. Be supportive and empowering in tone
5. Keep summaries concise (2-3 paragraphs maximum)
6. Always cite sources by number [1], [2], etc. using only the numbers given
7. If the topic relates to women's health, safety, or rights, emphasize trusted resources"""

SUMMARY_TEMPERATURE = 0.7
SUMMARY_MAX_TOKENS = 500


def fallback_summary(message: str) -> SummaryResponse:
    return SummaryResponse(summary=message, sources=(), perspective=Perspective.BALANCED)


def build_context(results: list[SearchResult]) -> str:
    return "\n\n".join(
        f"[{i}] {r.title}\n{r.description}\nSource: {r.domain or 'unknown'}"
        for i, r in enumerate(results, start=1)
    )


def build_prompt(query: str, results: list[SearchResult]) -> str:
    return (
        f'User\'s search query: "{query}"\n\n'
        f"Search results to summarize:\n{build_context(results)}\n\n"
        "Please provide a helpful, women-first summary of these results."
    )


def postprocess_summary(text: str, results: list[SearchResult]) -> SummaryResponse:
    """
    Enforce the citation and length contract on raw provider text.

    Out-of-range markers are removed, the text is cut to three paragraphs,
    and sources are the cited URLs that survive, in first-citation order.
    """
    cleaned = strip_invalid_citations(text, len(results))
    paragraphs = split_paragraphs(cleaned)[:SUMMARY_MAX_PARAGRAPHS]
    summary = "\n\n".join(paragraphs)

    sources: list[str] = []
    for index in cited_indices(summary, len(results)):
        url = results[index - 1].url
        if url and url not in sources:
            sources.append(url)

    return SummaryResponse(
        summary=summary, sources=tuple(sources), perspective=Perspective.WOMEN_FIRST
    )


class SummaryGenerator:
    def __init__(
        self,
        client: BaseAIClient | None = None,
        *,
        top_k: int = SUMMARY_TOP_K,
        timeout_s: float = 20.0,
        validator: ResponseValidator | None = None,
    ):
        self.client = client
        self.top_k = top_k
        self.timeout_s = timeout_s
        self.validator = validator or ResponseValidator()

    @classmethod
    def from_env(cls, provider: str = "gemini", model_name: str | None = None, **kwargs):
        env_var = PROVIDER_KEY_ENV_VARS.get(provider)
        api_key = resolve_api_key(env_var) if env_var else None
        client = create_client(provider, api_key, model_name)
        if client is None:
            logger.warning(
                "Summary provider not configured; summaries will use the fallback message",
                extra={"extra_fields": {"provider": provider, "api_key_env_var": env_var}},
            )
        return cls(client, **kwargs)

    async def _call_provider(self, prompt: str) -> ProviderResponse:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    lambda: self.client.get_completion(
                        prompt,
                        system_instruction=WOMEN_FIRST_PROMPT,
                        temperature=SUMMARY_TEMPERATURE,
                        max_tokens=SUMMARY_MAX_TOKENS,
                    ),
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError:
            return ProviderResponse(
                request_id="",
                text="",
                provider=self.client.provider,
                model=self.client.model_name or "",
                latency_ms=int(self.timeout_s * 1000),
                finish_reason="error",
                error=NormalizedError(
                    code="timeout",
                    message=f"Summary timed out after {self.timeout_s}s",
                    provider=self.client.provider,
                    retryable=True,
                ),
            )

    async def generate(self, query: str, results: list[SearchResult]) -> SummaryResponse:
        if not results:
            return fallback_summary(NO_RESULTS_MESSAGE)
        if self.client is None:
            return fallback_summary(UNAVAILABLE_MESSAGE)

        top = list(results[: self.top_k])
        start = time.perf_counter()
        response = await self._call_provider(build_prompt(query, top))

        validation = self.validator.validate(response)
        if not validation.ok:
            logger.warning(
                "Summary generation failed",
                extra={
                    "extra_fields": {
                        "reason": validation.reason,
                        "provider": response.provider,
                        "result_count": len(top),
                    }
                },
            )
            return fallback_summary(FAILURE_MESSAGE)

        summary = postprocess_summary(response.text, top)
        if not summary.summary:
            return fallback_summary(FAILURE_MESSAGE)

        logger.info(
            "Summary generated",
            extra={
                "extra_fields": {
                    "provider": response.provider,
                    "sources": len(summary.sources),
                    "elapsed_ms": int((time.perf_counter() - start) * 1000),
                }
            },
        )
        return summary

    def generate_sync(self, query: str, results: list[SearchResult]) -> SummaryResponse:
        return run_sync(self.generate(query, results))


def generate_summary(
    query: str,
    results: list[SearchResult],
    client: BaseAIClient | None = None,
) -> SummaryResponse:
    """One-shot synchronous summary. Without a client, Gemini is configured from the environment."""
    generator = SummaryGenerator(client) if client is not None else SummaryGenerator.from_env()
    return generator.generate_sync(query, results)
