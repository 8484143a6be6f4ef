"""
FastAPI contract and guardrail tests.

The analyzer runs in all-local mode and the summary generator talks to an
in-memory FakeClient, so nothing here touches the network. The tests pin
down request validation, response shapes and the guarantee that provider
failures never surface as 5xx responses.
"""

import pytest
from fastapi.testclient import TestClient

from orchestrator.metrics_analyzer import MetricsAnalyzer
from orchestrator.summary_generator import FAILURE_MESSAGE, SummaryGenerator
from server.app import create_app
from server.schemas.requests import MAX_RESULTS_PER_REQUEST
from tests.fakes import FakeClient

pytestmark = pytest.mark.integration

SUMMARY_TEXT = (
    "Trusted health agencies recommend regular screening for women [1].\n\n"
    "Local clinics offer free appointments [2]."
)

RESULTS = [
    {
        "title": "Women's health screening",
        "description": "According to the office on women's health, screening saves lives.",
        "url": "https://www.womenshealth.gov/screening",
    },
    {
        "title": "Buy now! 50% off",
        "description": "Limited time offer.",
        "url": "https://shop.example.com/sale",
    },
]


def _build_app(summary_client):
    app = create_app()

    from server import dependencies as deps

    # Clear singleton cache to avoid cross-test leakage
    for dep in (deps.get_metrics_analyzer, deps.get_summary_generator):
        if hasattr(dep, "_instance"):
            delattr(dep, "_instance")

    analyzer = MetricsAnalyzer()
    generator = SummaryGenerator(summary_client)
    app.dependency_overrides[deps.get_metrics_analyzer] = lambda: analyzer
    app.dependency_overrides[deps.get_summary_generator] = lambda: generator
    return app


@pytest.fixture()
def client():
    return TestClient(_build_app(FakeClient(default=SUMMARY_TEXT)))


@pytest.fixture()
def failing_client():
    return TestClient(_build_app(FakeClient(error_code="provider_error")))


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    body = r.json()
    assert body["status"] == "healthy"
    assert body["metrics"]["mode"] == "all-local"


def test_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_analyze_returns_results_in_order(client):
    r = client.post("/v1/analyze", json={"query": "screening", "results": RESULTS})
    assert r.status_code == 200

    body = r.json()
    assert body["result_count"] == 2
    assert [a["result"]["url"] for a in body["results"]] == [x["url"] for x in RESULTS]

    first = body["results"][0]
    assert first["credibility"]["domain_type"] == "gov"
    assert first["provenance"]["credibility"]["source"] == "local"
    assert {"credibility", "bias", "ai_content", "safety_flags", "sustainability"} <= set(first)
    assert body["results"][1]["bias"]["commercial"]["is_promotional"] is True
    assert body["insights"]["women_focused_count"] == 1


def test_analyze_without_insights(client):
    payload = {"query": "q", "results": RESULTS, "include_insights": False}
    assert client.post("/v1/analyze", json=payload).json()["insights"] is None


def test_analyze_empty_results(client):
    r = client.post("/v1/analyze", json={"query": "q", "results": []})
    assert r.status_code == 200
    assert r.json()["results"] == []


@pytest.mark.parametrize(
    "payload",
    [
        {"results": RESULTS},
        {"query": "", "results": RESULTS},
        {"query": "q", "results": [{"title": "t", "url": ""}]},
        {"query": "q", "results": [{"title": "", "description": "", "url": "https://x.org"}]},
        {"query": "q", "results": [RESULTS[0]] * (MAX_RESULTS_PER_REQUEST + 1)},
    ],
)
def test_analyze_rejects_bad_payloads(client, payload):
    assert client.post("/v1/analyze", json=payload).status_code == 422


def test_clear_cache(client):
    client.post("/v1/analyze", json={"query": "q", "results": RESULTS})
    assert client.post("/v1/analyze/cache/clear").status_code == 204
    assert client.get("/health").json()["metrics"]["cache_size"] == 0


def test_summary(client):
    r = client.post("/v1/summary", json={"query": "screening", "results": RESULTS})
    assert r.status_code == 200
    body = r.json()
    assert body["perspective"] == "women-first"
    assert body["sources"] == [RESULTS[0]["url"], RESULTS[1]["url"]]


def test_summary_never_returns_500(failing_client):
    r = failing_client.post("/v1/summary", json={"query": "q", "results": RESULTS})
    assert r.status_code == 200
    assert r.json()["summary"] == FAILURE_MESSAGE
    assert r.json()["sources"] == []


def test_summary_rejects_missing_query(client):
    assert client.post("/v1/summary", json={"results": RESULTS}).status_code == 422
