import pytest

from models.analysis import PoliticalBiasIndicator
from models.search_result import SearchResult
from orchestrator.insights import compute_insights
from orchestrator.metrics_analyzer import MetricsAnalyzer

pytestmark = pytest.mark.unit


def test_empty_batch_is_neutral():
    insights = compute_insights([])
    assert insights.women_focused_count == 0
    assert insights.women_focused_percentage == 0
    assert insights.recommendations == ()
    assert set(insights.political_distribution) == set(PoliticalBiasIndicator)
    assert sum(insights.political_distribution.values()) == 0


def test_batch_aggregates(sample_results):
    annotated = MetricsAnalyzer().analyze_sync(sample_results, "q")
    insights = compute_insights(annotated)

    assert insights.average_credibility == round((100 + 50 + 85) / 3)
    assert insights.women_focused_count == 1
    assert insights.women_focused_percentage == 33
    assert insights.safety_warning_count == 0
    assert sum(insights.political_distribution.values()) == len(sample_results)
    assert insights.political_distribution[PoliticalBiasIndicator.CENTER] == 1


def test_recommendations_flag_warnings_and_missing_women_sources():
    annotated = MetricsAnalyzer().analyze_sync(
        [SearchResult("Romance scam alert", "Wire transfer fraud", "https://free-12345.xyz")],
        "q",
    )
    insights = compute_insights(annotated)

    assert insights.safety_warning_count == 1
    assert any("scam or safety warnings" in r for r in insights.recommendations)
    assert any("No women-focused sources" in r for r in insights.recommendations)
    assert any("low credibility" in r for r in insights.recommendations)


def test_to_dict_is_plain_json(sample_results):
    data = compute_insights(MetricsAnalyzer().analyze_sync(sample_results, "q")).to_dict()
    assert data["political_distribution"]["Unknown"] >= 0
    assert isinstance(data["average_credibility_label"], str)
    assert isinstance(data["recommendations"], list)
