import pytest
from dotenv import load_dotenv

from models.search_result import SearchResult

# Load environment variables from .env file for tests
load_dotenv()

PROVIDER_KEY_VARS = ("GOOGLE_AI_API_KEY", "GOOGLE_GEMINI_API_KEY", "OPENAI_API_KEY")


@pytest.fixture
def no_provider_keys(monkeypatch):
    """Run with no provider API keys, including ones a local .env would supply."""
    for key in PROVIDER_KEY_VARS:
        monkeypatch.setenv(key, "")


@pytest.fixture
def make_result():
    def _make(title="", description="", url="https://example.com/page", domain=""):
        return SearchResult(title=title, description=description, url=url, domain=domain)

    return _make


@pytest.fixture
def sample_results():
    return [
        SearchResult(
            title="Women's health resources",
            description="According to the office on women's health, research shows "
            "screening saves lives. Support for women and girls.",
            url="https://www.womenshealth.gov/screening",
        ),
        SearchResult(
            title="Buy now! 50% off",
            description="Limited time offer on our best deal. Shop now with promo code.",
            url="https://shop.example.com/sale?ref=partner1",
        ),
        SearchResult(
            title="Reuters: new report on pay equity",
            description="According to a new survey, statistics show the pay gap narrowed.",
            url="https://www.reuters.com/business/pay-equity",
        ),
    ]
