"""
Shared fixtures for the news scraper tests.

No test touches the network: page fetches are patched and the LLM is the
StubLLMClient below.
"""

from typing import Optional

import pytest

from news_scraper.llm_client import BaseLLMClient
from news_scraper.exceptions import LLMClientError


ARTICLE_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>
        Breaking   News:
        Rivers Rise
    </title>
    <meta property="og:image" content="https://example.com/flood.jpg">
    <meta property="article:published_time" content="2024-01-15T10:30:00Z">
    <meta name="author" content="Jane Doe">
</head>
<body>
    <header><h1>Daily Paper</h1></header>
    <nav><a href="/">Home</a> <a href="/world">World</a></nav>
    <article>
        <h1>Rivers Rise</h1>
        <p>Water levels reached a record high on Monday.</p>
        <script>trackPageView();</script>
        <div class="ad"><iframe src="https://ads.example.com"></iframe></div>
        <p>Residents were <b>evacuated</b> overnight.</p>
        <p>   </p>
    </article>
    <aside><p>Related stories</p></aside>
    <footer>Copyright 2024</footer>
</body>
</html>
"""

CLEANED_ARTICLE = (
    "<article><h1>Rivers Rise</h1> "
    "<p>Water levels reached a record high on Monday.</p> "
    "<p>Residents were <b>evacuated</b> overnight.</p></article>"
)


class StubLLMClient(BaseLLMClient):
    """Deterministic LLM client: returns ``response`` or raises ``error``."""

    def __init__(self, response: str = "# Rewritten", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls = []

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_llm():
    return StubLLMClient(response="# Rivers Rise\n\nWater levels reached a record high.")


@pytest.fixture
def failing_llm():
    return StubLLMClient(error=LLMClientError("OpenAI API call failed: rate limited", provider="openai"))


@pytest.fixture
def no_api_keys(monkeypatch):
    """Environment with no LLM credentials or provider override."""
    for name in ("OPENAI_API_KEY", "OPEN_AI_SECRET", "ANTHROPIC_API_KEY", "LLM_PROVIDER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def article_page():
    return ARTICLE_PAGE


@pytest.fixture
def cleaned_article():
    return CLEANED_ARTICLE


@pytest.fixture
def llm_factory():
    """The StubLLMClient class, for tests that need a custom response or error."""
    return StubLLMClient
