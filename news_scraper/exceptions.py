"""
Custom exceptions for the news scraper.

Every stage raises one of these and the orchestrator (NewsScraper.scrape) is
the only place that turns them into the ``error`` string of an ArticleRecord:

  - FetchError      → transport failure, carries the chain of underlying causes.
  - ReadError       → the connection worked but the body could not be read.
  - ExtractionError → nothing meaningful survived cleaning.
  - RewriteError    → missing credential, serialization or model failure.
  - LLMClientError  → raised by the model clients, wrapped into RewriteError.
"""

from typing import Optional


class ScraperError(Exception):
    """Base exception for all news scraper errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class FetchError(ScraperError):
    """Raised when the page cannot be fetched (DNS, connect, TLS, timeout...)."""

    def __init__(
        self,
        message: str,
        causes: Optional[list[str]] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        # Underlying causes, outermost first, for diagnostics
        self.causes = causes or []


class ReadError(ScraperError):
    """Raised when the response body cannot be read after a successful connection."""
    pass


class ExtractionError(ScraperError):
    """Raised when neither <article> nor <body> yields meaningful content."""
    pass


class RewriteError(ScraperError):
    """
    Raised by the rewrite stage.

    The record handed to the rewriter is never modified when this is raised.
    """
    pass


class LLMClientError(ScraperError):
    """Raised when an LLM client cannot be created or its API call fails."""

    def __init__(
        self,
        message: str,
        provider: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.provider = provider  # "openai" or "anthropic"
