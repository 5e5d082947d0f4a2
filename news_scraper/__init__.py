"""
News Scraper

Extracts the readable article from a news page and rewrites it as Markdown.
- Fetcher: one HTTP GET per page
- Extractor: <article>/<body> location, noise cleaning, head metadata
- Rewriter: LLM-based Markdown formatting and translation

Public API surface:
  Orchestrator  : NewsScraper, universal_scrape, scrape_many
  Stage classes : Fetcher, Extractor, Rewriter
  Cleaning      : SKIP_TAGS, clean_element, parse_document
  Data models   : ArticleRecord, ArticleMetadata
  Error types   : FetchError, ReadError, ExtractionError, RewriteError
"""

# --- Orchestrator ---
from .main import NewsScraper, universal_scrape, scrape_many

# --- Pipeline stage classes ---
from .fetcher import Fetcher
from .extractor import Extractor
from .rewriter import Rewriter

# --- Tree cleaning ---
from .cleaner import SKIP_TAGS, clean_element, parse_document

# --- Data models ---
from .schemas import ArticleRecord, ArticleMetadata

# --- Exceptions (stages raise these; NewsScraper turns them into record.error) ---
from .exceptions import (
    ScraperError,
    FetchError,
    ReadError,
    ExtractionError,
    RewriteError,
    LLMClientError,
)

# --- LLM clients ---
from .llm_client import LLMClient, LLMProvider, BaseLLMClient

__version__ = "0.1.0"
__all__ = [
    "NewsScraper",
    "universal_scrape",
    "scrape_many",
    "Fetcher",
    "Extractor",
    "Rewriter",
    "SKIP_TAGS",
    "clean_element",
    "parse_document",
    "ArticleRecord",
    "ArticleMetadata",
    "ScraperError",
    "FetchError",
    "ReadError",
    "ExtractionError",
    "RewriteError",
    "LLMClientError",
    "LLMClient",
    "LLMProvider",
    "BaseLLMClient",
]
