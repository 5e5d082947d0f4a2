"""
Main orchestrator for the news scraper.

Coordinates the pipeline: Fetcher → Extractor (locate/clean, metadata) →
Rewriter. Each stage raises its own ScraperError subclass; this module is
the boundary that turns them into an ArticleRecord with ``error`` set, so
callers never see an exception.
"""

import asyncio
from typing import Iterable, Optional, Union

from .cleaner import parse_document
from .extractor import Extractor
from .fetcher import Fetcher, DEFAULT_TIMEOUT
from .rewriter import Rewriter, DEFAULT_LANGUAGE
from .schemas import ArticleRecord
from .llm_client import LLMProvider, BaseLLMClient
from .exceptions import ExtractionError, FetchError, ReadError, RewriteError
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")

FETCH_ERROR_PREFIX = "Failed to fetch URL: "
READ_ERROR_PREFIX = "Failed to read response body: "
NO_CONTENT_MESSAGE = "Could not extract meaningful content from the page."


def format_fetch_error(error: FetchError) -> str:
    """'Failed to fetch URL: <error> => <cause> => ...'"""
    return FETCH_ERROR_PREFIX + " => ".join([error.message] + error.causes)


class NewsScraper:
    """
    Main orchestrator for article scraping.

    Stages, each terminal on failure:
    1. Fetcher: one GET, body decoded to text
    2. Extractor: <article>/<body> located and cleaned, head metadata read
    3. Rewriter: cleaned HTML → Markdown in the target language

    Fetch, read and extraction failures return a record with every field
    cleared. A rewrite failure keeps the scraped fields (content still holds
    the cleaned HTML) and sets ``error``.
    """

    def __init__(
        self,
        llm_client: Optional[BaseLLMClient] = None,
        provider: Optional[Union[LLMProvider, str]] = None,
        model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        skip_tags: Optional[Iterable[str]] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.fetcher = Fetcher(timeout=timeout)
        self.extractor = Extractor(skip_tags=skip_tags)
        self.rewriter = Rewriter(llm_client=llm_client, provider=provider, model=model)

        logger.info("NewsScraper initialized")

    def scrape(self, url: str, language: str = DEFAULT_LANGUAGE) -> ArticleRecord:
        """
        Scrape ``url`` and rewrite its article as Markdown.

        Args:
            url: Article URL
            language: Output language, blank means english

        Returns:
            ArticleRecord; check ``error`` (or ``ok``) for the outcome
        """
        logger.info(f"Scraping {url}")

        try:
            html = self.fetcher.fetch(url)
        except FetchError as e:
            return self._fail(format_fetch_error(e))
        except ReadError as e:
            return self._fail(READ_ERROR_PREFIX + e.message)
        except Exception as e:
            logger.exception(f"Unexpected error while fetching {url}")
            return self._fail(FETCH_ERROR_PREFIX + str(e))

        return self.scrape_html(html, language)

    def scrape_html(self, html: str, language: str = DEFAULT_LANGUAGE) -> ArticleRecord:
        """Run the locate/clean, metadata and rewrite stages on fetched HTML."""
        try:
            record = self._extract(html)
        except ExtractionError as e:
            return self._fail(e.message)
        except Exception as e:
            logger.exception("Unexpected error during extraction")
            return self._fail(f"Extraction failed: {e}")

        try:
            record = self.rewriter.rewrite(record, language)
        except RewriteError as e:
            # Scraped fields stay for diagnostics; error marks the failure
            logger.warning(f"Rewrite failed: {e.message}")
            return record.model_copy(update={"error": e.message})
        except Exception as e:
            logger.exception("Unexpected error during rewrite")
            return record.model_copy(update={"error": f"LLM Error: {e}"})

        logger.info(f"Scrape complete: '{record.title}'")
        return record

    def _extract(self, html: str) -> ArticleRecord:
        document = parse_document(html)

        content = self.extractor.locate_content(document)
        if not content.strip():
            # Metadata is not read: a record without content is not rewritten
            raise ExtractionError(NO_CONTENT_MESSAGE)

        metadata = self.extractor.extract_metadata(document)
        return ArticleRecord.from_scrape(content, metadata)

    def _fail(self, message: str) -> ArticleRecord:
        logger.warning(message)
        return ArticleRecord.failure(message)

    async def scrape_many(
        self,
        urls: Iterable[str],
        language: str = DEFAULT_LANGUAGE,
        max_concurrent: int = 3
    ) -> list[ArticleRecord]:
        """
        Scrape several URLs concurrently, results in input order.

        Each scrape runs in a worker thread; the semaphore caps how many
        are in flight. One failed URL only affects its own record.
        """
        semaphore = asyncio.Semaphore(max_concurrent)

        async def scrape_one(url: str) -> ArticleRecord:
            async with semaphore:
                return await asyncio.to_thread(self.scrape, url, language)

        return await asyncio.gather(*(scrape_one(url) for url in urls))


def universal_scrape(
    url: str,
    language: str = DEFAULT_LANGUAGE,
    model: Optional[str] = None,
    provider: Optional[Union[LLMProvider, str]] = None
) -> ArticleRecord:
    """Convenience function to scrape one URL."""
    return NewsScraper(provider=provider, model=model).scrape(url, language)


async def scrape_many(
    urls: Iterable[str],
    language: str = DEFAULT_LANGUAGE,
    max_concurrent: int = 3,
    model: Optional[str] = None,
    provider: Optional[Union[LLMProvider, str]] = None
) -> list[ArticleRecord]:
    """Convenience function to scrape several URLs concurrently."""
    scraper = NewsScraper(provider=provider, model=model)
    return await scraper.scrape_many(urls, language, max_concurrent=max_concurrent)
