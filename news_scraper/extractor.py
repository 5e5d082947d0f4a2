"""
Content locator and metadata extractor.

Pipeline position: between Fetcher and Rewriter.
Input:  parsed BeautifulSoup document
Output: cleaned HTML fragment + ArticleMetadata

The two halves are independent: metadata comes from <head> only and is read
the same way whether or not content extraction found anything.
"""

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from .cleaner import SKIP_TAGS, as_skip_set, clean_element
from .schemas import ArticleMetadata
from .logger import get_module_logger

logger = get_module_logger("extractor")

# Structural anchors, in priority order. <article> wraps the story body in
# semantic HTML5 news markup; <body> is the last resort and may include
# sidebars and comments.
CONTENT_SELECTORS = ["article", "body"]

WHITESPACE_PATTERN = re.compile(r"\s+")


class Extractor:
    """Locates the article body and reads head metadata."""

    def __init__(self, skip_tags: Optional[Iterable[str]] = None):
        self.skip_tags = as_skip_set(skip_tags) if skip_tags is not None else SKIP_TAGS

    def locate_content(self, document: BeautifulSoup) -> str:
        """
        Return the cleaned article body, or "" when nothing survives.

        The first <article> wins if it cleans to something non-blank;
        otherwise the <body> is cleaned and returned as-is.
        """
        for selector in CONTENT_SELECTORS:
            element = document.select_one(selector)
            if element is None:
                logger.debug(f"No <{selector}> element found")
                continue

            cleaned = clean_element(element, self.skip_tags)
            if cleaned.strip():
                logger.debug(f"Content located in <{selector}> ({len(cleaned)} chars)")
                return cleaned

            logger.debug(f"<{selector}> cleaned to nothing")

        return ""

    def extract_metadata(self, document: BeautifulSoup) -> ArticleMetadata:
        """Read title, og:image, publish date and author. Never raises."""
        title_elem = document.select_one("title")
        title = ""
        if title_elem is not None:
            title = WHITESPACE_PATTERN.sub(" ", title_elem.get_text()).strip()

        metadata = ArticleMetadata(
            title=title,
            featured_image_url=self._meta_content(document, 'meta[property="og:image"]') or "",
            publication_date=self._meta_content(document, 'meta[property="article:published_time"]'),
            author=self._meta_content(document, 'meta[name="author"]'),
        )
        logger.debug(
            f"Metadata: title={bool(metadata.title)}, image={bool(metadata.featured_image_url)}, "
            f"date={metadata.publication_date is not None}, author={metadata.author is not None}"
        )
        return metadata

    def _meta_content(self, document: BeautifulSoup, selector: str) -> Optional[str]:
        # A matching <meta> without a content attribute counts as absent
        elem = document.select_one(selector)
        if elem is None:
            return None
        content = elem.get("content")
        if isinstance(content, list):
            content = " ".join(content)
        return content
