"""
Pydantic schemas for the values passed between pipeline stages.

ArticleMetadata: output of the metadata extractor (head/meta elements only)
ArticleRecord:   the single result of a scrape, success or failure

Data flow through the pipeline:
  Fetcher → raw HTML → Extractor produces content + ArticleMetadata
  → ArticleRecord → Rewriter replaces content with Markdown
"""

from typing import Optional
from pydantic import BaseModel


class ArticleMetadata(BaseModel):
    """Metadata read from the document head."""
    title: str = ""                           # Collapsed <title> text, "" when missing
    featured_image_url: str = ""              # og:image, "" when missing
    publication_date: Optional[str] = None    # article:published_time, raw string
    author: Optional[str] = None              # meta[name=author]


class ArticleRecord(BaseModel):
    """
    Result of one scrape.

    ``content`` holds the cleaned HTML fragment until the rewrite stage
    replaces it with Markdown. A non-empty ``error`` marks the record as
    failed; callers should not need anything else to tell success from
    failure.

    ``publication_date`` and ``author`` are None (not "") when the page does
    not declare them, so consumers can tell "absent" from "empty".
    """
    title: str = ""
    content: str = ""
    featured_image_url: str = ""
    publication_date: Optional[str] = None
    author: Optional[str] = None
    error: str = ""

    @classmethod
    def failure(cls, message: str) -> "ArticleRecord":
        """Build a failure record; every other field is cleared."""
        return cls(error=message)

    @classmethod
    def from_scrape(cls, content: str, metadata: ArticleMetadata) -> "ArticleRecord":
        return cls(content=content, **metadata.model_dump())

    @property
    def ok(self) -> bool:
        return not self.error

    def to_text(self) -> str:
        """Human-readable form: the title, a blank line, then the content."""
        return f"{self.title}\n\n{self.content}"

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent)
