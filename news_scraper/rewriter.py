"""
Rewrite stage: cleaned HTML → Markdown through an LLM.

Pipeline position: last stage (Fetcher → Extractor → Rewriter).
Input:  ArticleRecord whose content is the cleaned HTML fragment
Output: copy of the record whose content is the model's Markdown

The whole record goes to the model as JSON so it sees title, author and
date, but only ``content`` is replaced. On any failure the caller's record
is untouched and RewriteError is raised.
"""

import threading
from typing import Optional, Union

from .schemas import ArticleRecord
from .llm_client import LLMClient, BaseLLMClient, LLMProvider
from .exceptions import LLMClientError, RewriteError
from .logger import get_module_logger

logger = get_module_logger("rewriter")

DEFAULT_LANGUAGE = "english"
EMPTY_RESPONSE_MESSAGE = "LLM Error: empty response from model"

# --- LLM Prompt Design ---
# The system prompt fixes the role and the output rules; the user prompt
# carries the record. The language appears in both so a model that only
# weighs one of them still translates.

SYSTEM_PROMPT = (
    "You are an expert markdown formatter and translator. Given a JSON object "
    "representing a news post, extract and output only the text content in "
    "Markdown format in {lang}. Remove all HTML tags and extra markup. Do not "
    "include any JSON keys or metadata, only the formatted content. If {lang} "
    "is not supported, default to " + DEFAULT_LANGUAGE + "."
)

USER_PROMPT = (
    "Convert the following Post JSON into Markdown formatted text in {lang} "
    "language, nothing else:\n\n{post_json}"
)


def normalize_language(language: Optional[str]) -> str:
    """Blank or missing language → DEFAULT_LANGUAGE."""
    if language is None or not language.strip():
        return DEFAULT_LANGUAGE
    return language.strip()


class Rewriter:
    """LLM-backed Markdown formatter/translator."""

    def __init__(
        self,
        llm_client: Optional[BaseLLMClient] = None,
        provider: Optional[Union[LLMProvider, str]] = None,
        model: Optional[str] = None
    ):
        self.llm_client = llm_client
        self.provider = provider
        self.model = model
        self._client_lock = threading.Lock()

    def _get_client(self) -> BaseLLMClient:
        # Created on first use, not in __init__, so a missing API key is a
        # rewrite failure rather than a construction failure.
        # The lock keeps concurrent scrapes from each building a client.
        with self._client_lock:
            if self.llm_client is None:
                try:
                    self.llm_client = LLMClient.create(provider=self.provider, model=self.model)
                except LLMClientError as e:
                    raise RewriteError(e.message, details={"provider": e.provider})
            return self.llm_client

    def rewrite(self, record: ArticleRecord, language: Optional[str] = DEFAULT_LANGUAGE) -> ArticleRecord:
        """
        Rewrite ``record.content`` as Markdown in ``language``.

        Args:
            record: Scraped record; content holds cleaned HTML
            language: Target language, blank means english

        Returns:
            New ArticleRecord with content replaced by the model output

        Raises:
            RewriteError: missing credential, serialization or model failure,
                or a blank model response
        """
        lang = normalize_language(language)
        client = self._get_client()

        try:
            post_json = record.model_dump_json()
        except ValueError as e:
            raise RewriteError(f"Failed to serialize article to JSON: {e}")

        logger.info(f"Rewriting {len(record.content)} chars of content in {lang}")

        try:
            markdown = client.complete(
                prompt=USER_PROMPT.format(lang=lang, post_json=post_json),
                system_prompt=SYSTEM_PROMPT.format(lang=lang)
            )
        except LLMClientError as e:
            raise RewriteError(f"LLM Error: {e.message}", details={"provider": e.provider})
        except Exception as e:
            # Injected clients are not bound to raise LLMClientError
            logger.error(f"Unexpected LLM client error: {e}")
            raise RewriteError(f"LLM Error: {e}")

        if not markdown or not markdown.strip():
            raise RewriteError(EMPTY_RESPONSE_MESSAGE)

        logger.info(f"Rewrite complete: {len(markdown)} chars of Markdown")
        return record.model_copy(update={"content": markdown})

