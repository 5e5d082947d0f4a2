"""
HTTP fetcher: one GET per page, no retry.

The connection and the body read are separate steps (stream=True) so a
transport failure (FetchError) can be told apart from a body that broke
off after the server answered (ReadError).
"""

import re
from typing import Optional

import requests

from .exceptions import FetchError, ReadError
from .logger import get_module_logger

logger = get_module_logger("fetcher")

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT = 30

# WHATWG encoding spec: browsers silently remap these labels.
# https://encoding.spec.whatwg.org/#names-and-labels
WHATWG_CHARSET_MAP = {
    "iso-8859-1": "windows-1252",
    "iso8859-1": "windows-1252",
    "iso88591": "windows-1252",
    "latin-1": "windows-1252",
    "latin1": "windows-1252",
    "us-ascii": "windows-1252",
    "ascii": "windows-1252",
    "iso-8859-9": "windows-1254",
    "iso-8859-11": "windows-874",
}

META_CHARSET_PATTERN = re.compile(rb'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE)
HEADER_CHARSET_PATTERN = re.compile(r'charset=["\']?([^\s"\';]+)', re.IGNORECASE)


def detect_charset_from_bytes(raw_bytes: bytes) -> Optional[str]:
    """
    Find the charset declared in the first 2048 bytes of a page.

    Covers both <meta charset="..."> and the legacy http-equiv
    Content-Type form, and applies the WHATWG label mapping. Returns None
    when the page declares nothing.
    """
    m = META_CHARSET_PATTERN.search(raw_bytes[:2048])
    if not m:
        return None
    charset = m.group(1).decode("ascii", errors="ignore").strip().lower()
    return WHATWG_CHARSET_MAP.get(charset, charset) or None


def decode_body(raw_bytes: bytes, header_charset: Optional[str] = None) -> str:
    """
    Decode a response body.

    Charset priority: page <meta> declaration > HTTP header > UTF-8.
    Undecodable bytes are replaced, never raised.
    """
    for charset in (detect_charset_from_bytes(raw_bytes), header_charset):
        if not charset:
            continue
        charset = WHATWG_CHARSET_MAP.get(charset.lower(), charset)
        try:
            return raw_bytes.decode(charset, errors="replace")
        except LookupError:
            logger.warning(f"Unknown charset '{charset}', trying next candidate")

    return raw_bytes.decode("utf-8", errors="replace")


def _next_cause(exc: BaseException) -> Optional[BaseException]:
    # requests wraps urllib3 errors in args[0]; urllib3 keeps the socket
    # error in .reason
    if exc.__cause__ is not None:
        return exc.__cause__
    reason = getattr(exc, "reason", None)
    if isinstance(reason, BaseException):
        return reason
    for arg in exc.args:
        if isinstance(arg, BaseException):
            return arg
    return None


def cause_chain(exc: BaseException) -> list[str]:
    """Messages of the errors underneath ``exc``, outermost first."""
    causes = []
    seen = {id(exc)}
    current = _next_cause(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        causes.append(str(current))
        current = _next_cause(current)
    return causes


class Fetcher:
    """Downloads a page with a browser User-Agent."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = USER_AGENT):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}

    def fetch(self, url: str) -> str:
        """
        GET ``url`` and return the decoded body.

        Raises:
            FetchError: the request could not be sent or no response arrived
            ReadError: the response body could not be read
        """
        logger.info(f"Fetching {url}")

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            causes = cause_chain(e)
            logger.warning(f"Fetch failed for {url}: {e}")
            raise FetchError(str(e), causes=causes, details={"url": url})

        try:
            # Status codes are not failures: error pages still carry HTML
            if response.status_code >= 400:
                logger.warning(f"HTTP {response.status_code} for {url}")

            try:
                raw_bytes = response.content
            except requests.exceptions.RequestException as e:
                logger.warning(f"Body read failed for {url}: {e}")
                raise ReadError(str(e), details={"url": url})
        finally:
            response.close()

        # requests guesses ISO-8859-1 for any text/* without a charset, so
        # only an explicit header declaration is used
        m = HEADER_CHARSET_PATTERN.search(response.headers.get("Content-Type", ""))
        text = decode_body(raw_bytes, m.group(1) if m else None)
        logger.info(f"Fetched {len(raw_bytes)} bytes from {url}")
        return text
