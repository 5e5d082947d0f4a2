"""
Tree cleaner: rebuilds an HTML subtree without noise elements.

The cleaner walks an element bottom-up and re-serializes only what carries
text. Elements in the skip set are dropped with their whole subtree, and an
element whose children all vanished vanishes too, so empty wrappers never
pile up the tree (<div><div><p></p></div></div> → "").

Output is a bare fragment: tag names and text only, no attributes.

Design principle: NEVER FAIL on bad HTML. parse_document() always returns a
tree, and the cleaner walks iteratively so very deep documents are safe.
"""

from html import escape
from typing import Iterable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .logger import get_module_logger

logger = get_module_logger("cleaner")


# Element names treated as non-content chrome. Everything under them is
# dropped, whatever it contains.
SKIP_TAGS = frozenset([
    # Metadata
    "script", "style", "noscript",
    # Navigation and page chrome
    "header", "footer", "nav", "aside",
    # Ads and forms
    "iframe", "form", "input", "button",
    # Embedded media chrome
    "svg", "picture", "source",
])


def parse_document(html: str) -> BeautifulSoup:
    """
    Parse raw HTML into a BeautifulSoup document.

    Parser fallback chain: html5lib → lxml → html.parser. html5lib follows
    the WHATWG algorithm (the same tree a browser builds), lxml is the fast
    tolerant fallback, and html.parser is always available.
    """
    try:
        return BeautifulSoup(html, "html5lib")
    except Exception as e:
        logger.warning(f"html5lib parsing failed, trying lxml: {e}")

    try:
        return BeautifulSoup(html, "lxml")
    except Exception as e:
        logger.warning(f"lxml parsing also failed: {e}")

    return BeautifulSoup(html, "html.parser")


def as_skip_set(skip_tags: Iterable[str]) -> frozenset:
    """Normalize a skip set; a bare string is one tag name, not its letters."""
    if isinstance(skip_tags, str):
        return frozenset([skip_tags])
    if isinstance(skip_tags, frozenset):
        return skip_tags
    return frozenset(skip_tags)


def _is_text(node) -> bool:
    # Comments, doctypes, CDATA and processing instructions are all
    # PreformattedString subclasses and never count as content.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _wrap(tag_name: str, parts: list[str]) -> str:
    if not parts:
        return ""
    return f"<{tag_name}>{' '.join(parts)}</{tag_name}>"


def clean_element(element: Tag, skip_tags: Iterable[str] = SKIP_TAGS) -> str:
    """
    Clean an element, returning serialized HTML or "" if nothing survived.

    For each child, in document order:
      - elements are cleaned the same way; non-empty results are kept
      - text is stripped; non-empty text is kept (HTML-escaped)
    Kept parts are joined with a single space and wrapped in the element's
    tag. An element in ``skip_tags``, or one with no kept parts, yields "".

    Example:
        <div><p>Keep this</p><script>x()</script><p></p></div>
        → <div><p>Keep this</p></div>

    Args:
        element: Element to clean
        skip_tags: Tag names to drop together with their subtrees

    Returns:
        Cleaned HTML fragment, or "" when the element has no content
    """
    skip_tags = as_skip_set(skip_tags)
    if element.name in skip_tags:
        return ""

    # Explicit post-order walk. Each frame is (element, pending children,
    # surviving parts); a frame is wrapped and handed to its parent once its
    # children are exhausted.
    stack = [(element, iter(element.children), [])]
    cleaned = ""

    while stack:
        node, children, parts = stack[-1]
        child = next(children, None)

        if child is None:
            stack.pop()
            cleaned = _wrap(node.name, parts)
            if stack and cleaned:
                stack[-1][2].append(cleaned)
            continue

        if isinstance(child, Tag):
            if child.name not in skip_tags:
                stack.append((child, iter(child.children), []))
        elif _is_text(child):
            text = child.strip()
            if text:
                parts.append(escape(text, quote=False))

    return cleaned


def clean_html(html: str, skip_tags: Iterable[str] = SKIP_TAGS) -> str:
    """
    Parse an HTML fragment and clean its first top-level element.

    Convenience for re-cleaning output of clean_element(): html5lib wraps
    fragments in <html><body>, so the first element inside the body (or the
    <body>/<html> itself when the fragment starts with one) is cleaned.
    """
    soup = parse_document(html)
    start = html.lstrip().lower()
    if start.startswith(("<html", "<!doctype")):
        root = soup.find("html")
    elif start.startswith("<body"):
        root = soup.body
    elif soup.body is not None:
        root = soup.body.find(True, recursive=False)
    else:
        root = soup.find(True)
    if root is None:
        return ""
    return clean_element(root, skip_tags)
