"""
Tests for the tag filter and tree cleaner.
"""

import pytest

from news_scraper.cleaner import SKIP_TAGS, as_skip_set, clean_element, clean_html, parse_document


def body_of(html: str):
    return parse_document(html).body


def test_skip_tags_default_list():
    assert SKIP_TAGS == frozenset([
        "script", "style", "noscript", "iframe", "header", "footer", "nav",
        "aside", "form", "input", "button", "svg", "picture", "source",
    ])


def test_drops_skipped_children_and_empty_paragraphs():
    body = body_of("<div><p>Keep this text</p><script>alert('x')</script><p></p></div>")
    div = body.find("div")

    assert clean_element(div) == "<div><p>Keep this text</p></div>"


def test_skipped_root_returns_empty():
    body = body_of("<nav><p>Home</p></nav>")

    assert clean_element(body.find("nav")) == ""


def test_nested_empty_wrappers_vanish():
    body = body_of("<div><div><div><p> </p></div></div><section></section></div><p>Text</p>")

    assert clean_element(body) == "<body><p>Text</p></body>"


def test_skip_tags_removed_at_any_depth():
    html = """
    <article>
        <p>Intro <span>kept <script>evil()</script> words</span></p>
        <div><div><form><input name="q"><button>Go</button><p>Subscribe</p></form></div></div>
        <figure><picture><source srcset="a.webp"></picture><svg><text>icon</text></svg></figure>
        <aside><p>Sidebar ad</p></aside>
        <p>Outro</p>
    </article>
    """
    cleaned = clean_element(body_of(html).find("article"))

    for tag in SKIP_TAGS:
        assert f"<{tag}>" not in cleaned
    assert "evil" not in cleaned
    assert "Subscribe" not in cleaned
    assert "Sidebar ad" not in cleaned
    assert "icon" not in cleaned
    assert cleaned == "<article><p>Intro <span>kept words</span></p> <p>Outro</p></article>"


def test_whitespace_only_tree_is_empty():
    html = "<div>\n   <p>   </p>\t<span> <em>\n</em> </span><!-- a comment --></div>"

    assert clean_element(body_of(html).find("div")) == ""


def test_comments_are_not_content():
    body = body_of("<p><!-- hidden note -->Visible</p>")

    assert clean_element(body.find("p")) == "<p>Visible</p>"


def test_attributes_are_dropped():
    body = body_of('<p class="lead" id="x">Hello <a href="/next">next</a></p>')

    assert clean_element(body.find("p")) == "<p>Hello <a>next</a></p>"


def test_text_is_escaped():
    body = body_of("<p>5 &lt; 6 &amp; 7 &gt; 3</p>")

    assert clean_element(body.find("p")) == "<p>5 &lt; 6 &amp; 7 &gt; 3</p>"


def test_custom_skip_set():
    body = body_of("<div><p>Keep</p><table><tr><td>Drop</td></tr></table><script>x</script></div>")

    cleaned = clean_element(body.find("div"), skip_tags=["table"])

    assert cleaned == "<div><p>Keep</p> <script>x</script></div>"


def test_deep_nesting_does_not_recurse():
    depth = 3000
    html = "<div>" * depth + "deep" + "</div>" * depth
    soup = parse_document(html)
    root = soup.body.find("div")

    cleaned = clean_element(root)

    assert cleaned.startswith("<div><div>")
    assert "deep" in cleaned
    assert cleaned.count("<div>") == depth


@pytest.mark.parametrize("html", [
    "<article><p>Hello</p><script>bad()</script></article>",
    "<article><h1>Title</h1><p>One <b>bold</b> and <i>italic</i>.</p><ul><li>a</li><li>b</li></ul></article>",
    "<body><nav>menu</nav><p>Main text</p><p>5 &lt; 6</p></body>",
])
def test_cleaning_is_idempotent(html):
    once = clean_html(html)
    twice = clean_html(once)

    assert once
    assert twice == once


def test_clean_html_whole_document():
    html = "<html><head><title>T</title></head><body><p>Hi</p></body></html>"

    assert clean_html(html) == "<html><head><title>T</title></head> <body><p>Hi</p></body></html>"


def test_parse_document_never_fails_on_broken_html():
    soup = parse_document("<div><p>unclosed <b>bold</div></span>")

    assert soup.body is not None
    assert "unclosed" in soup.get_text()


def test_single_tag_name_as_skip_set():
    body = body_of("<div><p>Keep</p><table><tr><td>Drop</td></tr></table></div>")

    assert clean_element(body.find("div"), skip_tags="table") == "<div><p>Keep</p></div>"
    assert as_skip_set("table") == frozenset(["table"])
    assert as_skip_set(["nav", "aside"]) == frozenset(["nav", "aside"])
