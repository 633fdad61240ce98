"""Unit tests for core/render.py"""

import pytest

from snipbin.core.errors import HighlightError, SpamRejected
from snipbin.core.models import Document
from snipbin.core.render import SpamFilter, escape_html, highlight, strip_html


def test_highlight_wraps_in_code_block():
    html = highlight("print(1)\n", "python")
    assert html == '<pre><code class="language-python">print(1)\n</code></pre>'


def test_highlight_without_syntax():
    assert highlight("plain\n", "") == "<pre><code>plain\n</code></pre>"


def test_highlight_escapes_markup():
    html = highlight("<script>alert('x')</script>\n", "html")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_highlight_content_with_backtick_fences():
    """Backtick runs inside the content cannot close the surrounding fence."""
    content = "```\nnot the end\n````\n"
    assert strip_html(highlight(content, "markdown")) == content


@pytest.mark.parametrize("syntax", ["py thon", "a`b", "<b>"])
def test_highlight_rejects_bad_syntax_hint(syntax):
    with pytest.raises(HighlightError):
        highlight("x\n", syntax)


def test_escape_html():
    assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"


@pytest.mark.parametrize("content", [
    "line1\nline2\n",
    "a < b && c > d\n",
    "&amp; already escaped\n",
    "  indented\n\ttabbed\n",
])
def test_strip_html_inverts_highlight(content):
    assert strip_html(highlight(content, "text")) == content


def test_strip_html_inverts_escape():
    content = "<p>\"quoted\" & more</p>\n"
    assert strip_html(escape_html(content)) == content


# --- SpamFilter ---

def test_spam_filter_allows_by_default():
    SpamFilter().check(Document(content="http://a http://b\n"), "anything")


def test_spam_filter_pattern_hit():
    spam = SpamFilter(patterns=[r"(?i)cheap pills"])
    with pytest.raises(SpamRejected, match="blocked pattern"):
        spam.check(Document(content="x"), "<pre>Buy CHEAP PILLS</pre>")


def test_spam_filter_max_links():
    spam = SpamFilter(max_links=2)
    spam.check(Document(content="http://a https://b\n"), "")
    with pytest.raises(SpamRejected, match="3 links"):
        spam.check(Document(content="http://a https://b http://c\n"), "")
