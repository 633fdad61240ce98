"""Rendering collaborators: highlighting, HTML escaping/stripping, spam filtering"""

import re
from html.parser import HTMLParser
from typing import Iterable

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from snipbin.core.errors import HighlightError, SpamRejected
from snipbin.core.models import Document


_SYNTAX_RE = re.compile(r"^[A-Za-z0-9_+#.-]*$")
_BACKTICKS_RE = re.compile(r"`+")
_URL_RE = re.compile(r"https?://", re.IGNORECASE)

_md = MarkdownIt("commonmark")


def escape_html(content: str) -> str:
    return escapeHtml(content)


def highlight(content: str, syntax: str) -> str:
    """Render content as a plain <pre><code class="language-..."> block.

    No token-level highlighting happens here; the hint only becomes the
    class name for client-side highlighters.

    The fence is one backtick longer than the longest run inside the content,
    so no content line can close it early.
    """
    if not _SYNTAX_RE.match(syntax):
        raise HighlightError(f"unsupported syntax hint: {syntax!r}")
    longest = max((len(m.group()) for m in _BACKTICKS_RE.finditer(content)), default=0)
    fence = "`" * max(3, longest + 1)
    return _md.render(f"{fence}{syntax}\n{content}{fence}\n").removesuffix("\n")


class _TextExtractor(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []

    def handle_data(self, data):
        self.parts.append(data)


def strip_html(html: str) -> str:
    """Drop all tags and decode entities, leaving the plain text."""
    parser = _TextExtractor()
    parser.feed(html)
    parser.close()
    return "".join(parser.parts)


class SpamFilter:
    """Vetoes writes whose rendered content matches a pattern or whose raw content has too many links."""

    def __init__(self, patterns: Iterable[str] = (), max_links: int = 0):
        self.patterns = [re.compile(p) for p in patterns]
        self.max_links = max_links

    def check(self, doc: Document, rendered: str) -> None:
        for pattern in self.patterns:
            if pattern.search(rendered):
                raise SpamRejected(f"content matches blocked pattern {pattern.pattern!r}")
        if self.max_links:
            links = len(_URL_RE.findall(doc.content))
            if links > self.max_links:
                raise SpamRejected(f"content contains {links} links (max {self.max_links})")
