"""pagemeta.document — the document-query interface the extractors consume.

Extraction code never touches a parser directly.  It only needs four
operations, expressed as ``runtime_checkable`` ``Protocol`` contracts so a
test can hand in any object tree that answers them::

    doc.find("meta[property^='og:']")       # CSS selector  -> list[Node]
    doc.find_xpath("descendant::title")     # XPath 1.0     -> list[Node]
    node.attr("content")                    # str | None
    node.text()                             # str

:class:`HtmlDocument` is the production implementation: BeautifulSoup (with
the ``lxml`` parser) answers CSS selectors through soupsieve, and an lxml
tree built from the same markup answers XPath.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import lxml.html
from bs4 import BeautifulSoup, Tag
from lxml import etree
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Protocol definitions
# ---------------------------------------------------------------------------

@runtime_checkable
class Node(Protocol):
    """A single element returned by a document query."""

    def attr(self, name: str) -> str | None:
        """Return the value of attribute *name*, or None when absent."""
        ...

    def text(self) -> str:
        """Return the concatenated text content of the element."""
        ...


@runtime_checkable
class Document(Protocol):
    """A parsed document that can be queried by CSS selector or XPath."""

    def find(self, selector: str) -> list[Node]:
        """Return nodes matching the CSS *selector*, in document order."""
        ...

    def find_xpath(self, expression: str) -> list[Node]:
        """Return element nodes matching the XPath *expression*, in document order."""
        ...


# ---------------------------------------------------------------------------
# Node adapters
# ---------------------------------------------------------------------------

def _safe_str(val: Any) -> str | None:
    """Convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return None
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


class SoupNode:
    """:class:`Node` backed by a BeautifulSoup ``Tag``."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def attr(self, name: str) -> str | None:
        return _safe_str(self._tag.get(name))

    def text(self) -> str:
        return self._tag.get_text()

    def __repr__(self) -> str:
        return f"SoupNode(<{self._tag.name}>)"


class LxmlNode:
    """:class:`Node` backed by an lxml element."""

    __slots__ = ("_el",)

    def __init__(self, el: etree._Element) -> None:
        self._el = el

    def attr(self, name: str) -> str | None:
        return self._el.get(name)

    def text(self) -> str:
        return "".join(self._el.itertext())

    def __repr__(self) -> str:
        return f"LxmlNode(<{self._el.tag}>)"


# ---------------------------------------------------------------------------
# Document adapter
# ---------------------------------------------------------------------------

class HtmlDocument:
    """:class:`Document` over raw HTML.

    Args:
        html: Raw HTML string.
        soup: Pre-parsed BeautifulSoup object.  When provided the HTML is
              not re-parsed for CSS queries.

    The lxml tree used for XPath is built lazily on the first
    :meth:`find_xpath` call.
    """

    def __init__(self, html: str, soup: BeautifulSoup | None = None) -> None:
        self._html = html
        self._soup = soup if soup is not None else BeautifulSoup(html, "lxml")
        self._tree: etree._Element | None = None
        self._tree_built = False

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def find(self, selector: str) -> list[Node]:
        try:
            tags = self._soup.select(selector)
        except SelectorSyntaxError as exc:
            logger.debug("Invalid CSS selector %r: %s", selector, exc)
            return []
        return [SoupNode(tag) for tag in tags]

    def find_xpath(self, expression: str) -> list[Node]:
        tree = self._lxml_tree()
        if tree is None:
            return []
        try:
            result = tree.xpath(expression)
        except etree.XPathError as exc:
            logger.debug("Invalid XPath expression %r: %s", expression, exc)
            return []
        if not isinstance(result, list):
            return []
        return [LxmlNode(el) for el in result if isinstance(el, etree._Element)]

    def _lxml_tree(self) -> etree._Element | None:
        if not self._tree_built:
            self._tree_built = True
            if self._html.strip():
                # Bytes input sidesteps lxml's refusal of str with an encoding declaration
                parser = lxml.html.HTMLParser(encoding="utf-8")
                try:
                    self._tree = lxml.html.document_fromstring(
                        self._html.encode("utf-8"), parser=parser,
                    )
                except (etree.ParserError, ValueError) as exc:
                    logger.debug("lxml could not build a tree: %s", exc)
        return self._tree


def parse_html(html: str) -> HtmlDocument:
    """Parse *html* into an :class:`HtmlDocument`."""
    return HtmlDocument(html)
