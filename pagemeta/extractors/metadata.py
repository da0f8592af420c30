"""Deterministic page-metadata extraction from a parsed document.

Fields are resolved in a fixed order, each through its own fallback chain
(first non-empty source wins):

    OpenGraph → title → description → keywords → canonical link → language

The title chain depends on the OpenGraph mapping resolved just before it,
so the order matters.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from pagemeta.config import Configuration
from pagemeta.document import parse_html

from .text import text_normalise

if TYPE_CHECKING:
    from pagemeta.document import Document, Node
    from pagemeta.items import Article

logger = logging.getLogger(__name__)

# Punctuation separating a site name from the article title:
#   "TechCrunch | my wonderful article"
#   "my wonderful article - TechCrunch"
SPLITTER_CHARS: frozenset[str] = frozenset({"|", "-", "»", ":"})

_LANGUAGE_RE = re.compile(r"[A-Za-z]{2}")

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def first_non_empty(*sources: Callable[[], str | None]) -> str:
    """Call each source in order and return the first non-empty result.

    Sources after the first hit are never evaluated.  Returns "" when
    every source comes back empty.
    """
    for source in sources:
        value = source()
        if value:
            return value
    return ""


def _nodes_by_lowercase_value(
    doc: Document,
    tag: str,
    attrs: str | Iterable[str],
    value: str,
    path: str = "descendant::",
) -> list[Node]:
    """Return *tag* elements whose attribute(s) equal *value*, ignoring case."""
    if isinstance(attrs, str):
        attrs = (attrs,)
    predicate = " or ".join(
        f"translate(@{attr}, '{_UPPER}', '{_LOWER}')='{value}'" for attr in attrs
    )
    return doc.find_xpath(f"{path}{tag}[{predicate}]")


def _first_attr(nodes: list[Node], attr: str, strip: bool = True) -> str:
    if not nodes:
        return ""
    val = nodes[0].attr(attr)
    if not isinstance(val, str):
        return ""
    return val.strip() if strip else val


def _meta_content(
    doc: Document,
    attrs: str | Iterable[str],
    value: str,
    path: str = "descendant::",
    strip: bool = True,
) -> str:
    """``content`` of the first matching ``<meta>`` (trimmed unless *strip* is off), or ""."""
    nodes = _nodes_by_lowercase_value(doc, "meta", attrs, value, path)
    return _first_attr(nodes, "content", strip=strip)


# ---------------------------------------------------------------------------
# OpenGraph
# ---------------------------------------------------------------------------

def _property_key(prop: str) -> str:
    """Drop the namespace segment: ``og:image:width`` → ``image:width``."""
    return ":".join(prop.split(":")[1:])


def extract_open_graph(doc: Document) -> dict[str, str]:
    """Collect ``og:*`` properties, plus the ``{og:type}:*`` extensions.

    A page declaring ``og:type=article`` also gets its ``article:*``
    properties (``article:author`` → ``author``).  On duplicate keys the
    last node in document order wins.
    """
    results: dict[str, str] = {}

    for node in doc.find('meta[property^="og:" i]'):
        results[_property_key(node.attr("property") or "")] = node.attr("content") or ""

    # Type-specific values (http://ogp.me/#types)
    og_type = results.get("type")
    if og_type:
        prefix = f"{og_type}:".lower()
        for node in doc.find("meta[property]"):
            prop = node.attr("property") or ""
            if prop.lower().startswith(prefix):
                results[_property_key(prop)] = node.attr("content") or ""

    return results


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def clean_title(
    title: str,
    open_graph: Mapping[str, str] | None = None,
    domain: str = "",
) -> str:
    """Strip site-name framing from *title*.

    Removes the OpenGraph ``site_name`` (case-sensitive) and the *domain*
    (case-insensitive), then drops a lone splitter character left at the
    end and then at the start:

        "TechCrunch | My Article"  (site_name="TechCrunch") → "My Article"
    """
    site_name = (open_graph or {}).get("site_name")
    if site_name and site_name != title:
        title = title.replace(site_name, "")

    if domain:
        title = re.sub(re.escape(domain), "", title, flags=re.IGNORECASE)

    words = title.split()
    if not words:
        return ""

    if words[-1] in SPLITTER_CHARS:
        words.pop()

    if words and words[0] in SPLITTER_CHARS:
        words.pop(0)

    return " ".join(words).strip()


# ---------------------------------------------------------------------------
# Stage
# ---------------------------------------------------------------------------

class MetaExtractor:
    """Pipeline stage filling an :class:`~pagemeta.items.Article`'s metadata.

    Args:
        config: Pipeline configuration.  Its ``language`` is the fallback
                when the page declares none, and is overwritten with the
                language resolved for each article.
    """

    name = "meta"

    def __init__(self, config: Configuration | None = None) -> None:
        self.config = config if config is not None else Configuration()

    def run(self, article: Article) -> Article:
        doc = article.doc if article.doc is not None else parse_html("")

        article.open_graph = extract_open_graph(doc)
        article.title = self._title(doc, article)
        article.meta_description = self._meta_description(doc)
        article.meta_keywords = self._meta_keywords(doc)
        article.canonical_link = self._canonical_link(doc, article)
        article.language = self._meta_language(doc) or self.config.get("language")

        self.config.set("language", article.language)

        logger.debug(
            "meta: %s title=%r canonical=%s language=%s og_keys=%d",
            article.final_url or article.url or "<no url>",
            article.title,
            article.canonical_link,
            article.language,
            len(article.open_graph),
        )
        return article

    # ------------------------------------------------------------------
    # Field resolvers
    # ------------------------------------------------------------------

    def _clean(self, article: Article, title: str) -> str:
        return clean_title(title, article.open_graph, article.domain)

    def _title(self, doc: Document, article: Article) -> str:
        return first_non_empty(
            lambda: self._clean(article, article.open_graph.get("title") or ""),
            lambda: self._clean(
                article, _meta_content(doc, ("name", "property"), "headline"),
            ),
            lambda: self._clean(article, self._head_title(doc)),
        )

    @staticmethod
    def _head_title(doc: Document) -> str:
        nodes = doc.find("html > head > title")
        if not nodes:
            return ""
        return text_normalise(nodes[0].text())

    @staticmethod
    def _meta_description(doc: Document) -> str:
        return first_non_empty(
            lambda: _meta_content(doc, "name", "description"),
            lambda: _meta_content(doc, "property", "og:description"),
            lambda: _meta_content(doc, "name", "twitter:description"),
        )

    @staticmethod
    def _meta_keywords(doc: Document) -> str:
        return _meta_content(doc, "name", "keywords")

    @staticmethod
    def _canonical_link(doc: Document, article: Article) -> str:
        return first_non_empty(
            lambda: _first_attr(_nodes_by_lowercase_value(doc, "link", "rel", "canonical"), "href"),
            lambda: _meta_content(doc, "property", "og:url"),
            lambda: _meta_content(doc, "name", "twitter:url"),
            lambda: article.final_url,
        )

    @staticmethod
    def _meta_language(doc: Document) -> str:
        # Raw values: " en " is not a two-letter code
        lang = first_non_empty(
            lambda: _first_attr(doc.find("html[lang]"), "lang", strip=False),
            lambda: _meta_content(
                doc, "http-equiv", "content-language", path="/html/head/", strip=False,
            ),
            lambda: _meta_content(doc, "name", "lang", path="/html/head/", strip=False),
        )
        if _LANGUAGE_RE.fullmatch(lang):
            return lang.lower()
        if lang:
            logger.debug("Rejected language %r: not a two-letter code", lang)
        return ""
