"""pagemeta.query - one-call metadata extraction from pre-fetched HTML.

No network access: the caller supplies the markup.

Basic usage::

    from pagemeta import extract

    article = extract(html, url="https://example.com/blog/post#!section")
    print(article.title)
    print(article.canonical_link)
    print(article.language)

    # As a plain dict
    data = article.model_dump()
"""

from __future__ import annotations

import logging

from pagemeta.config import Configuration
from pagemeta.document import parse_html
from pagemeta.extractors.metadata import MetaExtractor
from pagemeta.extractors.urlnorm import clean_url, extract_domain
from pagemeta.items import Article
from pagemeta.pipeline import Pipeline

logger = logging.getLogger(__name__)


def build_article(html: str, url: str = "") -> Article:
    """Create the :class:`Article` record the pipeline stages work on.

    Raises:
        MalformedURLError: If *url* cannot be parsed.
    """
    article = Article(doc=parse_html(html))
    if url:
        cleaned = clean_url(url)
        article.url = cleaned.url
        article.final_url = cleaned.final_url
        article.link_hash = cleaned.link_hash
        article.domain = extract_domain(cleaned.final_url)
    return article


def extract(
    html: str,
    url: str = "",
    config: Configuration | None = None,
) -> Article:
    """Extract page metadata from *html*.

    Args:
        html:   Raw HTML string.
        url:    Page URL; used for the canonical-link fallback and to strip
                the domain out of titles.  Pass "" if unknown.
        config: Pipeline configuration.  Its ``language`` is the default
                for pages that declare none and is updated with the result.

    Returns:
        The populated :class:`~pagemeta.items.Article`.

    Raises:
        MalformedURLError: If *url* cannot be parsed.
    """
    config = config if config is not None else Configuration()
    article = build_article(html, url)
    logger.info("extract: %s (%d bytes)", url or "<no url>", len(html))
    return Pipeline([MetaExtractor(config)]).run(article)
