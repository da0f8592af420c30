"""pagemeta - canonical page metadata from parsed HTML.

Quick usage::

    from pagemeta import extract

    article = extract(html, url="https://example.com/blog/some-post")
    print(article.title)
    print(article.meta_description)
    print(article.open_graph)

As one stage of a larger pipeline::

    from pagemeta import Configuration, MetaExtractor, Pipeline, build_article

    config = Configuration(language="en")
    pipeline = Pipeline([MetaExtractor(config)])
    article = pipeline.run(build_article(html, url))

URL cleaning::

    from pagemeta import clean_url

    clean_url("http://x.com/a#!b").final_url
    # 'http://x.com/a?_escaped_fragment_=b'
"""

from pagemeta.config import Configuration
from pagemeta.document import Document, HtmlDocument, Node, parse_html
from pagemeta.extractors.metadata import MetaExtractor, clean_title
from pagemeta.extractors.text import text_normalise
from pagemeta.extractors.urlnorm import CleanedUrl, MalformedURLError, clean_url
from pagemeta.items import Article
from pagemeta.pipeline import Pipeline, PipelineStage
from pagemeta.query import build_article, extract

__version__ = "0.1.0"
__all__ = [
    "Article",
    "CleanedUrl",
    "Configuration",
    "Document",
    "HtmlDocument",
    "MalformedURLError",
    "MetaExtractor",
    "Node",
    "Pipeline",
    "PipelineStage",
    "build_article",
    "clean_title",
    "clean_url",
    "extract",
    "parse_html",
    "text_normalise",
]
