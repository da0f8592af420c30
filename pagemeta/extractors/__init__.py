"""Extraction sub-package: metadata heuristics, URL and text normalisation."""

from .metadata import MetaExtractor, clean_title, extract_open_graph, first_non_empty
from .text import text_normalise
from .urlnorm import CleanedUrl, MalformedURLError, clean_url, extract_domain, link_hash

__all__ = [
    "CleanedUrl",
    "MalformedURLError",
    "MetaExtractor",
    "clean_title",
    "clean_url",
    "extract_domain",
    "extract_open_graph",
    "first_non_empty",
    "link_hash",
    "text_normalise",
]
