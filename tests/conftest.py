"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pagemeta.config import Configuration
from pagemeta.document import parse_html
from pagemeta.items import Article

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def minimal_article_html() -> str:
    return _read_fixture("minimal_article.html")


@pytest.fixture
def config() -> Configuration:
    return Configuration()


@pytest.fixture
def make_article() -> Callable[..., Article]:
    """Factory: Article over an HTML string plus any precomputed fields."""
    def _make(html: str, **kwargs) -> Article:
        return Article(doc=parse_html(html), **kwargs)
    return _make
