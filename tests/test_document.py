"""Tests for the document-query interface and its HTML adapter."""

from __future__ import annotations

from pagemeta.document import Document, HtmlDocument, Node, parse_html
from pagemeta.extractors.metadata import MetaExtractor
from pagemeta.items import Article

# ---------------------------------------------------------------------------
# In-memory fake
# ---------------------------------------------------------------------------

class FakeNode:
    def __init__(self, attrs: dict[str, str] | None = None, text: str = "") -> None:
        self._attrs = attrs or {}
        self._text = text

    def attr(self, name: str) -> str | None:
        return self._attrs.get(name)

    def text(self) -> str:
        return self._text


class FakeDocument:
    """Answers queries from a fixed table; anything else matches nothing."""

    def __init__(self, css: dict[str, list[FakeNode]], xpath: dict[str, list[FakeNode]] | None = None):
        self._css = css
        self._xpath = xpath or {}
        self.queries: list[str] = []

    def find(self, selector: str) -> list[Node]:
        self.queries.append(selector)
        return list(self._css.get(selector, []))

    def find_xpath(self, expression: str) -> list[Node]:
        self.queries.append(expression)
        return list(self._xpath.get(expression, []))


class TestProtocols:
    def test_fake_satisfies_protocols(self):
        assert isinstance(FakeNode(), Node)
        assert isinstance(FakeDocument({}), Document)

    def test_html_document_satisfies_protocol(self):
        doc = parse_html("<html></html>")
        assert isinstance(doc, Document)
        assert isinstance(doc, HtmlDocument)


class TestExtractorAgainstFake:
    def _fake(self) -> FakeDocument:
        og_nodes = [
            FakeNode({"property": "og:type", "content": "video"}),
            FakeNode({"property": "og:site_name", "content": "Tube"}),
        ]
        all_props = [
            *og_nodes,
            FakeNode({"property": "video:duration", "content": "120"}),
            FakeNode({"property": "video:release_date", "content": "2020-01-01"}),
        ]
        return FakeDocument(
            {
                'meta[property^="og:" i]': og_nodes,
                "meta[property]": all_props,
                "html > head > title": [FakeNode(text="  Cats\n playing | Tube ")],
                "html[lang]": [FakeNode({"lang": "JA"})],
            },
        )

    def test_fields_from_fake(self):
        doc = self._fake()
        article = MetaExtractor().run(Article(doc=doc, final_url="https://tube.example/v/1"))
        assert article.open_graph == {
            "type": "video",
            "site_name": "Tube",
            "duration": "120",
            "release_date": "2020-01-01",
        }
        assert article.title == "Cats playing"
        assert article.language == "ja"
        assert article.canonical_link == "https://tube.example/v/1"
        assert article.meta_description == ""

    def test_language_short_circuits_meta_lookups(self):
        doc = self._fake()
        MetaExtractor().run(Article(doc=doc))
        assert not any("content-language" in q for q in doc.queries)


# ---------------------------------------------------------------------------
# HtmlDocument adapter
# ---------------------------------------------------------------------------

_HTML = """
<html lang="en">
<head>
  <title>Page <b>title</b></title>
  <meta name="description" content="Desc">
  <link rel="canonical alternate" href="/c">
</head>
<body><p class="a b">Hello <i>world</i></p></body>
</html>
"""


class TestHtmlDocument:
    def test_find_css(self):
        nodes = parse_html(_HTML).find('meta[name="description"]')
        assert len(nodes) == 1
        assert nodes[0].attr("content") == "Desc"

    def test_find_xpath(self):
        nodes = parse_html(_HTML).find_xpath("descendant::meta[@name='description']")
        assert len(nodes) == 1
        assert nodes[0].attr("content") == "Desc"

    def test_missing_attr_is_none(self):
        node = parse_html(_HTML).find("meta")[0]
        assert node.attr("property") is None
        assert parse_html(_HTML).find_xpath("descendant::meta")[0].attr("property") is None

    def test_multi_valued_attr_joined(self):
        node = parse_html(_HTML).find("p")[0]
        assert node.attr("class") == "a b"

    def test_text_includes_descendants(self):
        doc = parse_html(_HTML)
        assert doc.find("p")[0].text() == "Hello world"
        assert doc.find_xpath("descendant::p")[0].text() == "Hello world"

    def test_no_match(self):
        doc = parse_html(_HTML)
        assert doc.find("article") == []
        assert doc.find_xpath("descendant::article") == []

    def test_invalid_selector_returns_empty(self):
        assert parse_html(_HTML).find("meta[") == []

    def test_invalid_xpath_returns_empty(self):
        assert parse_html(_HTML).find_xpath("descendant::[[") == []

    def test_non_element_xpath_result_ignored(self):
        doc = parse_html(_HTML)
        assert doc.find_xpath("count(descendant::meta)") == []
        assert doc.find_xpath("descendant::meta/@content") == []

    def test_empty_document(self):
        doc = parse_html("")
        assert doc.find("html") == []
        assert doc.find_xpath("descendant::meta") == []

    def test_xml_declaration_accepted(self):
        doc = parse_html('<?xml version="1.0" encoding="utf-8"?><html><head><title>X</title></head></html>')
        assert doc.find_xpath("descendant::title")[0].text() == "X"

    def test_reuses_soup(self):
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(_HTML, "lxml")
        doc = HtmlDocument(_HTML, soup=soup)
        assert doc.soup is soup
