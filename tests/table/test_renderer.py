"""Tests for src/table/renderer.py"""

from bs4 import BeautifulSoup

from src.models import Group, Product
from src.table.renderer import (
    STYLESHEET,
    escape_url,
    render_document,
    render_stylesheet,
    render_table,
)


def parse(markup):
    return BeautifulSoup(markup, "html.parser")


class TestRenderTable:
    def test_ungrouped_has_no_heading(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="", label="", products=[product_a])],
                              ["name"], column_definitions, resolver)
        soup = parse(markup)
        assert soup.find("h3") is None
        assert len(soup.find_all("table")) == 1

    def test_group_heading(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="europa", label="Europa", products=[product_a])],
                              ["name"], column_definitions, resolver)
        heading = parse(markup).find("h3")
        assert heading.get_text() == "Europa"
        assert heading["class"] == ["woocommerce-product-tag-table-group"]

    def test_heading_label_escaped(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="x", label="<i>Rood & Wit</i>", products=[product_a])],
                              ["name"], column_definitions, resolver)
        assert "&lt;i&gt;Rood &amp; Wit&lt;/i&gt;" in markup

    def test_one_table_per_group(self, resolver, column_definitions, product_a, product_b):
        groups = [
            Group(key="europa", label="Europa", products=[product_a, product_b]),
            Group(key="usa", label="USA", products=[product_b]),
        ]
        soup = parse(render_table(groups, ["name"], column_definitions, resolver))
        tables = soup.find_all("table")
        assert len(tables) == 2
        assert len(tables[0].find("tbody").find_all("tr")) == 2
        assert len(tables[1].find("tbody").find_all("tr")) == 1

    def test_headers_skip_unknown_columns(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="", label="", products=[product_a])],
                              ["name", "bogus", "region", "stock"], column_definitions, resolver)
        headers = [th.get_text() for th in parse(markup).find_all("th")]
        assert headers == ["Naam", "Regio", "Voorraad"]
        assert len(parse(markup).find("tbody").find_all("td")) == 3

    def test_name_links_to_product(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="", label="", products=[product_a])],
                              ["name"], column_definitions, resolver)
        link = parse(markup).find("td").find("a")
        assert link["href"] == "https://shop.example.com/product/a/"
        assert link.get_text() == "A"

    def test_price_not_escaped(self, resolver, column_definitions, product_a):
        markup = render_table([Group(key="", label="", products=[product_a])],
                              ["price"], column_definitions, resolver)
        assert '<td><span class="amount">&euro;&nbsp;19,95</span></td>' in markup

    def test_text_column_escaped(self, resolver, column_definitions):
        product = Product(id=5, name="Evil", meta={"vintage": "<script>alert(1)</script>"})
        markup = render_table([Group(key="", label="", products=[product])],
                              ["vintage"], column_definitions, resolver)
        assert "<script>" not in markup
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in markup

    def test_name_escaped(self, resolver, column_definitions):
        product = Product(id=6, name="Rood & <b>Wit</b>", permalink="https://shop.example.com/p/6/")
        markup = render_table([Group(key="", label="", products=[product])],
                              ["name"], column_definitions, resolver)
        assert "Rood &amp; &lt;b&gt;Wit&lt;/b&gt;" in markup

    def test_empty_groups(self, resolver, column_definitions):
        assert render_table([], ["name"], column_definitions, resolver) == ""


class TestEscapeUrl:
    def test_https(self):
        assert escape_url("https://shop.example.com/p?a=1&b=2") == "https://shop.example.com/p?a=1&amp;b=2"

    def test_javascript_rejected(self):
        assert escape_url("javascript:alert(1)") == ""

    def test_quotes_escaped(self):
        assert '"' not in escape_url('https://shop.example.com/"onmouseover')

    def test_empty(self):
        assert escape_url("") == ""


class TestDocument:
    def test_stylesheet_block(self):
        style = render_stylesheet()
        assert style.startswith("<style")
        assert STYLESHEET in style
        assert ".woocommerce-product-tag-table{" in STYLESHEET

    def test_document_wraps_body(self):
        document = render_document("<p>x</p>", title="wijn")
        soup = parse(document)
        assert soup.find("title").get_text() == "wijn"
        assert soup.find("style") is not None
        assert soup.find("body").find("p").get_text() == "x"
