"""Tests for src/table/product_tag_table.py"""

from bs4 import BeautifulSoup

from src.catalog import CatalogError, InMemoryCatalog
from src.models import MetaFieldSetting, Product, Settings, TaxonomySetting, Term
from src.table import DisplayOptions, render_product_tag_table


def parse(markup):
    return BeautifulSoup(markup, "html.parser")


def table_rows(table):
    return [[td.get_text(strip=True) for td in tr.find_all("td")]
            for tr in table.find("tbody").find_all("tr")]


class BrokenCatalog(InMemoryCatalog):
    def get_products_by_tag(self, tag):
        raise CatalogError("query failed")


class TestMessages:
    def test_no_catalog(self, settings):
        assert render_product_tag_table(None, settings, "wijn") == "<p>WooCommerce is niet actief.</p>"

    def test_inactive_catalog(self, settings, product_a):
        catalog = InMemoryCatalog([product_a], active=False)
        assert render_product_tag_table(catalog, settings, "wijn") == "<p>WooCommerce is niet actief.</p>"

    def test_no_tag(self, catalog, settings):
        assert render_product_tag_table(catalog, settings, "") == "<p>Geen product tag opgegeven.</p>"
        assert render_product_tag_table(catalog, settings, "   ") == "<p>Geen product tag opgegeven.</p>"

    def test_no_products(self, catalog, settings):
        result = render_product_tag_table(catalog, settings, "whisky")
        assert result == "<p>Geen producten gevonden voor tag: whisky</p>"

    def test_no_products_message_escapes_tag(self, catalog, settings):
        result = render_product_tag_table(catalog, settings, "<b>")
        assert "&lt;b&gt;" in result

    def test_failed_query_reports_no_products(self, settings, product_a):
        result = render_product_tag_table(BrokenCatalog([product_a]), settings, "wijn")
        assert result == "<p>Geen producten gevonden voor tag: wijn</p>"


class TestColumns:
    def test_settings_columns_by_default(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn"))
        assert [th.get_text() for th in soup.find_all("th")] == ["Naam", "Prijs", "Regio", "Voorraad"]

    def test_requested_columns(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="stock, name"))
        assert [th.get_text() for th in soup.find_all("th")] == ["Voorraad", "Naam"]

    def test_unknown_columns_dropped(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="name,color,vintage"))
        assert [th.get_text() for th in soup.find_all("th")] == ["Naam", "Jaargang"]

    def test_only_unknown_columns_fall_back_to_settings(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="color,size"))
        assert [th.get_text() for th in soup.find_all("th")] == ["Naam", "Prijs", "Regio", "Voorraad"]

    def test_rows_sorted_by_name(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="name"))
        assert table_rows(soup.find("table")) == [["A"], ["B"]]


class TestGrouping:
    def test_group_by_from_settings(self, catalog, settings):
        settings.group_by = "region"
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="name"))
        assert [h.get_text() for h in soup.find_all("h3")] == ["Europa", "USA"]

    def test_group_by_argument_overrides_settings(self, catalog, settings):
        settings.group_by = "region"
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="name", group_by=""))
        assert soup.find("h3") is None
        assert len(soup.find_all("table")) == 1

    def test_unknown_group_by_ignored(self, catalog, settings):
        soup = parse(render_product_tag_table(catalog, settings, "wijn", group_by="color"))
        assert soup.find("h3") is None

    def test_stock_options_applied(self, catalog, settings):
        options = DisplayOptions(stock_display="both")
        soup = parse(render_product_tag_table(catalog, settings, "wijn", columns="name,stock", options=options))
        rows = table_rows(soup.find("table"))
        assert rows[0] == ["A", "24 stuks op voorraad | Op voorraad | Geen backorders toegestaan"]
        assert rows[1] == ["B", "Voorraadbeheer niet gevolgd"]


class TestEndToEnd:
    def test_non_latin_meta_groups_get_headings(self):
        products = [
            Product(id=1, name="A", tags=["wijn"], meta={"land": "日本"}),
            Product(id=2, name="B", tags=["wijn"], meta={"land": "中国"}),
            Product(id=3, name="C", tags=["wijn"], meta={"land": "България"}),
        ]
        settings = Settings(
            columns=["name"],
            meta_fields=[MetaFieldSetting(key="land", label="Land")],
            group_by="land",
        )

        soup = parse(render_product_tag_table(InMemoryCatalog(products), settings, "wijn"))

        assert len(soup.find_all("table")) == 3
        assert sorted(h.get_text() for h in soup.find_all("h3")) == ["България", "中国", "日本"]

    def test_wine_grouped_by_region(self):
        europa = Term(id=1, slug="europa", name="Europa", taxonomy="region")
        usa = Term(id=2, slug="usa", name="USA", taxonomy="region")
        products = [
            Product(id=1, name="A", permalink="https://shop.example.com/a/", tags=["wijn"],
                    terms={"region": [europa]}),
            Product(id=2, name="B", permalink="https://shop.example.com/b/", tags=["wijn"],
                    terms={"region": [europa, usa]}),
        ]
        settings = Settings(
            columns=["name", "region"],
            taxonomies=[TaxonomySetting(slug="region", label="Regio")],
            group_by="region",
        )

        markup = render_product_tag_table(InMemoryCatalog(products), settings, "wijn")
        soup = parse(markup)

        assert [h.get_text() for h in soup.find_all("h3")] == ["Europa", "USA"]
        tables = soup.find_all("table")
        assert [row[0] for row in table_rows(tables[0])] == ["A", "B"]
        assert [row[0] for row in table_rows(tables[1])] == ["B"]
        assert table_rows(tables[1])[0][1] == "Europa, USA"
