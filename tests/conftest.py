"""Shared test fixtures."""

from typing import List, Optional

import pytest

from src.catalog import CatalogError, InMemoryCatalog
from src.models import MetaFieldSetting, Product, Settings, TaxonomySetting, Term
from src.table import ColumnValueResolver, DisplayOptions, build_column_definitions


class FailingCatalog(InMemoryCatalog):
    """In-memory catalog whose lookups fail for selected taxonomies or term ids."""

    def __init__(self, products, terms=None, failing_taxonomies=(), failing_term_ids=()):
        super().__init__(products, terms)
        self.failing_taxonomies = set(failing_taxonomies)
        self.failing_term_ids = set(failing_term_ids)

    def get_product_terms(self, product: Product, taxonomy: str) -> List[Term]:
        if taxonomy in self.failing_taxonomies:
            raise CatalogError(f"{taxonomy} lookup failed")
        return super().get_product_terms(product, taxonomy)

    def get_term(self, term_id: int, taxonomy: str) -> Optional[Term]:
        if term_id in self.failing_term_ids:
            raise CatalogError(f"term {term_id} lookup failed")
        return super().get_term(term_id, taxonomy)


@pytest.fixture
def category_terms():
    """Category tree: Dranken > Wijn > {Witte wijn, Rode wijn}, Dranken > Bier, Cadeaus."""
    return {
        "dranken": Term(id=10, slug="dranken", name="Dranken", taxonomy="product_cat"),
        "wijn": Term(id=11, slug="wijn", name="Wijn", taxonomy="product_cat", parent=10),
        "witte-wijn": Term(id=12, slug="witte-wijn", name="Witte wijn", taxonomy="product_cat", parent=11),
        "rode-wijn": Term(id=13, slug="rode-wijn", name="Rode wijn", taxonomy="product_cat", parent=11),
        "bier": Term(id=14, slug="bier", name="Bier", taxonomy="product_cat", parent=10),
        "cadeaus": Term(id=20, slug="cadeaus", name="Cadeaus", taxonomy="product_cat"),
    }


@pytest.fixture
def region_terms():
    return {
        "europa": Term(id=30, slug="europa", name="Europa", taxonomy="region"),
        "usa": Term(id=31, slug="usa", name="USA", taxonomy="region"),
        "afrika": Term(id=32, slug="afrika", name="afrika", taxonomy="region"),
    }


@pytest.fixture
def product_a(region_terms, category_terms):
    """Managed stock wine from Europe."""
    return Product(
        id=1,
        name="A",
        permalink="https://shop.example.com/product/a/",
        price_html='<span class="amount">&euro;&nbsp;19,95</span>',
        manage_stock=True,
        stock_quantity=24,
        stock_status="instock",
        backorders="no",
        tags=["wijn"],
        terms={
            "region": [region_terms["europa"]],
            "product_cat": [category_terms["witte-wijn"]],
        },
        meta={"vintage": "2021", "grape": [" Chardonnay "]},
    )


@pytest.fixture
def product_b(region_terms, category_terms):
    """Unmanaged stock wine from Europe and the USA."""
    return Product(
        id=2,
        name="B",
        permalink="https://shop.example.com/product/b/",
        price_html='<span class="amount">&euro;&nbsp;24,00</span>',
        manage_stock=False,
        backorders="yes",
        tags=["wijn"],
        terms={
            "region": [region_terms["europa"], region_terms["usa"]],
            "product_cat": [category_terms["rode-wijn"], category_terms["cadeaus"]],
        },
        meta={"vintage": "2019", "grape": ["Merlot", " Cabernet "]},
    )


@pytest.fixture
def product_c(category_terms):
    """Beer without region or meta."""
    return Product(
        id=3,
        name="C",
        permalink="https://shop.example.com/product/c/",
        price_html='<span class="amount">&euro;&nbsp;14,50</span>',
        manage_stock=True,
        stock_quantity=1,
        stock_status="instock",
        backorders="notify",
        tags=["bier"],
        terms={"product_cat": [category_terms["bier"]]},
    )


@pytest.fixture
def catalog(product_a, product_b, product_c, category_terms, region_terms):
    terms = list(category_terms.values()) + list(region_terms.values())
    return InMemoryCatalog([product_b, product_c, product_a], terms)


@pytest.fixture
def settings():
    """Settings with one taxonomy column and two meta columns."""
    return Settings(
        columns=["name", "price", "region", "stock"],
        taxonomies=[TaxonomySetting(slug="region", label="Regio")],
        meta_fields=[
            MetaFieldSetting(key="vintage", label="Jaargang"),
            MetaFieldSetting(key="grape", label="Druif"),
        ],
        group_by="",
    )


@pytest.fixture
def column_definitions(settings):
    return build_column_definitions(settings)


@pytest.fixture
def options():
    return DisplayOptions()


@pytest.fixture
def resolver(catalog, options):
    return ColumnValueResolver(catalog, options)


@pytest.fixture
def failing_catalog():
    """Factory for catalogs with failing lookups."""
    return FailingCatalog
