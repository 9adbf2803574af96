"""
In-Memory Catalog

Serves products and taxonomy terms from memory. Used by the tests and
by the demo data set (config/demo_catalog.yaml).
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..common.config_loader import load_config, load_yaml_file
from ..common.transliteration import generate_slug
from ..models import Product, Term
from .base import Catalog

logger = logging.getLogger(__name__)

DEMO_CATALOG_FILENAME = 'demo_catalog.yaml'


def format_price_html(price: Any, currency_symbol: str = '&euro;') -> str:
    """
    Render a price the way WooCommerce renders price markup.

    Args:
        price: Numeric price (e.g. "19.95" or 19.95)
        currency_symbol: Currency symbol as HTML entity or text

    Returns:
        Price markup, or empty string when the price is missing/invalid

    Example:
        >>> format_price_html("19.95")
        '<span class="woocommerce-Price-amount amount"><bdi><span class="woocommerce-Price-currencySymbol">&euro;</span>&nbsp;19,95</bdi></span>'
    """
    if price is None or price == '':
        return ''

    try:
        amount = Decimal(str(price))
    except InvalidOperation:
        logger.warning("Invalid price: %r", price)
        return ''

    formatted = f"{amount:.2f}".replace('.', ',')
    return (
        '<span class="woocommerce-Price-amount amount"><bdi>'
        f'<span class="woocommerce-Price-currencySymbol">{currency_symbol}</span>&nbsp;{formatted}'
        '</bdi></span>'
    )


def derive_stock_status(manage_stock: bool, stock_quantity: Optional[int], backorders: str) -> str:
    """Derive the stock status the way the shop does for managed stock."""
    if manage_stock and stock_quantity is not None and stock_quantity <= 0:
        return 'outofstock' if backorders == 'no' else 'onbackorder'
    return 'instock'


class InMemoryCatalog(Catalog):
    """
    Catalog backed by in-memory products.

    Usage:
        catalog = InMemoryCatalog(products, terms)
        catalog = InMemoryCatalog.from_config()            # demo data
        catalog = InMemoryCatalog.from_yaml("catalog.yaml")
    """

    def __init__(self, products: Iterable[Product], terms: Optional[Iterable[Term]] = None,
                 active: bool = True):
        """
        Initialize the catalog.

        Args:
            products: Products in the catalog
            terms: Term registry (terms assigned to products are added automatically)
            active: Whether the catalog reports itself as active
        """
        self.products = list(products)
        self.active = active
        self._terms: Dict[str, Dict[int, Term]] = {}

        for term in terms or []:
            self.add_term(term)

        for product in self.products:
            for taxonomy, assigned in product.terms.items():
                for term in assigned:
                    self._terms.setdefault(taxonomy, {}).setdefault(term.id, term)

    def add_term(self, term: Term) -> None:
        """Register a term (replacing one with the same id)."""
        self._terms.setdefault(term.taxonomy, {})[term.id] = term

    def is_active(self) -> bool:
        return self.active

    def get_products_by_tag(self, tag: str) -> List[Product]:
        matches = [p for p in self.products if tag in p.tags]
        return sorted(matches, key=lambda p: p.name.lower())

    def get_product_terms(self, product: Product, taxonomy: str) -> List[Term]:
        return list(product.terms.get(taxonomy, []))

    def get_term(self, term_id: int, taxonomy: str) -> Optional[Term]:
        return self._terms.get(taxonomy, {}).get(term_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InMemoryCatalog':
        """
        Build a catalog from a plain structure.

        Expected structure:
            store_url: https://shop.example.com
            terms:
              <taxonomy>: [{id, slug, name, parent}]
            products:
              - id, name, sku, price, manage_stock, stock_quantity,
                backorders, stock_status, tags, terms: {<taxonomy>: [slug]}, meta

        Term slugs assigned to products must be listed under terms.
        """
        store_url = str(data.get('store_url', '')).rstrip('/')

        terms = []
        by_slug: Dict[str, Dict[str, Term]] = {}
        for taxonomy, rows in (data.get('terms') or {}).items():
            for row in rows or []:
                term = Term(
                    id=int(row['id']),
                    slug=str(row['slug']),
                    name=str(row['name']),
                    taxonomy=taxonomy,
                    parent=int(row.get('parent') or 0),
                )
                terms.append(term)
                by_slug.setdefault(taxonomy, {})[term.slug] = term

        products = []
        for row in data.get('products') or []:
            manage_stock = bool(row.get('manage_stock', False))
            quantity = row.get('stock_quantity')
            quantity = int(quantity) if manage_stock and quantity is not None else None
            backorders = str(row.get('backorders', 'no'))

            assigned: Dict[str, List[Term]] = {}
            for taxonomy, slugs in (row.get('terms') or {}).items():
                for slug in slugs or []:
                    term = by_slug.get(taxonomy, {}).get(slug)
                    if term is None:
                        logger.warning("Unknown %s term '%s' on product %s", taxonomy, slug, row.get('name'))
                        continue
                    assigned.setdefault(taxonomy, []).append(term)

            name = str(row['name'])
            products.append(Product(
                id=int(row['id']),
                name=name,
                permalink=row.get('permalink') or f"{store_url}/product/{generate_slug(name)}/",
                price_html=row.get('price_html') or format_price_html(row.get('price')),
                sku=str(row.get('sku', '')),
                manage_stock=manage_stock,
                stock_quantity=quantity,
                stock_status=row.get('stock_status') or derive_stock_status(manage_stock, quantity, backorders),
                backorders=backorders,
                tags=[str(tag) for tag in row.get('tags') or []],
                terms=assigned,
                meta=dict(row.get('meta') or {}),
            ))

        logger.debug("Loaded %d products and %d terms", len(products), len(terms))
        return cls(products, terms)

    @classmethod
    def from_yaml(cls, path: str | Path) -> 'InMemoryCatalog':
        """Build a catalog from a YAML file."""
        return cls.from_dict(load_yaml_file(path))

    @classmethod
    def from_config(cls, filename: str = DEMO_CATALOG_FILENAME) -> 'InMemoryCatalog':
        """Build a catalog from a YAML file in the config directory (demo data)."""
        return cls.from_dict(load_config(filename))
