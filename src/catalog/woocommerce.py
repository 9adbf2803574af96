"""
WooCommerce Catalog

Catalog backed by a live WooCommerce store. Products, tags and product
categories come from the WooCommerce REST API (wc/v3); custom taxonomies
(region, country, vendors, ...) from the WordPress REST API (wp/v2),
which requires them to be registered with show_in_rest.
"""

import html
import logging
import os
from typing import Any, Dict, List, Optional

from ..common.constants import PRODUCT_CATEGORY_TAXONOMY
from ..models import Product, Term
from .api_client import WooCommerceAPIClient
from .base import Catalog, CatalogError

logger = logging.getLogger(__name__)


def _to_term(row: Dict[str, Any], taxonomy: str) -> Term:
    # WordPress returns term names HTML-encoded
    return Term(
        id=int(row['id']),
        slug=str(row.get('slug', '')),
        name=html.unescape(str(row.get('name', ''))),
        taxonomy=taxonomy,
        parent=int(row.get('parent') or 0),
    )


def _to_product(item: Dict[str, Any]) -> Product:
    """Convert a wc/v3 product payload to a Product."""
    manage_stock = bool(item.get('manage_stock'))
    quantity = item.get('stock_quantity')

    # Category summaries in the product payload carry no parent id;
    # get_product_terms() fetches the full categories.
    categories = [_to_term(c, PRODUCT_CATEGORY_TAXONOMY) for c in item.get('categories') or []]

    meta = {}
    for entry in item.get('meta_data') or []:
        if 'key' in entry:
            meta.setdefault(entry['key'], entry.get('value'))

    return Product(
        id=int(item['id']),
        name=str(item.get('name', '')),
        permalink=str(item.get('permalink', '')),
        price_html=str(item.get('price_html') or ''),
        sku=str(item.get('sku') or ''),
        manage_stock=manage_stock,
        stock_quantity=int(quantity) if quantity is not None else None,
        stock_status=str(item.get('stock_status') or 'instock'),
        backorders=str(item.get('backorders') or 'no'),
        tags=[str(t.get('slug', '')) for t in item.get('tags') or []],
        terms={PRODUCT_CATEGORY_TAXONOMY: categories} if categories else {},
        meta=meta,
    )


class WooCommerceCatalog(Catalog):
    """
    Read-only catalog over the WooCommerce REST API.

    Limits of the REST API:
    - Custom taxonomies must be registered with show_in_rest, otherwise
      their term lookups fail.
    - The wc/v3 meta_data payload leaves out protected (_-prefixed) meta
      keys, so meta columns such as _wine_year always render empty
      against a live store.

    Usage:
        with WooCommerceAPIClient(url, key, secret) as client:
            catalog = WooCommerceCatalog(client)
            products = catalog.get_products_by_tag("wijn")
    """

    ENV_URL = "WOOCOMMERCE_URL"
    ENV_CONSUMER_KEY = "WOOCOMMERCE_CONSUMER_KEY"
    ENV_CONSUMER_SECRET = "WOOCOMMERCE_CONSUMER_SECRET"

    def __init__(self, client: WooCommerceAPIClient):
        self.client = client

    @classmethod
    def from_env(cls) -> 'WooCommerceCatalog':
        """
        Create a catalog from WOOCOMMERCE_* environment variables.

        Raises:
            ValueError: If a variable is missing
        """
        names = (cls.ENV_URL, cls.ENV_CONSUMER_KEY, cls.ENV_CONSUMER_SECRET)
        missing = [name for name in names if not os.getenv(name)]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")

        client = WooCommerceAPIClient(
            os.environ[cls.ENV_URL],
            os.environ[cls.ENV_CONSUMER_KEY],
            os.environ[cls.ENV_CONSUMER_SECRET],
        )
        return cls(client)

    def close(self):
        self.client.close()

    def is_active(self) -> bool:
        return self.client.test_connection()

    def _get_tag_id(self, tag: str) -> Optional[int]:
        tags = self.client.request("GET", "wc/v3/products/tags", params={"slug": tag})
        if tags is None:
            raise CatalogError(f"Could not look up product tag '{tag}'")
        if not tags:
            return None
        return int(tags[0]['id'])

    def get_products_by_tag(self, tag: str) -> List[Product]:
        tag_id = self._get_tag_id(tag)
        if tag_id is None:
            logger.info("Product tag '%s' does not exist", tag)
            return []

        items = self.client.get_all("wc/v3/products", params={
            "tag": tag_id,
            "status": "publish",
            "orderby": "title",
            "order": "asc",
        })
        if items is None:
            raise CatalogError(f"Could not fetch products for tag '{tag}'")

        return [_to_product(item) for item in items]

    def get_product_terms(self, product: Product, taxonomy: str) -> List[Term]:
        if taxonomy == PRODUCT_CATEGORY_TAXONOMY:
            ids = [str(term.id) for term in product.terms.get(taxonomy, [])]
            if not ids:
                return []
            rows = self.client.get_all("wc/v3/products/categories", params={
                "include": ",".join(ids),
                "orderby": "include",
            })
        else:
            rows = self.client.get_all(f"wp/v2/{taxonomy}", params={"post": product.id})

        if rows is None:
            raise CatalogError(f"Could not fetch {taxonomy} terms for product {product.id}")

        return [_to_term(row, taxonomy) for row in rows]

    def get_term(self, term_id: int, taxonomy: str) -> Optional[Term]:
        if taxonomy == PRODUCT_CATEGORY_TAXONOMY:
            row = self.client.request("GET", f"wc/v3/products/categories/{term_id}")
        else:
            row = self.client.request("GET", f"wp/v2/{taxonomy}/{term_id}")

        if row is None:
            raise CatalogError(f"Could not fetch {taxonomy} term {term_id}")

        return _to_term(row, taxonomy)
