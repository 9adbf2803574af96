"""
Product catalog access.

Modules:
    base - Catalog interface and CatalogError
    memory - InMemoryCatalog for tests and demo data
    api_client - REST client for WooCommerce/WordPress
    woocommerce - WooCommerceCatalog over the REST client
"""

from .api_client import WooCommerceAPIClient
from .base import Catalog, CatalogError
from .memory import InMemoryCatalog, format_price_html
from .woocommerce import WooCommerceCatalog

__all__ = [
    # Interface
    'Catalog',
    'CatalogError',
    # Implementations
    'InMemoryCatalog',
    'WooCommerceCatalog',
    # REST client
    'WooCommerceAPIClient',
    # Helpers
    'format_price_html',
]
