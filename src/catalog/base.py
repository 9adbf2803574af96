"""
Catalog Interface

Read-only access to the product catalog the tables are rendered from.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import Product, Term


class CatalogError(Exception):
    """A catalog lookup failed (as opposed to returning nothing)."""


class Catalog(ABC):
    """
    Read-only product catalog.

    Implementations:
        InMemoryCatalog    - products held in memory (tests, demo data)
        WooCommerceCatalog - WooCommerce / WordPress REST API
    """

    @abstractmethod
    def is_active(self) -> bool:
        """Return True if the catalog can serve requests."""

    @abstractmethod
    def get_products_by_tag(self, tag: str) -> List[Product]:
        """
        Get all published products carrying a product tag.

        Args:
            tag: Product tag slug

        Returns:
            Products ordered by name
        """

    @abstractmethod
    def get_product_terms(self, product: Product, taxonomy: str) -> List[Term]:
        """
        Get the terms assigned to a product in a taxonomy.

        Raises:
            CatalogError: If the lookup failed
        """

    @abstractmethod
    def get_term(self, term_id: int, taxonomy: str) -> Optional[Term]:
        """
        Get a single term by id.

        Returns:
            The term, or None if it does not exist

        Raises:
            CatalogError: If the lookup failed
        """

    def get_product_meta(self, product: Product, key: str) -> Any:
        """Get a product metadata value ('' when absent)."""
        return product.meta.get(key, '')

    def get_permalink(self, product: Product) -> str:
        """Get the URL of the product detail page."""
        return product.permalink
