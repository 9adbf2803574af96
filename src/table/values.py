"""
Value Resolver

Turns a product and a column definition into the display string of a
table cell. Catalog lookups go through the injected catalog; lookup
failures render as the empty placeholder.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ..catalog import Catalog, CatalogError
from ..common.constants import (
    BACKORDER_TEXT_NO,
    BACKORDER_TEXT_NOTIFY,
    BACKORDER_TEXT_YES,
    EMPTY_PLACEHOLDER,
    NO_STOCK_MANAGEMENT_TEXT,
    OTHER_GROUP_LABEL,
    PRODUCT_CATEGORY_TAXONOMY,
    STOCK_QUANTITY_PLURAL,
    STOCK_QUANTITY_SINGULAR,
    STOCK_SEPARATOR,
    STOCK_STATUS_LABELS,
    VALUE_SEPARATOR,
)
from ..models import (
    KIND_META,
    KIND_PRODUCT_CATEGORY,
    KIND_TAXONOMY,
    ColumnDefinition,
    Product,
    Term,
)

logger = logging.getLogger(__name__)


@dataclass
class DisplayOptions:
    """Per-render display options and localized texts."""
    stock_display: str = "quantity"   # quantity | status | both
    no_stock_management_text: str = NO_STOCK_MANAGEMENT_TEXT
    backorder_text_no: str = BACKORDER_TEXT_NO
    backorder_text_notify: str = BACKORDER_TEXT_NOTIFY
    backorder_text_yes: str = BACKORDER_TEXT_YES
    stock_quantity_singular: str = STOCK_QUANTITY_SINGULAR
    stock_quantity_plural: str = STOCK_QUANTITY_PLURAL
    other_group_label: str = OTHER_GROUP_LABEL

    def __post_init__(self):
        """Quantity phrases are %-templates taking the quantity."""
        for name in ('stock_quantity_singular', 'stock_quantity_plural'):
            template = getattr(self, name)
            try:
                template % 1
            except (TypeError, ValueError) as e:
                raise ValueError(f"{name} must contain a single %d placeholder: {template!r}") from e

    @property
    def backorder_texts(self) -> Dict[str, str]:
        return {
            'no': self.backorder_text_no,
            'notify': self.backorder_text_notify,
            'yes': self.backorder_text_yes,
        }


def format_stock_quantity(quantity: int, options: DisplayOptions) -> str:
    """Pluralized "N in stock" phrase."""
    template = options.stock_quantity_singular if quantity == 1 else options.stock_quantity_plural
    return template % quantity


def get_stock_display_value(product: Product, options: DisplayOptions) -> str:
    """
    Format the stock information for display.

    Unmanaged stock always shows the "not tracked" text. Otherwise the
    quantity and/or status (depending on the display mode) and the
    backorder text are joined with " | ".

    Args:
        product: Product to describe
        options: Display mode and texts

    Returns:
        Stock display text
    """
    if not product.manage_stock:
        return options.no_stock_management_text

    parts = []
    status = product.stock_status or ''
    stock_display = (options.stock_display or '').lower()

    if stock_display in ('quantity', 'both') and product.stock_quantity is not None:
        parts.append(format_stock_quantity(product.stock_quantity, options))

    if stock_display in ('status', 'both'):
        parts.append(STOCK_STATUS_LABELS.get(status, status[:1].upper() + status[1:]))

    backorder_text = options.backorder_texts.get(product.backorders)
    if backorder_text is not None:
        parts.append(backorder_text)

    parts = [part.strip() for part in parts if part and part.strip()]

    if not parts:
        return STOCK_STATUS_LABELS.get(status, '')

    return STOCK_SEPARATOR.join(parts)


def get_primary_categories(catalog: Catalog, product: Product) -> List[Term]:
    """
    Get the top-most parent categories of a product's categories.

    Each assigned category is walked up to its root; a failed parent
    lookup stops the walk at the last resolved category. Roots shared by
    several categories are returned once, in order of first encounter.

    Args:
        catalog: Catalog to look categories up in
        product: Product whose categories to resolve

    Returns:
        List of root category terms
    """
    try:
        terms = catalog.get_product_terms(product, PRODUCT_CATEGORY_TAXONOMY)
    except CatalogError as e:
        logger.warning("Category lookup failed for product %s: %s", product.id, e)
        return []

    primary: Dict[int, Term] = {}

    for term in terms:
        top = term
        seen = {top.id}

        while top.parent:
            try:
                parent = catalog.get_term(top.parent, PRODUCT_CATEGORY_TAXONOMY)
            except CatalogError as e:
                logger.warning("Parent category lookup failed for %s: %s", top.slug, e)
                break

            if parent is None or parent.id in seen:
                break

            seen.add(parent.id)
            top = parent

        primary.setdefault(top.id, top)

    return list(primary.values())


def join_meta_value(value: Any) -> str:
    """Flatten a meta value: lists are trimmed per entry and joined."""
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return VALUE_SEPARATOR.join(str(v).strip() for v in value)
    return str(value)


class ColumnValueResolver:
    """
    Resolves table cell values against a catalog.

    Usage:
        resolver = ColumnValueResolver(catalog, DisplayOptions(stock_display="both"))
        value = resolver.resolve("region", product, column_definitions)
    """

    def __init__(self, catalog: Catalog, options: DisplayOptions = None):
        self.catalog = catalog
        self.options = options or DisplayOptions()

    def get_terms(self, product: Product, taxonomy: str) -> List[Term]:
        """Terms of a product in a taxonomy; empty when the lookup fails."""
        try:
            return self.catalog.get_product_terms(product, taxonomy)
        except CatalogError as e:
            logger.warning("Term lookup failed for product %s (%s): %s", product.id, taxonomy, e)
            return []

    def get_meta_value(self, product: Product, key: str) -> str:
        """Meta value flattened to a string (not trimmed)."""
        return join_meta_value(self.catalog.get_product_meta(product, key))

    def get_primary_categories(self, product: Product) -> List[Term]:
        return get_primary_categories(self.catalog, product)

    def resolve(self, column_key: str, product: Product,
                column_definitions: Dict[str, ColumnDefinition]) -> str:
        """
        Get the display value for a specific column.

        Args:
            column_key: Column key
            product: Product of the row
            column_definitions: Column registry

        Returns:
            Display string; not HTML-escaped
        """
        definition = column_definitions.get(column_key)
        if definition is None:
            return ''

        if definition.kind == KIND_TAXONOMY:
            terms = self.get_terms(product, definition.source_id)
            if not terms:
                return EMPTY_PLACEHOLDER
            return VALUE_SEPARATOR.join(term.name for term in terms)

        if definition.kind == KIND_META:
            value = self.get_meta_value(product, definition.source_id)
            return value if value.strip() else EMPTY_PLACEHOLDER

        if definition.kind == KIND_PRODUCT_CATEGORY:
            terms = self.get_primary_categories(product)
            if not terms:
                return EMPTY_PLACEHOLDER
            return VALUE_SEPARATOR.join(term.name for term in terms)

        # Builtin columns
        if column_key == 'price':
            return product.price_html
        if column_key == 'stock':
            return get_stock_display_value(product, self.options)
        return product.name
