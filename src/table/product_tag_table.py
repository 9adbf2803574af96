"""
Product Tag Table

Rendering entry point: renders all products carrying a product tag as
(optionally grouped) HTML tables.
"""

import logging
from html import escape
from typing import Optional

from ..catalog import Catalog, CatalogError
from ..common.constants import MESSAGE_CATALOG_INACTIVE, MESSAGE_NO_PRODUCTS, MESSAGE_NO_TAG
from ..common.text_utils import sanitize_key
from ..models import Settings
from .columns import build_column_definitions, normalize_columns
from .grouping import group_products
from .renderer import render_table
from .values import ColumnValueResolver, DisplayOptions

logger = logging.getLogger(__name__)


def _message(text: str) -> str:
    return f'<p>{text}</p>'


def render_product_tag_table(
    catalog: Optional[Catalog],
    settings: Settings,
    tag: str,
    columns: Optional[str] = None,
    group_by: Optional[str] = None,
    options: Optional[DisplayOptions] = None,
) -> str:
    """
    Render the product table for a given tag.

    Args:
        catalog: Product catalog (None when no catalog is available)
        settings: Table settings
        tag: Product tag slug
        columns: Comma-separated column keys (None: settings columns)
        group_by: Column key to group by (None: settings group_by, '': none)
        options: Stock display mode and texts

    Returns:
        HTML markup, or a message paragraph when nothing can be rendered
    """
    if catalog is None or not catalog.is_active():
        logger.warning("Catalog is not active")
        return _message(MESSAGE_CATALOG_INACTIVE)

    tag = (tag or '').strip()
    if not tag:
        return _message(MESSAGE_NO_TAG)

    options = options or DisplayOptions()
    column_definitions = build_column_definitions(settings)

    if columns is None:
        requested = list(settings.columns)
    else:
        requested = normalize_columns(columns)

    visible = [column for column in requested if column in column_definitions]
    if not visible:
        visible = list(settings.columns)

    if group_by is None:
        group_by = settings.group_by
    group_by = sanitize_key(group_by)
    if group_by not in column_definitions:
        group_by = ''

    try:
        products = catalog.get_products_by_tag(tag)
    except CatalogError as e:
        logger.error("Product query for tag '%s' failed: %s", tag, e)
        products = []

    if not products:
        return _message(MESSAGE_NO_PRODUCTS % escape(tag))

    logger.info("Rendering %d products for tag '%s' (columns: %s, group by: %s)",
                len(products), tag, ', '.join(visible), group_by or '-')

    resolver = ColumnValueResolver(catalog, options)
    groups = group_products(products, group_by, column_definitions, resolver)

    return render_table(groups, visible, column_definitions, resolver)
