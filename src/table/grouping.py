"""
Grouping Engine

Partitions products into groups keyed by the values of a column. A
product holding several terms of the grouping taxonomy is listed in
each of their groups.
"""

import logging
from typing import Dict, List, Tuple
from urllib.parse import quote

from ..common.constants import OTHER_GROUP_KEY
from ..common.text_utils import strip_tags
from ..common.transliteration import generate_slug
from ..models import (
    KIND_META,
    KIND_PRODUCT_CATEGORY,
    KIND_TAXONOMY,
    ColumnDefinition,
    Group,
    Product,
)
from .values import ColumnValueResolver

logger = logging.getLogger(__name__)

# (group key, group label)
GroupKey = Tuple[str, str]


def get_product_group_keys(
    product: Product,
    column_key: str,
    definition: ColumnDefinition,
    column_definitions: Dict[str, ColumnDefinition],
    resolver: ColumnValueResolver,
) -> List[GroupKey]:
    """
    Determine the grouping keys for a product.

    Returns:
        (key, label) pairs; empty when the product has no value
        for the column
    """
    if definition.kind == KIND_TAXONOMY:
        terms = resolver.get_terms(product, definition.source_id)
        return [(term.slug, term.name) for term in terms]

    if definition.kind == KIND_PRODUCT_CATEGORY:
        terms = resolver.get_primary_categories(product)
        return [(term.slug, term.name) for term in terms]

    if definition.kind == KIND_META:
        value = resolver.get_meta_value(product, definition.source_id).strip()
    else:
        value = strip_tags(resolver.resolve(column_key, product, column_definitions)).strip()

    if not value:
        return []

    # Punctuation-only values have no slug
    key = generate_slug(value) or quote(value.lower(), safe='').lower()
    return [(key, value)]


def group_products(
    products: List[Product],
    group_by: str,
    column_definitions: Dict[str, ColumnDefinition],
    resolver: ColumnValueResolver,
) -> List[Group]:
    """
    Group products for display.

    Without a (known) grouping column all products form one group with
    an empty key and label. Otherwise products without a value land in
    the "Other" group, and groups are sorted by label, case-insensitively.

    Args:
        products: Products in display order
        group_by: Column key to group by ('' for no grouping)
        column_definitions: Column registry
        resolver: Cell value resolver

    Returns:
        Ordered list of groups
    """
    definition = column_definitions.get(group_by) if group_by else None
    if definition is None:
        return [Group(key='', label='', products=list(products))]

    groups: Dict[str, Group] = {}

    for product in products:
        group_keys = get_product_group_keys(product, group_by, definition, column_definitions, resolver)

        if not group_keys:
            group_keys = [(OTHER_GROUP_KEY, resolver.options.other_group_label)]

        for key, label in group_keys:
            if key not in groups:
                groups[key] = Group(key=key, label=label)

            groups[key].products.append(product)

    # sorted() is stable: equal labels keep first-seen order
    result = sorted(groups.values(), key=lambda g: g.label.lower())

    logger.debug("Grouped %d products by '%s' into %d groups", len(products), group_by, len(result))
    return result
