"""
Column Registry

Derives the columns a table can show from the settings: fixed builtin
columns plus the taxonomy and meta columns configured by the administrator.
"""

from typing import Dict, List

from ..common.constants import PRODUCT_CATEGORY_TAXONOMY
from ..common.text_utils import sanitize_key
from ..models import (
    KIND_BUILTIN,
    KIND_META,
    KIND_PRODUCT_CATEGORY,
    KIND_TAXONOMY,
    ColumnDefinition,
    Settings,
)

BUILTIN_COLUMN_KEYS = ['name', 'price', 'stock', PRODUCT_CATEGORY_TAXONOMY]


def _builtin_columns() -> Dict[str, ColumnDefinition]:
    return {
        'name': ColumnDefinition(key='name', label='Naam'),
        'price': ColumnDefinition(key='price', label='Prijs'),
        'stock': ColumnDefinition(key='stock', label='Voorraad'),
        PRODUCT_CATEGORY_TAXONOMY: ColumnDefinition(
            key=PRODUCT_CATEGORY_TAXONOMY,
            label='Hoofd categorie',
            kind=KIND_PRODUCT_CATEGORY,
            source_id=PRODUCT_CATEGORY_TAXONOMY,
        ),
    }


def build_column_definitions(settings: Settings) -> Dict[str, ColumnDefinition]:
    """
    Build column definitions from settings.

    Admin entries whose key collides with an earlier entry (builtin
    or admin-defined) replace it.

    Args:
        settings: Table settings

    Returns:
        Dictionary mapping column key to its definition; always
        contains the builtin columns unless overwritten by an admin entry
    """
    definitions = _builtin_columns()

    for taxonomy in settings.taxonomies:
        slug = sanitize_key(taxonomy.slug)
        if not slug:
            continue

        definitions[slug] = ColumnDefinition(
            key=slug,
            label=taxonomy.label,
            kind=KIND_TAXONOMY,
            source_id=slug,
        )

    for meta in settings.meta_fields:
        key = sanitize_key(meta.key)
        if not key:
            continue

        definitions[key] = ColumnDefinition(
            key=key,
            label=meta.label,
            kind=KIND_META,
            source_id=meta.key,
        )

    return definitions


def available_column_keys(settings: Settings) -> List[str]:
    """
    Get all column keys selectable for the given settings.

    Returns:
        Builtin keys, then taxonomy slugs, then meta keys, without duplicates
    """
    keys = list(BUILTIN_COLUMN_KEYS)
    keys += [sanitize_key(t.slug) for t in settings.taxonomies if t.slug]
    keys += [sanitize_key(m.key) for m in settings.meta_fields if m.key]

    # dict.fromkeys keeps first occurrence order
    return [key for key in dict.fromkeys(keys) if key]


def normalize_columns(columns_attribute: str) -> List[str]:
    """
    Normalize a comma-separated column list.

    Args:
        columns_attribute: e.g. "name, price,region"

    Returns:
        Sanitized, de-duplicated column keys in the given order
    """
    if not columns_attribute:
        return []

    columns = []
    for column in columns_attribute.split(','):
        column = sanitize_key(column.strip())
        if column and column not in columns:
            columns.append(column)

    return columns
