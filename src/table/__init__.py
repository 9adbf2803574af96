"""
Product tag table rendering.

Modules:
    settings - Settings store (defaults, merging, sanitizing, YAML storage)
    columns - Column registry built from the settings
    values - Cell value resolution and stock display
    grouping - Grouping of products by a column
    renderer - HTML table rendering
    product_tag_table - Rendering entry point
"""

from .columns import available_column_keys, build_column_definitions, normalize_columns
from .grouping import get_product_group_keys, group_products
from .product_tag_table import render_product_tag_table
from .renderer import render_document, render_stylesheet, render_table
from .settings import (
    get_default_settings,
    load_settings,
    merge_settings,
    parse_key_label_lines,
    sanitize_settings,
    save_settings,
)
from .values import (
    ColumnValueResolver,
    DisplayOptions,
    get_primary_categories,
    get_stock_display_value,
)

__all__ = [
    # Entry point
    'render_product_tag_table',
    # Settings
    'get_default_settings',
    'load_settings',
    'save_settings',
    'merge_settings',
    'parse_key_label_lines',
    'sanitize_settings',
    # Columns
    'build_column_definitions',
    'available_column_keys',
    'normalize_columns',
    # Values
    'ColumnValueResolver',
    'DisplayOptions',
    'get_primary_categories',
    'get_stock_display_value',
    # Grouping
    'group_products',
    'get_product_group_keys',
    # Rendering
    'render_table',
    'render_stylesheet',
    'render_document',
]
