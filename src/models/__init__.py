"""
Data models for the product tag table.

This module contains pure data classes with no business logic.
"""

from .product import Product, Term
from .settings import MetaFieldSetting, Settings, TaxonomySetting
from .table import (
    KIND_BUILTIN,
    KIND_META,
    KIND_PRODUCT_CATEGORY,
    KIND_TAXONOMY,
    ColumnDefinition,
    Group,
)

__all__ = [
    'Product',
    'Term',
    'Settings',
    'TaxonomySetting',
    'MetaFieldSetting',
    'ColumnDefinition',
    'Group',
    'KIND_BUILTIN',
    'KIND_TAXONOMY',
    'KIND_META',
    'KIND_PRODUCT_CATEGORY',
]
