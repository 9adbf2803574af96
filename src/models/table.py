"""
Table data models.

Column definitions and product groups produced while rendering.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .product import Product

# Column kinds
KIND_BUILTIN = "builtin"
KIND_TAXONOMY = "taxonomy"
KIND_META = "meta"
KIND_PRODUCT_CATEGORY = "product_cat"


@dataclass
class ColumnDefinition:
    """
    A column the table can render.

    source_id is the taxonomy slug for taxonomy/product_cat columns
    and the raw meta key for meta columns.
    """
    key: str
    label: str
    kind: str = KIND_BUILTIN
    source_id: Optional[str] = None


@dataclass
class Group:
    """Products sharing one value of the grouping column."""
    key: str
    label: str
    products: List[Product] = field(default_factory=list)
