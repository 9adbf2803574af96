"""
Product data models.

Pure data classes for representing catalog products and taxonomy terms.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Term:
    """Taxonomy term (category, region, vendor, ...)."""
    id: int
    slug: str
    name: str
    taxonomy: str = ""
    parent: int = 0          # 0 = top-level term


@dataclass
class Product:
    """
    Catalog product as seen by the table renderer.

    Products are read-only to the rendering layer. Terms and metadata
    are reached through the catalog, which may serve them from the
    fields below or fetch them lazily.

    Field Groups:
    - Core fields: identifiers and display data (id, name, permalink, price)
    - Stock: stock management flag, quantity, status and backorder policy
    - Classification: product tags and taxonomy terms
    - Metadata: arbitrary key/value pairs
    """

    # Core fields (required)
    id: int
    name: str
    permalink: str = ""
    price_html: str = ""     # Pre-rendered price markup from the catalog
    sku: str = ""

    # Stock
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    stock_status: str = "instock"    # instock | outofstock | onbackorder
    backorders: str = "no"           # no | notify | yes

    # Classification
    tags: List[str] = field(default_factory=list)              # Tag slugs
    terms: Dict[str, List[Term]] = field(default_factory=dict)  # taxonomy -> terms

    # Metadata
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if self.id is None:
            raise ValueError("Product id is required")
