"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
Default texts are Dutch, matching the storefront the table is rendered for.
"""

# Placeholder shown for empty taxonomy, meta and category cells
EMPTY_PLACEHOLDER = "–"

# Separator between multiple term names / meta values in one cell
VALUE_SEPARATOR = ", "

# Separator between stock display fragments
STOCK_SEPARATOR = " | "

# Synthetic group for products without a group-worthy value
OTHER_GROUP_KEY = "__overig__"
OTHER_GROUP_LABEL = "Overig"

# Stock statuses as reported by the catalog
STOCK_STATUS_LABELS = {
    "instock": "Op voorraad",
    "outofstock": "Niet op voorraad",
    "onbackorder": "Beschikbaar via nabestelling",
}

STOCK_DISPLAY_MODES = ("quantity", "status", "both")

# Default display texts (overridable per render)
NO_STOCK_MANAGEMENT_TEXT = "Voorraadbeheer niet gevolgd"
BACKORDER_TEXT_NO = "Geen backorders toegestaan"
BACKORDER_TEXT_NOTIFY = "Backorders toegestaan (klant geïnformeerd)"
BACKORDER_TEXT_YES = "Backorders toegestaan"
STOCK_QUANTITY_SINGULAR = "%d stuk op voorraad"
STOCK_QUANTITY_PLURAL = "%d stuks op voorraad"

# User-visible messages of the rendering entry point
MESSAGE_CATALOG_INACTIVE = "WooCommerce is niet actief."
MESSAGE_NO_TAG = "Geen product tag opgegeven."
MESSAGE_NO_PRODUCTS = "Geen producten gevonden voor tag: %s"

# Taxonomy holding the product categories
PRODUCT_CATEGORY_TAXONOMY = "product_cat"
