"""
Product Tag Table

Modules:
    models   - Data models (Product, Term, Settings, ColumnDefinition, Group)
    common   - Shared utilities (config loader, logging, slugs, text cleanup)
    catalog  - Read-only catalog access (in-memory, WooCommerce REST API)
    table    - Settings, column registry, value resolution, grouping, rendering
"""
