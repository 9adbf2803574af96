"""
Table Renderer

Renders grouped products as HTML tables: one heading and table per group,
one column per requested column key.
"""

from html import escape
from typing import Dict, List
from urllib.parse import urlparse

from ..models import ColumnDefinition, Group, Product
from .values import ColumnValueResolver

TABLE_CLASS = "woocommerce-product-tag-table"
GROUP_HEADING_CLASS = "woocommerce-product-tag-table-group"

STYLESHEET = (
    f'.{TABLE_CLASS}{{width:100%;border-collapse:collapse;table-layout:auto;}}'
    f'.{TABLE_CLASS} thead tr{{border-bottom:2px solid #ccc;}}'
    f'.{TABLE_CLASS} th,'
    f'.{TABLE_CLASS} td{{padding:0.75rem;text-align:left;vertical-align:top;}}'
    f'.{TABLE_CLASS} tbody tr{{border-bottom:1px solid #eee;}}'
    f'.{GROUP_HEADING_CLASS}{{margin-top:2rem;margin-bottom:0.75rem;}}'
)

ALLOWED_URL_SCHEMES = ('http', 'https', '')


def escape_url(url: str) -> str:
    """Escape a URL for an href attribute; unsafe schemes yield ''."""
    if not url:
        return ''
    if urlparse(url.strip()).scheme.lower() not in ALLOWED_URL_SCHEMES:
        return ''
    return escape(url.strip(), quote=True)


def render_cell(column: str, product: Product, value: str, resolver: ColumnValueResolver) -> str:
    """
    Render one table cell.

    The name links to the product page and the price is trusted
    catalog markup; every other value is escaped.
    """
    if column == 'name':
        href = escape_url(resolver.catalog.get_permalink(product))
        return f'<td><a href="{href}">{escape(value)}</a></td>'
    if column == 'price':
        return f'<td>{value}</td>'
    return f'<td>{escape(value)}</td>'


def render_table(
    groups: List[Group],
    columns: List[str],
    column_definitions: Dict[str, ColumnDefinition],
    resolver: ColumnValueResolver,
) -> str:
    """
    Render groups of products as HTML tables.

    Args:
        groups: Product groups (a single group with empty key for no grouping)
        columns: Column keys in display order; keys missing from the
            registry are skipped
        column_definitions: Column registry
        resolver: Cell value resolver

    Returns:
        HTML markup
    """
    visible = [column for column in columns if column in column_definitions]
    parts = []

    for group in groups:
        if group.key != '' and group.label:
            parts.append(f'<h3 class="{GROUP_HEADING_CLASS}">{escape(group.label)}</h3>')

        parts.append(f'<table class="{TABLE_CLASS}">')
        parts.append('<thead>')
        parts.append('<tr>')
        for column in visible:
            parts.append(f'<th>{escape(column_definitions[column].label)}</th>')
        parts.append('</tr>')
        parts.append('</thead>')

        parts.append('<tbody>')
        for product in group.products:
            parts.append('<tr>')
            for column in visible:
                value = resolver.resolve(column, product, column_definitions)
                parts.append(render_cell(column, product, value, resolver))
            parts.append('</tr>')
        parts.append('</tbody>')
        parts.append('</table>')

    return '\n'.join(parts)


def render_stylesheet() -> str:
    """Frontend styles as an inline <style> block."""
    return f'<style id="product-tag-table-css">{STYLESHEET}</style>'


def render_document(body: str, title: str = "Producten", lang: str = "nl") -> str:
    """Wrap rendered markup in a standalone HTML document."""
    return '\n'.join([
        '<!DOCTYPE html>',
        f'<html lang="{escape(lang)}">',
        '<head>',
        '<meta charset="utf-8">',
        f'<title>{escape(title)}</title>',
        render_stylesheet(),
        '</head>',
        '<body>',
        body,
        '</body>',
        '</html>',
    ])
