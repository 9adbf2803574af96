#!/usr/bin/env python3
"""
Render Product Tag Table

Renders all products carrying a product tag as HTML tables, using the
stored table settings. Products come from the demo catalog or from a
WooCommerce store (credentials in .env, see .env.example).

Usage:
    python3 render_tag_table.py --demo --tag wijn
    python3 render_tag_table.py --demo --tag wijn --group-by region --stock-display both
    python3 render_tag_table.py --tag wijn --columns name,price,stock --output output/wijn.html --standalone
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from src.catalog import InMemoryCatalog, WooCommerceCatalog
from src.common import setup_logging
from src.common.constants import (
    BACKORDER_TEXT_NO,
    BACKORDER_TEXT_NOTIFY,
    BACKORDER_TEXT_YES,
    NO_STOCK_MANAGEMENT_TEXT,
    STOCK_DISPLAY_MODES,
)
from src.table import DisplayOptions, load_settings, render_document, render_product_tag_table

logger = logging.getLogger("src.render_tag_table")


def build_catalog(args):
    """Create the catalog selected on the command line."""
    if args.catalog:
        return InMemoryCatalog.from_yaml(args.catalog)
    if args.demo:
        return InMemoryCatalog.from_config()

    load_dotenv()
    return WooCommerceCatalog.from_env()


def main():
    parser = argparse.ArgumentParser(
        description="Render products with a product tag as an HTML table"
    )
    parser.add_argument("--tag", required=True, help="Product tag slug (e.g. wijn)")
    parser.add_argument("--columns", help="Comma-separated column keys (default: from settings)")
    parser.add_argument("--group-by", help="Column key to group by ('' for no grouping; default: from settings)")
    parser.add_argument(
        "--stock-display",
        choices=STOCK_DISPLAY_MODES,
        default="quantity",
        help="What the stock column shows (default: quantity)"
    )
    parser.add_argument("--no-stock-management-text", default=NO_STOCK_MANAGEMENT_TEXT)
    parser.add_argument("--backorder-text-no", default=BACKORDER_TEXT_NO)
    parser.add_argument("--backorder-text-notify", default=BACKORDER_TEXT_NOTIFY)
    parser.add_argument("--backorder-text-yes", default=BACKORDER_TEXT_YES)
    parser.add_argument("--settings", help="Settings file (default: config/settings.yaml)")
    parser.add_argument("--demo", action="store_true", help="Use the demo catalog (config/demo_catalog.yaml)")
    parser.add_argument("--catalog", help="Use a YAML catalog file instead of WooCommerce")
    parser.add_argument("--output", help="Write HTML to this file instead of stdout")
    parser.add_argument("--standalone", action="store_true", help="Wrap the table in a full HTML document")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    options = DisplayOptions(
        stock_display=args.stock_display,
        no_stock_management_text=args.no_stock_management_text,
        backorder_text_no=args.backorder_text_no,
        backorder_text_notify=args.backorder_text_notify,
        backorder_text_yes=args.backorder_text_yes,
    )

    try:
        settings = load_settings(args.settings)
        catalog = build_catalog(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        markup = render_product_tag_table(
            catalog,
            settings,
            args.tag,
            columns=args.columns,
            group_by=args.group_by,
            options=options,
        )
    finally:
        if isinstance(catalog, WooCommerceCatalog):
            catalog.close()

    if args.standalone:
        markup = render_document(markup, title=args.tag)

    if args.output:
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(markup + "\n")
        logger.info("Table saved to: %s", args.output)
    else:
        print(markup)


if __name__ == "__main__":
    main()
