#!/usr/bin/env python3
"""
Configure Product Tag Table

Shows or edits the table settings: visible columns, taxonomy columns,
meta columns and the grouping column. New values are sanitized the same
way for every field: unknown columns and an unknown group-by are dropped.

Usage:
    python3 configure_table.py --show
    python3 configure_table.py --taxonomies "region|Regio;country|Land" --columns name,price,region,stock
    python3 configure_table.py --meta-fields "vintage|Jaargang" --group-by region
    python3 configure_table.py --taxonomies-file taxonomies.txt --settings config/settings.yaml
"""

import argparse
import sys

from src.common import setup_logging
from src.table import (
    available_column_keys,
    build_column_definitions,
    load_settings,
    sanitize_settings,
    save_settings,
)


def _lines(value: str) -> str:
    """Allow ';' as line separator on the command line."""
    return value.replace(";", "\n")


def _key_label_lines(rows, key_attr: str) -> str:
    return "\n".join(f"{getattr(row, key_attr)}|{row.label}" for row in rows)


def print_settings(settings):
    """Print settings and the columns they make available."""
    definitions = build_column_definitions(settings)

    print("\n" + "=" * 60)
    print("PRODUCT TAG TABLE SETTINGS")
    print("=" * 60)

    print(f"\nVISIBLE COLUMNS ({len(settings.columns)}):")
    for idx, column in enumerate(settings.columns, 1):
        label = definitions[column].label if column in definitions else "(unknown)"
        print(f"  {idx}. {column:20} {label}")

    print(f"\nTAXONOMY COLUMNS ({len(settings.taxonomies)}):")
    for taxonomy in settings.taxonomies:
        print(f"  {taxonomy.slug}|{taxonomy.label}")

    print(f"\nMETA COLUMNS ({len(settings.meta_fields)}):")
    for meta in settings.meta_fields:
        print(f"  {meta.key}|{meta.label}")

    print(f"\nGROUP BY: {settings.group_by or '(no grouping)'}")
    print(f"\nAVAILABLE COLUMNS: {', '.join(available_column_keys(settings))}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(
        description="Show or edit the product tag table settings"
    )
    parser.add_argument("--settings", help="Settings file (default: config/settings.yaml)")
    parser.add_argument("--show", action="store_true", help="Show current settings and exit")
    parser.add_argument("--columns", help="Comma-separated visible column keys")
    parser.add_argument("--taxonomies", help="Taxonomy columns as 'slug|Label' entries separated by ';'")
    parser.add_argument("--taxonomies-file", help="File with one 'slug|Label' line per taxonomy")
    parser.add_argument("--meta-fields", help="Meta columns as 'meta_key|Label' entries separated by ';'")
    parser.add_argument("--meta-fields-file", help="File with one 'meta_key|Label' line per meta field")
    parser.add_argument("--group-by", help="Column key to group by ('' for no grouping)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    current = load_settings(args.settings)

    if args.show:
        print_settings(current)
        return

    # Start from the current values so unspecified fields are kept
    raw_input = {
        "taxonomies_raw": _key_label_lines(current.taxonomies, "slug"),
        "meta_fields_raw": _key_label_lines(current.meta_fields, "key"),
        "columns": list(current.columns),
        "group_by": current.group_by,
    }

    try:
        if args.taxonomies_file:
            with open(args.taxonomies_file, encoding="utf-8") as f:
                raw_input["taxonomies_raw"] = f.read()
        elif args.taxonomies is not None:
            raw_input["taxonomies_raw"] = _lines(args.taxonomies)

        if args.meta_fields_file:
            with open(args.meta_fields_file, encoding="utf-8") as f:
                raw_input["meta_fields_raw"] = f.read()
        elif args.meta_fields is not None:
            raw_input["meta_fields_raw"] = _lines(args.meta_fields)
    except OSError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    if args.columns is not None:
        raw_input["columns"] = args.columns
    if args.group_by is not None:
        raw_input["group_by"] = args.group_by

    settings = sanitize_settings(raw_input)
    path = save_settings(settings, args.settings)

    print_settings(settings)
    print(f"\nSettings saved to: {path}")


if __name__ == "__main__":
    main()
