"""
Settings Store

Loads, merges, sanitizes and saves the table settings. Stored settings
live in a YAML file; anything missing falls back to the defaults below.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..common.config_loader import get_config_path, load_yaml_file, save_yaml_file
from ..common.text_utils import sanitize_key, strip_tags
from ..models import MetaFieldSetting, Settings, TaxonomySetting
from .columns import available_column_keys

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = 'settings.yaml'

DEFAULT_SETTINGS = {
    'columns': ['name', 'price', 'region', 'country', 'stock'],
    'taxonomies': [
        {'slug': 'region', 'label': 'Regio'},
        {'slug': 'country', 'label': 'Land'},
        {'slug': 'vendors', 'label': 'Leveranciers'},
    ],
    'meta_fields': [],
    'group_by': '',
}


def is_valid_taxonomy_setting(row: Any) -> bool:
    """A taxonomy row needs both a slug and a label."""
    return isinstance(row, dict) and bool(row.get('slug')) and bool(row.get('label'))


def is_valid_meta_setting(row: Any) -> bool:
    """A meta row needs both a key and a label."""
    return isinstance(row, dict) and bool(row.get('key')) and bool(row.get('label'))


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _to_settings(options: Dict[str, Any]) -> Settings:
    return Settings(
        columns=[str(c) for c in options['columns']],
        taxonomies=[TaxonomySetting(slug=str(t['slug']), label=str(t['label']))
                    for t in options['taxonomies']],
        meta_fields=[MetaFieldSetting(key=str(m['key']), label=str(m['label']))
                     for m in options['meta_fields']],
        group_by=str(options.get('group_by') or ''),
    )


def get_default_settings() -> Settings:
    """Return the default settings."""
    return merge_settings({})


def merge_settings(options: Optional[Dict[str, Any]]) -> Settings:
    """
    Merge stored options over the defaults.

    Top-level keys missing from the stored options take their default
    value. Columns are de-duplicated; taxonomy and meta rows without
    an identifier or label are dropped.

    Args:
        options: Stored settings (anything but a dict counts as empty)

    Returns:
        Settings object
    """
    if not isinstance(options, dict):
        options = {}

    merged = {key: options.get(key, default) for key, default in DEFAULT_SETTINGS.items()}

    merged['columns'] = list(dict.fromkeys(_as_list(merged['columns'])))
    merged['taxonomies'] = [t for t in _as_list(merged['taxonomies']) if is_valid_taxonomy_setting(t)]
    merged['meta_fields'] = [m for m in _as_list(merged['meta_fields']) if is_valid_meta_setting(m)]

    return _to_settings(merged)


def parse_key_label_lines(raw: str, key_name: str) -> List[Dict[str, str]]:
    """
    Parse newline-delimited "key|Label" lines.

    Blank lines and lines without a key are skipped. A missing label
    defaults to the key. Taxonomy slugs (key_name 'slug') are sanitized;
    meta keys (key_name 'key') keep their raw trimmed value since they
    address stored metadata verbatim.

    Args:
        raw: Raw textarea-style input
        key_name: Name of the identifier field ('slug' or 'key')

    Returns:
        List of {key_name: ..., 'label': ...} entries

    Example:
        >>> parse_key_label_lines("region|Regio\\ncountry", "slug")
        [{'slug': 'region', 'label': 'Regio'}, {'slug': 'country', 'label': 'country'}]
    """
    entries = []

    for line in re.split(r'\r\n|\r|\n', str(raw or '')):
        line = line.strip()
        if not line:
            continue

        parts = [part.strip() for part in line.split('|', 1)]
        if not parts[0]:
            continue

        if key_name == 'key':
            identifier = parts[0]
        else:
            identifier = sanitize_key(parts[0])

        if not identifier:
            logger.debug("Skipping settings line without usable key: %r", line)
            continue

        label = strip_tags(parts[1]) if len(parts) > 1 else parts[0]
        if not label.strip():
            label = identifier

        entries.append({key_name: identifier, 'label': label})

    return entries


def sanitize_settings(raw_input: Dict[str, Any]) -> Settings:
    """
    Sanitize settings submitted by an administrator.

    Recognized input keys:
        taxonomies_raw  - "slug|Label" lines (absent: default taxonomies)
        meta_fields_raw - "meta_key|Label" lines (absent: no meta columns)
        columns         - list or comma-separated string of column keys
        group_by        - column key to group by

    Unknown columns and an unknown group_by are dropped. Without any
    valid column the default columns are used, or every available
    column when none of the defaults is available.

    Returns:
        Settings object honoring the settings invariants
    """
    raw_input = raw_input or {}

    if 'taxonomies_raw' in raw_input:
        taxonomies = parse_key_label_lines(raw_input['taxonomies_raw'], 'slug')
    else:
        taxonomies = [dict(t) for t in DEFAULT_SETTINGS['taxonomies']]

    if 'meta_fields_raw' in raw_input:
        meta_fields = parse_key_label_lines(raw_input['meta_fields_raw'], 'key')
    else:
        meta_fields = []

    sanitized = _to_settings({
        'columns': [],
        'taxonomies': taxonomies,
        'meta_fields': meta_fields,
        'group_by': '',
    })

    available = available_column_keys(sanitized)

    requested = raw_input.get('columns') or []
    if isinstance(requested, str):
        requested = requested.split(',')

    for column in requested:
        column = sanitize_key(str(column).strip())
        if column in available and column not in sanitized.columns:
            sanitized.columns.append(column)

    if not sanitized.columns:
        default_columns = [c for c in DEFAULT_SETTINGS['columns'] if c in available]
        sanitized.columns = default_columns or list(available)

    group_by = sanitize_key(raw_input.get('group_by') or '')
    if group_by in available:
        sanitized.group_by = group_by
    elif group_by:
        logger.warning("Ignoring unknown group_by column: %s", group_by)

    return sanitized


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """
    Load settings from a YAML file, merged with the defaults.

    Args:
        path: Settings file (default: config/settings.yaml)

    Returns:
        Settings object; the defaults when the file does not exist
    """
    path = Path(path) if path else get_config_path(SETTINGS_FILENAME)

    try:
        options = load_yaml_file(path)
    except FileNotFoundError:
        logger.info("No settings file at %s, using defaults", path)
        options = {}

    return merge_settings(options)


def save_settings(settings: Settings, path: Optional[str | Path] = None) -> Path:
    """
    Save settings to a YAML file.

    Args:
        settings: Settings to store
        path: Settings file (default: config/settings.yaml)

    Returns:
        Path written
    """
    path = Path(path) if path else get_config_path(SETTINGS_FILENAME)
    written = save_yaml_file(path, settings.to_dict())
    logger.info("Saved settings to %s", written)
    return written
