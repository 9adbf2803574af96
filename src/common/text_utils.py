"""
Text Utilities

Helper functions for key sanitizing and markup cleanup.
"""

import re

from bs4 import BeautifulSoup


def sanitize_key(key: str) -> str:
    """
    Sanitize a settings or column key.

    Lowercases the key and drops everything except ASCII letters,
    digits, underscores and hyphens.

    Args:
        key: Raw key (e.g. from a shortcode attribute or settings line)

    Returns:
        Sanitized key, possibly empty

    Example:
        >>> sanitize_key(" Region ")
        'region'
        >>> sanitize_key("_wine_Year!")
        '_wine_year'
    """
    if not key:
        return ""

    return re.sub(r'[^a-z0-9_\-]', '', str(key).lower())


def strip_tags(markup: str) -> str:
    """
    Remove all markup from a string.

    Contents of <script> and <style> elements are dropped entirely,
    entities are decoded and the result is trimmed.

    Args:
        markup: HTML fragment (e.g. rendered price markup)

    Returns:
        Plain text
    """
    if not markup:
        return ""

    soup = BeautifulSoup(str(markup), "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()

    text = soup.get_text()

    # Collapse whitespace left behind by removed elements
    return re.sub(r'\s+', ' ', text).strip()
