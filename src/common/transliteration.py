"""
Transliteration Utilities

Converts accented Latin text to plain ASCII for slugs and group keys.
"""

import re
import unicodedata
from urllib.parse import quote

# Characters that do not decompose into a base letter + combining mark
TRANSLIT_MAP = {
    # Lowercase
    'ß': 'ss', 'æ': 'ae', 'ø': 'o', 'œ': 'oe', 'đ': 'd', 'ł': 'l',
    'þ': 'th', 'ð': 'd', 'ı': 'i', 'ĳ': 'ij',
    # Uppercase
    'Æ': 'AE', 'Ø': 'O', 'Œ': 'OE', 'Đ': 'D', 'Ł': 'L',
    'Þ': 'TH', 'Ð': 'D', 'Ĳ': 'IJ',
}


def transliterate(text: str) -> str:
    """
    Transliterate accented characters to their ASCII base letters.

    Args:
        text: Text that may contain accented characters

    Returns:
        Text with accents removed; characters without an ASCII
        equivalent are kept as-is

    Example:
        >>> transliterate("Rosé Côtes-du-Rhône")
        'Rose Cotes-du-Rhone'
    """
    result = []
    for char in text:
        if char in TRANSLIT_MAP:
            result.append(TRANSLIT_MAP[char])
            continue

        decomposed = unicodedata.normalize('NFKD', char)
        base = ''.join(c for c in decomposed if not unicodedata.combining(c))
        result.append(base if base.isascii() else char)
    return ''.join(result)


def generate_slug(title: str, prefix: str = '') -> str:
    """
    Generate URL-friendly slug from a label.

    Converts title to lowercase, strips accents, and replaces
    spaces/special characters with hyphens. Characters without an
    ASCII equivalent are percent-encoded, like WordPress slugs.

    Args:
        title: Term name, meta value or cell value
        prefix: Optional prefix (e.g., 'group-')

    Returns:
        URL-friendly slug

    Example:
        >>> generate_slug("Zuid-Afrika")
        'zuid-afrika'
        >>> generate_slug("Côte d'Or", prefix="region-")
        'region-cote-dor'
        >>> generate_slug("日本")
        '%e6%97%a5%e6%9c%ac'
    """
    if prefix:
        text = f"{prefix}{title}"
    else:
        text = title

    result = []
    for char in transliterate(text).lower():
        if char.isascii() and (char.isalnum() or char == '_'):
            result.append(char)
        elif char in ' -.\t\n/':
            result.append('-')
        elif not char.isascii() and not char.isspace():
            result.append(quote(char).lower())
        # Skip other characters

    slug = ''.join(result)

    # Clean up multiple consecutive hyphens
    slug = re.sub(r'-+', '-', slug)

    # Remove leading/trailing hyphens
    return slug.strip('-')
