"""
Settings data models.

The settings record an administrator edits: visible columns,
taxonomy and meta columns, and the grouping column.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class TaxonomySetting:
    """Taxonomy exposed as a table column."""
    slug: str
    label: str


@dataclass
class MetaFieldSetting:
    """Product meta field exposed as a table column."""
    key: str
    label: str


@dataclass
class Settings:
    """Table settings, loaded once per render and not modified during it."""
    columns: List[str] = field(default_factory=list)
    taxonomies: List[TaxonomySetting] = field(default_factory=list)
    meta_fields: List[MetaFieldSetting] = field(default_factory=list)
    group_by: str = ""

    def to_dict(self) -> dict:
        """Convert to the plain structure stored in the settings file."""
        return {
            'columns': list(self.columns),
            'taxonomies': [{'slug': t.slug, 'label': t.label} for t in self.taxonomies],
            'meta_fields': [{'key': m.key, 'label': m.label} for m in self.meta_fields],
            'group_by': self.group_by,
        }
