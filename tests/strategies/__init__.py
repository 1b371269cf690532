"""Hypothesis strategies for ldmlconverter property-based testing.

Usage:
    from tests.strategies import locale_ids, parent_locale_maps
"""

from .locales import alias_tables, locale_ids, parent_locale_maps

__all__ = [
    "alias_tables",
    "locale_ids",
    "parent_locale_maps",
]
