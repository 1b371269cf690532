"""Type aliases for the converter domain.

Provides semantic type aliases used by the parse handlers, the resolution
layer and the extractors.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "BundleMap",
    "LocaleName",
    "RawLocaleMap",
    "RawValue",
    "ZoneNames",
]

type LocaleName = str
"""CLDR locale file id (e.g., 'en', 'zh_Hans_SG', 'root')."""

type ZoneNames = list[str | None]
"""Positional array whose None slots are not yet known."""

type RawValue = str | list[str | None] | tuple[str, ...] | dict[str, str]
"""A single string, a positional string array with holes, or a rule map."""

type RawLocaleMap = dict[str, RawValue]
"""Key/value data of one parsed source (a locale or a supplemental file)."""

type BundleMap = dict[str, object]
"""Typed sub-bundle handed to the emission sink."""
