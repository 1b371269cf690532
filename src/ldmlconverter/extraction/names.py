"""LocaleNames and CurrencyNames extractors.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

from ldmlconverter.constants import (
    CURRENCY_NAME_PREFIX,
    CURRENCY_SYMBOL_PREFIX,
    DISPLAY_NAME_PATTERN,
    LOCALE_KEYTYPE,
    LOCALE_NAME_PREFIX,
    LOCALE_SEPARATOR,
    ROOT,
)
from ldmlconverter.extraction.rules import PrefixRule, apply_rules, rename, sort_bundle, strip_prefix
from ldmlconverter.types import BundleMap

__all__ = ["CURRENCY_NAME_RULES", "LOCALE_NAME_RULES", "extract_currency_names", "extract_locale_names"]

LOCALE_NAME_RULES: tuple[PrefixRule, ...] = (
    PrefixRule(LOCALE_SEPARATOR, rename("ListCompositionPattern"), exact=True),
    PrefixRule(LOCALE_KEYTYPE, rename("ListKeyTypePattern"), exact=True),
    PrefixRule(LOCALE_NAME_PREFIX, strip_prefix(LOCALE_NAME_PREFIX)),
)

CURRENCY_NAME_RULES: tuple[PrefixRule, ...] = (
    PrefixRule(CURRENCY_NAME_PREFIX, strip_prefix(CURRENCY_NAME_PREFIX)),
    PrefixRule(CURRENCY_SYMBOL_PREFIX, strip_prefix(CURRENCY_SYMBOL_PREFIX)),
)


def extract_locale_names(visible: Mapping[str, object], locale_id: str) -> BundleMap:
    """Display names of languages, scripts, regions, variants and keywords.

    Root additionally gets the pattern that composes a display name from a
    language name and its qualifiers.
    """
    names = apply_rules(visible, LOCALE_NAME_RULES)
    if locale_id == ROOT:
        names["DisplayNamePattern"] = DISPLAY_NAME_PATTERN
    return sort_bundle(names)


def extract_currency_names(visible: Mapping[str, object], locale_id: str) -> BundleMap:  # noqa: ARG001
    """Currency display names (lowercase codes) and symbols (uppercase codes)."""
    return sort_bundle(apply_rules(visible, CURRENCY_NAME_RULES))
