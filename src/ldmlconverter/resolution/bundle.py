"""Bundle descriptors and target maps.

The target map of a locale is everything visible to it: the raw maps of
its candidate chain merged from root up to the locale itself, so that the
most specific value of each key wins, plus its plural and day period rules,
with aliases resolved.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ldmlconverter.constants import DATE_TIME_PATTERN_CHARS, ROOT
from ldmlconverter.enums import BundleKind
from ldmlconverter.resolution.aliases import copy_value, resolve_aliases
from ldmlconverter.resolution.context import ConversionContext
from ldmlconverter.types import RawLocaleMap

__all__ = ["Bundle", "merge_candidates", "target_map"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Bundle:
    """A locale to convert and the kinds of bundles to extract for it.

    Attributes:
        locale_id: CLDR id, e.g. ``en_GB`` or ``root``
        candidates: Candidate chain as CLDR ids, ending with ``root``
        kinds: Sub-bundles to extract
    """

    locale_id: str
    candidates: tuple[str, ...]
    kinds: frozenset[BundleKind] = field(default_factory=lambda: frozenset(BundleKind))

    @property
    def is_root(self) -> bool:
        return self.locale_id == ROOT

    def target_map(self, context: ConversionContext) -> RawLocaleMap:
        """Visible map of this bundle's locale."""
        return target_map(context, self.locale_id, self.candidates)


def merge_candidates(context: ConversionContext, candidates: Iterable[str]) -> RawLocaleMap:
    """Union of the raw maps of a chain; earlier candidates win.

    Values are copied, so the cached raw maps are never modified by later
    processing of the result.
    """
    merged: RawLocaleMap = {}
    for candidate in reversed(list(candidates)):
        for key, value in context.raw_map(candidate).items():
            merged[key] = copy_value(value)
    return merged


def target_map(
    context: ConversionContext,
    locale_id: str,
    candidates: Sequence[str] | None = None,
) -> RawLocaleMap:
    """Build the visible map of a locale.

    Args:
        context: Run context holding the raw map cache
        locale_id: CLDR id of the locale
        candidates: Its candidate chain (resolved through the context when
            omitted)

    Returns:
        A fresh map; calling this twice yields equal maps.
    """
    if candidates is None:
        candidates = [locale.name for locale in context.resolver.resolve(locale_id)]
    merged = merge_candidates(context, candidates)

    for rules_key, rules in (
        ("PluralRules", context.plural_rules),
        ("DayPeriodRules", context.day_period_rules),
    ):
        for candidate in candidates:
            if candidate in rules:
                merged[rules_key] = rules[candidate]
                break

    if locale_id == ROOT:
        merged["DateTimePatternChars"] = DATE_TIME_PATTERN_CHARS

    logger.debug("Target map of %s from %s: %d keys", locale_id, ",".join(candidates), len(merged))
    return resolve_aliases(merged, context.aliases)
