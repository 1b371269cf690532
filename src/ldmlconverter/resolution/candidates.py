"""Candidate locale chains.

A candidate chain lists the locales whose data is visible to a locale,
most specific first and root last. It starts from the default truncation
chain (the same one the runtime's resource bundle lookup computes) and is
then corrected with the ``parentLocales`` declarations of the
supplemental data:

    zh_Hant_MO  default:  zh_Hant_MO, zh_Hant, zh_MO, zh, root
                declared: zh_Hant_MO -> zh_Hant_HK
                result:   zh_Hant_MO, zh_Hant_HK, zh_Hant, zh_HK, zh, root

The resolution order must stay identical to the runtime's so that the
generated bundles fall back exactly the way lookups do.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ldmlconverter.constants import PARENT_LOCALE_PREFIX, ROOT
from ldmlconverter.core.depth_guard import DepthGuard
from ldmlconverter.locale_utils import ROOT_LOCALE, LocaleId, parse_locale_id

__all__ = ["CandidateResolver", "default_candidates"]

logger = logging.getLogger(__name__)

# Chinese region -> script assumed when a locale carries no script.
_CHINESE_REGION_SCRIPTS = {
    "TW": "Hant",
    "HK": "Hant",
    "MO": "Hant",
    "CN": "Hans",
    "SG": "Hans",
}
# Chinese script -> region supplied to the script-less part of the chain.
_CHINESE_SCRIPT_REGIONS = {"Hans": "CN", "Hant": "TW"}


def _variant_prefixes(variant: str) -> list[str]:
    """``A_B_C`` -> ``["A_B_C", "A_B", "A"]``."""
    parts = variant.split("_") if variant else []
    return ["_".join(parts[:end]) for end in range(len(parts), 0, -1)]


def _truncation_list(language: str, script: str, region: str, variant: str) -> list[LocaleId]:
    variants = _variant_prefixes(variant)
    chain = [LocaleId(language, script, region, v) for v in variants]
    if region:
        chain.append(LocaleId(language, script, region))
    if script:
        chain.append(LocaleId(language, script))
        if language == "zh" and not region:
            region = _CHINESE_SCRIPT_REGIONS.get(script, "")
        # Script-less locales follow for compatibility.
        chain.extend(LocaleId(language, "", region, v) for v in variants)
        if region:
            chain.append(LocaleId(language, "", region))
    if language:
        chain.append(LocaleId(language))
    chain.append(ROOT_LOCALE)
    return chain


def default_candidates(locale: LocaleId | str) -> list[LocaleId]:
    """Default truncation chain of a locale, before parent overrides.

    Variants are dropped first, then the region, then the script; a
    locale with a script continues with its script-less form. Chinese
    locales without a script get the one implied by their region, and
    Norwegian locales interleave ``nb`` and ``no``.

    Example:
        >>> [c.name for c in default_candidates("sr_Latn_RS")]
        ['sr_Latn_RS', 'sr_Latn', 'sr_RS', 'sr', 'root']
    """
    if isinstance(locale, str):
        locale = parse_locale_id(locale)
    if locale.is_root:
        return [ROOT_LOCALE]

    language, script, region, variant = locale.language, locale.script, locale.region, locale.variant
    bokmal = nynorsk = False
    match language:
        case "no" if region == "NO" and variant == "NY":
            variant = ""
            nynorsk = True
        case "no" | "nb":
            bokmal = True
        case "nn":
            nynorsk = True
        case "zh" if not script and region:
            script = _CHINESE_REGION_SCRIPTS.get(region, "")

    if bokmal:
        chain: list[LocaleId] = []
        for entry in _truncation_list("nb", script, region, variant):
            if entry.is_root:
                chain.append(entry)
                break
            chain.append(entry)
            chain.append(entry.replace(language="no"))
        return chain
    if nynorsk:
        chain = _truncation_list("nn", script, region, variant)
        chain[-1:-1] = [
            LocaleId("no", "", "NO", "NY"),
            LocaleId("no", "", "NO"),
            LocaleId("no"),
        ]
        return chain
    return _truncation_list(language, script, region, variant)


class CandidateResolver:
    """Computes candidate chains with parent locale overrides applied.

    Args:
        parent_locales: ``parentLocale.<parent>`` keys mapped to the child
            locale ids declared for that parent
        likely_scripts: Script -> languages whose likely script it is
        nonlikely_script: Send language-script locales whose script is not
            the likely one for their language straight to root

    The child -> parent map is built on the first resolution, after every
    declaration has been parsed.
    """

    def __init__(
        self,
        parent_locales: Mapping[str, Iterable[str]],
        *,
        likely_scripts: Mapping[str, frozenset[str]] | None = None,
        nonlikely_script: bool = False,
    ) -> None:
        self._parent_locales = parent_locales
        self._likely_scripts = likely_scripts or {}
        self.nonlikely_script = nonlikely_script
        self._child_to_parent: dict[LocaleId, LocaleId] | None = None

    @property
    def child_to_parent(self) -> dict[LocaleId, LocaleId]:
        """Declared parent of each child locale."""
        if self._child_to_parent is None:
            mapping: dict[LocaleId, LocaleId] = {}
            for key, children in self._parent_locales.items():
                parent_name = key.removeprefix(PARENT_LOCALE_PREFIX)
                parent = ROOT_LOCALE if parent_name == ROOT else parse_locale_id(parent_name)
                for child in children:
                    mapping[parse_locale_id(child)] = parent
            self._child_to_parent = mapping
            logger.debug("Built parent locale map with %d entries", len(mapping))
        return self._child_to_parent

    def parent_of(self, child: LocaleId) -> LocaleId | None:
        """Declared (or policy-implied) parent of a locale, if any."""
        parent = self.child_to_parent.get(child)
        if parent is None and self.nonlikely_script and not child.region and child.script:
            for script, languages in self._likely_scripts.items():
                if child.language in languages:
                    parent = None if script == child.script else ROOT_LOCALE
                    break
        return parent

    def resolve(self, locale: LocaleId | str) -> list[LocaleId]:
        """Candidate chain of a locale, most specific first, root last.

        Never contains the same locale twice. Cyclic parent declarations
        (e.g. ``no`` and ``nb`` naming each other) are cut where the
        declared parent is already part of the chain.
        """
        if isinstance(locale, str):
            locale = parse_locale_id(locale)
        guard = DepthGuard(label="parent locale")
        chain = self._apply(default_candidates(locale), frozenset(), guard)
        return list(dict.fromkeys(chain))

    def _apply(
        self,
        candidates: list[LocaleId],
        visited: frozenset[LocaleId],
        guard: DepthGuard,
    ) -> list[LocaleId]:
        for index, candidate in enumerate(candidates):
            if candidate.is_root:
                continue
            parent = self.parent_of(candidate)
            if parent is None or candidates[index + 1] == parent:
                continue
            applied = candidates[: index + 1]
            placed = visited.union(applied)
            if parent in placed:
                continue
            with guard:
                return applied + self._apply(default_candidates(parent), placed, guard)
        return candidates
