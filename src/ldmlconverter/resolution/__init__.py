"""Locale inheritance: candidate chains, merged target maps and aliases.

Public API:
    default_candidates - Truncation chain before parent overrides
    CandidateResolver - Chain with parentLocales overrides applied
    ConversionContext - Per-run supplemental data and raw map cache
    Bundle - Locale and requested bundle kinds
    merge_candidates - Union of a chain's raw maps, earlier entries win
    target_map - Visible map of a locale (merge, rules, aliases)
    resolve_aliases - Pure alias application

Python 3.13+.
"""

from .aliases import copy_value, resolve_aliases
from .bundle import Bundle, merge_candidates, target_map
from .candidates import CandidateResolver, default_candidates
from .context import ConversionContext

__all__ = [
    "Bundle",
    "CandidateResolver",
    "ConversionContext",
    "copy_value",
    "default_candidates",
    "merge_candidates",
    "resolve_aliases",
    "target_map",
]
