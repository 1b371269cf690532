"""Prefix rule tables.

Extractors select and rename keys of a target map through ordered tables
of PrefixRule. The first rule that matches a key decides its output keys.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

__all__ = [
    "PrefixRule",
    "apply_rules",
    "bundle_key_order",
    "rename",
    "sort_bundle",
    "strip_prefix",
]

type KeyTransform = Callable[[str], tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class PrefixRule:
    """Selects keys by prefix and names their output entries.

    Attributes:
        prefix: Key prefix (the whole key when ``exact`` is set)
        transform: Source key -> output keys (empty to drop the key)
        exact: Match the whole key instead of a prefix
    """

    prefix: str
    transform: KeyTransform
    exact: bool = False

    def matches(self, key: str) -> bool:
        if self.exact:
            return key == self.prefix
        return key.startswith(self.prefix)


def strip_prefix(prefix: str) -> KeyTransform:
    """Transform that removes ``prefix`` from the key."""
    return lambda key: (key.removeprefix(prefix),)


def rename(*names: str) -> KeyTransform:
    """Transform that replaces the key with fixed names."""
    return lambda _key: names


def apply_rules(source: Mapping[str, object], rules: Iterable[PrefixRule]) -> dict[str, object]:
    """Classify every key of ``source`` through the rule table.

    Rules are tried in order; keys no rule matches are not copied.

    Example:
        >>> rules = [PrefixRule("currency.symbol.", strip_prefix("currency.symbol."))]
        >>> apply_rules({"currency.symbol.USD": "$", "other": 1}, rules)
        {'USD': '$'}
    """
    table = tuple(rules)
    result: dict[str, object] = {}
    for key, value in source.items():
        for rule in table:
            if rule.matches(key):
                for name in rule.transform(key):
                    result[name] = value
                break
    return result


def bundle_key_order(key: str) -> tuple[int, int, str]:
    """Sort key of bundle entries.

    Keys starting with a digit come first in plain string order; the others
    are ordered by length, then as strings.
    """
    if key[:1].isdigit():
        return (0, 0, key)
    return (1, len(key), key)


def sort_bundle(bundle: Mapping[str, object]) -> dict[str, object]:
    """Copy of ``bundle`` with its keys in bundle key order."""
    return {key: bundle[key] for key in sorted(bundle, key=bundle_key_order)}
