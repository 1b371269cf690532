"""Alias resolution.

``alias`` elements in the main files say that one key takes its value from
another (``standalone.MonthNames`` -> ``MonthNames``). Resolution happens on
a merged target map, so that an alias declared in root also fills data a
descendant only partially provides.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

from ldmlconverter.constants import LIST_PATTERN_PREFIX
from ldmlconverter.core.depth_guard import DepthGuard
from ldmlconverter.core.errors import AliasResolutionError
from ldmlconverter.types import RawLocaleMap, RawValue

__all__ = ["copy_value", "resolve_aliases"]


def copy_value(value: RawValue) -> RawValue:
    """Copy mutable raw values so that maps never share arrays."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


def _resolution_order(aliases: Mapping[str, str]) -> list[str]:
    """Alias keys ordered so that every alias comes after its source.

    Raises:
        AliasResolutionError: If an alias chain loops back on itself
    """
    done: set[str] = set()
    order: list[str] = []
    for start in sorted(aliases):
        guard = DepthGuard(label="alias chain")
        path: list[str] = []
        key = start
        while key in aliases and key not in done:
            if key in path:
                msg = f"alias cycle: {' -> '.join([*path, key])}"
                raise AliasResolutionError(msg, key=start, source_key=key)
            guard.increment()
            path.append(key)
            key = aliases[key]
        for resolved in reversed(path):
            done.add(resolved)
            order.append(resolved)
    return order


def _terminal_source(key: str, aliases: Mapping[str, str]) -> str:
    source = aliases[key]
    while source in aliases:
        source = aliases[source]
    return source


def resolve_aliases(bundle_map: Mapping[str, RawValue], aliases: Mapping[str, str]) -> RawLocaleMap:
    """Return a copy of ``bundle_map`` with aliases applied.

    For each alias ``key -> source``:

    - ``ListPatterns_`` keys follow the alias chain to its terminal key;
      other keys use their direct source (already resolved, since sources
      are processed first).
    - A key holding an array keeps its own slots and takes the source's
      values only for its None slots.
    - A missing key adopts a copy of the source's value.
    - Aliases whose source has no value are skipped.

    Applying the function to its own result changes nothing.

    Raises:
        AliasResolutionError: On alias cycles, or when an array is filled
            from a value that is not an array or has fewer slots
    """
    resolved: RawLocaleMap = {key: copy_value(value) for key, value in bundle_map.items()}
    for key in _resolution_order(aliases):
        if key.startswith(LIST_PATTERN_PREFIX):
            source_key = _terminal_source(key, aliases)
        else:
            source_key = aliases[key]
        source = resolved.get(source_key)
        if source is None:
            continue
        target = resolved.get(key)
        if target is None:
            resolved[key] = copy_value(source)
        elif isinstance(target, list):
            if not isinstance(source, list | tuple) or len(source) < len(target):
                msg = f"cannot fill {key} ({len(target)} slots) from {source_key}"
                raise AliasResolutionError(msg, key=key, source_key=source_key)
            resolved[key] = [
                own if own is not None else inherited
                for own, inherited in zip(target, source, strict=False)
            ]
    return resolved
