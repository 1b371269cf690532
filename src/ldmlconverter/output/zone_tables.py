"""Auxiliary zone tables generated for the base module.

- The zone name template: placeholder lines are replaced with generated
  table rows (zone -> metazone, metazone -> territory zone, deprecated ids,
  TZDB links).
- ``tzmappings``: Windows zone name and territory -> zone id, one
  ``Name:Territory:Zone:`` line each.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from ldmlconverter.core.errors import SourceParseError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template rows
    "zone_id_map_lines",
    "metazone_map_lines",
    "deprecated_lines",
    "tzdb_link_lines",
    "render_zone_name_template",
    "write_zone_name_file",
    # Windows mappings
    "windows_tzmappings_lines",
    "write_windows_tzmappings",
]

logger = logging.getLogger(__name__)

_INDENT = "        "
_WORLD = "001"
_TERRITORY_SUFFIX = re.compile(r":\w{2,3}$")


def _row(*values: str) -> str:
    return _INDENT + " ".join(f'"{value}",' for value in values)


def zone_id_map_lines(
    zone_ids: Iterable[str],
    canonical_zones: Mapping[str, str],
    metazones: Mapping[str, str],
    golden_zones: Mapping[str, str],
) -> list[str]:
    """Rows ``"zone", "metazone", "golden zone",`` for zones with a metazone.

    Alias zone ids are looked up through their canonical id.
    """
    rows = []
    for zone in zone_ids:
        meta = metazones.get(canonical_zones.get(zone, zone))
        golden = golden_zones.get(meta) if meta is not None else None
        if meta is not None and golden is not None:
            rows.append(_row(zone, meta, golden))
    return sorted(rows)


def metazone_map_lines(territory_zones: Mapping[tuple[str, str], str]) -> list[str]:
    """Rows ``"metazone", "territory", "zone",`` for non-world territories."""
    return sorted(_row(meta, territory, zone) for (meta, territory), zone in territory_zones.items())


def deprecated_lines(deprecated: Mapping[str, str]) -> list[str]:
    """Rows ``"deprecated id", "replacement",``."""
    return sorted(_row(old, new) for old, new in deprecated.items())


def tzdb_link_lines(links: Mapping[str, str]) -> list[str]:
    """Rows ``"link name", "target",``."""
    return sorted(_row(name, target) for name, target in links.items())


def render_zone_name_template(template_lines: Iterable[str], tables: Mapping[str, list[str]]) -> list[str]:
    """Replace each line equal to a placeholder with its table rows.

    Example:
        >>> render_zone_name_template(["a", "%%%%DEPRECATED%%%%", "b"],
        ...                           {"%%%%DEPRECATED%%%%": ['        "x", "y",']})
        ['a', '        "x", "y",', 'b']
    """
    rendered: list[str] = []
    for line in template_lines:
        rows = tables.get(line)
        if rows is None:
            rendered.append(line)
        else:
            rendered.extend(rows)
    return rendered


def write_zone_name_file(template: Path, destination: Path, tables: Mapping[str, list[str]]) -> None:
    """Render the zone name template file into ``destination``.

    Raises:
        SourceParseError: If the template cannot be read
    """
    try:
        lines = template.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise SourceParseError(f"cannot read template: {e}", path=template) from e
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text("\n".join(render_zone_name_template(lines, tables)) + "\n", encoding="utf-8")
    logger.info("Generated %s", destination)


def _mapping_order(line: str) -> tuple[str, bool, str]:
    name, territory = line.split(":")[:2]
    return (name, territory == _WORLD, territory)


def windows_tzmappings_lines(win_zones: Mapping[str, str]) -> list[str]:
    """``Name:Territory:Zone:`` lines of the Windows mappings.

    A territory entry that maps to the same zone as its name's world
    (``001``) entry is left out. Lines are sorted by name, then territory,
    with ``001`` last within each name.
    """
    lines = []
    for key, zone in win_zones.items():
        world = win_zones.get(_TERRITORY_SUFFIX.sub(":" + _WORLD, key, count=1))
        if key.endswith(":" + _WORLD) or zone != world:
            lines.append(f"{key}:{zone}:")
    return sorted(lines, key=_mapping_order)


def write_windows_tzmappings(win_zones: Mapping[str, str], destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text("\n".join(windows_tzmappings_lines(win_zones)) + "\n", encoding="utf-8")
    logger.info("Generated %s", destination)
