"""Emission of generated artifacts.

Public API:
    BundleSink - Protocol receiving extracted bundles and meta information
    MemoryBundleSink, JsonBundleSink - Sink implementations
    render_zone_name_template - Zone name template substitution
    windows_tzmappings_lines - Windows zone mapping table

Python 3.13+.
"""

from .sink import (
    DEFAULT_HEADER,
    BundleSink,
    EmittedBundle,
    JsonBundleSink,
    MemoryBundleSink,
    copyright_year,
    render_header,
)
from .zone_tables import (
    deprecated_lines,
    metazone_map_lines,
    render_zone_name_template,
    tzdb_link_lines,
    windows_tzmappings_lines,
    write_windows_tzmappings,
    write_zone_name_file,
    zone_id_map_lines,
)

__all__ = [
    "DEFAULT_HEADER",
    "BundleSink",
    "EmittedBundle",
    "JsonBundleSink",
    "MemoryBundleSink",
    "copyright_year",
    "deprecated_lines",
    "metazone_map_lines",
    "render_header",
    "render_zone_name_template",
    "tzdb_link_lines",
    "windows_tzmappings_lines",
    "write_windows_tzmappings",
    "write_zone_name_file",
    "zone_id_map_lines",
]
