"""LDML and text source readers.

Every XML source is streamed through an lxml parser target that
accumulates a raw key/value map (RawLocaleMap). Values are strings,
positional string arrays whose unknown slots are None, or rule maps.

Public API:
    Handlers:
        LDMLParseHandler - Per-locale main files
        SupplementalDataHandler, NumberingSystemsHandler, MetaZonesHandler,
        LikelySubtagsHandler, SupplementalMetadataHandler, WinZonesHandler,
        PluralsHandler, DayPeriodRulesHandler, TimeZoneHandler

    Readers:
        parse_ldml_file - Stream an XML file into a handler
        read_tzdb - TZDB Zone/Rule/Link records
        read_tzmappings_overrides - Windows zone overrides
        read_coverage_levels - Coverage level per locale

Python 3.13+. Uses lxml for streaming XML parsing.
"""

from .base import ElementFrame, LDMLHandler
from .ldml import LDMLParseHandler
from .loader import parse_ldml_file, parse_raw_map
from .supplemental import (
    DayPeriodRulesHandler,
    LikelySubtagsHandler,
    MetaZonesHandler,
    NumberingSystemsHandler,
    PluralsHandler,
    SupplementalDataHandler,
    SupplementalMetadataHandler,
    TimeZoneHandler,
    WinZonesHandler,
    generate_rules,
)
from .text_sources import (
    TzdbData,
    TzdbFormat,
    parse_tzdb_lines,
    read_coverage_levels,
    read_tzdb,
    read_tzmappings_overrides,
)

__all__ = [
    # Handlers
    "DayPeriodRulesHandler",
    "ElementFrame",
    "LDMLHandler",
    "LDMLParseHandler",
    "LikelySubtagsHandler",
    "MetaZonesHandler",
    "NumberingSystemsHandler",
    "PluralsHandler",
    "SupplementalDataHandler",
    "SupplementalMetadataHandler",
    "TimeZoneHandler",
    "WinZonesHandler",
    # Readers
    "TzdbData",
    "TzdbFormat",
    "generate_rules",
    "parse_ldml_file",
    "parse_raw_map",
    "parse_tzdb_lines",
    "read_coverage_levels",
    "read_tzdb",
    "read_tzmappings_overrides",
]
