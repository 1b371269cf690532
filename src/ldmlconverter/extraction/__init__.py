"""Extractors: target map -> typed sub-bundles.

Each extractor is a pure function of a locale's target map, its id and
the run-wide inputs it needs. Key selection is driven by PrefixRule
tables evaluated in order.

Public API:
    extract_locale_names - LocaleNames bundle
    extract_currency_names - CurrencyNames bundle
    extract_zone_names - TimeZoneNames bundle
    extract_calendar_data - CalendarData bundle (root only)
    extract_format_data - FormatData bundle
    fill_tzdb_short_names - TZDB abbreviations for missing short names

Python 3.13+.
"""

from .formats import FORMAT_DATA_ELEMENTS, extract_calendar_data, extract_format_data
from .names import extract_currency_names, extract_locale_names
from .rules import PrefixRule, apply_rules, bundle_key_order, sort_bundle
from .zones import ZoneSources, convert_gmt_name, extract_zone_names, fill_tzdb_short_names

__all__ = [
    "FORMAT_DATA_ELEMENTS",
    "PrefixRule",
    "ZoneSources",
    "apply_rules",
    "bundle_key_order",
    "convert_gmt_name",
    "extract_calendar_data",
    "extract_currency_names",
    "extract_format_data",
    "extract_locale_names",
    "extract_zone_names",
    "fill_tzdb_short_names",
    "sort_bundle",
]
