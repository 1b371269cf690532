"""Shared constants for ldmlconverter.

This module provides the key vocabulary shared between the parse handlers,
the resolution layer and the extractors. Placing constants here avoids
circular imports and provides a single source of truth for key prefixes.

Constants are grouped by domain:
- Key prefixes: Raw map key namespaces written by the LDML handlers
- Synthetic values: Entries that CLDR itself does not carry
- Array layouts: Slot counts and positions for positional arrays
- Source files: Names of the supplemental, BCP-47 and tzdata inputs
- Limits: Recursion and iteration bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key prefixes
    "LOCALE_NAME_PREFIX",
    "LOCALE_SEPARATOR",
    "LOCALE_KEYTYPE",
    "LOCALE_KEY_PREFIX",
    "LOCALE_TYPE_PREFIX",
    "LOCALE_TYPE_PREFIX_CA",
    "CURRENCY_SYMBOL_PREFIX",
    "CURRENCY_NAME_PREFIX",
    "CALENDAR_NAME_PREFIX",
    "CALENDAR_FIRSTDAY_PREFIX",
    "CALENDAR_MINDAYS_PREFIX",
    "TIMEZONE_ID_PREFIX",
    "EXEMPLAR_CITY_PREFIX",
    "METAZONE_ID_PREFIX",
    "PARENT_LOCALE_PREFIX",
    "INPUT_REGIONS_PREFIX",
    "LIKELY_SCRIPT_PREFIX",
    "LIST_PATTERN_PREFIX",
    "LIST_PATTERN_KEYS",
    # Synthetic values
    "ROOT",
    "META_EMPTY_ZONE_NAME",
    "META_ETCUTC_ZONE_NAME",
    "EMPTY_ZONE",
    "DATE_TIME_PATTERN_CHARS",
    "DISPLAY_NAME_PATTERN",
    "LEGACY_SHORT_IDS",
    # Array layouts
    "ZONE_NAME_SLOTS",
    "SHORT_NAME_SLOTS",
    "NUMBER_ELEMENTS_SIZE",
    "ZERO_DIGIT_INDEX",
    "LIST_PATTERN_SLOTS",
    # Source files
    "TZDB_FILES",
    "COVERAGE_LEVELS",
    "OBSOLETE_LANGUAGE_TAGS",
    "ZONE_NAME_PLACEHOLDERS",
    # Limits
    "MAX_DEPTH",
]

# ============================================================================
# KEY PREFIXES
# ============================================================================

LOCALE_NAME_PREFIX: str = "locale.displayname."
LOCALE_SEPARATOR: str = LOCALE_NAME_PREFIX + "separator"
LOCALE_KEYTYPE: str = LOCALE_NAME_PREFIX + "keytype"
LOCALE_KEY_PREFIX: str = LOCALE_NAME_PREFIX + "key."
LOCALE_TYPE_PREFIX: str = LOCALE_NAME_PREFIX + "type."
LOCALE_TYPE_PREFIX_CA: str = LOCALE_TYPE_PREFIX + "ca."
CURRENCY_SYMBOL_PREFIX: str = "currency.symbol."
CURRENCY_NAME_PREFIX: str = "currency.displayname."
CALENDAR_NAME_PREFIX: str = "calendarname."
CALENDAR_FIRSTDAY_PREFIX: str = "firstDay."
CALENDAR_MINDAYS_PREFIX: str = "minDays."
TIMEZONE_ID_PREFIX: str = "timezone.id."
EXEMPLAR_CITY_PREFIX: str = "timezone.excity."
METAZONE_ID_PREFIX: str = "metazone.id."
PARENT_LOCALE_PREFIX: str = "parentLocale."
# Hour cycles per region from timeData: ".allowed" and ".preferred".
INPUT_REGIONS_PREFIX: str = "DateFormatItemInputRegions."
LIKELY_SCRIPT_PREFIX: str = "likelyScript."

# List pattern keys chain through several aliases in root
# (e.g. or-narrow -> or-short -> or).
LIST_PATTERN_PREFIX: str = "ListPatterns_"
LIST_PATTERN_KEYS: tuple[str, ...] = (
    "ListPatterns_standard",
    "ListPatterns_or",
    "ListPatterns_unit",
)

# ============================================================================
# SYNTHETIC VALUES
# ============================================================================

# Identifier of the terminal fallback locale. Never "und".
ROOT: str = "root"

META_EMPTY_ZONE_NAME: str = "EMPTY_ZONE"
META_ETCUTC_ZONE_NAME: str = "ETC_UTC"
EMPTY_ZONE: tuple[str, ...] = ("", "", "", "", "", "")

# CLDR no longer carries localized pattern characters; root always gets these.
DATE_TIME_PATTERN_CHARS: str = "GyMdkHmsSEDFwWahKzZ"

# Display name pattern added to root LocaleNames, not present in CLDR.
DISPLAY_NAME_PATTERN: str = "{0,choice,0#|1#{1}|2#{1} ({2})}"

# Three-letter zone ids kept for compatibility, mapped to the zone whose
# names they borrow.
LEGACY_SHORT_IDS: dict[str, str] = {
    "ACT": "Australia/Darwin",
    "AET": "Australia/Sydney",
    "AGT": "America/Argentina/Buenos_Aires",
    "ART": "Africa/Cairo",
    "AST": "America/Anchorage",
    "BET": "America/Sao_Paulo",
    "BST": "Asia/Dhaka",
    "CAT": "Africa/Harare",
    "CNT": "America/St_Johns",
    "CST": "America/Chicago",
    "CTT": "Asia/Shanghai",
    "EAT": "Africa/Addis_Ababa",
    "ECT": "Europe/Paris",
    "IET": "America/Indiana/Indianapolis",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "MIT": "Pacific/Apia",
    "NET": "Asia/Yerevan",
    "NST": "Pacific/Auckland",
    "PLT": "Asia/Karachi",
    "PNT": "America/Phoenix",
    "PRT": "America/Puerto_Rico",
    "PST": "America/Los_Angeles",
    "SST": "Pacific/Guadalcanal",
    "VST": "Asia/Ho_Chi_Minh",
}

# ============================================================================
# ARRAY LAYOUTS
# ============================================================================

# Zone name arrays: long standard, short standard, long daylight,
# short daylight, long generic, short generic.
ZONE_NAME_SLOTS: int = 6
SHORT_NAME_SLOTS: tuple[int, ...] = (1, 3, 5)

# NumberElements: decimal, group, list, percent, zero digit, pattern digit,
# minus, exponential, per mille, infinity, NaN, currency decimal,
# currency group.
NUMBER_ELEMENTS_SIZE: int = 13
ZERO_DIGIT_INDEX: int = 4

# ListPatterns: start, middle, end, two, three.
LIST_PATTERN_SLOTS: int = 5

# ============================================================================
# SOURCE FILES
# ============================================================================

TZDB_FILES: frozenset[str] = frozenset({
    "africa",
    "antarctica",
    "asia",
    "australasia",
    "backward",
    "etcetera",
    "europe",
    "northamerica",
    "southamerica",
})

COVERAGE_LEVELS: frozenset[str] = frozenset({"basic", "moderate", "modern", "comprehensive"})

# Old language codes that must not be added to the available locales.
OBSOLETE_LANGUAGE_TAGS: frozenset[str] = frozenset({"in", "iw", "ji"})

ZONE_NAME_PLACEHOLDERS: tuple[str, ...] = (
    "%%%%ZIDMAP%%%%",
    "%%%%MZONEMAP%%%%",
    "%%%%DEPRECATED%%%%",
    "%%%%TZDATALINK%%%%",
)

# ============================================================================
# LIMITS
# ============================================================================

# Bound for parent-override recursion and alias chain hops.
# Real CLDR data needs fewer than 10 of either.
MAX_DEPTH: int = 100
