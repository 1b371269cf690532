"""CalendarData and FormatData extractors.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ldmlconverter.constants import (
    CALENDAR_FIRSTDAY_PREFIX,
    CALENDAR_MINDAYS_PREFIX,
    CALENDAR_NAME_PREFIX,
    LIST_PATTERN_KEYS,
    LOCALE_TYPE_PREFIX_CA,
    ROOT,
    ZERO_DIGIT_INDEX,
)
from ldmlconverter.enums import CalendarType
from ldmlconverter.extraction.rules import PrefixRule, apply_rules
from ldmlconverter.types import BundleMap

__all__ = [
    "CALENDAR_NAME_RULES",
    "FORMAT_DATA_ELEMENTS",
    "extract_calendar_data",
    "extract_format_data",
]

# Keys copied for every calendar, after the calendar's key prefix.
FORMAT_DATA_ELEMENTS: tuple[str, ...] = (
    "MonthNames",
    "standalone.MonthNames",
    "MonthAbbreviations",
    "standalone.MonthAbbreviations",
    "MonthNarrows",
    "standalone.MonthNarrows",
    "DayNames",
    "standalone.DayNames",
    "DayAbbreviations",
    "standalone.DayAbbreviations",
    "DayNarrows",
    "standalone.DayNarrows",
    "QuarterNames",
    "standalone.QuarterNames",
    "QuarterAbbreviations",
    "standalone.QuarterAbbreviations",
    "QuarterNarrows",
    "standalone.QuarterNarrows",
    "AmPmMarkers",
    "narrow.AmPmMarkers",
    "abbreviated.AmPmMarkers",
    "long.Eras",
    "Eras",
    "narrow.Eras",
    "field.era",
    "field.year",
    "field.month",
    "field.week",
    "field.weekday",
    "field.dayperiod",
    "field.hour",
    "timezone.hourFormat",
    "timezone.gmtFormat",
    "timezone.gmtZeroFormat",
    "timezone.regionFormat",
    "timezone.regionFormat.daylight",
    "timezone.regionFormat.standard",
    "field.minute",
    "field.second",
    "field.zone",
    "TimePatterns",
    "DatePatterns",
    "DateTimePatterns",
    "DateTimePatternChars",
    "PluralRules",
    "DayPeriodRules",
    "DateFormatItemInputRegions.allowed",
    "DateFormatItemInputRegions.preferred",
    "ListPatterns",
)

_CALENDARS_BY_NAME = {calendar.value: calendar for calendar in CalendarType}


def _calendar_names(key: str) -> tuple[str, ...]:
    """``locale.displayname.type.ca.gregorian`` -> both calendar name keys."""
    calendar = _CALENDARS_BY_NAME.get(key.removeprefix(LOCALE_TYPE_PREFIX_CA))
    if calendar is None:
        return ()
    names = [CALENDAR_NAME_PREFIX + calendar.value]
    if calendar.unicode_name != calendar.value:
        names.append(CALENDAR_NAME_PREFIX + calendar.unicode_name)
    return tuple(names)


CALENDAR_NAME_RULES: tuple[PrefixRule, ...] = (PrefixRule(LOCALE_TYPE_PREFIX_CA, _calendar_names),)


def _territory_table(visible: Mapping[str, object], prefix: str, values: Iterable[int]) -> str:
    return ";".join(
        f"{value}: {visible[prefix + str(value)]}" for value in values if prefix + str(value) in visible
    )


def extract_calendar_data(visible: Mapping[str, object], locale_id: str) -> BundleMap:
    """Week data, present in root only.

    Each value is a ``;``-separated list of ``<value>: <territories>``,
    e.g. ``1: AG AS BR;2: 001 AD``.
    """
    if locale_id != ROOT:
        return {}
    return {
        "firstDayOfWeek": _territory_table(visible, CALENDAR_FIRSTDAY_PREFIX, range(1, 8)),
        "minimalDaysInFirstWeek": _territory_table(visible, CALENDAR_MINDAYS_PREFIX, range(7)),
    }


def _copy_present(source: Mapping[str, object], keys: Iterable[str], dest: BundleMap) -> None:
    for key in keys:
        value = source.get(key)
        if value is not None:
            dest[key] = value


def extract_format_data(
    visible: Mapping[str, object],
    locale_id: str,
    *,
    skeletons: Iterable[str] = (),
    numbering_systems: Mapping[str, str] | None = None,
) -> BundleMap:
    """Date, time, number and list formatting data of a locale.

    Args:
        visible: Target map of the locale
        locale_id: CLDR id of the locale
        skeletons: Every ``availableFormats`` skeleton of the run
        numbering_systems: Numeric numbering system -> digits; root gets a
            ``NumberElements`` array for each system it does not define,
            copied from ``latn`` with the system's zero digit

    Returns:
        Entries in calendar, number, list pattern order
    """
    format_data: BundleMap = {}
    sorted_skeletons = sorted(skeletons)
    for calendar in CalendarType:
        prefix = calendar.key_prefix
        _copy_present(visible, (prefix + element for element in FORMAT_DATA_ELEMENTS), format_data)
        _copy_present(visible, (f"{prefix}DateFormatItem.{s}" for s in sorted_skeletons), format_data)

    format_data.update(apply_rules(visible, CALENDAR_NAME_RULES))
    _copy_present(visible, ("DefaultNumberingSystem",), format_data)

    scripts = visible.get("numberingScripts")
    numbering_scripts = list(scripts) if isinstance(scripts, list | tuple) else []
    if numbering_scripts:
        for script in numbering_scripts:
            _copy_present(visible, (f"{script}.NumberElements", f"{script}.NumberPatterns"), format_data)
    else:
        _copy_present(visible, ("NumberElements", "NumberPatterns"), format_data)
    _copy_present(visible, ("short.CompactNumberPatterns", "long.CompactNumberPatterns"), format_data)

    template = visible.get("latn.NumberElements")
    if locale_id == ROOT and numbering_systems and isinstance(template, list | tuple):
        for system, digits in numbering_systems.items():
            if system in numbering_scripts:
                continue
            elements = list(template)
            elements[ZERO_DIGIT_INDEX] = digits[0]
            format_data[f"{system}.NumberElements"] = elements

    for base in LIST_PATTERN_KEYS:
        _copy_present(visible, (base, f"{base}-short", f"{base}-narrow"), format_data)

    return format_data
