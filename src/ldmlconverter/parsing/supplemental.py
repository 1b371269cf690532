"""Handlers for the supplemental and BCP-47 sources.

Each handler reads one locale-independent CLDR file:

    SupplementalDataHandler     supplemental/supplementalData.xml
    NumberingSystemsHandler     supplemental/numberingSystems.xml
    MetaZonesHandler            supplemental/metaZones.xml
    LikelySubtagsHandler        supplemental/likelySubtags.xml
    SupplementalMetadataHandler supplemental/supplementalMetadata.xml
    WinZonesHandler             supplemental/windowsZones.xml
    PluralsHandler              supplemental/plurals.xml
    DayPeriodRulesHandler       supplemental/dayPeriods.xml
    TimeZoneHandler             bcp47/timezone.xml

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

from ldmlconverter.constants import (
    CALENDAR_FIRSTDAY_PREFIX,
    CALENDAR_MINDAYS_PREFIX,
    INPUT_REGIONS_PREFIX,
    PARENT_LOCALE_PREFIX,
)
from ldmlconverter.enums import DraftType
from ldmlconverter.parsing.base import ElementFrame, LDMLHandler
from ldmlconverter.types import RawLocaleMap

__all__ = [
    "DayPeriodRulesHandler",
    "LikelySubtagsHandler",
    "MetaZonesHandler",
    "NumberingSystemsHandler",
    "PluralsHandler",
    "SupplementalDataHandler",
    "SupplementalMetadataHandler",
    "TimeZoneHandler",
    "WinZonesHandler",
    "generate_rules",
]

_WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

# Day period hour cycles collapse onto their 12 and 24 hour letters.
_HOUR_LETTERS = {"b": "h", "B": "H"}


class SupplementalDataHandler(LDMLHandler):
    """Week data and parent locale declarations.

    Produces ``firstDay.<1..7>`` and ``minDays.<n>`` entries whose values
    are space-separated territory lists (merged into root),
    ``DateFormatItemInputRegions.{allowed,preferred}.<letter>`` hour cycle
    regions from ``timeData``, and ``parentLocale.<parent>`` entries whose
    values are space-separated child locale ids.
    """

    def accept(self, name: str, attrs: Mapping[str, str]) -> bool:
        # Component-specific parent locales (segmentation, collation...)
        # do not take part in bundle inheritance.
        return not (name == "parentLocales" and "component" in attrs)

    def end_element(self, frame: ElementFrame, text: str) -> None:
        attrs = frame.attrs
        match frame.name:
            case "firstDay":
                day = _WEEKDAYS.index(attrs["day"]) + 1
                self.append_words(f"{CALENDAR_FIRSTDAY_PREFIX}{day}", attrs["territories"])
            case "minDays":
                self.append_words(f"{CALENDAR_MINDAYS_PREFIX}{attrs['count']}", attrs["territories"])
            case "parentLocale":
                self.append_words(f"{PARENT_LOCALE_PREFIX}{attrs['parent']}", attrs["locales"])
            case "hours":
                allowed = attrs["allowed"].split()[0][0]
                allowed = _HOUR_LETTERS.get(allowed, allowed)
                self.append_words(f"{INPUT_REGIONS_PREFIX}allowed.{allowed}", attrs["regions"])
                self.append_words(f"{INPUT_REGIONS_PREFIX}preferred.{attrs['preferred']}", attrs["regions"])

    def calendar_data(self) -> RawLocaleMap:
        """Week data entries that are merged into the root locale."""
        return {
            key: value
            for key, value in self.data_map.items()
            if key.startswith((CALENDAR_FIRSTDAY_PREFIX, CALENDAR_MINDAYS_PREFIX))
        }

    def time_data(self) -> RawLocaleMap:
        """Hour cycle regions that are merged into the root locale.

        Each of ``DateFormatItemInputRegions.allowed`` and ``.preferred``
        maps to a list of ``<letter>: <regions>`` entries sorted by letter,
        e.g. ``["H: 001 GB", "h: US"]``.
        """
        time_data: RawLocaleMap = {}
        for kind in ("allowed", "preferred"):
            prefix = f"{INPUT_REGIONS_PREFIX}{kind}."
            entries = sorted(
                f"{key.removeprefix(prefix)}: {value}" for key, value in self.data_map.items() if key.startswith(prefix)
            )
            if entries:
                time_data[INPUT_REGIONS_PREFIX + kind] = entries
        return time_data

    def parent_locales(self) -> dict[str, tuple[str, ...]]:
        """``parentLocale.<parent>`` keys mapped to sorted child ids."""
        return {
            key: tuple(sorted(set(str(value).split())))
            for key, value in self.data_map.items()
            if key.startswith(PARENT_LOCALE_PREFIX)
        }


class NumberingSystemsHandler(LDMLHandler):
    """Numeric numbering systems: id -> digit characters."""

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "numberingSystem" and frame.type == "numeric":
            self.put(frame.attrs["id"], frame.attrs["digits"])

    def digits(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.data_map.items()}


class MetaZonesHandler(LDMLHandler):
    """Mappings between Olson zone ids and CLDR metazones.

    The raw map holds zone id -> current metazone. Zones whose history has
    no current metazone are kept in ``zones_without_metazone``.
    """

    def __init__(self, *, draft: DraftType = DraftType.CONTRIBUTED) -> None:
        super().__init__(draft=draft)
        self.zones_without_metazone: set[str] = set()
        # metazone -> golden zone of the "001" territory
        self.golden_zones: dict[str, str] = {}
        # (metazone, territory) -> zone, for territories other than "001"
        self.territory_zones: dict[tuple[str, str], str] = {}
        self._zone: str | None = None

    def start_element(self, frame: ElementFrame) -> None:
        if frame.name == "timezone" and self.ancestor("metazoneInfo") is not None:
            self._zone = frame.type

    def end_element(self, frame: ElementFrame, text: str) -> None:
        attrs = frame.attrs
        match frame.name:
            case "usesMetazone" if self._zone is not None and "to" not in attrs:
                self.put(self._zone, attrs["mzone"])
            case "timezone" if self._zone is not None:
                if self._zone not in self.data_map:
                    self.zones_without_metazone.add(self._zone)
                self._zone = None
            case "mapZone" if self.ancestor_type("mapTimezones") == "metazones":
                territory = attrs.get("territory", "001")
                if territory == "001":
                    self.golden_zones[attrs["other"]] = attrs["type"]
                else:
                    self.territory_zones[(attrs["other"], territory)] = attrs["type"]

    def metazones(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.data_map.items()}

    def zone_ids(self) -> set[str]:
        """Zone ids that currently belong to a metazone."""
        return set(self.data_map) - self.zones_without_metazone


class LikelySubtagsHandler(LDMLHandler):
    """Likely subtags as BCP-47 tags: ``en`` -> ``en-Latn-US``."""

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "likelySubtag":
            source = frame.attrs["from"].replace("_", "-")
            self.put(source, frame.attrs["to"].replace("_", "-"))

    def likely_subtags(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.data_map.items()}

    def likely_scripts(self) -> dict[str, frozenset[str]]:
        """Script -> languages whose likely script it is.

        Built from language-only sources (``en`` -> ``en-Latn-US``).
        """
        scripts: dict[str, set[str]] = {}
        for source, target in self.likely_subtags().items():
            parts = target.split("-")
            if "-" not in source and len(parts) > 1:
                scripts.setdefault(parts[1], set()).add(source)
        return {script: frozenset(languages) for script, languages in scripts.items()}


class SupplementalMetadataHandler(LDMLHandler):
    """Deprecated zone ids: deprecated id -> replacement id."""

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "zoneAlias" and frame.attrs.get("reason", "deprecated") == "deprecated":
            replacement = frame.attrs.get("replacement")
            if replacement:
                self.put(frame.attrs["type"], replacement.split()[0])

    def deprecated_zones(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.data_map.items()}


class WinZonesHandler(LDMLHandler):
    """Windows zone names: ``"<name>:<territory>"`` -> first zone id."""

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "mapZone":
            key = f"{frame.attrs['other']}:{frame.attrs['territory']}"
            self.put(key, frame.attrs["type"].split()[0])

    def windows_zones(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.data_map.items()}


class _LocaleRulesHandler(LDMLHandler):
    """Shared logic of the plural and day period rule handlers.

    The raw map holds locale id -> {rule type -> rule}.
    """

    container = ""

    def __init__(self, *, draft: DraftType = DraftType.CONTRIBUTED) -> None:
        super().__init__(draft=draft)
        self._locales: tuple[str, ...] = ()

    def start_element(self, frame: ElementFrame) -> None:
        if frame.name == self.container:
            self._locales = tuple(frame.attrs.get("locales", "").split())

    def add_rule(self, rule_type: str, rule: str) -> None:
        for locale in self._locales:
            rules = self.data_map.setdefault(locale, {})
            assert isinstance(rules, dict)
            rules[rule_type] = rule

    def rules(self) -> dict[str, dict[str, str]]:
        return {key: dict(value) for key, value in self.data_map.items() if isinstance(value, dict)}


class PluralsHandler(_LocaleRulesHandler):
    """Cardinal plural rules. ``other`` is implied and omitted."""

    container = "pluralRules"

    def accept(self, name: str, attrs: Mapping[str, str]) -> bool:
        return not (name == "plurals" and attrs.get("type", "cardinal") != "cardinal")

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "pluralRule":
            count = frame.attrs["count"]
            if count != "other":
                self.add_rule(count, text.strip())


class DayPeriodRulesHandler(_LocaleRulesHandler):
    """Format day period rules: ``at HH:MM`` or ``from HH:MM before HH:MM``."""

    container = "dayPeriodRules"

    def accept(self, name: str, attrs: Mapping[str, str]) -> bool:
        return not (name == "dayPeriodRuleSet" and attrs.get("type", "format") != "format")

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name != "dayPeriodRule":
            return
        attrs = frame.attrs
        if "at" in attrs:
            rule = f"at {attrs['at']}"
        else:
            rule = f"from {attrs.get('from', '')} before {attrs.get('before', '')}"
        self.add_rule(attrs["type"], rule)


class TimeZoneHandler(LDMLHandler):
    """BCP-47 zone keys: short id -> space-separated aliases.

    The first alias of each entry is the canonical zone id.
    """

    def end_element(self, frame: ElementFrame, text: str) -> None:
        if frame.name == "type" and self.ancestor("key") is not None:
            alias = frame.attrs.get("alias")
            if alias:
                self.put(frame.attrs["name"], alias)

    def canonical_zones(self) -> dict[str, str]:
        """Alias zone id -> canonical zone id."""
        canonical: dict[str, str] = {}
        for value in self.data_map.values():
            ids = str(value).split()
            for alias in ids[1:]:
                canonical[alias] = ids[0]
        return canonical


def generate_rules(rules: Mapping[str, Mapping[str, str]]) -> dict[str, str]:
    """Flatten per-locale rule maps into ``type:rule;type:rule`` strings.

    Sample annotations (``@integer ...``, ``@decimal ...``) are stripped.

    Example:
        >>> generate_rules({"en": {"one": "i = 1 and v = 0 @integer 1"}})
        {'en': 'one:i = 1 and v = 0'}
    """
    return {
        locale: ";".join(
            f"{rule_type}:{rule.split('@', 1)[0]}".strip() for rule_type, rule in locale_rules.items()
        )
        for locale, locale_rules in rules.items()
    }
