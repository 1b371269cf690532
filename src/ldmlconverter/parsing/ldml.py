"""Handler for per-locale main LDML files.

Translates the element tree of ``main/<locale>.xml`` into flat raw map keys:

    localeDisplayNames  locale.displayname.<code>, .key.<k>, .type.<k>.<t>
    currencies          currency.displayname.<code>, currency.symbol.<CODE>
    calendars           [<calendar>.]MonthNames, DayAbbreviations, Eras,
                        DatePatterns, DateFormatItem.<skeleton>, ...
    fields              field.<type>
    timeZoneNames       timezone.id.<zone>, metazone.id.<mzone>,
                        timezone.excity.<zone>, timezone.gmtFormat, ...
    numbers             <ns>.NumberElements, <ns>.NumberPatterns,
                        DefaultNumberingSystem, numberingScripts,
                        short.CompactNumberPatterns
    listPatterns        ListPatterns_<type>

Positional values (month names, zone names, number symbols...) are lists
whose unknown slots are None. ``alias`` elements are translated into
key-to-key aliases collected in ``aliases``.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from ldmlconverter.constants import (
    CURRENCY_NAME_PREFIX,
    CURRENCY_SYMBOL_PREFIX,
    EXEMPLAR_CITY_PREFIX,
    LIST_PATTERN_PREFIX,
    LIST_PATTERN_SLOTS,
    LOCALE_KEY_PREFIX,
    LOCALE_KEYTYPE,
    LOCALE_NAME_PREFIX,
    LOCALE_SEPARATOR,
    LOCALE_TYPE_PREFIX,
    METAZONE_ID_PREFIX,
    NUMBER_ELEMENTS_SIZE,
    TIMEZONE_ID_PREFIX,
    ZERO_DIGIT_INDEX,
    ZONE_NAME_SLOTS,
)
from ldmlconverter.enums import DraftType, calendar_key_prefix
from ldmlconverter.parsing.base import ElementFrame, LDMLHandler

__all__ = ["LDMLParseHandler", "leaf_keys", "parse_alias_path"]

logger = logging.getLogger(__name__)

# LDML keyword names -> Unicode extension keys
_EXTENSION_KEYS = {
    "calendar": "ca",
    "collation": "co",
    "currency": "cu",
    "numbers": "nu",
    "hours": "hc",
    "timezone": "tz",
    "colAlternate": "ka",
    "colBackwards": "kb",
    "colCaseFirst": "kf",
    "colCaseLevel": "kc",
    "colNormalization": "kk",
    "colNumeric": "kn",
    "colReorder": "kr",
    "colStrength": "ks",
}

# Calendar element kind -> (context element, width element, width -> name)
_CONTEXT_KINDS: dict[str, tuple[str, str, dict[str, str]]] = {
    "months": (
        "monthContext",
        "monthWidth",
        {"wide": "MonthNames", "abbreviated": "MonthAbbreviations", "narrow": "MonthNarrows"},
    ),
    "days": (
        "dayContext",
        "dayWidth",
        {"wide": "DayNames", "abbreviated": "DayAbbreviations", "narrow": "DayNarrows"},
    ),
    "quarters": (
        "quarterContext",
        "quarterWidth",
        {"wide": "QuarterNames", "abbreviated": "QuarterAbbreviations", "narrow": "QuarterNarrows"},
    ),
    "dayPeriods": (
        "dayPeriodContext",
        "dayPeriodWidth",
        {"wide": "AmPmMarkers", "narrow": "narrow.AmPmMarkers", "abbreviated": "abbreviated.AmPmMarkers"},
    ),
}
_CONTEXTS = ("format", "stand-alone")
_ERA_WIDTHS = {"eraNames": "long.Eras", "eraAbbr": "Eras", "eraNarrow": "narrow.Eras"}
_PATTERN_KINDS = {
    "dateFormats": ("dateFormatLength", "DatePatterns"),
    "timeFormats": ("timeFormatLength", "TimePatterns"),
    "dateTimeFormats": ("dateTimeFormatLength", "DateTimePatterns"),
}
_PATTERN_LENGTHS = ("full", "long", "medium", "short")

_SLOT_SIZES = {"months": 13, "days": 7, "quarters": 4, "dayPeriods": 12}
_DAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
_DAY_PERIODS = (
    "am", "pm", "midnight", "noon",
    "morning1", "morning2", "afternoon1", "afternoon2",
    "evening1", "evening2", "night1", "night2",
)

_FIELDS = frozenset({
    "era", "year", "month", "week", "weekday", "dayperiod", "hour", "minute", "second", "zone",
})

_ZONE_SLOTS = {
    ("long", "standard"): 0,
    ("short", "standard"): 1,
    ("long", "daylight"): 2,
    ("short", "daylight"): 3,
    ("long", "generic"): 4,
    ("short", "generic"): 5,
}

_SYMBOL_SLOTS = {
    "decimal": 0,
    "group": 1,
    "list": 2,
    "percentSign": 3,
    "minusSign": 6,
    "exponential": 7,
    "perMille": 8,
    "infinity": 9,
    "nan": 10,
    "currencyDecimal": 11,
    "currencyGroup": 12,
}
_PATTERN_DIGIT_INDEX = 5

_LIST_PART_SLOTS = {"start": 0, "middle": 1, "end": 2, "2": 3, "3": 4}

_ALIAS_STEP = re.compile(r"^(?P<name>[A-Za-z0-9]+)(?:\[@(?P<attr>[A-Za-z]+)='(?P<value>[^']*)'\])?$")

type _Signature = tuple[str, ...]


def parse_alias_path(path: str, frames: list[ElementFrame]) -> list[ElementFrame] | None:
    """Apply a relative alias path to the container element stack.

    Args:
        path: LDML alias path, e.g.
            ``../../monthContext[@type='format']/monthWidth[@type='wide']``
        frames: Open elements up to and including the alias container

    Returns:
        The element stack the path designates, or None if the path uses
        syntax outside the relative step form.
    """
    target = [ElementFrame(frame.name, dict(frame.attrs)) for frame in frames]
    for step in path.split("/"):
        if step == "..":
            if not target:
                return None
            target.pop()
            continue
        match = _ALIAS_STEP.match(step)
        if match is None:
            return None
        attrs = {match["attr"]: match["value"]} if match["attr"] else {}
        target.append(ElementFrame(match["name"], attrs))
    return target


def leaf_keys(frames: list[ElementFrame]) -> dict[_Signature, str]:
    """Raw map keys of every positional array at or below an element.

    The result maps the part of each array's location that the stack does
    not fix (its signature) to the array key, so that the keys below an
    alias container and below its target can be paired by signature.

    Example:
        For a stack ending in ``calendar[buddhist]/months``, the entry
        ``("format", "wide")`` maps to ``buddhist.MonthNames``.
    """
    names = [frame.name for frame in frames]
    if "calendar" in names:
        index = names.index("calendar")
        prefix = calendar_key_prefix(frames[index].type or "gregorian")
        return _calendar_leaf_keys(prefix, frames[index + 1:])
    if names and names[-1] == "listPattern":
        return {(): LIST_PATTERN_PREFIX + (frames[-1].type or "standard")}
    if names and names[-1] == "symbols":
        return {(): f"{frames[-1].attrs.get('numberSystem', 'latn')}.NumberElements"}
    return {}


def _calendar_leaf_keys(prefix: str, below: list[ElementFrame]) -> dict[_Signature, str]:
    fixed = [(frame.name, frame.type) for frame in below]
    keys: dict[_Signature, str] = {}
    for full, key in _all_calendar_arrays(prefix):
        if _matches(full, fixed):
            keys[tuple(sig for _, sig in full[len(fixed):])] = key
    return keys


def _all_calendar_arrays(prefix: str) -> list[tuple[list[tuple[str, str]], str]]:
    """Every (element path, key) pair of positional arrays in a calendar.

    Element paths are lists of (element name, type attribute); the
    signature of a path position is its type (or name if untyped).
    """
    arrays: list[tuple[list[tuple[str, str]], str]] = []
    for kind, (context_elem, width_elem, widths) in _CONTEXT_KINDS.items():
        for context in _CONTEXTS:
            if kind == "dayPeriods" and context != "format":
                continue
            for width, name in widths.items():
                key = prefix + ("standalone." if context == "stand-alone" else "") + name
                arrays.append(([(kind, kind), (context_elem, context), (width_elem, width)], key))
    for width_elem, name in _ERA_WIDTHS.items():
        arrays.append(([("eras", "eras"), (width_elem, width_elem)], prefix + name))
    for kind, (_, name) in _PATTERN_KINDS.items():
        arrays.append(([(kind, kind)], prefix + name))
    return arrays


def _matches(full: list[tuple[str, str]], fixed: list[tuple[str, str | None]]) -> bool:
    if len(fixed) > len(full):
        return False
    for (name, sig), (fixed_name, fixed_type) in zip(full, fixed, strict=False):
        if name != fixed_name:
            return False
        if fixed_type is not None and fixed_type != sig:
            return False
    return True


class LDMLParseHandler(LDMLHandler):
    """Parser target for one locale's main LDML file.

    Attributes:
        locale_id: CLDR id of the locale being parsed
        aliases: Alias key -> source key, from ``alias`` elements
        skeletons: Date format skeletons seen in ``availableFormats``
    """

    def __init__(
        self,
        locale_id: str,
        *,
        draft: DraftType = DraftType.CONTRIBUTED,
        numbering_systems: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(draft=draft)
        self.locale_id = locale_id
        self.numbering_systems = dict(numbering_systems or {})
        self.aliases: dict[str, str] = {}
        self.skeletons: set[str] = set()
        self._numbering_scripts: list[str] = []
        self._compact: dict[int, dict[str, str]] = {}

    def accept(self, name: str, attrs: Mapping[str, str]) -> bool:
        match name:
            case "month" | "day" | "quarter" | "era" if "yeartype" in attrs:
                return False
            case "displayName" if "count" in attrs:
                return False
            case "dateTimeFormat" if attrs.get("type", "standard") != "standard":
                return False
            case "currencyFormatLength" | "percentFormatLength" if "type" in attrs:
                return False
            case "decimalFormatLength" if attrs.get("type") not in (None, "short", "long"):
                return False
        return True

    def close(self) -> dict:
        if self._numbering_scripts:
            self.put("numberingScripts", list(self._numbering_scripts))
        return super().close()

    # -- element dispatch ---------------------------------------------------

    def start_element(self, frame: ElementFrame) -> None:
        if frame.name == "decimalFormatLength":
            self._compact = {}

    def end_element(self, frame: ElementFrame, text: str) -> None:
        match frame.name:
            case "alias":
                self._add_alias(frame)
            case "language" | "script" | "territory" if self.ancestor("localeDisplayNames"):
                self.put_if_absent(LOCALE_NAME_PREFIX + (frame.type or ""), text)
            case "variant" if self.ancestor("localeDisplayNames"):
                self.put_if_absent(f"{LOCALE_NAME_PREFIX}%%{frame.type}", text)
            case "key" if self.ancestor("localeDisplayNames"):
                self.put_if_absent(LOCALE_KEY_PREFIX + _extension_key(frame.type or ""), text)
            case "type" if self.ancestor("localeDisplayNames"):
                key = _extension_key(frame.attrs.get("key", ""))
                self.put_if_absent(f"{LOCALE_TYPE_PREFIX}{key}.{frame.type}", text)
            case "localeSeparator":
                self.put(LOCALE_SEPARATOR, text)
            case "localeKeyTypePattern":
                self.put(LOCALE_KEYTYPE, text)
            case "displayName" | "symbol" if self.ancestor("currency"):
                self._end_currency(frame.name, text)
            case "displayName" if self.ancestor("field"):
                field_type = self.ancestor_type("field")
                if field_type in _FIELDS:
                    self.put(f"field.{field_type}", text)
            case "month" | "day" | "quarter" | "dayPeriod" | "era":
                self._end_calendar_item(frame, text)
            case "pattern" if self.ancestor("calendar"):
                self._end_calendar_pattern(text)
            case "dateFormatItem":
                self._end_format_item(frame, text)
            case "hourFormat" | "gmtFormat" | "gmtZeroFormat":
                self.put(f"timezone.{frame.name}", text)
            case "regionFormat":
                suffix = f".{frame.type}" if frame.type else ""
                self.put(f"timezone.regionFormat{suffix}", text)
            case "standard" | "daylight" | "generic" if self.ancestor("timeZoneNames"):
                self._end_zone_name(frame.name, text)
            case "exemplarCity" if self.ancestor("zone"):
                self.put(EXEMPLAR_CITY_PREFIX + (self.ancestor_type("zone") or ""), text)
            case "defaultNumberingSystem":
                self.put("DefaultNumberingSystem", text)
            case "symbols":
                self._end_symbols(frame)
            case _ if frame.name in _SYMBOL_SLOTS and self.ancestor("symbols"):
                self._set_number_element(_SYMBOL_SLOTS[frame.name], text)
            case "pattern" if self.ancestor("numbers"):
                self._end_number_pattern(frame, text)
            case "decimalFormatLength" if frame.type in ("short", "long"):
                self._end_compact(frame.type)
            case "listPatternPart":
                self._end_list_part(frame, text)

    # -- locale display names and currencies --------------------------------

    def _end_currency(self, name: str, text: str) -> None:
        code = self.ancestor_type("currency") or ""
        if name == "displayName":
            self.put_if_absent(CURRENCY_NAME_PREFIX + code.lower(), text)
        else:
            self.put_if_absent(CURRENCY_SYMBOL_PREFIX + code, text)

    # -- calendars ----------------------------------------------------------

    def _end_calendar_item(self, frame: ElementFrame, text: str) -> None:
        if self.ancestor("calendar") is None:
            return
        keys = leaf_keys(self.stack)
        key = keys.get(())
        if key is None:
            return
        kind = frame.name + "s"
        item = frame.type or ""
        match kind:
            case "months" | "quarters":
                index = int(item) - 1
            case "days":
                index = _DAYS.index(item)
            case "dayPeriods":
                if item not in _DAY_PERIODS:
                    return
                index = _DAY_PERIODS.index(item)
            case _:
                index = int(item)
        self._set_slot(key, index, text, _SLOT_SIZES.get(kind, index + 1))

    def _end_calendar_pattern(self, text: str) -> None:
        for kind, (length_elem, name) in _PATTERN_KINDS.items():
            length = self.ancestor_type(length_elem)
            if self.ancestor(kind) is not None and length in _PATTERN_LENGTHS:
                prefix = calendar_key_prefix(self.ancestor_type("calendar") or "gregorian")
                self._set_slot(prefix + name, _PATTERN_LENGTHS.index(length), text, len(_PATTERN_LENGTHS))
                return

    def _end_format_item(self, frame: ElementFrame, text: str) -> None:
        skeleton = frame.attrs.get("id")
        if skeleton is None or self.ancestor("calendar") is None:
            return
        prefix = calendar_key_prefix(self.ancestor_type("calendar") or "gregorian")
        self.skeletons.add(skeleton)
        self.put(f"{prefix}DateFormatItem.{skeleton}", text)

    # -- time zone names ----------------------------------------------------

    def _end_zone_name(self, slot_type: str, text: str) -> None:
        width = "long" if self.ancestor("long") is not None else "short"
        zone = self.ancestor_type("zone")
        if zone is not None:
            key = TIMEZONE_ID_PREFIX + zone
        else:
            metazone = self.ancestor_type("metazone")
            if metazone is None:
                return
            key = METAZONE_ID_PREFIX + metazone
        self._set_slot(key, _ZONE_SLOTS[(width, slot_type)], text, ZONE_NAME_SLOTS)

    # -- numbers ------------------------------------------------------------

    def _number_system(self, container: str) -> str:
        frame = self.ancestor(container)
        system = frame.attrs.get("numberSystem", "latn") if frame is not None else "latn"
        if system not in self._numbering_scripts:
            self._numbering_scripts.append(system)
        return system

    def _set_number_element(self, index: int, text: str) -> None:
        system = self._number_system("symbols")
        self._set_slot(f"{system}.NumberElements", index, text, NUMBER_ELEMENTS_SIZE)

    def _end_symbols(self, frame: ElementFrame) -> None:
        system = frame.attrs.get("numberSystem", "latn")
        key = f"{system}.NumberElements"
        elements = self.get(key)
        if not isinstance(elements, list):
            return
        digits = self.numbering_systems.get(system)
        if digits and elements[ZERO_DIGIT_INDEX] is None:
            elements[ZERO_DIGIT_INDEX] = digits[0]
        if elements[_PATTERN_DIGIT_INDEX] is None:
            elements[_PATTERN_DIGIT_INDEX] = "#"

    def _end_number_pattern(self, frame: ElementFrame, text: str) -> None:
        if self.ancestor("decimalFormats") is not None:
            length = self.ancestor_type("decimalFormatLength")
            if length is None:
                self._set_number_pattern("decimalFormats", 0, text)
            elif "type" in frame.attrs and self._number_system("decimalFormats") == "latn":
                magnitude = len(frame.attrs["type"]) - 1
                count = frame.attrs.get("count", "other")
                self._compact.setdefault(magnitude, {})[count] = text
        elif self.ancestor("currencyFormats") is not None:
            index = 3 if self.ancestor_type("currencyFormat") == "accounting" else 1
            self._set_number_pattern("currencyFormats", index, text)
        elif self.ancestor("percentFormats") is not None:
            self._set_number_pattern("percentFormats", 2, text)

    def _set_number_pattern(self, container: str, index: int, text: str) -> None:
        system = self._number_system(container)
        self._set_slot(f"{system}.NumberPatterns", index, text, 4)

    def _end_compact(self, length: str) -> None:
        if not self._compact:
            return
        patterns: list[str | None] = [None] * (max(self._compact) + 1)
        for magnitude, counts in self._compact.items():
            if set(counts) == {"other"}:
                patterns[magnitude] = counts["other"]
            else:
                patterns[magnitude] = "{" + " ".join(f"{c}:{p}" for c, p in counts.items()) + "}"
        self.put(f"{length}.CompactNumberPatterns", [p if p is not None else "" for p in patterns])
        self._compact = {}

    # -- list patterns ------------------------------------------------------

    def _end_list_part(self, frame: ElementFrame, text: str) -> None:
        slot = _LIST_PART_SLOTS.get(frame.type or "")
        if slot is None:
            return
        key = LIST_PATTERN_PREFIX + (self.ancestor_type("listPattern") or "standard")
        self._set_slot(key, slot, text, LIST_PATTERN_SLOTS)

    # -- aliases ------------------------------------------------------------

    def _add_alias(self, frame: ElementFrame) -> None:
        if frame.attrs.get("source", "locale") != "locale":
            return
        container = self.stack
        target = parse_alias_path(frame.attrs.get("path", ""), container)
        if target is None:
            logger.debug("%s: unsupported alias path %s", self.locale_id, frame.attrs.get("path"))
            return
        sources = leaf_keys(container)
        targets = leaf_keys(target)
        for signature, key in sources.items():
            source_key = targets.get(signature)
            if source_key is not None and source_key != key:
                self.aliases[key] = source_key

    # -- helpers ------------------------------------------------------------

    def _set_slot(self, key: str, index: int, value: str, size: int) -> None:
        array = self.get(key)
        if not isinstance(array, list):
            array = [None] * size
            self.put(key, array)
        if index >= len(array):
            array.extend([None] * (index + 1 - len(array)))
        if array[index] is None:
            array[index] = value


def _extension_key(ldml_key: str) -> str:
    return _EXTENSION_KEYS.get(ldml_key, ldml_key)
