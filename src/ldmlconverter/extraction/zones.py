"""TimeZoneNames extractor.

Zone names are six-slot arrays:

    0 long standard   1 short standard
    2 long daylight   3 short daylight
    4 long generic    5 short generic

A zone either carries its own array (``America/Los_Angeles`` -> [...]) or
names its metazone (``America/Los_Angeles`` -> ``America_Pacific``), whose
array is stored once under ``metazone.id.<metazone>``. Short names CLDR
leaves out are taken from the TZDB abbreviations where the TZDB has a
textual one; numeric offsets are left unset so that the runtime formats
them.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ldmlconverter.constants import (
    EMPTY_ZONE,
    EXEMPLAR_CITY_PREFIX,
    LEGACY_SHORT_IDS,
    META_EMPTY_ZONE_NAME,
    META_ETCUTC_ZONE_NAME,
    METAZONE_ID_PREFIX,
    ROOT,
    SHORT_NAME_SLOTS,
    TIMEZONE_ID_PREFIX,
    ZONE_NAME_SLOTS,
)
from ldmlconverter.core.depth_guard import DepthGuard
from ldmlconverter.extraction.rules import sort_bundle
from ldmlconverter.parsing.text_sources import TzdbData
from ldmlconverter.types import BundleMap, ZoneNames

__all__ = [
    "ZoneSources",
    "convert_gmt_name",
    "extract_zone_names",
    "fill_tzdb_short_names",
]

logger = logging.getLogger(__name__)

_UTC_OFFSET = re.compile(
    r"Z|[+-](?:(?P<hour>\d)|(?P<hours>\d\d)(?:(?P<sep>:?)(?P<minutes>\d\d)(?:(?P=sep)(?P<seconds>\d\d))?)?)"
)
_MAX_OFFSET_SECONDS = 18 * 3600


@dataclass(frozen=True, slots=True)
class ZoneSources:
    """Locale-independent inputs of zone name extraction.

    Attributes:
        available_ids: Zone ids to extract names for
        deprecated: Deprecated zone id -> replacement
        metazones: Zone id -> current metazone
        tzdb: TZDB abbreviations and links
    """

    available_ids: frozenset[str]
    deprecated: Mapping[str, str] = field(default_factory=dict)
    metazones: Mapping[str, str] = field(default_factory=dict)
    tzdb: TzdbData = field(default_factory=TzdbData)


def _is_utc_offset(text: str) -> bool:
    match = _UTC_OFFSET.fullmatch(text)
    if match is None:
        return False
    if text == "Z":
        return True
    hours = int(match["hour"] or match["hours"])
    minutes = int(match["minutes"] or 0)
    seconds = int(match["seconds"] or 0)
    if minutes > 59 or seconds > 59:
        return False
    return hours * 3600 + minutes * 60 + seconds <= _MAX_OFFSET_SECONDS


def convert_gmt_name(abbreviation: str) -> str | None:
    """Keep a textual TZDB abbreviation; drop numeric offsets.

    Example:
        >>> convert_gmt_name("GMT")
        'GMT'
        >>> convert_gmt_name("+08") is None
        True
    """
    if abbreviation == "%z" or _is_utc_offset(abbreviation):
        return None
    return abbreviation


def fill_tzdb_short_names(tzid: str, names: Sequence[str | None], tzdb: TzdbData) -> ZoneNames:
    """Return a copy of ``names`` with missing short names from the TZDB.

    Only the short standard, daylight and generic slots are filled, and
    only where they are None. The zone's TZDB format is one of:

    - ``P%sT`` with rule ``US``: the rule's standard and daylight letters
      are substituted; the generic name drops the letters (PST, PDT, PT).
    - ``GMT/BST``: standard and generic use the part before the slash,
      daylight the part after it.
    - ``CET``: used for all three.

    Substitution letters the rule does not define leave the slot unset.
    """
    filled: ZoneNames = list(names) + [None] * (ZONE_NAME_SLOTS - len(names))
    entry = tzdb.format_for(tzid)
    if entry is None:
        return filled
    tz_format = entry.format
    for slot in SHORT_NAME_SLOTS:
        if filled[slot] is not None:
            continue
        if "%s" in tz_format:
            if slot == 5:
                filled[slot] = tz_format.replace("%s", "", 1)
            else:
                letters = tzdb.substitution(entry.rule, daylight=slot == 3)
                if letters is not None:
                    filled[slot] = tz_format.replace("%s", letters, 1)
        elif "/" in tz_format:
            standard, _, daylight = tz_format.partition("/")
            filled[slot] = convert_gmt_name(daylight if slot == 3 else standard)
        else:
            filled[slot] = convert_gmt_name(tz_format)
    return filled


def _follow_links(tz_key: str, links: Mapping[str, str]) -> str | None:
    """Final target of the TZDB links from ``tz_key``, or a zone linking to it."""
    link: str | None = None
    guard = DepthGuard(label="tzdb link")
    key = tz_key
    while key in links:
        guard.increment()
        key = link = links[key]
    if link is None:
        # CLDR may know the metazone of the link name only.
        sources = sorted(name for name, target in links.items() if target == tz_key)
        if sources:
            link = sources[0]
    return link


def extract_zone_names(visible: Mapping[str, object], locale_id: str, sources: ZoneSources) -> BundleMap:
    """Build the TimeZoneNames bundle of a locale.

    For each available zone id, in sorted order:

    1. A deprecated id is looked up through its replacement.
    2. TZDB links are followed forward, or else one zone linking to the id
       is taken.
    3. Names stored for the zone itself (or its link) are used as is, with
       missing short names filled from the TZDB. ``Etc/UTC`` without a
       separate ``UTC`` entry becomes the shared ``ETC_UTC`` metazone.
    4. Otherwise the zone maps to its metazone, whose names are stored once.
    5. Otherwise, for root only, a zone known to the TZDB gets the TZDB
       abbreviations.

    Exemplar cities are copied, ``UTC`` falls back to an all-empty
    metazone, and legacy three-letter ids borrow the names of their zone.
    """
    tzdb = sources.tzdb
    names: BundleMap = {}

    for tzid in sorted(sources.available_ids):
        tz_key = sources.deprecated.get(tzid, tzid)
        tz_link = _follow_links(tz_key, tzdb.links)

        data = visible.get(TIMEZONE_ID_PREFIX + tz_key)
        if data is None and tz_link is not None:
            data = visible.get(TIMEZONE_ID_PREFIX + tz_link)

        if isinstance(data, list | tuple):
            if tzid == "Etc/UTC" and TIMEZONE_ID_PREFIX + "UTC" not in visible:
                names[METAZONE_ID_PREFIX + META_ETCUTC_ZONE_NAME] = list(data)
                names[tzid] = META_ETCUTC_ZONE_NAME
                names["UTC"] = META_ETCUTC_ZONE_NAME
            else:
                names[tzid] = fill_tzdb_short_names(tzid, data, tzdb)
            continue

        meta = sources.metazones.get(tz_key)
        if meta is None and tz_link is not None:
            meta = sources.metazones.get(tz_link)

        if meta is not None:
            meta_key = METAZONE_ID_PREFIX + meta
            meta_names = visible.get(meta_key)
            if isinstance(meta_names, list | tuple):
                current = names.get(meta_key, meta_names)
                assert isinstance(current, list | tuple)
                names.setdefault(meta_key, fill_tzdb_short_names(tzid, current[:ZONE_NAME_SLOTS], tzdb))
                names[tzid] = meta
                if tz_link is not None and tz_link in sources.available_ids:
                    names[tz_link] = meta
        elif locale_id == ROOT and tzid in tzdb.short_names:
            names[tzid] = fill_tzdb_short_names(tzid, [None] * ZONE_NAME_SLOTS, tzdb)

    for key, value in visible.items():
        if key.startswith(EXEMPLAR_CITY_PREFIX):
            names[key] = value

    if names and "UTC" not in names:
        names.setdefault(METAZONE_ID_PREFIX + META_EMPTY_ZONE_NAME, list(EMPTY_ZONE))
        names["UTC"] = META_EMPTY_ZONE_NAME

    for short_id, zone in LEGACY_SHORT_IDS.items():
        if short_id not in names and zone in names:
            value = names[zone]
            names[short_id] = list(value) if isinstance(value, list) else value

    logger.debug("Extracted %d zone name entries for %s", len(names), locale_id)
    return sort_bundle(names)
