"""Conversion context: everything a run reads once and shares.

Replaces process-wide caches with one object per run. It holds the
supplemental data, the per-locale raw map cache, the alias table and the
skeleton set collected while parsing main files, and the candidate
resolver.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ldmlconverter.config import ConverterConfig
from ldmlconverter.constants import ROOT
from ldmlconverter.parsing.ldml import LDMLParseHandler
from ldmlconverter.parsing.loader import parse_ldml_file
from ldmlconverter.parsing.supplemental import (
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
from ldmlconverter.parsing.text_sources import TzdbData, read_tzdb
from ldmlconverter.resolution.candidates import CandidateResolver
from ldmlconverter.types import RawLocaleMap

__all__ = ["ConversionContext"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionContext:
    """Shared, read-mostly state of one conversion run.

    Build it with ``from_config`` for a real CLDR tree; tests may build it
    directly and preload ``raw_maps``.

    Attributes:
        config: Run configuration
        parent_locales: ``parentLocale.<parent>`` -> child locale ids
        calendar_data: Week data (``firstDay.*``, ``minDays.*``) merged into root
        time_data: Hour cycle regions (``DateFormatItemInputRegions.*``) merged
            into root
        likely_subtags: BCP-47 tag -> likely subtags tag
        likely_scripts: Script -> languages whose likely script it is
        numbering_systems: Numeric numbering system -> digits
        metazones: Zone id -> current metazone
        golden_zones: Metazone -> zone of the ``001`` territory
        territory_zones: (metazone, territory) -> zone
        deprecated_zones: Deprecated zone id -> replacement
        canonical_zones: Alias zone id -> canonical zone id
        windows_zones: ``"<windows name>:<territory>"`` -> zone id
        plural_rules: Locale id -> ``type:rule;...``
        day_period_rules: Locale id -> ``type:rule;...``
        tzdb: Abbreviations from the TZDB sources
        available_zone_ids: Zone ids names are extracted for: the TZDB Zone
            and Link records plus the zones that belong to a metazone
        aliases: Alias key -> source key, from every parsed main file
        skeletons: Date format skeletons seen in any main file
        raw_maps: Cache of per-locale raw maps
    """

    config: ConverterConfig
    parent_locales: dict[str, tuple[str, ...]] = field(default_factory=dict)
    calendar_data: RawLocaleMap = field(default_factory=dict)
    time_data: RawLocaleMap = field(default_factory=dict)
    likely_subtags: dict[str, str] = field(default_factory=dict)
    likely_scripts: dict[str, frozenset[str]] = field(default_factory=dict)
    numbering_systems: dict[str, str] = field(default_factory=dict)
    metazones: dict[str, str] = field(default_factory=dict)
    golden_zones: dict[str, str] = field(default_factory=dict)
    territory_zones: dict[tuple[str, str], str] = field(default_factory=dict)
    deprecated_zones: dict[str, str] = field(default_factory=dict)
    canonical_zones: dict[str, str] = field(default_factory=dict)
    windows_zones: dict[str, str] = field(default_factory=dict)
    plural_rules: dict[str, str] = field(default_factory=dict)
    day_period_rules: dict[str, str] = field(default_factory=dict)
    tzdb: TzdbData = field(default_factory=TzdbData)
    available_zone_ids: frozenset[str] = frozenset()
    aliases: dict[str, str] = field(default_factory=dict)
    skeletons: set[str] = field(default_factory=set)
    raw_maps: dict[str, RawLocaleMap] = field(default_factory=dict)
    _resolver: CandidateResolver | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(cls, config: ConverterConfig) -> ConversionContext:
        """Parse the supplemental, BCP-47 and TZDB sources of a run.

        Raises:
            SourceParseError: If a required source is missing or malformed
        """
        draft = config.draft
        supplemental = parse_ldml_file(config.supplemental_data_file, SupplementalDataHandler(draft=draft))
        numbering = parse_ldml_file(config.numbering_systems_file, NumberingSystemsHandler(draft=draft))
        metazones = parse_ldml_file(config.metazones_file, MetaZonesHandler(draft=draft))
        likely = parse_ldml_file(config.likely_subtags_file, LikelySubtagsHandler(draft=draft))
        metadata = parse_ldml_file(config.supplemental_metadata_file, SupplementalMetadataHandler(draft=draft))
        win_zones = parse_ldml_file(config.windows_zones_file, WinZonesHandler(draft=draft))
        plurals = parse_ldml_file(config.plurals_file, PluralsHandler(draft=draft))
        day_periods = parse_ldml_file(config.day_periods_file, DayPeriodRulesHandler(draft=draft))
        timezones = parse_ldml_file(config.timezone_file, TimeZoneHandler(draft=draft))
        tzdb = read_tzdb(config.tzdata_dir) if config.tzdata_dir is not None else TzdbData()

        return cls(
            config=config,
            parent_locales=supplemental.parent_locales(),
            calendar_data=supplemental.calendar_data(),
            time_data=supplemental.time_data(),
            likely_subtags=likely.likely_subtags(),
            likely_scripts=likely.likely_scripts(),
            numbering_systems=numbering.digits(),
            metazones=metazones.metazones(),
            golden_zones=dict(metazones.golden_zones),
            territory_zones=dict(metazones.territory_zones),
            deprecated_zones=metadata.deprecated_zones(),
            canonical_zones=timezones.canonical_zones(),
            windows_zones=win_zones.windows_zones(),
            plural_rules=generate_rules(plurals.rules()),
            day_period_rules=generate_rules(day_periods.rules()),
            tzdb=tzdb,
            available_zone_ids=frozenset(tzdb.zone_ids() | metazones.zone_ids()),
        )

    @property
    def resolver(self) -> CandidateResolver:
        """Candidate resolver, created on first use."""
        if self._resolver is None:
            self._resolver = CandidateResolver(
                self.parent_locales,
                likely_scripts=self.likely_scripts,
                nonlikely_script=self.config.nonlikely_script,
            )
        return self._resolver

    def raw_map(self, locale_id: str) -> RawLocaleMap:
        """Raw map of one locale's main file, parsed once.

        A locale without a main file contributes an empty map. Root also
        carries the week and hour cycle data of the supplemental file.

        Raises:
            SourceParseError: If the main file exists but is malformed
        """
        cached = self.raw_maps.get(locale_id)
        if cached is not None:
            return cached

        path = self.config.main_dir / f"{locale_id}.xml"
        if not path.is_file():
            logger.debug("No main file for %s", locale_id)
            self.raw_maps[locale_id] = {}
            return self.raw_maps[locale_id]

        handler = parse_ldml_file(
            path,
            LDMLParseHandler(
                locale_id,
                draft=self.config.draft,
                numbering_systems=self.numbering_systems,
            ),
        )
        self.aliases.update(handler.aliases)
        self.skeletons.update(handler.skeletons)

        data: RawLocaleMap = {}
        if locale_id == ROOT:
            data.update(self.calendar_data)
            data.update(self.time_data)
        data.update(handler.data_map)
        self.raw_maps[locale_id] = data
        return data
