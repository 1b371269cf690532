"""Conversion pipeline.

    supplemental sources -> ConversionContext
    main/*.xml           -> bundle list (coverage and base module filters)
    each bundle          -> target map -> extractors -> sink
    all bundles          -> available locales -> sink meta info
    base module          -> zone name template, Windows tzmappings

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Set

from ldmlconverter.config import ConverterConfig
from ldmlconverter.constants import (
    LIKELY_SCRIPT_PREFIX,
    OBSOLETE_LANGUAGE_TAGS,
    ROOT,
    ZONE_NAME_PLACEHOLDERS,
)
from ldmlconverter.enums import BundleKind, FormatKind
from ldmlconverter.extraction.formats import extract_calendar_data, extract_format_data
from ldmlconverter.extraction.names import extract_currency_names, extract_locale_names
from ldmlconverter.extraction.zones import ZoneSources, extract_zone_names
from ldmlconverter.locale_utils import LocaleId, parse_locale_id, to_language_tag
from ldmlconverter.output.sink import BundleSink, JsonBundleSink, render_header
from ldmlconverter.output.zone_tables import (
    deprecated_lines,
    metazone_map_lines,
    tzdb_link_lines,
    write_windows_tzmappings,
    write_zone_name_file,
    zone_id_map_lines,
)
from ldmlconverter.parsing.text_sources import read_coverage_levels, read_tzmappings_overrides
from ldmlconverter.resolution.bundle import Bundle
from ldmlconverter.resolution.candidates import default_candidates
from ldmlconverter.resolution.context import ConversionContext
from ldmlconverter.types import BundleMap, RawLocaleMap

__all__ = [
    "Converter",
    "base_locale_set",
    "bundle_sort_key",
    "convert",
]

logger = logging.getLogger(__name__)

_SCRIPT_SUBTAG = re.compile(r"-[A-Z][a-z]{3}")

_FORMAT_KINDS = {
    BundleKind.LOCALENAMES: FormatKind.OPEN,
    BundleKind.CURRENCYNAMES: FormatKind.OPEN,
    BundleKind.TIMEZONENAMES: FormatKind.TIMEZONE,
    BundleKind.CALENDARDATA: FormatKind.PLAIN,
    BundleKind.FORMATDATA: FormatKind.PLAIN,
}


def bundle_sort_key(locale_id: str) -> str:
    """Order bundles by id with root first."""
    return "" if locale_id == ROOT else locale_id


def base_locale_set(base_locales: Iterable[str]) -> frozenset[LocaleId]:
    """Locales that belong to the base module.

    Each base locale is taken with the ``Latn`` script and expanded to its
    default truncation chain, so ``en-US`` brings in ``en_Latn_US``,
    ``en_Latn``, ``en_US``, ``en`` and root.
    """
    locales: set[LocaleId] = set()
    for tag in base_locales:
        locales.update(default_candidates(parse_locale_id(tag).replace(script="Latn")))
    return frozenset(locales)


class Converter:
    """Runs a whole conversion.

    Args:
        config: Run configuration
        sink: Receives the bundles (default: JSON files under the output
            directory)
        context: Pre-built context (default: parsed from the CLDR tree)

    Example:
        >>> config = ConverterConfig(cldr_base=Path("cldr/common"))  # doctest: +SKIP
        >>> Converter(config).run()  # doctest: +SKIP
    """

    def __init__(
        self,
        config: ConverterConfig,
        *,
        sink: BundleSink | None = None,
        context: ConversionContext | None = None,
    ) -> None:
        self.config = config
        self.context = context if context is not None else ConversionContext.from_config(config)
        self.sink: BundleSink = sink if sink is not None else JsonBundleSink(
            config.output_dir,
            use_utf8=config.use_utf8,
            header=render_header(config.header_template, config.copyright_year),
        )
        self._extractors: dict[BundleKind, Callable[[RawLocaleMap, str], BundleMap]] = {
            BundleKind.LOCALENAMES: extract_locale_names,
            BundleKind.CURRENCYNAMES: extract_currency_names,
            BundleKind.TIMEZONENAMES: self._zone_names,
            BundleKind.CALENDARDATA: extract_calendar_data,
            BundleKind.FORMATDATA: self._format_data,
        }

    def run(self) -> frozenset[str]:
        """Convert every selected locale and emit the auxiliary tables.

        Returns:
            The available locale tags

        Raises:
            SourceParseError: If a required source is malformed
            AliasResolutionError: If the alias data is inconsistent
        """
        logger.info("Converting %s (draft level %s)", self.config.cldr_base, self.config.draft)
        available = self.convert_bundles(self.read_bundle_list())
        if self.config.base_module:
            self.generate_auxiliary_tables()
        return available

    # -- bundle list ----------------------------------------------------------

    def read_bundle_list(self) -> list[Bundle]:
        """Bundles for the main files selected for this run, root first.

        A locale is kept if a locale of its candidate chain has basic or
        better coverage or is an extra common locale; root is always kept.
        Base module runs keep the base locales only, other runs the rest.
        """
        resolver = self.context.resolver
        coverage = read_coverage_levels(self.config.coverage_levels_file)
        common = set(coverage)
        common.update(parse_locale_id(tag) for tag in self.config.extra_common_locales)
        base_set = base_locale_set(self.config.base_locales)

        bundles = []
        for path in sorted(self.config.main_dir.glob("*.xml")):
            locale_id = path.name.partition(".")[0]
            try:
                locale = parse_locale_id(locale_id)
            except ValueError:
                logger.warning("Skipping %s: not a locale id", path.name)
                continue
            chain = resolver.resolve(locale)
            if locale_id != ROOT and common.isdisjoint(chain):
                continue
            if (locale in base_set) != self.config.base_module:
                continue
            bundles.append(Bundle(locale_id, tuple(candidate.name for candidate in chain)))

        bundles.sort(key=lambda bundle: bundle_sort_key(bundle.locale_id))
        logger.info("Selected %d locales", len(bundles))
        return bundles

    # -- conversion -----------------------------------------------------------

    def _zone_names(self, visible: RawLocaleMap, locale_id: str) -> BundleMap:
        context = self.context
        sources = ZoneSources(
            available_ids=context.available_zone_ids,
            deprecated=context.deprecated_zones,
            metazones=context.metazones,
            tzdb=context.tzdb,
        )
        return extract_zone_names(visible, locale_id, sources)

    def _format_data(self, visible: RawLocaleMap, locale_id: str) -> BundleMap:
        return extract_format_data(
            visible,
            locale_id,
            skeletons=self.context.skeletons,
            numbering_systems=self.context.numbering_systems,
        )

    def convert_bundles(self, bundles: Iterable[Bundle]) -> frozenset[str]:
        """Extract and emit every bundle, then the meta information.

        Empty bundles are only emitted for root, the terminal fallback of
        every bundle kind.
        """
        available: set[str] = set()
        for bundle in bundles:
            logger.info("Converting %s", bundle.locale_id)
            visible = bundle.target_map(self.context)
            for kind in BundleKind:
                if kind not in bundle.kinds:
                    continue
                data = self._extractors[kind](visible, bundle.locale_id)
                if data or bundle.is_root:
                    self.sink.generate_bundle(
                        kind.module, kind, bundle.locale_id, bundle.is_root, data, _FORMAT_KINDS[kind]
                    )
            tag = to_language_tag(bundle.locale_id)
            available.add(tag)
            self._add_likely_subtags(tag, available)

        for source, target in self.context.likely_subtags.items():
            if target in available and source not in OBSOLETE_LANGUAGE_TAGS:
                available.add(source)

        self.sink.generate_meta_info(self.meta_info(available))
        return frozenset(available)

    def _add_likely_subtags(self, tag: str, available: set[str]) -> None:
        likely = self.context.likely_subtags.get(tag)
        if likely is not None:
            available.add(_SCRIPT_SUBTAG.sub("", likely, count=1))
            available.add(likely)

    def meta_info(self, available: Set[str]) -> dict[str, Set[str]]:
        """Meta information; base module runs add the inheritance maps."""
        info: dict[str, Set[str]] = {"AvailableLocales": frozenset(available)}
        if self.config.base_module:
            for key, children in self.context.parent_locales.items():
                info[key] = frozenset(children)
            for script, languages in self.context.likely_scripts.items():
                info[LIKELY_SCRIPT_PREFIX + script] = languages
        return info

    # -- auxiliary tables -----------------------------------------------------

    def zone_name_tables(self) -> Mapping[str, list[str]]:
        """Rows substituted for each zone name template placeholder."""
        context = self.context
        rows = (
            zone_id_map_lines(
                context.available_zone_ids, context.canonical_zones, context.metazones, context.golden_zones
            ),
            metazone_map_lines(context.territory_zones),
            deprecated_lines(context.deprecated_zones),
            tzdb_link_lines(context.tzdb.links),
        )
        return dict(zip(ZONE_NAME_PLACEHOLDERS, rows, strict=True))

    def generate_auxiliary_tables(self) -> None:
        """Write the zone name file and the Windows tzmappings."""
        config = self.config
        if config.zone_name_template is not None:
            name = config.zone_name_template.name.removesuffix(".template")
            write_zone_name_file(config.zone_name_template, config.output_dir / "zone" / name, self.zone_name_tables())

        win_zones: Mapping[str, str] = self.context.windows_zones
        if config.tzdata_dir is not None:
            win_zones = read_tzmappings_overrides(config.tzdata_dir / "tzmappings.override", win_zones)
        write_windows_tzmappings(win_zones, config.output_dir / "windows" / "conf" / "tzmappings")


def convert(config: ConverterConfig, *, sink: BundleSink | None = None) -> frozenset[str]:
    """Run a conversion with the given configuration."""
    return Converter(config, sink=sink).run()

