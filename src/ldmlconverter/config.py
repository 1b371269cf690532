"""Conversion run configuration.

Provides a single frozen dataclass that encapsulates every option of a
conversion run. The command line entry point builds one instance; tests
build their own against a temporary CLDR tree.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ldmlconverter.core.errors import ConfigurationError
from ldmlconverter.enums import DraftType

__all__ = ["ConverterConfig"]


@dataclass(frozen=True, slots=True)
class ConverterConfig:
    """Immutable configuration for a conversion run.

    Attributes:
        cldr_base: Base directory of the CLDR ``common`` tree (contains
            ``main/``, ``supplemental/``, ``bcp47/``, ``properties/``).
        output_dir: Directory the emission sink writes into.
        draft: Minimum draft level of data to use (default: contributed).
        base_locales: Locales (BCP-47 tags) that belong to the base module.
        base_module: Generate the base module bundles and the auxiliary
            zone tables instead of the remaining locales.
        use_utf8: Emit UTF-8 text rather than escaped unicode.
        copyright_year: Year stamped into generated files (None: current
            year in America/Los_Angeles).
        zone_name_template: Template file for the zone name tables.
        tzdata_dir: Directory holding the tzdata source files.
        header_template: Text that replaces the default generated-file header.
        nonlikely_script: Make language-script locales whose script is not
            the likely script of the language fall back to root.
        extra_common_locales: Locales kept regardless of coverage level.

    Example:
        >>> config = ConverterConfig(cldr_base=Path("cldr/common"))
        >>> config.supplemental_data_file
        PosixPath('cldr/common/supplemental/supplementalData.xml')
    """

    cldr_base: Path
    output_dir: Path = Path("build/gensrc")
    draft: DraftType = DraftType.CONTRIBUTED
    base_locales: tuple[str, ...] = ("en-US",)
    base_module: bool = False
    use_utf8: bool = False
    copyright_year: int | None = None
    zone_name_template: Path | None = None
    tzdata_dir: Path | None = None
    header_template: str | None = None
    nonlikely_script: bool = False
    extra_common_locales: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigurationError: If a value is out of range
        """
        if self.copyright_year is not None and self.copyright_year <= 0:
            msg = f"copyright year must be positive, got {self.copyright_year}"
            raise ConfigurationError(msg)
        if not self.base_locales:
            msg = "at least one base locale is required"
            raise ConfigurationError(msg)
        if self.zone_name_template is not None and self.tzdata_dir is None:
            msg = "the zone name template requires a tzdata directory"
            raise ConfigurationError(msg)

    @property
    def main_dir(self) -> Path:
        """Directory of per-locale LDML files."""
        return self.cldr_base / "main"

    @property
    def supplemental_data_file(self) -> Path:
        return self.cldr_base / "supplemental" / "supplementalData.xml"

    @property
    def likely_subtags_file(self) -> Path:
        return self.cldr_base / "supplemental" / "likelySubtags.xml"

    @property
    def numbering_systems_file(self) -> Path:
        return self.cldr_base / "supplemental" / "numberingSystems.xml"

    @property
    def metazones_file(self) -> Path:
        return self.cldr_base / "supplemental" / "metaZones.xml"

    @property
    def supplemental_metadata_file(self) -> Path:
        return self.cldr_base / "supplemental" / "supplementalMetadata.xml"

    @property
    def windows_zones_file(self) -> Path:
        return self.cldr_base / "supplemental" / "windowsZones.xml"

    @property
    def plurals_file(self) -> Path:
        return self.cldr_base / "supplemental" / "plurals.xml"

    @property
    def day_periods_file(self) -> Path:
        return self.cldr_base / "supplemental" / "dayPeriods.xml"

    @property
    def timezone_file(self) -> Path:
        return self.cldr_base / "bcp47" / "timezone.xml"

    @property
    def coverage_levels_file(self) -> Path:
        return self.cldr_base / "properties" / "coverageLevels.txt"
