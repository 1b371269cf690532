"""Locale identifier utilities.

Centralizes conversion between CLDR file ids (``zh_Hans_SG``), BCP-47
language tags (``zh-Hans-SG``) and the decomposed LocaleId value used for
candidate chain computation. Identifier parsing and subtag case
normalization are delegated to Babel's ``parse_locale``.

The terminal fallback locale is always called ``root`` (never ``und``).

Python 3.13+.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from babel.core import parse_locale

from ldmlconverter.constants import ROOT

__all__ = [
    "ROOT_LOCALE",
    "LocaleId",
    "get_country_code",
    "get_language_code",
    "get_region_code",
    "get_script_code",
    "normalize_locale",
    "parse_locale_id",
    "to_language_tag",
    "to_locale_name",
]


@dataclass(frozen=True, slots=True)
class LocaleId:
    """Decomposed locale identifier.

    A pure value: equality and hashing are by subtags. The root locale has
    every subtag empty.

    Attributes:
        language: Lowercase language subtag ("" for root)
        script: Title-case script subtag or ""
        region: Uppercase ISO 3166 or UN M.49 region subtag or ""
        variant: Uppercase variant subtag or ""
    """

    language: str = ""
    script: str = ""
    region: str = ""
    variant: str = ""

    @property
    def is_root(self) -> bool:
        """True for the terminal fallback locale."""
        return not (self.language or self.script or self.region or self.variant)

    @property
    def name(self) -> str:
        """CLDR file id, e.g. ``zh_Hans_SG`` or ``root``."""
        if self.is_root:
            return ROOT
        return "_".join(part for part in self._parts() if part)

    @property
    def tag(self) -> str:
        """BCP-47 language tag, e.g. ``zh-Hans-SG`` or ``root``."""
        if self.is_root:
            return ROOT
        return "-".join(part for part in self._parts() if part)

    def replace(
        self,
        *,
        language: str | None = None,
        script: str | None = None,
        region: str | None = None,
        variant: str | None = None,
    ) -> LocaleId:
        """Return a copy with the given subtags replaced."""
        return LocaleId(
            self.language if language is None else language,
            self.script if script is None else script,
            self.region if region is None else region,
            self.variant if variant is None else variant,
        )

    def _parts(self) -> tuple[str, str, str, str]:
        return (self.language, self.script, self.region, self.variant)

    def __str__(self) -> str:
        return self.name


ROOT_LOCALE = LocaleId()


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to CLDR/POSIX format.

    BCP-47 uses hyphens (en-US), while CLDR file ids use underscores (en_US).

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=2048)
def parse_locale_id(identifier: str) -> LocaleId:
    """Parse a CLDR id or BCP-47 tag into a LocaleId.

    Accepts either separator. ``root`` (and the empty string) map to the
    root locale.

    Args:
        identifier: Locale id, e.g. "zh_Hans_SG", "pt-BR", "root"

    Returns:
        Decomposed, case-normalized LocaleId

    Raises:
        ValueError: If the identifier is not a well-formed locale id

    Example:
        >>> parse_locale_id("zh-hans-sg")
        LocaleId(language='zh', script='Hans', region='SG', variant='')
    """
    normalized = normalize_locale(identifier)
    if normalized in ("", ROOT):
        return ROOT_LOCALE
    language, territory, script, variant = parse_locale(normalized)[:4]
    return LocaleId(language, script or "", territory or "", variant or "")


def to_language_tag(locale_name: str) -> str:
    """Convert a CLDR id to its BCP-47 tag ("root" stays "root")."""
    if "_" not in locale_name:
        return locale_name
    return parse_locale_id(locale_name).tag


def to_locale_name(tag: str) -> str:
    """Convert a BCP-47 tag to its CLDR id."""
    if "-" not in tag:
        return tag
    return normalize_locale(tag)


def get_language_code(locale_name: str) -> str:
    """Return the language portion of the id ("" for root)."""
    return parse_locale_id(locale_name).language


def get_region_code(locale_name: str) -> str:
    """Return the region code, including UN M.49 codes such as "001".

    Returns "" when the id carries no region.
    """
    return parse_locale_id(locale_name).region


def get_country_code(locale_name: str) -> str | None:
    """Return the two-letter country code, or None.

    UN M.49 codes (e.g. "001", "419") are not country codes.

    Example:
        >>> get_country_code("zh_Hans_SG")
        'SG'
        >>> get_country_code("zh_Hans_001") is None
        True
    """
    region = get_region_code(locale_name)
    return region if len(region) == 2 else None


def get_script_code(locale_name: str) -> str:
    """Return the script code, or "" when absent."""
    return parse_locale_id(locale_name).script
