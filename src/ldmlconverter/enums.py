"""Enumerations for ldmlconverter type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from __future__ import annotations

from enum import StrEnum

from ldmlconverter.core.errors import ConfigurationError


class DraftType(StrEnum):
    """Draft confidence level of an LDML element.

    Members are declared from least to most confident. Data whose draft
    level is below the configured threshold is ignored during parsing.
    Elements without a ``draft`` attribute are treated as APPROVED.
    """

    UNCONFIRMED = "unconfirmed"
    PROVISIONAL = "provisional"
    CONTRIBUTED = "contributed"
    APPROVED = "approved"

    @property
    def rank(self) -> int:
        """Position in confidence order (0 is least confident)."""
        return list(DraftType).index(self)

    def accepts(self, level: DraftType) -> bool:
        """Return True if data at ``level`` passes this threshold."""
        return level.rank >= self.rank

    @classmethod
    def from_keyword(cls, keyword: str) -> DraftType:
        """Look up a draft level by its LDML keyword.

        Raises:
            ConfigurationError: If the keyword is not a draft level
        """
        try:
            return cls(keyword)
        except ValueError as e:
            msg = f"incorrect draft value: {keyword}"
            raise ConfigurationError(msg) from e

    @classmethod
    def default(cls) -> DraftType:
        """Default threshold (contributed)."""
        return cls.CONTRIBUTED


class BundleKind(StrEnum):
    """Kind of typed sub-bundle extracted for a locale."""

    LOCALENAMES = "LocaleNames"
    CURRENCYNAMES = "CurrencyNames"
    TIMEZONENAMES = "TimeZoneNames"
    CALENDARDATA = "CalendarData"
    FORMATDATA = "FormatData"

    @property
    def module(self) -> str:
        """Runtime package the bundle belongs to."""
        return "text" if self is BundleKind.FORMATDATA else "util"


class FormatKind(StrEnum):
    """How the emission sink should lay out a bundle."""

    OPEN = "open"
    """Keys may be added by the runtime (display names)."""

    TIMEZONE = "timezone"
    """Zone names: arrays referenced by zone and metazone ids."""

    PLAIN = "plain"
    """Fixed key set."""


class CalendarType(StrEnum):
    """Calendar systems whose data is carried into FormatData.

    The value is the LDML calendar type. ``unicode_name`` is the BCP-47
    ``ca`` keyword value, which differs only for the Gregorian calendar.
    """

    GREGORIAN = "gregorian"
    BUDDHIST = "buddhist"
    JAPANESE = "japanese"
    ROC = "roc"
    ISLAMIC = "islamic"
    ISLAMIC_CIVIL = "islamic-civil"
    ISLAMIC_UMALQURA = "islamic-umalqura"

    @property
    def unicode_name(self) -> str:
        """BCP-47 calendar keyword value."""
        return "gregory" if self is CalendarType.GREGORIAN else self.value

    @property
    def key_prefix(self) -> str:
        """Prefix of this calendar's keys in a raw map."""
        return calendar_key_prefix(self.value)


def calendar_key_prefix(calendar: str) -> str:
    """Key prefix for an LDML calendar type (empty for Gregorian)."""
    return "" if calendar == CalendarType.GREGORIAN else calendar + "."


__all__ = [
    "BundleKind",
    "CalendarType",
    "DraftType",
    "FormatKind",
    "calendar_key_prefix",
]
