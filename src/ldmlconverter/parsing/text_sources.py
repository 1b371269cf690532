"""Readers for the line-oriented text sources.

- TZDB source files (``africa``, ``europe``, ...): Zone, Rule and Link
  records that provide the customary abbreviations of zone names.
- ``tzmappings.override``: Windows zone name overrides.
- ``properties/coverageLevels.txt``: CLDR coverage level per locale.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ldmlconverter.constants import COVERAGE_LEVELS, TZDB_FILES
from ldmlconverter.core.errors import SourceParseError
from ldmlconverter.locale_utils import LocaleId, parse_locale_id

__all__ = [
    "TzdbData",
    "TzdbFormat",
    "parse_tzdb_lines",
    "read_coverage_levels",
    "read_tzdb",
    "read_tzmappings_overrides",
]

logger = logging.getLogger(__name__)

_INLINE_COMMENT = re.compile(r"[ \t]*#.*")
_COMMENT_LINE = re.compile(r"^[ \t]*#.*")
_FIELD_SEPARATOR = re.compile(r"[ \t]+")
_COVERAGE_SEPARATOR = re.compile(r"\s*;\s*")
_OVERRIDE_LINE = re.compile(r"(?P<win>[^:]+:[^:]+):(?P<zone>[^:]+):")

_VANGUARD_START = "# Vanguard section"
_VANGUARD_END = "# Rearguard section"
_NO_SUBSTITUTION = "-"


@dataclass(frozen=True, slots=True)
class TzdbFormat:
    """FORMAT column of a zone's latest line and the rule it refers to.

    Example:
        ``America/Los_Angeles`` -> ``TzdbFormat("P%sT", "US")``
    """

    format: str
    rule: str


@dataclass(slots=True)
class TzdbData:
    """Abbreviation data read from the TZDB source files.

    Attributes:
        short_names: Zone id -> format of its most recent zone line
        letters: (rule name, is daylight) -> substitution letters
        links: Link name -> link target
    """

    short_names: dict[str, TzdbFormat] = field(default_factory=dict)
    letters: dict[tuple[str, bool], str] = field(default_factory=dict)
    links: dict[str, str] = field(default_factory=dict)

    def zone_ids(self) -> set[str]:
        """Ids of every Zone and Link record read."""
        return set(self.short_names) | set(self.links)

    def format_for(self, zone_id: str) -> TzdbFormat | None:
        """Format of a zone, looking through one link."""
        return self.short_names.get(self.links.get(zone_id, zone_id))

    def substitution(self, rule: str, *, daylight: bool) -> str | None:
        return self.letters.get((rule, daylight))


def _is_keyword(token: str, keyword: str) -> bool:
    """TZDB keywords may be abbreviated to any case-insensitive prefix."""
    return bool(token) and keyword.lower().startswith(token.lower())


def _flip(format_: str, in_vanguard: bool) -> str:
    # Vanguard data may use negative DST ("IST/GMT" for Europe/Dublin).
    if in_vanguard:
        parts = format_.split("/")
        if len(parts) == 2:
            return f"{parts[1]}/{parts[0]}"
    return format_


def parse_tzdb_lines(lines: Iterable[str], data: TzdbData | None = None) -> TzdbData:
    """Accumulate one TZDB source file into ``data``.

    Args:
        lines: Lines of the file, without line terminators
        data: Accumulator shared by all files (created if omitted)

    Returns:
        The accumulator
    """
    if data is None:
        data = TzdbData()
    zone: str | None = None
    current: TzdbFormat | None = None
    in_vanguard = False

    for raw in lines:
        if raw.startswith(_VANGUARD_START):
            in_vanguard = True
            continue
        if in_vanguard and raw.startswith(_VANGUARD_END):
            in_vanguard = False
            continue
        if not raw.strip() or _COMMENT_LINE.match(raw):
            continue

        tokens = _FIELD_SEPARATOR.split(_INLINE_COMMENT.sub("", raw))
        keyword = tokens[0]

        if _is_keyword(keyword, "Zone"):
            if zone is not None and current is not None:
                data.short_names[zone] = current
            zone = tokens[1]
            current = TzdbFormat(_flip(tokens[4], in_vanguard), tokens[3])
        elif zone is not None:
            if _is_keyword(keyword, "Rule") or _is_keyword(keyword, "Link"):
                if current is not None:
                    data.short_names[zone] = current
                zone = None
                current = None
            elif len(tokens) > 3:
                current = TzdbFormat(_flip(tokens[3], in_vanguard), tokens[2])

        if _is_keyword(keyword, "Rule") and len(tokens) > 9:
            data.letters[(tokens[1], tokens[8] != "0")] = tokens[9].replace(_NO_SUBSTITUTION, "")
        elif _is_keyword(keyword, "Link") and len(tokens) > 2:
            data.links[tokens[2]] = tokens[1]

    if zone is not None and current is not None:
        data.short_names[zone] = current
    return data


def read_tzdb(tzdata_dir: Path) -> TzdbData:
    """Read the TZDB region files present in ``tzdata_dir``.

    Raises:
        SourceParseError: If a present file cannot be read
    """
    data = TzdbData()
    for path in sorted(tzdata_dir.iterdir()):
        if path.name not in TZDB_FILES or not path.is_file():
            continue
        logger.debug("Reading tzdb file %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceParseError(f"cannot read file: {e}", path=path) from e
        parse_tzdb_lines(text.splitlines(), data)
    return data


def read_tzmappings_overrides(path: Path, win_zones: Mapping[str, str]) -> dict[str, str]:
    """Apply ``Name:Territory:ZoneId:`` override lines to the Windows zones.

    A missing override file leaves the mapping unchanged. Unrecognized
    lines are logged and ignored.

    Returns:
        A new mapping of ``"<name>:<territory>"`` -> zone id

    Raises:
        SourceParseError: If the override file exists but cannot be read
    """
    merged = dict(win_zones)
    if not path.exists():
        return merged
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceParseError(f"cannot read file: {e}", path=path) from e
    for line in text.splitlines():
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        match = _OVERRIDE_LINE.fullmatch(entry)
        if match is None:
            logger.warning("Unrecognized tzmappings override: %s. Ignored", entry)
            continue
        merged[match["win"]] = match["zone"]
    return merged


def read_coverage_levels(path: Path) -> dict[LocaleId, str]:
    """Locales whose coverage level is basic or better.

    Lines look like ``locale;level;name``. A missing file yields an empty
    mapping.
    """
    levels: dict[LocaleId, str] = {}
    if not path.is_file():
        logger.warning("Coverage levels file %s not found", path)
        return levels
    for line in path.read_text(encoding="utf-8").splitlines():
        if not line.strip() or line.startswith("#"):
            continue
        fields = _COVERAGE_SEPARATOR.split(line, maxsplit=2)
        if len(fields) < 2 or fields[1] not in COVERAGE_LEVELS:
            continue
        try:
            levels[parse_locale_id(fields[0].strip())] = fields[1]
        except ValueError:
            logger.warning("Ignoring unparsable locale %r in %s", fields[0], path)
    return levels
