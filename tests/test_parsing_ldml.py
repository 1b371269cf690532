"""Main file handler tests against the miniature CLDR tree."""

from pathlib import Path

import pytest

from ldmlconverter.core.errors import SourceParseError
from ldmlconverter.enums import DraftType
from ldmlconverter.parsing import LDMLParseHandler, parse_ldml_file, parse_raw_map
from ldmlconverter.parsing.base import ElementFrame
from ldmlconverter.parsing.ldml import leaf_keys, parse_alias_path

DIGITS = {"latn": "0123456789", "arab": "٠١٢٣٤٥٦٧٨٩"}


def parse_main(common: Path, locale_id: str, **kwargs: object) -> LDMLParseHandler:
    handler = LDMLParseHandler(locale_id, numbering_systems=DIGITS, **kwargs)
    return parse_ldml_file(common / "main" / f"{locale_id}.xml", handler)


class TestDisplayNames:
    """localeDisplayNames elements."""

    def test_names_and_patterns(self, cldr_tree: Path) -> None:
        """Languages, scripts, territories, keys and types get their keys."""
        data = parse_main(cldr_tree, "en").data_map
        assert data["locale.displayname.en"] == "English"
        assert data["locale.displayname.Latn"] == "Latin"
        assert data["locale.displayname.US"] == "United States"
        assert data["locale.displayname.key.ca"] == "Calendar"
        assert data["locale.displayname.type.ca.gregorian"] == "Gregorian Calendar"

    def test_alt_values_ignored(self, cldr_tree: Path) -> None:
        """Elements with an alt attribute never replace the main value."""
        assert parse_main(cldr_tree, "en").data_map["locale.displayname.fr"] == "French"

    def test_identity_is_not_a_name(self, cldr_tree: Path) -> None:
        """identity/language is outside localeDisplayNames."""
        assert "locale.displayname.root" not in parse_main(cldr_tree, "root").data_map

    def test_separator_patterns(self, cldr_tree: Path) -> None:
        """Separator and key-type patterns are recorded."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["locale.displayname.separator"] == "{0}, {1}"
        assert data["locale.displayname.keytype"] == "{0}: {1}"


class TestDraftFiltering:
    """Draft levels below the threshold are dropped."""

    def test_unconfirmed_dropped_by_default(self, cldr_tree: Path) -> None:
        """Contributed threshold ignores unconfirmed data."""
        assert "locale.displayname.de" not in parse_main(cldr_tree, "en_GB").data_map

    def test_unconfirmed_kept_when_requested(self, cldr_tree: Path) -> None:
        """The lowest threshold accepts everything."""
        data = parse_main(cldr_tree, "en_GB", draft=DraftType.UNCONFIRMED).data_map
        assert data["locale.displayname.de"] == "German (draft)"


class TestCurrencies:
    """currencies elements."""

    def test_name_and_symbol(self, cldr_tree: Path) -> None:
        """Names use lowercase codes, symbols uppercase codes; counted names are skipped."""
        data = parse_main(cldr_tree, "en").data_map
        assert data["currency.displayname.usd"] == "US Dollar"
        assert data["currency.symbol.USD"] == "$"


class TestCalendars:
    """Calendar arrays, patterns and format items."""

    def test_month_array_has_thirteen_slots(self, cldr_tree: Path) -> None:
        """Missing months stay None."""
        months = parse_main(cldr_tree, "en").data_map["MonthNames"]
        assert months == ["January", "February", *[None] * 11]

    def test_day_periods_and_eras(self, cldr_tree: Path) -> None:
        """AM/PM markers and eras fill their slots."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["AmPmMarkers"] == ["AM", "PM", *[None] * 10]
        assert data["Eras"] == ["BCE", "CE"]
        assert data["buddhist.Eras"] == ["BE"]

    def test_date_and_date_time_patterns(self, cldr_tree: Path) -> None:
        """Patterns land in full, long, medium, short order; atTime is skipped."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["DatePatterns"] == ["y MMMM d, EEEE", "y MMMM d", "y MMM d", "y-MM-dd"]
        assert data["DateTimePatterns"] == [None, None, "{1} {0}", None]

    def test_format_items_and_skeletons(self, cldr_tree: Path) -> None:
        """Skeletons are collected while parsing."""
        handler = parse_main(cldr_tree, "root")
        assert handler.data_map["DateFormatItem.yMd"] == "y-MM-dd"
        assert handler.skeletons == {"yMd"}

    def test_fields(self, cldr_tree: Path) -> None:
        """Only the known field types are recorded."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["field.year"] == "Year"
        assert "field.year-short" not in data


class TestTimeZoneNames:
    """timeZoneNames elements."""

    def test_formats(self, cldr_tree: Path) -> None:
        """Zone formats keep their type suffix."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["timezone.gmtFormat"] == "GMT{0}"
        assert data["timezone.regionFormat"] == "{0}"
        assert data["timezone.regionFormat.daylight"] == "{0} (+1)"

    def test_metazone_slots(self, cldr_tree: Path) -> None:
        """Long names go to slots 0, 2 and 4."""
        data = parse_main(cldr_tree, "en").data_map
        assert data["metazone.id.America_Pacific"] == [
            "Pacific Standard Time",
            None,
            "Pacific Daylight Time",
            None,
            "Pacific Time",
            None,
        ]
        assert data["timezone.excity.America/Los_Angeles"] == "Los Angeles"


class TestNumbers:
    """numbers elements."""

    def test_number_elements(self, cldr_tree: Path) -> None:
        """Symbols fill their slots; zero and pattern digits are supplied."""
        elements = parse_main(cldr_tree, "root").data_map["latn.NumberElements"]
        assert elements == [".", ",", ";", "%", "0", "#", "-", "E", "‰", "∞", "NaN", None, None]

    def test_number_patterns(self, cldr_tree: Path) -> None:
        """Decimal, currency, percent and accounting patterns."""
        patterns = parse_main(cldr_tree, "root").data_map["latn.NumberPatterns"]
        assert patterns == ["#,##0.###", "¤ #,##0.00", "#,##0%", "¤ #,##0.00;(¤ #,##0.00)"]

    def test_compact_patterns(self, cldr_tree: Path) -> None:
        """Compact patterns are indexed by magnitude."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["short.CompactNumberPatterns"] == ["", "", "", "0K", "00K"]

    def test_numbering_scripts(self, cldr_tree: Path) -> None:
        """Only systems with their own data are listed."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["numberingScripts"] == ["latn"]
        assert data["DefaultNumberingSystem"] == "latn"


class TestListPatterns:
    """listPatterns elements."""

    def test_untyped_pattern_is_standard(self, cldr_tree: Path) -> None:
        """A listPattern without type is the standard one."""
        data = parse_main(cldr_tree, "root").data_map
        assert data["ListPatterns_standard"] == ["{0}, {1}"] * 4 + [None]


class TestAliases:
    """alias elements become key aliases."""

    def test_alias_table(self, cldr_tree: Path) -> None:
        """Width, context, calendar, numbering system and list pattern aliases."""
        aliases = parse_main(cldr_tree, "root").aliases
        assert aliases["MonthAbbreviations"] == "MonthNames"
        assert aliases["standalone.MonthNames"] == "MonthNames"
        assert aliases["buddhist.MonthNames"] == "MonthNames"
        assert aliases["buddhist.standalone.MonthAbbreviations"] == "standalone.MonthAbbreviations"
        assert aliases["arab.NumberElements"] == "latn.NumberElements"
        assert aliases["ListPatterns_standard-short"] == "ListPatterns_standard"

    def test_parse_alias_path(self) -> None:
        """Relative steps pop and push frames."""
        frames = [ElementFrame("calendar", {"type": "buddhist"}), ElementFrame("months")]
        target = parse_alias_path("../../calendar[@type='gregorian']/months", frames)
        assert target is not None
        assert [(frame.name, frame.type) for frame in target] == [("calendar", "gregorian"), ("months", None)]

    def test_parse_alias_path_rejects_absolute_paths(self) -> None:
        """Only the relative step form is understood."""
        assert parse_alias_path("//ldml/dates", [ElementFrame("dates")]) is None
        assert parse_alias_path("../..", [ElementFrame("dates")]) is None

    def test_leaf_keys_pair_by_signature(self) -> None:
        """A calendar-level container maps signatures to keys."""
        keys = leaf_keys([ElementFrame("calendar", {"type": "buddhist"}), ElementFrame("months")])
        assert keys[("format", "wide")] == "buddhist.MonthNames"
        assert keys[("stand-alone", "narrow")] == "buddhist.standalone.MonthNarrows"


class TestLoader:
    """parse_ldml_file error handling."""

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Syntax errors are reported with the file path."""
        path = tmp_path / "bad.xml"
        path.write_text("<ldml><unclosed></ldml>", encoding="utf-8")
        with pytest.raises(SourceParseError) as exc_info:
            parse_ldml_file(path, LDMLParseHandler("bad"))
        assert exc_info.value.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing required file is a parse error."""
        with pytest.raises(SourceParseError):
            parse_raw_map(tmp_path / "absent.xml", LDMLParseHandler("absent"))


LDML_DTD = """<!ELEMENT ldml (identity, localeDisplayNames?)>
<!ELEMENT identity (language)>
<!ELEMENT language (#PCDATA)>
<!ATTLIST language type CDATA #REQUIRED>
<!ATTLIST language draft CDATA #IMPLIED>
<!ELEMENT localeDisplayNames (languages)>
<!ELEMENT languages (language*)>
"""


class TestDtdValidation:
    """Documents that declare a DTD are validated against it."""

    @pytest.fixture
    def common(self, tmp_path: Path) -> Path:
        common = tmp_path / "common"
        (common / "dtd").mkdir(parents=True)
        (common / "main").mkdir()
        (common / "dtd" / "ldml.dtd").write_text(LDML_DTD, encoding="utf-8")
        return common

    def write_main(self, common: Path, body: str) -> Path:
        path = common / "main" / "zz.xml"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8" ?>\n'
            '<!DOCTYPE ldml SYSTEM "../dtd/ldml.dtd">\n'
            f'<ldml><identity><language type="zz"/></identity>{body}</ldml>\n',
            encoding="utf-8",
        )
        return path

    def test_valid_document(self, common: Path) -> None:
        """A valid document reaches the handler."""
        path = self.write_main(
            common,
            '<localeDisplayNames><languages><language type="zz">Zed</language></languages></localeDisplayNames>',
        )
        data = parse_raw_map(path, LDMLParseHandler("zz"))
        assert data["locale.displayname.zz"] == "Zed"

    def test_forbidden_element(self, common: Path) -> None:
        """An element the DTD does not allow fails the parse."""
        path = self.write_main(common, "<bogus/>")
        with pytest.raises(SourceParseError, match="DTD validation failed") as exc_info:
            parse_ldml_file(path, LDMLParseHandler("zz"))
        assert exc_info.value.path == path

    def test_missing_dtd(self, common: Path) -> None:
        """A declared DTD that cannot be loaded fails the parse."""
        (common / "dtd" / "ldml.dtd").unlink()
        path = self.write_main(common, "")
        with pytest.raises(SourceParseError, match="cannot load DTD"):
            parse_ldml_file(path, LDMLParseHandler("zz"))

    def test_remote_dtd_refused(self, tmp_path: Path) -> None:
        """DTDs are never fetched over the network."""
        path = tmp_path / "remote.xml"
        path.write_text(
            '<!DOCTYPE ldml SYSTEM "http://example.com/ldml.dtd"><ldml/>',
            encoding="utf-8",
        )
        with pytest.raises(SourceParseError, match="remote DTD"):
            parse_ldml_file(path, LDMLParseHandler("remote"))
