"""Pytest configuration for the ldmlconverter test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fixtures:
    cldr_tree - Miniature CLDR ``common`` tree written into tmp_path
    tzdata_dir - TZDB source files and a tzmappings override file
    zone_template - Zone name template with all four placeholders
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# MINIATURE CLDR TREE
# =============================================================================

ROOT_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="root"/></identity>
  <localeDisplayNames>
    <localeDisplayPattern>
      <localePattern>{0} ({1})</localePattern>
      <localeSeparator>{0}, {1}</localeSeparator>
      <localeKeyTypePattern>{0}: {1}</localeKeyTypePattern>
    </localeDisplayPattern>
  </localeDisplayNames>
  <dates>
    <calendars>
      <calendar type="gregorian">
        <months>
          <monthContext type="format">
            <monthWidth type="abbreviated">
              <alias source="locale" path="../monthWidth[@type='wide']"/>
            </monthWidth>
            <monthWidth type="wide">
              <month type="1">M01</month>
              <month type="2">M02</month>
              <month type="3">M03</month>
              <month type="4">M04</month>
              <month type="5">M05</month>
              <month type="6">M06</month>
              <month type="7">M07</month>
              <month type="8">M08</month>
              <month type="9">M09</month>
              <month type="10">M10</month>
              <month type="11">M11</month>
              <month type="12">M12</month>
            </monthWidth>
          </monthContext>
          <monthContext type="stand-alone">
            <monthWidth type="wide">
              <alias source="locale" path="../../monthContext[@type='format']/monthWidth[@type='wide']"/>
            </monthWidth>
          </monthContext>
        </months>
        <dayPeriods>
          <dayPeriodContext type="format">
            <dayPeriodWidth type="wide">
              <dayPeriod type="am">AM</dayPeriod>
              <dayPeriod type="pm">PM</dayPeriod>
            </dayPeriodWidth>
          </dayPeriodContext>
        </dayPeriods>
        <eras>
          <eraAbbr>
            <era type="0">BCE</era>
            <era type="1">CE</era>
          </eraAbbr>
        </eras>
        <dateFormats>
          <dateFormatLength type="full"><dateFormat><pattern>y MMMM d, EEEE</pattern></dateFormat></dateFormatLength>
          <dateFormatLength type="long"><dateFormat><pattern>y MMMM d</pattern></dateFormat></dateFormatLength>
          <dateFormatLength type="medium"><dateFormat><pattern>y MMM d</pattern></dateFormat></dateFormatLength>
          <dateFormatLength type="short"><dateFormat><pattern>y-MM-dd</pattern></dateFormat></dateFormatLength>
        </dateFormats>
        <dateTimeFormats>
          <dateTimeFormatLength type="medium">
            <dateTimeFormat><pattern>{1} {0}</pattern></dateTimeFormat>
            <dateTimeFormat type="atTime"><pattern>{1} 'at' {0}</pattern></dateTimeFormat>
          </dateTimeFormatLength>
          <availableFormats>
            <dateFormatItem id="yMd">y-MM-dd</dateFormatItem>
          </availableFormats>
        </dateTimeFormats>
      </calendar>
      <calendar type="buddhist">
        <months>
          <alias source="locale" path="../../calendar[@type='gregorian']/months"/>
        </months>
        <eras>
          <eraAbbr><era type="0">BE</era></eraAbbr>
        </eras>
      </calendar>
    </calendars>
    <fields>
      <field type="year"><displayName>Year</displayName></field>
      <field type="year-short"><displayName>Yr</displayName></field>
    </fields>
    <timeZoneNames>
      <hourFormat>+HH:mm;-HH:mm</hourFormat>
      <gmtFormat>GMT{0}</gmtFormat>
      <gmtZeroFormat>GMT</gmtZeroFormat>
      <regionFormat>{0}</regionFormat>
      <regionFormat type="daylight">{0} (+1)</regionFormat>
      <zone type="Etc/Unknown"><exemplarCity>Unknown</exemplarCity></zone>
    </timeZoneNames>
  </dates>
  <numbers>
    <defaultNumberingSystem>latn</defaultNumberingSystem>
    <symbols numberSystem="latn">
      <decimal>.</decimal>
      <group>,</group>
      <list>;</list>
      <percentSign>%</percentSign>
      <minusSign>-</minusSign>
      <exponential>E</exponential>
      <perMille>‰</perMille>
      <infinity>∞</infinity>
      <nan>NaN</nan>
    </symbols>
    <symbols numberSystem="arab">
      <alias source="locale" path="../symbols[@numberSystem='latn']"/>
    </symbols>
    <decimalFormats numberSystem="latn">
      <decimalFormatLength>
        <decimalFormat><pattern>#,##0.###</pattern></decimalFormat>
      </decimalFormatLength>
      <decimalFormatLength type="short">
        <decimalFormat>
          <pattern type="1000" count="other">0K</pattern>
          <pattern type="10000" count="other">00K</pattern>
        </decimalFormat>
      </decimalFormatLength>
    </decimalFormats>
    <percentFormats numberSystem="latn">
      <percentFormatLength>
        <percentFormat><pattern>#,##0%</pattern></percentFormat>
      </percentFormatLength>
    </percentFormats>
    <currencyFormats numberSystem="latn">
      <currencyFormatLength>
        <currencyFormat type="standard"><pattern>¤ #,##0.00</pattern></currencyFormat>
        <currencyFormat type="accounting"><pattern>¤ #,##0.00;(¤ #,##0.00)</pattern></currencyFormat>
      </currencyFormatLength>
    </currencyFormats>
  </numbers>
  <listPatterns>
    <listPattern>
      <listPatternPart type="start">{0}, {1}</listPatternPart>
      <listPatternPart type="middle">{0}, {1}</listPatternPart>
      <listPatternPart type="end">{0}, {1}</listPatternPart>
      <listPatternPart type="2">{0}, {1}</listPatternPart>
    </listPattern>
    <listPattern type="standard-short">
      <alias source="locale" path="../listPattern[@type='standard']"/>
    </listPattern>
  </listPatterns>
</ldml>
"""

EN_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="en"/></identity>
  <localeDisplayNames>
    <languages>
      <language type="en">English</language>
      <language type="fr">French</language>
      <language type="fr" alt="variant">Francais</language>
    </languages>
    <scripts><script type="Latn">Latin</script></scripts>
    <territories><territory type="US">United States</territory></territories>
    <keys><key type="calendar">Calendar</key></keys>
    <types>
      <type key="calendar" type="gregorian">Gregorian Calendar</type>
      <type key="calendar" type="buddhist">Buddhist Calendar</type>
    </types>
  </localeDisplayNames>
  <dates>
    <calendars>
      <calendar type="gregorian">
        <months>
          <monthContext type="format">
            <monthWidth type="wide">
              <month type="1">January</month>
              <month type="2">February</month>
            </monthWidth>
          </monthContext>
        </months>
      </calendar>
    </calendars>
    <timeZoneNames>
      <zone type="America/Los_Angeles"><exemplarCity>Los Angeles</exemplarCity></zone>
      <metazone type="America_Pacific">
        <long>
          <generic>Pacific Time</generic>
          <standard>Pacific Standard Time</standard>
          <daylight>Pacific Daylight Time</daylight>
        </long>
      </metazone>
    </timeZoneNames>
  </dates>
  <numbers>
    <currencies>
      <currency type="USD">
        <displayName>US Dollar</displayName>
        <displayName count="one">US dollar</displayName>
        <symbol>$</symbol>
      </currency>
    </currencies>
  </numbers>
</ldml>
"""

EN_001_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="en"/><territory type="001"/></identity>
  <localeDisplayNames>
    <territories><territory type="US">US</territory></territories>
  </localeDisplayNames>
</ldml>
"""

EN_GB_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="en"/><territory type="GB"/></identity>
  <localeDisplayNames>
    <languages>
      <language type="fr">French (GB)</language>
      <language type="de" draft="unconfirmed">German (draft)</language>
    </languages>
  </localeDisplayNames>
</ldml>
"""

FR_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="fr"/></identity>
  <localeDisplayNames>
    <languages><language type="fr">français</language></languages>
  </localeDisplayNames>
</ldml>
"""

# Present in main/ but below basic coverage: never converted.
XX_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
  <identity><version number="1"/><language type="xx"/></identity>
  <localeDisplayNames>
    <languages><language type="xx">Test</language></languages>
  </localeDisplayNames>
</ldml>
"""

SUPPLEMENTAL_DATA_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <weekData>
    <firstDay day="mon" territories="001 GB"/>
    <firstDay day="sun" territories="US"/>
    <minDays count="1" territories="001 US"/>
    <minDays count="4" territories="GB"/>
  </weekData>
  <timeData>
    <hours preferred="H" allowed="H hB" regions="001 GB"/>
    <hours preferred="h" allowed="h hb H hB" regions="US"/>
    <hours preferred="H" allowed="B h H" regions="TW"/>
  </timeData>
  <parentLocales>
    <parentLocale parent="en_001" locales="en_GB en_AU"/>
  </parentLocales>
  <parentLocales component="segmentations">
    <parentLocale parent="fr" locales="en_GB"/>
  </parentLocales>
</supplementalData>
"""

LIKELY_SUBTAGS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <likelySubtags>
    <likelySubtag from="en" to="en_Latn_US"/>
    <likelySubtag from="fr" to="fr_Latn_FR"/>
    <likelySubtag from="en_GB" to="en_Latn_GB"/>
    <likelySubtag from="iw" to="he_Hebr_IL"/>
  </likelySubtags>
</supplementalData>
"""

NUMBERING_SYSTEMS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <numberingSystems>
    <numberingSystem id="arab" type="numeric" digits="٠١٢٣٤٥٦٧٨٩"/>
    <numberingSystem id="latn" type="numeric" digits="0123456789"/>
    <numberingSystem id="roman" type="algorithmic" rules="roman-upper"/>
  </numberingSystems>
</supplementalData>
"""

METAZONES_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <metaZones>
    <metazoneInfo>
      <timezone type="America/Los_Angeles">
        <usesMetazone to="1967-04-30 10:00" mzone="America_Pacific"/>
        <usesMetazone from="1967-04-30 10:00" mzone="America_Pacific"/>
      </timezone>
      <timezone type="Antarctica/Troll">
        <usesMetazone to="2005-02-12 07:00" mzone="GMT"/>
      </timezone>
    </metazoneInfo>
    <mapTimezones type="metazones">
      <mapZone other="America_Pacific" territory="001" type="America/Los_Angeles"/>
      <mapZone other="America_Pacific" territory="CA" type="America/Vancouver"/>
    </mapTimezones>
  </metaZones>
</supplementalData>
"""

SUPPLEMENTAL_METADATA_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <metadata>
    <alias>
      <zoneAlias type="America/Knox_IN" replacement="America/Indiana/Knox" reason="deprecated"/>
    </alias>
  </metadata>
</supplementalData>
"""

WINDOWS_ZONES_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <windowsZones>
    <mapTimezones>
      <mapZone other="Pacific Standard Time" territory="001" type="America/Los_Angeles"/>
      <mapZone other="Pacific Standard Time" territory="CA" type="America/Vancouver America/Dawson"/>
      <mapZone other="Pacific Standard Time" territory="US" type="America/Los_Angeles"/>
    </mapTimezones>
  </windowsZones>
</supplementalData>
"""

PLURALS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <plurals type="cardinal">
    <pluralRules locales="en">
      <pluralRule count="one">i = 1 and v = 0 @integer 1</pluralRule>
      <pluralRule count="other"> @integer 0, 2~16</pluralRule>
    </pluralRules>
    <pluralRules locales="fr">
      <pluralRule count="one">i = 0,1 @integer 0, 1</pluralRule>
    </pluralRules>
  </plurals>
  <plurals type="ordinal">
    <pluralRules locales="en">
      <pluralRule count="two">n % 10 = 2</pluralRule>
    </pluralRules>
  </plurals>
</supplementalData>
"""

DAY_PERIODS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<supplementalData>
  <dayPeriodRuleSet>
    <dayPeriodRules locales="en">
      <dayPeriodRule type="midnight" at="00:00"/>
      <dayPeriodRule type="morning1" from="06:00" before="12:00"/>
    </dayPeriodRules>
  </dayPeriodRuleSet>
  <dayPeriodRuleSet type="selection">
    <dayPeriodRules locales="en">
      <dayPeriodRule type="evening1" from="18:00" before="21:00"/>
    </dayPeriodRules>
  </dayPeriodRuleSet>
</supplementalData>
"""

TIMEZONE_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<ldmlBCP47>
  <keyword>
    <key name="tz">
      <type name="uslax" alias="America/Los_Angeles US/Pacific"/>
      <type name="utc" alias="Etc/UTC Etc/UCT UTC"/>
    </key>
  </keyword>
</ldmlBCP47>
"""

COVERAGE_LEVELS_TXT = """# locale ; level ; name
en ;\tmodern ;\tEnglish
fr ;\tmodern ;\tFrench
xx ;\tcore ;\tTest
"""

NORTHAMERICA_TZDB = """# Rule\tNAME\tFROM\tTO\t-\tIN\tON\tAT\tSAVE\tLETTER
Rule\tUS\t1967\t2006\t-\tOct\tlastSun\t2:00\t0\tS
Rule\tUS\t2007\tmax\t-\tMar\tSun>=8\t2:00\t1:00\tD

# Zone\tNAME\t\tSTDOFF\tRULES\tFORMAT\t[UNTIL]
Zone America/Los_Angeles -7:52:58 -\tLMT\t1883 Nov 18 20:00u
\t\t\t-8:00\tUS\tP%sT\t1946
\t\t\t-8:00\tCA\tP%sT\t1967
\t\t\t-8:00\tUS\tP%sT
"""

BACKWARD_TZDB = """# Link\tTARGET\t\t\tLINK-NAME
Link\tAmerica/Los_Angeles\tUS/Pacific
"""

ZONE_TEMPLATE = """// Generated zone tables
static final String[] zidMap = {
%%%%ZIDMAP%%%%
};
static final String[] mzoneMap = {
%%%%MZONEMAP%%%%
};
static final String[] deprecatedMap = {
%%%%DEPRECATED%%%%
};
static final String[] tzdbLinks = {
%%%%TZDATALINK%%%%
};
"""


def write_cldr_tree(base: Path, *, main: dict[str, str] | None = None) -> Path:
    """Write the miniature CLDR ``common`` tree under ``base``.

    Args:
        base: Directory to create ``common/`` in
        main: Main files to write instead of the default set

    Returns:
        The ``common`` directory
    """
    common = base / "common"
    files = {
        "supplemental/supplementalData.xml": SUPPLEMENTAL_DATA_XML,
        "supplemental/likelySubtags.xml": LIKELY_SUBTAGS_XML,
        "supplemental/numberingSystems.xml": NUMBERING_SYSTEMS_XML,
        "supplemental/metaZones.xml": METAZONES_XML,
        "supplemental/supplementalMetadata.xml": SUPPLEMENTAL_METADATA_XML,
        "supplemental/windowsZones.xml": WINDOWS_ZONES_XML,
        "supplemental/plurals.xml": PLURALS_XML,
        "supplemental/dayPeriods.xml": DAY_PERIODS_XML,
        "bcp47/timezone.xml": TIMEZONE_XML,
        "properties/coverageLevels.txt": COVERAGE_LEVELS_TXT,
    }
    if main is None:
        main = {
            "root": ROOT_XML,
            "en": EN_XML,
            "en_001": EN_001_XML,
            "en_GB": EN_GB_XML,
            "fr": FR_XML,
            "xx": XX_XML,
        }
    files.update({f"main/{locale}.xml": text for locale, text in main.items()})
    for name, text in files.items():
        path = common / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return common


@pytest.fixture
def cldr_tree(tmp_path: Path) -> Path:
    """Miniature CLDR ``common`` tree."""
    return write_cldr_tree(tmp_path)


@pytest.fixture
def tzdata_dir(tmp_path: Path) -> Path:
    """TZDB sources with one zone, its rules and a link."""
    directory = tmp_path / "tzdata"
    directory.mkdir()
    (directory / "northamerica").write_text(NORTHAMERICA_TZDB, encoding="utf-8")
    (directory / "backward").write_text(BACKWARD_TZDB, encoding="utf-8")
    (directory / "README").write_text("not a tzdb source\n", encoding="utf-8")
    (directory / "tzmappings.override").write_text(
        "# overrides\nPacific Standard Time:MX:America/Tijuana:\nnot an override line\n",
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def zone_template(tmp_path: Path) -> Path:
    """Zone name template file."""
    path = tmp_path / "ZoneName.java.template"
    path.write_text(ZONE_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def make_cldr_tree(tmp_path: Path):
    """Factory writing a CLDR tree with a custom set of main files."""

    def make(main: dict[str, str]) -> Path:
        return write_cldr_tree(tmp_path, main=main)

    return make
