"""ldmlconverter - CLDR LDML to locale-keyed lookup tables.

Reads the per-locale LDML files and supplemental data of a CLDR ``common``
tree, resolves inheritance (candidate chains, parent locale overrides,
aliases) and emits typed bundles per locale: LocaleNames, CurrencyNames,
TimeZoneNames, CalendarData and FormatData.

Public API:
    Converter - One conversion run
    convert - Run a conversion with a configuration
    ConverterConfig - Run configuration
    CandidateResolver - Candidate chains with parent overrides
    default_candidates - Truncation chain of a locale
    MemoryBundleSink, JsonBundleSink - Bundle sinks

Exceptions:
    ConverterError - Base exception class
    ConfigurationError, SourceParseError, AliasResolutionError,
    DepthLimitExceededError
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import ConverterConfig
from .converter import Converter, convert
from .core.errors import (
    AliasResolutionError,
    ConfigurationError,
    ConverterError,
    DepthLimitExceededError,
    SourceParseError,
)
from .enums import BundleKind, DraftType, FormatKind
from .output.sink import JsonBundleSink, MemoryBundleSink
from .resolution.candidates import CandidateResolver, default_candidates

try:
    __version__ = _get_version("ldmlconverter")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AliasResolutionError",
    "BundleKind",
    "CandidateResolver",
    "ConfigurationError",
    "Converter",
    "ConverterConfig",
    "ConverterError",
    "DepthLimitExceededError",
    "DraftType",
    "FormatKind",
    "JsonBundleSink",
    "MemoryBundleSink",
    "SourceParseError",
    "__version__",
    "convert",
    "default_candidates",
]
