"""Exception hierarchy for ldmlconverter.

Every failure the converter raises derives from ConverterError so that the
command line entry point can report it uniformly before exiting.

Taxonomy:
    ConfigurationError - bad argument, unknown draft keyword (fatal, exit 1)
    SourceParseError - malformed or unreadable required source (fatal)
    AliasResolutionError - alias cycle or array shape mismatch (defect)
    DepthLimitExceededError - recursion/iteration bound hit (defect)

A missing optional per-locale file is not an error: it contributes an
empty map.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "AliasResolutionError",
    "ConfigurationError",
    "ConverterError",
    "DepthLimitExceededError",
    "SourceParseError",
]


class ConverterError(Exception):
    """Base exception for all converter errors."""


class ConfigurationError(ConverterError, ValueError):
    """Invalid configuration or command line argument."""


class SourceParseError(ConverterError):
    """A required source file could not be read or parsed.

    Attributes:
        path: The file that failed
    """

    def __init__(self, message: str, *, path: Path | str) -> None:
        """Initialize SourceParseError.

        Args:
            message: Description of the failure
            path: The file that failed
        """
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


class AliasResolutionError(ConverterError):
    """An alias could not be resolved consistently.

    Raised for alias chains that loop back on themselves and for array
    values whose length differs from the array they are filling.

    Attributes:
        key: Alias key being resolved
        source_key: Key the alias points to
    """

    def __init__(self, message: str, *, key: str, source_key: str) -> None:
        """Initialize AliasResolutionError.

        Args:
            message: Description of the inconsistency
            key: Alias key being resolved
            source_key: Key the alias points to
        """
        super().__init__(message)
        self.key = key
        self.source_key = source_key


class DepthLimitExceededError(ConverterError):
    """Raised when a bounded recursion or iteration exceeds its limit.

    Indicates malformed input, e.g. parent-locale declarations or alias
    tables deep enough that they can only be cyclic.
    """
