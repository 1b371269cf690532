"""Core utilities shared across parsing, resolution and extraction layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    ConverterError: Base exception of the converter
    ConfigurationError, SourceParseError, AliasResolutionError,
    DepthLimitExceededError: Specific failures

Python 3.13+.
"""

from .depth_guard import DepthGuard
from .errors import (
    AliasResolutionError,
    ConfigurationError,
    ConverterError,
    DepthLimitExceededError,
    SourceParseError,
)

__all__ = [
    "AliasResolutionError",
    "ConfigurationError",
    "ConverterError",
    "DepthGuard",
    "DepthLimitExceededError",
    "SourceParseError",
]
