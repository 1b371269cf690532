"""Bundle emission sinks.

The converter hands every extracted bundle to a sink and never formats
files itself. Two sinks are provided:

    MemoryBundleSink - keeps bundles in memory (tests, embedding)
    JsonBundleSink - writes one JSON document per bundle

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from string import Template
from typing import Protocol
from zoneinfo import ZoneInfo

from ldmlconverter.enums import BundleKind, FormatKind
from ldmlconverter.types import BundleMap

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "BundleSink",
    # Implementations
    "EmittedBundle",
    "MemoryBundleSink",
    "JsonBundleSink",
    # Helpers
    "DEFAULT_HEADER",
    "copyright_year",
    "render_header",
]

logger = logging.getLogger(__name__)

DEFAULT_HEADER = (
    "Copyright (c) ${year} Unicode, Inc. and others.\n"
    "Generated from the Unicode Common Locale Data Repository (CLDR).\n"
    "Do not edit."
)


class BundleSink(Protocol):
    """Receives extracted bundles and the run's meta information.

    This is a Protocol (structural typing) rather than ABC so that any
    object with these two methods can collect the output.
    """

    def generate_bundle(
        self,
        module: str,
        kind: BundleKind,
        locale_id: str,
        is_root: bool,
        bundle: BundleMap,
        format_kind: FormatKind,
    ) -> None:
        """Accept one typed sub-bundle of a locale."""
        ...

    def generate_meta_info(self, meta_info: Mapping[str, Set[str]]) -> None:
        """Accept the available locales and other run-wide metadata."""
        ...


@dataclass(frozen=True, slots=True)
class EmittedBundle:
    """One bundle as handed to a sink."""

    module: str
    kind: BundleKind
    locale_id: str
    is_root: bool
    bundle: BundleMap
    format_kind: FormatKind


@dataclass(slots=True)
class MemoryBundleSink:
    """Sink that keeps everything it receives.

    Attributes:
        bundles: Emitted bundles keyed by (kind, locale id)
        meta_info: Last meta information received
    """

    bundles: dict[tuple[BundleKind, str], EmittedBundle] = field(default_factory=dict)
    meta_info: dict[str, frozenset[str]] = field(default_factory=dict)

    def generate_bundle(
        self,
        module: str,
        kind: BundleKind,
        locale_id: str,
        is_root: bool,
        bundle: BundleMap,
        format_kind: FormatKind,
    ) -> None:
        self.bundles[(kind, locale_id)] = EmittedBundle(module, kind, locale_id, is_root, bundle, format_kind)

    def generate_meta_info(self, meta_info: Mapping[str, Set[str]]) -> None:
        self.meta_info = {key: frozenset(values) for key, values in meta_info.items()}

    def get(self, kind: BundleKind, locale_id: str) -> BundleMap | None:
        """Bundle of a kind for a locale, or None if none was emitted."""
        emitted = self.bundles.get((kind, locale_id))
        return emitted.bundle if emitted is not None else None


def copyright_year() -> int:
    """Current year at the CLDR project's home time zone."""
    return datetime.now(ZoneInfo("America/Los_Angeles")).year


def render_header(template: str | None, year: int | None) -> str:
    """Fill ``${year}`` in a header template (default header if None)."""
    return Template(template or DEFAULT_HEADER).safe_substitute(year=year or copyright_year())


class JsonBundleSink:
    """Writes ``<output>/<module>/<locale>/<Kind>.json`` documents.

    Each document holds the header, the bundle's identity and the bundle
    entries in their extracted order. Meta information is written to
    ``<output>/LocaleDataMetaInfo.json`` with sorted values.

    Args:
        output_dir: Root directory of generated files
        use_utf8: Write non-ASCII characters as is instead of escaping them
        header: Header text stored in every document
    """

    def __init__(self, output_dir: Path, *, use_utf8: bool = False, header: str = "") -> None:
        self.output_dir = output_dir
        self.use_utf8 = use_utf8
        self.header = header
        self.written: list[Path] = []

    def _write(self, path: Path, document: Mapping[str, object]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(document, ensure_ascii=not self.use_utf8, indent=2)
        path.write_text(text + "\n", encoding="utf-8")
        self.written.append(path)
        logger.debug("Wrote %s", path)

    def generate_bundle(
        self,
        module: str,
        kind: BundleKind,
        locale_id: str,
        is_root: bool,
        bundle: BundleMap,
        format_kind: FormatKind,
    ) -> None:
        document = {
            "header": self.header,
            "module": module,
            "kind": str(kind),
            "locale": locale_id,
            "root": is_root,
            "format": str(format_kind),
            "data": bundle,
        }
        self._write(self.output_dir / module / locale_id / f"{kind}.json", document)

    def generate_meta_info(self, meta_info: Mapping[str, Set[str]]) -> None:
        document = {
            "header": self.header,
            "data": {key: sorted(values) for key, values in sorted(meta_info.items())},
        }
        self._write(self.output_dir / "LocaleDataMetaInfo.json", document)
