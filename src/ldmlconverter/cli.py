"""Command line entry point.

    ldmlconverter --base cldr/common -o build/gensrc --basemodule \\
        --zntempfile ZoneName.java.template --tzdatadir make/data/tzdata

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from ldmlconverter.config import ConverterConfig
from ldmlconverter.converter import Converter
from ldmlconverter.core.errors import ConfigurationError, ConverterError
from ldmlconverter.enums import DraftType

__all__ = ["main"]

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _draft(keyword: str) -> DraftType:
    try:
        return DraftType.from_keyword(keyword)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ldmlconverter",
        description="Convert CLDR LDML locale data into per-locale bundles.",
    )
    parser.add_argument("--base", required=True, type=Path, help="CLDR common directory (contains main/).")
    parser.add_argument(
        "--draft",
        type=_draft,
        default=DraftType.default(),
        help="Draft level: unconfirmed, provisional, contributed (default) or approved.",
    )
    parser.add_argument(
        "--baselocales",
        default="en-US",
        help="Comma-separated base locale tags (default: en-US).",
    )
    parser.add_argument(
        "--extra-common-locales",
        default="",
        help="Comma-separated locale ids converted regardless of coverage level.",
    )
    parser.add_argument(
        "--basemodule",
        action="store_true",
        help="Generate the base module bundles and the auxiliary zone tables.",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("build/gensrc"),
        help="Output directory (default: build/gensrc).",
    )
    parser.add_argument("--utf8", action="store_true", help="Write UTF-8 text instead of escaped unicode.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log each converted locale.")
    parser.add_argument("--year", type=int, help="Copyright year of generated files (default: current year).")
    parser.add_argument("--zntempfile", type=Path, help="Zone name template file.")
    parser.add_argument("--tzdatadir", type=Path, help="Directory of the tzdata source files.")
    parser.add_argument("--header-template", type=Path, help="File whose text replaces the default header.")
    parser.add_argument(
        "--nonlikely-script",
        action="store_true",
        help="Send locales with a non-likely script straight to root.",
    )
    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return _build_parser().parse_args(argv)


def _config_from_args(args: argparse.Namespace) -> ConverterConfig:
    header = None
    if args.header_template is not None:
        try:
            header = args.header_template.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"cannot read header template: {e}"
            raise ConfigurationError(msg) from e
    base_locales = tuple(tag.strip() for tag in args.baselocales.split(",") if tag.strip())
    extra_locales = tuple(tag.strip() for tag in args.extra_common_locales.split(",") if tag.strip())
    return ConverterConfig(
        cldr_base=args.base,
        output_dir=args.output,
        draft=args.draft,
        base_locales=base_locales,
        extra_common_locales=extra_locales,
        base_module=args.basemodule,
        use_utf8=args.utf8,
        copyright_year=args.year,
        zone_name_template=args.zntempfile,
        tzdata_dir=args.tzdatadir,
        header_template=header,
        nonlikely_script=args.nonlikely_script,
    )


def main(argv: list[str] | None = None) -> int:
    """Run a conversion; return the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _config_from_args(args)
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        logger.error("%s", e)
        return 1
    try:
        available = Converter(config).run()
    except ConverterError as e:
        logger.error("%s", e)
        return 1
    logger.info("Converted %d available locales", len(available))
    return 0


if __name__ == "__main__":
    sys.exit(main())
