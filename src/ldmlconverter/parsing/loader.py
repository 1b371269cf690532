"""Parse and validate LDML files, then feed them to handlers.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from lxml import etree

from ldmlconverter.core.errors import SourceParseError
from ldmlconverter.parsing.base import LDMLHandler
from ldmlconverter.types import RawLocaleMap

__all__ = ["load_dtd", "parse_ldml_file", "parse_raw_map"]

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=32)
def load_dtd(path: str) -> etree.DTD:
    """Load a DTD once per run; CLDR files share a handful of them.

    Raises:
        etree.DTDParseError: If the DTD cannot be read or parsed
    """
    logger.debug("Loading DTD %s", path)
    return etree.DTD(path)


def _validate(path: Path, tree: etree._ElementTree) -> None:
    """Validate a document against the DTD its DOCTYPE declares.

    Documents without a DOCTYPE are not validated. System ids are
    resolved against the document's directory; remote DTDs are refused.
    """
    system_url = tree.docinfo.system_url
    if not system_url:
        logger.debug("%s declares no DTD", path)
        return
    if "://" in system_url:
        msg = f"remote DTD {system_url} is not loaded"
        raise SourceParseError(msg, path=path)

    dtd_path = (path.parent / system_url).resolve()
    try:
        dtd = load_dtd(str(dtd_path))
    except (etree.DTDParseError, OSError) as e:
        raise SourceParseError(f"cannot load DTD {dtd_path}: {e}", path=path) from e
    if not dtd.validate(tree):
        raise SourceParseError(f"DTD validation failed: {dtd.error_log.last_error}", path=path)


def _feed(element: etree._Element, handler: LDMLHandler) -> None:
    handler.start(element.tag, element.attrib)
    if element.text:
        handler.data(element.text)
    for child in element:
        # Comments and processing instructions only contribute their tail.
        if isinstance(child.tag, str):
            _feed(child, handler)
        if child.tail:
            handler.data(child.tail)
    handler.end(element.tag)


def parse_ldml_file[H: LDMLHandler](path: Path, handler: H) -> H:
    """Parse an LDML file, validate it and feed it to a handler.

    A document that declares a DTD must be valid against it. The DTD is
    read from the local file system only.

    Args:
        path: LDML source file
        handler: Parser target that accumulates the raw map

    Returns:
        The same handler, after ``close`` was called

    Raises:
        SourceParseError: If the file cannot be read, is not well-formed
            or is not valid against its DTD
    """
    logger.debug("Parsing %s with %s", path, type(handler).__name__)
    parser = etree.XMLParser(
        load_dtd=False,
        no_network=True,
        resolve_entities=False,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        tree = etree.parse(str(path), parser)
    except etree.XMLSyntaxError as e:
        raise SourceParseError(str(e), path=path) from e
    except OSError as e:
        raise SourceParseError(f"cannot read file: {e}", path=path) from e

    _validate(path, tree)
    _feed(tree.getroot(), handler)
    handler.close()
    return handler


def parse_raw_map(path: Path, handler: LDMLHandler) -> RawLocaleMap:
    """Parse a file and return the handler's raw map."""
    return parse_ldml_file(path, handler).data_map
