"""XML format parsing.

Parses text into an :class:`xml.etree.ElementTree.ElementTree`.  Any
well-formedness failure (unclosed tags, malformed entities, trailing
garbage, empty input) is reported as :class:`XmlParseError` with the
line and column reported by the parser.
"""
from __future__ import annotations

import logging
from xml.etree import ElementTree

from guarded_reader.core.errors import XmlParseError

logger = logging.getLogger(__name__)


def parse_xml(text: str) -> ElementTree.ElementTree:
    """Parse *text* into an element tree.

    Raises
    ------
    XmlParseError
        If *text* is ``None`` or not well-formed XML.
    """
    if text is None:
        raise XmlParseError("No XML content to parse")
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        line, column = exc.position
        raise XmlParseError(
            f"Content is not well-formed XML: {exc}",
            details={"line": line, "column": column},
        ) from exc
    logger.debug("parsed XML document with root <%s>", root.tag)
    return ElementTree.ElementTree(root)
