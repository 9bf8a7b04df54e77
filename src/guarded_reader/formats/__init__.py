"""guarded-reader format readers.

* **read_raw / read_raw_async** -- path validation, existence check and
  whole-file text read, shared by every format.
* **parse_text** -- passthrough.
* **parse_xml** -- element tree, :class:`XmlParseError` on malformed input.
* **parse_json** -- scoped :class:`JsonDocument`, :class:`JsonParseError`
  on malformed input.
* **PARSERS** -- ``FileFormat -> parser`` registry used by the pipeline.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from guarded_reader.core.errors import UnsupportedFormat
from guarded_reader.core.types import FileFormat
from guarded_reader.formats.json import parse_json
from guarded_reader.formats.raw import check_path, read_raw, read_raw_async
from guarded_reader.formats.text import parse_text
from guarded_reader.formats.xml import parse_xml

PARSERS: dict[FileFormat, Callable[[str], Any]] = {
    FileFormat.TEXT: parse_text,
    FileFormat.XML: parse_xml,
    FileFormat.JSON: parse_json,
}


def resolve_format(value: FileFormat | str) -> FileFormat:
    """Return *value* as a :class:`FileFormat` (names are case-insensitive).

    Raises
    ------
    UnsupportedFormat
        If *value* does not name a supported format.
    """
    try:
        return FileFormat(str(value).strip().lower())
    except ValueError as exc:
        raise UnsupportedFormat(
            f"Unsupported file format: {value!r}",
            details={"format": str(value)},
        ) from exc


def get_parser(file_format: FileFormat | str) -> Callable[[str], Any]:
    """Return the parser registered for *file_format*."""
    return PARSERS[resolve_format(file_format)]


__all__ = [
    "PARSERS",
    "check_path",
    "get_parser",
    "parse_json",
    "parse_text",
    "parse_xml",
    "read_raw",
    "read_raw_async",
    "resolve_format",
]
