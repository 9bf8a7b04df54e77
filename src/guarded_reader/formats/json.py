"""JSON format parsing.

Parses text into a :class:`~guarded_reader.core.types.JsonDocument`.  The
source text is copied into a :class:`~guarded_reader.memory.SecureBuffer`
owned by the document; the buffer is wiped when the document is released,
and immediately if parsing fails.

Only standard JSON is accepted: the non-standard constants ``NaN``,
``Infinity`` and ``-Infinity`` are rejected, as is nesting deeper than
the interpreter recursion limit.
"""
from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

from guarded_reader.core.errors import JsonParseError
from guarded_reader.core.types import JsonDocument
from guarded_reader.memory import SecureBuffer

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_json(text: str) -> JsonDocument:
    """Parse *text* into a scoped JSON document.

    The caller owns the returned document and must release it, e.g.::

        with parse_json('{"message": "Hello"}') as doc:
            doc.get_property("message")

    Raises
    ------
    JsonParseError
        If *text* is ``None``, not well-formed JSON, or nested too deeply
        to decode.
    """
    if text is None:
        raise JsonParseError("No JSON content to parse")
    # json decodes bytes with surrogatepass, so lone surrogates survive
    buffer = SecureBuffer(bytearray(text, "utf-8", "surrogatepass"))
    parsed = False
    try:
        root: Any = json.loads(buffer.data, parse_constant=_reject_constant)
        parsed = True
    except json.JSONDecodeError as exc:
        raise JsonParseError(
            f"Content is not well-formed JSON: {exc.msg}",
            details={"line": exc.lineno, "column": exc.colno},
        ) from exc
    except ValueError as exc:
        raise JsonParseError(f"Content is not well-formed JSON: {exc}") from exc
    except RecursionError as exc:
        raise JsonParseError("Content is not well-formed JSON: nesting too deep") from exc
    finally:
        if not parsed:
            buffer.wipe()
    logger.debug("parsed JSON document (%d bytes)", len(buffer))
    return JsonDocument(root, buffer)
