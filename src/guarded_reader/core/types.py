"""guarded-reader shared domain types.

Key design decisions:

* ``FileFormat`` uses *string* values so formats can be selected directly
  from user input (``FileFormat("json")``).
* ``ReadRequest`` is a frozen dataclass and performs no validation of its
  own.  A malformed request is rejected by the pipeline with
  :class:`~guarded_reader.core.errors.InvalidArgument`, the same contract
  as every other failure.
* ``JsonDocument`` is a scoped resource: its backing buffer is released
  when the document is closed or its ``with`` block exits.
* XML documents are plain :class:`xml.etree.ElementTree.ElementTree`
  objects and need no release.
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias
from xml.etree import ElementTree

from guarded_reader.memory import SecureBuffer

if TYPE_CHECKING:
    from guarded_reader.core.interfaces import AccessAuthorizer, TextDecryptor

XmlDocument: TypeAlias = ElementTree.ElementTree
"""Element tree returned by XML reads; ``getroot()`` is the document element."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FileFormat(enum.StrEnum):
    """File formats understood by the read pipeline."""

    TEXT = "text"
    XML = "xml"
    JSON = "json"

    @property
    def structured(self) -> bool:
        """Return ``True`` for formats that are parsed into a tree."""
        return self is not FileFormat.TEXT


# ---------------------------------------------------------------------------
# ReadRequest
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ReadRequest:
    """One read through the pipeline.

    Encryption is requested when ``use_encryption`` is set or a decryptor
    is supplied.  Authorization is requested when ``use_authorization`` is
    set, an authorizer is supplied, or a role is supplied.

    Attributes
    ----------
    format:
        The format to return.  Plain strings are accepted and converted.
    path:
        Filesystem path of the file to read.
    role:
        Caller role, required when authorization is requested.
    decryptor:
        Decryptor applied to the whole raw content before parsing.
    authorizer:
        Authorizer consulted before any filesystem access.
    use_encryption:
        Request decryption explicitly.  Without a decryptor the request
        fails with ``MissingDecryptor``.
    use_authorization:
        Request authorization explicitly.  Without an authorizer the
        request fails with ``MissingAuthorizer``.
    """

    format: FileFormat | str
    path: str | None
    role: str | None = None
    decryptor: TextDecryptor | None = None
    authorizer: AccessAuthorizer | None = None
    use_encryption: bool = False
    use_authorization: bool = False

    @property
    def encrypted(self) -> bool:
        return self.use_encryption or self.decryptor is not None

    @property
    def authorized(self) -> bool:
        return (
            self.use_authorization
            or self.authorizer is not None
            or self.role is not None
        )


# ---------------------------------------------------------------------------
# JsonDocument -- scoped parse result
# ---------------------------------------------------------------------------

class JsonDocument:
    """A parsed JSON value tree that owns its source buffer.

    The document must be released after use, preferably with ``with``::

        with reader.read_json("settings.json") as doc:
            name = doc.get_property("name")

    Releasing wipes the backing buffer and drops the value tree.  Any
    access after release raises :class:`ValueError`, like I/O on a closed
    file.
    """

    __slots__ = ("_buffer", "_root", "_closed")

    def __init__(self, root: Any, buffer: SecureBuffer) -> None:
        self._root = root
        self._buffer = buffer
        self._closed = False

    # -- resource management ------------------------------------------

    def __enter__(self) -> JsonDocument:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the document.  Safe to call multiple times."""
        if self._closed:
            return
        self._buffer.wipe()
        self._root = None
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def buffer(self) -> SecureBuffer:
        """The buffer holding the source text."""
        return self._buffer

    # -- access -------------------------------------------------------

    @property
    def root(self) -> Any:
        """The root value: ``dict``, ``list``, ``str``, number, bool or ``None``."""
        self._check_open()
        return self._root

    def get_property(self, name: str) -> Any:
        """Return the member *name* of the root object.

        Raises
        ------
        TypeError
            If the root value is not a JSON object.
        KeyError
            If the root object has no member *name*.
        """
        root = self.root
        if not isinstance(root, dict):
            raise TypeError(
                f"JSON root is {type(root).__name__}, not an object"
            )
        return root[name]

    def __getitem__(self, key: str | int) -> Any:
        return self.root[key]

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialise the value tree back to JSON text."""
        return json.dumps(self.root, indent=indent, ensure_ascii=False)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on released JSON document")

    def __repr__(self) -> str:
        state = "released" if self._closed else f"{len(self._buffer)} bytes"
        return f"JsonDocument({state})"
