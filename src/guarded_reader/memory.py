"""Scoped buffer handling for parsed documents.

Parsed JSON documents keep their source text in a mutable ``bytearray``
so that it can be zeroed deterministically when the caller is done with
the document, instead of lingering until garbage collection.

**Python limitation:** the ``str`` objects produced while parsing are
immutable and may be copied by the runtime.  Only the backing buffer owned
by the document is guaranteed to be zeroed.

The :class:`SecureBuffer` context manager provides automatic cleanup::

    with SecureBuffer(bytearray(b"{...}")) as data:
        # use data
    # data has been wiped
"""
from __future__ import annotations

import ctypes
import logging

logger = logging.getLogger(__name__)


def wipe(data: bytearray) -> None:
    """Overwrite *data* with zeros in-place.

    Uses ``ctypes.memset`` on the underlying buffer so the write cannot be
    optimised away.

    Parameters
    ----------
    data:
        A mutable ``bytearray`` to be zeroed.

    Raises
    ------
    TypeError
        If *data* is not a ``bytearray``.
    """
    if not isinstance(data, bytearray):
        raise TypeError(f"Expected bytearray, got {type(data).__name__}")
    if len(data) == 0:
        return
    buf = (ctypes.c_char * len(data)).from_buffer(data)
    ctypes.memset(ctypes.addressof(buf), 0, len(data))
    # the ctypes view pins the bytearray until released
    del buf
    logger.debug("wiped %d byte buffer", len(data))


class SecureBuffer:
    """Context manager owning a ``bytearray`` that is wiped on release.

    Usage::

        with SecureBuffer(bytearray(b"payload")) as data:
            consume(data)
        # data has been wiped with zeros

    :meth:`wipe` runs on exit whether or not the block raised.
    """

    __slots__ = ("_data", "_wiped")

    def __init__(self, data: bytearray) -> None:
        if not isinstance(data, bytearray):
            raise TypeError(f"SecureBuffer requires bytearray, got {type(data).__name__}")
        self._data = data
        self._wiped = False

    @classmethod
    def from_text(cls, text: str, encoding: str = "utf-8") -> SecureBuffer:
        """Allocate a buffer holding *text* encoded with *encoding*."""
        return cls(bytearray(text, encoding))

    def __enter__(self) -> bytearray:
        return self._data

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.wipe()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytearray:
        """The managed buffer (all zeros once wiped)."""
        return self._data

    def wipe(self) -> None:
        """Explicitly wipe the managed buffer.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if not self._wiped:
            wipe(self._data)
            self._wiped = True

    @property
    def wiped(self) -> bool:
        """Return ``True`` if the buffer has been wiped."""
        return self._wiped
