"""guarded-reader capability interfaces.

This module defines the *structural* interfaces (``typing.Protocol``) for
the pluggable collaborators consumed by the read pipeline:

* :class:`TextDecryptor` -- turns raw file content into plain text.
* :class:`AccessAuthorizer` -- decides whether a role may read a path.

Every Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.
Built-in implementations live in :mod:`guarded_reader.crypto` and
:mod:`guarded_reader.access`.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextDecryptor(Protocol):
    """Transforms cipher text into plain text.

    Implementations MUST be pure functions of their input: no hidden
    state and no I/O.  ``decrypt`` and ``decrypt_async`` MUST return
    identical results for identical input.
    """

    def decrypt(self, cipher_text: str) -> str:
        """Return the plain text for *cipher_text*.

        Raises :class:`~guarded_reader.core.errors.NullCipherText` if
        *cipher_text* is ``None``.
        """
        ...

    async def decrypt_async(self, cipher_text: str) -> str:
        """Awaitable face of :meth:`decrypt` with the same contract."""
        ...


@runtime_checkable
class AccessAuthorizer(Protocol):
    """Decides whether a role may read a path.

    Implementations MUST fail closed: a blank path or role yields
    ``False`` rather than an exception.  Instances are read-only after
    construction and may be shared between concurrent reads.
    """

    def can_read(self, path: str | None, role: str | None) -> bool:
        """Return ``True`` if *role* may read *path*."""
        ...
