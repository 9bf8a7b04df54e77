"""guarded-reader decryptor capability.

Implementations of the :class:`~guarded_reader.core.interfaces.TextDecryptor`
protocol:

* **ReverseTextDecryptor** -- reference placeholder transform (character
  reversal, self-inverse).
* **FernetTextDecryptor** -- authenticated symmetric decryption backed by
  ``cryptography``.
"""
from __future__ import annotations

from guarded_reader.crypto.fernet import FernetTextDecryptor
from guarded_reader.crypto.reverse import ReverseTextDecryptor

__all__ = [
    "ReverseTextDecryptor",
    "FernetTextDecryptor",
]
