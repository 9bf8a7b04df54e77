"""Reference decryptor: character-order reversal.

This is a reversible placeholder transform, not a security primitive.
Reversal is its own inverse, so the same object produces fixtures
(:meth:`ReverseTextDecryptor.encrypt`) and reads them back.
"""
from __future__ import annotations

from guarded_reader.core.errors import NullCipherText


class ReverseTextDecryptor:
    """Decrypts by reversing the sequence of characters.

    ``decrypt("terceS") == "Secret"`` and ``decrypt(decrypt(s)) == s``
    for every string ``s``.  The empty string decrypts to itself.
    """

    __slots__ = ()

    def decrypt(self, cipher_text: str) -> str:
        if cipher_text is None:
            raise NullCipherText(details={"decryptor": type(self).__name__})
        return cipher_text[::-1]

    async def decrypt_async(self, cipher_text: str) -> str:
        return self.decrypt(cipher_text)

    def encrypt(self, plain_text: str) -> str:
        """Produce cipher text that :meth:`decrypt` turns back into *plain_text*."""
        return self.decrypt(plain_text)

    def __repr__(self) -> str:
        return "ReverseTextDecryptor()"
