"""Fernet decryptor.

Authenticated symmetric decryption using :class:`cryptography.fernet.Fernet`
(AES-128-CBC + HMAC-SHA256).  A drop-in :class:`TextDecryptor` for files
whose whole content is one Fernet token, showing that real transforms
plug into the pipeline without changes to the orchestrator.
"""
from __future__ import annotations

from cryptography.fernet import Fernet, InvalidToken

from guarded_reader.core.errors import InvalidCipherText, NullCipherText


class FernetTextDecryptor:
    """Decrypts Fernet tokens produced with the same key.

    Parameters
    ----------
    key:
        A URL-safe base64-encoded 32-byte key, as returned by
        :meth:`generate_key`.

    Raises
    ------
    ValueError
        If *key* is not a valid Fernet key.
    """

    __slots__ = ("_fernet",)

    def __init__(self, key: bytes | str) -> None:
        self._fernet = Fernet(key)

    @staticmethod
    def generate_key() -> bytes:
        """Return a fresh random key."""
        return Fernet.generate_key()

    def encrypt(self, plain_text: str) -> str:
        """Return the Fernet token for *plain_text* as ASCII text."""
        return self._fernet.encrypt(plain_text.encode("utf-8")).decode("ascii")

    def decrypt(self, cipher_text: str) -> str:
        """Return the plain text of the token in *cipher_text*.

        Surrounding whitespace (e.g. a trailing newline in the file) is
        ignored.

        Raises
        ------
        NullCipherText
            If *cipher_text* is ``None``.
        InvalidCipherText
            If the token is malformed, was produced with another key, or
            does not decode to UTF-8 text.
        """
        if cipher_text is None:
            raise NullCipherText(details={"decryptor": type(self).__name__})
        try:
            token = cipher_text.strip().encode("ascii")
            return self._fernet.decrypt(token).decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            raise InvalidCipherText(
                details={
                    "decryptor": type(self).__name__,
                    "reason": type(exc).__name__,
                },
            ) from exc

    async def decrypt_async(self, cipher_text: str) -> str:
        return self.decrypt(cipher_text)

    def __repr__(self) -> str:
        return "FernetTextDecryptor(key=[REDACTED])"
