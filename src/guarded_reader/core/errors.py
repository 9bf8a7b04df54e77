"""guarded-reader error hierarchy.

Every failure the read pipeline can classify is represented as a concrete
exception class grouped under one of four kinds.

Hierarchy
---------
::

    ReaderError
    +-- InvalidArgument   (GR-E1xx)
    +-- NotFound          (GR-E2xx)
    +-- Unauthorized      (GR-E3xx)
    +-- ParseError        (GR-E4xx)

Usage
-----
Raise concrete subclasses directly::

    raise FileNotFound("reports/q3.json")

Catch by kind::

    try:
        ...
    except InvalidArgument:
        # handles BlankPath, BlankRole, MissingDecryptor, etc.
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class ReaderError(Exception):
    """Base exception for all guarded-reader errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"GR-E100"``.
    kind : str
        Machine-readable failure kind shared by every class in a category.
    message : str
        Human-readable description (MUST NOT contain file contents).
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "GR-E000"
    kind: str = "unknown"
    message: str = "Unknown reader error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a plain error payload."""
        payload: dict[str, Any] = {
            "code": self.code,
            "kind": self.kind,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def describe(self) -> str:
        """Render the one-line ``Error: <Kind>: <message>`` console report."""
        return f"Error: {type(self).__name__}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class InvalidArgument(ReaderError):
    """GR-E1xx -- The request is malformed or a collaborator is missing."""

    code = "GR-E1XX"
    kind = "invalid_argument"


class NotFound(ReaderError):
    """GR-E2xx -- The path does not resolve to an existing file."""

    code = "GR-E2XX"
    kind = "not_found"


class Unauthorized(ReaderError):
    """GR-E3xx -- The authorizer refused the read."""

    code = "GR-E3XX"
    kind = "unauthorized"


class ParseError(ReaderError):
    """GR-E4xx -- Content is not well-formed for the requested format."""

    code = "GR-E4XX"
    kind = "parse_error"


# ===================================================================
# GR-E1xx  Invalid arguments
# ===================================================================

class BlankPath(InvalidArgument):
    """GR-E100 -- The path is missing, empty or whitespace only."""

    code = "GR-E100"
    message = "Path must not be blank"
    resolution = "Supply the path of the file to read."


class BlankRole(InvalidArgument):
    """GR-E101 -- Authorization was requested without a role."""

    code = "GR-E101"
    message = "Role must not be blank when authorization is requested"
    resolution = "Supply the caller's role, e.g. 'admin' or 'user'."


class MissingDecryptor(InvalidArgument):
    """GR-E102 -- Encryption was requested without a decryptor."""

    code = "GR-E102"
    message = "A decryptor is required to read encrypted content"
    resolution = "Pass a TextDecryptor such as ReverseTextDecryptor()."


class MissingAuthorizer(InvalidArgument):
    """GR-E103 -- Authorization was requested without an authorizer."""

    code = "GR-E103"
    message = "An authorizer is required for authorized reads"
    resolution = "Pass an AccessAuthorizer such as PathAllowListAuthorizer()."


class NullCipherText(InvalidArgument):
    """GR-E104 -- The decryptor received no input at all."""

    code = "GR-E104"
    message = "Cipher text must not be None"


class InvalidCipherText(InvalidArgument):
    """GR-E105 -- The decryptor rejected its input as corrupt or forged."""

    code = "GR-E105"
    message = "Cipher text could not be decrypted"
    resolution = "Check that the file was encrypted with the same key."


class UnsupportedFormat(InvalidArgument):
    """GR-E106 -- The requested file format is not one of text, xml, json."""

    code = "GR-E106"
    message = "Unsupported file format"
    resolution = "Use one of: text, xml, json."


# ===================================================================
# GR-E2xx  Not found
# ===================================================================

class FileNotFound(NotFound):
    """GR-E200 -- No regular file exists at the path."""

    code = "GR-E200"
    message = "File not found"
    resolution = "Verify the path and that it names a file, not a directory."


# ===================================================================
# GR-E3xx  Unauthorized
# ===================================================================

class AccessDenied(Unauthorized):
    """GR-E300 -- The role may not read the path."""

    code = "GR-E300"
    message = "Role is not authorized to read the path"
    resolution = "Ask an administrator to allow-list the path for this role."


# ===================================================================
# GR-E4xx  Parse errors
# ===================================================================

class XmlParseError(ParseError):
    """GR-E400 -- Content is not well-formed XML."""

    code = "GR-E400"
    message = "Content is not well-formed XML"


class JsonParseError(ParseError):
    """GR-E401 -- Content is not well-formed JSON."""

    code = "GR-E401"
    message = "Content is not well-formed JSON"


class ContentDecodeError(ParseError):
    """GR-E402 -- File bytes are not valid in the configured encoding."""

    code = "GR-E402"
    message = "File content could not be decoded"
    resolution = "Set ReaderConfig.encoding to the file's encoding."


# ---------------------------------------------------------------------------
# Lookup helper
# ---------------------------------------------------------------------------

_CODE_MAP: dict[str, type[ReaderError]] = {
    cls.code: cls
    for cls in [
        # E1xx
        BlankPath,
        BlankRole,
        MissingDecryptor,
        MissingAuthorizer,
        NullCipherText,
        InvalidCipherText,
        UnsupportedFormat,
        # E2xx
        FileNotFound,
        # E3xx
        AccessDenied,
        # E4xx
        XmlParseError,
        JsonParseError,
        ContentDecodeError,
    ]
}


def error_from_code(code: str, message: str | None = None) -> ReaderError:
    """Instantiate the correct exception class for an error code.

    Parameters
    ----------
    code:
        An error code such as ``"GR-E200"``.
    message:
        Optional override for the default error message.

    Raises
    ------
    KeyError
        If *code* is not a recognised error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
