"""guarded-reader -- composable file reading.

Reads plain text, XML and JSON files, optionally decrypting their content
and optionally enforcing role-based read authorization, through one
pipeline with one error contract.

Components
----------
1. Format readers (:mod:`guarded_reader.formats`)
2. Decryptor capability (:mod:`guarded_reader.crypto`)
3. Access authorizer capability (:mod:`guarded_reader.access`)
4. Pipeline orchestrator (:mod:`guarded_reader.reader`)
"""
from __future__ import annotations

__version__ = "1.0.0a1"

# ---------------------------------------------------------------------------
# Access authorizer capability
# ---------------------------------------------------------------------------
from guarded_reader.access import PathAllowListAuthorizer, ensure_authorized

# ---------------------------------------------------------------------------
# Core types, errors, config, interfaces
# ---------------------------------------------------------------------------
from guarded_reader.core.config import ReaderConfig
from guarded_reader.core.errors import (
    AccessDenied,
    BlankPath,
    BlankRole,
    ContentDecodeError,
    FileNotFound,
    # Kind bases
    InvalidArgument,
    InvalidCipherText,
    JsonParseError,
    MissingAuthorizer,
    MissingDecryptor,
    NotFound,
    NullCipherText,
    ParseError,
    ReaderError,
    Unauthorized,
    UnsupportedFormat,
    XmlParseError,
    error_from_code,
)
from guarded_reader.core.interfaces import AccessAuthorizer, TextDecryptor
from guarded_reader.core.types import FileFormat, JsonDocument, ReadRequest, XmlDocument

# ---------------------------------------------------------------------------
# Decryptor capability
# ---------------------------------------------------------------------------
from guarded_reader.crypto import FernetTextDecryptor, ReverseTextDecryptor

# ---------------------------------------------------------------------------
# Format readers
# ---------------------------------------------------------------------------
from guarded_reader.formats import (
    parse_json,
    parse_text,
    parse_xml,
    read_raw,
    read_raw_async,
)

# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
from guarded_reader.reader import FileReader, ReadResult

__all__ = [
    # Meta
    "__version__",
    # Types
    "FileFormat",
    "ReadRequest",
    "JsonDocument",
    "XmlDocument",
    "ReadResult",
    # Config
    "ReaderConfig",
    # Interfaces
    "TextDecryptor",
    "AccessAuthorizer",
    # Error hierarchy
    "ReaderError",
    "InvalidArgument",
    "NotFound",
    "Unauthorized",
    "ParseError",
    "BlankPath",
    "BlankRole",
    "MissingDecryptor",
    "MissingAuthorizer",
    "NullCipherText",
    "InvalidCipherText",
    "UnsupportedFormat",
    "FileNotFound",
    "AccessDenied",
    "XmlParseError",
    "JsonParseError",
    "ContentDecodeError",
    "error_from_code",
    # Format readers
    "read_raw",
    "read_raw_async",
    "parse_text",
    "parse_xml",
    "parse_json",
    # Decryptors
    "ReverseTextDecryptor",
    "FernetTextDecryptor",
    # Authorizers
    "PathAllowListAuthorizer",
    "ensure_authorized",
    # Orchestrator
    "FileReader",
]
