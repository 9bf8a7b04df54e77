"""guarded-reader configuration.

Defines the validated configuration model consumed by the format readers,
the default authorizer and the :class:`~guarded_reader.reader.FileReader`
facade.  Configuration is passed explicitly; nothing is read from the
environment.
"""
from __future__ import annotations

import codecs
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReaderConfig(BaseModel):
    """Configuration for a :class:`~guarded_reader.reader.FileReader`.

    All fields carry defaults, so ``ReaderConfig()`` is sufficient for
    reading UTF-8 files.  ``encoding`` and ``decode_errors`` are read by
    the reader itself; ``admin_role`` and ``allowed_paths`` are read only
    by :meth:`PathAllowListAuthorizer.from_config
    <guarded_reader.access.PathAllowListAuthorizer.from_config>`.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    encoding: str = Field(
        default="utf-8-sig",
        description=(
            "Codec used to decode raw file bytes.  The default strips a "
            "leading UTF-8 byte order mark."
        ),
    )
    decode_errors: Literal["strict", "replace"] = Field(
        default="replace",
        description=(
            "How undecodable bytes are handled.  'replace' substitutes "
            "U+FFFD; 'strict' fails the read with ContentDecodeError."
        ),
    )
    admin_role: str = Field(
        default="admin",
        min_length=1,
        description="Role that may read any path (compared case-insensitively).",
    )
    allowed_paths: list[str] = Field(
        default_factory=list,
        description=(
            "Paths readable by non-admin roles when the default authorizer "
            "is built from this configuration."
        ),
    )

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value!r}") from exc
        return value
