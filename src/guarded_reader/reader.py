"""guarded-reader FileReader -- the read pipeline orchestrator.

This module implements :class:`FileReader`, the primary entry point of the
library.  It composes the format readers, the decryptor capability and the
authorizer capability into one pipeline shared by every format and every
combination of flags.

Pipeline
--------

1. **Validate** -- format, non-blank path, role/authorizer when
   authorization is requested, decryptor when encryption is requested.
2. **Authorize** -- consult the authorizer; a denied request never touches
   the filesystem.
3. **Read raw** -- whole file as text (the only suspension point of the
   async face).
4. **Decrypt** -- the entire raw content, before any parsing.
5. **Parse** -- text passthrough, element tree, or JSON document.
6. **Return** the result.

Every failure aborts the pipeline and propagates unchanged; nothing is
retried and no partial result is returned.

Usage
-----
::

    from guarded_reader import FileReader, PathAllowListAuthorizer, ReverseTextDecryptor

    reader = FileReader()
    text = reader.read_text("notes.txt")

    authorizer = PathAllowListAuthorizer(["report.xml"])
    tree = reader.read_xml_authorized("report.xml", "user", authorizer)

    with reader.read_encrypted_json("secret.json", ReverseTextDecryptor()) as doc:
        print(doc.get_property("message"))
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeAlias

from guarded_reader.access.authorizer import ensure_authorized
from guarded_reader.core.config import ReaderConfig
from guarded_reader.core.errors import BlankRole, MissingAuthorizer, MissingDecryptor
from guarded_reader.core.types import FileFormat, JsonDocument, ReadRequest, XmlDocument
from guarded_reader.formats import (
    PARSERS,
    check_path,
    read_raw,
    read_raw_async,
    resolve_format,
)

if TYPE_CHECKING:
    from guarded_reader.core.interfaces import AccessAuthorizer, TextDecryptor

logger = logging.getLogger(__name__)

ReadResult: TypeAlias = str | XmlDocument | JsonDocument


class FileReader:
    """Reads text, XML and JSON files with optional decryption and authorization.

    One algorithm serves all eight combinations of format, encryption and
    authorization; the ``*_async`` methods differ from their synchronous
    twins only in suspending while the file is read.  Instances hold no
    per-read state and may be shared.

    Parameters
    ----------
    config:
        Reader configuration.  Only ``encoding`` and ``decode_errors``
        apply here; ``admin_role`` and ``allowed_paths`` configure an
        authorizer built with
        :meth:`~guarded_reader.access.PathAllowListAuthorizer.from_config`,
        which is passed to each authorized read.  Defaults to
        ``ReaderConfig()``.
    """

    def __init__(self, config: ReaderConfig | None = None) -> None:
        self._config = config or ReaderConfig()

    @property
    def config(self) -> ReaderConfig:
        """The reader configuration."""
        return self._config

    # ------------------------------------------------------------------
    # Core pipeline
    # ------------------------------------------------------------------

    def read(self, request: ReadRequest) -> ReadResult:
        """Run *request* through the pipeline.

        Parameters
        ----------
        request:
            The format, path and optional role, authorizer and decryptor.

        Returns
        -------
        str | XmlDocument | JsonDocument
            The text, element tree or JSON document.  A JSON document
            must be released by the caller.

        Raises
        ------
        guarded_reader.core.errors.InvalidArgument
            Step 1: blank path or role, missing authorizer or decryptor,
            unsupported format; or a decryptor rejected its input.
        guarded_reader.core.errors.Unauthorized
            Step 2: the authorizer denied the read.
        guarded_reader.core.errors.NotFound
            Step 3: no file exists at the path.
        guarded_reader.core.errors.ParseError
            Step 3/5: undecodable bytes (strict decoding) or malformed
            XML/JSON.
        """
        file_format, path = self._validate_and_authorize(request)
        raw = read_raw(
            path,
            encoding=self._config.encoding,
            errors=self._config.decode_errors,
        )
        return self._decrypt_and_parse(request, file_format, raw)

    async def read_async(self, request: ReadRequest) -> ReadResult:
        """Awaitable face of :meth:`read` with the same contract."""
        file_format, path = self._validate_and_authorize(request)
        raw = await read_raw_async(
            path,
            encoding=self._config.encoding,
            errors=self._config.decode_errors,
        )
        return self._decrypt_and_parse(request, file_format, raw)

    def read_file(
        self,
        file_format: FileFormat | str,
        path: str,
        *,
        decryptor: TextDecryptor | None = None,
        authorizer: AccessAuthorizer | None = None,
        role: str | None = None,
    ) -> ReadResult:
        """Read *path* as *file_format*, decrypting and authorizing as given.

        Supplying a decryptor requests decryption; supplying an authorizer
        or a role requests authorization.
        """
        return self.read(
            ReadRequest(
                format=file_format,
                path=path,
                role=role,
                decryptor=decryptor,
                authorizer=authorizer,
            )
        )

    async def read_file_async(
        self,
        file_format: FileFormat | str,
        path: str,
        *,
        decryptor: TextDecryptor | None = None,
        authorizer: AccessAuthorizer | None = None,
        role: str | None = None,
    ) -> ReadResult:
        """Awaitable face of :meth:`read_file`."""
        return await self.read_async(
            ReadRequest(
                format=file_format,
                path=path,
                role=role,
                decryptor=decryptor,
                authorizer=authorizer,
            )
        )

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def read_text(self, path: str) -> str:
        """Return the content of the text file at *path*."""
        return self.read(ReadRequest(FileFormat.TEXT, path))

    async def read_text_async(self, path: str) -> str:
        return await self.read_async(ReadRequest(FileFormat.TEXT, path))

    def read_text_authorized(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> str:
        """Return the text at *path* if *authorizer* lets *role* read it."""
        return self.read(_authorized(FileFormat.TEXT, path, role, authorizer))

    async def read_text_authorized_async(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> str:
        return await self.read_async(
            _authorized(FileFormat.TEXT, path, role, authorizer)
        )

    def read_encrypted_text(self, path: str, decryptor: TextDecryptor) -> str:
        """Return the decrypted content of the file at *path*."""
        return self.read(_encrypted(FileFormat.TEXT, path, decryptor))

    async def read_encrypted_text_async(
        self, path: str, decryptor: TextDecryptor
    ) -> str:
        return await self.read_async(_encrypted(FileFormat.TEXT, path, decryptor))

    # ------------------------------------------------------------------
    # XML
    # ------------------------------------------------------------------

    def read_xml(self, path: str) -> XmlDocument:
        """Parse the XML file at *path*."""
        return self.read(ReadRequest(FileFormat.XML, path))

    async def read_xml_async(self, path: str) -> XmlDocument:
        return await self.read_async(ReadRequest(FileFormat.XML, path))

    def read_xml_authorized(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> XmlDocument:
        """Parse the XML file at *path* if *authorizer* lets *role* read it."""
        return self.read(_authorized(FileFormat.XML, path, role, authorizer))

    async def read_xml_authorized_async(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> XmlDocument:
        return await self.read_async(
            _authorized(FileFormat.XML, path, role, authorizer)
        )

    def read_encrypted_xml(self, path: str, decryptor: TextDecryptor) -> XmlDocument:
        """Decrypt the file at *path* and parse the plain text as XML."""
        return self.read(_encrypted(FileFormat.XML, path, decryptor))

    async def read_encrypted_xml_async(
        self, path: str, decryptor: TextDecryptor
    ) -> XmlDocument:
        return await self.read_async(_encrypted(FileFormat.XML, path, decryptor))

    # ------------------------------------------------------------------
    # JSON -- every result must be released by the caller
    # ------------------------------------------------------------------

    def read_json(self, path: str) -> JsonDocument:
        """Parse the JSON file at *path*."""
        return self.read(ReadRequest(FileFormat.JSON, path))

    async def read_json_async(self, path: str) -> JsonDocument:
        return await self.read_async(ReadRequest(FileFormat.JSON, path))

    def read_json_authorized(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> JsonDocument:
        """Parse the JSON file at *path* if *authorizer* lets *role* read it."""
        return self.read(_authorized(FileFormat.JSON, path, role, authorizer))

    async def read_json_authorized_async(
        self, path: str, role: str, authorizer: AccessAuthorizer
    ) -> JsonDocument:
        return await self.read_async(
            _authorized(FileFormat.JSON, path, role, authorizer)
        )

    def read_encrypted_json(self, path: str, decryptor: TextDecryptor) -> JsonDocument:
        """Decrypt the file at *path* and parse the plain text as JSON."""
        return self.read(_encrypted(FileFormat.JSON, path, decryptor))

    async def read_encrypted_json_async(
        self, path: str, decryptor: TextDecryptor
    ) -> JsonDocument:
        return await self.read_async(_encrypted(FileFormat.JSON, path, decryptor))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_and_authorize(request: ReadRequest) -> tuple[FileFormat, str]:
        """Steps 1 and 2: validate *request* and consult its authorizer.

        Runs before any filesystem access.
        """
        # -- Step 1: Validate ------------------------------------------------
        file_format = resolve_format(request.format)
        path = check_path(request.path)
        if request.authorized:
            if request.role is None or not request.role.strip():
                raise BlankRole(details={"path": path})
            if request.authorizer is None:
                raise MissingAuthorizer(details={"path": path})
        if request.encrypted and request.decryptor is None:
            raise MissingDecryptor(details={"path": path})

        logger.debug(
            "reading %s (format=%s, encrypted=%s, authorized=%s)",
            path,
            file_format,
            request.encrypted,
            request.authorized,
        )

        # -- Step 2: Authorize -----------------------------------------------
        if request.authorized:
            ensure_authorized(request.authorizer, path, request.role)
        return file_format, path

    @staticmethod
    def _decrypt_and_parse(
        request: ReadRequest,
        file_format: FileFormat,
        raw: str,
    ) -> ReadResult:
        """Steps 4 and 5: decrypt the whole raw content, then parse it."""
        plain = raw
        if request.encrypted:
            plain = request.decryptor.decrypt(raw)
        return PARSERS[file_format](plain)


def _authorized(
    file_format: FileFormat,
    path: str,
    role: str,
    authorizer: AccessAuthorizer,
) -> ReadRequest:
    return ReadRequest(
        file_format,
        path,
        role=role,
        authorizer=authorizer,
        use_authorization=True,
    )


def _encrypted(
    file_format: FileFormat,
    path: str,
    decryptor: TextDecryptor,
) -> ReadRequest:
    return ReadRequest(
        file_format,
        path,
        decryptor=decryptor,
        use_encryption=True,
    )
