"""Tests for the FileReader pipeline.

Covers:

1. **Named operations** -- all nine, sync and async.
2. **Combinations** -- every format x encryption x authorization through
   ``read_file``, including authorized + encrypted reads.
3. **Validation order** -- which error wins when several apply, and that
   denied or invalid requests never touch the filesystem.
4. **Error propagation** -- decryptor and parser failures surface
   unchanged.
5. **Configuration** -- decoding options flow through to the read.
"""
from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any

import pytest

import guarded_reader.reader as reader_module
from guarded_reader.access import PathAllowListAuthorizer
from guarded_reader.core.config import ReaderConfig
from guarded_reader.core.errors import (
    AccessDenied,
    BlankPath,
    BlankRole,
    ContentDecodeError,
    FileNotFound,
    InvalidCipherText,
    JsonParseError,
    MissingAuthorizer,
    MissingDecryptor,
    NullCipherText,
    UnsupportedFormat,
    XmlParseError,
)
from guarded_reader.core.types import FileFormat, JsonDocument, ReadRequest
from guarded_reader.crypto import FernetTextDecryptor, ReverseTextDecryptor
from guarded_reader.reader import FileReader

TEXT = "Hello, world"
XML_TEXT = "<root><message>Hello</message></root>"
JSON_TEXT = '{"message":"Hello"}'


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class SpyAuthorizer:
    """Records every decision request and answers with a fixed verdict."""

    def __init__(self, verdict: bool) -> None:
        self.verdict = verdict
        self.calls: list[tuple[str, str]] = []

    def can_read(self, path: str, role: str) -> bool:
        self.calls.append((path, role))
        return self.verdict


class SpyDecryptor:
    """Reverse decryptor that records its inputs."""

    def __init__(self) -> None:
        self.inputs: list[str] = []

    def decrypt(self, cipher_text: str) -> str:
        self.inputs.append(cipher_text)
        return cipher_text[::-1]

    async def decrypt_async(self, cipher_text: str) -> str:
        return self.decrypt(cipher_text)


def _write(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8", newline="")
    return str(path)


def _check_result(file_format: FileFormat, result: Any) -> None:
    if file_format is FileFormat.TEXT:
        assert result == TEXT
    elif file_format is FileFormat.XML:
        assert result.getroot().findtext("message") == "Hello"
    else:
        assert isinstance(result, JsonDocument)
        with result as doc:
            assert doc.get_property("message") == "Hello"


@pytest.fixture()
def reader() -> FileReader:
    return FileReader()


@pytest.fixture()
def files(tmp_path: Path) -> dict[str, str]:
    """Plain and reversed copies of the sample files for each format."""
    reverse = ReverseTextDecryptor()
    return {
        "text": _write(tmp_path, "plain.txt", TEXT),
        "xml": _write(tmp_path, "plain.xml", XML_TEXT),
        "json": _write(tmp_path, "plain.json", JSON_TEXT),
        "enc_text": _write(tmp_path, "secret.txt", reverse.encrypt(TEXT)),
        "enc_xml": _write(tmp_path, "secret.xml", reverse.encrypt(XML_TEXT)),
        "enc_json": _write(tmp_path, "secret.json", reverse.encrypt(JSON_TEXT)),
    }


@pytest.fixture()
def authorizer(files: dict[str, str]) -> PathAllowListAuthorizer:
    return PathAllowListAuthorizer(files.values())


# ===================================================================
# 1. Named operations
# ===================================================================


class TestTextOperations:
    """read_text, read_text_authorized, read_encrypted_text."""

    def test_read_text(self, reader: FileReader, files: dict[str, str]) -> None:
        assert reader.read_text(files["text"]) == TEXT

    def test_read_text_authorized(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        assert reader.read_text_authorized(files["text"], "user", authorizer) == TEXT

    def test_read_text_authorized_denied(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        with pytest.raises(AccessDenied):
            reader.read_text_authorized(
                files["text"], "user", PathAllowListAuthorizer()
            )

    def test_read_text_authorized_admin(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        result = reader.read_text_authorized(
            files["text"], "ADMIN", PathAllowListAuthorizer()
        )
        assert result == TEXT

    def test_read_encrypted_text(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        assert reader.read_encrypted_text(files["enc_text"], ReverseTextDecryptor()) == TEXT

    @pytest.mark.asyncio
    async def test_async_faces(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        assert await reader.read_text_async(files["text"]) == TEXT
        assert (
            await reader.read_text_authorized_async(files["text"], "user", authorizer)
            == TEXT
        )
        assert (
            await reader.read_encrypted_text_async(
                files["enc_text"], ReverseTextDecryptor()
            )
            == TEXT
        )


class TestXmlOperations:
    """read_xml, read_xml_authorized, read_encrypted_xml."""

    def test_read_xml(self, reader: FileReader, files: dict[str, str]) -> None:
        tree = reader.read_xml(files["xml"])
        assert tree.getroot().tag == "root"
        assert tree.getroot().findtext("message") == "Hello"

    def test_read_xml_authorized(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        tree = reader.read_xml_authorized(files["xml"], "user", authorizer)
        assert tree.getroot().findtext("message") == "Hello"

    def test_read_encrypted_xml(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        tree = reader.read_encrypted_xml(files["enc_xml"], ReverseTextDecryptor())
        assert tree.getroot().findtext("message") == "Hello"

    def test_encrypted_file_read_as_plain_xml_fails(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        with pytest.raises(XmlParseError):
            reader.read_xml(files["enc_xml"])

    def test_malformed_xml(self, reader: FileReader, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.xml", "<root><unclosed>")
        with pytest.raises(XmlParseError):
            reader.read_xml(path)

    @pytest.mark.asyncio
    async def test_async_faces(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        for tree in (
            await reader.read_xml_async(files["xml"]),
            await reader.read_xml_authorized_async(files["xml"], "user", authorizer),
            await reader.read_encrypted_xml_async(
                files["enc_xml"], ReverseTextDecryptor()
            ),
        ):
            assert tree.getroot().findtext("message") == "Hello"


class TestJsonOperations:
    """read_json, read_json_authorized, read_encrypted_json."""

    def test_read_json(self, reader: FileReader, files: dict[str, str]) -> None:
        with reader.read_json(files["json"]) as doc:
            assert doc.get_property("message") == "Hello"
        assert doc.closed

    def test_read_json_authorized(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        with reader.read_json_authorized(files["json"], "user", authorizer) as doc:
            assert doc.get_property("message") == "Hello"

    def test_read_encrypted_json(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        with reader.read_encrypted_json(files["enc_json"], ReverseTextDecryptor()) as doc:
            assert doc.get_property("message") == "Hello"

    def test_malformed_json(self, reader: FileReader, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.json", "{invalid}")
        with pytest.raises(JsonParseError):
            reader.read_json(path)

    @pytest.mark.asyncio
    async def test_async_faces(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
    ) -> None:
        for doc in (
            await reader.read_json_async(files["json"]),
            await reader.read_json_authorized_async(files["json"], "user", authorizer),
            await reader.read_encrypted_json_async(
                files["enc_json"], ReverseTextDecryptor()
            ),
        ):
            with doc:
                assert doc.get_property("message") == "Hello"


# ===================================================================
# 2. Combinations
# ===================================================================

COMBINATIONS = list(itertools.product(FileFormat, (False, True), (False, True)))


class TestCombinations:
    """Every format x encryption x authorization through one pipeline."""

    @pytest.mark.parametrize(("file_format", "encrypted", "authorized"), COMBINATIONS)
    def test_read_file(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
        file_format: FileFormat,
        encrypted: bool,
        authorized: bool,
    ) -> None:
        key = f"enc_{file_format}" if encrypted else str(file_format)
        result = reader.read_file(
            file_format,
            files[key],
            decryptor=ReverseTextDecryptor() if encrypted else None,
            authorizer=authorizer if authorized else None,
            role="user" if authorized else None,
        )
        _check_result(file_format, result)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("file_format", "encrypted", "authorized"), COMBINATIONS)
    async def test_read_file_async(
        self,
        reader: FileReader,
        files: dict[str, str],
        authorizer: PathAllowListAuthorizer,
        file_format: FileFormat,
        encrypted: bool,
        authorized: bool,
    ) -> None:
        key = f"enc_{file_format}" if encrypted else str(file_format)
        result = await reader.read_file_async(
            file_format,
            files[key],
            decryptor=ReverseTextDecryptor() if encrypted else None,
            authorizer=authorizer if authorized else None,
            role="user" if authorized else None,
        )
        _check_result(file_format, result)

    def test_format_name_as_string(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        assert reader.read_file("TEXT", files["text"]) == TEXT

    def test_read_request(self, reader: FileReader, files: dict[str, str]) -> None:
        request = ReadRequest(
            FileFormat.XML,
            files["enc_xml"],
            role="admin",
            authorizer=PathAllowListAuthorizer(),
            decryptor=ReverseTextDecryptor(),
        )
        assert reader.read(request).getroot().findtext("message") == "Hello"

    def test_authorized_encrypted_denied(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        decryptor = SpyDecryptor()
        with pytest.raises(AccessDenied):
            reader.read_file(
                FileFormat.JSON,
                files["enc_json"],
                decryptor=decryptor,
                authorizer=PathAllowListAuthorizer(),
                role="user",
            )
        assert decryptor.inputs == []


# ===================================================================
# 3. Validation order
# ===================================================================


@pytest.fixture()
def no_io(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace the raw read with a recorder that fails the test if called."""
    calls: list[str] = []

    def _fail(path: str, **kwargs: Any) -> str:
        calls.append(path)
        raise AssertionError(f"unexpected read of {path}")

    async def _fail_async(path: str, **kwargs: Any) -> str:
        return _fail(path, **kwargs)

    monkeypatch.setattr(reader_module, "read_raw", _fail)
    monkeypatch.setattr(reader_module, "read_raw_async", _fail_async)
    return calls


class TestValidationOrder:
    """Validation and authorization precede any filesystem access."""

    @pytest.mark.parametrize("path", ["", "   ", None])
    def test_blank_path(self, reader: FileReader, path: str | None, no_io: list[str]) -> None:
        with pytest.raises(BlankPath):
            reader.read_text(path)  # type: ignore[arg-type]

    def test_blank_path_beats_blank_role(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(BlankPath):
            reader.read_text_authorized("", "", PathAllowListAuthorizer())

    @pytest.mark.parametrize("role", ["", "  "])
    def test_blank_role(self, reader: FileReader, role: str, no_io: list[str]) -> None:
        spy = SpyAuthorizer(True)
        with pytest.raises(BlankRole):
            reader.read_xml_authorized("a.xml", role, spy)
        assert spy.calls == []

    def test_missing_authorizer(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(MissingAuthorizer):
            reader.read_text_authorized("a.txt", "user", None)  # type: ignore[arg-type]

    def test_role_without_authorizer(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(MissingAuthorizer):
            reader.read_file(FileFormat.TEXT, "a.txt", role="user")

    def test_missing_decryptor(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(MissingDecryptor):
            reader.read_encrypted_json("a.json", None)  # type: ignore[arg-type]

    def test_unsupported_format(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(UnsupportedFormat):
            reader.read_file("yaml", "a.yaml")

    def test_validation_precedes_authorization(
        self, reader: FileReader, no_io: list[str]
    ) -> None:
        spy = SpyAuthorizer(False)
        request = ReadRequest(
            FileFormat.TEXT, "a.txt", role="user", authorizer=spy, use_encryption=True
        )
        with pytest.raises(MissingDecryptor):
            reader.read(request)
        assert spy.calls == []

    def test_denied_read_does_no_io(self, reader: FileReader, no_io: list[str]) -> None:
        spy = SpyAuthorizer(False)
        with pytest.raises(AccessDenied):
            reader.read_text_authorized("a.txt", "user", spy)
        assert spy.calls == [("a.txt", "user")]
        assert no_io == []

    def test_denied_nonexistent_file_is_unauthorized(
        self, reader: FileReader, tmp_path: Path
    ) -> None:
        missing = str(tmp_path / "missing.txt")
        with pytest.raises(AccessDenied):
            reader.read_text_authorized(missing, "user", PathAllowListAuthorizer())

    def test_allowed_nonexistent_file_is_not_found(
        self, reader: FileReader, tmp_path: Path
    ) -> None:
        missing = str(tmp_path / "missing.txt")
        with pytest.raises(FileNotFound):
            reader.read_text_authorized(missing, "admin", PathAllowListAuthorizer())

    @pytest.mark.asyncio
    async def test_async_denied_read_does_no_io(
        self, reader: FileReader, no_io: list[str]
    ) -> None:
        with pytest.raises(AccessDenied):
            await reader.read_json_authorized_async("a.json", "user", SpyAuthorizer(False))
        assert no_io == []

    @pytest.mark.asyncio
    async def test_async_blank_path(self, reader: FileReader, no_io: list[str]) -> None:
        with pytest.raises(BlankPath):
            await reader.read_xml_async(" ")


# ===================================================================
# 4. Error propagation
# ===================================================================


class TestErrorPropagation:
    """Capability and parser failures surface unchanged."""

    def test_decryptor_receives_whole_raw_content(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        spy = SpyDecryptor()
        assert reader.read_encrypted_text(files["enc_text"], spy) == TEXT
        assert spy.inputs == [TEXT[::-1]]

    def test_decryptor_error_propagates(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        fernet = FernetTextDecryptor(FernetTextDecryptor.generate_key())
        with pytest.raises(InvalidCipherText):
            reader.read_encrypted_text(files["text"], fernet)

    def test_custom_decryptor_error_propagates(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        class Broken:
            def decrypt(self, cipher_text: str) -> str:
                raise NullCipherText()

            async def decrypt_async(self, cipher_text: str) -> str:
                raise NullCipherText()

        with pytest.raises(NullCipherText):
            reader.read_encrypted_xml(files["enc_xml"], Broken())

    def test_decrypted_garbage_is_parse_error(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        with pytest.raises(JsonParseError):
            reader.read_encrypted_json(files["json"], ReverseTextDecryptor())

    def test_fernet_end_to_end(self, reader: FileReader, tmp_path: Path) -> None:
        fernet = FernetTextDecryptor(FernetTextDecryptor.generate_key())
        path = _write(tmp_path, "vault.json", fernet.encrypt(JSON_TEXT))
        with reader.read_encrypted_json(path, fernet) as doc:
            assert doc.get_property("message") == "Hello"

    def test_authorizer_exception_propagates(self, reader: FileReader) -> None:
        class Exploding:
            def can_read(self, path: str, role: str) -> bool:
                raise RuntimeError("backend down")

        with pytest.raises(RuntimeError, match="backend down"):
            reader.read_text_authorized("a.txt", "user", Exploding())


# ===================================================================
# 5. Configuration
# ===================================================================


class TestConfiguration:
    """ReaderConfig options applied by the pipeline."""

    def test_default_config(self, reader: FileReader) -> None:
        assert reader.config == ReaderConfig()

    def test_allow_list_in_reader_config_grants_nothing(
        self, files: dict[str, str]
    ) -> None:
        reader = FileReader(ReaderConfig(allowed_paths=[files["text"]]))
        with pytest.raises(MissingAuthorizer):
            reader.read_file(FileFormat.TEXT, files["text"], role="user")
        with pytest.raises(AccessDenied):
            reader.read_text_authorized(files["text"], "user", PathAllowListAuthorizer())

    def test_strict_decoding(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_bytes(b"\xff\xfe")
        reader = FileReader(ReaderConfig(decode_errors="strict"))
        with pytest.raises(ContentDecodeError):
            reader.read_text(str(path))

    def test_replace_decoding(self, reader: FileReader, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_bytes(b"a\xffb")
        assert reader.read_text(str(path)) == "a\ufffdb"

    def test_custom_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.xml"
        path.write_bytes("<r>café</r>".encode("latin-1"))
        reader = FileReader(ReaderConfig(encoding="latin-1"))
        assert reader.read_xml(str(path)).getroot().text == "café"

    def test_bom_file_parses_as_json(self, reader: FileReader, tmp_path: Path) -> None:
        path = tmp_path / "bom.json"
        path.write_bytes(b"\xef\xbb\xbf" + JSON_TEXT.encode("utf-8"))
        with reader.read_json(str(path)) as doc:
            assert doc.get_property("message") == "Hello"

    def test_authorizer_from_config(
        self, reader: FileReader, files: dict[str, str]
    ) -> None:
        config = ReaderConfig(allowed_paths=[files["text"]])
        authorizer = PathAllowListAuthorizer.from_config(config)
        assert reader.read_text_authorized(files["text"], "user", authorizer) == TEXT
        with pytest.raises(AccessDenied):
            reader.read_text_authorized(files["xml"], "user", authorizer)
