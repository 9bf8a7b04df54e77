"""Shared fixtures for guarded-reader conformance tests.

Provides a reader, the sample documents on disk (plain and reversed),
and the standard authorizer used across the suite.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from guarded_reader.access import PathAllowListAuthorizer
from guarded_reader.crypto import ReverseTextDecryptor
from guarded_reader.reader import FileReader

# ---------------------------------------------------------------------------
# Sample content
# ---------------------------------------------------------------------------
SAMPLE_TEXT = "Secret"
SAMPLE_XML = "<root><message>Hello</message></root>"
SAMPLE_JSON = '{"message":"Hello"}'


# ---------------------------------------------------------------------------
# Reader and capability fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def reader() -> FileReader:
    return FileReader()


@pytest.fixture()
def reverse() -> ReverseTextDecryptor:
    return ReverseTextDecryptor()


# ---------------------------------------------------------------------------
# Files on disk
# ---------------------------------------------------------------------------
@pytest.fixture()
def sample_dir(tmp_path: Path) -> Path:
    """Directory holding plain and reversed copies of every sample."""
    samples = {
        "plain.txt": SAMPLE_TEXT,
        "plain.xml": SAMPLE_XML,
        "plain.json": SAMPLE_JSON,
        "secret.txt": SAMPLE_TEXT[::-1],
        "secret.xml": SAMPLE_XML[::-1],
        "secret.json": SAMPLE_JSON[::-1],
    }
    for name, content in samples.items():
        (tmp_path / name).write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture()
def missing_path(tmp_path: Path) -> str:
    return str(tmp_path / "does-not-exist.dat")


@pytest.fixture()
def authorizer(sample_dir: Path) -> PathAllowListAuthorizer:
    """Allows ordinary roles to read the plain samples only."""
    return PathAllowListAuthorizer(
        str(sample_dir / name) for name in ("plain.txt", "plain.xml", "plain.json")
    )
