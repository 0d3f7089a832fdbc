"""Tests for document id generation and parsing."""

import uuid

import pytest

from app.shared.utils import generate_document_id, parse_document_id


def test_generate_document_id_is_uuid4() -> None:
    value = generate_document_id()
    parsed = uuid.UUID(value)
    assert parsed.version == 4
    assert str(parsed) == value


def test_generate_document_id_is_unique() -> None:
    assert len({generate_document_id() for _ in range(1000)}) == 1000


def test_parse_canonicalizes() -> None:
    value = "6F1C2B1E-0D3A-4C59-8F0E-2B7D9A1C4E55"
    assert parse_document_id(value) == value.lower()
    assert parse_document_id("{" + value + "}") == value.lower()


@pytest.mark.parametrize("value", ["", "abc", "../../etc/passwd", "6f1c2b1e-0d3a"])
def test_parse_rejects_non_uuid(value: str) -> None:
    assert parse_document_id(value) is None
