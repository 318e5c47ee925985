"""Tests for content fingerprints."""

import hashlib

import pytest

from letter_issuance.integrity.fingerprint import (
    build_content_hash,
    canonical_payload,
    hash_content,
)

BASE = {
    "letter_id": "letter-123",
    "version_number": 2,
    "context": "COMPANY",
    "department_id": "dept-9",
    "tag_ids": ["alpha", "beta"],
    "content": "Hello world",
}


def test_known_digest_is_stable():
    assert (
        build_content_hash(**BASE)
        == "24c774facebb5311a69f31d2e1017df8cb07ce498f137226a47de905b9a7e7c4"
    )


def test_same_inputs_same_digest():
    assert build_content_hash(**BASE) == build_content_hash(**dict(BASE))


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("content", "Hello world!"),
        ("content", "Hello  world"),
        ("version_number", 3),
        ("letter_id", "letter-124"),
        ("context", "BCBA"),
        ("department_id", "dept-10"),
        ("tag_ids", ["beta", "alpha"]),
        ("tag_ids", []),
    ],
)
def test_any_changed_input_changes_digest(field, value):
    assert build_content_hash(**{**BASE, field: value}) != build_content_hash(**BASE)


def test_canonical_payload_field_order_and_separators():
    payload = canonical_payload(**BASE)
    assert payload == (
        b'{"letter_id":"letter-123","version":2,"context":"COMPANY",'
        b'"department_id":"dept-9","tag_ids":["alpha","beta"],"content":"Hello world"}'
    )


def test_non_ascii_content_is_hashed_as_utf8():
    payload = canonical_payload(**{**BASE, "content": "Grüße"})
    assert "Grüße".encode() in payload


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("version_number", "2"),
        ("version_number", True),
        ("content", None),
        ("tag_ids", "alpha"),
        ("tag_ids", ["alpha", 1]),
    ],
)
def test_rejects_wrong_types(field, value):
    with pytest.raises(TypeError):
        build_content_hash(**{**BASE, field: value})


def test_hash_content_digests_raw_body():
    assert hash_content("Hello world") == hashlib.sha256(b"Hello world").hexdigest()
    assert hash_content("Hello world") != build_content_hash(**BASE)
