# mypy: ignore-errors
"""Tests for post content hashing."""

from __future__ import annotations

import hashlib

from frog_backend.utils import hash as hash_utils

HEX_DIGEST_LENGTH = 64


def test_canonical_payload_matches_compact_json() -> None:
    """The payload serializes like JSON.stringify: compact, key order kept."""
    payload = hash_utils.canonical_post_payload("gm", ["https://a.example"], [])
    assert payload == b'{"text":"gm","links":["https://a.example"],"images":[]}'


def test_content_hash_is_sha256_of_payload() -> None:
    digest = hash_utils.content_hash("gm", [], [])
    expected = hashlib.sha256(b'{"text":"gm","links":[],"images":[]}').hexdigest()
    assert digest == expected
    assert len(digest) == HEX_DIGEST_LENGTH


def test_content_hash_is_deterministic() -> None:
    first = hash_utils.content_hash("frog", ["https://x.example"], ["https://img.example/a.png"])
    second = hash_utils.content_hash("frog", ("https://x.example",), ("https://img.example/a.png",))
    assert first == second


def test_content_hash_keeps_unicode_unescaped() -> None:
    payload = hash_utils.canonical_post_payload("🐸 ribbit", [], [])
    assert "🐸".encode() in payload


def test_content_hash_changes_with_links() -> None:
    assert hash_utils.content_hash("frog", [], []) != hash_utils.content_hash(
        "frog", ["https://x.example"], []
    )
