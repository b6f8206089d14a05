# src/frog_backend/utils/hash.py
"""Content hashing for off-chain posts."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence


def canonical_post_payload(text: str, links: Sequence[str], images: Sequence[str]) -> bytes:
    """Serialize a normalized post exactly as the web client does.

    Keys keep the ``text, links, images`` order and the JSON is compact, so
    the digest matches ``JSON.stringify`` on the frontend.
    """
    payload = {"text": text, "links": list(links), "images": list(images)}
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def content_hash(text: str, links: Sequence[str], images: Sequence[str]) -> str:
    """Return the lowercase hex sha256 of the canonical post payload."""
    return hashlib.sha256(canonical_post_payload(text, links, images)).hexdigest()
