"""Pure normalization and validation helpers for tip claims and posts."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Final

from frog_backend.services.errors import InvalidInput

HEX64_PATTERN: Final = re.compile(r"^[0-9a-f]{64}$")
DECIMAL_PATTERN: Final = re.compile(r"^[0-9]+$")
URL_PATTERN: Final = re.compile(r"^https?://", re.IGNORECASE)

MAX_TEXT_LENGTH: Final[int] = 500
MAX_LINKS: Final[int] = 10
MAX_IMAGES: Final[int] = 1
# Totals live in a signed 64-bit column.
MAX_AMOUNT_MICRO_STX: Final[int] = 2**63 - 1
LOCAL_UPLOAD_PREFIX: Final[str] = "/uploads/"


@dataclass(frozen=True)
class TipClaim:
    """Canonical form of a tip claim submitted by a client."""

    content_hash: str
    post_id: int
    amount_micro_stx: int
    txid: str


def normalize_hex64(value: object, field_name: str) -> str:
    """Lowercase a 64-character hex identifier or raise ``InvalidInput``."""
    candidate = str(value if value is not None else "").strip().lower()
    if not HEX64_PATTERN.match(candidate):
        raise InvalidInput(f"invalid {field_name}")
    return candidate


def normalize_txid(value: object) -> str:
    """Normalize a transaction id, accepting an optional ``0x`` prefix."""
    candidate = str(value if value is not None else "").strip().lower()
    if candidate.startswith("0x"):
        candidate = candidate[2:]
    return normalize_hex64(candidate, "txid")


def parse_positive_int(value: object, field_name: str, *, maximum: int | None = None) -> int:
    """Parse a decimal string that must denote an integer greater than zero."""
    candidate = str(value if value is not None else "").strip()
    if not DECIMAL_PATTERN.match(candidate):
        raise InvalidInput(f"invalid {field_name}")
    parsed = int(candidate)
    if parsed <= 0:
        raise InvalidInput(f"invalid {field_name}")
    if maximum is not None and parsed > maximum:
        raise InvalidInput(f"invalid {field_name}")
    return parsed


def normalize_tip_claim(
    *,
    content_hash: object,
    post_id: object,
    amount_micro_stx: object,
    txid: object,
) -> TipClaim:
    """Validate raw tip claim fields and return their canonical forms.

    Raises:
        InvalidInput: If any field is malformed.
    """
    return TipClaim(
        content_hash=normalize_hex64(content_hash, "contentHash"),
        post_id=parse_positive_int(post_id, "postId"),
        amount_micro_stx=parse_positive_int(
            amount_micro_stx,
            "amountMicroStx",
            maximum=MAX_AMOUNT_MICRO_STX,
        ),
        txid=normalize_txid(txid),
    )


def parse_list_input(raw: Any) -> list[Any]:
    """Accept either a list or a JSON-encoded list; anything else is empty."""
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, str):
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


def _dedupe(items: list[str], limit: int) -> list[str]:
    return list(dict.fromkeys(items))[:limit]


def normalize_links(links: Any) -> list[str]:
    """Keep up to ten distinct absolute http(s) URLs in submission order."""
    if not isinstance(links, list):
        return []
    cleaned = [str(item or "").strip() for item in links]
    return _dedupe([item for item in cleaned if item and URL_PATTERN.match(item)], MAX_LINKS)


def normalize_images(images: Any) -> list[str]:
    """Keep at most one absolute URL or locally uploaded image path."""
    if not isinstance(images, list):
        return []
    cleaned = [str(item or "").strip() for item in images]
    accepted = [
        item
        for item in cleaned
        if item and (URL_PATTERN.match(item) or item.startswith(LOCAL_UPLOAD_PREFIX))
    ]
    return _dedupe(accepted, MAX_IMAGES)


def normalize_post_text(raw: Any) -> str:
    """Trim the post text and enforce the presence and length rules."""
    text = str(raw or "").strip()
    if not text:
        raise InvalidInput("text is required")
    if len(text) > MAX_TEXT_LENGTH:
        raise InvalidInput(f"text max length is {MAX_TEXT_LENGTH}")
    return text
