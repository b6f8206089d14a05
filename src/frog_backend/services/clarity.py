"""Decoding of Clarity integer arguments reported by the Stacks chain API.

The API describes each contract-call argument with two representations: a
human readable ``repr`` such as ``u100000`` and the consensus-serialized
``hex`` value. Decoders are tried in order and the first one that yields a
value wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Final

_UINT_REPR: Final = re.compile(r"^u([0-9]+)$")
_INT_REPR: Final = re.compile(r"^(-?[0-9]+)$")
_INT128_WIDTH: Final[int] = 16


class ClarityType(IntEnum):
    """Type tags of the Clarity wire format that this module understands."""

    INT = 0x00
    UINT = 0x01


@dataclass(frozen=True)
class ClarityInteger:
    """A decoded Clarity ``int`` or ``uint`` value."""

    type: ClarityType
    value: int


def decode_repr(raw: Any) -> ClarityInteger | None:
    """Decode the ``repr`` form: ``u123`` for uint, ``123``/``-5`` for int."""
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    match = _UINT_REPR.match(text)
    if match:
        return ClarityInteger(ClarityType.UINT, int(match.group(1)))
    match = _INT_REPR.match(text)
    if match:
        return ClarityInteger(ClarityType.INT, int(match.group(1)))
    return None


def decode_hex(raw: Any) -> ClarityInteger | None:
    """Decode a serialized value: one type byte followed by 16 big-endian bytes."""
    if not isinstance(raw, str):
        return None
    text = raw.strip().lower()
    if text.startswith("0x"):
        text = text[2:]
    try:
        data = bytes.fromhex(text)
    except ValueError:
        return None
    if len(data) != 1 + _INT128_WIDTH:
        return None
    try:
        tag = ClarityType(data[0])
    except ValueError:
        return None
    signed = tag is ClarityType.INT
    return ClarityInteger(tag, int.from_bytes(data[1:], "big", signed=signed))


_DECODERS: Final[tuple[tuple[str, Callable[[Any], ClarityInteger | None]], ...]] = (
    ("repr", decode_repr),
    ("hex", decode_hex),
)


def decode_function_arg(arg: Any) -> ClarityInteger | None:
    """Decode one ``function_args`` entry, falling back from repr to hex."""
    if not isinstance(arg, Mapping):
        return None
    for key, decoder in _DECODERS:
        decoded = decoder(arg.get(key))
        if decoded is not None:
            return decoded
    return None


def decode_uint_arg(args: Any, index: int) -> int | None:
    """Return the unsigned integer at ``args[index]`` or ``None`` if absent."""
    if not isinstance(args, list) or index >= len(args):
        return None
    decoded = decode_function_arg(args[index])
    if decoded is None or decoded.type is not ClarityType.UINT:
        return None
    return decoded.value
