"""
CBOR value tree — one frozen dataclass per supported CBOR item kind.

A decode failure is represented by None, so every slot that holds a
decoded item is typed `CborValue | None`. Extraction code branches on
these variants with match/case instead of probing shapes at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CborUInt:
    """Major type 0 — unsigned integer."""

    value: int


@dataclass(frozen=True, slots=True)
class CborBytes:
    """Major type 2 — byte string."""

    value: bytes


@dataclass(frozen=True, slots=True)
class CborArray:
    """Major type 4 — ordered sequence of items."""

    items: tuple[CborValue | None, ...] = ()

    def at(self, index: int) -> CborValue | None:
        """Item at a non-negative index, or None when out of range."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


@dataclass(frozen=True, slots=True)
class CborMap:
    """
    Major type 5 — key/value pairs in encoding order.

    Unsigned-integer keys are stored as plain ints and byte-string keys
    as bytes, so `get(30)` finds the item encoded under key 30.
    """

    entries: dict[Any, CborValue | None] = field(default_factory=dict)

    def get(self, key: Any) -> CborValue | None:
        return self.entries.get(key)


@dataclass(frozen=True, slots=True)
class CborTagged:
    """Major type 6 — a tag number wrapping exactly one item."""

    tag: int
    value: CborValue | None


@dataclass(frozen=True, slots=True)
class CborUndefined:
    """Major type 7, simple value 22."""


UNDEFINED = CborUndefined()

type CborValue = CborUInt | CborBytes | CborArray | CborMap | CborTagged | CborUndefined


def to_native(item: CborValue | None) -> Any:
    """
    Convert a decoded tree into JSON-serializable Python values.

    Byte strings become lowercase hex, tagged items become
    {"tag": n, "value": ...}, map keys become strings, and both
    `undefined` and decode failures become None.
    """
    match item:
        case CborUInt(value):
            return value
        case CborBytes(value):
            return value.hex()
        case CborArray(items):
            return [to_native(child) for child in items]
        case CborMap(entries):
            return {_native_key(key): to_native(value) for key, value in entries.items()}
        case CborTagged(tag, value):
            return {"tag": tag, "value": to_native(value)}
        case CborUndefined() | None:
            return None
    raise TypeError(f"Not a CBOR value: {item!r}")


def _native_key(key: Any) -> str:
    if isinstance(key, bytes):
        return key.hex()
    if isinstance(key, int):
        return str(key)
    return str(to_native(key))
