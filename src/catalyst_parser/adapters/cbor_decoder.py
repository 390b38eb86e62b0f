"""
Minimal CBOR decoder adapter — just the subset registration certificates use.

Implements the CertificateDecoder port.

Supported items:
  major 0  unsigned integer        → CborUInt
  major 2  byte string             → CborBytes
  major 4  array                   → CborArray
  major 5  map                     → CborMap
  major 6  tagged item             → CborTagged
  major 7  simple value 22         → UNDEFINED

Item arguments may be direct (< 24), one following byte (24) or two
following big-endian bytes (25). Anything else decodes to None for that
item only and decoding carries on with the next byte.

Running out of input makes the whole decode None: certificates are only
trusted as far as the fields actually read.
"""

from __future__ import annotations

from typing import Any

import structlog

from catalyst_parser.domain.cbor import (
    UNDEFINED,
    CborArray,
    CborBytes,
    CborMap,
    CborTagged,
    CborUInt,
    CborValue,
)

log = structlog.get_logger()

MAJOR_UNSIGNED = 0
MAJOR_BYTES = 2
MAJOR_ARRAY = 4
MAJOR_MAP = 5
MAJOR_TAG = 6
MAJOR_SIMPLE = 7

SIMPLE_UNDEFINED = 22

ARG_ONE_BYTE = 24
ARG_TWO_BYTES = 25

_ARGUMENT_MAJORS = frozenset({MAJOR_UNSIGNED, MAJOR_BYTES, MAJOR_ARRAY, MAJOR_MAP, MAJOR_TAG})


class CborDecodeError(Exception):
    """The input ended before the current item was complete."""


class _Cursor:
    """Read position over an immutable byte sequence."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise CborDecodeError(f"Unexpected end of input at offset {self._pos}")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def read_bytes(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise CborDecodeError(
                f"Need {count} bytes at offset {self._pos}, "
                f"only {len(self._data) - self._pos} left"
            )
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk


def _read_argument(cursor: _Cursor, additional_info: int) -> int | None:
    """Resolve the header argument, or None for an unsupported length form."""
    if additional_info < ARG_ONE_BYTE:
        return additional_info
    if additional_info == ARG_ONE_BYTE:
        return cursor.read_byte()
    if additional_info == ARG_TWO_BYTES:
        return int.from_bytes(cursor.read_bytes(2), "big")
    return None


def _map_key(key: CborValue | None) -> Any:
    match key:
        case CborUInt(value):
            return value
        case CborBytes(value):
            return value
    return key


def _decode_map(cursor: _Cursor, pair_count: int) -> CborMap:
    entries: dict[Any, CborValue | None] = {}
    for _ in range(pair_count):
        key = _decode_item(cursor)
        value = _decode_item(cursor)
        try:
            entries[_map_key(key)] = value
        except TypeError:
            # unhashable key (a map, or an array holding one): drop only this pair
            log.debug("cbor.map_entry_skipped", key_type=type(key).__name__)
    return CborMap(entries)


def _decode_item(cursor: _Cursor) -> CborValue | None:
    header = cursor.read_byte()
    major_type = header >> 5
    additional_info = header & 0x1F

    if major_type == MAJOR_SIMPLE:
        return UNDEFINED if additional_info == SIMPLE_UNDEFINED else None
    if major_type not in _ARGUMENT_MAJORS:
        return None

    argument = _read_argument(cursor, additional_info)
    if argument is None:
        return None

    match major_type:
        case 0:
            return CborUInt(argument)
        case 2:
            return CborBytes(cursor.read_bytes(argument))
        case 4:
            return CborArray(tuple(_decode_item(cursor) for _ in range(argument)))
        case 5:
            return _decode_map(cursor, argument)
        case 6:
            return CborTagged(argument, _decode_item(cursor))
    return None  # pragma: no cover


def decode_cbor(data: bytes) -> CborValue | None:
    """
    Decode the single top-level CBOR item at the start of `data`.

    Never raises: truncated input, or nesting deeper than the interpreter's
    recursion limit, yields None for the whole decode. Bytes after the
    first item are ignored.
    """
    try:
        return _decode_item(_Cursor(data))
    except (CborDecodeError, RecursionError) as e:
        log.debug("cbor.decode_failed", error=str(e), length=len(data))
        return None


class MinimalCborDecoder:
    """
    Decode registration certificates into CBOR value trees.

    Implements the CertificateDecoder port.
    """

    def decode(self, data: bytes) -> CborValue | None:
        return decode_cbor(data)
