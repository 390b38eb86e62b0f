"""
Byte utilities — hex and URL-safe base64 conversions.

Hex decoding is strict: odd-length input or any non-hex digit raises
MalformedHexError instead of producing placeholder bytes.
"""

from __future__ import annotations

import base64
import re

from catalyst_parser.domain.errors import MalformedHexError

HEX_PREFIX = "0x"

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def strip_hex_prefix(value: str) -> str:
    """Drop a leading `0x` if present."""
    return value[len(HEX_PREFIX):] if value.startswith(HEX_PREFIX) else value


def hex_to_bytes(value: str) -> bytes:
    """
    Decode a hex string, optionally prefixed with `0x`, into bytes.

    Raises MalformedHexError on odd length or non-hex characters.
    """
    digits = strip_hex_prefix(value)
    if len(digits) % 2:
        raise MalformedHexError(f"Hex string has odd length {len(digits)}: {value[:32]!r}")
    if _HEX_DIGITS.fullmatch(digits) is None:
        raise MalformedHexError(f"Hex string contains non-hex characters: {value[:32]!r}")
    return bytes.fromhex(digits)


def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def base64url_encode(data: bytes) -> str:
    """URL-safe base64 (`-` and `_` alphabet) with all `=` padding stripped."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")
