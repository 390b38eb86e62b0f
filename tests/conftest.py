"""
Shared test fixtures for the catalyst-parser test suite.

Provides a hand-assembled registration certificate whose byte layout is
fully known, and envelope builders around it:

  a3                                  map(3)
    0a 81 58 5e <94 bytes>            10: [ bytes(03 21 00 ‖ key ‖ "stake1…") ]
    18 1e 83 00 01 d8 20 58 1c <28>   30: [0, 1, tag(32, payment hash)]
    18 64 82 84 40 05 00 00           100: [[h'', 5, 0, 0],
             84 40 0a 00 01                  [h'', 10, 0, 1]]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
import structlog

VOTING_KEY = bytes(range(32))
STAKE_ADDRESS = "stake1" + "q" + "x8" * 26
PAYMENT_HASH = b"\xab" * 28
NONCE_HEX = "ca7a1457"
REGISTRATION_ID_HEX = "717c1554"
SIGNATURE_HEX = "dd180f13" * 16

# offset of the 03 21 00 marker inside CERTIFICATE
VOTING_KEY_OFFSET = 5


def _build_certificate() -> bytes:
    key_blob = b"\x03\x21\x00" + VOTING_KEY + STAKE_ADDRESS.encode("ascii")
    return b"".join(
        [
            b"\xa3",
            b"\x0a", b"\x81", b"\x58", bytes([len(key_blob)]), key_blob,
            b"\x18\x1e", b"\x83", b"\x00", b"\x01",
            b"\xd8\x20", b"\x58", bytes([len(PAYMENT_HASH)]), PAYMENT_HASH,
            b"\x18\x64", b"\x82",
            b"\x84\x40\x05\x00\x00",
            b"\x84\x40\x0a\x00\x01",
        ]
    )


CERTIFICATE = _build_certificate()


def split_hex_chunks(data: bytes, chunk_size: int = 64) -> list[str]:
    """Hex-encode `data` as 0x-prefixed chunks of at most `chunk_size` bytes."""
    return [
        "0x" + data[start:start + chunk_size].hex()
        for start in range(0, len(data), chunk_size)
    ]


def build_envelope(certificate: bytes = CERTIFICATE, chunk_size: int = 64) -> dict[str, Any]:
    return {
        "0": "0x" + NONCE_HEX,
        "1": "0x" + REGISTRATION_ID_HEX,
        "10": split_hex_chunks(certificate, chunk_size),
        "99": "0x" + SIGNATURE_HEX,
    }


@pytest.fixture(autouse=True)
def _quiet_structlog() -> None:
    """Keep structlog output out of captured stdout between tests."""
    structlog.reset_defaults()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(40),
        logger_factory=structlog.PrintLoggerFactory(),
    )


@pytest.fixture()
def certificate() -> bytes:
    """The hand-assembled registration certificate."""
    return CERTIFICATE


@pytest.fixture()
def envelope() -> dict[str, Any]:
    """A complete, valid metadata envelope wrapping the certificate."""
    return build_envelope()


@pytest.fixture()
def make_envelope() -> Callable[..., dict[str, Any]]:
    """Factory building an envelope around arbitrary certificate bytes."""
    return build_envelope
