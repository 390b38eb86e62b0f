"""
Certificate adapter — chunk assembly and heuristic field location.

The registration certificate arrives as an ordered list of hex chunks
(metadata strings are length-limited). Once joined, two fields are found
by scanning the raw bytes rather than by walking the CBOR structure:

  - the voting public key, the 32 bytes after the DER BIT STRING header
    `03 21 00` (33-byte bit string, zero unused bits);
  - the stake address, found as ASCII text matching `stake1...`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from catalyst_parser.adapters.bytes_codec import hex_to_bytes
from catalyst_parser.domain.errors import VotingKeyNotFoundError
from catalyst_parser.domain.models import NOT_AVAILABLE, VotingKey

log = structlog.get_logger()

VOTING_KEY_MARKER = b"\x03\x21\x00"
VOTING_KEY_LENGTH = 32

STAKE_ADDRESS_PATTERN = re.compile(r"stake1[a-z0-9]{53,59}")


def assemble_certificate(chunks: Iterable[str]) -> bytes:
    """
    Hex-decode each chunk and join them in order.

    Raises MalformedHexError if any chunk is not valid hex.
    """
    certificate = b"".join(hex_to_bytes(chunk) for chunk in chunks)
    log.debug("certificate.assembled", length=len(certificate))
    return certificate


def locate_voting_key(certificate: bytes) -> VotingKey:
    """
    Return the voting key following the first `03 21 00` marker.

    Only the first marker is considered. Raises VotingKeyNotFoundError
    when there is no marker or fewer than 32 bytes follow it.
    """
    offset = certificate.find(VOTING_KEY_MARKER)
    if offset == -1:
        log.warning("certificate.voting_key_missing", length=len(certificate))
        raise VotingKeyNotFoundError("Could not find voting public key in certificate")

    start = offset + len(VOTING_KEY_MARKER)
    key = certificate[start:start + VOTING_KEY_LENGTH]
    if len(key) != VOTING_KEY_LENGTH:
        log.warning("certificate.voting_key_truncated", offset=offset, available=len(key))
        raise VotingKeyNotFoundError(
            f"Voting public key at offset {offset} is truncated: "
            f"expected {VOTING_KEY_LENGTH} bytes, found {len(key)}"
        )
    return VotingKey(offset=offset, key=key)


def find_stake_address(certificate: bytes) -> str:
    """First `stake1...` address in the certificate text, or NOT_AVAILABLE."""
    text = certificate.decode("utf-8", errors="replace")
    match = STAKE_ADDRESS_PATTERN.search(text)
    return match.group(0) if match else NOT_AVAILABLE
