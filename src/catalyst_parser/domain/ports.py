"""
Ports — Protocol-based interfaces the pipeline depends on.

The pipeline only needs something that turns certificate bytes into a
CBOR value tree; adapters satisfy the contract structurally.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from catalyst_parser.domain.cbor import CborValue


@runtime_checkable
class CertificateDecoder(Protocol):
    """
    Port: decode an assembled certificate into a CBOR value tree.

    Implementations must not raise on malformed input; they return None
    when the bytes cannot be decoded.
    """

    def decode(self, data: bytes) -> CborValue | None: ...
