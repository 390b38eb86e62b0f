"""
Domain models — the validated input envelope and the parse outputs.

MetadataEnvelope is a pydantic model because it validates untrusted,
externally supplied JSON. The outputs are frozen dataclasses: pure value
objects created once per parse and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from catalyst_parser.domain.cbor import CborValue

NOT_AVAILABLE = "N/A"
"""Sentinel for best-effort fields that could not be extracted."""

CATALYST_ID_PREFIX = "id.catalyst://cardano/"

REQUIRED_ENVELOPE_KEYS = ("0", "1", "10", "99")


class MetadataEnvelope(BaseModel):
    """
    The four transaction-metadata entries a registration needs.

    Keys "0", "1" and "99" are 0x-prefixed hex strings; key "10" is the
    certificate split into an ordered list of 0x-prefixed hex chunks.
    Every entry must be present and non-empty. Other keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    nonce: str = Field(alias="0", min_length=1)
    registration_id: str = Field(alias="1", min_length=1)
    certificate_chunks: list[str] = Field(alias="10", min_length=1)
    signature: str = Field(alias="99", min_length=1)


@dataclass(frozen=True, slots=True)
class VotingKey:
    """A voting public key and the offset of the marker that precedes it."""

    offset: int
    key: bytes


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    """
    Everything extracted from one Catalyst registration.

    `stake_address` and `payment_address_hash` fall back to NOT_AVAILABLE,
    and `voting_power` to an empty tuple, when the certificate does not
    carry them. Each voting power entry is a delegation, normally an
    array whose index 1 is the weight and index 3 the purpose.
    """

    catalyst_id: str
    voting_key_hex: str
    voting_key_base64: str
    nonce: str
    registration_id: str
    signature: str = field(repr=False)
    stake_address: str = NOT_AVAILABLE
    payment_address_hash: str = NOT_AVAILABLE
    voting_power: tuple[CborValue | None, ...] = ()
