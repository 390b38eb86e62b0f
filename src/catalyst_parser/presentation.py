"""
Presentation helpers — turn a RegistrationResult into JSON or text.

Shared by the CLI and the HTTP service. Nothing here affects parsing;
these are display choices only (camelCase keys, truncated signature,
weight/purpose per delegation).
"""

from __future__ import annotations

import json
from typing import Any

from catalyst_parser.domain.cbor import CborArray, CborValue, to_native
from catalyst_parser.domain.models import RegistrationResult

DELEGATION_WEIGHT_INDEX = 1
DELEGATION_PURPOSE_INDEX = 3
DEFAULT_SIGNATURE_PREVIEW_CHARS = 80


def describe_delegation(entry: CborValue | None) -> tuple[Any, Any]:
    """
    (weight, purpose) of one voting power entry, as native values.

    Entries that are not arrays, or are too short, yield None in the
    missing positions.
    """
    if not isinstance(entry, CborArray):
        return None, None
    return (
        to_native(entry.at(DELEGATION_WEIGHT_INDEX)),
        to_native(entry.at(DELEGATION_PURPOSE_INDEX)),
    )


def preview_signature(signature: str, limit: int = DEFAULT_SIGNATURE_PREVIEW_CHARS) -> str:
    return f"{signature[:limit]}..."


def registration_to_dict(registration: RegistrationResult) -> dict[str, Any]:
    """JSON-serializable view of a result, keyed the way the web UI expects."""
    return {
        "catalystId": registration.catalyst_id,
        "votingKeyHex": registration.voting_key_hex,
        "votingKeyBase64": registration.voting_key_base64,
        "stakeAddress": registration.stake_address,
        "nonce": registration.nonce,
        "registrationId": registration.registration_id,
        "paymentAddressHash": registration.payment_address_hash,
        "votingPower": [to_native(entry) for entry in registration.voting_power],
        "signature": registration.signature,
    }


def render_text(
    registration: RegistrationResult,
    signature_preview_chars: int = DEFAULT_SIGNATURE_PREVIEW_CHARS,
) -> str:
    lines = [
        f"Catalyst ID:          {registration.catalyst_id}",
        f"Voting key (hex):     {registration.voting_key_hex}",
        f"Voting key (base64):  {registration.voting_key_base64}",
        f"Stake address:        {registration.stake_address}",
        f"Nonce:                {registration.nonce}",
        f"Registration ID:      {registration.registration_id}",
        f"Payment address hash: {registration.payment_address_hash}",
    ]
    if registration.voting_power:
        lines.append("Voting power:")
        for index, entry in enumerate(registration.voting_power):
            weight, purpose = describe_delegation(entry)
            lines.append(f"  [{index}] Weight: {json.dumps(weight)}, Purpose: {purpose}")
    lines.append(
        f"Signature:            {preview_signature(registration.signature, signature_preview_chars)}"
    )
    return "\n".join(lines)
