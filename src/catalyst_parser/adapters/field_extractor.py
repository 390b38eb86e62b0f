"""
Field extractor — pull payment and voting-power data out of the decoded tree.

Both fields are best-effort: any shape mismatch along the lookup path
returns the fallback value instead of raising.
"""

from __future__ import annotations

from catalyst_parser.domain.cbor import CborArray, CborBytes, CborMap, CborTagged, CborValue
from catalyst_parser.domain.models import NOT_AVAILABLE

PAYMENT_SECTION_KEY = 30
PAYMENT_HASH_INDEX = 2
VOTING_POWER_KEY = 100


def _lookup(container: CborValue | None, key: int) -> CborValue | None:
    """Index into a map by key or an array by position."""
    match container:
        case CborMap():
            return container.get(key)
        case CborArray():
            return container.at(key)
    return None


def extract_payment_address_hash(tree: CborValue | None) -> str:
    """
    Hex of the tagged byte string at `tree[30][2]`, or NOT_AVAILABLE.

    The top level must be a map; `tree[30]` may be a map or an array.
    """
    if not isinstance(tree, CborMap):
        return NOT_AVAILABLE
    match _lookup(tree.get(PAYMENT_SECTION_KEY), PAYMENT_HASH_INDEX):
        case CborTagged(value=CborBytes(value)):
            return value.hex()
    return NOT_AVAILABLE


def extract_voting_power(tree: CborValue | None) -> tuple[CborValue | None, ...]:
    """
    Delegation entries stored at `tree[100]`, or an empty tuple.

    Entries are returned as decoded; their shape is not checked here.
    """
    if not isinstance(tree, CborMap):
        return ()
    match tree.get(VOTING_POWER_KEY):
        case CborArray(items):
            return items
    return ()
