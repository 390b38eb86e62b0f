"""
Pipeline — parse one Catalyst registration from its transaction metadata.

Domain layer — pure computation, no I/O. The CBOR decoder is injected
through the CertificateDecoder port.

  validate envelope                      → INVALID_FORMAT
    → assemble certificate from chunks   → MALFORMED_HEX
      → locate voting key                → VOTING_KEY_NOT_FOUND
        → find stake address             (best effort, "N/A")
          → decode CBOR tree             (best effort, None)
            → extract payment hash       (best effort, "N/A")
            → extract voting power       (best effort, ())
              → RegistrationResult

Envelope validation fails before any byte is decoded. Everything after
it runs inside one guarded stage: any exception raised there becomes a
single Failure whose message starts with "Parse error:".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from catalyst_parser.adapters.bytes_codec import base64url_encode, bytes_to_hex
from catalyst_parser.adapters.cbor_decoder import MinimalCborDecoder
from catalyst_parser.adapters.certificate import (
    assemble_certificate,
    find_stake_address,
    locate_voting_key,
)
from catalyst_parser.adapters.field_extractor import (
    extract_payment_address_hash,
    extract_voting_power,
)
from catalyst_parser.domain.errors import InvalidFormatError, RegistrationError
from catalyst_parser.domain.models import (
    CATALYST_ID_PREFIX,
    REQUIRED_ENVELOPE_KEYS,
    MetadataEnvelope,
    RegistrationResult,
)
from catalyst_parser.domain.ports import CertificateDecoder
from catalyst_parser.railway import ErrorCode, Result

log = structlog.get_logger()

PARSE_ERROR_PREFIX = "Parse error: "
INVALID_FORMAT_MESSAGE = (
    "Invalid metadata format. Missing required keys: " + ", ".join(REQUIRED_ENVELOPE_KEYS)
)


def _read_envelope(envelope: Mapping[str, Any]) -> MetadataEnvelope:
    try:
        return MetadataEnvelope.model_validate(dict(envelope))
    except (ValidationError, TypeError, ValueError) as e:
        raise InvalidFormatError(INVALID_FORMAT_MESSAGE) from e


def validate_envelope(envelope: Mapping[str, Any]) -> Result[MetadataEnvelope]:
    """
    Check that keys "0", "1", "10" and "99" are present and non-empty.

    Returns Result.failure(INVALID_FORMAT, ...) otherwise. The attached
    InvalidFormatError carries the pydantic validation error as its cause.
    """
    try:
        return Result.success(_read_envelope(envelope))
    except InvalidFormatError as e:
        return Result.failure(e.code, str(e), e)


def _strip_prefix(value: str) -> str:
    return value[2:]


def _build_registration(
    envelope: MetadataEnvelope,
    decoder: CertificateDecoder,
) -> RegistrationResult:
    """
    Run every byte-level stage. May raise (caught by _guarded_parse).
    """
    certificate = assemble_certificate(envelope.certificate_chunks)

    voting_key = locate_voting_key(certificate)
    voting_key_base64 = base64url_encode(voting_key.key)

    tree = decoder.decode(certificate)
    if tree is None:
        log.info("registration.cbor_unavailable", certificate_length=len(certificate))

    return RegistrationResult(
        catalyst_id=f"{CATALYST_ID_PREFIX}{voting_key_base64}",
        voting_key_hex=bytes_to_hex(voting_key.key),
        voting_key_base64=voting_key_base64,
        stake_address=find_stake_address(certificate),
        nonce=_strip_prefix(envelope.nonce),
        registration_id=_strip_prefix(envelope.registration_id),
        payment_address_hash=extract_payment_address_hash(tree),
        voting_power=extract_voting_power(tree),
        signature=_strip_prefix(envelope.signature),
    )


def _guarded_parse(
    envelope: MetadataEnvelope,
    decoder: CertificateDecoder,
) -> Result[RegistrationResult]:
    """
    Convert any fault from the byte-level stages into one Failure.

    Domain exceptions keep their own ErrorCode; anything else is PARSE_ERROR.
    """
    try:
        return Result.success(_build_registration(envelope, decoder))
    except RegistrationError as e:
        return Result.failure(e.code, f"{PARSE_ERROR_PREFIX}{e}", e)
    except Exception as e:
        return Result.failure(ErrorCode.PARSE_ERROR, f"{PARSE_ERROR_PREFIX}{e}", e)


def parse_registration(
    envelope: Mapping[str, Any],
    decoder: CertificateDecoder | None = None,
) -> Result[RegistrationResult]:
    """
    Parse a registration envelope into a RegistrationResult.

    `envelope` is the metadata mapping as parsed from JSON. `decoder`
    defaults to MinimalCborDecoder.

    Returns Result[RegistrationResult] on success, or a Failure carrying
    INVALID_FORMAT, MALFORMED_HEX, VOTING_KEY_NOT_FOUND or PARSE_ERROR.
    """
    active_decoder = decoder if decoder is not None else MinimalCborDecoder()
    return (
        validate_envelope(envelope)
        .flat_map(lambda valid: _guarded_parse(valid, active_decoder))
        .peek(
            lambda registration: log.info(
                "registration.parsed",
                catalyst_id=registration.catalyst_id,
                stake_address=registration.stake_address,
                delegations=len(registration.voting_power),
            )
        )
        .peek_failure(
            lambda failure: log.warning(
                "registration.failed",
                error_code=failure.code.value,
                message=failure.message,
            )
        )
    )
