"""
Domain exceptions raised inside the parsing stages.

Adapters raise these; the pipeline converts them into Result failures
at a single boundary, keeping each exception's ErrorCode.
"""

from __future__ import annotations

from catalyst_parser.railway import ErrorCode


class RegistrationError(Exception):
    """Base class for registration parsing faults."""

    code: ErrorCode = ErrorCode.PARSE_ERROR


class InvalidFormatError(RegistrationError):
    """The metadata envelope lacks one of the required keys."""

    code = ErrorCode.INVALID_FORMAT


class MalformedHexError(RegistrationError, ValueError):
    """A hex string has odd length or contains a non-hex digit."""

    code = ErrorCode.MALFORMED_HEX


class VotingKeyNotFoundError(RegistrationError, LookupError):
    """The certificate carries no complete voting public key."""

    code = ErrorCode.VOTING_KEY_NOT_FOUND
