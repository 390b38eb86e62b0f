"""
Failure description — structured error information for the failure track.

ErrorCode enumerates the failure kinds a registration parse can end in.
FailureDescription pairs a code with a human-readable message and,
when the failure came from an exception, the exception itself.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """Failure kinds surfaced by the parser and its outer shells."""

    INVALID_FORMAT = "INVALID_FORMAT"
    """A required metadata envelope key is missing or empty."""

    MALFORMED_HEX = "MALFORMED_HEX"
    """A hex field has odd length or contains a non-hex digit."""

    VOTING_KEY_NOT_FOUND = "VOTING_KEY_NOT_FOUND"
    """The certificate carries no usable voting public key."""

    PARSE_ERROR = "PARSE_ERROR"
    """Any other fault raised while parsing a registration."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Application settings could not be loaded."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message, optional exception, timestamp.

    >>> desc = FailureDescription(ErrorCode.INVALID_FORMAT, "Missing key 10")
    >>> desc.code
    <ErrorCode.INVALID_FORMAT: 'INVALID_FORMAT'>
    """

    code: ErrorCode
    message: str
    exception: BaseException | None = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
        )
        return f"{self.message}\n{tb}"
