"""
Test assertions for Result values.

    from catalyst_parser.railway import ErrorCode, ResultAssertions

    def test_missing_chunks():
        result = parse_registration({"0": "0x01", "1": "0x02", "99": "0x03"})
        ResultAssertions.assert_failure(result, ErrorCode.INVALID_FORMAT)
        ResultAssertions.assert_failure_message_contains(result, "missing")
"""

from __future__ import annotations

from typing import TypeVar

from catalyst_parser.railway.failure import ErrorCode, FailureDescription
from catalyst_parser.railway.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """Assert the Result is a Success and return its value."""
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure("
            f"{result.error().code.value}: {result.error().message!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """Assert the Result is a Failure, optionally with a specific error code."""
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        """Assert the failure message contains the substring (case-insensitive)."""
        error = ResultAssertions.assert_failure(result)
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )
