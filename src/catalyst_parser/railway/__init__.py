"""
Railway-Oriented Programming (ROP) primitives for catalyst_parser.

Every public operation returns a Result instead of raising, so callers
branch on success/failure explicitly:

    from catalyst_parser.railway import ErrorCode, Result

    result = parse_registration(envelope)
    result.either(
        on_success=lambda reg: reg.catalyst_id,
        on_failure=lambda err: f"{err.code.value}: {err.message}",
    )
"""

from catalyst_parser.railway.assertions import ResultAssertions
from catalyst_parser.railway.failure import ErrorCode, FailureDescription
from catalyst_parser.railway.result import Failure, Result, Success

__all__ = [
    "ErrorCode",
    "Failure",
    "FailureDescription",
    "Result",
    "ResultAssertions",
    "Success",
]
