"""
Railway-Oriented Programming (ROP) helpers.

Explicit, composable error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def parse_id(raw: str) -> Result[int]:
        if not raw.isdigit():
            return Result.failure(ErrorCode.VALIDATION_ERROR, "Invalid certificate ID")
        return Result.success(int(raw))
"""

from railway.assertions import ResultAssertions
from railway.failure import ErrorCode, FailureDescription
from railway.result import Failure, Result, Success

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultAssertions",
]
