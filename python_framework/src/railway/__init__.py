"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def require_single_block(blocks: list[bytes]) -> Result[bytes]:
        if len(blocks) != 1:
            return Result.failure(ErrorCode.INVALID_INPUT_KIND, "expected one PEM block")
        return Result.success(blocks[0])
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultAssertions",
]

__version__ = "1.1.0"
