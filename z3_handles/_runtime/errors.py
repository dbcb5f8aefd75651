"""
Typed errors raised by the handle layer.

Native error codes are read immediately after every call and converted
here; nothing is retried.
"""

from typing import Optional

from .._z3.types import Z3_error_code


class Z3HandleError(Exception):
    """Base class for z3_handles errors."""


class InvalidHandle(Z3HandleError, ValueError):
    """Null/invalid native pointer, disposed handle or closed context."""


class IndexOutOfRange(Z3HandleError, IndexError):
    """Container index beyond the current native length."""

    def __init__(self, index: Optional[int], length: Optional[int] = None, message: str = ""):
        self.index = index
        self.length = length
        if not message:
            message = f"index {index} out of range"
            if length is not None:
                message += f" for length {length}"
        super().__init__(message)


class SortMismatch(Z3HandleError, TypeError):
    """Operand(s) of an incompatible sort or kind."""


class CrossContextError(Z3HandleError):
    """Handles or containers from different contexts were mixed."""


class NativeFailure(Z3HandleError):
    """Native error not covered by the other types."""

    def __init__(self, code: Z3_error_code, message: str = ""):
        self.code = code
        self.message = message or f"Z3 error: {code.name}"
        super().__init__(self.message)


def error_from_code(
    code: Z3_error_code, message: str, index: Optional[int] = None
) -> Z3HandleError:
    """Map a native error code to the typed error it represents."""
    if code == Z3_error_code.Z3_SORT_ERROR:
        return SortMismatch(message)
    if code == Z3_error_code.Z3_IOB:
        return IndexOutOfRange(index, None, message)
    return NativeFailure(code, message)
