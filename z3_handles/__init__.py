"""
z3-handles: Reference-counted handles over the Z3 C API.

Usage:
    from z3_handles import Context, AstVector
    from z3_handles import algebraic, exprs

    with Context() as ctx:
        two = exprs.int_val(2, ctx)
        sqrt2 = algebraic.root(two, 2)
        terms = AstVector.from_iterable([two, sqrt2])
"""

from ._runtime import (
    Context,
    create_context,
    get_default_context,
    Handle,
    Ast,
    Sort,
    FuncDecl,
    HandleScope,
    AstVector,
    Z3HandleError,
    InvalidHandle,
    IndexOutOfRange,
    SortMismatch,
    CrossContextError,
    NativeFailure,
)
from ._values import (
    exprs,
    algebraic,
    polynomial,
    floating_point,
    quantifier,
    fixedpoint,
    RoundingMode,
    Fixedpoint,
    CheckResult,
    Params,
    Statistics,
    qe_lite,
    eliminate_quantifiers,
    subresultants,
)
from ._z3 import Z3_error_code, Z3_sort_kind, Z3_ast_kind, Z3_lbool
from ._logging import enable_debug_logging, set_global_log_level
from .config import CONFIG, HandleConfig

__version__ = "0.1.0"

__all__ = [
    "load_library",
    "Context",
    "create_context",
    "get_default_context",
    "Handle",
    "Ast",
    "Sort",
    "FuncDecl",
    "HandleScope",
    "AstVector",
    "Z3HandleError",
    "InvalidHandle",
    "IndexOutOfRange",
    "SortMismatch",
    "CrossContextError",
    "NativeFailure",
    "exprs",
    "algebraic",
    "polynomial",
    "floating_point",
    "quantifier",
    "fixedpoint",
    "RoundingMode",
    "Fixedpoint",
    "CheckResult",
    "Params",
    "Statistics",
    "qe_lite",
    "eliminate_quantifiers",
    "subresultants",
    "Z3_error_code",
    "Z3_sort_kind",
    "Z3_ast_kind",
    "Z3_lbool",
    "enable_debug_logging",
    "set_global_log_level",
    "CONFIG",
    "HandleConfig",
]


def load_library(path=None):
    """
    Load the Z3 shared library.

    Args:
        path: Path to libz3 or a directory holding it; None searches
            Z3_LIBRARY_PATH, the z3-solver distribution and the system.

    Returns:
        The loaded ctypes library with prototypes declared
    """
    from ._loader import load_library as _load

    return _load(path)
