"""
Z3 C API type definitions for Python.

Reference: https://github.com/Z3Prover/z3/blob/master/src/api/z3_api.h
"""

from ctypes import c_void_p
from enum import IntEnum
from typing import Type, TypeVar

E = TypeVar("E", bound=IntEnum)

# Opaque pointer types
Z3_config = c_void_p
Z3_context = c_void_p
Z3_symbol = c_void_p
Z3_ast = c_void_p
Z3_sort = c_void_p
Z3_func_decl = c_void_p
Z3_app = c_void_p
Z3_ast_vector = c_void_p
Z3_goal = c_void_p
Z3_tactic = c_void_p
Z3_apply_result = c_void_p
Z3_fixedpoint = c_void_p
Z3_params = c_void_p
Z3_stats = c_void_p


class Z3_error_code(IntEnum):
    """Z3 error codes."""

    Z3_OK = 0
    Z3_SORT_ERROR = 1
    Z3_IOB = 2
    Z3_INVALID_ARG = 3
    Z3_PARSER_ERROR = 4
    Z3_NO_PARSER = 5
    Z3_INVALID_PATTERN = 6
    Z3_MEMOUT_FAIL = 7
    Z3_FILE_ACCESS_ERROR = 8
    Z3_INTERNAL_FATAL = 9
    Z3_INVALID_USAGE = 10
    Z3_DEC_REF_ERROR = 11
    Z3_EXCEPTION = 12


class Z3_sort_kind(IntEnum):
    """Z3 sort kinds."""

    Z3_UNINTERPRETED_SORT = 0
    Z3_BOOL_SORT = 1
    Z3_INT_SORT = 2
    Z3_REAL_SORT = 3
    Z3_BV_SORT = 4
    Z3_ARRAY_SORT = 5
    Z3_DATATYPE_SORT = 6
    Z3_RELATION_SORT = 7
    Z3_FINITE_DOMAIN_SORT = 8
    Z3_FLOATING_POINT_SORT = 9
    Z3_ROUNDING_MODE_SORT = 10
    Z3_SEQ_SORT = 11
    Z3_RE_SORT = 12
    Z3_CHAR_SORT = 13
    Z3_UNKNOWN_SORT = 1000


class Z3_ast_kind(IntEnum):
    """Z3 AST node kinds."""

    Z3_NUMERAL_AST = 0
    Z3_APP_AST = 1
    Z3_VAR_AST = 2
    Z3_QUANTIFIER_AST = 3
    Z3_SORT_AST = 4
    Z3_FUNC_DECL_AST = 5
    Z3_UNKNOWN_AST = 1000


class Z3_lbool(IntEnum):
    """Three-valued logic results."""

    Z3_L_FALSE = -1
    Z3_L_UNDEF = 0
    Z3_L_TRUE = 1


ARITH_SORTS = frozenset({Z3_sort_kind.Z3_INT_SORT, Z3_sort_kind.Z3_REAL_SORT})


def to_enum(enum_cls: Type[E], value: int, default: E) -> E:
    """Convert a native enum value, tolerating values added by newer builds."""
    try:
        return enum_cls(value)
    except ValueError:
        return default
