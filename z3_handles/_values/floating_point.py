"""
IEEE 754 floating-point terms.

Reference: https://github.com/Z3Prover/z3/blob/master/src/api/z3_fpa.h
"""

from enum import Enum
from typing import Optional

from .exprs import context_of, require_same_sort, require_sort
from .._runtime.context import Context, get_default_context
from .._runtime.errors import CrossContextError, SortMismatch
from .._runtime.handle import Ast, Sort
from .._z3.types import Z3_sort_kind

FP_SORTS = (Z3_sort_kind.Z3_FLOATING_POINT_SORT,)
RM_SORTS = (Z3_sort_kind.Z3_ROUNDING_MODE_SORT,)


class RoundingMode(Enum):
    """IEEE 754 rounding modes."""

    RNE = "Z3_mk_fpa_rne"  # nearest, ties to even
    RNA = "Z3_mk_fpa_rna"  # nearest, ties away from zero
    RTP = "Z3_mk_fpa_rtp"  # toward positive
    RTN = "Z3_mk_fpa_rtn"  # toward negative
    RTZ = "Z3_mk_fpa_rtz"  # toward zero


def rounding_mode(ctx: Optional[Context], mode: RoundingMode) -> Ast:
    ctx = ctx if ctx is not None else get_default_context()
    return ctx.produce(Ast, RoundingMode(mode).value)


# Sorts


def fp_sort(ctx: Optional[Context], ebits: int, sbits: int) -> Sort:
    """Floating-point sort with ebits exponent and sbits significand bits."""
    if ebits < 2 or sbits < 2:
        raise ValueError(f"invalid floating-point format ({ebits}, {sbits})")
    ctx = ctx if ctx is not None else get_default_context()
    return ctx.produce(Sort, "Z3_mk_fpa_sort", ebits, sbits)


def float16_sort(ctx: Optional[Context] = None) -> Sort:
    return fp_sort(ctx, 5, 11)


def float32_sort(ctx: Optional[Context] = None) -> Sort:
    return fp_sort(ctx, 8, 24)


def float64_sort(ctx: Optional[Context] = None) -> Sort:
    return fp_sort(ctx, 11, 53)


def float128_sort(ctx: Optional[Context] = None) -> Sort:
    return fp_sort(ctx, 15, 113)


def _require_fp_sort(sort: Sort) -> None:
    if sort.kind != Z3_sort_kind.Z3_FLOATING_POINT_SORT:
        raise SortMismatch(f"{sort} is not a floating-point sort")


# Values


def fp_val(ctx: Optional[Context], value: float, sort: Optional[Sort] = None) -> Ast:
    """Floating-point numeral, rounded to sort (Float64 by default)."""
    if sort is None:
        sort = float64_sort(ctx)
    elif ctx is not None and sort.ctx is not ctx:
        raise CrossContextError("sort belongs to a different context")
    _require_fp_sort(sort)
    return sort.ctx.produce(Ast, "Z3_mk_fpa_numeral_double", float(value), sort.address)


def fp_nan(sort: Sort) -> Ast:
    _require_fp_sort(sort)
    return sort.ctx.produce(Ast, "Z3_mk_fpa_nan", sort.address)


def fp_inf(sort: Sort, negative: bool = False) -> Ast:
    _require_fp_sort(sort)
    return sort.ctx.produce(Ast, "Z3_mk_fpa_inf", sort.address, negative)


def fp_zero(sort: Sort, negative: bool = False) -> Ast:
    _require_fp_sort(sort)
    return sort.ctx.produce(Ast, "Z3_mk_fpa_zero", sort.address, negative)


# Operand checks


def _require_fp(what: str, *args: Ast) -> None:
    for a in args:
        require_sort(a, FP_SORTS, what)


def _require_same_format(what: str, a: Ast, b: Ast) -> None:
    require_same_sort(
        what, a, b, f"{what} operands have different floating-point formats"
    )


def _require_rm(what: str, rm: Ast) -> None:
    require_sort(rm, RM_SORTS, f"{what} rounding argument")


def _rounded(name: str, what: str, rm: Ast, a: Ast, b: Ast) -> Ast:
    ctx = context_of(rm, a, b)
    _require_rm(what, rm)
    _require_fp(what, a, b)
    _require_same_format(what, a, b)
    return ctx.produce(Ast, name, rm.address, a.address, b.address)


def _binary(name: str, what: str, a: Ast, b: Ast) -> Ast:
    ctx = context_of(a, b)
    _require_fp(what, a, b)
    _require_same_format(what, a, b)
    return ctx.produce(Ast, name, a.address, b.address)


def _unary(name: str, what: str, a: Ast) -> Ast:
    _require_fp(what, a)
    return a.ctx.produce(Ast, name, a.address)


# Arithmetic


def fp_add(rm: Ast, a: Ast, b: Ast) -> Ast:
    return _rounded("Z3_mk_fpa_add", "fp_add", rm, a, b)


def fp_sub(rm: Ast, a: Ast, b: Ast) -> Ast:
    return _rounded("Z3_mk_fpa_sub", "fp_sub", rm, a, b)


def fp_mul(rm: Ast, a: Ast, b: Ast) -> Ast:
    return _rounded("Z3_mk_fpa_mul", "fp_mul", rm, a, b)


def fp_div(rm: Ast, a: Ast, b: Ast) -> Ast:
    return _rounded("Z3_mk_fpa_div", "fp_div", rm, a, b)


def fp_fma(rm: Ast, a: Ast, b: Ast, c: Ast) -> Ast:
    """a * b + c with a single rounding."""
    ctx = context_of(rm, a, b, c)
    _require_rm("fp_fma", rm)
    _require_fp("fp_fma", a, b, c)
    _require_same_format("fp_fma", a, b)
    _require_same_format("fp_fma", a, c)
    return ctx.produce(Ast, "Z3_mk_fpa_fma", rm.address, a.address, b.address, c.address)


def fp_sqrt(rm: Ast, a: Ast) -> Ast:
    ctx = context_of(rm, a)
    _require_rm("fp_sqrt", rm)
    _require_fp("fp_sqrt", a)
    return ctx.produce(Ast, "Z3_mk_fpa_sqrt", rm.address, a.address)


def fp_round_to_integral(rm: Ast, a: Ast) -> Ast:
    ctx = context_of(rm, a)
    _require_rm("fp_round_to_integral", rm)
    _require_fp("fp_round_to_integral", a)
    return ctx.produce(Ast, "Z3_mk_fpa_round_to_integral", rm.address, a.address)


def fp_abs(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_abs", "fp_abs", a)


def fp_neg(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_neg", "fp_neg", a)


def fp_rem(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_rem", "fp_rem", a, b)


def fp_min(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_min", "fp_min", a, b)


def fp_max(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_max", "fp_max", a, b)


# Predicates


def fp_lt(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_lt", "fp_lt", a, b)


def fp_leq(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_leq", "fp_leq", a, b)


def fp_gt(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_gt", "fp_gt", a, b)


def fp_geq(a: Ast, b: Ast) -> Ast:
    return _binary("Z3_mk_fpa_geq", "fp_geq", a, b)


def fp_eq(a: Ast, b: Ast) -> Ast:
    """IEEE equality: NaN is unequal to itself, -0 equals +0."""
    return _binary("Z3_mk_fpa_eq", "fp_eq", a, b)


def fp_is_normal(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_normal", "fp_is_normal", a)


def fp_is_subnormal(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_subnormal", "fp_is_subnormal", a)


def fp_is_zero(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_zero", "fp_is_zero", a)


def fp_is_infinite(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_infinite", "fp_is_infinite", a)


def fp_is_nan(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_nan", "fp_is_nan", a)


def fp_is_negative(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_negative", "fp_is_negative", a)


def fp_is_positive(a: Ast) -> Ast:
    return _unary("Z3_mk_fpa_is_positive", "fp_is_positive", a)


# Conversions


def fp_to_fp(rm: Ast, value: Ast, sort: Sort) -> Ast:
    """Round a floating-point term into another format."""
    ctx = context_of(rm, value, sort)
    _require_rm("fp_to_fp", rm)
    _require_fp("fp_to_fp", value)
    _require_fp_sort(sort)
    return ctx.produce(Ast, "Z3_mk_fpa_to_fp_float", rm.address, value.address, sort.address)


def fp_to_real(value: Ast) -> Ast:
    """Exact real value; unspecified for NaN and infinities."""
    return _unary("Z3_mk_fpa_to_real", "fp_to_real", value)


def real_to_fp(rm: Ast, value: Ast, sort: Sort) -> Ast:
    """Round a real term into a floating-point format."""
    ctx = context_of(rm, value, sort)
    _require_rm("real_to_fp", rm)
    require_sort(value, (Z3_sort_kind.Z3_REAL_SORT,), "real_to_fp")
    _require_fp_sort(sort)
    return ctx.produce(Ast, "Z3_mk_fpa_to_fp_real", rm.address, value.address, sort.address)
