"""
Real algebraic number arithmetic.

Operands must be algebraic values: rational numerals or irrational
algebraic numbers such as the ones root() returns. Reference:
https://github.com/Z3Prover/z3/blob/master/src/api/z3_algebraic.h
"""

from typing import Optional

from .exprs import context_of, require_arith
from ..config import CONFIG
from .._runtime.ast_vector import AstVector
from .._runtime.errors import SortMismatch
from .._runtime.handle import Ast
from .._z3.functions import decode


def is_value(a: Ast) -> bool:
    """Check if a is a rational numeral or an algebraic number."""
    return a.ctx.check_bool("Z3_algebraic_is_value", a.address)


def _require_values(what: str, *args: Ast) -> None:
    require_arith(what, *args)
    for a in args:
        if not is_value(a):
            raise SortMismatch(f"{what} expects algebraic values, got {a}")


def is_positive(a: Ast) -> bool:
    _require_values("is_positive", a)
    return a.ctx.check_bool("Z3_algebraic_is_pos", a.address)


def is_negative(a: Ast) -> bool:
    _require_values("is_negative", a)
    return a.ctx.check_bool("Z3_algebraic_is_neg", a.address)


def is_zero(a: Ast) -> bool:
    _require_values("is_zero", a)
    return a.ctx.check_bool("Z3_algebraic_is_zero", a.address)


def sign(a: Ast) -> int:
    """-1, 0 or 1."""
    _require_values("sign", a)
    value = a.ctx.call("Z3_algebraic_sign", a.address)
    return (value > 0) - (value < 0)


def _arith(name: str, what: str, a: Ast, b: Ast) -> Ast:
    ctx = context_of(a, b)
    _require_values(what, a, b)
    return ctx.produce(Ast, name, a.address, b.address)


def add(a: Ast, b: Ast) -> Ast:
    return _arith("Z3_algebraic_add", "add", a, b)


def sub(a: Ast, b: Ast) -> Ast:
    return _arith("Z3_algebraic_sub", "sub", a, b)


def mul(a: Ast, b: Ast) -> Ast:
    return _arith("Z3_algebraic_mul", "mul", a, b)


def div(a: Ast, b: Ast) -> Ast:
    ctx = context_of(a, b)
    _require_values("div", a, b)
    if ctx.check_bool("Z3_algebraic_is_zero", b.address):
        raise ZeroDivisionError("algebraic division by zero")
    return ctx.produce(Ast, "Z3_algebraic_div", a.address, b.address)


def root(a: Ast, k: int) -> Ast:
    """k-th root of a. For even k, a must not be negative."""
    if k <= 0:
        raise ValueError(f"root index must be positive, got {k}")
    _require_values("root", a)
    return a.ctx.produce(Ast, "Z3_algebraic_root", a.address, k)


def power(a: Ast, k: int) -> Ast:
    if k < 0:
        raise ValueError(f"exponent must be non-negative, got {k}")
    _require_values("power", a)
    return a.ctx.produce(Ast, "Z3_algebraic_power", a.address, k)


def _compare(name: str, what: str, a: Ast, b: Ast) -> bool:
    ctx = context_of(a, b)
    _require_values(what, a, b)
    return ctx.check_bool(name, a.address, b.address)


def lt(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_lt", "lt", a, b)


def gt(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_gt", "gt", a, b)


def le(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_le", "le", a, b)


def ge(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_ge", "ge", a, b)


def eq(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_eq", "eq", a, b)


def neq(a: Ast, b: Ast) -> bool:
    return _compare("Z3_algebraic_neq", "neq", a, b)


def get_poly(a: Ast) -> AstVector:
    """
    Coefficients of the defining polynomial of a, lowest degree first.

    The polynomial is the one whose get_index()-th root is a.
    """
    _require_values("get_poly", a)
    return a.ctx.produce(AstVector, "Z3_algebraic_get_poly", a.address)


def get_index(a: Ast) -> int:
    """1-based index of a among the real roots of get_poly(a)."""
    _require_values("get_index", a)
    return a.ctx.call("Z3_algebraic_get_i", a.address)


def to_decimal(a: Ast, precision: Optional[int] = None) -> str:
    """Decimal rendering; a trailing "?" marks a truncated expansion."""
    _require_values("to_decimal", a)
    if precision is None:
        precision = CONFIG.decimal_precision
    return decode(a.ctx.call("Z3_get_numeral_decimal_string", a.address, precision))
