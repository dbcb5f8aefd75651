"""
Expression construction.

Builders for the sorts, constants, numerals and connectives the value
extensions operate on. Every builder returns a new handle.
"""

from fractions import Fraction
from numbers import Rational
from typing import Any, Iterable, Optional, Sequence, Union

from .._runtime.ast_vector import AstVector
from .._runtime.context import Context, get_default_context
from .._runtime.errors import CrossContextError, SortMismatch
from .._runtime.handle import Ast, FuncDecl, Handle, Sort
from .._z3.functions import c_array
from .._z3.types import ARITH_SORTS, Z3_sort_kind

Numeric = Union[int, float, Fraction, str]


def context_of(*handles: Handle) -> Context:
    """Common context of the given handles."""
    if not handles:
        return get_default_context()
    ctx = handles[0].ctx
    for handle in handles[1:]:
        if handle.ctx is not ctx:
            raise CrossContextError("handles belong to different contexts")
    return ctx


def require_sort(expr: Ast, kinds: Iterable[Z3_sort_kind], what: str) -> Z3_sort_kind:
    """Raise SortMismatch unless expr has one of the given sort kinds."""
    if not isinstance(expr, Ast):
        raise SortMismatch(f"{what} expected a term, got {type(expr).__name__}")
    kind = expr.sort_kind
    if kind not in kinds:
        raise SortMismatch(f"{what} does not accept {kind.name} operands")
    return kind


def require_same_sort(what: str, a: Ast, b: Ast, message: str = "") -> None:
    """Raise SortMismatch unless a and b have the identical sort."""
    ctx = a.ctx
    with ctx.session():
        sa = ctx.call("Z3_get_sort", a.address)
        sb = ctx.call("Z3_get_sort", b.address)
        if not ctx.check_bool("Z3_is_eq_ast", sa, sb):
            raise SortMismatch(message or f"{what} operands have different sorts")


def require_arith(what: str, *exprs: Ast) -> None:
    for expr in exprs:
        require_sort(expr, ARITH_SORTS, what)


def require_bool(what: str, *exprs: Ast) -> None:
    for expr in exprs:
        require_sort(expr, (Z3_sort_kind.Z3_BOOL_SORT,), what)


def _ctx(ctx: Optional[Context]) -> Context:
    return ctx if ctx is not None else get_default_context()


def _symbol(ctx: Context, name: str) -> int:
    return ctx.call("Z3_mk_string_symbol", name.encode("utf-8"))


# Sorts


def bool_sort(ctx: Optional[Context] = None) -> Sort:
    return _ctx(ctx).produce(Sort, "Z3_mk_bool_sort")


def int_sort(ctx: Optional[Context] = None) -> Sort:
    return _ctx(ctx).produce(Sort, "Z3_mk_int_sort")


def real_sort(ctx: Optional[Context] = None) -> Sort:
    return _ctx(ctx).produce(Sort, "Z3_mk_real_sort")


def bv_sort(size: int, ctx: Optional[Context] = None) -> Sort:
    """Bit-vector sort of the given width."""
    if size < 1:
        raise ValueError(f"bit-vector width must be positive, got {size}")
    return _ctx(ctx).produce(Sort, "Z3_mk_bv_sort", size)


# Constants and numerals


def const(name: str, sort: Sort) -> Ast:
    """Uninterpreted constant of the given sort."""
    ctx = sort.ctx
    with ctx.session():
        return ctx.produce(Ast, "Z3_mk_const", _symbol(ctx, name), sort.address)


def bool_const(name: str, ctx: Optional[Context] = None) -> Ast:
    return const(name, bool_sort(ctx))


def int_const(name: str, ctx: Optional[Context] = None) -> Ast:
    return const(name, int_sort(ctx))


def real_const(name: str, ctx: Optional[Context] = None) -> Ast:
    return const(name, real_sort(ctx))


def true(ctx: Optional[Context] = None) -> Ast:
    return _ctx(ctx).produce(Ast, "Z3_mk_true")


def false(ctx: Optional[Context] = None) -> Ast:
    return _ctx(ctx).produce(Ast, "Z3_mk_false")


def _numeral_text(value: Numeric) -> str:
    if isinstance(value, bool):
        raise TypeError("bool is not a numeral")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float):
        value = Fraction(value)
    if isinstance(value, Rational):
        if value.denominator == 1:
            return str(value.numerator)
        return f"{value.numerator}/{value.denominator}"
    raise TypeError(f"cannot build a numeral from {type(value).__name__}")


def int_val(value: Union[int, str], ctx: Optional[Context] = None) -> Ast:
    ctx = _ctx(ctx)
    with ctx.session():
        sort = ctx.call("Z3_mk_int_sort")
        return ctx.produce(Ast, "Z3_mk_numeral", _numeral_text(value).encode(), sort)


def real_val(value: Numeric, ctx: Optional[Context] = None) -> Ast:
    """Real numeral from an int, float, Fraction, "p/q" or decimal string."""
    ctx = _ctx(ctx)
    with ctx.session():
        sort = ctx.call("Z3_mk_real_sort")
        return ctx.produce(Ast, "Z3_mk_numeral", _numeral_text(value).encode(), sort)


def coerce(like: Ast, value: Any) -> Ast:
    """Turn a Python value into a term compatible with like."""
    if isinstance(value, Ast):
        return value
    if isinstance(value, bool):
        return true(like.ctx) if value else false(like.ctx)
    if isinstance(value, int) and like.sort_kind == Z3_sort_kind.Z3_INT_SORT:
        return int_val(value, like.ctx)
    if isinstance(value, (int, float, Fraction, str)):
        return real_val(value, like.ctx)
    raise TypeError(f"cannot convert {type(value).__name__} to a term")


# Arithmetic


def _nary(name: str, what: str, args: Sequence[Ast]) -> Ast:
    if not args:
        raise ValueError(f"{what} needs at least one operand")
    ctx = context_of(*args)
    require_arith(what, *args)
    with ctx.session():
        addresses = [a.address for a in args]
        return ctx.produce(Ast, name, len(addresses), c_array(addresses))


def add(*args: Ast) -> Ast:
    return _nary("Z3_mk_add", "add", args)


def sub(*args: Ast) -> Ast:
    return _nary("Z3_mk_sub", "sub", args)


def mul(*args: Ast) -> Ast:
    return _nary("Z3_mk_mul", "mul", args)


def _binary(name: str, a: Ast, b: Ast) -> Ast:
    ctx = context_of(a, b)
    return ctx.produce(Ast, name, a.address, b.address)


def div(a: Ast, b: Ast) -> Ast:
    require_arith("div", a, b)
    return _binary("Z3_mk_div", a, b)


def power(a: Ast, b: Ast) -> Ast:
    require_arith("power", a, b)
    return _binary("Z3_mk_power", a, b)


def neg(a: Ast) -> Ast:
    require_arith("neg", a)
    return a.ctx.produce(Ast, "Z3_mk_unary_minus", a.address)


# Comparisons


def eq(a: Ast, b: Ast) -> Ast:
    for operand in (a, b):
        if not isinstance(operand, Ast):
            raise SortMismatch(f"eq expected a term, got {type(operand).__name__}")
    context_of(a, b)
    require_same_sort("eq", a, b)
    return _binary("Z3_mk_eq", a, b)


def lt(a: Ast, b: Ast) -> Ast:
    require_arith("lt", a, b)
    return _binary("Z3_mk_lt", a, b)


def le(a: Ast, b: Ast) -> Ast:
    require_arith("le", a, b)
    return _binary("Z3_mk_le", a, b)


def gt(a: Ast, b: Ast) -> Ast:
    require_arith("gt", a, b)
    return _binary("Z3_mk_gt", a, b)


def ge(a: Ast, b: Ast) -> Ast:
    require_arith("ge", a, b)
    return _binary("Z3_mk_ge", a, b)


# Propositional connectives


def not_(a: Ast) -> Ast:
    require_bool("not", a)
    return a.ctx.produce(Ast, "Z3_mk_not", a.address)


def and_(*args: Ast) -> Ast:
    if not args:
        raise ValueError("and needs at least one operand")
    ctx = context_of(*args)
    require_bool("and", *args)
    with ctx.session():
        addresses = [a.address for a in args]
        return ctx.produce(Ast, "Z3_mk_and", len(addresses), c_array(addresses))


def or_(*args: Ast) -> Ast:
    if not args:
        raise ValueError("or needs at least one operand")
    ctx = context_of(*args)
    require_bool("or", *args)
    with ctx.session():
        addresses = [a.address for a in args]
        return ctx.produce(Ast, "Z3_mk_or", len(addresses), c_array(addresses))


def implies(a: Ast, b: Ast) -> Ast:
    require_bool("implies", a, b)
    return _binary("Z3_mk_implies", a, b)


# Quantifiers


def is_constant(expr: Ast) -> bool:
    """Check if expr is an application of a nullary, non-numeral symbol."""
    ctx = expr.ctx
    with ctx.session():
        if not expr.is_app() or expr.is_numeral():
            return False
        app = ctx.call("Z3_to_app", expr.address)
        return ctx.call("Z3_get_app_num_args", app) == 0


def _quantifier(name: str, variables: Iterable[Ast], body: Ast) -> Ast:
    variables = list(variables)
    ctx = context_of(body, *variables)
    require_bool("quantifier body", body)
    for var in variables:
        if not is_constant(var):
            raise SortMismatch(f"bound variable {var} is not a constant")
    with ctx.session():
        bound = [v.address for v in variables]
        return ctx.produce(
            Ast, name, 0, len(bound), c_array(bound), 0, None, body.address
        )


def exists(variables: Union[Iterable[Ast], AstVector], body: Ast) -> Ast:
    return _quantifier("Z3_mk_exists_const", variables, body)


def forall(variables: Union[Iterable[Ast], AstVector], body: Ast) -> Ast:
    return _quantifier("Z3_mk_forall_const", variables, body)


# Uninterpreted functions


def func_decl(name: str, domain: Sequence[Sort], range_: Sort) -> FuncDecl:
    """Declare a function symbol."""
    ctx = context_of(range_, *domain)
    with ctx.session():
        sorts = [s.address for s in domain]
        return ctx.produce(
            FuncDecl,
            "Z3_mk_func_decl",
            _symbol(ctx, name),
            len(sorts),
            c_array(sorts),
            range_.address,
        )


def apply(decl: FuncDecl, *args: Ast) -> Ast:
    """Apply a declaration to arguments."""
    ctx = context_of(decl, *args)
    with ctx.session():
        addresses = [a.address for a in args]
        return ctx.produce(
            Ast, "Z3_mk_app", decl.address, len(addresses), c_array(addresses)
        )


def simplify(expr: Ast) -> Ast:
    return expr.simplify()
