"""Polynomial operations."""

from .exprs import context_of, require_arith
from .._runtime.ast_vector import AstVector
from .._runtime.handle import Ast


def subresultants(p: Ast, q: Ast, x: Ast) -> AstVector:
    """
    Nonzero subresultants of p and q with respect to x.

    Subterms that are not polynomial are treated as variables, so f(a) in
    f(a)*f(a) + 1 counts as a variable.
    """
    ctx = context_of(p, q, x)
    require_arith("subresultants", p, q, x)
    return ctx.produce(AstVector, "Z3_polynomial_subresultants", p.address, q.address, x.address)
