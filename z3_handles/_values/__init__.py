"""Value extensions: expressions, algebraic numbers, polynomials, floating point, quantifiers, fixedpoints."""

from . import exprs, algebraic, polynomial, floating_point, quantifier, fixedpoint
from .floating_point import RoundingMode
from .quantifier import Goal, Tactic, ApplyResult, qe_lite, eliminate_quantifiers
from .fixedpoint import Fixedpoint, CheckResult, Params, Statistics
from .polynomial import subresultants

__all__ = [
    "exprs",
    "algebraic",
    "polynomial",
    "floating_point",
    "quantifier",
    "fixedpoint",
    "RoundingMode",
    "Goal",
    "Tactic",
    "ApplyResult",
    "qe_lite",
    "eliminate_quantifiers",
    "Fixedpoint",
    "CheckResult",
    "Params",
    "Statistics",
    "subresultants",
]
