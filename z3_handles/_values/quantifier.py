"""
Quantifier elimination.

qe_lite() is the light-weight native simplifier; eliminate_quantifiers()
runs the full "qe" tactic over a one-formula goal.
"""

from typing import Iterable, Union

from .exprs import context_of, false, or_, require_bool, true
from .._logging import get_logger
from .._runtime.ast_vector import AstVector
from .._runtime.context import Context
from .._runtime.handle import Ast, Handle
from .._runtime.handle_scope import HandleScope
from .._runtime.reference import ReferenceKind
from .._z3.functions import c_array

logger = get_logger(__name__)


class Goal(Handle):
    """Handle to a native goal: a conjunction of formulas."""

    ref_kind = ReferenceKind.GOAL

    @classmethod
    def new(
        cls,
        ctx: Context,
        models: bool = False,
        unsat_cores: bool = False,
        proofs: bool = False,
    ) -> "Goal":
        return ctx.produce(cls, "Z3_mk_goal", models, unsat_cores, proofs)

    def assert_(self, formula: Ast) -> None:
        self.check_context(formula)
        require_bool("goal assertion", formula)
        self.ctx.call("Z3_goal_assert", self.address, formula.address)

    def __len__(self) -> int:
        return self.ctx.call("Z3_goal_size", self.address)

    def as_expr(self) -> Ast:
        """The goal's formulas as one conjunction."""
        ctx = self.ctx
        with ctx.session():
            size = len(self)
            if size == 0:
                return true(ctx)
            formulas = [ctx.call("Z3_goal_formula", self.address, i) for i in range(size)]
            if size == 1:
                return Ast(ctx, formulas[0])
            return ctx.produce(Ast, "Z3_mk_and", size, c_array(formulas))


class Tactic(Handle):
    """Handle to a native tactic."""

    ref_kind = ReferenceKind.TACTIC

    @classmethod
    def new(cls, ctx: Context, name: str) -> "Tactic":
        return ctx.produce(cls, "Z3_mk_tactic", name.encode("utf-8"))

    def apply(self, goal: Goal) -> "ApplyResult":
        self.check_context(goal)
        return self.ctx.produce(ApplyResult, "Z3_tactic_apply", self.address, goal.address)


class ApplyResult(Handle):
    """Handle to the subgoals a tactic produced."""

    ref_kind = ReferenceKind.APPLY_RESULT

    def __len__(self) -> int:
        return self.ctx.call("Z3_apply_result_get_num_subgoals", self.address)

    def subgoal(self, index: int) -> Goal:
        return self.ctx.produce(
            Goal, "Z3_apply_result_get_subgoal", self.address, index
        )


def _scratch_vector(ctx: Context, variables: Union[AstVector, Iterable[Ast]]) -> AstVector:
    if isinstance(variables, AstVector):
        # Same-context translate builds a fresh vector with the same elements
        return variables.translate(ctx)
    return AstVector.from_iterable(variables, ctx)


def qe_lite(variables: Union[AstVector, Iterable[Ast]], formula: Ast) -> Ast:
    """
    Eliminate the given variables from formula where that is cheap.

    The native call rewrites the variable vector in place, so it runs on a
    copy; the caller's container is left unchanged.
    """
    ctx = formula.ctx
    if isinstance(variables, AstVector):
        context_of(formula, variables)
    else:
        variables = list(variables)
        context_of(formula, *variables)
    require_bool("qe_lite", formula)

    with HandleScope(ctx) as scope:
        scratch = scope.add(_scratch_vector(ctx, variables))
        return ctx.produce(Ast, "Z3_qe_lite", scratch.address, formula.address)


def eliminate_quantifiers(formula: Ast, tactic: str = "qe") -> Ast:
    """
    Quantifier-free equivalent of formula.

    Multiple subgoals are combined as a disjunction; no subgoal at all
    means the formula is unsatisfiable.
    """
    ctx = formula.ctx
    require_bool("eliminate_quantifiers", formula)

    with HandleScope(ctx) as scope:
        goal = scope.add(Goal.new(ctx))
        goal.assert_(formula)
        qe = scope.add(Tactic.new(ctx, tactic))
        result = scope.add(qe.apply(goal))

        count = len(result)
        logger.debug("%s tactic produced %d subgoal(s)", tactic, count)
        if count == 0:
            return false(ctx)

        parts = [scope.add(scope.add(result.subgoal(i)).as_expr()) for i in range(count)]
        if count == 1:
            return scope.escape(parts[0])
        return scope.escape(or_(*parts))
