"""
Owned handles to native Z3 objects.

Each handle holds exactly one native reference count for as long as it is
alive. The count is released by dispose(), by garbage collection, or by
closing the owning context, whichever comes first.
"""

import weakref
from typing import Any, Optional

from .context import Context
from .disposable import Disposable
from .errors import CrossContextError, InvalidHandle, Z3HandleError
from .reference import Reference, ReferenceKind
from .._z3.functions import decode
from .._z3.types import Z3_ast_kind, Z3_lbool, Z3_sort_kind, to_enum


class Handle(Disposable):
    """
    Base class for owned native handles.

    Subclasses pick the native object kind; the constructor takes a
    context and a raw pointer produced by that context and adds one
    reference count to it.
    """

    ref_kind = ReferenceKind.AST

    def __init__(self, ctx: Context, address: Optional[int]):
        if ctx is None:
            raise InvalidHandle("handle requires a context")
        self.ctx = ctx
        self._ref = Reference(ctx, address, self.ref_kind)
        self._finalizer = weakref.finalize(self, self._ref.release)

    @property
    def address(self) -> int:
        """Native pointer. Raises InvalidHandle once disposed."""
        if self.ctx.closed:
            raise InvalidHandle("context is closed")
        return self._ref.address

    @property
    def alive(self) -> bool:
        """Check if the handle still owns its native object."""
        return self._ref.alive and not self.ctx.closed

    def dispose(self) -> None:
        """Release the native reference. Safe to call repeatedly."""
        self._finalizer()

    def duplicate(self):
        """Create an independent handle to the same native object."""
        with self.ctx.session():
            return type(self)(self.ctx, self.address)

    def __copy__(self):
        return self.duplicate()

    def __deepcopy__(self, memo):
        return self.duplicate()

    def check_context(self, other: "Handle") -> None:
        """Raise CrossContextError unless other belongs to this handle's context."""
        if other.ctx is not self.ctx:
            raise CrossContextError(
                f"{type(other).__name__} belongs to a different context"
            )

    def _repr_state(self) -> str:
        if not self.alive:
            return "disposed"
        return f"{self._ref.address:#x}"

    def __repr__(self):
        return f"<{type(self).__name__} {self._repr_state()}>"


class Ast(Handle):
    """Handle to a term, formula, sort or declaration."""

    ref_kind = ReferenceKind.AST

    @property
    def sort(self) -> "Sort":
        return self.ctx.produce(Sort, "Z3_get_sort", self.address)

    @property
    def sort_kind(self) -> Z3_sort_kind:
        with self.ctx.session():
            sort = self.ctx.call("Z3_get_sort", self.address)
            kind = self.ctx.call("Z3_get_sort_kind", sort)
        return to_enum(Z3_sort_kind, kind, Z3_sort_kind.Z3_UNKNOWN_SORT)

    @property
    def ast_kind(self) -> Z3_ast_kind:
        kind = self.ctx.call("Z3_get_ast_kind", self.address)
        return to_enum(Z3_ast_kind, kind, Z3_ast_kind.Z3_UNKNOWN_AST)

    @property
    def ast_id(self) -> int:
        return self.ctx.call("Z3_get_ast_id", self.address)

    def is_app(self) -> bool:
        return self.ctx.check_bool("Z3_is_app", self.address)

    def is_numeral(self) -> bool:
        return self.ctx.check_bool("Z3_is_numeral_ast", self.address)

    def is_true(self) -> bool:
        return self._bool_value() == Z3_lbool.Z3_L_TRUE

    def is_false(self) -> bool:
        return self._bool_value() == Z3_lbool.Z3_L_FALSE

    def _bool_value(self) -> Z3_lbool:
        value = self.ctx.call("Z3_get_bool_value", self.address)
        return to_enum(Z3_lbool, value, Z3_lbool.Z3_L_UNDEF)

    def numeral_string(self) -> str:
        """Exact numeral text, e.g. "3/2"."""
        return decode(self.ctx.call("Z3_get_numeral_string", self.address))

    def simplify(self) -> "Ast":
        return self.ctx.produce(Ast, "Z3_simplify", self.address)

    def translate(self, target: Context) -> "Ast":
        """
        Copy this term into another context.

        Translating into the owning context yields a duplicate.
        """
        if target is self.ctx:
            return self.duplicate()
        if target.closed:
            raise CrossContextError("target context is closed")
        with Context.joint_session(self.ctx, target):
            try:
                address = self.ctx.call("Z3_translate", self.address, target.native)
            except Z3HandleError as e:
                raise CrossContextError(f"translation failed: {e}") from e
            return type(self)(target, address)

    def sexpr(self) -> str:
        return decode(self.ctx.call("Z3_ast_to_string", self.address))

    def __str__(self):
        if not self.alive:
            return repr(self)
        return self.sexpr()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ast):
            return NotImplemented
        if other.ctx is not self.ctx or not (self.alive and other.alive):
            return False
        return self.ctx.check_bool("Z3_is_eq_ast", self.address, other.address)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return self.ctx.call("Z3_get_ast_hash", self.address)

    # Arithmetic operators build new terms

    def __add__(self, other):
        from .._values import exprs

        return exprs.add(self, exprs.coerce(self, other))

    def __radd__(self, other):
        from .._values import exprs

        return exprs.add(exprs.coerce(self, other), self)

    def __sub__(self, other):
        from .._values import exprs

        return exprs.sub(self, exprs.coerce(self, other))

    def __rsub__(self, other):
        from .._values import exprs

        return exprs.sub(exprs.coerce(self, other), self)

    def __mul__(self, other):
        from .._values import exprs

        return exprs.mul(self, exprs.coerce(self, other))

    def __rmul__(self, other):
        from .._values import exprs

        return exprs.mul(exprs.coerce(self, other), self)

    def __truediv__(self, other):
        from .._values import exprs

        return exprs.div(self, exprs.coerce(self, other))

    def __rtruediv__(self, other):
        from .._values import exprs

        return exprs.div(exprs.coerce(self, other), self)

    def __pow__(self, other):
        from .._values import exprs

        return exprs.power(self, exprs.coerce(self, other))

    def __neg__(self):
        from .._values import exprs

        return exprs.neg(self)


class Sort(Ast):
    """Handle to a sort."""

    @property
    def kind(self) -> Z3_sort_kind:
        kind = self.ctx.call("Z3_get_sort_kind", self.address)
        return to_enum(Z3_sort_kind, kind, Z3_sort_kind.Z3_UNKNOWN_SORT)

    @property
    def name(self) -> str:
        with self.ctx.session():
            symbol = self.ctx.call("Z3_get_sort_name", self.address)
            return decode(self.ctx.call("Z3_get_symbol_string", symbol))

    @property
    def fp_ebits(self) -> int:
        """Exponent bits of a floating-point sort."""
        return self.ctx.call("Z3_fpa_get_ebits", self.address)

    @property
    def fp_sbits(self) -> int:
        """Significand bits of a floating-point sort, hidden bit included."""
        return self.ctx.call("Z3_fpa_get_sbits", self.address)


class FuncDecl(Ast):
    """Handle to a function declaration."""

    @property
    def name(self) -> str:
        with self.ctx.session():
            symbol = self.ctx.call("Z3_get_decl_name", self.address)
            return decode(self.ctx.call("Z3_get_symbol_string", symbol))

    def __call__(self, *args: Ast) -> Ast:
        from .._values import exprs

        return exprs.apply(self, *args)
