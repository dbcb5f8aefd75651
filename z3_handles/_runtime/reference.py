"""
Counted references to native Z3 objects.

A Reference owns exactly one native reference count: the increment happens
in the constructor and the decrement happens the first time release() is
called, no matter how many times it is called afterwards.
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING

from .errors import InvalidHandle
from .ref_tracker import RefTracker

if TYPE_CHECKING:
    from .context import Context


class ReferenceKind(Enum):
    """Native object kinds and their reference-count entry points."""

    AST = ("Z3_inc_ref", "Z3_dec_ref")
    AST_VECTOR = ("Z3_ast_vector_inc_ref", "Z3_ast_vector_dec_ref")
    GOAL = ("Z3_goal_inc_ref", "Z3_goal_dec_ref")
    TACTIC = ("Z3_tactic_inc_ref", "Z3_tactic_dec_ref")
    APPLY_RESULT = ("Z3_apply_result_inc_ref", "Z3_apply_result_dec_ref")
    FIXEDPOINT = ("Z3_fixedpoint_inc_ref", "Z3_fixedpoint_dec_ref")
    PARAMS = ("Z3_params_inc_ref", "Z3_params_dec_ref")
    STATS = ("Z3_stats_inc_ref", "Z3_stats_dec_ref")

    def __init__(self, inc: str, dec: str):
        self.inc = inc
        self.dec = dec


class Reference(RefTracker):
    """
    One native reference count on one native object.

    The reference links itself into its context's live list so the context
    can release whatever is still outstanding before it is deleted.
    """

    def __init__(self, ctx: "Context", address: Optional[int], kind: ReferenceKind):
        super().__init__()
        if not address:
            raise InvalidHandle(f"cannot wrap a null {kind.name.lower()} pointer")

        self.ctx: Optional["Context"] = ctx
        self.kind = kind
        self._address: Optional[int] = address

        with ctx.session():
            ctx.call(kind.inc, address)
            self.link(ctx.reflist)

    @property
    def alive(self) -> bool:
        """Check if the reference still holds its count."""
        return self._address is not None

    @property
    def address(self) -> int:
        """Native pointer value. Raises InvalidHandle once released."""
        address = self._address
        if address is None:
            raise InvalidHandle(f"{self.kind.name.lower()} reference was released")
        return address

    def release(self) -> None:
        """Decrement the native count. Only the first call has an effect."""
        ctx = self.ctx
        if ctx is None:
            return
        ctx.release_reference(self)

    def finalize(self) -> None:
        """Release when the owning context is being torn down."""
        self.release()

    def dispose(self) -> None:
        """Clean up this reference."""
        self.release()

    def detach(self) -> Optional[int]:
        """
        Drop the address and unlink without touching the native count.

        Only the context calls this, under its lock, right before it
        issues (or queues) the matching decrement.
        """
        address = self._address
        self._address = None
        self.unlink()
        return address

    def __repr__(self):
        state = f"{self._address:#x}" if self._address else "released"
        return f"<Reference {self.kind.name} {state}>"
