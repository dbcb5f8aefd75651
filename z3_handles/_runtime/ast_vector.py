"""
Ordered container of terms backed by a native Z3 AST vector.

The native vector owns one count per element. Elements read out of it
are returned as new handles and stay valid after the container is gone.
"""

from typing import Iterable, Iterator, List, Optional

from .context import Context, get_default_context
from .errors import CrossContextError, IndexOutOfRange, InvalidHandle, Z3HandleError
from .handle import Ast, Handle
from .reference import ReferenceKind
from .._z3.functions import decode

_NEW = object()


class AstVector(Handle):
    """
    Handle to a native AST vector.

    AstVector(ctx) creates an empty vector; the length is always read
    from the native side.
    """

    ref_kind = ReferenceKind.AST_VECTOR

    def __init__(self, ctx: Optional[Context] = None, address=_NEW):
        if ctx is None:
            ctx = get_default_context()
        if address is _NEW:
            with ctx.session():
                super().__init__(ctx, ctx.call("Z3_mk_ast_vector"))
        else:
            super().__init__(ctx, address)

    @classmethod
    def new(cls, ctx: Optional[Context] = None) -> "AstVector":
        """Create an empty vector."""
        return cls(ctx)

    @classmethod
    def from_iterable(
        cls, items: Iterable[Ast], ctx: Optional[Context] = None
    ) -> "AstVector":
        """Create a vector holding the given terms, in order."""
        items = list(items)
        if ctx is None:
            ctx = items[0].ctx if items else get_default_context()
        vector = cls(ctx)
        with ctx.session():
            for item in items:
                vector.push(item)
        return vector

    def __len__(self) -> int:
        return self.ctx.call("Z3_ast_vector_size", self.address)

    def len(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return len(self) == 0

    def _check_index(self, index: int) -> None:
        length = len(self)
        if index < 0 or index >= length:
            raise IndexOutOfRange(index, length)

    def get(self, index: int) -> Ast:
        """Element at index as a new handle."""
        with self.ctx.session():
            self._check_index(index)
            element = self.ctx.call("Z3_ast_vector_get", self.address, index, index=index)
            if not element:
                raise InvalidHandle(f"native vector slot {index} is empty")
            return Ast(self.ctx, element)

    def set(self, index: int, value: Ast) -> None:
        """Replace the element at index."""
        self.check_context(value)
        with self.ctx.session():
            self._check_index(index)
            self.ctx.call(
                "Z3_ast_vector_set", self.address, index, value.address, index=index
            )

    def push(self, value: Ast) -> None:
        """Append an element."""
        self.check_context(value)
        self.ctx.call("Z3_ast_vector_push", self.address, value.address)

    append = push

    def resize(self, size: int) -> None:
        """
        Change the length.

        Shrinking releases the dropped tail. Growing fills the new slots
        with the true constant.
        """
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        with self.ctx.session():
            old = len(self)
            self.ctx.call("Z3_ast_vector_resize", self.address, size)
            if size > old:
                filler = self.ctx.call("Z3_mk_true")
                for i in range(old, size):
                    self.ctx.call("Z3_ast_vector_set", self.address, i, filler, index=i)

    def translate(self, target: Context) -> "AstVector":
        """Copy the container into another context."""
        if target is self.ctx:
            with self.ctx.session():
                copy = AstVector(self.ctx)
                for i in range(len(self)):
                    element = self.ctx.call("Z3_ast_vector_get", self.address, i)
                    self.ctx.call("Z3_ast_vector_push", copy.address, element)
                return copy
        if target.closed:
            raise CrossContextError("target context is closed")
        with Context.joint_session(self.ctx, target):
            try:
                address = self.ctx.call(
                    "Z3_ast_vector_translate", self.address, target.native
                )
            except Z3HandleError as e:
                raise CrossContextError(f"translation failed: {e}") from e
            return AstVector(target, address)

    def to_list(self) -> List[Ast]:
        return list(self)

    def __getitem__(self, index: int) -> Ast:
        return self.get(index)

    def __setitem__(self, index: int, value: Ast) -> None:
        self.set(index, value)

    def __iter__(self) -> Iterator[Ast]:
        for i in range(len(self)):
            yield self.get(i)

    def sexpr(self) -> str:
        return decode(self.ctx.call("Z3_ast_vector_to_string", self.address))

    def __str__(self):
        if not self.alive:
            return repr(self)
        return self.sexpr()
