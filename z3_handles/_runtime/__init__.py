"""Runtime components: contexts, references and handles."""

from .context import Context, create_context, get_default_context
from .handle import Handle, Ast, Sort, FuncDecl
from .handle_scope import HandleScope
from .ast_vector import AstVector
from .ref_tracker import RefTracker
from .reference import Reference, ReferenceKind
from .disposable import Disposable
from .errors import (
    Z3HandleError,
    InvalidHandle,
    IndexOutOfRange,
    SortMismatch,
    CrossContextError,
    NativeFailure,
    error_from_code,
)

__all__ = [
    "Context",
    "create_context",
    "get_default_context",
    "Handle",
    "Ast",
    "Sort",
    "FuncDecl",
    "HandleScope",
    "AstVector",
    "RefTracker",
    "Reference",
    "ReferenceKind",
    "Disposable",
    "Z3HandleError",
    "InvalidHandle",
    "IndexOutOfRange",
    "SortMismatch",
    "CrossContextError",
    "NativeFailure",
    "error_from_code",
]
