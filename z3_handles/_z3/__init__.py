"""Z3 C API declarations."""

from .types import (
    Z3_error_code,
    Z3_sort_kind,
    Z3_ast_kind,
    Z3_lbool,
    ARITH_SORTS,
    to_enum,
)
from .functions import PROTOTYPES, bind_prototypes, c_array, decode

__all__ = [
    "Z3_error_code",
    "Z3_sort_kind",
    "Z3_ast_kind",
    "Z3_lbool",
    "ARITH_SORTS",
    "to_enum",
    "PROTOTYPES",
    "bind_prototypes",
    "c_array",
    "decode",
]
