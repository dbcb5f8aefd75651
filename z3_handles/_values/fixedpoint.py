"""
Fixedpoint (Horn clause) engine.

Relations are function declarations with Bool range; rules are Bool
formulas over applications of registered relations.
"""

import os
from ctypes import c_uint
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

from .exprs import require_bool
from .._runtime.ast_vector import AstVector
from .._runtime.context import Context, get_default_context
from .._runtime.handle import Ast, FuncDecl, Handle
from .._runtime.reference import ReferenceKind
from .._z3.functions import c_array, decode
from .._z3.types import Z3_lbool, to_enum

_NEW = object()


class CheckResult(Enum):
    """Outcome of a fixedpoint query."""

    SAT = Z3_lbool.Z3_L_TRUE
    UNSAT = Z3_lbool.Z3_L_FALSE
    UNKNOWN = Z3_lbool.Z3_L_UNDEF

    @classmethod
    def from_lbool(cls, value: int) -> "CheckResult":
        return cls(to_enum(Z3_lbool, value, Z3_lbool.Z3_L_UNDEF))


class Params(Handle):
    """Native parameter set, built from keyword arguments."""

    ref_kind = ReferenceKind.PARAMS

    def __init__(self, ctx: Optional[Context] = None, address=_NEW, **params: Any):
        if ctx is None:
            ctx = get_default_context()
        if address is not _NEW:
            super().__init__(ctx, address)
            return
        with ctx.session():
            super().__init__(ctx, ctx.call("Z3_mk_params"))
            for key, value in params.items():
                self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Set one parameter; the native setter follows the Python type."""
        ctx = self.ctx
        with ctx.session():
            symbol = ctx.call("Z3_mk_string_symbol", key.encode("utf-8"))
            if isinstance(value, bool):
                ctx.call("Z3_params_set_bool", self.address, symbol, value)
            elif isinstance(value, int):
                if value < 0:
                    raise ValueError(f"parameter {key} must be non-negative, got {value}")
                ctx.call("Z3_params_set_uint", self.address, symbol, value)
            elif isinstance(value, float):
                ctx.call("Z3_params_set_double", self.address, symbol, value)
            elif isinstance(value, str):
                text = ctx.call("Z3_mk_string_symbol", value.encode("utf-8"))
                ctx.call("Z3_params_set_symbol", self.address, symbol, text)
            else:
                raise TypeError(f"unsupported value for parameter {key}: {value!r}")

    def __str__(self):
        if not self.alive:
            return repr(self)
        return decode(self.ctx.call("Z3_params_to_string", self.address))


class Statistics(Handle):
    """Snapshot of native solver statistics."""

    ref_kind = ReferenceKind.STATS

    def __len__(self) -> int:
        return self.ctx.call("Z3_stats_size", self.address)

    def to_dict(self) -> Dict[str, Union[int, float]]:
        result: Dict[str, Union[int, float]] = {}
        ctx = self.ctx
        with ctx.session():
            for i in range(len(self)):
                key = decode(ctx.call("Z3_stats_get_key", self.address, i))
                if ctx.check_bool("Z3_stats_is_uint", self.address, i):
                    result[key] = ctx.call("Z3_stats_get_uint_value", self.address, i)
                else:
                    result[key] = ctx.call("Z3_stats_get_double_value", self.address, i)
        return result

    def __str__(self):
        if not self.alive:
            return repr(self)
        return decode(self.ctx.call("Z3_stats_to_string", self.address))


class Fixedpoint(Handle):
    """Handle to a native fixedpoint context."""

    ref_kind = ReferenceKind.FIXEDPOINT

    def __init__(self, ctx: Optional[Context] = None, address=_NEW):
        if ctx is None:
            ctx = get_default_context()
        if address is _NEW:
            with ctx.session():
                super().__init__(ctx, ctx.call("Z3_mk_fixedpoint"))
        else:
            super().__init__(ctx, address)

    def _symbol(self, name: str) -> int:
        return self.ctx.call("Z3_mk_string_symbol", name.encode("utf-8"))

    def register_relation(self, decl: FuncDecl) -> None:
        self.check_context(decl)
        self.ctx.call("Z3_fixedpoint_register_relation", self.address, decl.address)

    def add_rule(self, rule: Ast, name: Optional[str] = None) -> None:
        """Add a Horn rule, or a fact when rule is a relation application."""
        self.check_context(rule)
        require_bool("add_rule", rule)
        with self.ctx.session():
            self.ctx.call(
                "Z3_fixedpoint_add_rule", self.address, rule.address, self._symbol(name or "")
            )

    def update_rule(self, rule: Ast, name: str) -> None:
        """Replace the rule previously added under name."""
        self.check_context(rule)
        require_bool("update_rule", rule)
        with self.ctx.session():
            self.ctx.call(
                "Z3_fixedpoint_update_rule", self.address, rule.address, self._symbol(name)
            )

    def add_fact(self, decl: FuncDecl, *args: int) -> None:
        """
        Add a ground tuple to a relation.

        Arguments are the unsigned values of the relation's columns, so the
        relation must range over bit-vector, Bool or finite-domain sorts.
        """
        self.check_context(decl)
        if any(isinstance(a, bool) or not isinstance(a, int) or a < 0 for a in args):
            raise TypeError("fact arguments must be non-negative integers")
        values = (c_uint * len(args))(*args)
        self.ctx.call(
            "Z3_fixedpoint_add_fact", self.address, decl.address, len(args), values
        )

    def assert_(self, axiom: Ast) -> None:
        """Add a background axiom (no relations allowed)."""
        self.check_context(axiom)
        require_bool("assert", axiom)
        self.ctx.call("Z3_fixedpoint_assert", self.address, axiom.address)

    def query(self, expr: Ast) -> CheckResult:
        """SAT when expr is derivable from the rules."""
        self.check_context(expr)
        require_bool("query", expr)
        value = self.ctx.call("Z3_fixedpoint_query", self.address, expr.address)
        return CheckResult.from_lbool(value)

    def query_relations(self, decls: Iterable[FuncDecl]) -> CheckResult:
        """SAT when any of the relations is non-empty."""
        decls = list(decls)
        for decl in decls:
            self.check_context(decl)
        with self.ctx.session():
            addresses = [d.address for d in decls]
            value = self.ctx.call(
                "Z3_fixedpoint_query_relations",
                self.address,
                len(addresses),
                c_array(addresses),
            )
        return CheckResult.from_lbool(value)

    def get_answer(self) -> Optional[Ast]:
        """Answer of the last query, or None when the engine kept none."""
        with self.ctx.session():
            answer = self.ctx.call("Z3_fixedpoint_get_answer", self.address)
            if not answer:
                return None
            return Ast(self.ctx, answer)

    def get_reason_unknown(self) -> str:
        return decode(self.ctx.call("Z3_fixedpoint_get_reason_unknown", self.address))

    def get_num_levels(self, decl: FuncDecl) -> int:
        self.check_context(decl)
        return self.ctx.call("Z3_fixedpoint_get_num_levels", self.address, decl.address)

    def get_cover_delta(self, level: int, decl: FuncDecl) -> Ast:
        self.check_context(decl)
        return self.ctx.produce(
            Ast, "Z3_fixedpoint_get_cover_delta", self.address, level, decl.address
        )

    def add_cover(self, level: int, decl: FuncDecl, property: Ast) -> None:
        self.check_context(decl)
        self.check_context(property)
        self.ctx.call(
            "Z3_fixedpoint_add_cover", self.address, level, decl.address, property.address
        )

    def get_rules(self) -> AstVector:
        return self.ctx.produce(AstVector, "Z3_fixedpoint_get_rules", self.address)

    def get_assertions(self) -> AstVector:
        return self.ctx.produce(AstVector, "Z3_fixedpoint_get_assertions", self.address)

    def from_string(self, text: str) -> AstVector:
        """Parse rules and declarations in SMT-LIB2 syntax; returns the queries."""
        return self.ctx.produce(
            AstVector, "Z3_fixedpoint_from_string", self.address, text.encode("utf-8")
        )

    def from_file(self, path: Union[str, "os.PathLike[str]"]) -> AstVector:
        """Parse rules and declarations from an SMT-LIB2 file; returns the queries."""
        return self.ctx.produce(
            AstVector, "Z3_fixedpoint_from_file", self.address, os.fsencode(path)
        )

    def get_statistics(self) -> Statistics:
        return self.ctx.produce(Statistics, "Z3_fixedpoint_get_statistics", self.address)

    def set_params(self, params: Optional[Params] = None, **values: Any) -> None:
        """Configure the engine from a Params set or keyword arguments."""
        with self.ctx.session():
            if params is None:
                params = Params(self.ctx, **values)
                try:
                    self.ctx.call("Z3_fixedpoint_set_params", self.address, params.address)
                finally:
                    params.dispose()
                return
            self.check_context(params)
            self.ctx.call("Z3_fixedpoint_set_params", self.address, params.address)

    def help(self) -> str:
        return decode(self.ctx.call("Z3_fixedpoint_get_help", self.address))

    def sexpr(self) -> str:
        return decode(self.ctx.call("Z3_fixedpoint_to_string", self.address, 0, None))

    def __str__(self):
        if not self.alive:
            return repr(self)
        return self.sexpr()
