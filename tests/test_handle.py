"""Tests for handle ownership, identity and expression behaviour."""

import copy
import gc

import pytest

from z3_handles import (
    Ast,
    CrossContextError,
    InvalidHandle,
    SortMismatch,
    Z3_ast_kind,
    Z3_sort_kind,
    exprs,
)


def test_duplicate_then_dispose_leaves_count_unchanged(ctx) -> None:
    x = exprs.int_const("x", ctx)
    address = x.address
    before = ctx.lib.net(address)

    dup = x.duplicate()
    assert dup.address == address
    assert ctx.lib.net(address) == before + 1

    dup.dispose()
    assert ctx.lib.net(address) == before


def test_dispose_is_idempotent(ctx) -> None:
    x = exprs.int_const("x", ctx)
    address = x.address

    x.dispose()
    x.dispose()

    assert not x.alive
    assert ctx.lib.net(address) == 0
    with pytest.raises(InvalidHandle):
        _ = x.address


def test_garbage_collection_releases_once(ctx) -> None:
    x = exprs.int_const("x", ctx)
    address = x.address
    dup = x.duplicate()
    assert ctx.lib.net(address) == 2

    del dup
    gc.collect()
    assert ctx.lib.net(address) == 1


def test_copy_aliases_native_object(ctx) -> None:
    x = exprs.real_const("x", ctx)

    shallow = copy.copy(x)
    deep = copy.deepcopy(x)

    assert shallow is not x and deep is not x
    assert shallow.address == x.address == deep.address
    assert ctx.lib.net(x.address) == 3


def test_null_pointer_is_rejected_without_traffic(ctx) -> None:
    mark = ctx.lib.mark()

    with pytest.raises(InvalidHandle):
        Ast(ctx, None)
    with pytest.raises(InvalidHandle):
        Ast(ctx, 0)

    assert ctx.lib.since(mark) == []


def test_handle_requires_context() -> None:
    with pytest.raises(InvalidHandle):
        Ast(None, 1)


def test_structural_equality_and_hash(ctx) -> None:
    x1 = exprs.int_const("x", ctx)
    x2 = exprs.int_const("x", ctx)
    y = exprs.int_const("y", ctx)

    assert x1 == x2
    assert x1 != y
    assert hash(x1) == hash(x2)
    assert {x1: "x"}[x2] == "x"
    assert (x1 == "x") is False


def test_sort_and_kinds(ctx) -> None:
    x = exprs.int_const("x", ctx)
    p = exprs.bool_const("p", ctx)

    assert x.sort_kind == Z3_sort_kind.Z3_INT_SORT
    assert p.sort_kind == Z3_sort_kind.Z3_BOOL_SORT
    assert x.sort.kind == Z3_sort_kind.Z3_INT_SORT
    assert x.sort.name == "Int"
    assert x.ast_kind == Z3_ast_kind.Z3_APP_AST
    assert x.is_app()
    assert not x.is_numeral()
    assert exprs.int_val(7, ctx).is_numeral()


def test_string_rendering(ctx) -> None:
    x = exprs.int_const("x", ctx)

    assert str(exprs.int_val(5, ctx)) == "5"
    assert str(exprs.add(x, exprs.int_val(1, ctx))) == "(+ x 1)"

    x.dispose()
    assert "disposed" in str(x)


def test_operator_overloads_build_new_terms(ctx) -> None:
    x = exprs.int_const("x", ctx)
    r = exprs.real_const("r", ctx)

    assert str(x + 1) == "(+ x 1)"
    assert str(2 * x) == "(* 2 x)"
    assert str(x - 3) == "(- x 3)"
    assert str(-x) == "(- x)"
    assert (r / 2).sort_kind == Z3_sort_kind.Z3_REAL_SORT
    assert ((x + 1) - 1).simplify() == x


def test_simplify_and_truth_values(ctx) -> None:
    x = exprs.int_const("x", ctx)

    assert exprs.true(ctx).is_true()
    assert exprs.false(ctx).is_false()
    assert exprs.simplify(exprs.eq(x, x)).is_true()
    assert exprs.simplify(exprs.lt(x, x)).is_false()
    assert not exprs.eq(x, x).is_true()
    assert exprs.simplify(exprs.add(exprs.int_val(1, ctx), exprs.int_val(2, ctx))) == exprs.int_val(3, ctx)


def test_function_application(ctx) -> None:
    int_sort = exprs.int_sort(ctx)
    f = exprs.func_decl("f", [int_sort], int_sort)
    x = exprs.int_const("x", ctx)

    assert f.name == "f"
    assert str(f(x)) == "(f x)"
    assert f(x) == exprs.apply(f, x)


def test_translate_into_other_context(ctx, other_ctx) -> None:
    x = exprs.int_const("x", ctx)
    term = x + 1

    moved = term.translate(other_ctx)

    assert moved.ctx is other_ctx
    assert str(moved) == str(term)
    assert moved == exprs.int_const("x", other_ctx) + 1


def test_translate_same_context_is_duplicate(ctx) -> None:
    x = exprs.int_const("x", ctx)

    same = x.translate(ctx)

    assert same is not x
    assert same == x
    assert ctx.lib.net(x.address) == 2


def test_translate_into_closed_context_fails(ctx, other_ctx) -> None:
    x = exprs.int_const("x", ctx)
    other_ctx.close()

    with pytest.raises(CrossContextError):
        x.translate(other_ctx)


def test_mixing_contexts_is_rejected(ctx, other_ctx) -> None:
    x = exprs.int_const("x", ctx)
    y = exprs.int_const("y", other_ctx)
    mark = ctx.lib.mark()

    with pytest.raises(CrossContextError):
        exprs.add(x, y)
    with pytest.raises(CrossContextError):
        exprs.eq(x, y)

    assert ctx.lib.since(mark) == []
    assert (x == y) is False


def test_quantifier_requires_constant_bound_variables(ctx) -> None:
    x = exprs.int_const("x", ctx)
    body = exprs.gt(x, exprs.int_val(0, ctx))

    assert exprs.exists([x], body).ast_kind == Z3_ast_kind.Z3_QUANTIFIER_AST
    assert exprs.forall([x], body).ast_kind == Z3_ast_kind.Z3_QUANTIFIER_AST

    with pytest.raises(SortMismatch):
        exprs.exists([x + 1], body)
    with pytest.raises(SortMismatch):
        exprs.forall([x], x)
