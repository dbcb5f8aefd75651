"""Tests for context lifecycle, error mapping and deferred releases."""

import threading

import pytest

from z3_handles import (
    AstVector,
    Context,
    HandleScope,
    IndexOutOfRange,
    InvalidHandle,
    NativeFailure,
    SortMismatch,
    Z3HandleError,
    create_context,
    exprs,
    get_default_context,
)


def test_close_releases_live_handles(ctx) -> None:
    x = exprs.int_const("x", ctx)
    vector = AstVector.from_iterable([x])
    x_address = x.address
    vector_address = vector.address

    ctx.close()

    assert ctx.closed
    assert not x.alive
    assert not vector.alive
    assert ctx.lib.net(x_address) == 0
    assert ctx.lib.net(vector_address, "Z3_ast_vector") == 0
    with pytest.raises(InvalidHandle):
        _ = x.address

    # Releasing after close is a no-op
    x.dispose()
    vector.dispose()
    assert ctx.lib.net(x_address) == 0


def test_close_is_idempotent(recording) -> None:
    with Context(library=recording) as context:
        exprs.int_const("x", context)
    assert context.closed
    context.close()
    assert context.closed


def test_operations_on_closed_context_fail(ctx) -> None:
    ctx.close()

    with pytest.raises(InvalidHandle):
        exprs.int_const("x", ctx)
    with pytest.raises(InvalidHandle):
        AstVector(ctx)


def test_live_reference_count(ctx) -> None:
    base = ctx.live_references()
    x = exprs.int_const("x", ctx)
    y = x.duplicate()

    assert ctx.live_references() == base + 2

    y.dispose()
    assert ctx.live_references() == base + 1


def test_release_inside_session_is_deferred(ctx) -> None:
    x = exprs.int_const("x", ctx)
    address = x.address

    with ctx.session():
        x.dispose()
        assert not x.alive
        assert ctx.lib.net(address) == 1

    assert ctx.lib.net(address) == 0


def test_handle_scope_disposes_all_but_escaped(ctx) -> None:
    with HandleScope(ctx) as scope:
        a = scope.add(exprs.int_const("a", ctx))
        b = scope.add(exprs.int_const("b", ctx))
        kept = scope.escape(scope.add(exprs.add(a, b)))
        with pytest.raises(RuntimeError):
            scope.escape(a)

    assert not a.alive
    assert not b.alive
    assert kept.alive
    assert str(kept) == "(+ a b)"


def test_handle_scope_disposes_on_error(ctx) -> None:
    addresses = []
    with pytest.raises(ZeroDivisionError):
        with HandleScope(ctx) as scope:
            a = scope.add(exprs.int_const("a", ctx))
            addresses.append(a.address)
            1 / 0

    assert not a.alive
    assert ctx.lib.net(addresses[0]) == 0


def test_native_index_error_is_typed(ctx) -> None:
    vector = AstVector(ctx)

    with pytest.raises(IndexOutOfRange) as exc_info:
        ctx.call("Z3_ast_vector_get", vector.address, 3, index=3)
    assert exc_info.value.index == 3
    assert exc_info.value.length is None
    assert "-1" not in str(exc_info.value)


def test_index_error_message_without_length() -> None:
    assert str(IndexOutOfRange(4)) == "index 4 out of range"
    assert str(IndexOutOfRange(4, 2)) == "index 4 out of range for length 2"
    assert str(IndexOutOfRange(None, None, "index out of bounds")) == "index out of bounds"


def test_native_errors_are_raised_not_stored(ctx) -> None:
    x = exprs.int_const("x", ctx)
    mark = ctx.lib.mark()

    with pytest.raises(Z3HandleError):
        exprs.int_val("12abc", ctx)
    assert ctx.lib.since(mark) == []

    # The context stays usable after an error
    assert exprs.simplify(exprs.eq(x, x)).is_true()


def test_eq_rejects_mixed_sorts(ctx) -> None:
    x = exprs.int_const("x", ctx)
    p = exprs.bool_const("p", ctx)
    r = exprs.real_const("r", ctx)
    mark = ctx.lib.mark()

    with pytest.raises(SortMismatch):
        exprs.eq(x, p)
    with pytest.raises(SortMismatch):
        exprs.eq(x, r)
    with pytest.raises(SortMismatch):
        exprs.eq(x, 1)

    assert ctx.lib.since(mark) == []


def test_missing_entry_point(ctx) -> None:
    with pytest.raises(NativeFailure):
        ctx.call("Z3_no_such_function")


def test_context_params(recording) -> None:
    context = Context(library=recording, model=True, proof=False)
    try:
        assert context.params == {"model": True, "proof": False}
        assert exprs.int_val(1, context).is_numeral()
    finally:
        context.close()


def test_default_context_is_per_thread() -> None:
    main = get_default_context()
    assert get_default_context() is main

    seen = []
    worker = threading.Thread(target=lambda: seen.append(get_default_context()))
    worker.start()
    worker.join()

    assert seen and seen[0] is not main
    seen[0].close()


def test_create_context_is_independent() -> None:
    first = create_context()
    second = create_context()
    try:
        assert first is not second
        assert first.native != second.native
    finally:
        first.close()
        second.close()


def test_opposite_translations_do_not_deadlock(ctx, other_ctx) -> None:
    x = exprs.int_const("x", ctx)
    y = exprs.int_const("y", other_ctx)
    barrier = threading.Barrier(2)
    results = []

    def translate_many(term, target):
        barrier.wait()
        for _ in range(200):
            moved = term.translate(target)
            vector = AstVector.from_iterable([term]).translate(target)
            results.append((str(moved), len(vector)))
            moved.dispose()
            vector.dispose()

    workers = [
        threading.Thread(target=translate_many, args=(x, other_ctx), daemon=True),
        threading.Thread(target=translate_many, args=(y, ctx), daemon=True),
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(timeout=30)

    assert not any(worker.is_alive() for worker in workers)
    assert len(results) == 400
    assert {name for name, _ in results} == {"x", "y"}


def test_joint_session_holds_every_context(ctx, other_ctx) -> None:
    acquired = []

    def try_both():
        acquired.append(ctx._state.lock.acquire(blocking=False))
        acquired.append(other_ctx._state.lock.acquire(blocking=False))

    with Context.joint_session(other_ctx, ctx, ctx):
        worker = threading.Thread(target=try_both)
        worker.start()
        worker.join()

    assert acquired == [False, False]
