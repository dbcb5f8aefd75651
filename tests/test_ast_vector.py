"""Tests for the native-backed term container."""

import pytest

from z3_handles import (
    AstVector,
    CrossContextError,
    IndexOutOfRange,
    exprs,
)


@pytest.fixture
def terms(ctx):
    return [exprs.int_const(name, ctx) for name in ("h0", "h1", "h2")]


def test_push_resize_scenario(ctx, terms) -> None:
    h0, h1, h2 = terms
    vector = AstVector(ctx)

    for h in terms:
        vector.push(h)

    assert len(vector) == 3
    assert vector.get(1) == h1

    vector.resize(1)

    assert len(vector) == 1
    assert vector.get(0) == h0
    with pytest.raises(IndexOutOfRange):
        vector.get(1)


def test_get_on_empty_container(ctx) -> None:
    vector = AstVector(ctx)

    assert vector.is_empty()
    with pytest.raises(IndexOutOfRange) as exc_info:
        vector.get(0)
    assert exc_info.value.index == 0
    assert exc_info.value.length == 0


def test_negative_index_is_out_of_range(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)

    with pytest.raises(IndexOutOfRange):
        vector[-1]
    with pytest.raises(IndexOutOfRange):
        vector[-1] = terms[0]


def test_push_grows_by_one(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms[:2])
    extra = exprs.int_val(42, ctx)

    before = len(vector)
    vector.append(extra)

    assert len(vector) == before + 1
    assert vector.get(len(vector) - 1) == extra


def test_set_then_get_returns_equivalent(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)
    replacement = exprs.int_val(7, ctx)

    vector.set(1, replacement)
    assert vector.get(1) == replacement

    vector[2] = terms[0]
    assert vector[2] == terms[0]

    with pytest.raises(IndexOutOfRange):
        vector.set(3, replacement)


def test_set_releases_nothing_on_the_callers_handle(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)
    address = terms[1].address

    vector.set(1, exprs.int_val(0, ctx))

    assert terms[1].alive
    assert ctx.lib.net(address) == 1


def test_resize_growth_fills_with_true(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms[:1])

    vector.resize(3)

    assert len(vector) == 3
    assert vector.get(0) == terms[0]
    assert vector.get(1).is_true()
    assert vector.get(2).is_true()

    with pytest.raises(ValueError):
        vector.resize(-1)


def test_elements_outlive_container(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)
    element = vector.get(2)

    vector.dispose()

    assert element.alive
    assert element == terms[2]
    assert str(element) == "h2"


def test_length_is_not_cached(ctx, terms) -> None:
    vector = AstVector(ctx)
    alias = vector.duplicate()

    alias.push(terms[0])

    assert len(vector) == 1
    assert alias.address == vector.address


def test_iteration_and_to_list(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)

    assert [str(t) for t in vector] == ["h0", "h1", "h2"]
    # iteration restarts from the beginning
    assert [str(t) for t in vector] == ["h0", "h1", "h2"]
    assert vector.to_list() == terms


def test_translate_same_context_is_equivalent(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)

    copy = vector.translate(ctx)

    assert copy.address != vector.address
    assert len(copy) == len(vector)
    for i in range(len(vector)):
        assert copy.get(i) == vector.get(i)

    copy.push(exprs.int_val(1, ctx))
    assert len(vector) == 3


def test_translate_other_context(ctx, other_ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)

    moved = vector.translate(other_ctx)

    assert moved.ctx is other_ctx
    assert [str(t) for t in moved] == ["h0", "h1", "h2"]
    assert moved.get(0) == exprs.int_const("h0", other_ctx)


def test_translate_closed_target_fails(ctx, other_ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)
    other_ctx.close()

    with pytest.raises(CrossContextError):
        vector.translate(other_ctx)


def test_cross_context_elements_are_rejected(ctx, other_ctx) -> None:
    vector = AstVector(ctx)
    foreign = exprs.int_const("z", other_ctx)

    with pytest.raises(CrossContextError):
        vector.push(foreign)
    with pytest.raises(CrossContextError):
        AstVector.from_iterable([exprs.int_const("x", ctx), foreign])

    assert vector.is_empty()


def test_string_rendering(ctx, terms) -> None:
    vector = AstVector.from_iterable(terms)

    text = str(vector)

    for name in ("h0", "h1", "h2"):
        assert name in text
