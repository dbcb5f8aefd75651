"""Tests for library discovery, prototypes and error mapping."""

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from z3_handles import (
    CrossContextError,
    IndexOutOfRange,
    NativeFailure,
    SortMismatch,
    Z3_error_code,
    Z3_sort_kind,
    load_library,
)
from z3_handles._loader import find_library_path, library_version
from z3_handles._runtime.errors import error_from_code
from z3_handles._z3 import PROTOTYPES, bind_prototypes, c_array, decode, to_enum
from z3_handles.config import LIBRARY_PATH_ENV


def test_load_library_is_cached() -> None:
    assert load_library() is load_library()


def test_library_version() -> None:
    major, minor, build, revision = library_version(load_library())

    assert major >= 4
    assert minor >= 0


def test_explicit_path_and_directory() -> None:
    found = Path(find_library_path())
    if not found.is_file():
        pytest.skip("library resolved by soname only")

    assert find_library_path(found) == str(found)
    assert Path(find_library_path(found.parent)).name == found.name


def test_explicit_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        find_library_path(tmp_path / "missing" / "libz3.so")


def test_bogus_environment_path_falls_back(monkeypatch, tmp_path, caplog) -> None:
    monkeypatch.setenv(LIBRARY_PATH_ENV, str(tmp_path / "nowhere"))

    with caplog.at_level(logging.WARNING, logger="z3_handles"):
        found = find_library_path()

    assert found
    assert LIBRARY_PATH_ENV in caplog.text


def test_bind_prototypes_reports_missing_entry_points() -> None:
    partial = SimpleNamespace(Z3_mk_config=SimpleNamespace())

    missing = bind_prototypes(partial)

    assert "Z3_mk_config" not in missing
    assert len(missing) == len(PROTOTYPES) - 1
    assert partial.Z3_mk_config.argtypes == []


def test_bind_prototypes_on_real_library_is_complete() -> None:
    assert "Z3_mk_context_rc" not in bind_prototypes(load_library())


def test_helpers() -> None:
    assert c_array([]) is None
    assert len(c_array([1, 2, 3])) == 3
    assert decode(None) == ""
    assert decode(b"x") == "x"
    assert to_enum(Z3_sort_kind, 2, Z3_sort_kind.Z3_UNKNOWN_SORT) == Z3_sort_kind.Z3_INT_SORT
    assert to_enum(Z3_sort_kind, 4242, Z3_sort_kind.Z3_UNKNOWN_SORT) == Z3_sort_kind.Z3_UNKNOWN_SORT


def test_error_mapping() -> None:
    assert isinstance(error_from_code(Z3_error_code.Z3_SORT_ERROR, "bad"), SortMismatch)
    assert isinstance(error_from_code(Z3_error_code.Z3_SORT_ERROR, "bad"), TypeError)

    iob = error_from_code(Z3_error_code.Z3_IOB, "iob", index=5)
    assert isinstance(iob, IndexOutOfRange)
    assert isinstance(iob, IndexError)
    assert iob.index == 5

    other = error_from_code(Z3_error_code.Z3_INVALID_ARG, "")
    assert isinstance(other, NativeFailure)
    assert other.code == Z3_error_code.Z3_INVALID_ARG
    assert "Z3_INVALID_ARG" in str(other)
    assert not isinstance(other, CrossContextError)
