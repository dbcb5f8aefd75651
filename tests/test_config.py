"""Tests for `z3_handles.config` and `z3_handles._logging`."""

import logging

from z3_handles import Context
from z3_handles._logging import (
    ROOT_LOGGER_NAME,
    get_logger,
    reset_logging,
    set_global_log_level,
)
from z3_handles.config import CONFIG, LIBRARY_PATH_ENV, HandleConfig, param_to_string


def test_param_rendering() -> None:
    assert param_to_string(True) == "true"
    assert param_to_string(False) == "false"
    assert param_to_string(30) == "30"
    assert param_to_string("smt") == "smt"


def test_merged_params_overrides_defaults() -> None:
    config = HandleConfig(library_path=None, context_params={"model": True, "timeout": 100})

    merged = config.merged_params({"timeout": 5, "proof": False})

    assert merged == {"model": "true", "timeout": "5", "proof": "false"}
    assert config.context_params == {"model": True, "timeout": 100}


def test_library_path_defaults_to_environment(monkeypatch) -> None:
    monkeypatch.setenv(LIBRARY_PATH_ENV, "/opt/z3/lib")
    assert HandleConfig().library_path == "/opt/z3/lib"

    monkeypatch.delenv(LIBRARY_PATH_ENV)
    assert HandleConfig().library_path is None


def test_global_context_params_apply(monkeypatch, recording) -> None:
    monkeypatch.setattr(CONFIG, "context_params", {"model": False})

    context = Context(library=recording)
    try:
        assert not context.closed
    finally:
        context.close()


def test_loggers_live_under_package_root() -> None:
    logger = get_logger("z3_handles._runtime.context")

    assert logger.name.startswith(ROOT_LOGGER_NAME)
    assert logger.level == logging.NOTSET


def test_set_global_log_level_attaches_one_handler() -> None:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    before = len(root.handlers)
    try:
        set_global_log_level(logging.DEBUG)
        set_global_log_level(logging.INFO)

        assert len(root.handlers) == before + 1
        assert root.level == logging.INFO
    finally:
        reset_logging()

    assert len(root.handlers) == before
    assert root.level == logging.NOTSET
