from __future__ import annotations

import logging

import pytest

from buildengine.config import EngineSettings
from buildengine.observability import (
    BuildContextFilter,
    build_scope,
    configure_logging,
    ensure_build_id,
    get_build_id,
    reset_build_id,
    set_build_id,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("buildengine.test", logging.INFO, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_filter_stamps_current_build_id():
    token = set_build_id("build-7")
    try:
        record = _record()
        assert BuildContextFilter().filter(record) is True
        assert record.build_id == "build-7"
    finally:
        reset_build_id(token)


def test_filter_uses_placeholder_without_build():
    record = _record()
    BuildContextFilter().filter(record)

    assert get_build_id() is None
    assert record.build_id == "-"


def test_filter_keeps_explicit_build_id():
    record = _record(build_id="explicit")
    BuildContextFilter().filter(record)

    assert record.build_id == "explicit"


def test_ensure_build_id_generates_when_missing():
    assert ensure_build_id("given") == "given"
    assert len(ensure_build_id()) == 32


def test_build_scope_binds_and_restores_build_id():
    with build_scope("inner") as bound:
        assert bound == "inner"
        assert get_build_id() == "inner"

    assert get_build_id() is None


def test_build_scope_without_id_keeps_enclosing_id():
    with build_scope("outer"):
        with build_scope(None) as bound:
            assert bound == "outer"
            assert get_build_id() == "outer"


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    filters = list(root.filters)
    level = root.level
    for handler in handlers:
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.filters = filters
    root.setLevel(level)


def test_configure_logging_installs_filter_once(clean_root_logger):
    settings = EngineSettings(log_level="debug")

    configure_logging(settings)
    configure_logging(settings)

    assert clean_root_logger.level == logging.DEBUG
    assert sum(isinstance(f, BuildContextFilter) for f in clean_root_logger.filters) == 1
    for handler in clean_root_logger.handlers:
        assert sum(isinstance(f, BuildContextFilter) for f in handler.filters) == 1
