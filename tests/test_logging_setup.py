import io
import logging

import pytest

import starling_spaces.logging_setup as logging_setup
from starling_spaces.logging_setup import configure_logging, get_logger, resolve_level


@pytest.fixture(autouse=True)
def _fresh_package_logger(monkeypatch: pytest.MonkeyPatch):
    pkg = logging.getLogger(logging_setup.PACKAGE_LOGGER)
    saved = (list(pkg.handlers), pkg.level, pkg.propagate)
    monkeypatch.setattr(logging_setup, "_handler", None)
    pkg.handlers.clear()
    yield
    pkg.handlers[:] = saved[0]
    pkg.setLevel(saved[1])
    pkg.propagate = saved[2]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (logging.DEBUG, logging.DEBUG),
        ("warning", logging.WARNING),
        ("15", 15),
        (None, logging.INFO),
    ],
)
def test_resolve_level(value, expected):
    assert resolve_level(value) == expected


def test_resolve_level_falls_back_to_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLING_SPACES_LOG_LEVEL", "error")
    assert resolve_level(None) == logging.ERROR
    assert resolve_level("not-a-level") == logging.ERROR
    assert resolve_level("²") == logging.ERROR


def test_reconfiguring_replaces_the_single_handler():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("INFO", stream=first)
    configure_logging("DEBUG", stream=second)

    pkg = logging.getLogger("starling_spaces")
    assert len(pkg.handlers) == 1
    get_logger("starling_spaces.test").debug("hello")
    assert first.getvalue() == ""
    assert "hello" in second.getvalue()
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_httpx_is_held_at_warning_above_debug():
    configure_logging("INFO", stream=io.StringIO())
    assert logging.getLogger("httpx").level == logging.WARNING


def test_get_logger_is_silent_before_configuration():
    get_logger("starling_spaces.test")
    handlers = logging.getLogger("starling_spaces").handlers
    assert [type(h) for h in handlers] == [logging.NullHandler]
