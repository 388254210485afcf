"""Tests for the shared logging setup."""

import logging

import pytest

from tilegame.utils.logging import SERVER_LOGGERS, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_root = (root.level, list(root.handlers))
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers),
                    logging.getLogger(name).propagate) for name in SERVER_LOGGERS}
    yield
    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    for name, (level, handlers, propagate) in saved.items():
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.handlers[:] = handlers
        lg.propagate = propagate


class TestSetupLogging:
    def test_single_root_handler(self, restore_logging):
        handler = setup_logging("WARNING")
        root = logging.getLogger()
        assert root.handlers == [handler]
        assert root.level == logging.WARNING

    def test_server_loggers_propagate_to_root(self, restore_logging):
        logging.getLogger("uvicorn.error").addHandler(logging.NullHandler())
        setup_logging("INFO")
        for name in SERVER_LOGGERS:
            assert logging.getLogger(name).handlers == []
            assert logging.getLogger(name).propagate

    def test_access_log_only_at_debug(self, restore_logging):
        setup_logging("INFO")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        setup_logging("DEBUG")
        assert logging.getLogger("uvicorn.access").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_logging):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO
