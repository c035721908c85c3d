"""Tests for root and server logger configuration."""

import sys
import os
import logging

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from battlers.utils.logging import SERVER_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    names = ("",) + SERVER_LOGGERS
    saved = {}
    for name in names:
        lg = logging.getLogger(name)
        saved[name] = (list(lg.handlers), lg.level, lg.propagate)
    yield
    for name, (handlers, level, propagate) in saved.items():
        lg = logging.getLogger(name)
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


class TestSetupLogging:

    def test_single_root_handler(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_server_loggers_follow_configured_level(self):
        access = logging.getLogger("uvicorn.access")
        access.addHandler(logging.NullHandler())
        access.propagate = False

        setup_logging("WARNING")

        for name in SERVER_LOGGERS:
            lg = logging.getLogger(name)
            assert lg.level == logging.WARNING
            assert lg.handlers == []
            assert lg.propagate
        assert not access.isEnabledFor(logging.INFO)
