import logging

import pytest

from src.common.utils import setup_logging, teardown_logging
from src.policer.errors import ConfigError


def test_file_handler_added_when_logging_configured(tmp_path):
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        handlers = setup_logging(str(tmp_path / "app.log"))
        assert len(handlers) == 1
        assert handlers[0] in root.handlers
        teardown_logging(handlers)
        assert handlers[0] not in root.handlers
    finally:
        root.removeHandler(sentinel)


def test_nothing_attached_without_log_file_when_configured():
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        assert setup_logging() == []
    finally:
        root.removeHandler(sentinel)


def test_unopenable_log_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot open log file"):
        setup_logging(str(tmp_path / "missing" / "app.log"))
