"""Tests for logging helpers."""

import logging

import pytest

from constants import Constants
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled, safe_url


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _own_handlers(root):
    return [h for h in root.handlers if getattr(h, "_latest_handler", False)]


def test_configure_logging_is_idempotent(restore_root_logger, monkeypatch):
    monkeypatch.delenv(Constants.ENV_LOG_LEVEL, raising=False)
    configure_logging()
    configure_logging()
    assert len(_own_handlers(restore_root_logger)) == 1
    assert restore_root_logger.level == logging.WARNING


def test_level_from_argument_and_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "info")
    configure_logging()
    assert restore_root_logger.level == logging.INFO

    configure_logging("DEBUG")
    assert restore_root_logger.level == logging.DEBUG
    assert is_debug_enabled(logging.getLogger("anything"))


def test_log_file_handler(restore_root_logger, tmp_path):
    log_file = tmp_path / "latest.log"
    configure_logging("INFO", str(log_file))
    assert len(_own_handlers(restore_root_logger)) == 2

    logging.getLogger("test").info("hello file")
    for handler in _own_handlers(restore_root_logger):
        handler.flush()
    assert "hello file" in log_file.read_text()


def test_extra_context_drops_none():
    assert extra_context(event="x", package=None, count=0) == {"event": "x", "count": 0}


def test_safe_url_redacts_credentials():
    url = "https://user:pw@example.test/path?token=abc&page=2"
    assert safe_url(url) == "https://[REDACTED]@example.test/path?token=[REDACTED]&page=2"
    assert safe_url("https://example.test/plain") == "https://example.test/plain"


def test_timer():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0
