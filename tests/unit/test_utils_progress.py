"""Tests for progress and logging helpers."""

import logging

from cuttagflow.utils.logging import get_logger, level_from_name, level_from_verbosity, setup_logging
from cuttagflow.utils.progress import iter_progress


def test_iter_progress_disabled_passthrough():
    assert list(iter_progress([1, 2, 3], enabled=False)) == [1, 2, 3]


def test_iter_progress_enabled_yields_items():
    assert list(iter_progress(["a", "b"], total=2, desc="Stages")) == ["a", "b"]


def test_level_mapping():
    assert level_from_verbosity(0) == logging.WARNING
    assert level_from_verbosity(1) == logging.INFO
    assert level_from_verbosity(5) == logging.DEBUG
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name(None) == logging.WARNING
    assert level_from_name("nonsense", default=logging.ERROR) == logging.ERROR


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(level=logging.WARNING, log_file=log_file)
    get_logger("test").debug("detailed message")
    for handler in logging.getLogger("cuttagflow").handlers:
        handler.flush()
    assert "detailed message" in log_file.read_text()
    assert get_logger("x").name == "cuttagflow.x"
