# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskboard.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_third_party_errors() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("taskboard.tasks.task_list", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("httpx", logging.ERROR))


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file_once(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path)
    log_file = setup_logging(log_dir=tmp_path)

    logging.getLogger("taskboard.test").info("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "taskboard.log"
    assert log_file.read_text("utf-8").count("hello file") == 1
    assert logging.getLogger("httpx").level == logging.WARNING
