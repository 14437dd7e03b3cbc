# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todo_list.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in saved_handlers:
            h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def _file_handlers() -> list[logging.FileHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


def test_file_log_written_under_log_dir(tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path / "logs")
    logging.getLogger("todo_list.test").debug("hello file")

    assert len(_file_handlers()) == 1
    assert (tmp_path / "logs" / "todo.log").exists()


def test_no_log_dir_means_nothing_on_disk(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    setup_logging(log_dir=None)
    logging.getLogger("todo_list.test").warning("console only")

    assert _file_handlers() == []
    assert list(tmp_path.iterdir()) == []


def test_unwritable_log_dir_keeps_console_logging(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", "utf-8")

    setup_logging(log_dir=blocker)
    assert _file_handlers() == []
    assert logging.getLogger().handlers
