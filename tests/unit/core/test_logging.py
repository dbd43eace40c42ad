from __future__ import annotations

import logging
from pathlib import Path

from datafields import DatafieldStore
from datafields.core.logging import configure_stdlib_logging, suppress_lastresort


def test_file_logging_captures_store_activity(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "datafields.log"
    configure_stdlib_logging(log_path=log_path, level="DEBUG")
    configure_stdlib_logging(log_path=log_path, level="DEBUG")

    root = logging.getLogger()
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    DatafieldStore().update({"a": 1})
    for h in file_handlers:
        h.flush()
    assert "Datafields updated (1 fields)" in log_path.read_text(encoding="utf-8")


def test_suppress_lastresort_installs_null_handler() -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    suppress_lastresort()
    assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


def test_render_logs_at_debug(caplog) -> None:
    store = DatafieldStore()
    store.update({}, {"a": 1})
    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="datafields.core.store"):
        assert store.render_datafields("{a}") == "1"
    assert "Rendering template (1 fields)" in caplog.text
