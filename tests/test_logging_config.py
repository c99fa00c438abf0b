import logging

from user_directory_api.app.core.logging_config import LOG_FORMAT, setup_logging


def test_setup_logging_adds_console_and_file_handlers(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    previous_level = root.level
    logfile = tmp_path / "logs" / "api.log"

    setup_logging("debug", str(logfile))
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert all(h.formatter._fmt == LOG_FORMAT for h in root.handlers)
        assert logging.getLogger("uvicorn.access").propagate is True

        logging.getLogger("user_directory_api.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        assert "[INFO] user_directory_api.test: hello" in logfile.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.setLevel(previous_level)


def test_setup_logging_runs_once(monkeypatch):
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])
    setup_logging("DEBUG")
    assert root.handlers == [existing]
