"""
Logging for the user directory service.

Everything goes through the root logger so the store, the service, the
endpoints and uvicorn itself print lines of the same shape::

    2026-01-05 10:42:17 [INFO] user_directory_api.app.services.user_service: Created user 4

(``LOG_FORMAT`` / ``DATE_FORMAT`` below).  ``LOG_LEVEL`` and
``LOG_FILE`` from the settings feed :func:`setup_logging`.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn installs its own handlers on these; they are cleared so its
# startup and access lines reach the root handlers instead.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    ``level`` is a level name in any case; unknown names mean ``INFO``.
    ``logfile`` adds a file handler next to the console one.  Calls after
    the first are ignored, which keeps repeated ``create_app`` calls in
    tests from stacking handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
