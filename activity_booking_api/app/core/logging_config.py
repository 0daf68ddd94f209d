"""
Logging configuration for the API process.

``setup_logging`` attaches the service's console handler, and a file
handler when ``LOG_FILE`` is set, to the root logger.  The handlers are
named so that building several apps in one process (the tests do)
never attaches them twice, while handlers installed by someone else
(pytest's capture handler, for instance) are left alone.

Uvicorn's own loggers are brought to the same level and left to
propagate to the root logger, so server and access lines reach the
log file along with the application's.  ``run.py`` starts Uvicorn with
``log_config=None`` for that reason.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "activity_booking_api.console"
FILE_HANDLER = "activity_booking_api.file"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str) -> int:
    """Map a level name to its number; unknown names mean ``INFO``."""
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root and Uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.
    logfile : Optional[str]
        Path of a file to append log lines to.  Missing parent
        directories are created.  If omitted, only the console is used.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    installed = {handler.get_name() for handler in root.handlers}

    if CONSOLE_HANDLER not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and FILE_HANDLER not in installed:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.setLevel(numeric_level)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
