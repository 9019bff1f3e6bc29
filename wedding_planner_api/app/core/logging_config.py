"""
Logging configuration for the API process.

``setup_logging`` attaches a console and optional file handler to the
root logger once, then routes uvicorn's own loggers through the root
so that server, access and application records share one format and
one destination.  ``run.py`` starts uvicorn with ``log_config=None`` so
that uvicorn does not install its handlers over these.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error")
ACCESS_LOGGER = "uvicorn.access"


def _level(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def _route_to_root(name: str, level: Optional[int] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    if level is not None:
        logger.setLevel(level)
    return logger


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, access_level: Optional[str] = None) -> None:
    """Configure the root logger and route uvicorn's loggers into it.

    Parameters
    ----------
    level : str
        Root level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File that receives a copy of every record.  If omitted or
        empty, only the console handler is added.
    access_level : Optional[str]
        Level for the per-request access log.  ``"WARNING"`` silences
        it; defaults to ``level``.
    """
    root = logging.getLogger()
    numeric_level = _level(level)
    if not root.handlers:
        root.setLevel(numeric_level)
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        if logfile:
            log_path = Path(logfile).resolve()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    # Re-applied on every call: uvicorn may have configured these after
    # the root handlers were installed.
    for name in SERVER_LOGGERS:
        _route_to_root(name)
    _route_to_root(ACCESS_LOGGER, _level(access_level, numeric_level))
