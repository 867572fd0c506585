# utils/logger.py
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_DEFAULT_FILE  = os.getenv("LOG_FILE", "logs/signal_desk.log")
_DEFAULT_MAX_MB = int(os.getenv("LOG_MAX_MB", "5"))      # 5 MB
_DEFAULT_BACKUPS = int(os.getenv("LOG_BACKUPS", "5"))    # keep 5 rotated files

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _rotating_file(path: str, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=_DEFAULT_MAX_MB * 1024 * 1024,
        backupCount=_DEFAULT_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logger(name: str,
                 level: Union[str, int] = _DEFAULT_LEVEL,
                 log_file: Optional[str] = _DEFAULT_FILE,
                 to_console: bool = True) -> logging.Logger:
    """
    Create/get the desk logger with console and rotating-file handlers.

    The same logger is handed to every desk component and to the activity
    feed, so one call configures the whole run.  Re-using a name returns the
    already configured logger (no duplicate handlers).
    """
    logger = logging.getLogger(name)
    if logger.handlers:  # already configured
        return logger

    level = _resolve_level(level)
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    if log_file:
        logger.addHandler(_rotating_file(log_file, level, formatter))

    if to_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console.setLevel(level)
        logger.addHandler(console)
        # root may have its own console handler (pytest, basicConfig)
        logger.propagate = False

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return logger
