"""
Opt-in log output for the ``krakenapi`` logger.

The package itself only attaches a ``NullHandler``; applications that want
to see request/response traces call ``setup_logging``::

    setup_logging(logging.DEBUG)                        # stderr only
    setup_logging(log_file="logs/kraken.log")           # plus a rotating file

No file is written unless *log_file* is given.  Relative paths resolve
against the current working directory.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "krakenapi"

CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

# Marks handlers installed here so a second call replaces them.
_OWNED = "_krakenapi_handler"


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    return handler


def reset_logging() -> None:
    """Detach and close every handler ``setup_logging`` attached."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Route ``krakenapi`` log records to stderr and/or a rotating file.

    Calling it again reconfigures instead of stacking handlers.

    Parameters
    ----------
    level : int
        Level for the logger and every handler installed here.
    log_file : str or Path, optional
        Rotating log file (5 MB x 5); parent directories are created.
    console : bool
        Whether to log to stderr.

    Returns
    -------
    logging.Logger
        The ``krakenapi`` logger.
    """
    reset_logging()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if console:
        stream = _own(logging.StreamHandler())
        stream.setLevel(level)
        stream.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(stream)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = _own(RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        ))
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
        logger.debug("Logging to %s", path.resolve())

    return logger
