"""
Logging configuration for the pomless command line.

Library code only ever does ``logger = logging.getLogger(__name__)``, so
every record the reader emits lands under the ``pomless`` logger. The CLI
attaches its handlers there and nowhere else: the root logger, and any
handlers a host build has installed on it, are left untouched. Records
stop at ``pomless`` once the CLI has configured it.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  POMLESS_LOG_LEVEL  >  WARNING

Optional file output via POMLESS_LOG_FILE / POMLESS_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

LOGGER_NAME = "pomless"

LOG_LEVEL_ENV = "POMLESS_LOG_LEVEL"
LOG_FILE_ENV = "POMLESS_LOG_FILE"
LOG_FILE_LEVEL_ENV = "POMLESS_LOG_FILE_LEVEL"

# Console at WARNING and above: the message alone
_FMT_MINIMAL = "pomless: %(message)s"

# Console at INFO: which part of the reader said it
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and log files
_FMT_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here, so a second setup replaces only those
_OWNED = "_pomless_owned"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``pomless`` logger.

    Calling it again replaces the handlers it installed before; handlers
    added by anyone else are kept.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to write as well.
        log_file_level: Level for the log file; defaults to ``level``.

    Returns:
        The configured ``pomless`` logger.
    """
    console_level = parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DETAILED, _DATEFMT_SHORT
    elif console_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    _attach(logger, console)
    logger_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        logger_level = min(logger_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT_FILE))
        _attach(logger, fh)

    logger.setLevel(logger_level)
    logger.propagate = False
    return logger


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _OWNED, True)
    logger.addHandler(handler)
