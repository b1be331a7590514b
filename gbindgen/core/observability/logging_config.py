"""
Logging configuration — set up once by the CLI before the pipeline runs.

Every module that does ``logger = logging.getLogger(__name__)`` inherits
this config. The console level follows the command line:

    -q  →  ERROR,  (none)  →  WARNING,  -v  →  INFO,  -vv  →  DEBUG

An extra log file can be requested through GBINDGEN_LOG_FILE, with its
own level in GBINDGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

# Console levels indexed by the number of -v flags (capped at the last one)
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

# Console (format, datefmt) per level; the least verbose matching entry wins
_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(levelname)s: %(message)s", None),
}

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_for_verbosity(verbosity: int, quiet: bool = False) -> int:
    """Map the ``-v`` count and ``-q`` to a logging level. Quiet wins."""
    if quiet:
        return logging.ERROR
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def _console_formatter(level: int) -> logging.Formatter:
    for threshold in sorted(_CONSOLE_FORMATS):
        if level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            return logging.Formatter(fmt, datefmt=datefmt)
    fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]
    return logging.Formatter(fmt, datefmt=datefmt)


def file_level_from_env(default: int) -> int:
    """Level for the log file from GBINDGEN_LOG_FILE_LEVEL, else *default*."""
    name = os.environ.get("GBINDGEN_LOG_FILE_LEVEL", "")
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default


def setup_logging(
    verbosity: int = 0,
    quiet: bool = False,
    log_file: str | None = None,
) -> int:
    """Configure the root logger for one gbindgen run.

    Args:
        verbosity: Number of ``-v`` flags.
        quiet: ``-q`` given; only errors reach the console.
        log_file: Optional extra log file (level from GBINDGEN_LOG_FILE_LEVEL).

    Returns:
        The console level in effect.
    """
    console_level = level_for_verbosity(verbosity, quiet)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = file_level_from_env(console_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False
    return console_level
