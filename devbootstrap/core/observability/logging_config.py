"""
Logging configuration — set up once by the CLI group.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config. Logs are diagnostics (commands run, exit statuses, files
touched) and go to stderr; operator-facing messages go through the
prompter, never through logging.

Levels are resolved in precedence order:
    --debug > --verbose > --quiet  >  DEVBOOTSTRAP_LOG_LEVEL  >  WARNING

Optional file output via DEVBOOTSTRAP_LOG_FILE / DEVBOOTSTRAP_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "DEVBOOTSTRAP_LOG_LEVEL"
FILE_ENV = "DEVBOOTSTRAP_LOG_FILE"
FILE_LEVEL_ENV = "DEVBOOTSTRAP_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING level — the message only, it shares the terminal with prompts
_FMT_MINIMAL = "%(levelname)s: %(message)s"

# INFO level — timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file (default: ``$DEVBOOTSTRAP_LOG_FILE``).
        log_file_level: Optional separate level for the log file.
            Defaults to ``$DEVBOOTSTRAP_LOG_FILE_LEVEL``, then ``level``.
    """
    numeric_level = _parse_level(level)
    log_file = log_file or os.environ.get(FILE_ENV)
    log_file_level = log_file_level or os.environ.get(FILE_LEVEL_ENV)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_SHORT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
