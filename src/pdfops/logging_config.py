"""Logging setup for pdfops.

Library modules only ever call ``get_logger(__name__)``; handlers are installed
by the CLI through ``setup_logging``. Console output is split by level: INFO and
DEBUG go to stdout, WARNING and above to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "pdfops"

# pypdf reports recoverable damage in input files through this logger
PDF_LIBRARY_LOGGER = "pypdf"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the pdfops logger, or a child of it for a module name.

    Both "pdfops.operations" and "operations" map to "pdfops.operations".
    """
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class ConsoleFormatter(logging.Formatter):
    """Terse console output: bare INFO lines, prefixed everything else."""

    PREFIXES = {
        logging.DEBUG: "[debug] ",
        logging.WARNING: "Warning: ",
        logging.ERROR: "Error: ",
        logging.CRITICAL: "Error: ",
    }

    def format(self, record: logging.LogRecord) -> str:
        return self.PREFIXES.get(record.levelno, "") + record.getMessage()


class InfoFilter(logging.Filter):
    """Let through only records below WARNING (those go to stderr instead)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _console_level(verbosity: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbosity >= 2:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    verbosity: int = 0,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Install console (and optionally file) handlers on the pdfops logger.

    Args:
        verbosity: 0=normal, 1=also show pypdf warnings about damaged
            input (-v), 2=debug (-vv)
        quiet: Show errors only; overrides verbosity
        log_file: Also write every level to this file
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.DEBUG)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(_console_level(verbosity, quiet))
    stdout_handler.addFilter(InfoFilter())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    handlers: list[logging.Handler] = [stdout_handler, stderr_handler]
    for handler in handlers:
        handler.setFormatter(ConsoleFormatter())

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Malformed-but-readable PDFs make pypdf chatty; keep that out of normal runs
    logging.getLogger(PDF_LIBRARY_LOGGER).setLevel(
        logging.WARNING if verbosity >= 1 and not quiet else logging.ERROR
    )
