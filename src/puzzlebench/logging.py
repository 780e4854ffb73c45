"""Logging setup for puzzlebench.

Console records go through click so they share stderr with the CLI's
own messages. An optional file handler always logs at DEBUG level, so a
benchmark session can be inspected after the fact.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

_LOGGER_NAME = "puzzlebench"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(message)s"
_LEVEL_COLORS = {logging.WARNING: "yellow", logging.ERROR: "red", logging.CRITICAL: "red"}


class ClickHandler(logging.Handler):
    """Write records to stderr with ``click.echo``, coloring warnings and errors."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.WARNING:
                message = f"{record.levelname.capitalize()}: {message}"
            color = _LEVEL_COLORS.get(record.levelno)
            if color is not None:
                message = click.style(message, fg=color)
            click.echo(message, err=True)
        except Exception:
            self.handleError(record)


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the puzzlebench logger.

    Args:
        verbose: Show DEBUG records on the console, such as per-candidate
            sampling details.
        quiet: Only show warnings and errors. Ignored if *verbose* is True.
        log_file: If provided, also log everything at DEBUG level to this path.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console = ClickHandler()
    if verbose:
        console.setLevel(logging.DEBUG)
    elif quiet:
        console.setLevel(logging.WARNING)
    else:
        console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger ``puzzlebench.<name>``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
