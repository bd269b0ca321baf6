"""Logging setup for the ``javaclassfinder`` logger namespace.

Debug diagnostics are echoed on stdout next to the report; warnings and
errors go to stderr.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "javaclassfinder"


class _BelowWarningFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(debug: bool) -> logging.Logger:
    """Install stdout/stderr handlers on the package logger.

    Safe to call repeatedly; previously installed handlers are replaced and
    bound to the current ``sys.stdout``/``sys.stderr``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(message)s")

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setLevel(logging.DEBUG)
    out_handler.addFilter(_BelowWarningFilter())
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
