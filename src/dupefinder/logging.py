"""Logging configuration for dupefinder.

Skipped files and directories are reported as warnings on the
``dupefinder`` logger; command output is logged at INFO level.
"""

from __future__ import annotations

import logging


class _PlainInfoFormatter(logging.Formatter):
    """INFO messages as-is, every other level prefixed with its name."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname}: {message}"


def configure_logging(verbose: bool = False, quiet: bool = False, stream=None) -> None:
    """Configure the dupefinder root logger.

    *verbose* enables the per-phase debug output of the detector, *quiet*
    limits output to warnings and errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger("dupefinder")
    root_logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_PlainInfoFormatter("%(message)s"))
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
