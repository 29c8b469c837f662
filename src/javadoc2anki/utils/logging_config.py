"""Logging setup for the command line and server entry points."""

from __future__ import annotations

import logging
import sys

from javadoc2anki.config import JAVADOC2ANKI_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_configured = False


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra={...}`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}
        if not extras:
            return message
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{message} [{pairs}]"


def configure_logging(level: str | int = JAVADOC2ANKI_LOG_LEVEL) -> None:
    """Install a stderr handler on the ``javadoc2anki`` and ``server`` loggers once."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ExtraFormatter(_LOG_FORMAT))
    for name in ("javadoc2anki", "server"):
        logger = logging.getLogger(name)
        logger.addHandler(handler)
        logger.setLevel(level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with logging configured."""
    configure_logging()
    return logging.getLogger(name)
