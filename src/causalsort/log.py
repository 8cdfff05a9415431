"""
Logging setup for the causalsort command line.

The library itself only creates module loggers under ``causalsort``; it
never installs handlers. ``configure_logging`` is for entry points that own
the process (the CLI) and supports two formats:

- ``json``: one JSON object per line, for log shippers
- ``text``: human-readable console output

Usage:
    from causalsort.log import configure_logging

    configure_logging(level="debug", fmt="json")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

__all__ = ["JsonFormatter", "configure_logging"]

_ROOT_LOGGER = "causalsort"

# Attributes every LogRecord carries; anything else was passed via ``extra``
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "warning",
    fmt: str = "text",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Install a single stream handler on the ``causalsort`` logger.

    Calling it again replaces the previous handler, so repeated CLI
    invocations in one process do not duplicate output.

    Args:
        level: debug, info, warning or error
        fmt: json or text
        stream: Output stream (defaults to stderr)

    Returns:
        The configured ``causalsort`` logger
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
