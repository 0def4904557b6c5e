"""JSON-lines logging for notion-jarkup.

A record logged as::

    log.debug("enrichment fetch failed",
              extra={"extra_fields": {"op": "fetch_metadata", "url": url}})

comes out as::

    {"ts": "...", "level": "DEBUG", "logger": "notion_jarkup.enrich",
     "message": "enrichment fetch failed", "op": "fetch_metadata", "url": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with ``extra_fields`` merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields is not None:
            entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# Names that already carry our handler.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "notion_jarkup",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the logger *name*, attaching a JSON handler on first use.

    *level* (an int or a level name) and *stream* (default ``sys.stderr``)
    only take effect the first time *name* is seen.  The logger does not
    propagate, so records are written once.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured_loggers.add(name)
    return logger
