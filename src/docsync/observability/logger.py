"""Single-line JSON logging for docsync.

Each record becomes one JSON object so that envelope rejections and
conflict decisions can be filtered by field in a log pipeline::

    {"ts": "2026-10-19T08:00:00.000000+00:00", "level": "WARNING",
     "logger": "docsync.envelope", "message": "Rejected incremental save",
     "op": "apply_incremental_save", "document_id": "doc-1", "base_version": 3}

Structured fields travel in ``extra={"extra_fields": {...}}``::

    from docsync.observability import get_logger

    log = get_logger("docsync.conflict")
    log.info("conflict resolved", extra={"extra_fields": {"strategy": "merge"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a JSON object.

    Always present: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields from ``record.extra_fields`` are merged at the top
    level; ``exception`` and ``stack_info`` are added when the record has
    them.  Values that JSON cannot encode are passed through ``str``.
    """

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


# Names that already carry a StructuredFormatter handler.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "docsync",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the logger called *name*, attaching a JSON handler once.

    Parameters
    ----------
    name:
        Logger name, e.g. ``"docsync.envelope"``.
    level:
        Level applied the first time the logger is configured, as an ``int``
        or a case-insensitive level name.
    stream:
        Handler output stream.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        Repeated calls with the same *name* return the same logger without
        stacking handlers.  The logger does not propagate, so records are
        never printed twice by a configured root logger.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
