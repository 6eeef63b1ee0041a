"""Shared logging utilities.

Every service entrypoint calls `configure_logging(...)` once at startup so that
all components emit the same format:
- a single stream handler on the root logger,
- plain text lines for local development, or
- one JSON object per line when running behind a log collector.

Modules keep using `logging.getLogger(__name__)`; nothing else needs to know
which format is active.
"""

import json
import logging
import sys
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents.

    Fields passed through `extra={...}` are copied to the top level of the
    document, which keeps request ids and upstream status codes searchable.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Install the shared handler on the root logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates (uvicorn reloads and test suites do this).

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
        json_format: Emit JSON lines instead of plain text.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_common_handler", False):
            root.removeHandler(existing)
    handler._common_handler = True
    root.addHandler(handler)
    root.setLevel(level.upper())
