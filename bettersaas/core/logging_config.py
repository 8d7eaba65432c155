"""Process-wide logging setup for the operator tools.

configure_logging() runs once at process entry and picks one of two output
backends for the ``bettersaas`` logger hierarchy:

- console: human-readable lines for an operator at a terminal
- json: one JSON object per line for log collectors (non-TTY or LOG_FORMAT=json)

Modules log through ``logging.getLogger(__name__)``; those are children of the
configured root and need no setup of their own.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bettersaas.core.config import Settings

ROOT_LOGGER_NAME = "bettersaas"

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

# LogRecord attributes that are not user-supplied `extra` fields.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON with level, time, name, msg and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname.lower(),
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "name": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _wants_json(log_format: str, stream: IO[str]) -> bool:
    if log_format == "json":
        return True
    if log_format == "console":
        return False
    isatty = getattr(stream, "isatty", None)
    return not (callable(isatty) and isatty())


def configure_logging(settings: "Settings", stream: IO[str] | None = None) -> logging.Logger:
    """
    Install a single handler on the ``bettersaas`` logger and return that logger.

    Calling it again replaces the previous handler instead of adding another.
    """
    stream = stream if stream is not None else sys.stderr
    handler = logging.StreamHandler(stream)
    if _wants_json(settings.LOG_FORMAT, stream):
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL)
    root.propagate = False
    return root
