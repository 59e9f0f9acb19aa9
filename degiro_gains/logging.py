"""Logging setup for degiro-gains.

The report itself is printed to stdout; log records always go to a separate
stream (stderr by default) so that the report can be piped cleanly.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

STANDARD_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Third-party loggers that are too chatty below WARNING
QUIET_LOGGERS = ("faker", "pandas")

# Attributes every LogRecord has; anything else was passed through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Log level name, case-insensitive. Unknown names fall back to INFO.
    format_type : str
        ``"standard"`` for human-readable lines, ``"json"`` for one JSON
        object per record.
    stream : TextIO | None
        Destination of the records (default: ``sys.stderr``).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("degiro_gains").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render records as JSON objects.

    Fields given through ``extra=`` (order ids, products, row counts) are
    emitted as top-level keys; values JSON cannot encode, such as
    ``Decimal`` amounts, are written as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
