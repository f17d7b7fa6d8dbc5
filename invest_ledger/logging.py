"""Process-wide logging for invest-ledger.

Two output formats are supported: a pipe-separated line for terminals and
one JSON object per record for log collectors. Fields passed through
``extra={"extra": {...}}`` are merged into JSON records, with credential
fields masked.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from invest_ledger.config import LedgerConfig

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Keys never written verbatim by JsonFormatter
SENSITIVE_KEYS = frozenset({"password", "senha"})
MASK = "******"

QUIET_LOGGERS = ("psycopg", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Configure the root logger with a single console handler.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        ``"standard"`` or ``"json"``.
    stream : TextIO | None
        Destination, stdout by default.

    Returns
    -------
    logging.Handler
        The installed handler.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("invest_ledger").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def setup_logging_from_config(config: LedgerConfig, stream: TextIO | None = None) -> logging.Handler:
    """Apply ``config.log_level`` and ``config.log_format``."""
    return setup_logging(config.log_level, config.log_format, stream)


def mask_sensitive(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy ``fields`` with credential values replaced by a mask."""
    return {key: MASK if key.lower() in SENSITIVE_KEYS else value for key, value in fields.items()}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; non-ASCII text is kept as-is."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            log_data.update(mask_sensitive(extra))

        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
