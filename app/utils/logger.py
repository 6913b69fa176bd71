"""Logging configuration for the PhysioCare backend."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


def configure_logging(debug: bool = False) -> logging.Logger:
    """
    Configure the ``physiocare`` logger tree.

    Args:
        debug: Enable debug logging.

    Returns:
        Root application logger.
    """
    logger = logging.getLogger("physiocare")
    logger.handlers.clear()

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the application namespace (usually for ``__name__``)."""
    return logging.getLogger(f"physiocare.{name}")


def extra(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` kwarg that JSONFormatter merges into the record."""
    return {"extra_data": fields}
