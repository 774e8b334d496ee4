"""
Logging setup for DealerWatch (structured JSON).

Library modules only create loggers with logging.getLogger(__name__);
entry points (service, CLI) call configure_logging() once.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "dealerwatch"

# Extra attributes copied onto the JSON entry when present on the record
_EXTRA_FIELDS = (
    "request_id",
    "dealer_index",
    "dealer_name",
    "audit_source",
    "dealer_count",
    "generation_mode",
    "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO", fmt: str = "json") -> logging.Logger:
    """
    Configure the dealerwatch root logger.

    Safe to call more than once: the handler installed by a previous call
    is replaced rather than duplicated.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))

    for existing in list(logger.handlers):
        if getattr(existing, "_dealerwatch_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._dealerwatch_handler = True
    logger.addHandler(handler)
    return logger
