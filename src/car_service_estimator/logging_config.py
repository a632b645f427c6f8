from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TextIO

from google.cloud import logging as cloud_logging

# Context variable for the estimate being worked on
estimate_id_var: ContextVar[str | None] = ContextVar("estimate_id", default=None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging compatible with Cloud Logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        estimate_id = estimate_id_var.get()
        if estimate_id:
            log_obj["estimate_id"] = estimate_id

        # Structured fields passed as logger.info(..., extra={"fields": {...}})
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            log_obj.update(fields)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Decimal amounts and enums render as strings
        return json.dumps(log_obj, ensure_ascii=False, default=str)


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    use_cloud_logging: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure logging for the estimator.

    Args:
        environment: Environment name (dev, staging, prod)
        project_id: GCP project ID for Cloud Logging
        use_cloud_logging: Whether to use Cloud Logging client
        stream: Where JSON log lines go when Cloud Logging is not used (stderr by default)
    """
    log_level = logging.DEBUG if environment == "dev" else logging.INFO

    if use_cloud_logging and project_id and environment != "dev":
        client = cloud_logging.Client(project=project_id)
        client.setup_logging(log_level=log_level)
    else:
        # stdout is reserved for CLI output
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())

        logging.basicConfig(
            level=log_level,
            handlers=[handler],
        )

    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def set_estimate_id(estimate_id: str | None) -> None:
    """Set the estimate ID for the current context."""
    estimate_id_var.set(estimate_id)


def get_estimate_id() -> str | None:
    """Get the estimate ID from the current context."""
    return estimate_id_var.get()


__all__ = ["setup_logging", "set_estimate_id", "get_estimate_id", "StructuredFormatter"]
