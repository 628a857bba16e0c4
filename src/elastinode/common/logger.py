"""
Standard logging utility for elastinode providers.
"""

import logging
import sys
import json
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional, TextIO

# Name of the resource currently being provisioned, stamped on every record
resource_name_ctx: ContextVar[Optional[str]] = ContextVar("resource_name", default=None)


class JsonFormatter(logging.Formatter):
    """
    Format logs as JSON for structured logging in production.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "resource": resource_name_ctx.get(),
            "name": record.name,
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Add extra fields if provided
        if hasattr(record, "extra_fields"):
            log_record.update(record.extra_fields)

        return json.dumps(log_record)


class ResourceFormatter(logging.Formatter):
    def format(self, record):
        record.resource = resource_name_ctx.get() or "-"
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    service_name: Optional[str] = None,
    use_json: bool = False,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
):
    """
    Configure logging for a provider process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Name of the service to include in logs
        use_json: Whether to use JSON formatting for production
        log_file: Optional path to a file to write logs to
        stream: Stream for the console handler, stdout when omitted
    """
    root_logger = logging.getLogger()

    # Clear existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    stream_handler = logging.StreamHandler(stream or sys.stdout)

    if use_json:
        formatter = JsonFormatter()
    else:
        format_str = (
            f"%(asctime)s - [%(resource)s] - {service_name + ' - ' if service_name else ''}"
            "%(name)s - %(levelname)s - %(message)s"
        )
        formatter = ResourceFormatter(format_str)

    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.info(f"Logging initialized for {service_name or 'unknown service'} (level={level}, json={use_json})")
