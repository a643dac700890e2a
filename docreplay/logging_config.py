"""
Logging configuration for docreplay.

Provides JSON or text logs with a trace_id (the entity id of the document
being replayed) for correlating the lines of one replay.

Environment Variables:
    DOCREPLAY_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: WARNING
    DOCREPLAY_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from docreplay.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="entity-12345")
    logger.info("Replaying document")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all records have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure the docreplay logger.

    Arguments override the environment:
    - DOCREPLAY_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
    - DOCREPLAY_LOG_FORMAT: json, text (default: text)
    """
    log_level = (level or os.getenv("DOCREPLAY_LOG_LEVEL", "WARNING")).upper()
    fmt = (log_format or os.getenv("DOCREPLAY_LOG_FORMAT", "text")).lower()

    package_logger = logging.getLogger("docreplay")
    package_logger.setLevel(_LEVELS.get(log_level, logging.WARNING))

    # Remove existing handlers
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically the entity id)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
