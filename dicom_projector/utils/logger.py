"""DICOM Projector Structured Logging

Uses structlog for consistent, analyzable log output. Projected values
can carry patient information, so PHI-bearing event fields are redacted
before rendering.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SENSITIVE_FIELDS = {
    "patient_id",
    "patient_name",
    "patient_birth_date",
    "other_patient_ids",
    "patient_address",
}

#: Tag keys of the elements above, as they appear in projected documents
SENSITIVE_TAG_KEYS = {
    "00100010",
    "00100020",
    "00100030",
    "00101000",
    "00101040",
}

REDACTED = "***REDACTED***"


def redact_sensitive_data(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor to redact patient identifiers from log entries.

    Fields named after a sensitive attribute are replaced, and so is the
    ``value`` field of events about a sensitive tag.

    Args:
        logger: The wrapped logger instance
        method_name: The name of the method being called
        event_dict: The event dictionary to process

    Returns:
        Processed event dictionary with sensitive data redacted

    """
    for key in list(event_dict):
        if key.lower() in SENSITIVE_FIELDS:
            event_dict[key] = REDACTED

    if event_dict.get("tag") in SENSITIVE_TAG_KEYS and "value" in event_dict:
        event_dict["value"] = REDACTED

    return event_dict


def add_timestamp(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor to add ISO-formatted timestamp to log entries."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def configure_logging(
    log_level: str = "WARNING", json_format: bool = False, log_file: Path | None = None
) -> None:
    """Configure structlog for command line use.

    Library modules only obtain loggers; configuring output is left to
    the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to output JSON format (True) or human-readable (False)
        log_file: Optional file path to write logs to

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=True)
        >>> logger = get_logger("dicom_projector")
        >>> logger.debug("numeric_fallback", tag="00200013", vr="IS")

    """
    level = getattr(logging, log_level.upper())

    # Logs go to stderr so stdout stays clean for the projected document
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_sensitive_data,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger.

    Args:
        name: Logger name (typically module name using __name__)

    Returns:
        structlog BoundLogger instance

    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
