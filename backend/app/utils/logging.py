"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- unique_id
- storage_key
- duration_ms
- error

Usage:
    from app.utils.logging import configure_logging, log_resume_uploaded

    configure_logging('resume-qr-api', 'INFO')
    log_resume_uploaded(logger, unique_id='abc', storage_key='resumes/1-x-cv.pdf', size_bytes=1024)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (e.g. resume-qr-api)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for docker logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    unique_id: Optional[str] = None,
    storage_key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        unique_id: Optional generated link id
        storage_key: Optional object key
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if unique_id:
        extra["unique_id"] = unique_id
    if storage_key:
        extra["storage_key"] = storage_key
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Upload events

def log_resume_uploaded(
    logger: logging.Logger,
    unique_id: str,
    storage_key: str,
    size_bytes: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a completed upload.

    Args:
        logger: Logger instance
        unique_id: Generated link id (required)
        storage_key: Object key the PDF was stored under (required)
        size_bytes: Uploaded file size
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="resume_uploaded",
        unique_id=unique_id,
        storage_key=storage_key,
        duration_ms=duration_ms,
        size_bytes=size_bytes,
        **kwargs
    )

    logger.info(f"Resume uploaded: {storage_key}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    error: str,
    storage_key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a failed upload.

    Args:
        logger: Logger instance
        error: Error message (required)
        storage_key: Object key if one was already derived
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (for unexpected errors)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        storage_key=storage_key,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )

    message = f"Upload failed - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
            return
    logger.error(message, extra=extra)


# View events

def log_link_resolved(
    logger: logging.Logger,
    variant: str,
    storage_key: str,
    unique_id: Optional[str] = None,
    **kwargs
):
    """
    Log a successful view redirect.

    Args:
        logger: Logger instance
        variant: "id" or "key"
        storage_key: Resolved object key
        unique_id: Generated id (id variant only)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="link_resolved",
        unique_id=unique_id,
        storage_key=storage_key,
        variant=variant,
        **kwargs
    )

    logger.info(f"Link resolved: {unique_id or storage_key}", extra=extra)


def log_link_resolution_failed(
    logger: logging.Logger,
    variant: str,
    reason: str,
    unique_id: Optional[str] = None,
    storage_key: Optional[str] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a view request that did not redirect.

    Args:
        logger: Logger instance
        variant: "id" or "key"
        reason: Error kind (e.g. UnknownIdentifier)
        unique_id: Requested id, if any
        storage_key: Requested or resolved key, if any
        include_traceback: Log at error level with the stack trace (for unexpected errors)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="link_resolution_failed",
        unique_id=unique_id,
        storage_key=storage_key,
        variant=variant,
        reason=reason,
        **kwargs
    )

    if include_traceback:
        logger.error(f"Link resolution failed: {reason}", extra=extra, exc_info=True)
    else:
        logger.warning(f"Link resolution failed: {reason}", extra=extra)


# Storage events

def log_storage_failure(
    logger: logging.Logger,
    operation: str,
    error: str,
    storage_key: Optional[str] = None,
    **kwargs
):
    """
    Log an object storage failure.

    Args:
        logger: Logger instance
        operation: Operation name (put, get, link_add, ...) (required)
        error: Error message (required)
        storage_key: Object key involved
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="storage_failure",
        storage_key=storage_key,
        operation=operation,
        error=str(error),
        **kwargs
    )

    logger.error(f"Storage failure: {operation} - {error}", extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
