"""
Structured JSON Logger.

Emits one JSON object per line on stdout, readable by Google Cloud
Logging and most log shippers:
- Cloud Logging severity names
- Request correlation (request_id, endpoint, user_id)
- Redaction of sensitive keys and masking of email addresses
"""

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, Tuple, Type, TypeVar

from flask import Flask, g, request


F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAME = "birthday-mailer"


def mask_email(email: str) -> str:
    """Mask the local part of an email address: ada@example.com -> a***@example.com."""
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"


class JsonFormatter(logging.Formatter):
    """JSON formatter for Google Cloud Logging."""

    SEVERITY_MAP = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARNING",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    SENSITIVE_PATTERNS = frozenset([
        "password", "secret", "token", "api_key", "apikey",
        "authorization", "credential", "private", "html",
    ])

    CONTEXT_ATTRS = ("request_id", "endpoint", "user_id")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "severity": self.SEVERITY_MAP.get(record.levelno, "INFO"),
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger": record.name,
            "service": SERVICE_NAME,
        }

        self._add_request_context(log_entry)
        self._add_extra_fields(record, log_entry)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if record.levelno >= logging.WARNING:
            log_entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def _add_request_context(self, log_entry: Dict[str, Any]) -> None:
        try:
            for attr in self.CONTEXT_ATTRS:
                value = g.get(attr)
                if value:
                    log_entry[attr] = value
        except RuntimeError:
            pass  # Outside Flask context

    def _add_extra_fields(self, record: logging.LogRecord, log_entry: Dict[str, Any]) -> None:
        extra_fields = getattr(record, "extra_fields", None) or {}
        for key, value in extra_fields.items():
            if self._is_sensitive(key):
                log_entry[key] = "[redacted]"
            elif "email" in key.lower() and isinstance(value, str):
                log_entry[key] = mask_email(value)
            else:
                log_entry[key] = self._sanitize_value(value)

    def _is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self.SENSITIVE_PATTERNS)

    def _sanitize_value(self, value: Any) -> Any:
        """Truncate long string values."""
        if isinstance(value, str) and len(value) > 1000:
            return value[:1000] + "... [truncated]"
        return value


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter for adding structured fields to logs."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra_fields = extra.pop("extra_fields", {})

        if self.extra:
            extra_fields = {**self.extra, **extra_fields}

        kwargs["extra"] = {**extra, "extra_fields": extra_fields}
        return msg, kwargs


def get_logger(name: str = SERVICE_NAME) -> StructuredLogger:
    """
    Create and configure a structured JSON logger.

    Args:
        name: Logger name.

    Returns:
        Configured StructuredLogger instance.
    """
    base_logger = logging.getLogger(name)

    if not base_logger.handlers:
        base_logger.setLevel(logging.DEBUG)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(JsonFormatter())

        base_logger.addHandler(handler)
        base_logger.propagate = False

    return StructuredLogger(base_logger, {})


def log_request_context(app: Flask) -> None:
    """
    Attach a request id to every request and log one line per response.

    Args:
        app: Flask application instance.
    """
    @app.before_request
    def before_request() -> None:
        trace_header = request.headers.get("X-Cloud-Trace-Context", "")
        g.request_id = trace_header.split("/")[0] or uuid.uuid4().hex[:8]
        g.endpoint = request.endpoint
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration_ms = None
        if "start_time" in g:
            duration_ms = int((time.time() - g.start_time) * 1000)

        get_logger("request").info(
            f"{request.method} {request.path} -> {response.status_code}",
            extra={"extra_fields": {
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }}
        )
        response.headers["X-Request-Id"] = g.get("request_id", "")
        return response


def log_duration(
    operation: str,
    expected: Tuple[Type[Exception], ...] = (),
) -> Callable[[F], F]:
    """
    Decorator to measure and log operation duration.

    Args:
        operation: Operation name for logging.
        expected: Exception types that are normal outcomes, logged at INFO.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            op_logger = get_logger(func.__module__)
            start = time.time()
            try:
                result = func(*args, **kwargs)
            except expected as e:
                op_logger.info(
                    f"{operation} ended: {type(e).__name__}",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": int((time.time() - start) * 1000),
                        "status": "rejected",
                        "error_type": type(e).__name__,
                    }}
                )
                raise
            except Exception as e:
                op_logger.error(
                    f"{operation} failed: {e}",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": int((time.time() - start) * 1000),
                        "status": "error",
                        "error_type": type(e).__name__,
                    }}
                )
                raise
            op_logger.info(
                f"{operation} completed",
                extra={"extra_fields": {
                    "operation": operation,
                    "duration_ms": int((time.time() - start) * 1000),
                    "status": "success",
                }}
            )
            return result
        return wrapper  # type: ignore
    return decorator


# Global application logger
logger = get_logger(SERVICE_NAME)
