"""
Structured JSON logging service for scoped auth.

Provides structured logging with:
- JSON format output when enabled
- Request context integration (request_id, signed-in scopes)
- Consistent log structure for sign in/out and configuration events

Logs include: timestamp, level, message, request_id, method, path, status,
auth_scopes, duration_ms, and other contextual information.
"""

import os
import json
import logging
import time
from datetime import datetime, timezone
from flask import Flask, has_request_context
from scoped_auth.services.request_context import get_request_context, get_request_id


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def __init__(self, json_enabled: bool = True):
        super().__init__()
        self.json_enabled = json_enabled

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON or plain text."""
        if not self.json_enabled:
            # Use standard formatting for plain text logs
            return super().format(record)

        # Create structured log entry
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add request context if available
        if has_request_context():
            log_entry.update(get_request_context())

        # Add extra fields from log record
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        # Add exception information if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredLogger:
    """Structured logger with request context integration."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log_with_context(self, level: int, message: str, **kwargs):
        """Log message with additional context."""
        extra_fields = kwargs.copy()

        # Add request_id if not already present
        if 'request_id' not in extra_fields and has_request_context():
            extra_fields['request_id'] = get_request_id()

        # Create log record with extra fields
        self.logger.log(level, message, extra={'extra_fields': extra_fields})

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log_with_context(logging.ERROR, message, **kwargs)

    def log_request_start(self, method: str, path: str, **kwargs):
        """Log request start."""
        self.info(
            f"Request started: {method} {path}",
            event_type='request_start',
            method=method,
            path=path,
            **kwargs
        )

    def log_request_end(self, method: str, path: str, status_code: int, duration_ms: float, **kwargs):
        """Log request completion."""
        self.info(
            f"Request completed: {method} {path} - {status_code} ({duration_ms}ms)",
            event_type='request_end',
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
            **kwargs
        )

    def log_auth_event(self, event: str, success: bool, **kwargs):
        """Log a sign in / sign out event."""
        level = logging.INFO if success else logging.WARNING
        self._log_with_context(
            level,
            f"Authentication {event}: {'success' if success else 'failure'}",
            event_type='auth_event',
            auth_event=event,
            success=success,
            **kwargs
        )

    def log_error_event(self, error: str, error_type: str = 'application', **kwargs):
        """Log error event."""
        self.error(
            f"Error: {error}",
            event_type='error',
            error_type=error_type,
            error_message=error,
            **kwargs
        )


def get_logger(name: str) -> StructuredLogger:
    """Get structured logger instance."""
    return StructuredLogger(name)


CONFIGURED_LOGGERS = [
    'scoped_auth.auth',
    'scoped_auth.errors',
    'scoped_auth.requests',
]


def configure_logging(app: Flask):
    """Configure structured logging for Flask application."""
    json_enabled = app.config.get(
        'SCOPED_AUTH_LOG_JSON',
        os.environ.get('SCOPED_AUTH_LOG_JSON', 'true').lower() == 'true'
    )
    log_level = str(app.config.get('LOG_LEVEL', os.environ.get('LOG_LEVEL', 'INFO'))).upper()
    level = getattr(logging, log_level, logging.INFO)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create console handler with structured formatter
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(StructuredFormatter(json_enabled=json_enabled))
    root_logger.addHandler(console_handler)

    # Configure Flask app logger
    app.logger.setLevel(level)

    # Configure specific loggers
    for logger_name in CONFIGURED_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)

    # Log configuration
    get_logger('scoped_auth.config').info(
        "Logging configured",
        json_enabled=json_enabled,
        log_level=log_level,
        loggers_configured=CONFIGURED_LOGGERS
    )


class LoggingMiddleware:
    """Middleware for automatic request/response logging."""

    def __init__(self, app: Flask):
        self.app = app
        self.logger = get_logger('scoped_auth.requests')

        # Register before_request and after_request handlers
        app.before_request(self._before_request)
        app.after_request(self._after_request)

    def _before_request(self):
        """Log request start."""
        from flask import request

        self.logger.log_request_start(
            method=request.method,
            path=request.path,
            remote_addr=request.remote_addr,
        )

    def _after_request(self, response):
        """Log request completion."""
        from flask import request, g

        # Calculate duration
        duration_ms = 0
        if hasattr(g, 'request_start_time'):
            duration_ms = round((time.time() - g.request_start_time) * 1000, 2)

        self.logger.log_request_end(
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        return response


def init_logging(app: Flask):
    """Initialize structured logging for Flask application."""
    # Configure logging
    configure_logging(app)

    # Initialize logging middleware
    LoggingMiddleware(app)
