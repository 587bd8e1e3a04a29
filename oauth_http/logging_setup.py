"""
Structured JSON Logging for oauth-http

Provides a JSON formatter for structured logging output and helpers that
keep credentials out of debug logs.
"""

import json
import logging
import sys
from typing import Any, Dict, Mapping

REDACTED = "***REDACTED***"

SENSITIVE_HEADER_PARTS = ("authorization", "cookie", "token", "secret", "api-key", "password")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with timestamp, logger name, level, message
        """
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for attr in ("method", "url", "status_code"):
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for the library.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from oauth_http.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    lib_logger = logging.getLogger("oauth_http")
    lib_logger.setLevel(level)
    lib_logger.handlers = [handler]
    lib_logger.propagate = False


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Redact credential-bearing headers before logging.

    Args:
        headers: Header mapping

    Returns:
        Copy with sensitive values replaced

    Example:
        >>> sanitize_headers({"Authorization": "Bearer abc", "Host": "x"})
        {'Authorization': '***REDACTED***', 'Host': 'x'}
    """
    sanitized = {}
    for name, value in headers.items():
        if any(part in name.lower() for part in SENSITIVE_HEADER_PARTS):
            sanitized[name] = REDACTED
        else:
            sanitized[name] = value
    return sanitized
