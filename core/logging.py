# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across the function app
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

JSON or human-readable log lines carrying the current invocation context.
Azure Functions forwards stdout and the root logger to Application Insights,
so JSON lines stay queryable there.

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger(__name__)

    with log_context(invocation_id=context.invocation_id, path="c/file.pdf"):
        logger.info("Signed", extra={"expires_at": expiry})
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """Per-invocation fields attached to every log line."""
    invocation_id: Optional[str] = None
    function_name: Optional[str] = None
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        return {k: v for k, v in asdict(self).items() if v is not None}


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Fields not given are inherited from the enclosing context.

    Example:
        with log_context(invocation_id="abc-123"):
            with log_context(path="reports/file.pdf"):
                logger.info("Redirecting")
    """
    parent = get_current_context()
    new_context = LogContext(
        invocation_id=kwargs.get("invocation_id", parent.invocation_id),
        function_name=kwargs.get("function_name", parent.function_name),
        path=kwargs.get("path", parent.path),
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


class StructuredFormatter(logging.Formatter):
    """JSON formatter for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context_dict = get_current_context().to_dict()
        if context_dict:
            log_data["context"] = context_dict

        # Caller-supplied fields from ContextLogger
        if getattr(record, "data", None):
            log_data["data"] = record.data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for development, context inline."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.invocation_id:
            context_parts.append(f"invocation={context.invocation_id}")
        if context.path:
            context_parts.append(f"path={context.path}")
        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        data = getattr(record, "data", None)
        data_str = f" {data}" if data else ""

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}{data_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that files caller-supplied extra fields under record.data.

    Context fields are not copied here; formatters read them directly.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {"data": dict(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format; LOG_FORMAT=json has the same effect
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    # Replace only our own stdout handler; the Functions host installs its own
    for handler in root.handlers[:]:
        if getattr(handler, "_redirect_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler._redirect_handler = True
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
