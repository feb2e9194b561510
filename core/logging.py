# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Core - Structured logging with request context
# PURPOSE: Trace-id tagged, queryable logging for every pipeline phase
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured logging for the submission relay.
Integrates with Azure Application Insights through the Functions host.

Features:
- Per-request context (trace_id, phase, component)
- JSON output for log aggregation
- Named phase lines for following one request end to end

Usage:
    from core.logging import get_logger, log_context, log_phase

    logger = get_logger("relay.submission")

    with log_context(trace_id="4f1c...", component="submission"):
        log_phase("parse_body", {"bytes": 58})
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    trace_id: Optional[str] = None
    phase: Optional[str] = None
    component: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    """Get thread-local context stack."""
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

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(trace_id="4f1c...", phase="validate_env"):
            logger.info("Checking configuration")
    """
    # Merge with parent context
    parent = get_current_context()
    new_context = LogContext(
        trace_id=kwargs.get("trace_id", parent.trace_id),
        phase=kwargs.get("phase", parent.phase),
        component=kwargs.get("component", parent.component),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, carrying the active request context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context_dict = get_current_context().to_dict()
        if context_dict:
            log_data["context"] = context_dict

        # ContextLogger and log_phase attach their fields as record.extra
        payload = getattr(record, "extra", None)
        if payload:
            log_data["data"] = payload

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes thread-local context in all log messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        context = get_current_context()

        extra = dict(kwargs.get("extra") or {})
        extra.update(context.to_dict())

        # Store as attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "relay.submission")
        component: Optional component name for categorization

    Returns:
        ContextLogger instance
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(base_logger, {"component": component})


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Route the root logger to stdout as JSON lines.

    Called at startup only when LOG_FORMAT=json; otherwise the Functions
    host keeps its own handler.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)


# ============================================================================
# PHASE LOGGING
# ============================================================================

def log_phase(
    phase: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
) -> None:
    """
    Log a named pipeline phase for the current request.

    The message itself carries `[trace_id] phase` so the line stays
    attributable even when the host's own handler drops record extras.

    Args:
        phase: Phase name (e.g., "parse_body", "airtable_response")
        data: Optional non-secret diagnostic data
        logger: Optional specific logger to use
        level: Log level for the line
    """
    if logger is None:
        logger = logging.getLogger("relay.phase")

    context = get_current_context()
    phase_data: Dict[str, Any] = {
        "phase": phase,
        "timestamp": _utc_timestamp(),
    }
    if context.trace_id:
        phase_data["trace_id"] = context.trace_id
    if data:
        phase_data["data"] = data

    prefix = f"[{context.trace_id}] " if context.trace_id else ""
    summary = f" {json.dumps(data, default=str)}" if data else ""
    logger.log(level, f"{prefix}PHASE: {phase}{summary}", extra={"extra": phase_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_phase",
]
