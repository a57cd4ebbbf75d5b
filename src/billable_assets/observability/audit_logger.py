"""
Structured Audit Logger - structlog Audit Trail of Filter Runs.

Provides:
    - Structured JSON (or console) logging via structlog
    - Correlation ID propagation through contextvars
    - In-memory event history for inspection

Design Notes:
    - Implements the AuditLogger protocol
    - structlog is configured once per process via configure_structlog()
"""

from __future__ import annotations

import logging
import threading
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog

# Context variable for correlation ID (task-safe)
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def configure_structlog(log_level: int = logging.INFO, use_json: bool = True) -> None:
    """
    Configure structlog for structured logging.

    Args:
        log_level: Minimum level to emit
        use_json: Render JSON lines instead of the dev console format
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class StructlogAuditLogger:
    """
    Audit trail of group filter runs on top of structlog.

    Every event carries the correlation id of the run it belongs to.
    """

    def __init__(self, service_name: str = "billable_assets") -> None:
        """
        Initialize audit logger.

        Args:
            service_name: Logger name attached to every entry
        """
        self.service_name = service_name
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        self._logger = structlog.get_logger(service_name)

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set correlation ID for current context.

        Args:
            correlation_id: Unique ID of a filter run
        """
        _correlation_id.set(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g., "group_resolved")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        event_data = {
            "timestamp": datetime.now().isoformat(),
            "correlation_id": get_correlation_id(),
            **(data or {}),
        }

        with self._lock:
            self._events.append({"event_type": event_type, **event_data})

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        log_method(event_type, **event_data)

    def get_events(self) -> List[Dict[str, Any]]:
        """Get all recorded events."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        """Clear recorded events."""
        with self._lock:
            self._events.clear()

    # =========================================================================
    # AuditLogger Protocol
    # =========================================================================

    def log_filter_start(
        self,
        group_ids: Dict[str, Optional[str]],
        input_count: int,
    ) -> None:
        self.log_event(
            "group_filter_started",
            {"groups": dict(group_ids), "input_count": input_count},
        )

    def log_group_resolved(self, group_id: str, role: str, member_count: int) -> None:
        self.log_event(
            "group_resolved",
            {"group_id": group_id, "role": role, "member_count": member_count},
            level="debug",
        )

    def log_resolution_failure(self, group_id: str, role: str, error: str) -> None:
        self.log_event(
            "group_resolution_failed",
            {"group_id": group_id, "role": role, "error": error},
            level="error",
        )

    def log_filter_end(
        self,
        status: str,
        input_count: int,
        output_count: int,
        duration_seconds: float,
    ) -> None:
        self.log_event(
            "group_filter_completed",
            {
                "status": status,
                "input_count": input_count,
                "output_count": output_count,
                "duration_seconds": duration_seconds,
            },
            level="error" if status == "resolution_failed" else "info",
        )
