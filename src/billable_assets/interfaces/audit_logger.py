"""
Audit Logger Protocol.

Defines the abstract interface for the audit trail of group filter runs.
Every run that restricts a contract's billable assets is traceable:
which groups were requested, how many members each resolved to, and
which lookups failed.

Design Notes:
    - Structured logging (JSON format recommended)
    - Correlation ID propagation for tracing
    - No side effects on filtering logic
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class AuditLogger(Protocol):
    """Abstract interface for audit logging."""

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        ...

    def log_filter_start(
        self,
        group_ids: Dict[str, Optional[str]],
        input_count: int,
    ) -> None:
        """
        Log the start of a filter run.

        Args:
            group_ids: Role name -> group id (None when not configured)
            input_count: Number of assets in the inventory
        """
        ...

    def log_group_resolved(self, group_id: str, role: str, member_count: int) -> None:
        """Log a successful membership lookup."""
        ...

    def log_resolution_failure(self, group_id: str, role: str, error: str) -> None:
        """Log a failed membership lookup."""
        ...

    def log_filter_end(
        self,
        status: str,
        input_count: int,
        output_count: int,
        duration_seconds: float,
    ) -> None:
        """
        Log the end of a filter run.

        Args:
            status: FilterStatus value of the run
            input_count: Number of assets in the inventory
            output_count: Number of billable assets returned
            duration_seconds: Wall time of the run
        """
        ...
