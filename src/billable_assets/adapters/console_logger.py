"""
Console Audit Logger.

A simple audit logger that outputs filter runs to the console.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional


class ConsoleAuditLogger:
    """Simple console-based audit logger."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If True, log all events. If False, only summaries and failures.
        """
        self._verbose = verbose
        self._correlation_id: Optional[str] = None

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        self._correlation_id = correlation_id

    def log_filter_start(
        self,
        group_ids: Dict[str, Optional[str]],
        input_count: int,
    ) -> None:
        """Log the start of a filter run."""
        if self._verbose:
            groups = ", ".join(
                f"{role}={gid}" for role, gid in group_ids.items() if gid is not None
            )
            self._log("INFO", f"Filtering {input_count} assets by groups ({groups})")

    def log_group_resolved(self, group_id: str, role: str, member_count: int) -> None:
        """Log a successful membership lookup."""
        if self._verbose:
            self._log("DEBUG", f"{role} group {group_id}: {member_count} members")

    def log_resolution_failure(self, group_id: str, role: str, error: str) -> None:
        """Log a failed membership lookup."""
        self._log("ERROR", f"{role} group {group_id} failed to resolve: {error}")

    def log_filter_end(
        self,
        status: str,
        input_count: int,
        output_count: int,
        duration_seconds: float,
    ) -> None:
        """Log the end of a filter run."""
        self._log(
            "INFO",
            f"Group filter {status}: {output_count}/{input_count} assets billable "
            f"({duration_seconds:.3f}s)",
        )

    def _log(self, level: str, message: str) -> None:
        """Internal logging method."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        corr_id = self._correlation_id[:8] if self._correlation_id else "--------"
        print(f"[{timestamp}] [{corr_id}] [{level:5}] {message}")
