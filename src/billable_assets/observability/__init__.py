"""
Observability Package - Structured Audit Logging.

Components:
    - StructlogAuditLogger: Audit trail of filter runs via structlog
    - configure_structlog: Process-wide structlog setup (JSON or console)
    - get_correlation_id: Correlation ID of the current filter run
"""

from billable_assets.observability.audit_logger import (
    StructlogAuditLogger,
    configure_structlog,
    get_correlation_id,
)

__all__ = ["StructlogAuditLogger", "configure_structlog", "get_correlation_id"]
