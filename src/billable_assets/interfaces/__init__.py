"""
Interfaces Layer - Abstract Protocols for Dependencies.

High-level modules depend on these abstractions, not on concrete
implementations.

Protocols:
    - MembershipProvider: Group membership lookups
    - AuditLogger: Audit trail of filter runs
"""

from billable_assets.interfaces.audit_logger import AuditLogger
from billable_assets.interfaces.membership_provider import (
    MembershipProvider,
    MembershipProviderError,
)

__all__ = ["AuditLogger", "MembershipProvider", "MembershipProviderError"]
