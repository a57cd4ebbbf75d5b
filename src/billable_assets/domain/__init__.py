"""
Domain Layer - Core Business Entities and Value Objects.

All entities here are pure Python with no infrastructure dependencies
(except Pydantic for validation).

Entities:
    - AssetRecord: One asset of a customer's inventory
    - ContractGroupConfig: Primary/AND/NOT group ids of a contract
    - GroupMember: Member record of an external asset group

Value Objects:
    - MembershipSet: Resolved asset ids of one group
    - GroupFilterOutcome: Tagged result of a filter run
"""

from billable_assets.domain.entities import (
    AssetRecord,
    ContractGroupConfig,
    GroupMember,
)
from billable_assets.domain.value_objects import (
    FilterStatus,
    GroupFilterOutcome,
    GroupRole,
    MembershipSet,
)

__all__ = [
    "AssetRecord",
    "ContractGroupConfig",
    "GroupMember",
    "FilterStatus",
    "GroupFilterOutcome",
    "GroupRole",
    "MembershipSet",
]
