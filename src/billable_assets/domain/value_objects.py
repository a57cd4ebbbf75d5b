"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe the outcome of group
resolution and filtering. They have no identity of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List

from billable_assets.domain.entities import AssetRecord


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# Error message per group id that failed to resolve
FailedGroupsDict = Dict[str, str]


class GroupRole(str, Enum):
    """Role a group id plays in the filter formula."""

    PRIMARY = "primary"
    AND = "and"
    NOT = "not"


class FilterStatus(str, Enum):
    """How a group filter run ended."""

    PASSTHROUGH = "passthrough"  # no primary group or empty inventory
    FILTERED = "filtered"
    RESOLUTION_FAILED = "resolution_failed"


@dataclass(frozen=True)
class MembershipSet:
    """Resolved asset ids of one group, built once per filter run."""

    group_id: str
    role: GroupRole
    asset_ids: FrozenSet[str]

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self.asset_ids

    def __len__(self) -> int:
        return len(self.asset_ids)


@dataclass(frozen=True)
class GroupFilterOutcome:
    """
    Tagged result of a group filter run.

    ``assets`` is always safe to bill: it is empty whenever any requested
    group failed to resolve. ``status`` tells an empty-because-filtered
    result apart from an empty-because-failed one.
    """

    assets: List[AssetRecord]
    status: FilterStatus
    input_count: int
    failed_groups: FailedGroupsDict = field(default_factory=dict)

    @property
    def output_count(self) -> int:
        return len(self.assets)

    @property
    def resolution_failed(self) -> bool:
        return self.status is FilterStatus.RESOLUTION_FAILED

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all filtered)."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)
