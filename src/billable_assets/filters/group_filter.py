"""
Asset Group Filter Implementation.

Restricts a customer's asset inventory to the members of up to three
external asset groups:
    - Primary group: the base population (required for any filtering)
    - AND group: keeps only assets that are also in this group
    - NOT group: removes assets that are in this group

Formula: (Primary ∩ AND) - NOT

Any failed membership lookup empties the result. An empty result
under-bills and is recovered by a retry; an over-inclusive one bills
the customer for assets outside the contract.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from billable_assets.domain.entities import AssetRecord, ContractGroupConfig
from billable_assets.domain.value_objects import (
    FailedGroupsDict,
    FilterStatus,
    GroupFilterOutcome,
    GroupRole,
    MembershipSet,
)
from billable_assets.interfaces.audit_logger import AuditLogger
from billable_assets.interfaces.membership_provider import (
    MembershipProvider,
    MembershipProviderError,
)

logger = logging.getLogger(__name__)

# Contract columns holding the three group ids
GROUP_ID_KEYS = (
    "ammp_asset_group_id",
    "ammp_asset_group_id_and",
    "ammp_asset_group_id_not",
)

ContractLike = Union[ContractGroupConfig, Mapping]


def has_asset_group_filtering(contract: ContractLike) -> bool:
    """
    Check if asset group filtering is configured for a contract.

    Args:
        contract: Contract group config or raw contract row

    Returns:
        True if any of the primary/AND/NOT group ids is set
    """
    if isinstance(contract, ContractGroupConfig):
        return any(contract.group_ids)
    return any(contract.get(key) for key in GROUP_ID_KEYS)


class GroupFilterEngine:
    """Filter an asset inventory by primary/AND/NOT group membership."""

    def __init__(
        self,
        provider: MembershipProvider,
        audit_logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize with dependencies.

        Args:
            provider: Source of group memberships
            audit_logger: Optional audit trail of filter runs
        """
        self.provider = provider
        self.audit_logger = audit_logger

    @property
    def name(self) -> str:
        return "asset_group_filter"

    async def filter_assets_by_groups(
        self,
        inventory: Sequence[AssetRecord],
        primary_group_id: Optional[str],
        and_group_id: Optional[str] = None,
        not_group_id: Optional[str] = None,
    ) -> List[AssetRecord]:
        """
        Filter assets using multi-group boolean logic.

        Never raises on provider failure: an empty list is returned
        instead. Use ``resolve`` to tell the two empty cases apart.

        Args:
            inventory: Full asset breakdown of the customer
            primary_group_id: Assets must be in this group
            and_group_id: Assets must ALSO be in this group
            not_group_id: Assets must NOT be in this group

        Returns:
            Matching assets in inventory order
        """
        outcome = await self.resolve(
            inventory, primary_group_id, and_group_id, not_group_id
        )
        return outcome.assets

    async def filter_for_contract(
        self,
        contract: ContractGroupConfig,
        inventory: Sequence[AssetRecord],
    ) -> List[AssetRecord]:
        """Filter an inventory with the group ids configured on a contract."""
        return await self.filter_assets_by_groups(
            inventory,
            contract.primary_group_id,
            contract.and_group_id,
            contract.not_group_id,
        )

    async def resolve(
        self,
        inventory: Sequence[AssetRecord],
        primary_group_id: Optional[str],
        and_group_id: Optional[str] = None,
        not_group_id: Optional[str] = None,
    ) -> GroupFilterOutcome:
        """
        Run the filter and return a tagged outcome.

        Steps:
            1. Pass through when no primary group or no inventory
            2. Resolve all requested groups concurrently
            3. Fail closed if any lookup failed
            4. Keep assets in Primary, in AND (if set), not in NOT (if set)

        Args:
            inventory: Full asset breakdown of the customer
            primary_group_id: Assets must be in this group
            and_group_id: Assets must ALSO be in this group
            not_group_id: Assets must NOT be in this group

        Returns:
            GroupFilterOutcome with the billable assets and run status
        """
        if not primary_group_id or len(inventory) == 0:
            if not primary_group_id and (and_group_id or not_group_id):
                logger.warning(
                    "AND/NOT group configured without a primary group, "
                    "no group filtering applied"
                )
            return GroupFilterOutcome(
                assets=list(inventory),
                status=FilterStatus.PASSTHROUGH,
                input_count=len(inventory),
            )

        start_time = time.perf_counter()
        requested = self._requested_groups(primary_group_id, and_group_id, not_group_id)

        if self.audit_logger:
            self.audit_logger.set_correlation_id(str(uuid.uuid4()))
            self.audit_logger.log_filter_start(
                {
                    GroupRole.PRIMARY.value: primary_group_id,
                    GroupRole.AND.value: and_group_id or None,
                    GroupRole.NOT.value: not_group_id or None,
                },
                len(inventory),
            )

        try:
            memberships, failed = await self._resolve_memberships(requested)
        except Exception as e:
            memberships, failed = {}, {primary_group_id: f"{type(e).__name__}: {e}"}

        if failed:
            logger.error(
                f"Error filtering assets by groups, returning no assets: {failed}"
            )
            outcome = GroupFilterOutcome(
                assets=[],
                status=FilterStatus.RESOLUTION_FAILED,
                input_count=len(inventory),
                failed_groups=failed,
            )
        else:
            outcome = GroupFilterOutcome(
                assets=self._apply(inventory, memberships),
                status=FilterStatus.FILTERED,
                input_count=len(inventory),
            )

        duration = time.perf_counter() - start_time
        if self.audit_logger:
            self.audit_logger.log_filter_end(
                outcome.status.value,
                outcome.input_count,
                outcome.output_count,
                duration,
            )
        return outcome

    @staticmethod
    def _requested_groups(
        primary_group_id: str,
        and_group_id: Optional[str],
        not_group_id: Optional[str],
    ) -> List[Tuple[GroupRole, str]]:
        requested = [(GroupRole.PRIMARY, primary_group_id)]
        if and_group_id:
            requested.append((GroupRole.AND, and_group_id))
        if not_group_id:
            requested.append((GroupRole.NOT, not_group_id))
        return requested

    async def _resolve_memberships(
        self,
        requested: List[Tuple[GroupRole, str]],
    ) -> Tuple[Dict[GroupRole, MembershipSet], FailedGroupsDict]:
        """Fetch all requested groups in parallel and wait for every lookup."""
        results = await asyncio.gather(
            *(self._fetch_membership(group_id, role) for role, group_id in requested),
            return_exceptions=True,
        )

        memberships: Dict[GroupRole, MembershipSet] = {}
        failed: FailedGroupsDict = {}

        for (role, group_id), result in zip(requested, results):
            if isinstance(result, BaseException):
                error = f"{type(result).__name__}: {result}"
                failed[group_id] = error
                logger.warning(f"Failed to resolve {role.value} group {group_id}: {error}")
                if self.audit_logger:
                    self.audit_logger.log_resolution_failure(group_id, role.value, error)
            else:
                memberships[role] = result
                if self.audit_logger:
                    self.audit_logger.log_group_resolved(group_id, role.value, len(result))

        return memberships, failed

    async def _fetch_membership(self, group_id: str, role: GroupRole) -> MembershipSet:
        members = await self.provider.get_group_members(group_id)
        asset_ids = frozenset(_member_asset_id(m, group_id) for m in members)
        logger.debug(f"Found {len(asset_ids)} members in {role.value} group {group_id}")
        return MembershipSet(group_id=group_id, role=role, asset_ids=asset_ids)

    def _apply(
        self,
        inventory: Sequence[AssetRecord],
        memberships: Dict[GroupRole, MembershipSet],
    ) -> List[AssetRecord]:
        primary = memberships[GroupRole.PRIMARY]
        and_set = memberships.get(GroupRole.AND)
        not_set = memberships.get(GroupRole.NOT)

        passed: List[AssetRecord] = []
        rejected: Dict[str, int] = {}

        for asset in inventory:
            is_valid, reason = self._check_asset(asset.asset_id, primary, and_set, not_set)
            if is_valid:
                passed.append(asset)
            else:
                rejected[reason] = rejected.get(reason, 0) + 1

        logger.debug(
            f"Asset group filtering: {len(passed)}/{len(inventory)} assets passed, "
            f"rejected={rejected}"
        )
        return passed

    @staticmethod
    def _check_asset(
        asset_id: str,
        primary: MembershipSet,
        and_set: Optional[MembershipSet],
        not_set: Optional[MembershipSet],
    ) -> Tuple[bool, str]:
        """Check a single asset against the group sets, primary first."""
        if asset_id not in primary:
            return False, "not_in_primary"

        if and_set is not None and asset_id not in and_set:
            return False, "not_in_and"

        if not_set is not None and asset_id in not_set:
            return False, "in_not"

        return True, ""


def _member_asset_id(member: Any, group_id: str) -> str:
    """Extract the asset id of a member record (mapping or object)."""
    if isinstance(member, Mapping):
        asset_id = member.get("asset_id")
    else:
        asset_id = getattr(member, "asset_id", None)

    if not isinstance(asset_id, str) or not asset_id:
        raise MembershipProviderError(
            f"Member of group {group_id} has no asset_id: {member!r}",
            group_id=group_id,
        )
    return asset_id


async def filter_assets_by_groups(
    inventory: Sequence[AssetRecord],
    primary_group_id: Optional[str],
    and_group_id: Optional[str] = None,
    not_group_id: Optional[str] = None,
    *,
    provider: MembershipProvider,
) -> List[AssetRecord]:
    """
    Convenience function for a one-off filter run.

    Args:
        inventory: Full asset breakdown of the customer
        primary_group_id: Assets must be in this group
        and_group_id: Assets must ALSO be in this group
        not_group_id: Assets must NOT be in this group
        provider: Source of group memberships

    Returns:
        Matching assets in inventory order, empty on lookup failure
    """
    engine = GroupFilterEngine(provider)
    return await engine.filter_assets_by_groups(
        inventory, primary_group_id, and_group_id, not_group_id
    )
