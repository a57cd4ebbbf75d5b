"""
Contract Scope Resolver - Billable Assets of a Contract.

Decides whether a contract restricts its assets by group, runs the
group filter when it does, and aggregates the billable MW.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from billable_assets.capabilities.summary import CapabilitySummary, summarize_assets
from billable_assets.domain.entities import AssetRecord, ContractGroupConfig
from billable_assets.domain.value_objects import FilterStatus
from billable_assets.filters.group_filter import (
    GroupFilterEngine,
    has_asset_group_filtering,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractScope:
    """Billable assets of a contract for one billing cycle."""

    contract_id: Optional[str]
    assets: List[AssetRecord]
    summary: CapabilitySummary
    group_filtered: bool
    status: FilterStatus

    @property
    def resolution_failed(self) -> bool:
        return self.status is FilterStatus.RESOLUTION_FAILED


class ContractScopeResolver:
    """Resolves the billable scope of contracts."""

    def __init__(self, engine: GroupFilterEngine) -> None:
        """
        Initialize resolver.

        Args:
            engine: Group filter engine used for contracts with groups
        """
        self.engine = engine

    async def resolve(
        self,
        contract: Union[ContractGroupConfig, Mapping[str, Any]],
        inventory: Sequence[AssetRecord],
    ) -> ContractScope:
        """
        Resolve the billable assets of a contract.

        Contracts without any group configured bill the whole inventory
        and cause no membership lookups.

        Args:
            contract: Contract group config or raw contract row
            inventory: Full asset breakdown of the customer

        Returns:
            ContractScope with billable assets and their MW summary
        """
        if not isinstance(contract, ContractGroupConfig):
            contract = ContractGroupConfig.from_contract(contract)

        if not has_asset_group_filtering(contract):
            assets = list(inventory)
            return ContractScope(
                contract_id=contract.contract_id,
                assets=assets,
                summary=summarize_assets(assets),
                group_filtered=False,
                status=FilterStatus.PASSTHROUGH,
            )

        outcome = await self.engine.resolve(
            inventory,
            contract.primary_group_id,
            contract.and_group_id,
            contract.not_group_id,
        )

        if outcome.resolution_failed:
            logger.error(
                f"Contract {contract.contract_id}: asset groups could not be "
                f"resolved, no assets billable this cycle ({outcome.failed_groups})"
            )
        else:
            logger.info(
                f"Contract {contract.contract_id}: {outcome.output_count}/"
                f"{outcome.input_count} assets billable after group filtering"
            )

        return ContractScope(
            contract_id=contract.contract_id,
            assets=outcome.assets,
            summary=summarize_assets(outcome.assets),
            group_filtered=outcome.status is FilterStatus.FILTERED,
            status=outcome.status,
        )
