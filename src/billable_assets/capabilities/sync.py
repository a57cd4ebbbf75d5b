"""
Capability Sync.

Fetches asset details and devices from the data API in concurrent
batches and turns them into AssetCapabilities. Persisting the result is
the caller's job.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from billable_assets.capabilities.calculator import (
    AssetCapabilities,
    calculate_capabilities,
    empty_capabilities,
)
from billable_assets.domain.entities import GroupMember

logger = logging.getLogger(__name__)


class AssetDetailsSource(Protocol):
    """Subset of the data API needed for a capability sync."""

    async def get_asset(self, asset_id: str) -> Dict[str, Any]:
        ...

    async def get_asset_devices(self, asset_id: str) -> List[Dict[str, Any]]:
        ...


class CapabilitySyncer:
    """Builds AssetCapabilities for a list of group members."""

    BATCH_SIZE = 50
    # Above this many assets device lookups are skipped to bound sync time
    SKIP_DEVICES_THRESHOLD = 200

    def __init__(
        self,
        source: AssetDetailsSource,
        batch_size: int = BATCH_SIZE,
        skip_devices_threshold: int = SKIP_DEVICES_THRESHOLD,
    ) -> None:
        """
        Initialize syncer.

        Args:
            source: Data API (or compatible) to read assets and devices from
            batch_size: Number of assets fetched concurrently
            skip_devices_threshold: Asset count above which devices are not fetched
        """
        self.source = source
        self.batch_size = batch_size
        self.skip_devices_threshold = skip_devices_threshold

    async def sync(
        self,
        members: Sequence[GroupMember],
        cached_dates: Optional[Mapping[str, Dict[str, Optional[str]]]] = None,
    ) -> List[AssetCapabilities]:
        """
        Sync capabilities of the given assets.

        Members repeating an asset id are synced once: the asset keeps the
        position of its first occurrence and the name of its last.

        Args:
            members: Assets to sync (id and display name)
            cached_dates: Asset id -> {"onboarding_date", "solcast_onboarding_date"}
                          from a previous sync, preserved over API values

        Returns:
            One AssetCapabilities per distinct asset id, in member order.
            Assets whose details fail to load or parse get zero-capacity
            placeholders.
        """
        cached_dates = cached_dates or {}
        unique = self._unique_members(members)
        skip_devices = len(unique) > self.skip_devices_threshold
        if skip_devices:
            logger.info(f"Large sync ({len(unique)} assets) - skipping device details")

        start = time.perf_counter()
        results: List[AssetCapabilities] = []

        for i in range(0, len(unique), self.batch_size):
            batch = unique[i : i + self.batch_size]
            batch_results = await asyncio.gather(
                *(
                    self._sync_one(m, cached_dates.get(m.asset_id, {}), skip_devices)
                    for m in batch
                )
            )
            results.extend(batch_results)
            logger.info(
                f"Capability sync progress: {len(results)}/{len(unique)} "
                f"({time.perf_counter() - start:.1f}s)"
            )

        return results

    @staticmethod
    def _unique_members(members: Sequence[GroupMember]) -> List[GroupMember]:
        by_id: Dict[str, GroupMember] = {}
        for member in members:
            by_id[member.asset_id] = member
        if len(by_id) < len(members):
            logger.warning(
                f"Dropped {len(members) - len(by_id)} duplicate member(s) from sync"
            )
        return list(by_id.values())

    async def _sync_one(
        self,
        member: GroupMember,
        cached: Dict[str, Optional[str]],
        skip_devices: bool,
    ) -> AssetCapabilities:
        try:
            asset = await self.source.get_asset(member.asset_id)

            devices: List[Dict[str, Any]] = []
            if not skip_devices:
                try:
                    devices = await self.source.get_asset_devices(member.asset_id)
                except Exception as e:
                    logger.warning(f"No devices for {member.asset_id}: {e}")

            return calculate_capabilities(
                {**asset, "asset_id": member.asset_id, "asset_name": member.asset_name},
                devices,
                cached_onboarding_date=cached.get("onboarding_date"),
                cached_solcast_onboarding_date=cached.get("solcast_onboarding_date"),
            )
        except Exception as e:
            logger.error(f"Error processing asset {member.asset_id}: {e}")
            return empty_capabilities(member.asset_id, member.asset_name, cached)
