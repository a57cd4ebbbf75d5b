"""
Static Membership Provider.

An in-memory membership provider for development and testing. Group
memberships are given up front; individual groups can be told to fail
to exercise the fail-closed path of the filter engine.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List, Mapping, Optional

from billable_assets.domain.entities import GroupMember
from billable_assets.interfaces.membership_provider import MembershipProviderError


class StaticMembershipProvider:
    """In-memory group memberships."""

    def __init__(
        self,
        groups: Optional[Mapping[str, Iterable[str]]] = None,
        delay_seconds: float = 0.0,
    ) -> None:
        """
        Initialize with group memberships.

        Args:
            groups: Group id -> member asset ids
            delay_seconds: Artificial latency per lookup
        """
        self._groups: Dict[str, List[str]] = {
            group_id: list(asset_ids) for group_id, asset_ids in (groups or {}).items()
        }
        self._failures: Dict[str, BaseException] = {}
        self._delay_seconds = delay_seconds
        self.calls: List[str] = []

    def set_group(self, group_id: str, asset_ids: Iterable[str]) -> None:
        """Replace the members of a group."""
        self._groups[group_id] = list(asset_ids)

    def fail_group(self, group_id: str, error: Optional[BaseException] = None) -> None:
        """Make lookups of a group raise ``error``."""
        self._failures[group_id] = error or MembershipProviderError(
            f"Lookup of group {group_id} failed", group_id=group_id
        )

    async def get_group_members(self, group_id: str) -> List[GroupMember]:
        """Return the configured members of a group."""
        self.calls.append(group_id)
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)

        if group_id in self._failures:
            raise self._failures[group_id]
        if group_id not in self._groups:
            raise MembershipProviderError(f"Unknown group: {group_id}", group_id=group_id)

        return [
            GroupMember(asset_id=asset_id, asset_name=asset_id)
            for asset_id in self._groups[group_id]
        ]
