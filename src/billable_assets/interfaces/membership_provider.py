"""
Membership Provider Protocol.

Defines the abstract interface for resolving the members of an external
asset group. All sources (AMMP data API, in-memory fixtures) implement
this protocol to be used with the group filter engine.

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - One call per group id, no batching
    - Failures are raised, never encoded in the return value
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable


class MembershipProviderError(Exception):
    """Raised when the members of a group cannot be resolved."""

    def __init__(self, message: str, group_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.group_id = group_id


@runtime_checkable
class MembershipProvider(Protocol):
    """Abstract interface for group membership lookups."""

    async def get_group_members(self, group_id: str) -> Sequence[Any]:
        """
        Fetch the current members of an asset group.

        Args:
            group_id: External id of the asset group

        Returns:
            Member records, each exposing an ``asset_id`` attribute
            or an ``"asset_id"`` key

        Raises:
            MembershipProviderError: On network/HTTP failure, malformed
                payload or unknown group id
        """
        ...
