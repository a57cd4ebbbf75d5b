"""
Filters Package - Asset Group Filtering.

Filters:
    - GroupFilterEngine: Restricts an inventory to Primary ∩ AND - NOT

Helpers:
    - has_asset_group_filtering: Whether a contract has any group configured
    - filter_assets_by_groups: One-shot functional form of the engine

Design Principles:
    - Stateless filtering (memberships fetched fresh per run)
    - Dependencies injected via constructor
    - Fail closed on any membership lookup failure
"""

from billable_assets.filters.group_filter import (
    GroupFilterEngine,
    filter_assets_by_groups,
    has_asset_group_filtering,
)

__all__ = [
    "GroupFilterEngine",
    "filter_assets_by_groups",
    "has_asset_group_filtering",
]
