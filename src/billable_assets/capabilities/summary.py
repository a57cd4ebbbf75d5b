"""
Capability Summary and Change Detection.

Aggregates MW and site counts over a list of assets (typically the
billable assets of a contract after group filtering), and compares two
syncs to find assets that appeared or disappeared.
"""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, Field

from billable_assets.domain.entities import AssetRecord


class CapabilitySummary(BaseModel):
    """MW and site totals of a set of assets."""

    total_mw: float = 0.0
    ongrid_mw: float = 0.0
    hybrid_mw: float = 0.0
    total_sites: int = 0
    ongrid_sites: int = 0
    hybrid_sites: int = 0
    sites_with_solcast: int = 0

    model_config = {"frozen": True}


class AssetChanges(BaseModel):
    """Assets that appeared or disappeared between two syncs."""

    appeared: List[AssetRecord] = Field(default_factory=list)
    disappeared: List[AssetRecord] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def has_changes(self) -> bool:
        return bool(self.appeared or self.disappeared)


def summarize_assets(assets: Sequence[AssetRecord]) -> CapabilitySummary:
    """
    Aggregate MW and site counts.

    Assets without hybrid information count as on-grid.

    Args:
        assets: Assets to aggregate

    Returns:
        CapabilitySummary over the assets
    """
    hybrid = [a for a in assets if a.is_hybrid]
    ongrid = [a for a in assets if not a.is_hybrid]

    return CapabilitySummary(
        total_mw=sum(a.total_mw for a in assets),
        ongrid_mw=sum(a.total_mw for a in ongrid),
        hybrid_mw=sum(a.total_mw for a in hybrid),
        total_sites=len(assets),
        ongrid_sites=len(ongrid),
        hybrid_sites=len(hybrid),
        sites_with_solcast=sum(1 for a in assets if a.has_solcast),
    )


def detect_asset_changes(
    previous: Sequence[AssetRecord],
    current: Sequence[AssetRecord],
) -> AssetChanges:
    """
    Compare two syncs by asset id.

    A first sync (no previous assets) reports no changes.

    Args:
        previous: Assets of the last sync
        current: Assets of this sync

    Returns:
        AssetChanges with appeared/disappeared assets in input order
    """
    if not previous:
        return AssetChanges()

    previous_ids = {a.asset_id for a in previous}
    current_ids = {a.asset_id for a in current}

    return AssetChanges(
        appeared=[a for a in current if a.asset_id not in previous_ids],
        disappeared=[a for a in previous if a.asset_id not in current_ids],
    )
