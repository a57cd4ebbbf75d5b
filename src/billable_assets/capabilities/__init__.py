"""
Capabilities Package - Per-Asset Capability Metadata.

Components:
    - calculate_capabilities: Derive MW, hybrid and Solcast flags from API payloads
    - CapabilitySyncer: Batch-fetch assets and devices from the data API
    - summarize_assets: MW and site totals (on-grid vs hybrid)
    - detect_asset_changes: Assets that appeared/disappeared between syncs
"""

from billable_assets.capabilities.calculator import (
    AssetCapabilities,
    DeviceInfo,
    calculate_capabilities,
    empty_capabilities,
)
from billable_assets.capabilities.summary import (
    AssetChanges,
    CapabilitySummary,
    detect_asset_changes,
    summarize_assets,
)
from billable_assets.capabilities.sync import CapabilitySyncer

__all__ = [
    "AssetCapabilities",
    "AssetChanges",
    "CapabilitySummary",
    "CapabilitySyncer",
    "DeviceInfo",
    "calculate_capabilities",
    "detect_asset_changes",
    "empty_capabilities",
    "summarize_assets",
]
