"""
Asset Capability Calculator.

Derives the capability metadata of an asset from its data API payload
and device list:
    - Capacity (total_pv_power in W -> kWp -> MW)
    - Solcast (solar forecast) availability and its onboarding date
    - Battery, genset, hybrid EMS and hybrid meter detection
    - Hybrid classification used for on-grid/hybrid MW split
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from billable_assets.domain.entities import AssetRecord

BATTERY_DEVICE_TYPES = {"battery_system", "battery_inverter"}
GENSET_DEVICE_TYPES = {"fuel_sensor", "genset"}
HYBRID_METER_KEYWORDS = ("gen", "genset", "generator", "battery", "batt", "bess")


class DeviceInfo(BaseModel):
    """A device attached to an asset."""

    device_id: str
    device_name: str = "Unknown Device"
    device_type: str = "unknown"
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    data_provider: Optional[str] = None
    created: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DeviceInfo":
        return cls(
            device_id=str(payload.get("device_id", "")),
            device_name=payload.get("device_name") or "Unknown Device",
            device_type=payload.get("device_type") or "unknown",
            manufacturer=payload.get("manufacturer") or None,
            model=payload.get("model") or None,
            data_provider=payload.get("data_provider") or None,
            created=payload.get("created") or None,
        )

    @property
    def is_solcast(self) -> bool:
        return self.data_provider == "solcast" or self.device_type == "satellite"


class AssetCapabilities(BaseModel):
    """Capabilities of one asset, as synced from the data API."""

    asset_id: str
    asset_name: str
    total_mw: float = Field(ge=0)
    capacity_kwp: float = Field(ge=0)
    has_solcast: bool = False
    has_battery: bool = False
    has_genset: bool = False
    has_hybrid_ems: bool = False
    has_hybrid_meter: bool = False
    onboarding_date: Optional[str] = None
    solcast_onboarding_date: Optional[str] = None
    devices: List[DeviceInfo] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def device_count(self) -> int:
        return len(self.devices)

    @property
    def is_hybrid(self) -> bool:
        return (
            self.has_battery
            or self.has_genset
            or self.has_hybrid_ems
            or self.has_hybrid_meter
        )

    def to_asset_record(self) -> AssetRecord:
        """Project onto the inventory row consumed by the group filter."""
        return AssetRecord(
            asset_id=self.asset_id,
            asset_name=self.asset_name,
            total_mw=self.total_mw,
            is_hybrid=self.is_hybrid,
            capacity_kwp=self.capacity_kwp,
            has_solcast=self.has_solcast,
            onboarding_date=self.onboarding_date,
        )


def calculate_capabilities(
    asset: Mapping[str, Any],
    devices: Sequence[Mapping[str, Any]],
    cached_onboarding_date: Optional[str] = None,
    cached_solcast_onboarding_date: Optional[str] = None,
) -> AssetCapabilities:
    """
    Calculate capabilities for a single asset.

    Args:
        asset: Asset payload (asset_id, asset_name, total_pv_power, created)
        devices: Device payloads of the asset
        cached_onboarding_date: Onboarding date kept from a previous sync
        cached_solcast_onboarding_date: Solcast date kept from a previous sync

    Returns:
        AssetCapabilities of the asset
    """
    infos = [DeviceInfo.from_payload(d) for d in devices]

    solcast_device = next((d for d in infos if d.is_solcast), None)
    has_solcast = solcast_device is not None
    solcast_onboarding_date = None
    if has_solcast:
        solcast_onboarding_date = solcast_device.created or cached_solcast_onboarding_date

    has_battery = any(d.device_type in BATTERY_DEVICE_TYPES for d in infos)
    has_genset = any(d.device_type in GENSET_DEVICE_TYPES for d in infos)
    has_hybrid_ems = any(
        d.device_type == "ems" and "hybrid" in d.device_name.lower() for d in infos
    )
    has_hybrid_meter = any(_is_hybrid_meter(d) for d in infos)

    # total_pv_power is in Watts
    capacity_kwp = (asset.get("total_pv_power") or 0) / 1000

    return AssetCapabilities(
        asset_id=str(asset["asset_id"]),
        asset_name=asset.get("asset_name") or "Unknown",
        total_mw=capacity_kwp / 1000,
        capacity_kwp=capacity_kwp,
        has_solcast=has_solcast,
        has_battery=has_battery,
        has_genset=has_genset,
        has_hybrid_ems=has_hybrid_ems,
        has_hybrid_meter=has_hybrid_meter,
        onboarding_date=cached_onboarding_date or asset.get("created") or None,
        solcast_onboarding_date=solcast_onboarding_date,
        devices=infos,
    )


def _is_hybrid_meter(device: DeviceInfo) -> bool:
    if device.device_type != "meter":
        return False
    name = device.device_name.lower()
    return any(keyword in name for keyword in HYBRID_METER_KEYWORDS)


def empty_capabilities(
    asset_id: str,
    asset_name: str,
    cached: Optional[Dict[str, Optional[str]]] = None,
) -> AssetCapabilities:
    """
    Placeholder capabilities for an asset whose details could not be fetched.

    Keeps the asset visible with zero capacity instead of dropping it.
    """
    cached = cached or {}
    return AssetCapabilities(
        asset_id=asset_id,
        asset_name=asset_name,
        total_mw=0.0,
        capacity_kwp=0.0,
        onboarding_date=cached.get("onboarding_date"),
        solcast_onboarding_date=cached.get("solcast_onboarding_date"),
    )
