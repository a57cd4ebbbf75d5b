"""
Core Domain Entities.

This module defines the entities the billing scope logic operates on:
the asset inventory rows of a customer, the group configuration of a
contract, and the member records returned for an asset group.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class AssetRecord(BaseModel):
    """One physical or metered asset known to a customer."""

    asset_id: str = Field(..., alias="assetId", description="Stable inventory id")
    asset_name: str = Field(default="", alias="assetName", description="Display name")
    total_mw: float = Field(
        default=0.0, ge=0, alias="totalMW", description="Managed capacity in MW"
    )
    is_hybrid: Optional[bool] = Field(default=None, alias="isHybrid")
    capacity_kwp: Optional[float] = Field(default=None, ge=0, alias="capacityKWp")
    has_solcast: Optional[bool] = Field(
        default=None,
        alias="hasSolcast",
        description="Solar forecast data available",
    )
    onboarding_date: Optional[str] = Field(default=None, alias="onboardingDate")

    model_config = {"frozen": True, "populate_by_name": True}


class GroupMember(BaseModel):
    """A member of an external asset group."""

    asset_id: str = Field(..., min_length=1)
    asset_name: str = Field(default="Unknown")

    model_config = {"frozen": True}


class ContractGroupConfig(BaseModel):
    """
    Asset group filter attached to a contract.

    The formula applied is ``primary ∩ and - not``. Without a primary
    group the contract has no group restriction at all.
    """

    contract_id: Optional[str] = Field(default=None, alias="id")
    primary_group_id: Optional[str] = Field(default=None, alias="ammp_asset_group_id")
    and_group_id: Optional[str] = Field(default=None, alias="ammp_asset_group_id_and")
    not_group_id: Optional[str] = Field(default=None, alias="ammp_asset_group_id_not")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("primary_group_id", "and_group_id", "not_group_id", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("contract_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @classmethod
    def from_contract(cls, contract: Mapping[str, Any]) -> "ContractGroupConfig":
        """Build from a raw contract row (``ammp_asset_group_id*`` columns)."""
        return cls.model_validate(dict(contract))

    @property
    def group_ids(self) -> tuple[Optional[str], Optional[str], Optional[str]]:
        return (self.primary_group_id, self.and_group_id, self.not_group_id)
