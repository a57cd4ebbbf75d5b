"""
Unit Tests for Domain Entities and Value Objects.

Test Aspects Covered:
    ✅ Business Logic: Field aliases, contract row parsing
    ✅ Edge Cases: Empty group ids, numeric contract ids, extra columns
    ✅ Validation: Negative MW, empty member ids, immutability
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from billable_assets.domain.entities import AssetRecord, ContractGroupConfig, GroupMember
from billable_assets.domain.value_objects import (
    FilterStatus,
    GroupFilterOutcome,
    GroupRole,
    MembershipSet,
)


class TestAssetRecord:
    """Test cases for AssetRecord."""

    def test_camel_case_aliases(self) -> None:
        """
        SCENARIO: Asset breakdown row in camelCase
        EXPECTED: Parsed into snake_case fields
        """
        record = AssetRecord.model_validate(
            {
                "assetId": "a1",
                "assetName": "Site",
                "totalMW": 0.25,
                "isHybrid": True,
                "capacityKWp": 250,
                "hasSolcast": False,
            }
        )

        assert record.asset_id == "a1"
        assert record.total_mw == 0.25
        assert record.is_hybrid is True
        assert record.capacity_kwp == 250.0

    def test_negative_mw_rejected(self) -> None:
        """
        SCENARIO: Negative capacity
        EXPECTED: ValidationError
        """
        with pytest.raises(ValidationError):
            AssetRecord(asset_id="a1", total_mw=-1)

    def test_frozen(self) -> None:
        """
        SCENARIO: Mutating a record
        EXPECTED: ValidationError (records are immutable)
        """
        record = AssetRecord(asset_id="a1")

        with pytest.raises(ValidationError):
            record.total_mw = 5.0


class TestGroupMember:
    """Test cases for GroupMember."""

    def test_default_name(self) -> None:
        assert GroupMember(asset_id="a1").asset_name == "Unknown"

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GroupMember(asset_id="")


class TestContractGroupConfig:
    """Test cases for ContractGroupConfig."""

    def test_from_contract_row(self) -> None:
        """
        SCENARIO: Raw contract row with extra columns
        EXPECTED: Group columns mapped, other columns ignored
        """
        row = {
            "id": 42,
            "company_name": "Acme Solar",
            "ammp_asset_group_id": "grp-p",
            "ammp_asset_group_id_and": "",
            "ammp_asset_group_id_not": "grp-n",
        }

        config = ContractGroupConfig.from_contract(row)

        assert config.contract_id == "42"
        assert config.primary_group_id == "grp-p"
        assert config.and_group_id is None
        assert config.not_group_id == "grp-n"
        assert config.group_ids == ("grp-p", None, "grp-n")

    def test_field_names_accepted(self) -> None:
        """
        SCENARIO: Built with Python field names
        EXPECTED: Same as the column aliases
        """
        config = ContractGroupConfig(primary_group_id="grp-p", not_group_id="")

        assert config.group_ids == ("grp-p", None, None)
        assert config.contract_id is None


class TestValueObjects:
    """Test cases for MembershipSet and GroupFilterOutcome."""

    def test_membership_set(self) -> None:
        members = MembershipSet("grp", GroupRole.AND, frozenset({"a1", "a2"}))

        assert "a1" in members
        assert "a3" not in members
        assert len(members) == 2

    def test_outcome_counts(self) -> None:
        """
        SCENARIO: Two of four assets kept
        EXPECTED: Half reduction, not failed
        """
        outcome = GroupFilterOutcome(
            assets=[AssetRecord(asset_id="a1"), AssetRecord(asset_id="a2")],
            status=FilterStatus.FILTERED,
            input_count=4,
        )

        assert outcome.output_count == 2
        assert outcome.reduction_ratio == pytest.approx(0.5)
        assert outcome.resolution_failed is False
        assert outcome.failed_groups == {}

    def test_outcome_empty_input(self) -> None:
        outcome = GroupFilterOutcome(assets=[], status=FilterStatus.PASSTHROUGH, input_count=0)

        assert outcome.reduction_ratio == 0.0
