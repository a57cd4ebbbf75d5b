"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import List

import pytest

from billable_assets.adapters.static_provider import StaticMembershipProvider
from billable_assets.adapters.console_logger import ConsoleAuditLogger
from billable_assets.domain.entities import AssetRecord
from billable_assets.filters.group_filter import GroupFilterEngine
from billable_assets.observability.audit_logger import StructlogAuditLogger


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding fixture files."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_config_path(fixtures_path: Path) -> Path:
    """Path to sample configuration file."""
    return fixtures_path / "sample_config.yaml"


@pytest.fixture
def inventory() -> List[AssetRecord]:
    """Three-asset inventory used by the reference scenario."""
    return [
        AssetRecord(asset_id="a1", asset_name="Site 1", total_mw=1.0),
        AssetRecord(asset_id="a2", asset_name="Site 2", total_mw=2.0),
        AssetRecord(asset_id="a3", asset_name="Site 3", total_mw=3.0),
    ]


@pytest.fixture
def sample_inventory() -> List[AssetRecord]:
    """Create a mixed on-grid/hybrid inventory."""
    return [
        AssetRecord(
            asset_id="site-lagos-01",
            asset_name="Lagos Mall Rooftop",
            total_mw=0.45,
            capacity_kwp=450.0,
            is_hybrid=False,
            has_solcast=True,
            onboarding_date="2023-02-01",
        ),
        AssetRecord(
            asset_id="site-abuja-02",
            asset_name="Abuja Hospital",
            total_mw=0.12,
            capacity_kwp=120.0,
            is_hybrid=True,
            has_solcast=False,
            onboarding_date="2023-06-15",
        ),
        AssetRecord(
            asset_id="site-kano-03",
            asset_name="Kano Factory",
            total_mw=1.2,
            capacity_kwp=1200.0,
            is_hybrid=True,
            has_solcast=True,
        ),
        AssetRecord(
            asset_id="site-ibadan-04",
            asset_name="Ibadan Telecom Tower",
            total_mw=0.015,
            capacity_kwp=15.0,
        ),
    ]


@pytest.fixture
def provider() -> StaticMembershipProvider:
    """Memberships of the reference scenario."""
    return StaticMembershipProvider(
        {
            "grp-primary": ["a1", "a2", "a3"],
            "grp-and": ["a2", "a3"],
            "grp-not": ["a3"],
            "grp-empty": [],
        }
    )


@pytest.fixture
def engine(provider: StaticMembershipProvider) -> GroupFilterEngine:
    """Group filter engine backed by the static provider."""
    return GroupFilterEngine(provider)


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    """Create console logger for testing."""
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def audit_logger() -> StructlogAuditLogger:
    """Create structlog audit logger for testing."""
    return StructlogAuditLogger(service_name="billable_assets_test")
