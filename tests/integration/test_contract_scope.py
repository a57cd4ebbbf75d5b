"""
Integration Tests for Contract Scope Resolution.

Runs ContractScopeResolver end to end, with the in-memory provider and
with the data API client against an in-process fake API.

Test Aspects Covered:
    ✅ Business Logic: Billable assets and MW per contract
    ✅ Integration: Resolver + engine + data API client over HTTP
    ✅ Error Handling: Unresolvable groups bill nothing
    ✅ Edge Cases: Contracts without groups make no lookups
"""

from __future__ import annotations

import base64
import json
import time
from typing import Dict, List, Tuple

import pytest
from aiohttp import test_utils, web

from billable_assets.adapters.data_api_client import DataApiClient
from billable_assets.adapters.static_provider import StaticMembershipProvider
from billable_assets.config.models import DataApiConfig
from billable_assets.domain.entities import AssetRecord
from billable_assets.domain.value_objects import FilterStatus
from billable_assets.filters.group_filter import GroupFilterEngine
from billable_assets.observability.audit_logger import StructlogAuditLogger
from billable_assets.pipeline.contract_scope import ContractScopeResolver


def _token() -> str:
    payload = base64.urlsafe_b64encode(
        json.dumps({"exp": time.time() + 3600}).encode()
    ).decode().rstrip("=")
    return f"e30.{payload}.sig"


def build_api(groups: Dict[str, List[str]]) -> Tuple[web.Application, List[str]]:
    """Fake data API serving the token and group member endpoints."""
    calls: List[str] = []

    async def token(request: web.Request) -> web.Response:
        return web.json_response({"access_token": _token()})

    async def members(request: web.Request) -> web.Response:
        group_id = request.match_info["group_id"]
        calls.append(group_id)
        if group_id not in groups:
            return web.json_response({"detail": "Asset group not found"}, status=404)
        return web.json_response(
            {
                "group_id": group_id,
                "members": [{"asset_id": a, "asset_name": a} for a in groups[group_id]],
            }
        )

    app = web.Application()
    app.router.add_post("/v1/token", token)
    app.router.add_get("/v1/asset_groups/{group_id}/members", members)
    return app, calls


class TestContractScopeWithStaticProvider:
    """Resolver backed by the in-memory provider."""

    @pytest.mark.asyncio
    async def test_contract_with_groups(
        self,
        provider: StaticMembershipProvider,
        inventory: List[AssetRecord],
    ) -> None:
        """
        SCENARIO: Contract row with primary, AND and NOT groups
        EXPECTED: Only a2 billable, 2 MW
        """
        # Arrange
        resolver = ContractScopeResolver(GroupFilterEngine(provider))
        contract = {
            "id": "c-1",
            "ammp_asset_group_id": "grp-primary",
            "ammp_asset_group_id_and": "grp-and",
            "ammp_asset_group_id_not": "grp-not",
        }

        # Act
        scope = await resolver.resolve(contract, inventory)

        # Assert
        assert [a.asset_id for a in scope.assets] == ["a2"]
        assert scope.summary.total_mw == pytest.approx(2.0)
        assert scope.group_filtered is True
        assert scope.status is FilterStatus.FILTERED
        assert scope.contract_id == "c-1"

    @pytest.mark.asyncio
    async def test_contract_without_groups_bills_everything(
        self,
        provider: StaticMembershipProvider,
        sample_inventory: List[AssetRecord],
    ) -> None:
        """
        SCENARIO: Contract without group columns set
        EXPECTED: Whole inventory billable, no lookups
        """
        resolver = ContractScopeResolver(GroupFilterEngine(provider))

        scope = await resolver.resolve({"id": "c-2"}, sample_inventory)

        assert scope.assets == sample_inventory
        assert scope.group_filtered is False
        assert scope.status is FilterStatus.PASSTHROUGH
        assert scope.summary.total_sites == 4
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_failed_group_bills_nothing(
        self,
        provider: StaticMembershipProvider,
        inventory: List[AssetRecord],
    ) -> None:
        """
        SCENARIO: Primary group lookup fails
        EXPECTED: No assets, zero MW, failure visible on the scope
        """
        provider.fail_group("grp-primary")
        audit_logger = StructlogAuditLogger(service_name="billable_assets_test")
        resolver = ContractScopeResolver(GroupFilterEngine(provider, audit_logger))

        scope = await resolver.resolve(
            {"id": "c-3", "ammp_asset_group_id": "grp-primary"}, inventory
        )

        assert scope.assets == []
        assert scope.summary.total_mw == 0.0
        assert scope.resolution_failed is True
        assert scope.group_filtered is False
        assert any(
            e["event_type"] == "group_resolution_failed"
            for e in audit_logger.get_events()
        )


class TestContractScopeOverHttp:
    """Resolver backed by DataApiClient and a fake data API."""

    @pytest.mark.asyncio
    async def test_groups_resolved_over_http(
        self,
        sample_inventory: List[AssetRecord],
    ) -> None:
        """
        SCENARIO: Primary group of three sites, NOT group of one
        EXPECTED: Two sites billable in inventory order
        """
        # Arrange
        app, calls = build_api(
            {
                "grp-nigeria": ["site-kano-03", "site-lagos-01", "site-abuja-02"],
                "grp-excluded": ["site-abuja-02"],
            }
        )

        async with test_utils.TestServer(app) as server:
            config = DataApiConfig(base_url=str(server.make_url("/v1")), api_key="k")
            async with DataApiClient(config) as client:
                resolver = ContractScopeResolver(GroupFilterEngine(client))

                # Act
                scope = await resolver.resolve(
                    {
                        "id": "c-http",
                        "ammp_asset_group_id": "grp-nigeria",
                        "ammp_asset_group_id_not": "grp-excluded",
                    },
                    sample_inventory,
                )

        # Assert
        assert [a.asset_id for a in scope.assets] == ["site-lagos-01", "site-kano-03"]
        assert scope.summary.total_mw == pytest.approx(1.65)
        assert scope.summary.hybrid_sites == 1
        assert sorted(calls) == ["grp-excluded", "grp-nigeria"]

    @pytest.mark.asyncio
    async def test_unknown_not_group_fails_closed(
        self,
        sample_inventory: List[AssetRecord],
    ) -> None:
        """
        SCENARIO: NOT group id unknown to the API (404)
        EXPECTED: No assets billable rather than ignoring the exclusion
        """
        app, calls = build_api({"grp-nigeria": ["site-kano-03", "site-lagos-01"]})

        async with test_utils.TestServer(app) as server:
            config = DataApiConfig(base_url=str(server.make_url("/v1")), api_key="k")
            async with DataApiClient(config) as client:
                resolver = ContractScopeResolver(GroupFilterEngine(client))

                scope = await resolver.resolve(
                    {
                        "id": "c-http",
                        "ammp_asset_group_id": "grp-nigeria",
                        "ammp_asset_group_id_not": "grp-deleted",
                    },
                    sample_inventory,
                )

        assert scope.assets == []
        assert scope.resolution_failed is True
