"""
AMMP Data API Client.

Async HTTP client for the AMMP data API with Bearer token
authentication. Implements the MembershipProvider protocol so it can be
plugged straight into the group filter engine.

Authentication:
    POST /token with the X-Api-Key header returns a JWT access token.
    The token is reused until it gets close to its ``exp`` claim.

Design Notes:
    - No retries; callers decide whether to re-run
    - Timeouts come from DataApiConfig.timeout_seconds
    - Every failure surfaces as DataApiRequestError
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from billable_assets.config.models import BillableAssetsConfig, DataApiConfig
from billable_assets.domain.entities import GroupMember
from billable_assets.interfaces.membership_provider import MembershipProviderError

logger = logging.getLogger(__name__)


class DataApiRequestError(MembershipProviderError):
    """Raised when a data API call fails or returns an unusable payload."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        response_body: Optional[str] = None,
        group_id: Optional[str] = None,
    ) -> None:
        super().__init__(message, group_id=group_id)
        self.url = url
        self.status = status
        self.response_body = response_body


class DataApiClient:
    """
    Client for the AMMP data API.

    Usage:
        >>> async with DataApiClient(DataApiConfig(api_key="...")) as client:
        ...     members = await client.get_group_members("group-id")
    """

    def __init__(
        self,
        config: Optional[DataApiConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Connection settings (defaults to DataApiConfig())
            session: Existing session to use; it is not closed by close()
        """
        self.config = config or DataApiConfig()
        self._session = session
        self._owns_session = session is None
        self._token: Optional[str] = None
        self._token_expiry: Optional[float] = None
        self._token_lock = asyncio.Lock()

    async def __aenter__(self) -> "DataApiClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create the HTTP session."""
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    def clear_token(self) -> None:
        """Forget the cached access token."""
        self._token = None
        self._token_expiry = None
        logger.info("AMMP token cleared")

    # =========================================================================
    # Authentication
    # =========================================================================

    async def _ensure_valid_token(self) -> str:
        """Return a token valid for at least the refresh buffer."""
        async with self._token_lock:
            now = time.time()
            buffer = self.config.token_refresh_buffer_seconds
            if (
                self._token is None
                or self._token_expiry is None
                or self._token_expiry - now < buffer
            ):
                logger.debug("Token missing or expiring soon, acquiring new token")
                await self._acquire_token()
            return self._token

    async def _acquire_token(self) -> None:
        """Exchange the API key for a Bearer token."""
        url = f"{self.config.base_url}/token"
        if not self.config.api_key:
            raise DataApiRequestError("AMMP API key is required", url=url)

        headers = {"Accept": "application/json", "X-Api-Key": self.config.api_key}
        try:
            async with self._session.post(url, headers=headers) as response:
                if response.status != 200:
                    body = await response.text()
                    raise DataApiRequestError(
                        f"Failed to acquire AMMP access token: "
                        f"{response.status} {response.reason}",
                        url=url,
                        status=response.status,
                        response_body=body,
                    )
                data = await response.json(content_type=None)
        except DataApiRequestError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise DataApiRequestError(
                f"Network error acquiring token: {e}", url=url
            ) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise DataApiRequestError("Token response has no access_token", url=url)

        self._token_expiry = decode_token_expiry(token)
        self._token = token
        logger.info(
            f"AMMP token acquired, expires at "
            f"{datetime.fromtimestamp(self._token_expiry).isoformat()}"
        )

    # =========================================================================
    # Requests
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make an authenticated API request and decode the JSON body."""
        if self._session is None:
            await self.connect()

        url = f"{self.config.base_url}{path}"
        token = await self._ensure_valid_token()

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if json_body is not None:
            headers["Content-Type"] = "application/json"

        try:
            async with self._session.request(
                method,
                url,
                json=json_body,
                params=params,
                headers=headers,
            ) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    raise DataApiRequestError(
                        f"AMMP API request failed: {response.status} {response.reason}",
                        url=url,
                        status=response.status,
                        response_body=body,
                    )
                return await response.json(content_type=None)
        except DataApiRequestError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise DataApiRequestError(
                f"Network error calling AMMP API: {e}", url=url
            ) from e

    # =========================================================================
    # Public API
    # =========================================================================

    async def list_assets(self) -> List[Dict[str, Any]]:
        """List all assets visible to the API key."""
        return await self._request("GET", "/assets")

    async def get_asset(self, asset_id: str) -> Dict[str, Any]:
        """Get metadata of a single asset."""
        return await self._request("GET", f"/assets/{quote(asset_id, safe='')}")

    async def get_asset_devices(self, asset_id: str) -> List[Dict[str, Any]]:
        """
        Get the devices of an asset, virtual devices included.

        The endpoint returns either a list or the asset with a nested
        ``devices`` list; both are normalised to the list.
        """
        payload = await self._request(
            "GET",
            f"/assets/{quote(asset_id, safe='')}/devices",
            params={"include_virtual": "true"},
        )
        if isinstance(payload, dict):
            payload = payload.get("devices") or []
        if not isinstance(payload, list):
            return []
        return payload

    async def get_group_members(self, group_id: str) -> List[GroupMember]:
        """
        Fetch the members of an asset group.

        Args:
            group_id: AMMP asset group id

        Returns:
            Members of the group

        Raises:
            DataApiRequestError: On HTTP failure or unexpected payload
        """
        path = f"/asset_groups/{quote(group_id, safe='')}/members"
        try:
            payload = await self._request("GET", path)
        except DataApiRequestError as e:
            e.group_id = group_id
            raise

        # Payload: { group_id, group_name, members: [...] }
        members = payload.get("members") if isinstance(payload, dict) else None
        if not isinstance(members, list):
            raise DataApiRequestError(
                f"Unexpected members format for group {group_id}: "
                f"{type(payload).__name__}",
                url=f"{self.config.base_url}{path}",
                group_id=group_id,
            )

        result: List[GroupMember] = []
        for member in members:
            if not isinstance(member, dict) or not member.get("asset_id"):
                raise DataApiRequestError(
                    f"Member without asset_id in group {group_id}: {member!r}",
                    url=f"{self.config.base_url}{path}",
                    group_id=group_id,
                )
            result.append(
                GroupMember(
                    asset_id=str(member["asset_id"]),
                    asset_name=member.get("asset_name") or "Unknown",
                )
            )

        logger.info(f"Found {len(result)} members in group {group_id}")
        return result

    async def test_connection(self) -> bool:
        """Check that the API is reachable with the configured key."""
        try:
            await self.list_assets()
            return True
        except DataApiRequestError as e:
            logger.error(f"AMMP API connection test failed: {e}")
            return False


def create_data_api_client(config: BillableAssetsConfig) -> DataApiClient:
    """Build a data API client from the root configuration."""
    return DataApiClient(config.data_api)


def decode_token_expiry(token: str) -> float:
    """
    Read the ``exp`` claim (epoch seconds) of a JWT without verifying it.

    Raises:
        DataApiRequestError: If the token is not a decodable JWT
    """
    try:
        segment = token.split(".")[1]
        padded = segment + "=" * (-len(segment) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded))
        return float(payload["exp"])
    except (IndexError, KeyError, TypeError, ValueError) as e:
        raise DataApiRequestError(f"Malformed access token: {e}") from e
