"""User-facing client for the Meraki Dashboard API.

Example usage:
    from meraki_sdk import MerakiClient

    async with MerakiClient.from_env() as client:
        orgs = await client.get_organizations()
        for org in orgs.data:
            networks = await client.get_organization_networks(org["id"])

Every endpoint method funnels through the shared RequestDispatcher, so
pagination and rate-limit retries are handled for all of them.
"""

from typing import Any

import httpx

from meraki_sdk._internal.dispatch import ClientConfig, RequestDispatcher, ResponseEnvelope


class MerakiClient:
    """Async client for the Meraki Dashboard API."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration.
            http_client: Optional preconfigured httpx.AsyncClient.
        """
        self._dispatcher = RequestDispatcher(config, http_client=http_client)

    @classmethod
    def from_env(cls) -> "MerakiClient":
        """Create a client from MERAKI_* environment variables.

        See ClientConfig.from_env() for the variables read.

        Raises:
            MerakiConfigError: If MERAKI_DASHBOARD_API_KEY is not set.
        """
        return cls(ClientConfig.from_env())

    @property
    def config(self) -> ClientConfig:
        return self._dispatcher.config

    async def __aenter__(self) -> "MerakiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP connections."""
        await self._dispatcher.aclose()

    # =========================================================================
    # Generic Requests
    # =========================================================================

    async def dispatch(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        data: Any | None = None,
    ) -> ResponseEnvelope:
        """Send a request to any Dashboard API path.

        Args:
            method: GET, PUT, POST or DELETE.
            path: Path relative to the base URL, e.g. "/organizations".
            query: Optional query parameters.
            data: Optional JSON body (not sent for GET).

        Returns:
            The successful ResponseEnvelope.
        """
        return await self._dispatcher.dispatch(method, path, query=query, data=data)

    async def get(self, path: str, query: dict[str, Any] | None = None) -> ResponseEnvelope:
        return await self.dispatch("GET", path, query=query)

    async def post(self, path: str, data: Any | None = None) -> ResponseEnvelope:
        return await self.dispatch("POST", path, data=data)

    async def put(self, path: str, data: Any | None = None) -> ResponseEnvelope:
        return await self.dispatch("PUT", path, data=data)

    async def delete(self, path: str) -> ResponseEnvelope:
        return await self.dispatch("DELETE", path)

    # =========================================================================
    # Organizations
    # =========================================================================

    async def get_organizations(self) -> ResponseEnvelope:
        """List the organizations the API key has access to."""
        return await self.get("/organizations")

    async def get_organization(self, organization_id: str) -> ResponseEnvelope:
        """Return an organization."""
        return await self.get(f"/organizations/{organization_id}")

    async def get_organization_networks(
        self,
        organization_id: str,
        query: dict[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """List the networks in an organization.

        Args:
            organization_id: Organization ID.
            query: Optional filters, e.g. {"tags": ["a", "b"], "perPage": 100}.
        """
        return await self.get(f"/organizations/{organization_id}/networks", query)

    async def get_organization_devices(
        self,
        organization_id: str,
        query: dict[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """List the devices in an organization.

        Args:
            organization_id: Organization ID.
            query: Optional filters, e.g. {"productTypes": ["camera"]}.
        """
        return await self.get(f"/organizations/{organization_id}/devices", query)

    async def get_organization_inventory_devices(
        self,
        organization_id: str,
        query: dict[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """List the devices claimed into an organization's inventory.

        Args:
            organization_id: Organization ID.
            query: Optional filters, e.g. {"usedState": "used"}.
        """
        return await self.get(f"/organizations/{organization_id}/inventory/devices", query)

    # =========================================================================
    # Networks
    # =========================================================================

    async def get_network_devices(self, network_id: str) -> ResponseEnvelope:
        """List the devices in a network."""
        return await self.get(f"/networks/{network_id}/devices")

    # =========================================================================
    # Cameras
    # =========================================================================

    async def generate_device_camera_snapshot(
        self,
        serial: str,
        body: dict[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """Generate a snapshot of what the camera sees.

        Args:
            serial: Camera serial number.
            body: Optional request body, e.g. {"timestamp": "2024-01-01T00:00:00Z"}.

        Returns:
            Envelope whose data holds the snapshot ``url`` and its ``expiry``.
        """
        return await self.post(f"/devices/{serial}/camera/generateSnapshot", body)

    async def get_device_camera_video_link(
        self,
        serial: str,
        query: dict[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """Return a link to the camera's video in Dashboard.

        Args:
            serial: Camera serial number.
            query: Optional parameters, e.g. {"timestamp": "2024-01-01T00:00:00Z"}.
        """
        return await self.get(f"/devices/{serial}/camera/videoLink", query)
