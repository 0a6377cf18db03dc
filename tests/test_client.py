"""Tests for MerakiClient."""

import asyncio
import json
import os
from unittest.mock import patch

import httpx
import pytest
import respx

from meraki_sdk import ClientConfig, MerakiClient, ResponseEnvelope
from meraki_sdk.exceptions import InvalidMethodError, MerakiConfigError

BASE_URL = "https://api.test/api/v1"


def api_route(method, path):
    return respx.route(method=method, host="api.test", path=f"/api/v1{path}")


def run(call):
    """Run ``call(client)`` on a fresh client and return its result."""

    async def _run():
        async with MerakiClient(ClientConfig(api_key="k", base_url=BASE_URL)) as client:
            return await call(client)

    return asyncio.run(_run())


class TestMerakiClientFromEnv:
    """Tests for MerakiClient.from_env()."""

    def test_from_env_with_api_key(self):
        """Should create a client from the environment."""
        env = {"MERAKI_DASHBOARD_API_KEY": "env-key", "MERAKI_MAX_RETRIES": "4"}
        with patch.dict(os.environ, env, clear=True):
            client = MerakiClient.from_env()
        assert client.config.api_key == "env-key"
        assert client.config.max_retries == 4

    def test_from_env_missing_api_key(self):
        """Should raise MerakiConfigError without an API key."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(MerakiConfigError):
            MerakiClient.from_env()


class TestGenericRequests:
    """Tests for get/post/put/delete/dispatch."""

    @respx.mock
    def test_get_with_query(self):
        """Should GET with the encoded query."""
        route = api_route("GET", "/networks/N1/clients").mock(
            return_value=httpx.Response(200, json=[])
        )

        envelope = run(lambda c: c.get("/networks/N1/clients", {"timespan": 3600}))

        assert isinstance(envelope, ResponseEnvelope)
        assert str(route.calls.last.request.url).endswith("?timespan=3600")

    @respx.mock
    def test_put_sends_body(self):
        """Should PUT the JSON body."""
        route = api_route("PUT", "/networks/N1").mock(
            return_value=httpx.Response(200, json={"name": "HQ"})
        )

        envelope = run(lambda c: c.put("/networks/N1", {"name": "HQ"}))

        assert json.loads(route.calls.last.request.content) == {"name": "HQ"}
        assert envelope.data == {"name": "HQ"}

    @respx.mock
    def test_delete(self):
        """Should DELETE without a body."""
        route = api_route("DELETE", "/networks/N1").mock(return_value=httpx.Response(204))

        envelope = run(lambda c: c.delete("/networks/N1"))

        assert route.called
        assert envelope.status_code == 204

    def test_dispatch_rejects_invalid_method(self):
        """Should surface InvalidMethodError from the dispatcher."""
        with pytest.raises(InvalidMethodError):
            run(lambda c: c.dispatch("patch", "/networks/N1"))


class TestEndpointMethods:
    """Tests for endpoint wrappers."""

    @respx.mock
    def test_get_organizations_follows_pages(self):
        """Should return every organization across pages."""
        page2 = f"{BASE_URL}/organizations?startingAfter=1"
        api_route("GET", "/organizations").mock(
            side_effect=[
                httpx.Response(200, json=[{"id": "1"}], headers={"Link": f"<{page2}>; rel=next"}),
                httpx.Response(200, json=[{"id": "2"}]),
            ]
        )

        envelope = run(lambda c: c.get_organizations())

        assert envelope.data == [{"id": "1"}, {"id": "2"}]

    @respx.mock
    def test_get_organization(self):
        """Should GET a single organization."""
        route = api_route("GET", "/organizations/42").mock(
            return_value=httpx.Response(200, json={"id": "42"})
        )

        envelope = run(lambda c: c.get_organization("42"))

        assert route.called
        assert envelope.data == {"id": "42"}

    @respx.mock
    def test_get_organization_networks_with_tags(self):
        """Should encode list filters as repeated name[] pairs."""
        route = api_route("GET", "/organizations/42/networks").mock(
            return_value=httpx.Response(200, json=[])
        )

        run(lambda c: c.get_organization_networks("42", {"tags": ["a", "b"]}))

        assert str(route.calls.last.request.url).endswith("?tags[]=a&tags[]=b")

    @respx.mock
    def test_get_organization_devices(self):
        """Should GET organization devices."""
        route = api_route("GET", "/organizations/42/devices").mock(
            return_value=httpx.Response(200, json=[{"serial": "Q2AA"}])
        )

        envelope = run(lambda c: c.get_organization_devices("42", {"productTypes": ["camera"]}))

        assert str(route.calls.last.request.url).endswith("?productTypes[]=camera")
        assert envelope.data == [{"serial": "Q2AA"}]

    @respx.mock
    def test_get_organization_inventory_devices(self):
        """Should GET the organization's inventory devices."""
        route = api_route("GET", "/organizations/42/inventory/devices").mock(
            return_value=httpx.Response(200, json=[{"serial": "Q2AA", "model": "MV12"}])
        )

        envelope = run(lambda c: c.get_organization_inventory_devices("42"))

        assert route.called
        assert envelope.data == [{"serial": "Q2AA", "model": "MV12"}]

    @respx.mock
    def test_get_network_devices(self):
        """Should GET network devices."""
        route = api_route("GET", "/networks/N1/devices").mock(
            return_value=httpx.Response(200, json=[])
        )

        run(lambda c: c.get_network_devices("N1"))

        assert route.called

    @respx.mock
    def test_generate_device_camera_snapshot(self):
        """Should POST the snapshot request body."""
        route = api_route("POST", "/devices/Q2AA/camera/generateSnapshot").mock(
            return_value=httpx.Response(
                202, json={"url": "https://snap/1.jpg", "expiry": "2024-01-01T00:05:00Z"}
            )
        )

        envelope = run(
            lambda c: c.generate_device_camera_snapshot(
                "Q2AA", {"timestamp": "2024-01-01T00:00:00Z"}
            )
        )

        assert json.loads(route.calls.last.request.content) == {
            "timestamp": "2024-01-01T00:00:00Z"
        }
        assert envelope.data["url"] == "https://snap/1.jpg"

    @respx.mock
    def test_get_device_camera_video_link(self):
        """Should GET the video link with an encoded timestamp."""
        route = api_route("GET", "/devices/Q2AA/camera/videoLink").mock(
            return_value=httpx.Response(200, json={"url": "https://dashboard/video"})
        )

        run(lambda c: c.get_device_camera_video_link("Q2AA", {"timestamp": "2024-01-01T00:00:00Z"}))

        assert str(route.calls.last.request.url).endswith(
            "?timestamp=2024-01-01T00%3A00%3A00Z"
        )
