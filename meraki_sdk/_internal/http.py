"""Shared HTTP client configuration."""

import httpx

from meraki_sdk._version import __version__

DEFAULT_TIMEOUT = 30.0
API_KEY_HEADER = "X-Cisco-Meraki-API-Key"


def create_http_client(
    *,
    api_key: str,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        api_key: Dashboard API key, sent on every request.
        timeout: Per-request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        follow_redirects=True,
        headers={
            API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"meraki-sdk/{__version__}",
        },
    )
