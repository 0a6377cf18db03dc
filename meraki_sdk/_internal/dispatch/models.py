"""Pydantic models for the Meraki request dispatcher."""

import os
from typing import Any, Literal, get_args

import httpx
from pydantic import BaseModel, Field, model_validator

from meraki_sdk._internal.dispatch.query import encode_query
from meraki_sdk.exceptions import InvalidMethodError, MerakiConfigError

# =============================================================================
# Constants
# =============================================================================

DEFAULT_BASE_URL = "https://api.meraki.com/api/v1"
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_MAX_RETRIES = 10
DEFAULT_BACKOFF_MS = 5_000
RATE_LIMIT_STATUS = 429

HttpMethod = Literal["GET", "PUT", "POST", "DELETE"]
SUPPORTED_METHODS: frozenset[str] = frozenset(get_args(HttpMethod))


def normalize_method(method: str) -> HttpMethod:
    """Uppercase a method name, rejecting anything outside SUPPORTED_METHODS."""
    if not isinstance(method, str) or method.upper() not in SUPPORTED_METHODS:
        raise InvalidMethodError(method)
    return method.upper()  # type: ignore[return-value]


# =============================================================================
# Configuration
# =============================================================================


class ClientConfig(BaseModel):
    """Read-only settings shared by every request of one client."""

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    default_backoff_ms: int = Field(default=DEFAULT_BACKOFF_MS, ge=0)
    max_pages: int | None = Field(default=None, gt=0)
    debug: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create a config from environment variables.

        Required environment variables:
            MERAKI_DASHBOARD_API_KEY: The Dashboard API key.

        Optional environment variables:
            MERAKI_BASE_URL: API base URL.
            MERAKI_TIMEOUT_MS: Per-request timeout in milliseconds.
            MERAKI_MAX_RETRIES: Rate-limit retries before giving up.
            MERAKI_DEFAULT_BACKOFF_MS: Wait used when a 429 has no Retry-After.
            MERAKI_MAX_PAGES: Ceiling on followed pagination pages.
            MERAKI_DEBUG: Set to "1" to enable debug logging.

        Raises:
            MerakiConfigError: If the API key is missing.
            ValueError: If a numeric variable is not a valid integer.
        """
        api_key = os.environ.get("MERAKI_DASHBOARD_API_KEY")
        if not api_key:
            raise MerakiConfigError("MERAKI_DASHBOARD_API_KEY is not set")

        max_pages = os.environ.get("MERAKI_MAX_PAGES")

        return cls(
            api_key=api_key,
            base_url=os.environ.get("MERAKI_BASE_URL", DEFAULT_BASE_URL),
            timeout_ms=int(os.environ.get("MERAKI_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
            max_retries=int(os.environ.get("MERAKI_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))),
            default_backoff_ms=int(
                os.environ.get("MERAKI_DEFAULT_BACKOFF_MS", str(DEFAULT_BACKOFF_MS))
            ),
            max_pages=int(max_pages) if max_pages else None,
            debug=os.environ.get("MERAKI_DEBUG", "") == "1",
        )


# =============================================================================
# Request / Response
# =============================================================================


class RequestSpec(BaseModel):
    """One hop of a logical request.

    A spec is reborn for every retry (``attempt`` + 1) and every pagination
    continuation (new path, query dropped, ``attempt`` back to 0).
    """

    method: HttpMethod
    path: str
    query: dict[str, Any] | None = None
    body: Any | None = None
    attempt: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def url(self) -> str:
        return self.path + encode_query(self.query)

    def retry(self) -> "RequestSpec":
        return self.model_copy(update={"attempt": self.attempt + 1})

    def continue_at(self, path: str) -> "RequestSpec":
        # The continuation URL already carries the query the server wants.
        return self.model_copy(update={"path": path, "query": None, "attempt": 0})


class ResponseEnvelope(BaseModel):
    """Normalized result of a dispatch.

    Invariants:
        success=True  -> errors is None
        success=False -> data is None
    """

    success: bool
    status_code: int | None = None
    data: Any | None = None
    errors: list[str] | None = None

    @model_validator(mode="after")
    def check_shape(self) -> "ResponseEnvelope":
        if self.success and self.errors is not None:
            raise ValueError("successful envelope must not carry errors")
        if not self.success and self.data is not None:
            raise ValueError("failed envelope must not carry data")
        return self

    @classmethod
    def ok(cls, status_code: int, data: Any) -> "ResponseEnvelope":
        return cls(success=True, status_code=status_code, data=data)

    @classmethod
    def fail(cls, status_code: int | None, errors: list[str] | None) -> "ResponseEnvelope":
        return cls(success=False, status_code=status_code, errors=errors)


class PaginationLink(BaseModel):
    """Relations parsed from a response's ``Link`` header. Only ``next`` is used."""

    next: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "PaginationLink":
        next_link = response.links.get("next")
        return cls(next=next_link.get("url") if next_link else None)
