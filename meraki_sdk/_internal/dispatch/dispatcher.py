"""Request dispatcher shared by every Meraki endpoint wrapper."""

import asyncio
import logging
from typing import Any

import httpx

from meraki_sdk._internal.dispatch.models import (
    RATE_LIMIT_STATUS,
    ClientConfig,
    PaginationLink,
    RequestSpec,
    ResponseEnvelope,
    normalize_method,
)
from meraki_sdk._internal.http import create_http_client
from meraki_sdk._internal.log import enable_debug_logging
from meraki_sdk.exceptions import (
    MerakiAPIError,
    MerakiTransportError,
    MerakiValidationError,
    PaginationLimitError,
    RetriesExhaustedError,
)

logger = logging.getLogger("meraki_sdk.dispatch")


class RequestDispatcher:
    """Issues one logical request against the Dashboard API.

    A logical request may span several HTTP exchanges: rate-limited (429)
    responses are retried after a server-directed backoff, and ``Link: rel=next``
    headers are followed until the last page, with the pages' items merged in
    order. Callers see a single ResponseEnvelope or a single exception.

    Only the configuration and the underlying httpx.AsyncClient are shared,
    and both are read-only, so independent dispatches may run concurrently.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Client configuration.
            http_client: Optional preconfigured transport. When omitted, one is
                created from ``config`` and closed by ``aclose()``.
        """
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or create_http_client(
            api_key=config.api_key,
            timeout=config.timeout_ms / 1000,
            base_url=config.base_url,
        )
        if config.debug:
            enable_debug_logging()

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the transport if this dispatcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def dispatch(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        data: Any | None = None,
        attempt: int = 0,
    ) -> ResponseEnvelope:
        """Fetch a resource, following pagination and retrying on 429.

        Args:
            method: GET, PUT, POST or DELETE (case-insensitive).
            path: Path relative to the base URL.
            query: Optional query parameters; list values repeat as ``name[]``.
            data: Optional JSON body, ignored for GET.
            attempt: Starting retry counter.

        Returns:
            A successful ResponseEnvelope. When pages were followed, ``data`` is
            the concatenation of every page's items and ``status_code`` is the
            last page's.

        Raises:
            InvalidMethodError: Unsupported method; nothing is sent.
            MerakiValidationError: Empty path or negative attempt; nothing is sent.
            RetriesExhaustedError: Still rate limited after ``max_retries``.
            MerakiTransportError: No HTTP response (connection error, timeout).
            PaginationLimitError: More pages than ``max_pages``.
            MerakiAPIError: Any other HTTP error, with its status and errors.
        """
        method = normalize_method(method)
        if not path:
            raise MerakiValidationError("path must not be empty")
        if attempt < 0:
            raise MerakiValidationError("attempt must not be negative")

        spec = RequestSpec(method=method, path=path, query=query, body=data, attempt=attempt)
        items: list[Any] = []
        pages = 1

        while True:
            response = await self._send(spec)

            if response.status_code == RATE_LIMIT_STATUS:
                spec = spec.retry()
                if spec.attempt > self._config.max_retries:
                    logger.warning(
                        "%s %s still rate limited after %d attempts",
                        spec.method,
                        spec.url,
                        spec.attempt,
                    )
                    raise RetriesExhaustedError(spec.attempt)
                backoff_ms = self._backoff_ms(response)
                logger.info(
                    "Rate limited, retrying in %d ms (retry %d/%d)",
                    backoff_ms,
                    spec.attempt,
                    self._config.max_retries,
                )
                await asyncio.sleep(backoff_ms / 1000)
                continue

            if not response.is_success:
                raise _api_error(spec, response)

            body = _parse_body(response)
            link = PaginationLink.from_response(response)
            if link.next is None:
                if pages == 1:
                    return ResponseEnvelope.ok(response.status_code, body)
                items.extend(_as_items(body))
                return ResponseEnvelope.ok(response.status_code, items)

            max_pages = self._config.max_pages
            if max_pages is not None and pages >= max_pages:
                logger.warning("Pagination stopped at %d pages", max_pages)
                raise PaginationLimitError(max_pages)

            items.extend(_as_items(body))
            spec = spec.continue_at(self._continuation_path(link.next))
            pages += 1
            logger.debug("Following next page: %s", spec.path)

    async def _send(self, spec: RequestSpec) -> httpx.Response:
        """Perform one HTTP exchange."""
        json_body = spec.body if spec.method != "GET" else None
        timeout = self._config.timeout_ms / 1000
        try:
            # httpx times each phase separately; this bounds the whole hop.
            async with asyncio.timeout(timeout):
                response = await self._client.request(spec.method, spec.url, json=json_body)
        except httpx.RequestError as e:
            message = str(e) or e.__class__.__name__
            logger.warning("%s %s failed: %s", spec.method, spec.url, message)
            raise MerakiTransportError(message, errors=[message]) from e
        except TimeoutError as e:
            message = f"Request exceeded {self._config.timeout_ms} ms"
            logger.warning("%s %s failed: %s", spec.method, spec.url, message)
            raise MerakiTransportError(message, errors=[message]) from e

        logger.debug("%s %s -> %d", spec.method, spec.url, response.status_code)
        return response

    def _backoff_ms(self, response: httpx.Response) -> int:
        """Milliseconds to wait before retrying a 429."""
        retry_after = response.headers.get("Retry-After")
        if retry_after is not None:
            try:
                return max(int(retry_after.strip()), 0) * 1000
            except ValueError:
                logger.debug("Ignoring unparsable Retry-After: %r", retry_after)
        return self._config.default_backoff_ms

    def _continuation_path(self, next_url: str) -> str:
        """Strip the base URL from a ``next`` link.

        Links pointing elsewhere are returned whole; httpx sends absolute URLs
        as-is. The prefix only matches on a path boundary.
        """
        base_url = self._config.base_url.rstrip("/")
        if next_url.startswith(base_url):
            rest = next_url[len(base_url) :]
            if not rest:
                return "/"
            if rest[0] in "/?":
                return rest
        return next_url


def _parse_body(response: httpx.Response) -> Any:
    """Decode a successful response body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _as_items(body: Any) -> list[Any]:
    """Items a page contributes to a merged result."""
    if body is None:
        return []
    if isinstance(body, list):
        return body
    return [body]


def _api_error(spec: RequestSpec, response: httpx.Response) -> MerakiAPIError:
    """Build the error for a non-retryable HTTP failure."""
    errors: list[str] | None = None
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        errors = [str(error) for error in payload["errors"]]

    logger.warning(
        "%s %s failed with status %d", spec.method, spec.url, response.status_code
    )
    message = "; ".join(errors) if errors else f"HTTP {response.status_code}"
    return MerakiAPIError(message, status_code=response.status_code, errors=errors)
