"""Public exceptions for the Meraki SDK."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meraki_sdk._internal.dispatch.models import ResponseEnvelope


class MerakiError(Exception):
    """Base exception for all Meraki SDK errors."""


class MerakiAPIError(MerakiError):
    """Error from the Meraki Dashboard API.

    Carries whatever the failed exchange let us recover: the HTTP status code
    and the ``errors`` list from the response body. Either may be None.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors

    @property
    def envelope(self) -> "ResponseEnvelope":
        """The failure as a ResponseEnvelope."""
        from meraki_sdk._internal.dispatch.models import ResponseEnvelope

        return ResponseEnvelope.fail(self.status_code, self.errors)


class InvalidMethodError(MerakiAPIError):
    """HTTP method is not one of GET, PUT, POST, DELETE."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Invalid method: {method!r}", errors=["Invalid method"])
        self.method = method


class RetriesExhaustedError(MerakiAPIError):
    """Rate limited (429) more times than the retry budget allows."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Rate limited; gave up after {attempts} attempts",
            status_code=429,
            errors=[f"Rate limit retries exhausted after {attempts} attempts"],
        )
        self.attempts = attempts


class MerakiTransportError(MerakiAPIError):
    """Request never produced an HTTP response (connection error, timeout)."""


class PaginationLimitError(MerakiAPIError):
    """Pagination chain is longer than the configured page ceiling."""

    def __init__(self, max_pages: int) -> None:
        super().__init__(
            f"Pagination exceeded {max_pages} pages",
            errors=[f"Pagination exceeded {max_pages} pages"],
        )
        self.max_pages = max_pages


class MerakiConfigError(MerakiError):
    """Configuration error (missing env vars, invalid config)."""


class MerakiValidationError(MerakiError):
    """Validation error for request data."""
