"""Meraki SDK for Python.

Async client for the Cisco Meraki Dashboard API.

Public API:
    MerakiClient - User-facing client
    ClientConfig - Client settings (API key, base URL, timeouts, retry budget)
    ResponseEnvelope - Result of every request

Internal (system-level, not for direct use):
    _internal.dispatch - Request dispatcher
"""

import logging

from meraki_sdk._version import __version__
from meraki_sdk.client import MerakiClient
from meraki_sdk.exceptions import (
    InvalidMethodError,
    MerakiAPIError,
    MerakiConfigError,
    MerakiError,
    MerakiTransportError,
    MerakiValidationError,
    PaginationLimitError,
    RetriesExhaustedError,
)
from meraki_sdk.models import ClientConfig, ResponseEnvelope

logging.getLogger("meraki_sdk").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "MerakiClient",
    "ClientConfig",
    "ResponseEnvelope",
    "MerakiError",
    "MerakiAPIError",
    "InvalidMethodError",
    "RetriesExhaustedError",
    "MerakiTransportError",
    "PaginationLimitError",
    "MerakiConfigError",
    "MerakiValidationError",
]
