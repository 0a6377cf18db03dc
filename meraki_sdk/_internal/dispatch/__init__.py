"""Request dispatch for the Meraki Dashboard API.

WARNING: This is a system-level module used by MerakiClient.
Do not call directly from user code.
"""

from meraki_sdk._internal.dispatch.dispatcher import RequestDispatcher
from meraki_sdk._internal.dispatch.models import (
    ClientConfig,
    PaginationLink,
    RequestSpec,
    ResponseEnvelope,
)
from meraki_sdk._internal.dispatch.query import encode_query

__all__ = [
    "RequestDispatcher",
    "ClientConfig",
    "PaginationLink",
    "RequestSpec",
    "ResponseEnvelope",
    "encode_query",
]
