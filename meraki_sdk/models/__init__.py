"""Public models for the Meraki SDK."""

from meraki_sdk._internal.dispatch.models import ClientConfig, ResponseEnvelope

__all__ = ["ClientConfig", "ResponseEnvelope"]
