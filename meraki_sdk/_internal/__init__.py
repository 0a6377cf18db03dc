"""Internal modules for Meraki SDK.

WARNING: This package contains the machinery behind MerakiClient.
These are not intended for direct use in application code.

Modules:
    dispatch - Request dispatcher (query encoding, pagination, rate-limit retry)
    http - Shared HTTP client configuration
    log - SDK logger and debug switch
"""
