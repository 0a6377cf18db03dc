"""SDK logger and the debug-to-stderr switch."""

import logging
import sys

logger = logging.getLogger("meraki_sdk")

_DEBUG_HANDLER_NAME = "meraki-sdk-debug"


def enable_debug_logging() -> None:
    """Send SDK debug logs to stderr. Safe to call more than once."""
    if any(h.get_name() == _DEBUG_HANDLER_NAME for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_DEBUG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("[meraki-sdk] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
