"""AWS Lambda entry points (API Gateway proxy events)."""

import logging

from ..config import LOG_LEVEL

_logging_configured = False


def configure_logging():
    """Set up logging on the first invocation of a container."""
    global _logging_configured
    if _logging_configured:
        return
    # No-op when the runtime already attached a root handler
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("mediagen").setLevel(LOG_LEVEL)
    _logging_configured = True
