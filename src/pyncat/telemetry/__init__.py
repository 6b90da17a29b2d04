"""
Telemetry module for pyncat.

Structured diagnostic logging built on structlog. User-facing status lines are
handled separately by ``pyncat.io.output``.
"""

import structlog

from pyncat.telemetry.config import configure_logging


def get_logger(name: str):
    """
    Get a structured logger for the given name.

    Args:
        name: Dotted logger name, normally the module's ``__name__``

    Returns:
        A structlog bound logger
    """
    # The structlog defaults print to stdout, which carries relayed data
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]
