"""
Logging configuration for the telemetry module.

Diagnostic events are emitted through structlog and routed to the standard
``logging`` module, writing to standard error so they never mix with relayed
data on standard output.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    Get a boolean value from an environment variable.

    Args:
        name: The name of the environment variable
        default: The default value if the environment variable is not set

    Returns:
        The boolean value
    """
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "y", "t")


def configure_logging(
    debug: Optional[bool] = None,
    log_processors: Optional[List[Any]] = None,
) -> int:
    """
    Configure structlog for the current run.

    Args:
        debug: Whether debug events are shown. Defaults to ``PYNCAT_DEBUG``.
        log_processors: Additional processors inserted before the renderer.

    Returns:
        The effective log level.
    """
    if debug is None:
        debug = get_env_bool("PYNCAT_DEBUG", False)

    level = logging.DEBUG if debug else logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("pyncat")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_processors:
        processors.extend(log_processors)
    processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    return level
