"""
Configuration for pyncat.

``CmdLineArgs`` is the validated configuration produced by the command-line
parser. Runtime tunables (timeouts, poll interval) are looked up through a
hierarchy: explicit configuration mapping, then ``PYNCAT_*`` environment
variables, then the defaults defined here.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pyncat.errors import ConfigurationError

DEFAULT_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 44444
MIN_PORT = 1
MAX_PORT = 65535

BUFFER_SIZE = 1024
CONNECT_TIMEOUT = 3.5
LISTEN_BACKLOG = 1
POLL_INTERVAL = 0.1

ENV_PREFIX = "PYNCAT_"

DEFAULTS: Dict[str, Any] = {
    "connect_timeout": CONNECT_TIMEOUT,
    "poll_interval": POLL_INTERVAL,
}


class PipeType(Enum):
    """Relay mode that determines which pipelines a node builds."""

    STREAM = "stream"
    FILE = "file"
    PROCESS = "process"
    STATUS = "status"
    TEXT = "text"


class TransferOpt(Enum):
    """File pipeline direction."""

    NONE = "none"
    COLLECT = "collect"
    TRANSMIT = "transmit"


@dataclass(frozen=True)
class CmdLineArgs:
    """Validated command-line configuration."""

    listen: bool = False
    verbose: bool = False
    debug: bool = False
    pipe_variant: PipeType = PipeType.STREAM
    transfer_opt: TransferOpt = TransferOpt.NONE
    port: int = DEFAULT_PORT
    exe_path: Optional[str] = None
    file_path: Optional[str] = None
    payload: Optional[str] = None
    address: str = DEFAULT_ADDRESS
    host_name: Optional[str] = None

    @property
    def using_exe(self) -> bool:
        return bool(self.exe_path)

    @property
    def transfer(self) -> bool:
        return self.transfer_opt is not TransferOpt.NONE

    @property
    def using_payload(self) -> bool:
        return bool(self.payload)

    @property
    def zero_io(self) -> bool:
        return self.pipe_variant is PipeType.STATUS


def valid_port(port: int) -> bool:
    """Determine whether the given integer is a valid network port number."""
    return isinstance(port, int) and MIN_PORT <= port <= MAX_PORT


def get_env_config(key: str) -> Optional[str]:
    """Get a configuration value from the environment.

    Args:
        key: The configuration key, e.g. ``connect_timeout``.

    Returns:
        The raw value of ``PYNCAT_<KEY>`` or None if it is not set.
    """
    return os.environ.get(f"{ENV_PREFIX}{key.upper()}")


def get_config(key: str, config: Optional[Dict[str, Any]] = None) -> Any:
    """Get a tunable value from the configuration hierarchy.

    Args:
        key: The configuration key.
        config: Optional explicit configuration mapping.

    Returns:
        The configuration value.

    Raises:
        KeyError: If the key has no default.
    """
    if config and key in config:
        return config[key]

    env_value = get_env_config(key)
    if env_value is not None:
        return env_value

    return DEFAULTS[key]


def get_seconds(key: str, config: Optional[Dict[str, Any]] = None) -> float:
    """Get a positive duration in seconds from the configuration hierarchy.

    Raises:
        ConfigurationError: If the value is not a positive number.
    """
    value = get_config(key, config)
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key}={value!r}") from None

    if seconds <= 0:
        raise ConfigurationError(f"{key}={value!r}")
    return seconds
