"""Display-oriented host endpoint."""

from dataclasses import dataclass
from typing import Optional, Tuple

from pyncat.config import DEFAULT_ADDRESS, DEFAULT_PORT, valid_port


@dataclass
class HostEndPoint:
    """A (host name, port) pair used when reporting connection state.

    The host name falls back to the IPv4 address when it is not set.
    """

    host_name: Optional[str] = None
    port: int = DEFAULT_PORT
    address: str = DEFAULT_ADDRESS

    def __post_init__(self):
        if not valid_port(self.port):
            raise ValueError(f"Invalid port number: {self.port}")

    @property
    def host(self) -> str:
        return self.host_name or self.address

    @classmethod
    def from_sockname(cls, sockname: Tuple, host_name: Optional[str] = None) -> "HostEndPoint":
        """Create an endpoint from a socket address tuple.

        Args:
            sockname: ``(address, port, ...)`` as returned by ``getpeername``.
            host_name: Optional display name.
        """
        address, port = sockname[0], sockname[1]
        return cls(host_name=host_name, port=port, address=address)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
