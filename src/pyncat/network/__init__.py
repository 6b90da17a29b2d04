"""
Networking layer for pyncat.

The connection nodes live in ``pyncat.network.nodes``.
"""

from pyncat.network.endpoint import HostEndPoint
from pyncat.network.net import get_except, get_exception, resolve_name
from pyncat.network.tcp import TcpClient

__all__ = ["HostEndPoint", "TcpClient", "get_except", "get_exception", "resolve_name"]
