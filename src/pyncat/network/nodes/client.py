"""TCP client node."""

import anyio

from pyncat.errors import Except, NetworkError, SocketTimeoutError
from pyncat.io.output import Level
from pyncat.network.endpoint import HostEndPoint
from pyncat.network.net import get_except
from pyncat.network.nodes.node import Node


class ClientNode(Node):
    """Node that connects to a remote listener."""

    async def _open_transport(self) -> HostEndPoint:
        """Connect to the target endpoint within the connect timeout.

        Raises:
            SocketTimeoutError: If the connection is not established in time.
            NetworkError: If the connection attempt fails.
        """
        target = self.endpoint
        try:
            with anyio.fail_after(self.connect_timeout):
                stream = await anyio.connect_tcp(self.args.address, self.args.port)
        except TimeoutError as exc:
            raise SocketTimeoutError(str(target)) from exc
        except OSError as exc:
            kind = get_except(exc)
            if kind is Except.TIMED_OUT:
                raise SocketTimeoutError(str(target)) from exc

            level = Level.WARN if kind is Except.CONNECTION_REFUSED else None
            raise NetworkError(kind, str(target), level=level) from exc

        self.client.attach(stream)
        return target
