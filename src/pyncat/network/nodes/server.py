"""TCP server node."""

from typing import Any, Optional

import anyio
from anyio.abc import Listener, SocketStream

from pyncat.config import LISTEN_BACKLOG
from pyncat.errors import NetworkError
from pyncat.io.output import info
from pyncat.network.endpoint import HostEndPoint
from pyncat.network.net import get_except
from pyncat.network.nodes.node import Node


class ServerNode(Node):
    """Node that listens for and accepts a single inbound connection."""

    listening = True

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._listener: Optional[Listener[SocketStream]] = None

        # Set once the listener is bound and accepting
        self.ready = anyio.Event()

    async def _open_transport(self) -> HostEndPoint:
        """Bind the listener and accept exactly one peer.

        Raises:
            NetworkError: If the endpoint cannot be bound or the accept fails.
        """
        local = HostEndPoint(port=self.args.port, address=self.args.address)
        try:
            multi = await anyio.create_tcp_listener(
                local_host=self.args.address,
                local_port=self.args.port,
                backlog=LISTEN_BACKLOG,
            )
        except OSError as exc:
            raise NetworkError(get_except(exc), str(local)) from exc

        self._listener = multi
        info(f"Listening for incoming connections on {local}...")
        self.ready.set()

        try:
            stream = await multi.listeners[0].accept()
        except OSError as exc:
            raise NetworkError(get_except(exc), str(local)) from exc

        self.client.attach(stream)
        return self.client.remote_endpoint

    async def dispose(self) -> None:
        """Close the listener, then release the node's other resources."""
        if self._listener is not None:
            listener, self._listener = self._listener, None
            with anyio.CancelScope(shield=True):
                await listener.aclose()
        await super().dispose()
