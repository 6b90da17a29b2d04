"""
Shared TCP socket client.

A single ``TcpClient`` is owned by a node and injected into each of its
pipelines. It acts as both a byte source and a byte sink so pipelines can use
it directly on either side of a relay.
"""

from typing import Optional

import anyio
from anyio.abc import SocketAttribute, SocketStream

from pyncat.config import BUFFER_SIZE
from pyncat.network.endpoint import HostEndPoint


class TcpClient:
    """Connected-state wrapper around an anyio socket stream."""

    def __init__(self, stream: Optional[SocketStream] = None):
        self._stream = stream
        self._closed = False
        self._lost = False
        self._send_lock = anyio.Lock()

    @property
    def connected(self) -> bool:
        return self._stream is not None and not (self._closed or self._lost)

    @property
    def stream(self) -> Optional[SocketStream]:
        return self._stream

    def attach(self, stream: SocketStream) -> None:
        """Attach a freshly connected socket stream.

        Raises:
            RuntimeError: If a stream is already attached.
        """
        if self._stream is not None:
            raise RuntimeError("A socket stream is already attached")
        self._stream = stream

    @property
    def remote_endpoint(self) -> Optional[HostEndPoint]:
        if self._stream is None:
            return None
        return HostEndPoint.from_sockname(
            self._stream.extra(SocketAttribute.remote_address)
        )

    async def receive(self, max_bytes: int = BUFFER_SIZE) -> bytes:
        """Receive up to ``max_bytes`` from the peer.

        Returns:
            The received bytes, or an empty bytes object once the peer closed
            its side or the client was closed.
        """
        if not self.connected:
            return b""
        try:
            return await self._stream.receive(max_bytes)
        except (anyio.EndOfStream, anyio.ClosedResourceError):
            return b""
        except (anyio.BrokenResourceError, OSError):
            self._lost = True
            return b""

    async def read_all(self) -> bytes:
        chunks = []
        while chunk := await self.receive():
            chunks.append(chunk)
        return b"".join(chunks)

    async def send(self, data: bytes) -> None:
        """Send all the given bytes to the peer.

        Writes from concurrent pipelines are serialized, their relative order
        is not defined.

        Raises:
            anyio.BrokenResourceError: If the connection was lost.
            anyio.ClosedResourceError: If the client was closed.
        """
        if not self.connected:
            raise anyio.ClosedResourceError
        if not data:
            return
        async with self._send_lock:
            try:
                await self._stream.send(data)
            except (anyio.BrokenResourceError, OSError):
                self._lost = True
                raise

    async def aclose(self) -> None:
        """Close the socket stream. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        if self._stream is not None:
            with anyio.CancelScope(shield=True):
                try:
                    await self._stream.aclose()
                except (anyio.BrokenResourceError, OSError):
                    pass
